# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import logging


logger = logging.getLogger('jsondelta')

debug = logger.debug
info = logger.info
warning = logger.warning
error = logger.error
exception = logger.exception
critical = logger.critical


def init_logging(level=logging.INFO):
    """Configure the root logger for the jsondelta command line apps.

    Library code never calls this, it only logs to the 'jsondelta' logger.
    """
    logging.basicConfig(
        format='[%(levelname)1.1s %(module)s:%(lineno)d] %(message)s',
        level=level)
    logging.captureWarnings(True)


def set_jsondelta_log_level(level, set_main=True):
    """Set the level of the jsondelta logger, and of the root logger if set_main."""
    logger.setLevel(level)
    if set_main:
        logging.getLogger().setLevel(level)


def debug_operation(index, operation, stage="apply"):
    """Log a single patch operation at debug level.

    Nothing is formatted unless debug logging is enabled.
    """
    if not logger.isEnabledFor(logging.DEBUG) or not isinstance(operation, dict):
        return
    source = operation.get("from")
    if source is not None:
        logger.debug("%s #%d: %s %r -> %r", stage, index,
                     operation.get("op"), source, operation.get("path"))
    else:
        logger.debug("%s #%d: %s %r", stage, index,
                     operation.get("op"), operation.get("path"))
