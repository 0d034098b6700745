# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import argparse
import json
import logging
import os
import sys

from ._version import __version__
from .config import (
    get_defaults_for_argparse, build_config, entrypoint_configurables,
)
from .log import init_logging, set_jsondelta_log_level
from .utils import EXPLICIT_MISSING_FILE


LOG_LEVELS = ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL')


class ConfigBackedParser(argparse.ArgumentParser):
    """Argument parser taking its defaults from the jsondelta config files.

    The entrypoint is the first word of prog (e.g. 'jdiff'). Parsers
    for programs without configurables keep their own defaults.
    """

    def apply_config_defaults(self):
        entrypoint = self.prog.split(' ')[0]
        if entrypoint not in entrypoint_configurables:
            return
        defaults = get_defaults_for_argparse(entrypoint)
        self.set_defaults(**defaults)
        if defaults.get('log_level'):
            # LogLevelAction only sees levels given on the command line
            set_jsondelta_log_level(getattr(logging, defaults['log_level']))

    def parse_known_args(self, args=None, namespace=None):
        self.apply_config_defaults()
        return super(ConfigBackedParser, self).parse_known_args(args=args, namespace=namespace)


class LogLevelAction(argparse.Action):
    "Set the jsondelta log level as soon as the option is parsed."

    def __init__(self, option_strings, dest, default=None, **kwargs):
        # Logging is set up at parser creation, since the
        # action is never called when the option is left out
        level = getattr(logging, default or 'INFO')
        init_logging(level=level)
        set_jsondelta_log_level(level)
        super(LogLevelAction, self).__init__(option_strings, dest, default=default, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, values)
        set_jsondelta_log_level(getattr(logging, values))


def config_for_print(config):
    "Render config values as json text, keeping the nesting."
    printable = {}
    for key, value in config.items():
        if isinstance(value, dict):
            printable[key] = config_for_print(value) or '{}'
        else:
            printable[key] = json.dumps(value)
    return printable


def print_config(entrypoints, out=None):
    """Print the effective config of each entrypoint, below its configurable name."""
    from .prettyprint import pretty_print_dict, PrettyPrintConfig
    config = PrettyPrintConfig(out=out or sys.stderr)
    for entrypoint in entrypoints:
        section = entrypoint_configurables[entrypoint].__name__
        values = build_config(entrypoint, include_none=True)
        pretty_print_dict({section: config_for_print(values)}, config=config)


class ConfigHelpAction(argparse.Action):
    "Print the config keys of the current program with their effective values, then exit."

    def __init__(self, option_strings, dest, help=None):
        super(ConfigHelpAction, self).__init__(
            option_strings, dest, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        print_config([parser.prog])
        sys.exit(1)


def add_generic_args(parser):
    """Adds the options shared by all jsondelta commands."""
    parser.add_argument(
        '--version',
        action="version",
        version="%(prog)s " + __version__)
    parser.add_argument(
        '--config',
        action=ConfigHelpAction,
        help="list the valid config keys and their effective values, then exit.")
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=LOG_LEVELS,
        action=LogLevelAction,
        help="set the log level by name.")


def add_output_args(parser):
    """Adds the options controlling how json documents are written."""
    parser.add_argument(
        '--indent',
        type=int,
        default=2,
        help="number of spaces to indent json output with, 0 writes compact json.")
    parser.add_argument(
        '--sort-keys',
        action="store_true",
        default=False,
        help="write object members sorted by key.")


filename_help = {
    "base":   "The base json document filename.",
    "remote": "The remote modified json document filename.",
    "after":  "The json document filename, as produced by applying the patch.",
    "patch":  "The json patch filename, as written by jdiff --out.",
    }


def check_input_files(filenames, allow_null=True):
    """Return whether all input files exist, printing the first missing one.

    With allow_null, the null filename counts as an existing,
    explicitly missing document.
    """
    for fn in filenames:
        if os.path.exists(fn) or (allow_null and fn == EXPLICIT_MISSING_FILE):
            continue
        print("Missing file {}".format(fn))
        return False
    return True


def add_filename_args(parser, names):
    """Adds positional filename arguments with consistent help texts."""
    for name in names:
        parser.add_argument(name, help=filename_help[name])


def add_prettyprint_args(parser):
    """Adds the options controlling terminal output."""
    parser.add_argument(
        '--no-color',
        dest='use_color',
        action="store_false",
        default=True,
        help="print without ANSI color code escapes.")


def prettyprint_config_from_args(arguments, **kwargs):
    from .prettyprint import PrettyPrintConfig
    return PrettyPrintConfig(
        use_color=getattr(arguments, 'use_color', True),
        **kwargs
    )
