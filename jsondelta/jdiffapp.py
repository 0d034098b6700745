# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import sys

from . import log
from .args import (
    add_generic_args, add_output_args, add_prettyprint_args, add_filename_args,
    check_input_files, ConfigBackedParser, prettyprint_config_from_args,
    )
from .diffing import diff
from .prettyprint import pretty_print_json_diff
from .utils import read_json, write_json, setup_std_streams


_description = "Compute a JSON Patch transforming one json document into another."


def main_diff(args):
    """Diff the base and remote documents named by args.

    The null filename stands for a null document, so that
    jdiff /dev/null b.json produces a patch creating b.
    """
    if not check_input_files([args.base, args.remote]):
        return 1
    try:
        a = read_json(args.base, on_null='null')
        b = read_json(args.remote, on_null='null')
    except ValueError as e:
        log.error("Could not read json input: %s", e)
        return 1

    ops = diff(a, b)
    log.debug("computed patch of %d operations", len(ops))

    if args.out:
        write_json(ops, args.out, indent=args.indent, sort_keys=args.sort_keys)
    else:
        config = prettyprint_config_from_args(args)
        pretty_print_json_diff(args.base, args.remote, a, ops, config)
    return 0


def _build_arg_parser(prog="jdiff"):
    """Creates an argument parser for the jdiff command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        )
    add_generic_args(parser)
    add_output_args(parser)
    add_prettyprint_args(parser)
    add_filename_args(parser, ["base", "remote"])
    parser.add_argument(
        '--out',
        default=None,
        help="write the patch as json to this file instead of "
             "pretty printing it to the terminal.")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_diff(arguments)


if __name__ == "__main__":
    sys.exit(main())
