# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import sys

from . import log
from .args import (
    add_generic_args, add_output_args, add_filename_args, check_input_files,
    ConfigBackedParser,
    )
from .deltas import prepare
from .errors import JSONPatchError
from .patch_format import to_patch_operations
from .patching import patch_in_place, patch_stream
from .utils import (
    EXPLICIT_MISSING_FILE, read_json, write_json, loads_json, setup_std_streams,
)


_description = "Apply a JSON Patch from jdiff to a json document."


def _read_patch(filename, validate):
    with io.open(filename, encoding="utf8") as f:
        ops = loads_json(f.read())
    if validate:
        return to_patch_operations(ops)
    # Operations are still checked one by one while applying
    return ops


def _apply(args, ops, output):
    """Apply ops to the base document, writing the result to output.

    The result goes to stdout if output is None.
    """
    json_args = dict(indent=args.indent, sort_keys=args.sort_keys)
    if args.undo:
        before = read_json(args.base, on_null='null')
        d = prepare(before, ops)
        after = d.apply(before)
        write_json(d.reverse, args.undo, **json_args)
        log.info("wrote patch undoing %d changes to %s", len(d), args.undo)
    elif output or args.base == EXPLICIT_MISSING_FILE:
        after = patch_in_place(read_json(args.base, on_null='null'), ops)
    else:
        with io.open(args.base, encoding="utf8") as reader:
            patch_stream(reader, sys.stdout, ops, **json_args)
        return
    write_json(after, output or sys.stdout, **json_args)


def main_patch(args):
    output = args.output
    if args.in_place:
        if args.base == EXPLICIT_MISSING_FILE:
            print("Cannot patch {} in place".format(args.base))
            return 1
        output = args.base

    if not check_input_files([args.base, args.patch]):
        return 1
    try:
        ops = _read_patch(args.patch, args.validate)
        _apply(args, ops, output)
    except JSONPatchError as e:
        log.error("Could not apply patch: %s", e)
        return 1
    except ValueError as e:
        log.error("Could not read json input: %s", e)
        return 1
    return 0


def _build_arg_parser(prog="jpatch"):
    """Creates an argument parser for the jpatch command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        )
    add_generic_args(parser)
    add_output_args(parser)
    add_filename_args(parser, ["base", "patch"])
    parser.add_argument(
        '-o', '--output',
        default=None,
        help="write the patched document to this file "
             "instead of the terminal.")
    parser.add_argument(
        '--in-place',
        action="store_true",
        default=False,
        help="write the patched document back to the base file.")
    parser.add_argument(
        '--undo',
        default=None,
        help="also write a patch undoing the applied changes to this file.")
    parser.add_argument(
        '--no-validate',
        dest='validate',
        action="store_false",
        default=True,
        help="skip checking the format of the whole patch before "
             "applying it, operations are still checked one by one.")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_patch(arguments)


if __name__ == "__main__":
    sys.exit(main())
