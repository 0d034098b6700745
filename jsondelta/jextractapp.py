# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import sys

from . import log
from .args import (
    add_generic_args, add_output_args, add_filename_args, check_input_files,
    ConfigBackedParser,
    )
from .errors import JSONPatchError
from .extracting import extract_added
from .patch_format import load_patch
from .utils import read_json, write_json, setup_std_streams


_description = ("Split a patched json document into the content "
                "added by a patch and the remaining content.")


def main_extract(args):
    if not check_input_files([args.after, args.patch], allow_null=False):
        return 1
    try:
        after = read_json(args.after)
        ops = load_patch(args.patch)
        remaining, added = extract_added(after, ops)
    except JSONPatchError as e:
        log.error("Could not extract added content: %s", e)
        return 1
    except ValueError as e:
        log.error("Could not read json input: %s", e)
        return 1

    json_args = dict(indent=args.indent, sort_keys=args.sort_keys)
    # Results without an output file are written to stdout, as one object
    to_stdout = {}
    for name, value, filename in [("remaining", remaining, args.remaining),
                                  ("added", added, args.added)]:
        if filename:
            write_json(value, filename, **json_args)
        else:
            to_stdout[name] = value
    if to_stdout:
        write_json(to_stdout, sys.stdout, **json_args)
    return 0


def _build_arg_parser(prog="jextract"):
    """Creates an argument parser for the jextract command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        )
    add_generic_args(parser)
    add_output_args(parser)
    add_filename_args(parser, ["after", "patch"])
    parser.add_argument(
        '--remaining',
        default=None,
        help="write the document without the added content to this file.")
    parser.add_argument(
        '--added',
        default=None,
        help="write the added content to this file.")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_extract(arguments)


if __name__ == "__main__":
    sys.exit(main())
