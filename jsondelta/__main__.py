# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import importlib
import sys

from ._version import __version__


# Subcommand name -> module providing its main(args)
COMMANDS = {
    "diff": "jsondelta.jdiffapp",
    "patch": "jsondelta.jpatchapp",
    "extract": "jsondelta.jextractapp",
}

HELP_MESSAGE_VERBOSE = ("Usage: jsondelta [OPTIONS]\n\n"
                       "OPTIONS: -h, --version, --config, COMMANDS{%s}\n\n"
                       "Examples: jsondelta --version\n"
                       "          jsondelta diff -h\n"
                       "          jsondelta diff a.json b.json --out patch.json\n"
                       "          jsondelta patch a.json patch.json --undo undo.json\n"
                       "          jsondelta extract b.json patch.json --added added.json\n"
                       % ", ".join(COMMANDS))


def main_dispatch(args=None):
    if args is None:
        args = sys.argv[1:]
    if not args:
        sys.exit("Option missing.\n\n%s" % HELP_MESSAGE_VERBOSE)

    cmd, args = args[0], args[1:]
    if cmd in COMMANDS:
        return importlib.import_module(COMMANDS[cmd]).main(args)

    if cmd == '--version':
        sys.exit(__version__)
    elif cmd in ('-h', '--help'):
        sys.exit(HELP_MESSAGE_VERBOSE)
    elif cmd == '--config':
        from .args import print_config
        from .config import entrypoint_configurables
        print('All available config options, and their current values:\n',
              file=sys.stderr)
        print_config(sorted(entrypoint_configurables))
        sys.exit(1)
    sys.exit("Unrecognized command '%s'\n\n%s." % (cmd, HELP_MESSAGE_VERBOSE))


if __name__ == "__main__":
    # This is triggered by "python -m jsondelta <args>"
    sys.exit(main_dispatch())
