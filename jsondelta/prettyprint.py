# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Human readable rendering of patches and prepared Diffs.

Every operation is printed as a header line naming the action and
the target path, followed by the values involved, one line per
line of their json form:

    ## replaced /version:
    -  1
    +  2

Removed values are prefixed with '-', added values with '+'.
With colors enabled the prefixes carry ANSI escapes from colorama.
"""

from collections import namedtuple
import copy
import datetime
import json
import os
import sys

import colorama

from . import pointer
from .errors import PatchFormatError
from .patch_format import Missing, PatchOp
from .patching import apply_operation


# Indentation of nested content
IND = "  "

# Containers whose compact json is wider than this are laid out on several lines
MAXWIDTH = 78


Palette = namedtuple('Palette', ('KEEP', 'REMOVE', 'ADD', 'INFO', 'RESET'))

palettes = {
    False: Palette(KEEP='   ', REMOVE='-  ', ADD='+  ', INFO='## ', RESET=''),
    True: Palette(
        KEEP='   ',
        REMOVE=colorama.Fore.RED + '-  ',
        ADD=colorama.Fore.GREEN + '+  ',
        INFO=colorama.Fore.BLUE + colorama.Style.BRIGHT + '## ',
        RESET=colorama.Style.RESET_ALL,
    ),
}


class PrettyPrintConfig(object):
    """Where and how to print.

    out defaults to the sys.stdout of the time the config is created.
    """
    def __init__(self, out=None, use_color=True):
        self.out = sys.stdout if out is None else out
        self.use_color = use_color

    @property
    def palette(self):
        return palettes[bool(self.use_color)]


def file_timestamp(filename):
    "Modification time of filename, or a placeholder for missing files."
    try:
        mtime = os.path.getmtime(filename)
    except OSError:
        return "(no timestamp)"
    return datetime.datetime.fromtimestamp(mtime).isoformat(" ")


def format_value(value):
    "Strings are shown as is, all other values as compact json."
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True, ensure_ascii=False)


def value_lines(value):
    """Split the printed form of value into lines.

    Containers are kept on a single line when short enough,
    and laid out as indented json otherwise.
    """
    text = format_value(value)
    if isinstance(value, (dict, list)) and len(text) > MAXWIDTH:
        text = json.dumps(value, indent=len(IND), sort_keys=True, ensure_ascii=False)
    return text.splitlines() or [""]


def pretty_print_value(value, prefix="", config=None):
    "Print value with every line prefixed."
    config = config or PrettyPrintConfig()
    for line in value_lines(value):
        config.out.write(prefix + line + "\n")


def pretty_print_dict(d, prefix="", config=None):
    """Print the items of d sorted by key, one per line.

    Nested dicts are printed below their key with increased indentation,
    like:

        key: value
        section:
          key: value
    """
    config = config or PrettyPrintConfig()
    for key in sorted(d):
        value = d[key]
        if isinstance(value, dict) and value:
            config.out.write("%s%s:\n" % (prefix, key))
            pretty_print_dict(value, prefix + IND, config)
            continue
        lines = value_lines(value)
        if len(lines) == 1:
            config.out.write("%s%s: %s\n" % (prefix, key, lines[0]))
        else:
            config.out.write("%s%s:\n" % (prefix, key))
            for line in lines:
                config.out.write(prefix + IND + line + "\n")


def pretty_print_header(action, path, config):
    p = config.palette
    config.out.write("%s%s %s:%s\n" % (p.INFO, action, path or "/", p.RESET))


def _action(e):
    op = e["op"]
    if op == PatchOp.ADD:
        return "added"
    elif op == PatchOp.REMOVE:
        return "removed"
    elif op == PatchOp.REPLACE:
        return "replaced"
    elif op == PatchOp.MOVE:
        return "moved from %s to" % (e["from"] or "/")
    elif op == PatchOp.COPY:
        return "copied from %s to" % (e["from"] or "/")
    elif op == PatchOp.TEST:
        return "tested"
    raise PatchFormatError("Unknown patch op {}".format(op))


def pretty_print_operation(e, old=Missing, config=None):
    """Print a single patch operation.

    If old is given, it is the value found at the operation's
    path before it was applied, and is printed as removed.
    """
    config = config or PrettyPrintConfig()
    p = config.palette
    pretty_print_header(_action(e), e["path"], config)
    if old is not Missing:
        pretty_print_value(old, p.REMOVE, config)
    if e["op"] == PatchOp.TEST:
        pretty_print_value(e["value"], p.KEEP, config)
    elif e["op"] in PatchOp.WITH_VALUE:
        pretty_print_value(e["value"], p.ADD, config)
    config.out.write("\n" + p.RESET)


def pretty_print_patch(ops, a=Missing, config=None):
    """Print a json patch, one block per operation.

    If the document a the patch applies to is given, removed and
    replaced values are shown as well. The patch is then applied
    step by step to a copy of a while printing.
    """
    config = config or PrettyPrintConfig()
    document = Missing if a is Missing else copy.deepcopy(a)
    for e in ops:
        old = Missing
        if document is not Missing and e["op"] in (PatchOp.REMOVE, PatchOp.REPLACE):
            found, value = pointer.try_get(document, e["path"])
            if found:
                old = value
        pretty_print_operation(e, old, config)
        if document is not Missing:
            document = apply_operation(document, e)


def pretty_print_delta(d, config=None):
    "Print a single recorded delta with its before and after values."
    config = config or PrettyPrintConfig()
    p = config.palette
    if d.op == PatchOp.ADD and not d.existed_before:
        action = "added"
    elif d.op == PatchOp.REMOVE:
        action = "removed"
    else:
        action = "replaced"
    pretty_print_header(action, d.path, config)
    if "before" in d:
        pretty_print_value(d.before, p.REMOVE, config)
    if "after" in d:
        pretty_print_value(d.after, p.ADD, config)
    config.out.write("\n" + p.RESET)


def pretty_print_diff(diff, config=None):
    "Print all deltas of a prepared Diff."
    config = config or PrettyPrintConfig()
    for d in diff.deltas:
        pretty_print_delta(d, config)


def pretty_print_json_diff(afn, bfn, a, ops, config=None):
    """Print the patch between two json files below a header naming them.

    Parameters
    ----------

    afn: str
        Filename of a, the base document
    bfn: str
        Filename of b, the remote document
    a: json value
        The base document
    ops: list of patch operations
        The patch transforming a into the remote document

    Nothing is printed if the patch is empty.
    """
    config = config or PrettyPrintConfig()
    if not ops:
        return
    config.out.write("jdiff %s %s\n" % (afn, bfn))
    config.out.write("--- %s  %s\n" % (afn, file_timestamp(afn)))
    config.out.write("+++ %s  %s\n" % (bfn, file_timestamp(bfn)))
    pretty_print_patch(ops, a, config)
