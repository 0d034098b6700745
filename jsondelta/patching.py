# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy
import json

from . import log
from . import pointer
from .errors import (
    JSONPatchError, ArrayIndexOutOfRange, ParentNotContainer, TestMismatch,
)
from .patch_format import PatchOp, validate_operation
from .utils import json_equal


__all__ = ["patch", "patch_in_place", "patch_stream", "apply_operation"]


def apply_add(document, path, value):
    """Add value at path, returning the (possibly replaced) document root.

    On an array parent the value is inserted before the given index,
    or appended for the append token. On an object parent the key is
    inserted or overwritten. The empty path replaces the whole document.
    """
    tokens = pointer.parse(path)
    if not tokens:
        return value

    parent = pointer.resolve(document, tokens[:-1])
    token = tokens[-1]

    if isinstance(parent, list):
        if token == pointer.APPEND_TOKEN:
            parent.append(value)
        else:
            index = pointer.parse_array_index(token)
            if index > len(parent):
                raise ArrayIndexOutOfRange(
                    "add operation on array index {} is out of bounds "
                    "for array of length {}".format(index, len(parent)))
            parent.insert(index, value)
    elif isinstance(parent, dict):
        parent[token] = value
    else:
        raise ParentNotContainer("parent of {!r} is a {} value".format(
            path, type(parent).__name__))
    return document


def apply_remove(document, path):
    return pointer.remove(document, path)


def apply_replace(document, path, value):
    # The target must exist, checking before writing
    # anything leaves the document untouched on failure
    pointer.get(document, path)
    return pointer.set(document, path, value)


def apply_move(document, from_path, path):
    value = pointer.get(document, from_path)
    document = pointer.remove(document, from_path)
    # Full add semantics at the destination, i.e. inserting into arrays
    return apply_add(document, path, value)


def apply_copy(document, from_path, path):
    value = copy.deepcopy(pointer.get(document, from_path))
    # Plain set at the destination, overwriting array elements
    # instead of inserting like move does
    return pointer.set(document, path, value)


def apply_test(document, path, expected):
    actual = pointer.get(document, path)
    if not json_equal(actual, expected):
        raise TestMismatch("test failed: expected {!r}, got {!r}".format(
            expected, actual))


def apply_operation(document, e):
    """Apply a single patch operation to document in place.

    Values taken from the operation are copied before insertion,
    such that the document never shares structure with the patch.
    Returns the (possibly replaced) document root.
    """
    validate_operation(e)
    op = e["op"]
    if op == PatchOp.ADD:
        return apply_add(document, e["path"], copy.deepcopy(e["value"]))
    elif op == PatchOp.REMOVE:
        return apply_remove(document, e["path"])
    elif op == PatchOp.REPLACE:
        return apply_replace(document, e["path"], copy.deepcopy(e["value"]))
    elif op == PatchOp.MOVE:
        return apply_move(document, e["from"], e["path"])
    elif op == PatchOp.COPY:
        return apply_copy(document, e["from"], e["path"])
    elif op == PatchOp.TEST:
        apply_test(document, e["path"], e["value"])
        return document


def patch_in_place(document, ops):
    """Apply a list of patch operations, modifying document.

    Returns the patched document, which is a new object if the
    root was replaced.

    WARNING: On failure the document is left partially patched,
    and should be discarded by the caller.
    """
    for i, e in enumerate(ops):
        log.debug_operation(i, e)
        try:
            document = apply_operation(document, e)
        except JSONPatchError as err:
            raise err.annotate(i, e)
    return document


def patch(document, ops):
    """Produce a patched copy of document with given list of json patch operations.

    A valid document can be any dict or list of leaf values,
    arbitrarily nested, or a single leaf value. Operations are
    applied in order, and the first failing operation raises a
    JSONPatchError subclass carrying its index and kind.
    The input document is never modified.
    """
    return patch_in_place(copy.deepcopy(document), ops)


def patch_stream(reader, writer, ops, indent=None, sort_keys=False):
    """Read a json document from reader, patch it and write it to writer.

    The whole document is held in memory. The output is
    terminated with a newline.
    """
    document = json.load(reader)
    # The decoded document is private to us, patch it directly
    result = patch_in_place(document, ops)
    json.dump(result, writer, indent=indent or None, sort_keys=sort_keys,
              ensure_ascii=False)
    writer.write("\n")
