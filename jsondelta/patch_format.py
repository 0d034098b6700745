# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import json

from .errors import PatchFormatError, UnsupportedOperationKind


# Sentinel to allow None as a value
Missing = object()


class Record(dict):
    """For internal usage in jsondelta library.

    Minimal class providing attribute access to the keys
    of a json record, while staying json serializable.
    """
    def __getattr__(self, name):
        if name.startswith("__") and name.endswith("__"):
            return self.__getattribute__(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        self[name] = value


class PatchOperation(Record):
    """A single json patch operation in its wire format.

    Since 'from' is a python keyword, use e["from"] for it.
    """


class PatchOp:
    "Collection of valid values for the op field in patch operations."
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"

    ALL = (ADD, REMOVE, REPLACE, MOVE, COPY, TEST)

    # Operations carrying a 'value' or a 'from' field
    WITH_VALUE = (ADD, REPLACE, TEST)
    WITH_FROM = (MOVE, COPY)


def op_add(path, value):
    "Create an operation adding value at path (inserting into arrays)."
    return PatchOperation(op=PatchOp.ADD, path=path, value=value)

def op_remove(path):
    "Create an operation removing the value at path."
    return PatchOperation(op=PatchOp.REMOVE, path=path)

def op_replace(path, value):
    "Create an operation replacing the existing value at path."
    return PatchOperation(op=PatchOp.REPLACE, path=path, value=value)

def op_move(from_path, path):
    "Create an operation moving the value at from_path to path."
    return PatchOperation(op=PatchOp.MOVE, path=path, **{"from": from_path})

def op_copy(from_path, path):
    "Create an operation copying the value at from_path to path."
    return PatchOperation(op=PatchOp.COPY, path=path, **{"from": from_path})

def op_test(path, value):
    "Create an operation checking that the value at path equals value."
    return PatchOperation(op=PatchOp.TEST, path=path, value=value)


def is_valid_patch(patch):
    """Checks whether a patch (list of operations) is well formed.

    Returns a boolean indicating the well-formedness of the patch.
    """
    try:
        validate_patch(patch)
    except PatchFormatError:
        return False
    return True


def validate_patch(patch):
    """Check whether a patch (list of operations) is well formed.

    Raises a PatchFormatError if not well formed.
    """
    if not isinstance(patch, list):
        raise PatchFormatError("Patch must be a list of operations.")
    for i, e in enumerate(patch):
        try:
            validate_operation(e)
        except PatchFormatError as err:
            raise err.annotate(i, e)


def validate_operation(e):
    """Check that e is a well formed patch operation.

    Raises an UnsupportedOperationKind for unknown op tags,
    and a PatchFormatError for other problems.
    """
    if not isinstance(e, dict):
        raise PatchFormatError("Patch operation '{}' is not an object.".format(e))

    op = e.get("op")
    if op is None:
        raise PatchFormatError("Patch operation is missing the 'op' field.")
    if op not in PatchOp.ALL:
        raise UnsupportedOperationKind("Unknown patch op '{}'.".format(op))

    if not isinstance(e.get("path"), str):
        raise PatchFormatError(
            "{} operation requires a string 'path', not '{}'.".format(op, e.get("path")))
    if op in PatchOp.WITH_FROM and not isinstance(e.get("from"), str):
        raise PatchFormatError(
            "{} operation requires a string 'from', not '{}'.".format(op, e.get("from")))
    if op in PatchOp.WITH_VALUE and "value" not in e:
        raise PatchFormatError("{} operation requires a 'value'.".format(op))

    # Note that the values themselves are not checked,
    # they can be arbitrary json documents


def to_patch_operations(patch):
    "Convert a decoded json patch (list of dicts) to validated PatchOperation records."
    validate_patch(patch)
    return [PatchOperation(e) for e in patch]


def load_patch(f):
    "Read a json patch from a filename or file-like object."
    if isinstance(f, str):
        with io.open(f, encoding="utf8") as patch_file:
            patch = json.load(patch_file)
    else:
        patch = json.load(f)
    return to_patch_operations(patch)
