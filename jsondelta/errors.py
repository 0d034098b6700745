# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Exceptions raised while resolving pointers and applying patches.

Every error raised by jsondelta derives from `JSONPatchError`, and
each kind of failure has its own subclass so callers can tell a
missing target apart from e.g. an out of range array insert.

When a failure happens while executing a patch, the engine records
which operation failed on the exception (`index`, `op` and `path`)
before re-raising it.
"""


class JSONPatchError(ValueError):
    """Base class for all jsondelta errors."""

    def __init__(self, message=""):
        super(JSONPatchError, self).__init__(message)
        self.message = message
        self.index = None
        self.op = None
        self.path = None

    def annotate(self, index, operation):
        """Attach the position and kind of the failing operation.

        Only the innermost failure is recorded: an error that has
        already been annotated keeps its original position.
        """
        if self.index is None:
            self.index = index
            if isinstance(operation, dict):
                self.op = operation.get("op")
                self.path = operation.get("path")
        return self

    def __str__(self):
        if self.index is None:
            return self.message
        return "operation #%d (%s %s): %s" % (
            self.index, self.op, self.path, self.message)


class PatchFormatError(JSONPatchError):
    """A patch operation record is missing a required field."""


class UnsupportedOperationKind(PatchFormatError):
    """The `op` tag of an operation is not one of the six known kinds."""


class MalformedPointer(JSONPatchError):
    """A pointer string violates the pointer syntax."""


class TargetNotFound(JSONPatchError):
    """The addressed location (or the parent of an add) does not exist."""


class InvalidArrayIndex(TargetNotFound):
    """A token used to address an array element is not a valid index."""


class ParentNotContainer(JSONPatchError):
    """A pointer traverses through a scalar value."""


class ArrayIndexOutOfRange(JSONPatchError):
    """An array index lies beyond the range valid for the operation."""


class RootOperationUnsupported(JSONPatchError):
    """The operation is not defined for the document root."""


class TestMismatch(JSONPatchError):
    """A test operation found a value different from the expected one."""

    # Not a pytest test class
    __test__ = False


class TypeMismatch(JSONPatchError):
    """A container has a different kind than the operation requires."""
