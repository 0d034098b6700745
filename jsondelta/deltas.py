# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Replayable and invertible records of the effect of a patch.

`prepare` simulates a patch on a private copy of a document and
records one or more deltas per operation, each capturing a concrete
path (never the append token) together with the values before and
after. From these deltas two patches are compiled: `forward` redoes
the effect of the patch and `reverse` undoes it.
"""

import copy

from . import log
from . import pointer
from .errors import JSONPatchError, ParentNotContainer
from .patch_format import (
    Missing, Record, PatchOp, validate_operation,
    op_add, op_remove, op_replace,
)
from .patching import (
    patch, patch_in_place,
    apply_add, apply_remove, apply_replace, apply_test,
)


__all__ = ["Delta", "Diff", "prepare"]


class Delta(Record):
    """A single recorded change at a concrete path.

    Keys: path, op (one of add, remove, replace), before and after
    (left out when there is no such value), existed_before, existed_after.
    """


def make_delta(path, op, before=Missing, after=Missing,
               existed_before=True, existed_after=True):
    d = Delta(path=path, op=op,
              existed_before=existed_before, existed_after=existed_after)
    if before is not Missing:
        d.before = before
    if after is not Missing:
        d.after = after
    return d


def _resolve_append(document, path):
    """Replace a final append token in path by the concrete index it refers to.

    The index is the current length of the parent array. Paths not
    ending in the append token, or whose parent is an object (where
    '-' is an ordinary key), are returned unchanged.
    """
    tokens = pointer.parse(path)
    if not tokens or tokens[-1] != pointer.APPEND_TOKEN:
        return path
    parent = pointer.resolve(document, tokens[:-1])
    if isinstance(parent, list):
        return pointer.tokens_to_string(tokens[:-1] + [str(len(parent))])
    elif isinstance(parent, dict):
        return path
    raise ParentNotContainer("parent of {!r} is a {} value".format(
        path, type(parent).__name__))


def _add_target_state(document, path):
    """Return (existed, before) for the target of an add at a resolved path.

    An add into an array always creates a new slot, so only the
    root and existing object members count as existing before.
    """
    tokens = pointer.parse(path)
    if not tokens:
        return True, copy.deepcopy(document)
    parent = pointer.resolve(document, tokens[:-1])
    if isinstance(parent, dict) and tokens[-1] in parent:
        return True, copy.deepcopy(parent[tokens[-1]])
    return False, Missing


def _simulate_add(document, e, deltas):
    path = _resolve_append(document, e.path)
    existed, before = _add_target_state(document, path)
    after = copy.deepcopy(e.value)
    document = apply_add(document, path, copy.deepcopy(e.value))
    deltas.append(make_delta(path, PatchOp.ADD, before, after,
                             existed_before=existed))
    return document


def _simulate_remove(document, e, deltas):
    before = copy.deepcopy(pointer.get(document, e.path))
    document = apply_remove(document, e.path)
    deltas.append(make_delta(e.path, PatchOp.REMOVE, before=before,
                             existed_after=False))
    return document


def _simulate_replace(document, e, deltas):
    before = copy.deepcopy(pointer.get(document, e.path))
    after = copy.deepcopy(e.value)
    document = apply_replace(document, e.path, copy.deepcopy(e.value))
    deltas.append(make_delta(e.path, PatchOp.REPLACE, before, after))
    return document


def _simulate_move(document, e, deltas):
    source = e["from"]
    value = pointer.get(document, source)
    moved = copy.deepcopy(value)

    # Deltas are kept in execution order: the source is removed first,
    # and the destination index is resolved against the shortened array
    document = pointer.remove(document, source)
    remove_delta = make_delta(source, PatchOp.REMOVE, before=moved,
                              existed_after=False)

    path = _resolve_append(document, e.path)
    existed, before = _add_target_state(document, path)
    document = apply_add(document, path, value)
    add_delta = make_delta(path, PatchOp.ADD, before, moved,
                           existed_before=existed)

    deltas.append(remove_delta)
    deltas.append(add_delta)
    return document


def _simulate_copy(document, e, deltas):
    value = copy.deepcopy(pointer.get(document, e["from"]))
    path = _resolve_append(document, e.path)
    tokens = pointer.parse(path)

    delta = None
    if tokens:
        parent = pointer.resolve(document, tokens[:-1])
        if isinstance(parent, list):
            index = pointer.parse_array_index(tokens[-1])
            if index < len(parent):
                # Copy overwrites existing array elements
                delta = make_delta(path, PatchOp.REPLACE,
                                   copy.deepcopy(parent[index]), value)
    if delta is None:
        existed, before = _add_target_state(document, path)
        delta = make_delta(path, PatchOp.ADD, before, value,
                           existed_before=existed)

    document = pointer.set(document, path, copy.deepcopy(value))
    deltas.append(delta)
    return document


def _simulate_test(document, e, deltas):
    apply_test(document, e.path, e.value)
    return document


_simulators = {
    PatchOp.ADD: _simulate_add,
    PatchOp.REMOVE: _simulate_remove,
    PatchOp.REPLACE: _simulate_replace,
    PatchOp.MOVE: _simulate_move,
    PatchOp.COPY: _simulate_copy,
    PatchOp.TEST: _simulate_test,
}


def compile_forward(deltas):
    "Compile the patch replaying deltas in order."
    forward = []
    for d in deltas:
        if d.op == PatchOp.ADD:
            forward.append(op_add(d.path, d.after))
        elif d.op == PatchOp.REMOVE:
            forward.append(op_remove(d.path))
        elif d.op == PatchOp.REPLACE:
            forward.append(op_replace(d.path, d.after))
        else:
            raise JSONPatchError("Invalid delta op {}.".format(d.op))
    return forward


def compile_reverse(deltas):
    "Compile the patch undoing deltas, walking them in reverse order."
    reverse = []
    for d in reversed(deltas):
        if d.path == "":
            # The root is always restored as a whole
            reverse.append(op_replace("", d.get("before")))
        elif d.op == PatchOp.ADD:
            if d.existed_before:
                reverse.append(op_replace(d.path, d.before))
            else:
                reverse.append(op_remove(d.path))
        elif d.op == PatchOp.REMOVE:
            reverse.append(op_add(d.path, d.before))
        elif d.op == PatchOp.REPLACE:
            reverse.append(op_replace(d.path, d.before))
        else:
            raise JSONPatchError("Invalid delta op {}.".format(d.op))
    return reverse


class Diff(object):
    """An ordered list of deltas with precompiled forward and reverse patches.

    A Diff is not modified after creation, and can be applied to
    or reverted from any number of documents.
    """

    def __init__(self, deltas):
        self.deltas = [d if isinstance(d, Delta) else Delta(d) for d in deltas]
        self.forward = compile_forward(self.deltas)
        self.reverse = compile_reverse(self.deltas)

    def apply(self, document, in_place=False):
        "Reproduce the effect of the prepared patch on document."
        if in_place:
            return patch_in_place(document, self.forward)
        return patch(document, self.forward)

    def revert(self, document, in_place=False):
        "Undo the effect of the prepared patch on document."
        if in_place:
            return patch_in_place(document, self.reverse)
        return patch(document, self.reverse)

    def to_dict(self):
        return {"deltas": [dict(d) for d in self.deltas]}

    @classmethod
    def from_dict(cls, data):
        return cls(data["deltas"])

    def __len__(self):
        return len(self.deltas)

    def __repr__(self):
        return "Diff(%r)" % (self.deltas,)


def prepare(original, ops):
    """Simulate applying ops to original, and record the effect as a Diff.

    The original document is not modified. Fails with the same errors
    as `patch`, attributed to the operation being simulated, and never
    returns a partial Diff.
    """
    document = copy.deepcopy(original)
    deltas = []
    for i, e in enumerate(ops):
        log.debug_operation(i, e, stage="prepare")
        try:
            validate_operation(e)
            document = _simulators[e["op"]](document, Record(e), deltas)
        except JSONPatchError as err:
            raise err.annotate(i, e)
    return Diff(deltas)
