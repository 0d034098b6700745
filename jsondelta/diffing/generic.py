# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy

from .. import log
from ..patch_format import op_add, op_remove, op_replace
from ..pointer import join
from ..profiling import timer
from ..utils import json_equal, loads_json

from .lcs import kept_indices

__all__ = ["diff"]


def diff(a, b, path=""):
    """Compute a json patch transforming a into b.

    Both arguments may be any json-like value, or json text given as bytes.
    Applying the returned list of operations to a produces a document
    equal to b. Values in the patch are copies, never shared with b.
    """
    if isinstance(a, (bytes, bytearray)):
        a = loads_json(bytes(a))
    if isinstance(b, (bytes, bytearray)):
        b = loads_json(bytes(b))
    return diff_values(a, b, path=path)


def diff_values(a, b, path=""):
    "Compute the patch for two values at path, dispatching on their kinds."
    if json_equal(a, b):
        return []
    if isinstance(a, dict) and isinstance(b, dict):
        return diff_dicts(a, b, path=path)
    if isinstance(a, list) and isinstance(b, list):
        return diff_arrays(a, b, path=path)
    # Type mismatch or different scalars, this may also replace the root
    return [op_replace(path, copy.deepcopy(b))]


def diff_dicts(a, b, path=""):
    """Compute the patch of two dicts.

    Keys only in a are removed, keys only in b are added,
    and the values of shared keys are diffed recursively.
    """
    if not isinstance(a, dict) or not isinstance(b, dict):
        raise TypeError('Arguments to diff_dicts need to be dicts, got %r and %r' % (a, b))

    ops = []
    for key in a:
        if key not in b:
            ops.append(op_remove(join(path, key)))

    for key, bvalue in b.items():
        subpath = join(path, key)
        if key in a:
            ops.extend(diff_values(a[key], bvalue, path=subpath))
        else:
            ops.append(op_add(subpath, copy.deepcopy(bvalue)))
    return ops


@timer.profile('diff_arrays')
def diff_arrays(a, b, path=""):
    """Compute the patch of two arrays.

    Elements on a longest common subsequence (approximated through
    greedy pairing of equal elements) are kept. All other elements
    of a are removed in descending index order, then all other
    elements of b are added in ascending index order.

    Equal elements that change place are removed and added again,
    moves are not detected.
    """
    A_indices, B_indices = kept_indices(a, b)
    keep_a = set(A_indices)
    keep_b = set(B_indices)
    log.debug("diff of arrays at %r: %d of %d/%d elements kept",
              path, len(A_indices), len(a), len(b))

    ops = []
    for i in reversed(range(len(a))):
        if i not in keep_a:
            ops.append(op_remove(join(path, i)))
    for j, bvalue in enumerate(b):
        if j not in keep_b:
            ops.append(op_add(join(path, j), copy.deepcopy(bvalue)))
    return ops
