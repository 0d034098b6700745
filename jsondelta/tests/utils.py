# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy
import random

from jsondelta import patch, diff, prepare
from jsondelta.errors import JSONPatchError
from jsondelta.patch_format import (
    is_valid_patch, op_add, op_remove, op_replace, op_move, op_copy, op_test,
)
from jsondelta.pointer import try_get
from jsondelta.utils import json_equal


def check_diff_and_patch(a, b):
    "Check that patch(a, diff(a,b)) reproduces b."
    d = diff(a, b)
    assert is_valid_patch(d)
    assert json_equal(patch(a, d), b)


def check_symmetric_diff_and_patch(a, b):
    "Check that patch(a, diff(a,b)) reproduces b and vice versa."
    check_diff_and_patch(a, b)
    check_diff_and_patch(b, a)


def check_prepare_roundtrip(document, ops):
    """Check that a prepared Diff reproduces and undoes the patch.

    Returns the Diff for further inspection.
    """
    snapshot = copy.deepcopy(document)
    d = prepare(document, ops)
    after = d.apply(document)
    assert json_equal(after, patch(document, ops))
    assert json_equal(d.revert(after), document)
    # Neither preparing nor applying touch the input
    assert document == snapshot
    return d


_keys = ["a", "b", "c", "d", "x/y", "t~n", "-", "0"]


def random_value(rng, depth=3):
    "Generate a random json value, nesting at most depth levels."
    kind = rng.randrange(9 if depth > 0 else 6)
    if kind == 0:
        return None
    elif kind == 1:
        return rng.choice([True, False])
    elif kind == 2:
        return rng.randrange(-3, 4)
    elif kind == 3:
        return rng.choice([0.5, -0.0, 2.0, 1e10])
    elif kind in (4, 5):
        return rng.choice(["", "a", "b", "c", "~/"])
    elif kind in (6, 7):
        return [random_value(rng, depth - 1) for _ in range(rng.randrange(6))]
    return {k: random_value(rng, depth - 1)
            for k in rng.sample(_keys, rng.randrange(4))}


def mutated(rng, value, depth=3):
    "Return a randomly modified copy of value, reusing most of its content."
    if isinstance(value, dict) and depth > 0:
        result = {}
        for k, v in value.items():
            r = rng.random()
            if r < 0.15:
                continue
            result[k] = mutated(rng, v, depth - 1) if r < 0.5 else copy.deepcopy(v)
        if rng.random() < 0.3:
            result[rng.choice(_keys)] = random_value(rng, depth - 1)
        return result
    elif isinstance(value, list) and depth > 0:
        result = []
        for v in value:
            r = rng.random()
            if r < 0.15:
                continue
            result.append(mutated(rng, v, depth - 1) if r < 0.4 else copy.deepcopy(v))
            if rng.random() < 0.15:
                result.append(random_value(rng, depth - 1))
        if result and rng.random() < 0.2:
            rng.shuffle(result)
        return result
    elif rng.random() < 0.5:
        return random_value(rng, depth)
    return copy.deepcopy(value)


def random_pair(seed):
    rng = random.Random(seed)
    a = random_value(rng)
    return a, mutated(rng, a)


def _pointers(value, prefix=""):
    "All pointers into value, the root included."
    yield prefix
    if isinstance(value, dict):
        items = value.items()
    elif isinstance(value, list):
        items = enumerate(value)
    else:
        return
    for key, v in items:
        token = str(key).replace("~", "~0").replace("/", "~1")
        for p in _pointers(v, prefix + "/" + token):
            yield p


def _random_operation(rng, document):
    existing = list(_pointers(document))
    path = rng.choice(existing)
    kind = rng.choice(["add", "remove", "replace", "move", "copy", "test"])
    if kind in ("add", "move", "copy"):
        # Targets may be new members or array slots below existing parents
        parent = rng.choice(existing)
        token = rng.choice(_keys + ["1", "-"])
        target = rng.choice([path, parent + "/" + token])
        if kind == "add":
            return op_add(target, random_value(rng, 2))
        elif kind == "move":
            return op_move(path, target)
        return op_copy(path, target)
    elif kind == "remove":
        return op_remove(path)
    elif kind == "replace":
        return op_replace(path, random_value(rng, 2))
    return op_test(path, rng.choice([random_value(rng, 1), _get(document, path)]))


def _get(document, path):
    found, value = try_get(document, path)
    return value if found else None


def random_patch(seed, length=8):
    """Generate a random document and a patch that applies to it.

    Candidate operations failing on the document patched so far are
    dropped, so the patch applies without errors.
    """
    rng = random.Random(seed)
    document = {k: random_value(rng) for k in rng.sample(_keys, 3)}
    document["l"] = [random_value(rng, 1) for _ in range(4)]
    current = copy.deepcopy(document)
    ops = []
    for _ in range(length * 3):
        if len(ops) == length:
            break
        e = _random_operation(rng, current)
        try:
            current = patch(current, [e])
        except JSONPatchError:
            continue
        ops.append(e)
    return document, ops
