# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Matching of array elements for the array diff.

Elements are compared through string tokens, such that equal
elements (in the json sense) get identical tokens. Elements of b
are paired greedily with the earliest unused equal element of a,
and the longest increasing subsequence of these pairs (ordered by
position in a) gives the elements that can stay in place.
"""

from bisect import bisect_left
from collections import defaultdict, deque

from ..profiling import timer
from ..utils import value_kind, normalize_number, canonical_json


def tokenize(value):
    "Map a value to a string key, identical for all json-equal values."
    kind = value_kind(value)
    if kind == "null":
        return "z"
    elif kind == "boolean":
        return "b:1" if value else "b:0"
    elif kind == "number":
        return "n:" + repr(normalize_number(value))
    elif kind == "string":
        return "s:" + value
    # Objects and arrays fall back to canonical json
    return "j:" + canonical_json(value)


def tokenize_array(values):
    with timer.time('tokenize'):
        return [tokenize(v) for v in values]


def match_candidates(atokens, btokens):
    """Pair each element of b with the earliest unconsumed equal element of a.

    Returns a list of (i, j) pairs, ordered by j.
    """
    queues = defaultdict(deque)
    for i, t in enumerate(atokens):
        queues[t].append(i)
    pairs = []
    for j, t in enumerate(btokens):
        q = queues.get(t)
        if q:
            pairs.append((q.popleft(), j))
    return pairs


def longest_increasing_subsequence(seq):
    """Compute the positions in seq of a longest strictly increasing subsequence.

    Patience sorting with binary search, O(k log k) for k = len(seq).
    """
    # tails[r] is the position in seq of the smallest tail of all
    # increasing subsequences of length r+1 seen so far
    tails = []
    tail_values = []
    prev = [-1] * len(seq)
    for k, v in enumerate(seq):
        r = bisect_left(tail_values, v)
        if r > 0:
            prev[k] = tails[r - 1]
        if r == len(tails):
            tails.append(k)
            tail_values.append(v)
        else:
            tails[r] = k
            tail_values[r] = v

    # Walk predecessors back from the last tail
    positions = []
    k = tails[-1] if tails else -1
    while k >= 0:
        positions.append(k)
        k = prev[k]
    positions.reverse()
    return positions


def kept_indices(a, b):
    """Compute indices of elements in a and b that are kept in place by the array diff.

    Returns two lists A_indices, B_indices of equal length, both increasing,
    with a[A_indices[r]] equal to b[B_indices[r]].
    """
    atokens = tokenize_array(a)
    btokens = tokenize_array(b)
    with timer.time('lis'):
        pairs = match_candidates(atokens, btokens)
        lis = longest_increasing_subsequence([i for i, _ in pairs])
    A_indices = [pairs[k][0] for k in lis]
    B_indices = [pairs[k][1] for k in lis]
    return A_indices, B_indices
