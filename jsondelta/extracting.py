# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Splitting of a patched document into added and remaining content.

Given the document obtained by applying a patch, `extract_added`
separates the content introduced by the patch's add operations from
everything else. Containers are cloned only along the paths that
change (copy-on-write), all other subtrees and all leaf values are
shared by reference with the input, which is never modified.
"""

from bisect import bisect_left

from . import log
from . import pointer
from .errors import (
    JSONPatchError, TargetNotFound, ParentNotContainer, ArrayIndexOutOfRange,
    RootOperationUnsupported, TypeMismatch,
)
from .patch_format import PatchOp, validate_operation


__all__ = ["extract_added"]


def _shallow_clone(value):
    if isinstance(value, dict):
        return dict(value)
    elif isinstance(value, list):
        return list(value)
    return value


def cow_set(root, tokens, value):
    """Return a copy of root with value set at tokens.

    Only the containers along the path are cloned, and the
    addressed location (as well as every container on the way)
    must already exist. An empty path returns value itself.
    """
    if not tokens:
        return value
    token = tokens[0]
    if isinstance(root, dict):
        if token not in root:
            raise TargetNotFound("member %r not found" % (token,))
        clone = dict(root)
        clone[token] = cow_set(root[token], tokens[1:], value)
        return clone
    elif isinstance(root, list):
        index = pointer.parse_array_index(token)
        if index >= len(root):
            raise TargetNotFound("index %d is out of bounds for array of length %d" % (
                index, len(root)))
        clone = list(root)
        clone[index] = cow_set(root[index], tokens[1:], value)
        return clone
    raise ParentNotContainer("cannot set %r inside a %s value" % (
        token, type(root).__name__))


def ensure_container(root, tokens, want_array):
    """Return a copy of root where a container exists at tokens.

    Missing intermediate containers are created as objects, and the
    final one as an array if want_array is true, else as an object.
    An existing final value of the wrong kind is replaced. Returns
    root itself if nothing had to change.
    """
    wanted = list if want_array else dict
    if not tokens:
        if isinstance(root, wanted):
            return root
        return wanted()
    if root is None:
        root = {}
    elif not isinstance(root, dict):
        raise TypeMismatch("cannot create added content for %r below a %s" % (
            tokens[0], type(root).__name__))
    child = root.get(tokens[0])
    new_child = ensure_container(child, tokens[1:], want_array)
    if new_child is child:
        return root
    clone = dict(root)
    clone[tokens[0]] = new_child
    return clone


def _remaining_tokens(tokens, extracted):
    """Translate a path in the patched document to the remaining document.

    Array indices are shifted down by the number of elements already
    filtered out before them. Returns None if the path lies inside
    content that has already been extracted.
    """
    result = []
    for depth, token in enumerate(tokens):
        removed = extracted.get(tuple(tokens[:depth]))
        if removed is None:
            result.append(token)
        elif isinstance(removed, list):
            index = pointer.parse_array_index(token)
            r = bisect_left(removed, index)
            if r < len(removed) and removed[r] == index:
                return None
            result.append(str(index - r))
        elif token in removed:
            return None
        else:
            result.append(token)
    return result


def _is_array_token(token):
    if token == pointer.APPEND_TOKEN:
        return True
    try:
        pointer.parse_array_index(token)
    except JSONPatchError:
        return False
    return True


def _extract_object_members(parent_tokens, ops):
    """Return the distinct member keys added to an object parent."""
    final = {}
    for child, order, e in ops:
        if _is_array_token(child):
            raise TypeMismatch(
                "object parent %r received array-style add at child %r" % (
                    pointer.tokens_to_string(parent_tokens), child)).annotate(order, e)
        final[child] = order
    return list(final)


def _extract_array_indices(parent_after, parent_tokens, ops):
    """Return the sorted indices in the patched array of its added elements.

    The array before the patch is assumed to have had one element less
    per add targeting it. Append tokens are resolved past that length,
    in patch order, while concrete indices must lie within it.
    """
    base_len = len(parent_after) - len(ops)
    if base_len < 0:
        raise ArrayIndexOutOfRange(
            "array %r has fewer elements (%d) than additions (%d)" % (
                pointer.tokens_to_string(parent_tokens), len(parent_after), len(ops)))
    indices = set()
    appended = 0
    for child, order, e in ops:
        if child == pointer.APPEND_TOKEN:
            index = base_len + appended
            appended += 1
        else:
            try:
                index = pointer.parse_array_index(child)
            except JSONPatchError as err:
                raise err.annotate(order, e)
            if index >= base_len:
                raise ArrayIndexOutOfRange(
                    "array parent %r child index %d is not below the "
                    "length %d before the patch" % (
                        pointer.tokens_to_string(parent_tokens), index, base_len)
                ).annotate(order, e)
        indices.add(index)
    return sorted(indices)


def _group_additions(ops):
    """Group add operations by parent path, in order of first appearance.

    Returns a dict mapping parent token tuples to lists of
    (child token, patch index, operation).
    """
    groups = {}
    for order, e in enumerate(ops):
        try:
            validate_operation(e)
            if e["op"] != PatchOp.ADD:
                continue
            tokens = pointer.parse(e["path"])
            if not tokens:
                raise RootOperationUnsupported(
                    "root-level add is not supported when extracting added content")
        except JSONPatchError as err:
            raise err.annotate(order, e)
        groups.setdefault(tuple(tokens[:-1]), []).append((tokens[-1], order, e))
    return groups


def _extract_group(after, remaining, added, parent_tokens, group, extracted):
    """Move the additions to a single parent from remaining to added.

    Returns the updated (remaining, added) pair.
    """
    tokens = list(parent_tokens)
    try:
        parent_after = pointer.resolve(after, tokens)
    except JSONPatchError as err:
        raise TargetNotFound("parent %r not found in patched document: %s" % (
            pointer.tokens_to_string(tokens), err.message))

    rem_tokens = _remaining_tokens(tokens, extracted)
    if rem_tokens is None:
        log.debug("additions below %r are part of extracted content",
                  pointer.tokens_to_string(tokens))
        return remaining, added
    parent_rem = pointer.resolve(remaining, rem_tokens)

    if isinstance(parent_after, dict):
        keys = _extract_object_members(tokens, group)
        new_rem = dict(parent_rem)
        for key in keys:
            new_rem.pop(key, None)
        remaining = cow_set(remaining, rem_tokens, new_rem)

        added = ensure_container(added, tokens, want_array=False)
        new_added = dict(pointer.resolve(added, tokens))
        for key in keys:
            if key not in parent_after:
                log.debug("added member %r is no longer present in %r",
                          key, pointer.tokens_to_string(tokens))
            # Shared by reference with after, null once removed again
            new_added[key] = parent_after.get(key)
        added = cow_set(added, tokens, new_added)
        extracted[parent_tokens] = set(keys)

    elif isinstance(parent_after, list):
        indices = _extract_array_indices(parent_after, tokens, group)
        drop = set(indices)
        new_rem = [v for i, v in enumerate(parent_rem) if i not in drop]
        remaining = cow_set(remaining, rem_tokens, new_rem)

        added = ensure_container(added, tokens, want_array=True)
        added = cow_set(added, tokens, [parent_after[i] for i in indices])
        extracted[parent_tokens] = indices

    else:
        raise TypeMismatch("parent %r must be an object or an array, not %s" % (
            pointer.tokens_to_string(tokens), type(parent_after).__name__))

    log.debug("extracted %d additions from %r",
              len(extracted[parent_tokens]), pointer.tokens_to_string(tokens))
    return remaining, added


def extract_added(after, ops):
    """Split a patched document by the add operations of the patch.

    Returns (remaining, added) where remaining is `after` without
    the added object members and array elements, and added holds only
    the added content, in containers mirroring their location in
    `after`. Added array elements are collected compactly in
    ascending index order. Operations other than add are only checked
    for their format, and added is None if there are no additions.

    `after` is not modified, and shares all untouched containers
    and every leaf value with both results.

    Additions below an existing element of an array that itself
    received additions cannot be mirrored in added, and raise
    a TypeMismatch.
    """
    remaining = _shallow_clone(after)
    groups = _group_additions(ops)
    if not groups:
        return remaining, None

    added = None
    # Maps parent paths to the extracted keys (set) or indices (sorted list)
    extracted = {}

    # Shallow parents first, ties in order of first appearance
    for parent_tokens in sorted(groups, key=len):
        group = groups[parent_tokens]
        try:
            remaining, added = _extract_group(
                after, remaining, added, parent_tokens, group, extracted)
        except JSONPatchError as err:
            # Attributed to the first add targeting this parent,
            # unless already attributed to a specific one
            raise err.annotate(group[0][1], group[0][2])

    return remaining, added
