# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Resolution of json pointers (RFC 6901) against tree values.

Parsing and escaping of pointer strings is delegated to the
jsonpointer library. Traversal is done here so that each kind of
failure maps to its own exception class.
"""

import re

from jsonpointer import JsonPointer, JsonPointerException

from .errors import (
    MalformedPointer, TargetNotFound, InvalidArrayIndex, ParentNotContainer,
    ArrayIndexOutOfRange, RootOperationUnsupported,
)

__all__ = [
    "APPEND_TOKEN", "parse", "tokens_to_string", "join", "split_last",
    "parse_array_index", "resolve", "get", "try_get", "set", "remove",
]


# The final token denoting "one past the last array element"
APPEND_TOKEN = "-"

_array_index_re = re.compile(r"^(0|[1-9][0-9]*)$")


def parse(pointer):
    "Split a pointer string like '/foo/0/a~1b' into unescaped tokens."
    if isinstance(pointer, (list, tuple)):
        return list(pointer)
    if not isinstance(pointer, str):
        raise MalformedPointer("pointer must be a string, not %r" % (pointer,))
    try:
        return JsonPointer(pointer).parts
    except JsonPointerException as e:
        raise MalformedPointer("invalid pointer %r: %s" % (pointer, e))


def tokens_to_string(tokens):
    "Join tokens into a pointer string, escaping '~' and '/'."
    return JsonPointer.from_parts(tokens).path


def join(pointer, token):
    "Append a single token to a pointer string."
    return pointer + tokens_to_string([token])


def split_last(pointer):
    """Split a pointer into its parent tokens and final token.

    The root pointer has no final token and raises RootOperationUnsupported.
    """
    tokens = parse(pointer)
    if not tokens:
        raise RootOperationUnsupported("the document root has no parent")
    return tokens[:-1], tokens[-1]


def parse_array_index(token):
    "Parse an array index token, raising InvalidArrayIndex if not canonical."
    if isinstance(token, int) and not isinstance(token, bool):
        if token < 0:
            raise InvalidArrayIndex("negative array index %d" % token)
        return token
    if not isinstance(token, str) or not _array_index_re.match(token):
        raise InvalidArrayIndex("%r is not a valid array index" % (token,))
    return int(token)


def _child(container, token, tokens, depth):
    if isinstance(container, dict):
        try:
            return container[token]
        except KeyError:
            raise TargetNotFound("member %r not found at %r" % (
                token, tokens_to_string(tokens[:depth])))
    elif isinstance(container, list):
        if token == APPEND_TOKEN:
            raise TargetNotFound("%r refers to a nonexistent array element at %r" % (
                token, tokens_to_string(tokens[:depth])))
        i = parse_array_index(token)
        if i >= len(container):
            raise TargetNotFound("index %d is out of bounds for array of length %d at %r" % (
                i, len(container), tokens_to_string(tokens[:depth])))
        return container[i]
    raise ParentNotContainer("cannot traverse into %s value at %r" % (
        type(container).__name__, tokens_to_string(tokens[:depth])))


def resolve(document, tokens):
    "Return the value addressed by a list of tokens."
    value = document
    for depth, token in enumerate(tokens):
        value = _child(value, token, tokens, depth)
    return value


def get(document, pointer):
    "Return the value addressed by a pointer string."
    return resolve(document, parse(pointer))


def try_get(document, pointer):
    """Look up pointer, returning (found, value).

    A missing target or a path through a scalar both count as not found.
    """
    try:
        return True, get(document, pointer)
    except (TargetNotFound, ParentNotContainer):
        return False, None


def set(document, pointer, value):
    """Set value at pointer and return the (possibly new) document root.

    An empty pointer replaces the root. For an array parent, an index
    below the length overwrites, while the length itself or the append
    token appends.
    """
    tokens = parse(pointer)
    if not tokens:
        return value
    parent = resolve(document, tokens[:-1])
    token = tokens[-1]
    if isinstance(parent, dict):
        parent[token] = value
    elif isinstance(parent, list):
        if token == APPEND_TOKEN:
            parent.append(value)
        else:
            i = parse_array_index(token)
            if i < len(parent):
                parent[i] = value
            elif i == len(parent):
                parent.append(value)
            else:
                raise ArrayIndexOutOfRange(
                    "set at index %d is out of bounds for array of length %d" % (
                        i, len(parent)))
    else:
        raise ParentNotContainer("cannot set %r on %s value" % (
            token, type(parent).__name__))
    return document


def remove(document, pointer):
    "Remove the value at pointer and return the document root."
    tokens = parse(pointer)
    if not tokens:
        raise RootOperationUnsupported("cannot remove the document root")
    parent = resolve(document, tokens[:-1])
    # Validates that the target exists, with the same errors as get
    _child(parent, tokens[-1], tokens, len(tokens) - 1)
    if isinstance(parent, dict):
        del parent[tokens[-1]]
    else:
        del parent[parse_array_index(tokens[-1])]
    return document
