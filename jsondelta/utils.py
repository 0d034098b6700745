# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import codecs
import io
import json
import locale
import os
import sys

import colorama


# Filename standing for a missing document on the command line
if os.name == 'nt':
    EXPLICIT_MISSING_FILE = 'nul'
else:
    EXPLICIT_MISSING_FILE = '/dev/null'


# The closed set of tree value kinds
OBJECT = "object"
ARRAY = "array"
STRING = "string"
NUMBER = "number"
BOOLEAN = "boolean"
NULL = "null"


def value_kind(value):
    """Classify a json-like value as one of the six tree value kinds.

    Note that bool is checked before numbers, since bool is a
    subclass of int in Python but never a number in json.
    """
    if isinstance(value, dict):
        return OBJECT
    elif isinstance(value, list):
        return ARRAY
    elif isinstance(value, str):
        return STRING
    elif isinstance(value, bool):
        return BOOLEAN
    elif isinstance(value, (int, float)):
        return NUMBER
    elif value is None:
        return NULL
    raise TypeError("Not a json value: {!r} of type {}".format(
        value, type(value).__name__))


def normalize_number(x):
    """Map a json number to the single float representation used for comparisons.

    Integers beyond the float range are kept as exact ints.
    """
    try:
        x = float(x)
    except OverflowError:
        return int(x)
    if x == 0.0:
        # Drops the sign of negative zero
        return 0.0
    return x


def json_equal(a, b):
    """Deep structural equality of two tree values.

    Numbers compare by normalized value regardless of int/float origin,
    while booleans are never equal to numbers.
    """
    ka = value_kind(a)
    if ka != value_kind(b):
        return False
    if ka == OBJECT:
        if len(a) != len(b):
            return False
        for key, avalue in a.items():
            if key not in b or not json_equal(avalue, b[key]):
                return False
        return True
    elif ka == ARRAY:
        return len(a) == len(b) and all(json_equal(x, y) for x, y in zip(a, b))
    elif ka == NUMBER:
        return normalize_number(a) == normalize_number(b)
    return a == b


def normalized(value):
    "Return a copy of value with all numbers normalized to floats."
    kind = value_kind(value)
    if kind == OBJECT:
        return {k: normalized(v) for k, v in value.items()}
    elif kind == ARRAY:
        return [normalized(v) for v in value]
    elif kind == NUMBER:
        return normalize_number(value)
    return value


def canonical_json(value):
    "Serialize value to a canonical string where json_equal values are identical."
    return json.dumps(normalized(value), sort_keys=True,
                      separators=(",", ":"), ensure_ascii=False)


def loads_json(text):
    "Decode json from str or utf8 bytes."
    if isinstance(text, bytes):
        text = text.decode("utf8")
    return json.loads(text)


def read_json(f, on_null=None):
    """Read and return a json document from a filename or file-like object.

    The null filename ("/dev/null", or "nul" on Windows) is not read,
    on_null decides what it stands for instead:
        "empty": an empty object
        "null": None
        None: raise a ValueError
    """
    if f == EXPLICIT_MISSING_FILE:
        if on_null == 'empty':
            return {}
        elif on_null == 'null':
            return None
        raise ValueError(
            'Cannot read %s without a valid `on_null` value, got %r.' % (f, on_null))
    if isinstance(f, str):
        with io.open(f, encoding='utf-8') as fo:
            return json.load(fo)
    return json.load(f)


def write_json(value, f, indent=2, sort_keys=False):
    "Write a json document followed by a newline to a filename or file-like object."
    if isinstance(f, str):
        with io.open(f, 'w', encoding='utf-8') as fo:
            write_json(value, fo, indent=indent, sort_keys=sort_keys)
        return
    json.dump(value, f, indent=indent or None, sort_keys=sort_keys, ensure_ascii=False)
    f.write("\n")


def _wrap_std_stream(name):
    stream = getattr(sys, name)
    if stream is not getattr(sys, '__%s__' % name):
        # Captured or redirected by the caller
        return
    errors = getattr(stream, 'errors', None) or 'strict'
    if errors != 'strict' and not errors.startswith('surrogate'):
        return
    encoding = (getattr(stream, 'encoding', None)
                or locale.getpreferredencoding() or 'UTF-8')
    setattr(sys, name, codecs.getwriter(encoding)(stream.buffer, errors='backslashreplace'))


def setup_std_streams():
    """Prepare sys.stdout/err for printing arbitrary json text.

    Characters the terminal cannot encode are escaped instead of
    raising, unless PYTHONIOENCODING is set. On Windows colorama is
    enabled afterwards, as rewrapping the streams would undo it.
    """
    if not os.getenv('PYTHONIOENCODING'):
        for name in ('stdout', 'stderr'):
            _wrap_std_stream(name)
    if sys.platform.startswith('win'):
        colorama.init()
