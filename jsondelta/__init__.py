# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ._version import __version__

from .diffing import diff
from .patching import patch, patch_in_place, patch_stream
from .deltas import Diff, prepare
from .extracting import extract_added
from .errors import JSONPatchError


__all__ = [
    "__version__",
    "diff",
    "patch", "patch_in_place", "patch_stream",
    "Diff", "prepare",
    "extract_added",
    "JSONPatchError",
    ]
