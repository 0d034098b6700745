# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

__version__ = "0.3.0"

# Releases of jsondelta are plain major.minor.micro
version_info = tuple(int(part) for part in __version__.split("."))
