"""
naming.version
--------------

Package version, taken from installed metadata when available.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

DIST_NAME = "naming-records"

try:
    __version__ = _pkg_version(DIST_NAME)
except PackageNotFoundError:  # local checkouts
    __version__ = "0.1.0.dev0"

__all__ = ["__version__", "DIST_NAME"]
