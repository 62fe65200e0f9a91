"""
Exceptions shared across pkgcount layers.
Only errors raised in one layer and handled in another live here.
"""

from __future__ import annotations


class PkgcountError(Exception):
    """Base class for pkgcount failures."""


class ValidationError(PkgcountError, ValueError):
    """Bad run arguments, reported before any file is read."""


class ModuleResolutionError(PkgcountError):
    """The Go module name of the target directory could not be determined."""


class AggregationError(PkgcountError):
    """A unit of work in an aggregation group failed; the cause is chained."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class RunCancelled(AggregationError):
    """The run was cancelled from outside before all units completed."""
