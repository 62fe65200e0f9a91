"""
Locate the Go module configuration for a target path.
Looks in: env PKGCOUNT_MODULE, then go.mod in the target directory and its parents.
"""

import os
from pathlib import Path

MODULE_ENV = "PKGCOUNT_MODULE"
GO_MOD = "go.mod"


def get_module_override() -> str | None:
    """Return the module name forced through the environment, if any."""
    value = os.environ.get(MODULE_ENV, "").strip()
    return value or None


def module_dir(target: str | Path) -> Path:
    """Directory the Go toolchain should run in: target itself, or its parent for a file."""
    path = Path(target).resolve()
    return path.parent if path.is_file() else path


def find_go_mod(target: str | Path) -> Path | None:
    """
    Return the nearest go.mod at or above target, or None.
    Order: target dir, then each parent up to the filesystem root.
    """
    start = module_dir(target)
    for candidate_dir in (start, *start.parents):
        candidate = candidate_dir / GO_MOD
        if candidate.is_file():
            return candidate
    return None
