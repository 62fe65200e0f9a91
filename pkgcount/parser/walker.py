"""
Walks a Go project tree and yields the source files to scan.
Skips vendored and tool directories so we don't count imports from
vendor/, .git, node_modules, etc.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

# Directories that are never descended into
DEFAULT_SKIP_DIRS = frozenset(
    {
        "vendor",
        ".git",
        ".idea",
        ".vscode",
        "node_modules",
    }
)

GO_EXTENSION = ".go"


@dataclass(frozen=True)
class WalkFilter:
    """Decides which directories are pruned and which files are yielded."""
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS
    extension: str = GO_EXTENSION
    exclude: re.Pattern | None = field(default=None)

    def prunes(self, dirname: str) -> bool:
        return dirname in self.skip_dirs

    def accepts(self, path: str) -> bool:
        """True if the file has the source extension and is not excluded."""
        if not path.endswith(self.extension):
            return False
        if self.exclude is not None and self.exclude.search(path):
            return False
        return True


def _raise(err: OSError) -> None:
    raise err


def walk_source_files(root: str | Path, walk_filter: WalkFilter | None = None) -> Iterator[str]:
    """
    Lazily yield eligible file paths under root, in sorted order.
    root may also be a single file. Raises OSError if root is missing or a
    directory cannot be listed.
    """
    walk_filter = walk_filter or WalkFilter()
    # cleaned like Go paths: walking "." yields "cmd/x.go", not "./cmd/x.go"
    root = os.path.normpath(os.fspath(root))
    if os.path.isfile(root):
        if walk_filter.accepts(root):
            yield root
        return
    if not os.path.isdir(root):
        raise FileNotFoundError(f"No such file or directory: {root}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        pruned = [d for d in dirnames if walk_filter.prunes(d)]
        if pruned:
            logger.debug("Skipping %s in %s", ", ".join(pruned), dirpath)
        dirnames[:] = sorted(d for d in dirnames if not walk_filter.prunes(d))
        for name in sorted(filenames):
            path = os.path.normpath(os.path.join(dirpath, name))
            if walk_filter.accepts(path):
                yield path
