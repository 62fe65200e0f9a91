"""
Extracts import paths from Go source files.
Line-based lexical scanner: it recognizes import declarations only and never
reads past the end of the import section.
"""

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

BLOCK_OPEN = "import ("
BLOCK_CLOSE = ")"


class ScanState(Enum):
    SEEKING = "seeking"
    BLOCK = "block"


class ImportScanner:
    """
    Two-state scanner over the lines of a Go file.

    SEEKING: skip lines until either a single-line import (emit it and stop)
    or the opening of an import block (switch to BLOCK).
    BLOCK: emit the quoted path of every matching line until the closing
    parenthesis. Blank lines, comments and malformed entries are skipped.

    Instances hold only compiled patterns and are safe to share between threads.
    """

    def __init__(self) -> None:
        # optional alias: identifier, "_" or "."
        self._single = re.compile(r'^import\s+(?:[\w.]+\s+)?"(?P<path>[^"]+)"\s*(?://.*)?$')
        self._entry = re.compile(r'^(?:[\w.]+\s+)?"(?P<path>[^"]+)"\s*(?://.*)?$')

    def scan_lines(self, lines: Iterable[str]) -> Iterator[str]:
        """Yield import paths from an iterable of source lines, in file order."""
        state = ScanState.SEEKING
        for raw in lines:
            line = raw.strip()
            if state is ScanState.SEEKING:
                if line.startswith(BLOCK_OPEN):
                    state = ScanState.BLOCK
                    continue
                m = self._single.match(line)
                if m:
                    yield m.group("path")
                    return
                continue
            if line.startswith(BLOCK_CLOSE):
                return
            m = self._entry.match(line)
            if m:
                yield m.group("path")

    def extract(self, file_path: str | Path) -> list[str]:
        """
        Return the import paths declared in a Go file.
        Raises OSError if the file cannot be opened or read.
        """
        with open(file_path, encoding="utf-8", errors="replace") as f:
            imports = list(self.scan_lines(f))
        logger.debug("%s: %d imports", file_path, len(imports))
        return imports


_default_scanner = ImportScanner()


def extract_imports(file_path: str | Path) -> list[str]:
    """Extract imports with the shared default scanner."""
    return _default_scanner.extract(file_path)
