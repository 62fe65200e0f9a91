"""
Go source parser.
Walks a project tree and extracts the import paths declared by each Go file.
"""

from .imports import ImportScanner, extract_imports
from .walker import DEFAULT_SKIP_DIRS, WalkFilter, walk_source_files

__all__ = ["ImportScanner", "extract_imports", "DEFAULT_SKIP_DIRS", "WalkFilter", "walk_source_files"]
