"""
Package counting pipeline.
Single flow: directory → Go files → imports (in parallel) → tallies → filtered, sorted Result.
"""

from .models import CountArgs, PackageCount, Result
from .pipeline import count_imports, run, summarize

__all__ = ["CountArgs", "PackageCount", "Result", "count_imports", "run", "summarize"]
