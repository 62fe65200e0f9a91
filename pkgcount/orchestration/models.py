"""
Value types for a count run: arguments in, package counts out.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from pkgcount.exceptions import ValidationError


@dataclass(frozen=True)
class PackageCount:
    """An import path and how many times it was imported."""
    package: str
    count: int


@dataclass(frozen=True)
class Result:
    """Filtered, sorted package counts, split into internal and external."""
    internal: tuple[PackageCount, ...] = ()
    external: tuple[PackageCount, ...] = ()

    def total(self) -> int:
        return sum(pc.count for pc in self.internal) + sum(pc.count for pc in self.external)

    def is_empty(self) -> bool:
        return not self.internal and not self.external


@dataclass
class CountArgs:
    """Inputs of one pkgcount run, as given on the command line."""
    root: Path = Path(".")
    exclude: str | None = None
    gte: int = 0
    lte: int | None = None  # None = no upper bound
    unrendered: bool = False
    out: Path | None = None
    module_name: str | None = None
    max_workers: int | None = None
    # set by validate()
    exclude_regexp: re.Pattern | None = field(default=None, init=False, repr=False)

    def validate(self) -> None:
        """Check the count range and compile the exclusion pattern. Raises ValidationError."""
        validate_range(self.gte, self.lte)
        self.exclude_regexp = compile_exclude(self.exclude)


def validate_range(gte: int, lte: int | None) -> None:
    if gte < 0:
        raise ValidationError("gte must be greater than or equal to 0")
    if lte is not None and lte < 0:
        raise ValidationError("lte must be greater than or equal to 0")
    if lte is not None and lte < gte:
        raise ValidationError("lte must be greater than or equal to gte")


def compile_exclude(pattern: str | re.Pattern | None) -> re.Pattern | None:
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValidationError(f"bad regular expression ['{pattern}'] error: {e}") from e
