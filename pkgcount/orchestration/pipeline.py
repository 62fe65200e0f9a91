"""
End-to-end count: walk the tree → scan imports per file in parallel → tally → filter and sort.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Iterable

from pkgcount.aggregation import AggregationGroup, CancelScope, TallyPair
from pkgcount.exceptions import AggregationError, ValidationError
from pkgcount.parser.imports import ImportScanner
from pkgcount.parser.walker import DEFAULT_SKIP_DIRS, WalkFilter, walk_source_files

from .models import PackageCount, Result, compile_exclude, validate_range

logger = logging.getLogger(__name__)


def is_internal(package: str, module_name: str) -> bool:
    # Plain substring match: an external path that merely contains the module
    # name (github.com/x/foo-fork vs module github.com/x/foo) counts as internal.
    return module_name in package


def count_file(path: str, module_name: str, scanner: ImportScanner) -> Callable[[TallyPair], None]:
    """Build the aggregation unit for one file: scan its imports and tally each one."""

    def unit(tallies: TallyPair) -> None:
        for package in scanner.extract(path):
            if is_internal(package, module_name):
                tallies.internal.increment(package)
            else:
                tallies.external.increment(package)

    return unit


def count_imports(
    root: str | Path,
    module_name: str,
    *,
    walk_filter: WalkFilter | None = None,
    scanner: ImportScanner | None = None,
    scope: CancelScope | None = None,
    max_workers: int | None = None,
) -> tuple[dict[str, int], dict[str, int]]:
    """
    Count every import occurrence under root, before any range filtering.
    Returns (internal_counts, external_counts) snapshots.
    Raises AggregationError if any file fails, RunCancelled if scope is cancelled,
    OSError if the tree cannot be walked.
    """
    scanner = scanner or ImportScanner()
    group, group_scope = AggregationGroup.new(scope, TallyPair.empty(), max_workers)

    scheduled = 0
    try:
        for path in walk_source_files(root, walk_filter):
            if group_scope.cancelled:
                break
            group.go(count_file(path, module_name, scanner), label=path)
            scheduled += 1
    except OSError as e:
        group_scope.cancel(e)
        try:
            group.wait()
        except AggregationError as unit_err:
            logger.debug("Dropped unit error after walk failure: %s", unit_err)
        raise

    logger.debug("Scheduled %d files under %s", scheduled, root)
    tallies = group.wait()
    if scope is not None:
        scope.check()

    internal, external = tallies.internal.snapshot(), tallies.external.snapshot()
    logger.info(
        "Scanned %d files: %d internal and %d external packages",
        scheduled,
        len(internal),
        len(external),
    )
    return internal, external


def _sort_key(pc: PackageCount) -> tuple[int, str]:
    # count descending, then package name ascending
    return (-pc.count, pc.package)


def select_counts(counts: dict[str, int], gte: int = 0, lte: int | None = None) -> tuple[PackageCount, ...]:
    """Keep entries with gte <= count <= lte and sort them."""
    selected = [
        PackageCount(package=package, count=count)
        for package, count in counts.items()
        if count >= gte and (lte is None or count <= lte)
    ]
    selected.sort(key=_sort_key)
    return tuple(selected)


def summarize(
    internal_counts: dict[str, int],
    external_counts: dict[str, int],
    gte: int = 0,
    lte: int | None = None,
) -> Result:
    return Result(
        internal=select_counts(internal_counts, gte, lte),
        external=select_counts(external_counts, gte, lte),
    )


def run(
    root: str | Path,
    module_name: str,
    *,
    exclude: str | re.Pattern | None = None,
    gte: int = 0,
    lte: int | None = None,
    scope: CancelScope | None = None,
    max_workers: int | None = None,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
) -> Result:
    """
    Count internal and external package imports of the Go code under root.
    Arguments are validated before any file is read. lte=None means no upper bound.
    """
    validate_range(gte, lte)
    exclude_regexp = compile_exclude(exclude)
    if not module_name:
        raise ValidationError("module name must not be empty")

    walk_filter = WalkFilter(skip_dirs=frozenset(skip_dirs), exclude=exclude_regexp)
    internal, external = count_imports(
        root,
        module_name,
        walk_filter=walk_filter,
        scope=scope,
        max_workers=max_workers,
    )
    return summarize(internal, external, gte, lte)
