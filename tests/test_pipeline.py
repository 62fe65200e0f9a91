"""
Tests for the counting pipeline: classification, conservation, range
filtering, ordering, validation and failure propagation.
"""

import os
import re

import pytest

from pkgcount.aggregation import CancelScope
from pkgcount.exceptions import AggregationError, RunCancelled, ValidationError
from pkgcount.orchestration import PackageCount, Result, count_imports, run, summarize
from pkgcount.orchestration.pipeline import is_internal, select_counts
from pkgcount.parser import extract_imports, walk_source_files

from conftest import write_go


@pytest.mark.unit
class TestClassification:

    def test_sub_path_is_internal(self, module_name):
        assert is_internal("github.com/acme/widget/sub", module_name)

    def test_other_path_is_external(self, module_name):
        assert not is_internal("github.com/other/lib", module_name)

    def test_substring_match_is_loose(self, module_name):
        # known looseness: containment, not prefix
        assert is_internal("example.com/mirror/github.com/acme/widget", module_name)


@pytest.mark.unit
class TestRun:

    def test_counts_and_order(self, go_project, module_name):
        result = run(go_project, module_name)
        assert result.internal == (
            PackageCount("github.com/acme/widget/sub", 2),
            PackageCount("github.com/acme/widget/util", 1),
        )
        assert result.external == (
            PackageCount("fmt", 3),
            PackageCount("os", 2),
            PackageCount("strings", 1),
        )

    def test_ties_broken_by_name(self, tmp_path, module_name):
        write_go(tmp_path / "a.go", "zeta", "alpha", "mid")
        result = run(tmp_path, module_name)
        assert [pc.package for pc in result.external] == ["alpha", "mid", "zeta"]

    def test_conservation(self, go_project, module_name):
        per_file = sum(len(extract_imports(p)) for p in walk_source_files(go_project))
        internal, external = count_imports(go_project, module_name)
        assert sum(internal.values()) + sum(external.values()) == per_file
        assert run(go_project, module_name).total() == per_file

    def test_idempotent(self, go_project, module_name):
        assert run(go_project, module_name, max_workers=1) == run(go_project, module_name, max_workers=8)

    def test_range_exactly_two(self, go_project, module_name):
        result = run(go_project, module_name, gte=2, lte=2)
        assert result.internal == (PackageCount("github.com/acme/widget/sub", 2),)
        assert result.external == (PackageCount("os", 2),)

    def test_gte_only(self, go_project, module_name):
        result = run(go_project, module_name, gte=3)
        assert result.internal == ()
        assert result.external == (PackageCount("fmt", 3),)

    def test_exclude_pattern(self, go_project, module_name):
        result = run(go_project, module_name, exclude=r"cmd" + re.escape(os.sep))
        assert PackageCount("github.com/acme/widget/sub", 1) in result.internal
        assert all(pc.package != "github.com/acme/widget/util" for pc in result.internal)

    def test_empty_tree(self, tmp_path, module_name):
        assert run(tmp_path, module_name) == Result(internal=(), external=())

    def test_repeated_imports_in_one_file_each_count(self, tmp_path, module_name):
        write_go(tmp_path / "a.go", "fmt", "fmt")
        assert run(tmp_path, module_name).external == (PackageCount("fmt", 2),)


@pytest.mark.unit
class TestValidation:

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"gte": -1},
            {"lte": -1},
            {"gte": 3, "lte": 2},
            {"exclude": "("},
        ],
    )
    def test_rejected_before_any_work(self, tmp_path, module_name, kwargs):
        # the root does not exist: validation must fail first
        with pytest.raises(ValidationError):
            run(tmp_path / "missing", module_name, **kwargs)

    def test_empty_module_name(self, tmp_path):
        with pytest.raises(ValidationError):
            run(tmp_path, "")

    def test_lte_zero_is_allowed(self, go_project, module_name):
        assert run(go_project, module_name, lte=0).is_empty()


@pytest.mark.unit
class TestFailures:

    def test_unreadable_file_fails_the_run(self, go_project, module_name, monkeypatch):
        from pkgcount.parser.imports import ImportScanner

        real_extract = ImportScanner.extract

        def flaky(self, path):
            if str(path).endswith("util.go"):
                raise PermissionError(13, "Permission denied", str(path))
            return real_extract(self, path)

        monkeypatch.setattr(ImportScanner, "extract", flaky)
        with pytest.raises(AggregationError) as excinfo:
            run(go_project, module_name)
        assert isinstance(excinfo.value.__cause__, PermissionError)
        assert excinfo.value.path.endswith("util.go")

    def test_missing_root(self, tmp_path, module_name):
        with pytest.raises(FileNotFoundError):
            run(tmp_path / "missing", module_name)

    def test_cancelled_scope(self, go_project, module_name):
        scope = CancelScope()
        scope.cancel()
        with pytest.raises(RunCancelled):
            run(go_project, module_name, scope=scope)


@pytest.mark.unit
def test_select_counts_bounds_inclusive():
    counts = {"a": 1, "b": 2, "c": 3}
    assert select_counts(counts, 1, 3) == (PackageCount("c", 3), PackageCount("b", 2), PackageCount("a", 1))
    assert select_counts(counts, 2, None) == (PackageCount("c", 3), PackageCount("b", 2))


@pytest.mark.unit
def test_summarize_splits_sections():
    result = summarize({"m/x": 1}, {"fmt": 4})
    assert result.internal == (PackageCount("m/x", 1),)
    assert result.external == (PackageCount("fmt", 4),)


@pytest.mark.unit
class TestCountArgs:

    def test_validate_compiles_exclude(self):
        from pkgcount.orchestration import CountArgs

        args = CountArgs(exclude=r"_test\.go$", gte=1, lte=3)
        args.validate()
        assert args.exclude_regexp.search("a_test.go")

    def test_validate_rejects_bad_range(self):
        from pkgcount.orchestration import CountArgs

        with pytest.raises(ValidationError):
            CountArgs(gte=4, lte=1).validate()
