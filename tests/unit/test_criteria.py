"""
Tests for criteria parsing and plan building.
"""

import pytest

from popindex_core.domain.enums import Comparison, EntryKind, SortKey
from popindex_core.domain.models import SearchCriteria
from popindex_core.domain.query import (
    ExtensionEquals, KindIs, ModifiedSince, NameContains, PathPrefix, SizeCompare,
)
from popindex_core.errors import InvalidPatternError
from popindex_core.services.criteria import (
    build_plan, compile_name_pattern, parse_date_expression, parse_size_expression,
)


class TestParseSize:

    @pytest.mark.parametrize("expr,expected", [
        (">1048576", (Comparison.GT, 1048576)),
        (">1MB", (Comparison.GT, 1048576)),
        ("<1KB", (Comparison.LT, 1024)),
        ("<500kb", (Comparison.LT, 512000)),
        ("2GB", (Comparison.EQ, 2 * 1024 ** 3)),
        ("1.5KB", (Comparison.EQ, 1536)),
        ("0.3KB", (Comparison.EQ, 307)),
        ("  > 10 MB ", (Comparison.GT, 10 * 1024 ** 2)),
        ("1024", (Comparison.EQ, 1024)),
    ])
    def test_valid(self, expr, expected):
        assert parse_size_expression(expr) == expected

    @pytest.mark.parametrize("expr", ["", ">", "big", "10TB", "1MB-10MB", ">=5", "inf", "nanKB"])
    def test_invalid_gives_none(self, expr):
        assert parse_size_expression(expr) is None


class TestParseDate:

    def test_utc_midnight(self, utc_ts):
        assert parse_date_expression("2024-01-01") == 1704067200
        assert parse_date_expression("2023-06-15") == utc_ts("2023-06-15")

    @pytest.mark.parametrize("expr", [
        "2024-1-01", "24-01-01", "2024/01/01", "2024-13-01", "2023-02-29",
        "2024-01-01..2024-02-01", "2024-01-01T00:00", "", "yesterday",
        "２０２４-01-01", "2024-٠١-01",
    ])
    def test_invalid_gives_none(self, expr):
        assert parse_date_expression(expr) is None


class TestCompileNamePattern:

    def test_none_without_regex(self):
        assert compile_name_pattern(None) is None

    def test_case_insensitive_by_default(self):
        assert compile_name_pattern("^readme").search("README.md")
        assert not compile_name_pattern("^readme", case_sensitive=True).search("README.md")

    def test_invalid_pattern_raises(self):
        with pytest.raises(InvalidPatternError) as info:
            compile_name_pattern("([unclosed")
        assert info.value.pattern == "([unclosed"


class TestBuildPlan:

    def test_empty_criteria(self):
        plan = build_plan(SearchCriteria(), default_limit=1000)
        assert plan.predicates == ()
        assert plan.sort is None
        assert plan.limit == 1000

    def test_all_criteria_pushed_down(self):
        plan = build_plan(SearchCriteria(
            name="rep", extension=".PDF", path="/data/", kind="file",
            size=">1MB", modified_after="2024-01-01",
            sort="lmd", reverse=True, limit=5, case_sensitive=True,
        ))

        assert plan.predicates == (
            NameContains("rep", True),
            ExtensionEquals("pdf"),
            PathPrefix("/data/"),
            KindIs(EntryKind.FILE),
            SizeCompare(Comparison.GT, 1048576),
            ModifiedSince(1704067200),
        )
        assert plan.sort == SortKey.MODIFIED
        assert plan.descending is True
        assert plan.limit == 5

    def test_malformed_size_and_date_dropped_others_kept(self):
        plan = build_plan(SearchCriteria(extension="txt", size="huge", modified_after="last week"))
        assert plan.predicates == (ExtensionEquals("txt"),)

    def test_regex_is_not_pushed_down(self):
        plan = build_plan(SearchCriteria(regex="^a"))
        assert plan.predicates == ()

    def test_undecodable_text_replaced_like_indexed_paths(self):
        plan = build_plan(SearchCriteria(name="bad\udcff", path="/r/\udcff", extension="\udcff"))
        assert plan.predicates == (
            NameContains("bad\ufffd"),
            ExtensionEquals("\ufffd"),
            PathPrefix("/r/\ufffd"),
        )


class TestSearchCriteria:

    def test_rejects_unknown_kind(self):
        with pytest.raises(ValueError):
            SearchCriteria(kind="socket")

    def test_rejects_negative_limit(self):
        with pytest.raises(ValueError):
            SearchCriteria(limit=-1)
