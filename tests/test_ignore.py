"""Tests for case-ignore parsing and matching."""

import pytest

from zhlint.ignore import (
    IgnoredCase,
    IgnoredRange,
    find_ignored_ranges,
    is_ignored,
    parse_ignored_case,
)


class TestParseIgnoredCase:
    def test_start_only(self) -> None:
        assert parse_ignored_case("test") == IgnoredCase("test")

    def test_start_and_end(self) -> None:
        assert parse_ignored_case("[, ]") == IgnoredCase("[", text_end="]")

    def test_prefix_and_suffix(self) -> None:
        case = parse_ignored_case("vue-,test,-ing")
        assert case == IgnoredCase("test", prefix="vue", suffix="ing")

    @pytest.mark.parametrize("value", ["", "a,b,c", "pre-,", ",-suf"])
    def test_malformed(self, value: str) -> None:
        assert parse_ignored_case(value) is None


class TestFindIgnoredRanges:
    def test_prefix_anchors_but_is_excluded(self) -> None:
        text = "vuetest and test"
        ranges = find_ignored_ranges(text, [IgnoredCase("test", prefix="vue")])
        assert ranges == [IgnoredRange(3, 7)]

    def test_start_to_end(self) -> None:
        text = "x [a] y [b]"
        ranges = find_ignored_ranges(text, [IgnoredCase("[", text_end="]")])
        assert ranges == [IgnoredRange(2, 5), IgnoredRange(8, 11)]

    def test_suffix_must_follow(self) -> None:
        text = "testing tested"
        ranges = find_ignored_ranges(text, [IgnoredCase("test", suffix="ing")])
        assert ranges == [IgnoredRange(0, 4)]

    def test_missing_end_stops(self) -> None:
        text = "[open"
        assert find_ignored_ranges(text, [IgnoredCase("[", text_end="]")]) == []

    def test_ranges_sorted_across_cases(self) -> None:
        text = "b a"
        ranges = find_ignored_ranges(text, [IgnoredCase("a"), IgnoredCase("b")])
        assert ranges == [IgnoredRange(0, 1), IgnoredRange(2, 3)]


class TestIsIgnored:
    def test_covered(self) -> None:
        ranges = [IgnoredRange(2, 6)]
        assert is_ignored(ranges, 2, 6)
        assert is_ignored(ranges, 3, 4)

    def test_partially_covered(self) -> None:
        ranges = [IgnoredRange(2, 6)]
        assert not is_ignored(ranges, 1, 3)
        assert not is_ignored(ranges, 5, 7)
        assert not is_ignored([], 0, 1)
