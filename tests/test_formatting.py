"""Tests for element rendering and duplicate grouping."""

from __future__ import annotations

from collections import OrderedDict

import pytest

from correspondence_diff.formatting import (
    EMPTY_STRING,
    count_duplicates,
    count_duplicates_and_add_type_info,
    distinct,
    group_duplicates,
    has_matching_to_string_pair,
    render,
    render_iterable,
)


class Opaque:
    def __str__(self) -> str:
        return "opaque"


class TestRender:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "None"),
            ("", EMPTY_STRING),
            ("abc", "abc"),
            (3, "3"),
            ([1, "a", None], "[1, a, None]"),
            ((), "[]"),
            ({"a": 1}, "{a: 1}"),
            (Opaque(), "opaque"),
        ],
    )
    def test_render(self, value: object, expected: str) -> None:
        assert render(value) == expected

    def test_nested(self) -> None:
        assert render([[1, 2], OrderedDict(b=[None])]) == "[[1, 2], {b: [None]}]"

    def test_render_iterable_accepts_generators(self) -> None:
        assert render_iterable(x for x in "ab") == "[a, b]"


class TestGrouping:
    def test_group_duplicates_preserves_first_occurrence(self) -> None:
        assert group_duplicates([128, 256, 128, 64]) == [(128, 2), (256, 1), (64, 1)]

    def test_unhashable_elements(self) -> None:
        assert group_duplicates([[1], [1], [2]]) == [([1], 2), ([2], 1)]

    def test_same_value_different_type_is_not_grouped(self) -> None:
        assert group_duplicates([1, 1.0, True]) == [(1, 1), (1.0, 1), (True, 1)]

    def test_distinct(self) -> None:
        assert distinct([64, 64, None, None, 1]) == [64, None, 1]

    def test_count_duplicates(self) -> None:
        assert count_duplicates([128, 256, 128]) == "128 [2 copies], 256"
        assert count_duplicates([]) == ""


class TestTypeInfo:
    def test_homogeneous_group_gets_single_suffix(self) -> None:
        assert count_duplicates_and_add_type_info(["2", "3", "3"]) == "2, 3 [2 copies] (str)"

    def test_mixed_group_is_annotated_per_element(self) -> None:
        assert count_duplicates_and_add_type_info([1, "1", "1"]) == "1 (int), 1 (str) [2 copies]"

    def test_non_builtin_types_are_qualified(self) -> None:
        assert count_duplicates_and_add_type_info([Opaque()]) == (
            f"opaque ({__name__}.Opaque)"
        )

    def test_matching_to_string_pair(self) -> None:
        assert has_matching_to_string_pair([1, 2], ["2"])
        assert not has_matching_to_string_pair([1, 2], [2])
        assert not has_matching_to_string_pair([1], [])
