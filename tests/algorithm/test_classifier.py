"""Tests for classify() and is_in_order()."""

from __future__ import annotations

import numpy as np
import pytest

from correspondence_diff.algorithm import CandidateGraph, ContainmentMode, classify, is_in_order


def graph_of(*rows: str) -> CandidateGraph:
    """Build a graph from rows of ``'1'``/``'0'`` characters, one per actual element."""
    if not rows:
        return CandidateGraph(edges=np.zeros((0, 0), dtype=np.bool_))
    return CandidateGraph(edges=np.array([[c == "1" for c in row] for row in rows]))


class TestClassifyAnyNone:
    def test_any(self) -> None:
        assert classify(graph_of("00", "01"), ContainmentMode.ANY).passed
        assert not classify(graph_of("00", "00"), ContainmentMode.ANY).passed

    def test_none(self) -> None:
        assert classify(graph_of("00", "00"), ContainmentMode.NONE).passed
        assert not classify(graph_of("00", "10"), ContainmentMode.NONE).passed


class TestClassifyExactly:
    def test_perfect_matching_passes(self) -> None:
        result = classify(graph_of("01", "10"), ContainmentMode.EXACTLY)
        assert result.passed
        assert result.matching == {0: 1, 1: 0}
        assert result.missing == ()
        assert result.unexpected == ()

    def test_empty_passes(self) -> None:
        assert classify(graph_of(), ContainmentMode.EXACTLY).passed

    def test_candidate_level_failure(self) -> None:
        result = classify(graph_of("100", "000", "100"), ContainmentMode.EXACTLY)
        assert not result.passed
        assert not result.one_to_one_failure
        assert result.missing == (1, 2)
        assert result.unexpected == (1,)
        assert result.matching == {}

    def test_actual_orphan_alone_fails(self) -> None:
        result = classify(graph_of("10", "01", "00"), ContainmentMode.EXACTLY)
        assert not result.passed
        assert result.missing == ()
        assert result.unexpected == (2,)

    def test_one_to_one_failure(self) -> None:
        # [25, 55, 65] against [30, 30, 60] within 10
        result = classify(graph_of("110", "001", "001"), ContainmentMode.EXACTLY)
        assert not result.passed
        assert result.one_to_one_failure
        assert len(result.missing) == 1
        assert result.missing[0] in (0, 1)
        assert len(result.unexpected) == 1
        assert result.unexpected[0] in (1, 2)


class TestClassifyAtLeast:
    def test_extra_actual_elements_allowed(self) -> None:
        result = classify(graph_of("000", "100", "010", "001"), ContainmentMode.AT_LEAST)
        assert result.passed

    def test_missing_candidate(self) -> None:
        result = classify(graph_of("10", "00"), ContainmentMode.AT_LEAST)
        assert not result.passed
        assert result.missing == (1,)
        assert not result.one_to_one_failure

    def test_one_to_one_failure(self) -> None:
        result = classify(graph_of("11", "00"), ContainmentMode.AT_LEAST)
        assert result.one_to_one_failure
        assert len(result.missing) == 1


class TestIsInOrder:
    def test_exactly_requires_diagonal(self) -> None:
        assert is_in_order(graph_of("10", "01"), ContainmentMode.EXACTLY)
        assert is_in_order(graph_of("11", "11"), ContainmentMode.EXACTLY)
        assert not is_in_order(graph_of("01", "10"), ContainmentMode.EXACTLY)

    def test_exactly_requires_equal_sizes(self) -> None:
        assert not is_in_order(graph_of("10", "01", "00"), ContainmentMode.EXACTLY)

    def test_at_least_subsequence(self) -> None:
        assert is_in_order(graph_of("00", "10", "00", "01"), ContainmentMode.AT_LEAST)
        assert not is_in_order(graph_of("01", "10"), ContainmentMode.AT_LEAST)

    def test_at_least_earliest_assignment(self) -> None:
        # expected[0] fits actual 0 and 2, expected[1] only actual 1
        assert is_in_order(graph_of("10", "01", "10"), ContainmentMode.AT_LEAST)
        assert is_in_order(graph_of("11", "01"), ContainmentMode.AT_LEAST)
        assert not is_in_order(graph_of("01", "01", "10"), ContainmentMode.AT_LEAST)

    def test_other_modes_rejected(self) -> None:
        with pytest.raises(ValueError, match="order"):
            is_in_order(graph_of("1"), ContainmentMode.ANY)
