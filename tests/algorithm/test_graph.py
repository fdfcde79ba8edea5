"""Tests for CandidateGraph and CandidateGraphBuilder."""

from __future__ import annotations

import numpy as np
import pytest

from correspondence_diff import Correspondence, IncompatibleTypeError
from correspondence_diff.algorithm import CandidateGraph, CandidateGraphBuilder
from correspondence_diff.exception_store import ExceptionStore

LOWERS_TO = Correspondence.from_predicate(lambda a, e: a.lower() == e, "lowers to")


class TestCandidateGraph:
    def test_degree_queries(self) -> None:
        graph = CandidateGraph(edges=np.array([[True, False, False], [True, False, False]]))
        assert graph.num_actual == 2
        assert graph.num_expected == 3
        assert graph.edge_count == 2
        assert graph.has_edge(1, 0)
        assert not graph.has_edge(1, 2)
        assert graph.has_any_edge()
        assert graph.expected_without_candidates() == [1, 2]
        assert graph.actual_without_candidates() == []
        assert graph.adjacency() == {0: [0], 1: [0]}

    def test_empty(self) -> None:
        graph = CandidateGraph(edges=np.zeros((0, 2), dtype=np.bool_))
        assert not graph.has_any_edge()
        assert graph.adjacency() == {}
        assert graph.expected_without_candidates() == [0, 1]

    def test_edges_are_read_only(self) -> None:
        graph = CandidateGraph(edges=np.ones((1, 1), dtype=np.bool_))
        with pytest.raises(ValueError):
            graph.edges[0, 0] = False

    @pytest.mark.parametrize(
        "edges", [np.ones((2, 2), dtype=np.int64), np.ones(3, dtype=np.bool_)]
    )
    def test_rejects_non_boolean_matrix(self, edges: np.ndarray) -> None:
        with pytest.raises(ValueError, match="2-D boolean"):
            CandidateGraph(edges=edges)


class TestCandidateGraphBuilder:
    def test_builds_every_pair(self) -> None:
        graph = CandidateGraphBuilder(Correspondence.tolerance(10), ExceptionStore()).build(
            [25, 55, 65], [30, 30, 60]
        )
        assert graph.adjacency() == {0: [0, 1], 1: [2], 2: [2]}

    def test_failed_comparisons_are_not_edges(self) -> None:
        store = ExceptionStore()
        graph = CandidateGraphBuilder(LOWERS_TO, store).build(["A", None, 3], ["a", "b"])
        assert graph.adjacency() == {0: [0], 1: [], 2: []}
        assert sorted(graph.failures) == [(1, 0), (1, 1), (2, 0), (2, 1)]
        first = store.first_compare_exception
        assert first is not None
        assert first.arguments == (None, "a")

    def test_incompatible_type_aborts(self) -> None:
        builder = CandidateGraphBuilder(Correspondence.tolerance(1), ExceptionStore())
        with pytest.raises(IncompatibleTypeError):
            builder.build([1, "2"], [1])

    def test_none_elements_pass_type_check(self) -> None:
        builder = CandidateGraphBuilder(Correspondence.tolerance(1), ExceptionStore())
        graph = builder.build([None], [1.0])
        assert not graph.has_any_edge()
        assert (0, 0) in graph.failures
