"""CandidateGraphBuilder: evaluates the correspondence for every position pair.

The candidate graph of an assertion has one row per actual position and one
column per expected position.  Cell ``(i, j)`` is an edge when
``compare(actual[i], expected[j])`` returned True.  Pairs whose comparison
raised are not edges; their exceptions are kept per pair.  The assertion's
``ExceptionStore`` keeps the first exception it is given, so a failure seen
by an earlier in-order pass over the same elements takes precedence over
the graph's own failures, which are offered in row-major order.

The graph is stored as an ``(n, m)`` boolean numpy matrix so that
per-position degree questions ("which expected elements have no candidate
at all?") are single vectorised reductions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from correspondence_diff.correspondence import Correspondence
    from correspondence_diff.exception_store import ExceptionStore

__all__ = ["CandidateGraph", "CandidateGraphBuilder"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class CandidateGraph:
    """Immutable bipartite graph between actual and expected positions.

    Attributes:
        edges: Boolean matrix of shape ``(len(actual), len(expected))``.
        failures: Exceptions raised by ``compare``, keyed by
            ``(actual_position, expected_position)``.
    """

    edges: np.ndarray
    failures: Mapping[tuple[int, int], Exception] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.edges.ndim != 2 or self.edges.dtype != np.bool_:
            msg = f"edges must be a 2-D boolean matrix, got {self.edges.dtype} with shape {self.edges.shape}"
            raise ValueError(msg)
        self.edges.setflags(write=False)

    @property
    def num_actual(self) -> int:
        return int(self.edges.shape[0])

    @property
    def num_expected(self) -> int:
        return int(self.edges.shape[1])

    @property
    def edge_count(self) -> int:
        return int(self.edges.sum())

    def has_edge(self, actual_position: int, expected_position: int) -> bool:
        return bool(self.edges[actual_position, expected_position])

    def has_any_edge(self) -> bool:
        return bool(self.edges.any())

    def adjacency(self) -> dict[int, list[int]]:
        """Map every actual position to its candidate expected positions."""
        return {
            i: np.flatnonzero(row).tolist() for i, row in enumerate(self.edges)
        }

    def expected_without_candidates(self) -> list[int]:
        return np.flatnonzero(~self.edges.any(axis=0)).tolist()

    def actual_without_candidates(self) -> list[int]:
        return np.flatnonzero(~self.edges.any(axis=1)).tolist()


class CandidateGraphBuilder:
    """Builds the ``CandidateGraph`` of one assertion.

    Example::

        from correspondence_diff import Correspondence
        from correspondence_diff.algorithm.graph import CandidateGraphBuilder
        from correspondence_diff.exception_store import ExceptionStore

        builder = CandidateGraphBuilder(Correspondence.tolerance(10), ExceptionStore())
        graph = builder.build([25, 55, 65], [30, 30, 60])
        graph.adjacency()   # {0: [0, 1], 1: [2], 2: [2]}
    """

    def __init__(
        self, correspondence: Correspondence[Any, Any], exceptions: ExceptionStore
    ) -> None:
        self._correspondence = correspondence
        self._exceptions = exceptions

    def build(self, actual: Sequence[Any], expected: Sequence[Any]) -> CandidateGraph:
        """Compare every (actual, expected) pair once.

        Raises:
            IncompatibleTypeError: As soon as a pair involves an element type
                the correspondence does not accept.
        """
        edges = np.zeros((len(actual), len(expected)), dtype=np.bool_)
        failures: dict[tuple[int, int], Exception] = {}
        for i, actual_element in enumerate(actual):
            for j, expected_element in enumerate(expected):
                outcome = self._correspondence.evaluate(
                    actual_element, expected_element
                )
                if outcome.matched:
                    edges[i, j] = True
                elif outcome.error is not None:
                    failures[(i, j)] = outcome.error
                    self._exceptions.add_compare_exception(
                        outcome.error, actual_element, expected_element
                    )
        graph = CandidateGraph(edges=edges, failures=failures)
        logger.debug(
            "candidate graph: %d actual x %d expected, %d edges, %d failed comparisons",
            graph.num_actual,
            graph.num_expected,
            graph.edge_count,
            len(failures),
        )
        return graph
