"""MatchClassifier: interprets a candidate graph for a containment mode.

``classify`` turns a ``CandidateGraph`` into a ``MatchResult``.  For the
at-least and exactly modes it first looks for *candidate-level* failures
(an element with no candidate at all) and only then runs the maximum
matching, so that a failure can be reported either as "these elements have
no counterpart" or as "every element has a counterpart, but there is no
1:1 mapping".

``is_in_order`` is the post-hoc order refinement applied to a passing
at-least or exactly result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from correspondence_diff.algorithm.config import ContainmentMode
from correspondence_diff.algorithm.matcher import maximum_cardinality_matching

if TYPE_CHECKING:
    from collections.abc import Mapping

    from correspondence_diff.algorithm.graph import CandidateGraph

__all__ = ["MatchResult", "classify", "is_in_order"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Classification of one candidate graph.

    Attributes:
        mode: The containment mode that was classified.
        passed: Whether the graph satisfies the mode.
        matching: A maximum matching, actual position to expected position.
            Empty when the matching was not needed to decide.
        missing: Expected positions left unmatched, ascending.
        unexpected: Actual positions left unmatched, ascending.  For a
            candidate-level failure these are the actual positions with no
            candidate at all.
        one_to_one_failure: True when every element had at least one
            candidate, but no 1:1 mapping covers them.
    """

    mode: ContainmentMode
    passed: bool
    matching: Mapping[int, int] = field(default_factory=dict)
    missing: tuple[int, ...] = ()
    unexpected: tuple[int, ...] = ()
    one_to_one_failure: bool = False


def classify(graph: CandidateGraph, mode: ContainmentMode) -> MatchResult:
    """Decide whether ``graph`` satisfies ``mode``.

    Args:
        graph: The candidate graph of the assertion.
        mode:  Containment mode to check.  ``ANY`` passes on any edge and
            ``NONE`` on no edge at all.

    Returns:
        A ``MatchResult``.
    """
    if mode is ContainmentMode.ANY:
        return MatchResult(mode=mode, passed=graph.has_any_edge())
    if mode is ContainmentMode.NONE:
        return MatchResult(mode=mode, passed=not graph.has_any_edge())

    exactly = mode is ContainmentMode.EXACTLY
    expected_orphans = graph.expected_without_candidates()
    actual_orphans = graph.actual_without_candidates()
    if expected_orphans or (exactly and actual_orphans):
        logger.debug(
            "%s: %d expected and %d actual positions without candidates",
            mode,
            len(expected_orphans),
            len(actual_orphans),
        )
        return MatchResult(
            mode=mode,
            passed=False,
            missing=tuple(expected_orphans),
            unexpected=tuple(actual_orphans),
        )

    matching = maximum_cardinality_matching(graph.adjacency())
    matched_expected = set(matching.values())
    missing = tuple(
        j for j in range(graph.num_expected) if j not in matched_expected
    )
    unexpected = tuple(i for i in range(graph.num_actual) if i not in matching)
    passed = not missing and (not exactly or not unexpected)
    return MatchResult(
        mode=mode,
        passed=passed,
        matching=matching,
        missing=missing if not passed else (),
        unexpected=unexpected if not passed else (),
        one_to_one_failure=not passed,
    )


def is_in_order(graph: CandidateGraph, mode: ContainmentMode) -> bool:
    """Whether the expected positions map to strictly increasing actual positions.

    For ``EXACTLY`` this means position ``i`` corresponds to position ``i``
    throughout.  For ``AT_LEAST`` each expected element is assigned the
    earliest corresponding actual position after the previous assignment,
    which finds an order-preserving assignment whenever one exists.
    """
    if mode is ContainmentMode.EXACTLY:
        if graph.num_actual != graph.num_expected:
            return False
        return bool(graph.edges.diagonal().all())
    if mode is not ContainmentMode.AT_LEAST:
        msg = f"order is only defined for AT_LEAST and EXACTLY, got {mode}"
        raise ValueError(msg)
    position = 0
    for j in range(graph.num_expected):
        while position < graph.num_actual and not graph.edges[position, j]:
            position += 1
        if position == graph.num_actual:
            return False
        position += 1
    return True
