"""algorithm subpackage: public API for the collection-matching engine.

Provides the bipartite matcher, the candidate-graph builder, the match
classifier and their configuration.  Import from this module (not from
sub-modules directly) to stay on the stable public interface.

Example::

    from correspondence_diff import Correspondence
    from correspondence_diff.algorithm import (
        CandidateGraphBuilder,
        ContainmentMode,
        classify,
    )
    from correspondence_diff.exception_store import ExceptionStore

    builder = CandidateGraphBuilder(Correspondence.tolerance(10), ExceptionStore())
    graph = builder.build([25, 55, 65], [30, 30, 60])
    result = classify(graph, ContainmentMode.EXACTLY)
    result.one_to_one_failure   # True: 55 and 65 both only fit 60
"""

from __future__ import annotations

from correspondence_diff.algorithm.classifier import MatchResult, classify, is_in_order
from correspondence_diff.algorithm.config import ContainmentMode, MatchConfig
from correspondence_diff.algorithm.graph import CandidateGraph, CandidateGraphBuilder
from correspondence_diff.algorithm.matcher import maximum_cardinality_matching

__all__ = [
    "CandidateGraph",
    "CandidateGraphBuilder",
    "ContainmentMode",
    "MatchConfig",
    "MatchResult",
    "classify",
    "is_in_order",
    "maximum_cardinality_matching",
]
