"""ElementsComparator: orchestrator that wires Correspondence + CandidateGraphBuilder
+ matcher + classifier + FailureDescriber.

This is the central wiring layer between the raw matching engine and the
public API.  Every assertion method materialises its inputs once, creates a
fresh ``ExceptionStore``, decides the verdict and, on failure, assembles the
ordered facts.

Architecture:
- ``contains_at_least_elements_in`` and ``contains_exactly_elements_in``
  first try a linear in-order pass.  A clean pass decides the assertion
  (and its ``in_order()`` refinement) without building the candidate graph.
- Otherwise the full candidate graph is built and classified.  Failures
  without a candidate are reported before 1:1 failures, which are reported
  before failures caused only by exceptions.
- An assertion that recorded a compare exception never passes.
- The single-element and contains-any/none methods stop comparing as soon
  as the outcome is known, in the order a reader would expect: actual
  elements for ``contains``, expected elements then actual elements for
  ``contains_any_in``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

import numpy as np

from correspondence_diff.algorithm.classifier import classify, is_in_order
from correspondence_diff.algorithm.config import ContainmentMode, MatchConfig
from correspondence_diff.algorithm.graph import CandidateGraph, CandidateGraphBuilder
from correspondence_diff.correspondence import Correspondence
from correspondence_diff.diagnostics import (
    MOST_COMPLETE_MAPPING,
    NO_ONE_TO_ONE_AT_LEAST,
    NO_ONE_TO_ONE_EXACTLY,
    FailureDescriber,
)
from correspondence_diff.exception_store import ExceptionStore
from correspondence_diff.facts import Fact, fact, simple_fact
from correspondence_diff.formatting import distinct
from correspondence_diff.pairing import Pairer
from correspondence_diff.result import Ordered, Verdict

if TYPE_CHECKING:
    from collections.abc import Sequence

    from correspondence_diff.protocols import KeyFunction

__all__ = ["ElementsComparator"]

logger = logging.getLogger(__name__)


def _materialize(values: Iterable[Any]) -> tuple[tuple[Any, ...], Iterable[Any] | None]:
    """Snapshot ``values``; keep the original only if it can be iterated again."""
    snapshot = tuple(values)
    source = None if isinstance(values, Iterator) else values
    return snapshot, source


def _require_elements(values: Iterable[Any] | None, name: str) -> tuple[Any, ...]:
    if values is None:
        msg = f"{name} must be an iterable of elements, got None"
        raise ValueError(msg)
    return tuple(values)


def _same_element(before: Any, after: Any) -> bool:
    """Whether a re-iterated element still equals its snapshot.

    Arrays compare by shape and content.  An equality that cannot be reduced
    to a single bool counts as a change.
    """
    if before is after:
        return True
    if isinstance(before, np.ndarray) or isinstance(after, np.ndarray):
        return type(before) is type(after) and bool(np.array_equal(before, after))
    try:
        result = before == after
        return isinstance(result, (bool, np.bool_)) and bool(result)
    except ValueError:
        logger.debug("element equality is ambiguous, treating actual as modified")
        return False


def _unchanged(snapshot: Sequence[Any], current: Sequence[Any]) -> bool:
    if len(snapshot) != len(current):
        return False
    return all(
        _same_element(before, after)
        for before, after in zip(snapshot, current, strict=True)
    )


class ElementsComparator:
    """Orchestrator for correspondence-based collection assertions.

    Every method takes the actual collection as its first argument and
    returns a ``Verdict`` (or an ``Ordered`` verdict); nothing is raised for
    an ordinary failure.  Instances are immutable and hold no per-call
    state, so one comparator can serve any number of assertions.

    Example::

        from correspondence_diff import Correspondence, ElementsComparator

        within_10 = Correspondence.from_predicate(
            lambda a, e: abs(a - e) <= 10, "is within 10 of"
        )
        cmp = ElementsComparator(within_10)
        verdict = cmp.contains_exactly_elements_in([101, 65, 35, 190], [30, 60, 90])
        verdict.passed      # False
        print(verdict.verdict.message)
        # missing (1)    : 90
        # unexpected (2) : [101, 190]
        # ---
        # expected       : [30, 60, 90]
        # testing whether: actual element is within 10 of expected element
        # but was        : [101, 65, 35, 190]
    """

    def __init__(
        self,
        correspondence: Correspondence[Any, Any] | None = None,
        config: MatchConfig | None = None,
        pairer: Pairer | None = None,
    ) -> None:
        """Initialise the comparator.

        Args:
            correspondence: The element relation.  Defaults to
                ``Correspondence.equality()`` when None.
            config: Assertion parameters.  Defaults to ``MatchConfig()``.
                Only ``compare`` reads ``mode`` and ``in_order``; the
                dedicated methods always check their own relation.
            pairer: Optional key-based pairing for failure messages.
        """
        self._correspondence: Correspondence[Any, Any] = (
            correspondence if correspondence is not None else Correspondence.equality()
        )
        self._config: MatchConfig = config if config is not None else MatchConfig()
        self._pairer = pairer

    @property
    def correspondence(self) -> Correspondence[Any, Any]:
        return self._correspondence

    @property
    def config(self) -> MatchConfig:
        return self._config

    def displaying_diffs_paired_by(
        self,
        key_function: KeyFunction,
        expected_key_function: KeyFunction | None = None,
    ) -> ElementsComparator:
        """Return a comparator that pairs failure output by key.

        With one function, it keys both actual and expected elements.  With
        two, the first keys actual elements and the second expected ones.
        """
        return ElementsComparator(
            self._correspondence,
            self._config,
            Pairer(key_function, expected_key_function),
        )

    # ------------------------------------------------------------------
    # Config-driven entry point
    # ------------------------------------------------------------------

    def compare(self, actual: Iterable[Any], expected: Iterable[Any]) -> Verdict:
        """Check ``actual`` against ``expected`` using ``config.mode``.

        ``config.in_order`` applies the order refinement for the at-least
        and exactly modes.
        """
        mode = self._config.mode
        if mode is ContainmentMode.ANY:
            return self.contains_any_in(actual, expected)
        if mode is ContainmentMode.NONE:
            return self.contains_none_in(actual, expected)
        if mode is ContainmentMode.AT_LEAST:
            ordered = self.contains_at_least_elements_in(actual, expected)
        else:
            ordered = self.contains_exactly_elements_in(actual, expected)
        return ordered.in_order() if self._config.in_order else ordered.verdict

    # ------------------------------------------------------------------
    # Single-element assertions
    # ------------------------------------------------------------------

    def contains(self, actual: Iterable[Any], expected: Any) -> Verdict:
        """Some actual element corresponds to ``expected``."""
        snapshot = tuple(actual)
        exceptions = self._new_exception_store()
        for element in snapshot:
            if self._correspondence.safe_compare(element, expected, exceptions):
                if exceptions.has_compare_exception():
                    return Verdict.failure(
                        [
                            *exceptions.describe_as_main_cause(),
                            fact("expected to contain", expected),
                            *self._testing_whether(),
                            fact("found match (but failing because of exception)", element),
                            fact("full contents", snapshot),
                        ]
                    )
                return Verdict.success()

        describer = self._describer(exceptions)
        key_matches = describer.describe_key_matches(expected, snapshot)
        if key_matches:
            return Verdict.failure(
                [
                    fact("expected to contain", expected),
                    *self._testing_whether(),
                    *key_matches,
                    fact("full contents", snapshot),
                    *exceptions.describe_as_additional_info(),
                ]
            )
        return Verdict.failure(
            [
                fact("expected to contain", expected),
                *self._testing_whether(),
                fact("but was", snapshot),
                *exceptions.describe_as_additional_info(),
            ]
        )

    def does_not_contain(self, actual: Iterable[Any], excluded: Any) -> Verdict:
        """No actual element corresponds to ``excluded``."""
        snapshot = tuple(actual)
        exceptions = self._new_exception_store()
        matching = [
            element
            for element in snapshot
            if self._correspondence.safe_compare(element, excluded, exceptions)
        ]
        if matching:
            return Verdict.failure(
                [
                    fact("expected not to contain", excluded),
                    *self._testing_whether(),
                    fact("but contained", matching),
                    fact("full contents", snapshot),
                    *exceptions.describe_as_additional_info(),
                ]
            )
        if exceptions.has_compare_exception():
            return Verdict.failure(
                [
                    *exceptions.describe_as_main_cause(),
                    fact("expected not to contain", excluded),
                    *self._testing_whether(),
                    simple_fact("found no match (but failing because of exception)"),
                    fact("full contents", snapshot),
                ]
            )
        return Verdict.success()

    # ------------------------------------------------------------------
    # Any / none
    # ------------------------------------------------------------------

    def contains_any_in(self, actual: Iterable[Any], expected: Iterable[Any]) -> Verdict:
        """At least one actual element corresponds to some expected element."""
        snapshot = tuple(actual)
        expected = _require_elements(expected, "expected")
        exceptions = self._new_exception_store()
        for expected_element in expected:
            for element in snapshot:
                if self._correspondence.safe_compare(
                    element, expected_element, exceptions
                ):
                    if exceptions.has_compare_exception():
                        return Verdict.failure(
                            [
                                *exceptions.describe_as_main_cause(),
                                fact("expected to contain any of", expected),
                                *self._testing_whether(),
                                fact(
                                    "found match (but failing because of exception)",
                                    element,
                                ),
                                fact("full contents", snapshot),
                            ]
                        )
                    return Verdict.success()

        describer = self._describer(exceptions)
        return Verdict.failure(
            [
                fact("expected to contain any of", expected),
                *self._testing_whether(),
                fact("but was", snapshot),
                *describer.describe_any_matches_by_key(expected, snapshot),
                *exceptions.describe_as_additional_info(),
            ]
        )

    def contains_any_of(self, actual: Iterable[Any], *expected: Any) -> Verdict:
        return self.contains_any_in(actual, expected)

    def contains_none_in(self, actual: Iterable[Any], excluded: Iterable[Any]) -> Verdict:
        """No actual element corresponds to any excluded element."""
        snapshot = tuple(actual)
        excluded = _require_elements(excluded, "excluded")
        exceptions = self._new_exception_store()
        present: list[tuple[Any, list[Any]]] = []
        for excluded_element in distinct(excluded):
            matching = [
                element
                for element in snapshot
                if self._correspondence.safe_compare(
                    element, excluded_element, exceptions
                )
            ]
            if matching:
                present.append((excluded_element, matching))

        if present:
            facts: list[Fact] = [
                fact("expected not to contain any of", excluded),
                *self._testing_whether(),
            ]
            for excluded_element, matching in present:
                facts.append(fact("but contained", matching))
                facts.append(fact("corresponding to", excluded_element))
                facts.append(simple_fact("---"))
            facts.append(fact("full contents", snapshot))
            facts.extend(exceptions.describe_as_additional_info())
            return Verdict.failure(facts)
        if exceptions.has_compare_exception():
            return Verdict.failure(
                [
                    *exceptions.describe_as_main_cause(),
                    fact("expected not to contain any of", excluded),
                    *self._testing_whether(),
                    simple_fact("found no matches (but failing because of exception)"),
                    fact("full contents", snapshot),
                ]
            )
        return Verdict.success()

    def contains_none_of(self, actual: Iterable[Any], *excluded: Any) -> Verdict:
        return self.contains_none_in(actual, excluded)

    # ------------------------------------------------------------------
    # At least / exactly
    # ------------------------------------------------------------------

    def contains_at_least_elements_in(
        self, actual: Iterable[Any], expected: Iterable[Any]
    ) -> Ordered:
        """Every expected element is matched by a distinct actual element."""
        snapshot, source = _materialize(actual)
        expected = _require_elements(expected, "expected")
        exceptions = self._new_exception_store()
        logger.debug(
            "contains at least: %d actual, %d expected", len(snapshot), len(expected)
        )
        if self._correspond_in_order_at_least(snapshot, expected, exceptions):
            return self._ordered(
                Verdict.success(), ContainmentMode.AT_LEAST, snapshot, source, expected, None
            )

        graph = CandidateGraphBuilder(self._correspondence, exceptions).build(
            snapshot, expected
        )
        result = classify(graph, ContainmentMode.AT_LEAST)
        if not result.passed:
            describer = self._describer(exceptions)
            facts: list[Fact] = []
            if result.one_to_one_failure:
                facts.append(simple_fact(NO_ONE_TO_ONE_AT_LEAST))
                facts.append(simple_fact(MOST_COMPLETE_MAPPING))
            facts.extend(
                describer.describe_missing(
                    [expected[j] for j in result.missing],
                    [snapshot[i] for i in result.unexpected],
                )
            )
            facts.append(fact("expected to contain at least", expected))
            facts.extend(self._testing_whether())
            facts.append(fact("but was", snapshot))
            facts.extend(exceptions.describe_as_additional_info())
            return self._failed(Verdict.failure(facts))
        if exceptions.has_compare_exception():
            return self._failed(
                Verdict.failure(
                    [
                        *exceptions.describe_as_main_cause(),
                        fact("expected to contain at least", expected),
                        *self._testing_whether(),
                        simple_fact(
                            "found all expected elements (but failing because of exception)"
                        ),
                        fact("full contents", snapshot),
                    ]
                )
            )
        return self._ordered(
            Verdict.success(), ContainmentMode.AT_LEAST, snapshot, source, expected, graph
        )

    def contains_at_least(self, actual: Iterable[Any], *expected: Any) -> Ordered:
        return self.contains_at_least_elements_in(actual, expected)

    def contains_exactly_elements_in(
        self, actual: Iterable[Any], expected: Iterable[Any]
    ) -> Ordered:
        """Actual and expected elements correspond 1:1."""
        snapshot, source = _materialize(actual)
        expected = _require_elements(expected, "expected")
        exceptions = self._new_exception_store()
        logger.debug(
            "contains exactly: %d actual, %d expected", len(snapshot), len(expected)
        )
        if not expected:
            if snapshot:
                return self._failed(
                    Verdict.failure(
                        [simple_fact("expected to be empty"), fact("but was", snapshot)]
                    )
                )
            return self._ordered(
                Verdict.success(), ContainmentMode.EXACTLY, snapshot, source, expected, None
            )
        if self._correspond_in_order_exactly(snapshot, expected, exceptions):
            return self._ordered(
                Verdict.success(), ContainmentMode.EXACTLY, snapshot, source, expected, None
            )

        graph = CandidateGraphBuilder(self._correspondence, exceptions).build(
            snapshot, expected
        )
        result = classify(graph, ContainmentMode.EXACTLY)
        if not result.passed:
            describer = self._describer(exceptions)
            facts: list[Fact] = []
            if result.one_to_one_failure:
                facts.append(simple_fact(NO_ONE_TO_ONE_EXACTLY))
                facts.append(simple_fact(MOST_COMPLETE_MAPPING))
            facts.extend(
                describer.describe_missing_or_extra(
                    [expected[j] for j in result.missing],
                    [snapshot[i] for i in result.unexpected],
                )
            )
            facts.append(fact("expected", expected))
            facts.extend(self._testing_whether())
            facts.append(fact("but was", snapshot))
            facts.extend(exceptions.describe_as_additional_info())
            return self._failed(Verdict.failure(facts))
        if exceptions.has_compare_exception():
            return self._failed(
                Verdict.failure(
                    [
                        *exceptions.describe_as_main_cause(),
                        fact("expected", expected),
                        *self._testing_whether(),
                        simple_fact(
                            "found all expected elements (but failing because of exception)"
                        ),
                        fact("full contents", snapshot),
                    ]
                )
            )
        return self._ordered(
            Verdict.success(), ContainmentMode.EXACTLY, snapshot, source, expected, graph
        )

    def contains_exactly(self, actual: Iterable[Any], *expected: Any) -> Ordered:
        return self.contains_exactly_elements_in(actual, expected)

    # ------------------------------------------------------------------
    # In-order fast paths
    # ------------------------------------------------------------------

    def _correspond_in_order_exactly(
        self,
        actual: Sequence[Any],
        expected: Sequence[Any],
        exceptions: ExceptionStore,
    ) -> bool:
        if len(actual) != len(expected):
            return False
        return all(
            self._correspondence.safe_compare(a, e, exceptions)
            for a, e in zip(actual, expected, strict=True)
        )

    def _correspond_in_order_at_least(
        self,
        actual: Sequence[Any],
        expected: Sequence[Any],
        exceptions: ExceptionStore,
    ) -> bool:
        position = 0
        for expected_element in expected:
            while position < len(actual):
                matched = self._correspondence.safe_compare(
                    actual[position], expected_element, exceptions
                )
                position += 1
                if matched:
                    break
            else:
                return False
        return not exceptions.has_compare_exception()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _new_exception_store(self) -> ExceptionStore:
        return ExceptionStore(self._config.element_label)

    def _describer(self, exceptions: ExceptionStore) -> FailureDescriber:
        return FailureDescriber(
            self._correspondence,
            exceptions,
            pairer=self._pairer,
            add_type_info=self._config.add_type_info,
        )

    def _testing_whether(self) -> list[Fact]:
        if self._config.element_label == "values":
            return self._correspondence.describe_for_map_values()
        return self._correspondence.describe_for_iterable()

    @staticmethod
    def _failed(verdict: Verdict) -> Ordered:
        return Ordered(verdict=verdict, order_check=lambda: verdict)

    def _ordered(
        self,
        verdict: Verdict,
        mode: ContainmentMode,
        snapshot: tuple[Any, ...],
        source: Iterable[Any] | None,
        expected: tuple[Any, ...],
        graph: CandidateGraph | None,
    ) -> Ordered:
        """Wrap a passing verdict with its order check.

        ``graph`` is None when the in-order fast path already decided the
        assertion, in which case the order check passes as long as the
        actual collection is unchanged.
        """

        def order_check() -> Verdict:
            return self._check_order(mode, snapshot, source, expected, graph)

        return Ordered(verdict=verdict, order_check=order_check)

    def _check_order(
        self,
        mode: ContainmentMode,
        snapshot: tuple[Any, ...],
        source: Iterable[Any] | None,
        expected: tuple[Any, ...],
        graph: CandidateGraph | None,
    ) -> Verdict:
        if source is not None:
            current = tuple(source)
            if not _unchanged(snapshot, current):
                return Verdict.failure(
                    [
                        simple_fact("actual was modified after the assertion"),
                        fact("at assertion time", snapshot),
                        fact("but is now", current),
                    ]
                )
        if graph is None or is_in_order(graph, mode):
            return Verdict.success()
        if mode is ContainmentMode.EXACTLY:
            return Verdict.failure(
                [
                    simple_fact("contents match, but order was wrong"),
                    fact("expected", expected),
                    *self._testing_whether(),
                    fact("but was", snapshot),
                ]
            )
        return Verdict.failure(
            [
                simple_fact("required elements were all found, but order was wrong"),
                fact("expected order for required elements", expected),
                *self._testing_whether(),
                fact("but was", snapshot),
            ]
        )
