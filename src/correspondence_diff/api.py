"""Public API functions for correspondence-diff.

This module provides the user-facing entry points: ``check_elements``
returns a ``Verdict``; ``correspond_exactly``, ``correspond_at_least`` and
``correspond_any`` return plain booleans; ``assert_elements`` starts a
fluent assertion that raises ``CorrespondenceAssertionError`` on failure.
Each call creates a fresh ``ElementsComparator`` to guarantee zero global
state mutation between calls.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from correspondence_diff.algorithm.config import ContainmentMode, MatchConfig
from correspondence_diff.comparator import ElementsComparator
from correspondence_diff.correspondence import Correspondence
from correspondence_diff.protocols import DiffFormatter, KeyFunction
from correspondence_diff.result import Ordered, Verdict

__all__ = [
    "ElementsAssertion",
    "OrderedAssertion",
    "assert_elements",
    "check_elements",
    "correspond_any",
    "correspond_at_least",
    "correspond_exactly",
]

PairedBy = KeyFunction | tuple[KeyFunction, KeyFunction] | None


def _comparator(
    correspondence: Correspondence[Any, Any] | None,
    config: MatchConfig | None,
    paired_by: PairedBy,
) -> ElementsComparator:
    comparator = ElementsComparator(correspondence=correspondence, config=config)
    if paired_by is None:
        return comparator
    if isinstance(paired_by, tuple):
        actual_key, expected_key = paired_by
        return comparator.displaying_diffs_paired_by(actual_key, expected_key)
    return comparator.displaying_diffs_paired_by(paired_by)


def check_elements(
    actual: Iterable[Any],
    expected: Iterable[Any],
    correspondence: Correspondence[Any, Any] | None = None,
    config: MatchConfig | None = None,
    paired_by: PairedBy = None,
) -> Verdict:
    """Check ``actual`` against ``expected`` and return the verdict.

    Args:
        actual:         The elements produced by the code under test.
        expected:       The reference elements.
        correspondence: Element relation.  Defaults to equality when None.
        config:         Containment mode and options.  Defaults to
                        ``MatchConfig()`` (exactly, any order).
        paired_by:      Optional key function, or ``(actual_key,
                        expected_key)`` pair, used to pair missing and
                        unexpected elements in the failure facts.

    Returns:
        A ``Verdict``.  Its ``facts`` describe the failure, if any.
    """
    return _comparator(correspondence, config, paired_by).compare(actual, expected)


def correspond_exactly(
    actual: Iterable[Any],
    expected: Iterable[Any],
    correspondence: Correspondence[Any, Any] | None = None,
    in_order: bool = False,
) -> bool:
    """Return True if actual and expected elements correspond 1:1."""
    config = MatchConfig(mode=ContainmentMode.EXACTLY, in_order=in_order)
    return check_elements(actual, expected, correspondence, config).passed


def correspond_at_least(
    actual: Iterable[Any],
    expected: Iterable[Any],
    correspondence: Correspondence[Any, Any] | None = None,
    in_order: bool = False,
) -> bool:
    """Return True if every expected element is matched by a distinct actual one."""
    config = MatchConfig(mode=ContainmentMode.AT_LEAST, in_order=in_order)
    return check_elements(actual, expected, correspondence, config).passed


def correspond_any(
    actual: Iterable[Any],
    expected: Iterable[Any],
    correspondence: Correspondence[Any, Any] | None = None,
) -> bool:
    """Return True if some actual element corresponds to some expected element."""
    config = MatchConfig(mode=ContainmentMode.ANY)
    return check_elements(actual, expected, correspondence, config).passed


class OrderedAssertion:
    """Returned by the at-least/exactly assertions; ``in_order()`` adds the order check."""

    def __init__(self, ordered: Ordered) -> None:
        self._ordered = ordered

    def in_order(self) -> None:
        """Raise ``CorrespondenceAssertionError`` unless the elements are in order."""
        self._ordered.in_order().raise_for_failure()


class ElementsAssertion:
    """Fluent assertions about an iterable of elements.

    Every terminal method raises ``CorrespondenceAssertionError`` on failure.
    The actual iterable is materialised by each terminal call, so pass a
    collection (not a one-shot iterator) when making several assertions.

    Example::

        from correspondence_diff import Correspondence, assert_elements

        parses_to = Correspondence.from_predicate(
            lambda a, e: int(a, 0) == e, "parses to"
        )
        assert_elements(["+64", "0x80"]).comparing_elements_using(
            parses_to
        ).contains_exactly(128, 64)
    """

    def __init__(
        self,
        actual: Iterable[Any],
        comparator: ElementsComparator | None = None,
    ) -> None:
        self._actual = actual
        self._comparator = comparator if comparator is not None else ElementsComparator()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def comparing_elements_using(
        self, correspondence: Correspondence[Any, Any]
    ) -> ElementsAssertion:
        return ElementsAssertion(
            self._actual,
            ElementsComparator(correspondence, self._comparator.config),
        )

    def formatting_diffs_using(self, formatter: DiffFormatter) -> ElementsAssertion:
        """Compare by equality, but show diffs from ``formatter`` on failure."""
        return self.comparing_elements_using(
            Correspondence.equality().formatting_diffs_using(formatter)
        )

    def displaying_diffs_paired_by(
        self,
        key_function: KeyFunction,
        expected_key_function: KeyFunction | None = None,
    ) -> ElementsAssertion:
        return ElementsAssertion(
            self._actual,
            self._comparator.displaying_diffs_paired_by(
                key_function, expected_key_function
            ),
        )

    # ------------------------------------------------------------------
    # Terminal assertions
    # ------------------------------------------------------------------

    def _check(self, method: Callable[..., Verdict], *args: Any) -> None:
        method(self._actual, *args).raise_for_failure()

    def _check_ordered(
        self, method: Callable[..., Ordered], expected: Iterable[Any]
    ) -> OrderedAssertion:
        ordered = method(self._actual, expected)
        ordered.raise_for_failure()
        return OrderedAssertion(ordered)

    def contains(self, expected: Any) -> None:
        self._check(self._comparator.contains, expected)

    def does_not_contain(self, excluded: Any) -> None:
        self._check(self._comparator.does_not_contain, excluded)

    def contains_any_in(self, expected: Iterable[Any]) -> None:
        self._check(self._comparator.contains_any_in, expected)

    def contains_any_of(self, first: Any, second: Any, *rest: Any) -> None:
        self.contains_any_in((first, second, *rest))

    def contains_none_in(self, excluded: Iterable[Any]) -> None:
        self._check(self._comparator.contains_none_in, excluded)

    def contains_none_of(self, first: Any, second: Any, *rest: Any) -> None:
        self.contains_none_in((first, second, *rest))

    def contains_at_least_elements_in(self, expected: Iterable[Any]) -> OrderedAssertion:
        return self._check_ordered(
            self._comparator.contains_at_least_elements_in, expected
        )

    def contains_at_least(self, first: Any, second: Any, *rest: Any) -> OrderedAssertion:
        return self.contains_at_least_elements_in((first, second, *rest))

    def contains_exactly_elements_in(self, expected: Iterable[Any]) -> OrderedAssertion:
        return self._check_ordered(
            self._comparator.contains_exactly_elements_in, expected
        )

    def contains_exactly(self, *expected: Any) -> OrderedAssertion:
        return self.contains_exactly_elements_in(expected)


def assert_elements(actual: Iterable[Any]) -> ElementsAssertion:
    """Start a fluent assertion about ``actual``.

    Without ``comparing_elements_using``, elements are compared by equality.
    """
    return ElementsAssertion(actual)
