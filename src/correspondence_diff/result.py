"""Verdict and Ordered: the outcome types returned by every assertion.

A ``Verdict`` is either a pass or a failure carrying its ordered facts.
``contains_at_least_elements_in`` and ``contains_exactly_elements_in``
return an ``Ordered`` instead: the same verdict plus ``in_order()``, which
additionally checks that the matched elements appear in order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from correspondence_diff.errors import CorrespondenceAssertionError
from correspondence_diff.facts import Fact, make_message

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

__all__ = ["Ordered", "Verdict"]


@dataclass(frozen=True, slots=True)
class Verdict:
    """Outcome of an assertion.

    Attributes:
        passed: True when the assertion holds.
        facts: The failure description, empty for a pass.
    """

    passed: bool
    facts: tuple[Fact, ...] = ()

    @classmethod
    def success(cls) -> Verdict:
        return _SUCCESS

    @classmethod
    def failure(cls, facts: Iterable[Fact]) -> Verdict:
        return cls(passed=False, facts=tuple(facts))

    def __bool__(self) -> bool:
        return self.passed

    @property
    def message(self) -> str:
        return make_message(self.facts)

    def raise_for_failure(self) -> None:
        """Raise ``CorrespondenceAssertionError`` if the assertion failed."""
        if not self.passed:
            raise CorrespondenceAssertionError(self.facts)


_SUCCESS = Verdict(passed=True)


@dataclass(frozen=True, slots=True)
class Ordered:
    """A containment verdict that can be refined with an order check.

    Attributes:
        verdict: The any-order verdict.
        order_check: Computes the in-order verdict; only called when
            ``verdict`` passed.
    """

    verdict: Verdict
    order_check: Callable[[], Verdict] = field(repr=False, compare=False)

    @property
    def passed(self) -> bool:
        return self.verdict.passed

    @property
    def facts(self) -> tuple[Fact, ...]:
        return self.verdict.facts

    def __bool__(self) -> bool:
        return self.verdict.passed

    def in_order(self) -> Verdict:
        """Return the in-order verdict.

        A failed any-order verdict is returned unchanged: the order of
        elements that do not correspond is not reported separately.
        """
        if not self.verdict.passed:
            return self.verdict
        return self.order_check()

    def raise_for_failure(self) -> None:
        self.verdict.raise_for_failure()
