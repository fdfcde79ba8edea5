"""Correspondence diff - collection assertions under arbitrary element relations."""

from __future__ import annotations

from correspondence_diff.algorithm.config import ContainmentMode, MatchConfig
from correspondence_diff.api import (
    ElementsAssertion,
    OrderedAssertion,
    assert_elements,
    check_elements,
    correspond_any,
    correspond_at_least,
    correspond_exactly,
)
from correspondence_diff.comparator import ElementsComparator
from correspondence_diff.correspondence import Correspondence
from correspondence_diff.errors import (
    CorrespondenceAssertionError,
    IncompatibleTypeError,
)
from correspondence_diff.facts import Fact
from correspondence_diff.result import Ordered, Verdict

__version__: str = "0.1.0"
__all__: list[str] = [
    "ContainmentMode",
    "Correspondence",
    "CorrespondenceAssertionError",
    "ElementsAssertion",
    "ElementsComparator",
    "Fact",
    "IncompatibleTypeError",
    "MatchConfig",
    "Ordered",
    "OrderedAssertion",
    "Verdict",
    "assert_elements",
    "check_elements",
    "correspond_any",
    "correspond_at_least",
    "correspond_exactly",
]
