"""Correspondence: the pairwise relation used to match actual and expected elements.

A ``Correspondence`` decides whether an actual element "corresponds to" an
expected element, optionally explains how a non-matching pair differs, and
carries a short description used verbatim in failure messages
(``"actual element <description> expected element"``).

Correspondences are immutable and stateless.  ``compare`` may raise for
elements it cannot handle (for example ``None``); the engine records such
exceptions per pair instead of propagating them.  The one exception that
does propagate is ``IncompatibleTypeError``: when a correspondence declares
the element types it accepts, a non-``None`` element of any other type
aborts the assertion.

Example::

    from correspondence_diff import Correspondence

    parses_to = Correspondence.from_predicate(
        lambda actual, expected: int(actual, 0) == expected,
        "parses to",
        actual_type=str,
    )
    parses_to.compare("0x40", 64)        # True
    str(parses_to)                       # "parses to"

    within = Correspondence.tolerance(0.1)
    within.compare(1.05, 1.0)            # True
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from correspondence_diff.errors import IncompatibleTypeError
from correspondence_diff.facts import Fact, fact
from correspondence_diff.protocols import BinaryPredicate, DiffFormatter, ElementTransform

if TYPE_CHECKING:
    from correspondence_diff.exception_store import ExceptionStore

__all__ = ["ComparisonOutcome", "Correspondence", "EdgeOutcome"]

A = TypeVar("A")
E = TypeVar("E")

_TypeSpec = type | tuple[type, ...] | None


class EdgeOutcome(StrEnum):
    """Result of comparing one (actual, expected) pair.

    - MATCHED:   ``compare`` returned a truthy value.
    - UNMATCHED: ``compare`` returned a falsy value.
    - FAILED:    ``compare`` raised; the pair is treated as not matching.
    """

    MATCHED = auto()
    UNMATCHED = auto()
    FAILED = auto()


@dataclass(frozen=True, slots=True)
class ComparisonOutcome:
    """An ``EdgeOutcome`` plus the exception for ``FAILED`` outcomes."""

    outcome: EdgeOutcome
    error: Exception | None = None

    @property
    def matched(self) -> bool:
        return self.outcome is EdgeOutcome.MATCHED


_MATCHED = ComparisonOutcome(EdgeOutcome.MATCHED)
_UNMATCHED = ComparisonOutcome(EdgeOutcome.UNMATCHED)


def _type_label(spec: type | tuple[type, ...]) -> str:
    if isinstance(spec, tuple):
        return " | ".join(kind.__qualname__ for kind in spec)
    return spec.__qualname__


class Correspondence(Generic[A, E]):
    """Base class for element correspondences.

    Subclasses override ``compare`` and optionally ``format_diff``.  Most
    callers should use the factories instead: ``from_predicate``,
    ``transforming``, ``tolerance`` and ``equality``.

    Args:
        description:   Verb phrase completing ``"actual element ... expected
            element"``, e.g. ``"is a finite number within 0.1 of"``.
        actual_type:   Optional type (or tuple of types) that actual elements
            must be instances of.  ``None`` elements are always accepted.
        expected_type: Same, for expected elements.
    """

    __slots__ = ("_actual_type", "_description", "_expected_type")

    def __init__(
        self,
        description: str,
        actual_type: _TypeSpec = None,
        expected_type: _TypeSpec = None,
    ) -> None:
        if not isinstance(description, str):
            msg = f"description must be a str, got {type(description).__name__}"
            raise TypeError(msg)
        self._description = description
        self._actual_type = actual_type
        self._expected_type = expected_type

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @staticmethod
    def from_predicate(
        predicate: BinaryPredicate,
        description: str,
        actual_type: _TypeSpec = None,
        expected_type: _TypeSpec = None,
    ) -> Correspondence[Any, Any]:
        """Correspondence that holds when ``predicate(actual, expected)`` is truthy."""
        if not isinstance(predicate, BinaryPredicate):
            msg = f"predicate must be callable, got {type(predicate).__name__}"
            raise TypeError(msg)
        return _PredicateCorrespondence(
            predicate, description, actual_type, expected_type
        )

    @staticmethod
    def transforming(
        actual_transform: ElementTransform,
        description: str,
        expected_transform: ElementTransform | None = None,
    ) -> Correspondence[Any, Any]:
        """Correspondence comparing transformed elements for equality.

        With only ``actual_transform``, an actual element corresponds to an
        expected element when ``actual_transform(actual) == expected``.  With
        ``expected_transform`` as well, both sides are transformed first.
        """
        for transform in (actual_transform, expected_transform):
            if transform is not None and not isinstance(transform, ElementTransform):
                msg = f"transform must be callable, got {type(transform).__name__}"
                raise TypeError(msg)
        return _TransformingCorrespondence(
            actual_transform, expected_transform, description
        )

    @staticmethod
    def tolerance(tolerance: float) -> Correspondence[numbers.Number, numbers.Number]:
        """Correspondence between numbers that are finite and within
        ``tolerance`` of each other.

        Elements are compared as floats; a number ``float()`` rejects, such
        as a ``complex``, is a recorded comparison failure.

        Raises:
            ValueError: If ``tolerance`` is negative, NaN or infinite.
        """
        if math.isnan(tolerance) or math.isinf(tolerance) or tolerance < 0.0:
            msg = f"tolerance must be a finite number >= 0, got {tolerance}"
            raise ValueError(msg)
        return _ToleranceCorrespondence(tolerance)

    @staticmethod
    def equality() -> Correspondence[Any, Any]:
        """Plain ``==`` equality, described as ``"is equal to"``."""
        return _EQUALITY

    def formatting_diffs_using(
        self, formatter: DiffFormatter
    ) -> Correspondence[A, E]:
        """Return a copy of this correspondence whose diffs come from ``formatter``."""
        if not isinstance(formatter, DiffFormatter):
            msg = f"formatter must be callable, got {type(formatter).__name__}"
            raise TypeError(msg)
        return _DiffFormattingCorrespondence(self, formatter)

    # ------------------------------------------------------------------
    # Relation
    # ------------------------------------------------------------------

    @property
    def description(self) -> str:
        return self._description

    @property
    def actual_type(self) -> _TypeSpec:
        return self._actual_type

    @property
    def expected_type(self) -> _TypeSpec:
        return self._expected_type

    def compare(self, actual: A, expected: E) -> bool:
        """Return whether ``actual`` corresponds to ``expected``."""
        raise NotImplementedError

    def format_diff(self, actual: A, expected: E) -> str | None:
        """Describe how a non-corresponding pair differs, or ``None``."""
        return None

    def is_equality(self) -> bool:
        """Whether this correspondence is observationally ``==``."""
        return False

    def __str__(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._description!r})"

    # ------------------------------------------------------------------
    # Engine-facing helpers
    # ------------------------------------------------------------------

    def check_types(self, actual: Any, expected: Any) -> None:
        """Raise ``IncompatibleTypeError`` for elements of undeclared types."""
        for role, value, spec in (
            ("actual", actual, self._actual_type),
            ("expected", expected, self._expected_type),
        ):
            if spec is not None and value is not None and not isinstance(value, spec):
                msg = (
                    f"correspondence {self._description!r} cannot compare {role} "
                    f"elements of type {type(value).__qualname__} "
                    f"(accepts {_type_label(spec)})"
                )
                raise IncompatibleTypeError(msg)

    def evaluate(self, actual: Any, expected: Any) -> ComparisonOutcome:
        """Compare one pair and return the outcome as a value.

        Raises:
            IncompatibleTypeError: From the declared-type check or from
                ``compare`` itself.  Every other exception becomes a
                ``FAILED`` outcome.
        """
        self.check_types(actual, expected)
        try:
            matched = self.compare(actual, expected)
        except IncompatibleTypeError:
            raise
        except Exception as exc:
            return ComparisonOutcome(EdgeOutcome.FAILED, exc)
        return _MATCHED if matched else _UNMATCHED

    def safe_compare(
        self, actual: Any, expected: Any, exceptions: ExceptionStore
    ) -> bool:
        outcome = self.evaluate(actual, expected)
        if outcome.error is not None:
            exceptions.add_compare_exception(outcome.error, actual, expected)
        return outcome.matched

    def safe_format_diff(
        self, actual: Any, expected: Any, exceptions: ExceptionStore
    ) -> str | None:
        try:
            return self.format_diff(actual, expected)
        except Exception as exc:
            exceptions.add_format_diff_exception(exc, actual, expected)
            return None

    def describe_for_iterable(self) -> list[Fact]:
        """The ``testing whether`` fact, omitted for plain equality."""
        if self.is_equality():
            return []
        return [
            fact(
                "testing whether",
                f"actual element {self._description} expected element",
            )
        ]

    def describe_for_map_values(self) -> list[Fact]:
        if self.is_equality():
            return []
        return [
            fact(
                "testing whether",
                f"actual value {self._description} expected value",
            )
        ]


class _PredicateCorrespondence(Correspondence[A, E]):
    __slots__ = ("_predicate",)

    def __init__(
        self,
        predicate: BinaryPredicate,
        description: str,
        actual_type: _TypeSpec,
        expected_type: _TypeSpec,
    ) -> None:
        super().__init__(description, actual_type, expected_type)
        self._predicate = predicate

    def compare(self, actual: A, expected: E) -> bool:
        return bool(self._predicate(actual, expected))


class _TransformingCorrespondence(Correspondence[A, E]):
    __slots__ = ("_actual_transform", "_expected_transform")

    def __init__(
        self,
        actual_transform: ElementTransform,
        expected_transform: ElementTransform | None,
        description: str,
    ) -> None:
        super().__init__(description)
        self._actual_transform = actual_transform
        self._expected_transform = expected_transform

    def compare(self, actual: A, expected: E) -> bool:
        transformed: Any = expected
        if self._expected_transform is not None:
            transformed = self._expected_transform(expected)
        return bool(self._actual_transform(actual) == transformed)


class _ToleranceCorrespondence(Correspondence[numbers.Number, numbers.Number]):
    __slots__ = ("_tolerance",)

    def __init__(self, tolerance: float) -> None:
        super().__init__(
            f"is a finite number within {tolerance} of",
            actual_type=numbers.Number,
            expected_type=numbers.Number,
        )
        self._tolerance = tolerance

    def compare(self, actual: numbers.Number, expected: numbers.Number) -> bool:
        a = float(actual)
        e = float(expected)
        return math.isfinite(a) and math.isfinite(e) and abs(a - e) <= self._tolerance


class _EqualityCorrespondence(Correspondence[Any, Any]):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("is equal to")

    def compare(self, actual: Any, expected: Any) -> bool:
        return bool(actual == expected)

    def is_equality(self) -> bool:
        return True


class _DiffFormattingCorrespondence(Correspondence[A, E]):
    __slots__ = ("_delegate", "_formatter")

    def __init__(
        self, delegate: Correspondence[A, E], formatter: DiffFormatter
    ) -> None:
        super().__init__(
            delegate.description, delegate.actual_type, delegate.expected_type
        )
        self._delegate = delegate
        self._formatter = formatter

    def compare(self, actual: A, expected: E) -> bool:
        return self._delegate.compare(actual, expected)

    def format_diff(self, actual: A, expected: E) -> str | None:
        return self._formatter(actual, expected)

    def is_equality(self) -> bool:
        return self._delegate.is_equality()


_EQUALITY = _EqualityCorrespondence()
