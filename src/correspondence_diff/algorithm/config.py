"""MatchConfig and ContainmentMode for collection-matching configuration.

MatchConfig is a frozen (immutable) dataclass holding the assertion
parameters.  ContainmentMode selects which relation between the actual and
expected collections is asserted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["ContainmentMode", "MatchConfig"]

_ELEMENT_LABELS = ("elements", "values")


class ContainmentMode(StrEnum):
    """Which containment relation an assertion checks.

    - ANY:      At least one actual element corresponds to some expected element.
    - AT_LEAST: Every expected element is matched by a distinct actual element.
    - EXACTLY:  Actual and expected elements are in a 1:1 correspondence.
    - NONE:     No actual element corresponds to any excluded element.
    """

    ANY = auto()
    AT_LEAST = auto()
    EXACTLY = auto()
    NONE = auto()


@dataclass(frozen=True, slots=True)
class MatchConfig:
    """Immutable configuration for a collection-matching assertion.

    Attributes:
        mode: Containment relation to assert.  Default ``EXACTLY``.
        in_order: When True, a passing ``AT_LEAST``/``EXACTLY`` assertion must
            also find the expected elements in order.  Default False.
        element_label: What compared items are called in exception facts:
            ``"elements"`` (default) or ``"values"``.
        add_type_info: When True, missing and unexpected elements that render
            identically but are not equal are annotated with their types.
            Default True.
    """

    mode: ContainmentMode = ContainmentMode.EXACTLY
    in_order: bool = False
    element_label: str = "elements"
    add_type_info: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.mode, ContainmentMode):
            msg = f"mode must be a ContainmentMode, got {self.mode!r}"
            raise ValueError(msg)
        if self.in_order and self.mode not in (
            ContainmentMode.AT_LEAST,
            ContainmentMode.EXACTLY,
        ):
            msg = f"in_order requires mode AT_LEAST or EXACTLY, got {self.mode}"
            raise ValueError(msg)
        if self.element_label not in _ELEMENT_LABELS:
            msg = (
                f"element_label must be one of {_ELEMENT_LABELS}, "
                f"got {self.element_label!r}"
            )
            raise ValueError(msg)
