"""Pairer: groups missing and unexpected elements by a user-supplied key.

Pairing is purely cosmetic.  When an assertion fails, a missing expected
element and the unexpected actual elements that share its key are shown
together (with diffs), which is far easier to read than two unrelated
lists.  Pairing never changes whether an assertion passes.

A key of ``None`` means "this element has no key".  Key functions that
raise are treated the same way, and their first exception is recorded in
the assertion's ``ExceptionStore``.  Keys must be hashable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from correspondence_diff.exception_store import ExceptionStore
    from correspondence_diff.protocols import KeyFunction

__all__ = ["Pairer", "Pairing"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Pairing:
    """Missing and unexpected elements split by key.

    Attributes:
        paired_expected: Key to the single expected element with that key,
            in expected order.  Only keys shared by at least one actual
            element appear here.
        paired_actual: Key to the actual elements with that key.
        unpaired_expected: Expected elements with no key, or whose key no
            actual element shares, in their original order.
        unpaired_actual: Actual elements whose key no expected element has.
    """

    paired_expected: dict[Any, Any] = field(default_factory=dict)
    paired_actual: dict[Any, list[Any]] = field(default_factory=dict)
    unpaired_expected: list[Any] = field(default_factory=list)
    unpaired_actual: list[Any] = field(default_factory=list)


class Pairer:
    """Pairs elements using one key function, or one per side.

    Args:
        actual_key_function: Key of an actual element.
        expected_key_function: Key of an expected element.  Defaults to
            ``actual_key_function`` when both sides share a key space.
    """

    def __init__(
        self,
        actual_key_function: KeyFunction,
        expected_key_function: KeyFunction | None = None,
    ) -> None:
        self._actual_key_function = actual_key_function
        self._expected_key_function = (
            expected_key_function
            if expected_key_function is not None
            else actual_key_function
        )

    def _actual_key(self, value: Any, exceptions: ExceptionStore) -> Any:
        try:
            return self._actual_key_function(value)
        except Exception as exc:
            exceptions.add_actual_key_function_exception(exc, value)
            return None

    def _expected_key(self, value: Any, exceptions: ExceptionStore) -> Any:
        try:
            return self._expected_key_function(value)
        except Exception as exc:
            exceptions.add_expected_key_function_exception(exc, value)
            return None

    def pair(
        self,
        expected_values: Sequence[Any],
        actual_values: Sequence[Any],
        exceptions: ExceptionStore,
    ) -> Pairing | None:
        """Split both sides by key.

        Returns:
            The ``Pairing``, or ``None`` when two expected elements share a
            key, in which case the caller falls back to unpaired output.
        """
        expected_keys = [self._expected_key(value, exceptions) for value in expected_values]
        keyed_expected: dict[Any, Any] = {}
        for value, key in zip(expected_values, expected_keys, strict=True):
            if key is None:
                continue
            if key in keyed_expected:
                logger.debug("expected keys are not unique; pairing skipped")
                return None
            keyed_expected[key] = value

        pairing = Pairing()
        for value in actual_values:
            key = self._actual_key(value, exceptions)
            if key is not None and key in keyed_expected:
                pairing.paired_actual.setdefault(key, []).append(value)
            else:
                pairing.unpaired_actual.append(value)
        for value, key in zip(expected_values, expected_keys, strict=True):
            if key is not None and key in pairing.paired_actual:
                pairing.paired_expected[key] = value
            else:
                pairing.unpaired_expected.append(value)
        return pairing

    def pair_one(
        self,
        expected_value: Any,
        actual_values: Sequence[Any],
        exceptions: ExceptionStore,
    ) -> list[Any]:
        """Return the actual elements whose key equals ``expected_value``'s."""
        key = self._expected_key(expected_value, exceptions)
        if key is None:
            return []
        matches = []
        for value in actual_values:
            actual_key = self._actual_key(value, exceptions)
            if actual_key is not None and actual_key == key:
                matches.append(value)
        return matches
