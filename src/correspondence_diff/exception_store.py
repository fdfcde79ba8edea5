"""ExceptionStore: first-exception bookkeeping for a single assertion.

User callables (the correspondence, key functions, diff formatters) may
raise.  Such exceptions never escape the engine; instead the *first* one of
each kind is remembered here, together with the call that raised it, and
surfaced in the failure message:

- As the main cause, when an assertion would otherwise have passed (an
  assertion that hit an exception while comparing never passes).
- As additional info, appended after the facts of an ordinary failure.

A store is created fresh for every assertion and discarded afterwards.
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from typing import Any

from correspondence_diff.facts import Fact, fact, simple_fact
from correspondence_diff.formatting import render

__all__ = ["ExceptionStore", "StoredException"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoredException:
    """An exception together with the call that raised it.

    Attributes:
        exception:   The exception instance.
        method_name: Name of the user callable, e.g. ``"compare"``.
        arguments:   The arguments it was called with.
    """

    exception: Exception
    method_name: str
    arguments: tuple[Any, ...]

    def describe(self) -> str:
        """Return ``name(args) threw Type: message``, the traceback and ``---``."""
        call = f"{self.method_name}({', '.join(render(arg) for arg in self.arguments)})"
        error = f"{type(self.exception).__name__}: {self.exception}"
        stack = "".join(traceback.format_tb(self.exception.__traceback__)).rstrip()
        if stack:
            return f"{call} threw {error}\n{stack}\n---"
        return f"{call} threw {error}\n---"


class ExceptionStore:
    """Records the first compare, pairing and diff-formatting exception.

    Args:
        argument_label: What the compared things are called in messages,
            ``"elements"`` for iterables or ``"values"`` for map values.
    """

    def __init__(self, argument_label: str = "elements") -> None:
        self._argument_label = argument_label
        self._first_compare_exception: StoredException | None = None
        self._first_pairing_exception: StoredException | None = None
        self._first_format_diff_exception: StoredException | None = None

    @classmethod
    def for_iterable(cls) -> ExceptionStore:
        return cls("elements")

    @classmethod
    def for_map_values(cls) -> ExceptionStore:
        return cls("values")

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def add_compare_exception(
        self, exception: Exception, actual: Any, expected: Any
    ) -> None:
        if self._first_compare_exception is None:
            logger.debug("first compare exception: %s", type(exception).__name__)
            self._first_compare_exception = StoredException(
                exception, "compare", (actual, expected)
            )

    def add_actual_key_function_exception(
        self, exception: Exception, actual: Any
    ) -> None:
        if self._first_pairing_exception is None:
            self._first_pairing_exception = StoredException(
                exception, "actual_key_function", (actual,)
            )

    def add_expected_key_function_exception(
        self, exception: Exception, expected: Any
    ) -> None:
        if self._first_pairing_exception is None:
            self._first_pairing_exception = StoredException(
                exception, "expected_key_function", (expected,)
            )

    def add_format_diff_exception(
        self, exception: Exception, actual: Any, expected: Any
    ) -> None:
        if self._first_format_diff_exception is None:
            self._first_format_diff_exception = StoredException(
                exception, "format_diff", (actual, expected)
            )

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def has_compare_exception(self) -> bool:
        return self._first_compare_exception is not None

    @property
    def first_compare_exception(self) -> StoredException | None:
        return self._first_compare_exception

    @property
    def first_pairing_exception(self) -> StoredException | None:
        return self._first_pairing_exception

    @property
    def first_format_diff_exception(self) -> StoredException | None:
        return self._first_format_diff_exception

    def describe_as_main_cause(self) -> list[Fact]:
        """Facts for a failure caused solely by a compare exception.

        Raises:
            RuntimeError: If no compare exception was recorded, or if a
                pairing or diff exception was (pairing and diff formatting
                only happen once a more meaningful failure has been found).
        """
        if self._first_compare_exception is None:
            msg = "describe_as_main_cause() requires a recorded compare exception"
            raise RuntimeError(msg)
        if (
            self._first_pairing_exception is not None
            or self._first_format_diff_exception is not None
        ):
            msg = "pairing and diff exceptions cannot accompany a main-cause failure"
            raise RuntimeError(msg)
        return [
            simple_fact(
                "one or more exceptions were thrown while comparing "
                f"{self._argument_label}"
            ),
            fact("first exception", self._first_compare_exception.describe()),
        ]

    def describe_as_additional_info(self) -> list[Fact]:
        """Facts appended to an ordinary failure, one block per exception kind."""
        facts: list[Fact] = []
        if self._first_compare_exception is not None:
            facts.append(
                simple_fact(
                    "additionally, one or more exceptions were thrown while "
                    f"comparing {self._argument_label}"
                )
            )
            facts.append(
                fact("first exception", self._first_compare_exception.describe())
            )
        if self._first_pairing_exception is not None:
            facts.append(
                simple_fact(
                    "additionally, one or more exceptions were thrown while "
                    f"keying {self._argument_label} for pairing"
                )
            )
            facts.append(
                fact("first exception", self._first_pairing_exception.describe())
            )
        if self._first_format_diff_exception is not None:
            facts.append(
                simple_fact(
                    "additionally, one or more exceptions were thrown while "
                    "formatting diffs"
                )
            )
            facts.append(
                fact("first exception", self._first_format_diff_exception.describe())
            )
        return facts
