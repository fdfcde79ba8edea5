"""FailureDescriber: builds the facts describing missing and unexpected elements.

Each assertion that fails on content (rather than on an exception) reports
what is missing and what is unexpected.  The describer renders those two
lists, pairs them by key when a ``Pairer`` is configured, and asks the
correspondence for diffs between a missing element and the unexpected
elements it was paired with.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from correspondence_diff.facts import Fact, fact, simple_fact
from correspondence_diff.formatting import (
    count_duplicates,
    count_duplicates_and_add_type_info,
    has_matching_to_string_pair,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from correspondence_diff.correspondence import Correspondence
    from correspondence_diff.exception_store import ExceptionStore
    from correspondence_diff.pairing import Pairer, Pairing

__all__ = [
    "MOST_COMPLETE_MAPPING",
    "NON_UNIQUE_KEYS",
    "NO_ONE_TO_ONE_AT_LEAST",
    "NO_ONE_TO_ONE_EXACTLY",
    "FailureDescriber",
]

NO_ONE_TO_ONE_EXACTLY = (
    "in an assertion requiring a 1:1 mapping between the expected and the actual "
    "elements, each actual element matches as least one expected element, and "
    "vice versa, but there was no 1:1 mapping"
)
NO_ONE_TO_ONE_AT_LEAST = (
    "in an assertion requiring a 1:1 mapping between the expected and a subset "
    "of the actual elements, each actual element matches as least one expected "
    "element, and vice versa, but there was no 1:1 mapping"
)
MOST_COMPLETE_MAPPING = (
    "using the most complete 1:1 mapping (or one such mapping, if there is a tie)"
)
NON_UNIQUE_KEYS = (
    "a key function which does not uniquely key the expected elements was "
    "provided and has consequently been ignored"
)


class FailureDescriber:
    """Renders missing/unexpected elements for one assertion.

    Args:
        correspondence: Supplies diffs between paired elements.
        exceptions: The assertion's exception store (diff and key failures
            are recorded there).
        pairer: Optional key-based pairing of missing and unexpected
            elements.
        add_type_info: Annotate element types when a missing and an
            unexpected element render identically but are not equal.
    """

    def __init__(
        self,
        correspondence: Correspondence[Any, Any],
        exceptions: ExceptionStore,
        pairer: Pairer | None = None,
        add_type_info: bool = True,
    ) -> None:
        self._correspondence = correspondence
        self._exceptions = exceptions
        self._pairer = pairer
        self._add_type_info = add_type_info

    # ------------------------------------------------------------------
    # Exactly: missing and unexpected
    # ------------------------------------------------------------------

    def describe_missing_or_extra(
        self, missing: Sequence[Any], extra: Sequence[Any]
    ) -> list[Fact]:
        if self._pairer is not None:
            pairing = self._pairer.pair(missing, extra, self._exceptions)
            if pairing is not None:
                return self._describe_missing_or_extra_with_pairing(pairing)
            return [
                *self._describe_missing_or_extra_without_pairing(missing, extra),
                simple_fact(NON_UNIQUE_KEYS),
            ]
        return self._describe_missing_or_extra_without_pairing(missing, extra)

    def _describe_missing_or_extra_with_pairing(self, pairing: Pairing) -> list[Fact]:
        facts: list[Fact] = []
        for key, missing in pairing.paired_expected.items():
            facts.append(fact("for key", key))
            facts.append(fact("missing", missing))
            facts.extend(
                self.format_extras("unexpected", missing, pairing.paired_actual[key])
            )
            facts.append(simple_fact("---"))
        if pairing.unpaired_expected or pairing.unpaired_actual:
            facts.append(simple_fact("elements without matching keys:"))
            facts.extend(
                self._describe_missing_or_extra_without_pairing(
                    pairing.unpaired_expected, pairing.unpaired_actual
                )
            )
        return facts

    def _describe_missing_or_extra_without_pairing(
        self, missing: Sequence[Any], extra: Sequence[Any]
    ) -> list[Fact]:
        if len(missing) == 1 and extra:
            return [
                fact("missing (1)", missing[0]),
                *self.format_extras("unexpected", missing[0], extra),
                simple_fact("---"),
            ]
        facts: list[Fact] = []
        if missing:
            facts.append(
                fact(f"missing ({len(missing)})", self._format_grouped(missing, extra))
            )
        if extra:
            facts.append(
                fact(f"unexpected ({len(extra)})", self._format_grouped(extra, missing))
            )
        facts.append(simple_fact("---"))
        return facts

    # ------------------------------------------------------------------
    # At least: missing only
    # ------------------------------------------------------------------

    def describe_missing(
        self, missing: Sequence[Any], extra: Sequence[Any]
    ) -> list[Fact]:
        """Like ``describe_missing_or_extra``, but ``extra`` is only used for
        pairing and diffs, never listed on its own."""
        if self._pairer is not None:
            pairing = self._pairer.pair(missing, extra, self._exceptions)
            if pairing is not None:
                return self._describe_missing_with_pairing(pairing)
            return [
                *self._describe_missing_without_pairing(missing, extra),
                simple_fact(NON_UNIQUE_KEYS),
            ]
        return self._describe_missing_without_pairing(missing, extra)

    def _describe_missing_with_pairing(self, pairing: Pairing) -> list[Fact]:
        facts: list[Fact] = []
        for key, missing in pairing.paired_expected.items():
            facts.append(fact("for key", key))
            facts.append(fact("missing", missing))
            facts.extend(
                self.format_extras(
                    "did contain elements with that key",
                    missing,
                    pairing.paired_actual[key],
                )
            )
            facts.append(simple_fact("---"))
        if pairing.unpaired_expected:
            facts.append(simple_fact("elements without matching keys:"))
            facts.extend(
                self._describe_missing_without_pairing(
                    pairing.unpaired_expected, pairing.unpaired_actual
                )
            )
        return facts

    def _describe_missing_without_pairing(
        self, missing: Sequence[Any], extra: Sequence[Any]
    ) -> list[Fact]:
        return [
            fact(f"missing ({len(missing)})", self._format_grouped(missing, extra)),
            simple_fact("---"),
        ]

    # ------------------------------------------------------------------
    # Shared pieces
    # ------------------------------------------------------------------

    def format_extras(
        self, label: str, missing: Any, extras: Sequence[Any]
    ) -> list[Fact]:
        """Facts for the elements ``extras`` shown against ``missing``.

        When the correspondence produces a diff for any of them, each extra
        gets its own ``#i`` fact followed by its ``diff``; otherwise they are
        listed in a single ``label (n)`` fact.
        """
        diffs = [
            self._correspondence.safe_format_diff(extra, missing, self._exceptions)
            for extra in extras
        ]
        label = f"{label} ({len(extras)})"
        if all(diff is None for diff in diffs):
            return [fact(label, list(extras))]
        facts = [simple_fact(label)]
        for index, (extra, diff) in enumerate(zip(extras, diffs, strict=True), start=1):
            facts.append(fact(f"#{index}", extra))
            if diff is not None:
                facts.append(fact("diff", diff))
        return facts

    def describe_any_matches_by_key(
        self, expected: Sequence[Any], actual: Sequence[Any]
    ) -> list[Fact]:
        """Key-paired facts appended to a failed contains-any assertion."""
        if self._pairer is None:
            return []
        pairing = self._pairer.pair(expected, actual, self._exceptions)
        if pairing is None:
            return [simple_fact(NON_UNIQUE_KEYS)]
        if not pairing.paired_expected:
            return [simple_fact("it does not contain any matches by key, either")]
        facts: list[Fact] = []
        for key, expected_value in pairing.paired_expected.items():
            facts.append(fact("for key", key))
            facts.append(fact("expected any of", expected_value))
            facts.extend(
                self.format_extras(
                    "but got", expected_value, pairing.paired_actual[key]
                )
            )
            facts.append(simple_fact("---"))
        return facts

    def describe_key_matches(
        self, expected: Any, actual: Sequence[Any]
    ) -> list[Fact]:
        """Actual elements sharing ``expected``'s key, for a failed contains."""
        if self._pairer is None:
            return []
        matches = self._pairer.pair_one(expected, actual, self._exceptions)
        if not matches:
            return []
        return [
            simple_fact("but did not"),
            *self.format_extras(
                "though it did contain elements with correct key", expected, matches
            ),
            simple_fact("---"),
        ]

    def _format_grouped(self, items: Sequence[Any], others: Sequence[Any]) -> str:
        if self._add_type_info and has_matching_to_string_pair(items, others):
            return count_duplicates_and_add_type_info(items)
        return count_duplicates(items)
