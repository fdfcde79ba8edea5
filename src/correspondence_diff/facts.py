"""Fact: the key/value building block of every failure message.

A failure is described by an ordered sequence of facts.  A fact with a
value renders as ``key: value``; a fact without a value (a "simple fact")
renders as its key alone.  ``make_message`` aligns the values of a fact
sequence into a readable block.

Example::

    from correspondence_diff.facts import fact, make_message, simple_fact

    print(make_message([fact("missing (1)", 256), simple_fact("---"), fact("expected", [64, 256])]))
    # missing (1): 256
    # ---
    # expected   : [64, 256]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from correspondence_diff.formatting import render

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = ["Fact", "fact", "make_message", "simple_fact"]

_INDENT = "    "


@dataclass(frozen=True, slots=True)
class Fact:
    """A single line of a failure message.

    Attributes:
        key:   The label, e.g. ``"missing (2)"`` or ``"---"``.
        value: The rendered value, or ``None`` for a simple fact.
    """

    key: str
    value: str | None = None

    def __str__(self) -> str:
        if self.value is None:
            return self.key
        return f"{self.key}: {self.value}"


def fact(key: str, value: Any) -> Fact:
    """Return a fact whose value is ``value`` rendered for display.

    Strings are kept verbatim; every other value (including ``None``) goes
    through ``formatting.render`` so that sequences print as ``[a, b]``.
    """
    return Fact(key, value if isinstance(value, str) else render(value))


def simple_fact(key: str) -> Fact:
    return Fact(key)


def make_message(facts: Iterable[Fact]) -> str:
    """Render facts as an aligned, newline-separated block.

    Keys of valued facts are padded to the longest such key.  When any value
    spans several lines, alignment is dropped and every value is printed on
    its own lines under its key, indented by four spaces.
    """
    facts = list(facts)
    longest_key = 0
    multiline = False
    for item in facts:
        if item.value is not None:
            longest_key = max(longest_key, len(item.key))
            multiline = multiline or "\n" in item.value

    lines: list[str] = []
    for item in facts:
        if item.value is None:
            lines.append(item.key)
        elif multiline:
            indented = "\n".join(_INDENT + line for line in item.value.split("\n"))
            lines.append(f"{item.key}:\n{indented}")
        else:
            lines.append(f"{item.key.ljust(longest_key)}: {item.value}")
    return "\n".join(lines)
