"""Element rendering and duplicate grouping for failure messages.

All element-to-text conversion used in facts goes through this module so
that messages are consistent: ``None`` renders as ``None``, sequences as
``[a, b]``, the empty string is spelled out, and repeated elements are
collapsed into ``x [k copies]``.

Grouping works on unhashable elements too: two elements belong to the same
group when they have the same type and compare equal.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

__all__ = [
    "EMPTY_STRING",
    "count_duplicates",
    "count_duplicates_and_add_type_info",
    "distinct",
    "group_duplicates",
    "has_matching_to_string_pair",
    "render",
    "render_iterable",
]

EMPTY_STRING = '"" (empty String)'


def render(value: Any) -> str:
    """Return the display form of a single element."""
    if value is None:
        return "None"
    if isinstance(value, str):
        return EMPTY_STRING if value == "" else value
    if isinstance(value, (list, tuple)):
        return render_iterable(value)
    if isinstance(value, Mapping):
        body = ", ".join(f"{render(k)}: {render(v)}" for k, v in value.items())
        return "{" + body + "}"
    return str(value)


def render_iterable(items: Iterable[Any]) -> str:
    return "[" + ", ".join(render(item) for item in items) + "]"


def _same(left: Any, right: Any) -> bool:
    if left is right:
        return True
    return type(left) is type(right) and bool(left == right)


def group_duplicates(items: Iterable[Any]) -> list[tuple[Any, int]]:
    """Group equal elements, preserving first-occurrence order.

    Returns:
        A list of ``(element, count)`` pairs.
    """
    groups: list[list[Any]] = []
    for item in items:
        for group in groups:
            if _same(group[0], item):
                group[1] += 1
                break
        else:
            groups.append([item, 1])
    return [(element, count) for element, count in groups]


def distinct(items: Iterable[Any]) -> list[Any]:
    """Return ``items`` without repeats, in first-occurrence order."""
    return [element for element, _ in group_duplicates(items)]


def _with_copies(text: str, count: int) -> str:
    return text if count == 1 else f"{text} [{count} copies]"


def count_duplicates(items: Iterable[Any]) -> str:
    """Render items as ``a, b [2 copies], c``."""
    return ", ".join(
        _with_copies(render(element), count)
        for element, count in group_duplicates(items)
    )


def _type_name(value: Any) -> str:
    kind = type(value)
    if kind.__module__ == "builtins":
        return kind.__qualname__
    return f"{kind.__module__}.{kind.__qualname__}"


def count_duplicates_and_add_type_info(items: Sequence[Any]) -> str:
    """Like ``count_duplicates``, with the element types spelled out.

    A homogeneous group gets a single ``(type)`` suffix; a mixed group is
    annotated element by element.
    """
    groups = group_duplicates(items)
    type_names = {_type_name(element) for element, _ in groups}
    if len(type_names) == 1:
        return f"{count_duplicates(items)} ({type_names.pop()})"
    return ", ".join(
        _with_copies(f"{render(element)} ({_type_name(element)})", count)
        for element, count in groups
    )


def has_matching_to_string_pair(left: Sequence[Any], right: Sequence[Any]) -> bool:
    """True if some element of ``left`` and some element of ``right`` render
    identically without being equal, so the message needs type info to tell
    them apart."""
    if not left or not right:
        return False
    rendered_right: dict[str, list[Any]] = {}
    for item in right:
        rendered_right.setdefault(render(item), []).append(item)
    for item in left:
        for other in rendered_right.get(render(item), ()):
            if not _same(item, other):
                return True
    return False
