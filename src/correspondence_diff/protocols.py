"""Callable protocols for correspondence-diff extension points.

Defines the structural interfaces that user-supplied callables must satisfy:
the binary predicate behind a ``Correspondence``, the element transforms used
by ``Correspondence.transforming``, diff formatters, and the key functions
used to pair missing and unexpected elements in failure messages.

Plain functions and lambdas satisfy these protocols at runtime, no
inheritance required.

Example::

    from correspondence_diff.protocols import BinaryPredicate, KeyFunction

    def same_id(actual, expected) -> bool:
        return actual.id == expected.id

    assert isinstance(same_id, BinaryPredicate)  # True, structural conformance
    assert isinstance(lambda record: record.id, KeyFunction)
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

__all__ = ["BinaryPredicate", "DiffFormatter", "ElementTransform", "KeyFunction"]


@runtime_checkable
class BinaryPredicate(Protocol):
    """Decides whether an actual element corresponds to an expected element.

    Implementations must be pure: the engine may call them any number of
    times, in any order, for any (actual, expected) pair.  Raising is
    allowed and is recorded as a comparison failure for that pair.
    """

    def __call__(self, actual: Any, expected: Any) -> bool: ...


@runtime_checkable
class ElementTransform(Protocol):
    """Maps an element to the value that is compared for equality."""

    def __call__(self, element: Any) -> Any: ...


@runtime_checkable
class DiffFormatter(Protocol):
    """Describes how an actual element differs from an expected element.

    Returns ``None`` when no meaningful diff can be produced.  Used only for
    failure messages; never affects whether an assertion passes.
    """

    def __call__(self, actual: Any, expected: Any) -> str | None: ...


@runtime_checkable
class KeyFunction(Protocol):
    """Extracts the pairing key of an element (``None`` means "no key")."""

    def __call__(self, element: Any) -> Any: ...
