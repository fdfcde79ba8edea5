"""Exception types raised by correspondence-diff.

``IncompatibleTypeError`` is the one failure that aborts an assertion
outright: it signals that the correspondence was asked to compare elements
of a type it does not accept.  Every other exception raised by a
correspondence, key function or diff formatter is recorded and reported
as part of the failure message instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from correspondence_diff.facts import make_message

if TYPE_CHECKING:
    from collections.abc import Iterable

    from correspondence_diff.facts import Fact

__all__ = ["CorrespondenceAssertionError", "IncompatibleTypeError"]


class IncompatibleTypeError(TypeError):
    """An element's runtime type is not accepted by the correspondence."""


class CorrespondenceAssertionError(AssertionError):
    """A correspondence assertion failed.

    Attributes:
        facts: The ordered key/value facts describing the failure.  The
            exception message is these facts rendered by ``make_message``.
    """

    def __init__(self, facts: Iterable[Fact]) -> None:
        self.facts: tuple[Fact, ...] = tuple(facts)
        super().__init__(make_message(self.facts))
