"""pytest plugin for correspondence-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from correspondence_diff import (
    Correspondence,
    CorrespondenceAssertionError,
    MatchConfig,
    check_elements,
)


@pytest.fixture(scope="session")
def assert_elements_correspond() -> Any:
    """Fixture that returns a callable collection-correspondence asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to check_elements() which creates a fresh ElementsComparator
    per call).

    Usage in tests::

        def test_parsed(assert_elements_correspond):
            parses_to = Correspondence.from_predicate(
                lambda a, e: int(a, 0) == e, "parses to"
            )
            assert_elements_correspond(["+64", "0x80"], [128, 64], parses_to)

        def test_missing(assert_elements_correspond):
            with pytest.raises(AssertionError, match=r"missing \\(1\\)"):
                assert_elements_correspond([1, 2], [1, 2, 3])

    Args:
        No arguments -- the fixture is injected by pytest.

    Returns:
        A callable ``_assert(actual, expected, correspondence=None, config=None,
        paired_by=None) -> None`` that raises ``CorrespondenceAssertionError``
        (an ``AssertionError``) when the assertion fails.
    """

    def _assert(
        actual: Any,
        expected: Any,
        correspondence: Correspondence[Any, Any] | None = None,
        config: MatchConfig | None = None,
        paired_by: Any = None,
    ) -> None:
        """Assert that ``actual`` corresponds to ``expected``.

        Args:
            actual:         The elements produced by the code under test.
            expected:       The reference elements.
            correspondence: Element relation.  Defaults to equality.
            config:         Optional MatchConfig (mode, in_order, ...).
                            Defaults to exactly, in any order.
            paired_by:      Optional key function (or pair of key functions)
                            used to pair missing and unexpected elements.

        Raises:
            CorrespondenceAssertionError: With the failure facts as message.
        """
        verdict = check_elements(
            actual,
            expected,
            correspondence=correspondence,
            config=config,
            paired_by=paired_by,
        )
        if not verdict.passed:
            raise CorrespondenceAssertionError(verdict.facts)

    return _assert
