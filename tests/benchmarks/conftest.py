"""Deterministic collection generators for performance benchmarks.

All generators produce fixed, reproducible collections. No random values.
Three tiers: 10, 100 and 500 elements.
Each tier provides an "in order" pair (decided by the linear fast path),
a "shuffled" pair (needs the full candidate graph and matching) and a
"failing" pair (one expected element without a candidate).
"""

from __future__ import annotations

import pytest


def _hex_strings(count: int) -> list[str]:
    return [hex(i) for i in range(count)]


def _make_in_order(count: int) -> tuple[list[str], list[int]]:
    """Actual strings parse to the expected ints position by position."""
    return _hex_strings(count), list(range(count))


def _make_shuffled(count: int) -> tuple[list[str], list[int]]:
    """Same elements, actual side rotated and interleaved."""
    actual = _hex_strings(count)
    # stride 7 is coprime with every tier size, so this is a permutation
    shuffled = [actual[(i * 7) % count] for i in range(count)]
    return shuffled, list(range(count))


def _make_failing(count: int) -> tuple[list[str], list[int]]:
    """Last actual element parses to nothing expected."""
    actual = _hex_strings(count)
    actual[-1] = "not a number"
    return list(reversed(actual)), list(range(count))


# --- Fixtures for each size tier ---


@pytest.fixture
def pair_10_in_order() -> tuple[list[str], list[int]]:
    return _make_in_order(10)


@pytest.fixture
def pair_10_shuffled() -> tuple[list[str], list[int]]:
    return _make_shuffled(10)


@pytest.fixture
def pair_100_shuffled() -> tuple[list[str], list[int]]:
    return _make_shuffled(100)


@pytest.fixture
def pair_100_failing() -> tuple[list[str], list[int]]:
    return _make_failing(100)


@pytest.fixture
def pair_500_in_order() -> tuple[list[str], list[int]]:
    return _make_in_order(500)


@pytest.fixture
def pair_500_shuffled() -> tuple[list[str], list[int]]:
    return _make_shuffled(500)
