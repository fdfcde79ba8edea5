"""Maximum-cardinality bipartite matching via augmenting paths (Kuhn).

The candidate graph of an assertion connects actual positions (left-hand
side) to the expected positions (right-hand side) they correspond to.  A
maximum matching pairs as many of them 1:1 as possible; whatever it leaves
unpaired is what the failure message reports.

Left-hand vertices are processed in encounter order.  For each one an
alternating path is searched depth-first through already-matched
right-hand vertices; when the path ends at a free right-hand vertex it is
flipped, growing the matching by one.  The search is iterative, so deep
paths cannot hit the recursion limit.  O(V * E).

The result is *a* maximum matching.  When several exist, which one is
returned depends only on the iteration order of the input edges.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import TypeVar

__all__ = ["maximum_cardinality_matching"]

logger = logging.getLogger(__name__)

L = TypeVar("L", bound=Hashable)
R = TypeVar("R", bound=Hashable)


def _adjacency(
    edges: Mapping[L, Iterable[R]] | Iterable[tuple[L, R]],
) -> dict[L, list[R]]:
    adjacency: dict[L, list[R]] = {}
    seen: set[tuple[L, R]] = set()
    if isinstance(edges, Mapping):
        pairs: Iterable[tuple[L, R]] = (
            (lhs, rhs) for lhs, targets in edges.items() for rhs in targets
        )
        for lhs in edges:
            if lhs is None:
                msg = "left-hand labels must not be None"
                raise ValueError(msg)
            adjacency[lhs] = []
    else:
        pairs = edges
    for lhs, rhs in pairs:
        if lhs is None or rhs is None:
            msg = f"edge labels must not be None, got ({lhs!r}, {rhs!r})"
            raise ValueError(msg)
        neighbours = adjacency.setdefault(lhs, [])
        if (lhs, rhs) not in seen:
            seen.add((lhs, rhs))
            neighbours.append(rhs)
    return adjacency


def _augment(
    root: L,
    adjacency: dict[L, list[R]],
    lhs_to_rhs: dict[L, R],
    rhs_to_lhs: dict[R, L],
) -> bool:
    """Search an augmenting path from the free vertex ``root`` and flip it."""
    visited: set[R] = set()
    frames: list[tuple[L, Iterator[R]]] = [(root, iter(adjacency[root]))]
    # path[k] is the right-hand vertex taken out of frames[k]
    path: list[R] = []
    while frames:
        lhs, neighbours = frames[-1]
        for rhs in neighbours:
            if rhs in visited:
                continue
            visited.add(rhs)
            path.append(rhs)
            owner = rhs_to_lhs.get(rhs)
            if owner is None:
                for (left, _), right in zip(frames, path, strict=True):
                    lhs_to_rhs[left] = right
                    rhs_to_lhs[right] = left
                return True
            frames.append((owner, iter(adjacency.get(owner, ()))))
            break
        else:
            frames.pop()
            if path:
                path.pop()
    return False


def maximum_cardinality_matching(
    edges: Mapping[L, Iterable[R]] | Iterable[tuple[L, R]],
) -> dict[L, R]:
    """Compute a maximum-cardinality matching of a bipartite graph.

    Args:
        edges: Either a mapping from each left-hand label to the right-hand
            labels it is connected to, or an iterable of ``(lhs, rhs)``
            pairs.  Left and right labels live in separate universes, so the
            same label may appear on both sides.  Duplicate edges are
            ignored.

    Returns:
        A dict from matched left-hand labels to their right-hand partners,
        in left-hand encounter order.  Its values are distinct, so it can be
        inverted with ``{v: k for k, v in result.items()}``.

    Raises:
        ValueError: If any label on either side is ``None``.
    """
    adjacency = _adjacency(edges)
    lhs_to_rhs: dict[L, R] = {}
    rhs_to_lhs: dict[R, L] = {}
    for lhs in adjacency:
        _augment(lhs, adjacency, lhs_to_rhs, rhs_to_lhs)
    logger.debug(
        "matched %d of %d left-hand vertices", len(lhs_to_rhs), len(adjacency)
    )
    return {lhs: lhs_to_rhs[lhs] for lhs in adjacency if lhs in lhs_to_rhs}
