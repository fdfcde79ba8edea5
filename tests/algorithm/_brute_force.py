"""Exhaustive reference for maximum-cardinality matching on small graphs."""

from __future__ import annotations

from collections.abc import Iterator


class AllMatchings:
    """Every matching of a bipartite graph, including the empty one.

    Iterating yields each matching exactly once as a ``{lhs: rhs}`` dict.
    Each ``iter()`` starts over, so the sequence can be walked repeatedly.
    Exponential; only for graphs of a handful of vertices.
    """

    def __init__(self, adjacency: dict[int, list[int]]) -> None:
        self._lefts = list(adjacency)
        self._adjacency = adjacency

    def __iter__(self) -> Iterator[dict[int, int]]:
        lefts = self._lefts
        # each state: (index of the next left vertex, partial matching)
        stack: list[tuple[int, dict[int, int]]] = [(0, {})]
        while stack:
            index, partial = stack.pop()
            if index == len(lefts):
                yield partial
                continue
            lhs = lefts[index]
            used = set(partial.values())
            stack.append((index + 1, partial))
            for rhs in self._adjacency[lhs]:
                if rhs not in used:
                    stack.append((index + 1, {**partial, lhs: rhs}))


def brute_force_matching_size(adjacency: dict[int, list[int]]) -> int:
    return max(len(matching) for matching in AllMatchings(adjacency))
