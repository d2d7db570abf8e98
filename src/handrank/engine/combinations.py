"""Index-based k-of-n combination generator."""

from __future__ import annotations

from itertools import combinations, islice
from math import comb
from typing import Iterator, Sequence, TypeVar

T = TypeVar("T")


class Combinations:
    """
    Lazy, restartable sequence of ascending index tuples.

    Iterating yields every k-subset of range(n) exactly once, in
    lexicographic order. Each call to iter() starts over.
    """

    def __init__(self, n: int, k: int):
        """
        Initialize generator.

        Args:
            n: Size of the pool
            k: Size of each combination
        """
        if n < 0 or not 0 <= k <= n:
            raise ValueError(f"Need 0 <= k <= n, got n={n}, k={k}")
        self.n = n
        self.k = k

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        return combinations(range(self.n), self.k)

    def __len__(self) -> int:
        return comb(self.n, self.k)

    def __repr__(self) -> str:
        return f"Combinations(n={self.n}, k={self.k})"

    def slice(self, start: int, stop: int | None = None) -> Iterator[tuple[int, ...]]:
        """Iterate combinations with positions in [start, stop)."""
        return islice(iter(self), start, stop)

    def chunks(self, size: int) -> Iterator[list[tuple[int, ...]]]:
        """
        Iterate in consecutive lists of at most `size` combinations.

        Args:
            size: Maximum chunk length

        Returns:
            Iterator over chunks covering every combination once
        """
        if size <= 0:
            raise ValueError(f"Chunk size must be positive, got {size}")
        it = iter(self)
        while chunk := list(islice(it, size)):
            yield chunk

    def ranges(self, parts: int) -> list[tuple[int, int]]:
        """Split positions 0..len-1 into `parts` contiguous (start, stop) ranges."""
        total = len(self)
        parts = max(1, min(parts, total))
        bounds = [total * i // parts for i in range(parts + 1)]
        return list(zip(bounds[:-1], bounds[1:]))

    def select(self, items: Sequence[T]) -> Iterator[tuple[T, ...]]:
        """Yield each combination as a tuple of items instead of indices."""
        if len(items) != self.n:
            raise ValueError(f"Expected {self.n} items, got {len(items)}")
        for indices in self:
            yield tuple(items[i] for i in indices)


def choose(items: Sequence[T], k: int) -> Iterator[tuple[T, ...]]:
    """All k-subsets of items."""
    return Combinations(len(items), k).select(items)
