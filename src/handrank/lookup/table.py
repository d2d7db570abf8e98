"""Canonical table of every distinct five-card hand class."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from functools import cmp_to_key
from math import comb
from types import MappingProxyType
from typing import Iterable, Mapping

import numpy as np

from ..engine import (
    DECK_SIZE,
    HAND_SIZE,
    Category,
    Combinations,
    HandDescriptor,
    classify_unchecked,
    compare_descriptors,
    standard_deck,
)
from ..engine.errors import InvalidHandError, TableIntegrityError
from .config import TableConfig
from .utils import format_number, format_time
from .vectorized import DECK_RANKS, DECK_SUITS, classify_batch, pack_keys, unpack_codes

logger = logging.getLogger(__name__)

# Distinct hand classes in a standard 52-card deck
EXPECTED_CLASSES = 7462
NUM_COMBINATIONS = comb(DECK_SIZE, HAND_SIZE)


@dataclass(frozen=True, eq=False)
class CanonicalTable:
    """
    Dense ranking of every distinct 5-card hand class.

    Rank 1 is the strongest class (royal flush), rank len(table) the
    weakest (7-5-4-3-2 offsuit). Immutable once built and safe to share
    between threads.

    Attributes:
        ordered_classes: Descriptors, strongest first (rank r at r - 1)
        rank_of: Descriptor key -> rank
        codes: Packed descriptor codes, sorted ascending
        code_ranks: Rank for each entry of codes
        categories: Category by rank (index 0 unused)
    """

    ordered_classes: tuple[HandDescriptor, ...]
    rank_of: Mapping[tuple[int, ...], int]
    codes: np.ndarray
    code_ranks: np.ndarray
    categories: np.ndarray

    @classmethod
    def from_descriptors(
        cls,
        descriptors: Iterable[HandDescriptor],
        expected: int | None = EXPECTED_CLASSES,
    ) -> CanonicalTable:
        """
        Deduplicate, sort strongest first and assign dense ranks.

        Args:
            descriptors: Descriptors, duplicates allowed
            expected: Required number of distinct classes (None skips the check)

        Raises:
            TableIntegrityError: Distinct class count differs from expected
        """
        ordered = tuple(sorted(set(descriptors), key=cmp_to_key(compare_descriptors)))
        if expected is not None and len(ordered) != expected:
            raise TableIntegrityError(
                f"Expected {expected} distinct hand classes, found {len(ordered)}"
            )

        rank_of = MappingProxyType({d.key: rank for rank, d in enumerate(ordered, start=1)})

        codes_by_rank = np.array([d.code for d in ordered], dtype=np.int64)
        order = np.argsort(codes_by_rank, kind="stable")
        codes = codes_by_rank[order]
        code_ranks = (order + 1).astype(np.int32)
        categories = np.array([0, *(d.category for d in ordered)], dtype=np.int8)
        for array in (codes, code_ranks, categories):
            array.flags.writeable = False

        return cls(ordered, rank_of, codes, code_ranks, categories)

    def __len__(self) -> int:
        return len(self.ordered_classes)

    def __contains__(self, descriptor: object) -> bool:
        return isinstance(descriptor, HandDescriptor) and descriptor.key in self.rank_of

    def rank(self, descriptor: HandDescriptor) -> int:
        """
        Look up the rank of a descriptor.

        Raises:
            TableIntegrityError: Descriptor is not in the table
        """
        try:
            return self.rank_of[descriptor.key]
        except KeyError:
            raise TableIntegrityError(f"Hand class not in canonical table: {descriptor}") from None

    def descriptor(self, rank: int) -> HandDescriptor:
        """Get the hand class at a rank (1 = best)."""
        self._check_rank(rank)
        return self.ordered_classes[rank - 1]

    def category_of(self, rank: int) -> Category:
        """Get the category of the hand class at a rank."""
        self._check_rank(rank)
        return Category(int(self.categories[rank]))

    def category_bounds(self) -> dict[Category, tuple[int, int]]:
        """First and last rank of each category."""
        bounds: dict[Category, tuple[int, int]] = {}
        for rank, descriptor in enumerate(self.ordered_classes, start=1):
            first, _ = bounds.get(descriptor.category, (rank, rank))
            bounds[descriptor.category] = (first, rank)
        return bounds

    def ranks_for_codes(self, codes: np.ndarray) -> np.ndarray:
        """
        Vectorized rank lookup.

        Args:
            codes: Packed descriptor codes (any shape)

        Returns:
            int32 ranks, same shape as codes

        Raises:
            TableIntegrityError: Any code is not in the table
        """
        codes = np.asarray(codes, dtype=np.int64)
        positions = np.searchsorted(self.codes, codes)
        positions = np.minimum(positions, len(self.codes) - 1)
        missing = self.codes[positions] != codes
        if missing.any():
            code = int(codes[missing].flat[0])
            raise TableIntegrityError(
                f"Hand class not in canonical table: {HandDescriptor.from_code(code)}"
            )
        return self.code_ranks[positions]

    def _check_rank(self, rank: int) -> None:
        if not 1 <= rank <= len(self):
            raise InvalidHandError(f"Rank must be in [1, {len(self)}], got {rank}")


def build_canonical_table(config: TableConfig | None = None) -> CanonicalTable:
    """
    Enumerate every 5-card hand and build the canonical table.

    Args:
        config: Build settings (default: numpy backend)

    Returns:
        CanonicalTable with exactly 7462 classes

    Raises:
        TableIntegrityError: Enumeration or class count is wrong
    """
    config = config or TableConfig()
    combos = Combinations(DECK_SIZE, HAND_SIZE)

    logger.info(
        "Building canonical table from %s hands (backend=%s, workers=%d)",
        format_number(len(combos)),
        config.backend,
        config.n_workers,
    )
    start = time.perf_counter()

    if config.backend == "numpy":
        seen, keys = _collect_numpy(combos, config.chunk_size)
    else:
        seen, keys = _collect_python(combos, config.n_workers)

    if seen != NUM_COMBINATIONS:
        raise TableIntegrityError(f"Enumerated {seen} hands, expected {NUM_COMBINATIONS}")

    table = CanonicalTable.from_descriptors(HandDescriptor.from_key(key) for key in keys)
    logger.info(
        "Canonical table built: %d classes in %s",
        len(table),
        format_time(time.perf_counter() - start),
    )
    return table


def _collect_numpy(combos: Combinations, chunk_size: int) -> tuple[int, set[tuple[int, ...]]]:
    """Classify combinations chunk by chunk; return (hands seen, distinct keys)."""
    seen = 0
    chunk_codes = []
    for chunk in combos.chunks(chunk_size):
        indices = np.array(chunk, dtype=np.intp)
        keys = classify_batch(DECK_RANKS[indices], DECK_SUITS[indices])
        chunk_codes.append(np.unique(pack_keys(keys)))
        seen += len(chunk)
        logger.debug("Classified %s/%s hands", format_number(seen), format_number(len(combos)))

    unique = np.unique(np.concatenate(chunk_codes))
    return seen, {tuple(int(v) for v in row) for row in unpack_codes(unique)}


def _classify_range(bounds: tuple[int, int]) -> tuple[int, set[tuple[int, ...]]]:
    """Worker: classify combinations at positions [start, stop) with the scalar classifier."""
    start, stop = bounds
    deck = standard_deck()
    seen = 0
    keys: set[tuple[int, ...]] = set()
    for indices in Combinations(DECK_SIZE, HAND_SIZE).slice(start, stop):
        keys.add(classify_unchecked([deck[i] for i in indices]).key)
        seen += 1
    return seen, keys


def _collect_python(combos: Combinations, n_workers: int) -> tuple[int, set[tuple[int, ...]]]:
    """Classify every combination in-process or across worker processes."""
    ranges = combos.ranges(n_workers)
    if n_workers == 1:
        results = [_classify_range(bounds) for bounds in ranges]
    else:
        with ProcessPoolExecutor(max_workers=n_workers) as pool:
            results = list(pool.map(_classify_range, ranges))

    seen = 0
    keys: set[tuple[int, ...]] = set()
    for count, partial in results:
        seen += count
        keys |= partial
        logger.debug("Merged %s hands, %d distinct classes so far", format_number(seen), len(keys))
    return seen, keys
