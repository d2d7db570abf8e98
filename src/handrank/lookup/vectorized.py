"""
Vectorized five-card classification.

Classifies many hands at once from (batch, 5) rank/suit arrays and
produces the same keys as HandDescriptor.key, one row per hand.
"""

from __future__ import annotations

import numpy as np

from ..engine import DECK_SIZE, HAND_SIZE, KEY_SIZE, Category, Combinations, standard_deck
from ..engine.classifier import FIELD_BITS
from ..engine.errors import InvalidHandError

_DECK = standard_deck()
DECK_RANKS = np.array([card.rank for card in _DECK], dtype=np.int16)
DECK_SUITS = np.array([card.suit for card in _DECK], dtype=np.int16)
DECK_RANKS.flags.writeable = False
DECK_SUITS.flags.writeable = False

# Sort weight separating rank-count groups (ranks fit in 4 bits)
_COUNT_WEIGHT = 1 << FIELD_BITS


def combination_index_array(n: int, k: int) -> np.ndarray:
    """All k-of-n index tuples as a (C(n, k), k) array."""
    combos = Combinations(n, k)
    return np.array(list(combos), dtype=np.intp).reshape(len(combos), k)


def check_card_indices(indices: np.ndarray, width: int) -> np.ndarray:
    """
    Validate a (batch, width) array of distinct deck indices.

    Raises:
        InvalidHandError: Wrong shape, out-of-range or duplicate cards
    """
    indices = np.asarray(indices)
    if indices.ndim != 2 or indices.shape[1] != width:
        raise InvalidHandError(f"Expected shape (batch, {width}), got {indices.shape}")
    if not np.issubdtype(indices.dtype, np.integer):
        raise InvalidHandError(f"Card indices must be integers, got {indices.dtype}")
    if indices.size and (indices.min() < 0 or indices.max() >= DECK_SIZE):
        raise InvalidHandError("Card indices must be in [0, 51]")
    if width > 1 and (np.diff(np.sort(indices, axis=1), axis=1) == 0).any():
        raise InvalidHandError("Duplicate cards in batch")
    return indices.astype(np.intp, copy=False)


def classify_batch(ranks: np.ndarray, suits: np.ndarray) -> np.ndarray:
    """
    Classify a batch of 5-card hands.

    Args:
        ranks: (batch, 5) ranks 2-14
        suits: (batch, 5) suits 0-3

    Returns:
        (batch, 6) uint8 keys: category then 5 tiebreakers padded with 0
    """
    ranks = np.asarray(ranks, dtype=np.int16)
    suits = np.asarray(suits, dtype=np.int16)
    if ranks.ndim != 2 or ranks.shape[1] != HAND_SIZE or suits.shape != ranks.shape:
        raise InvalidHandError(
            f"Expected matching (batch, {HAND_SIZE}) arrays, got {ranks.shape} and {suits.shape}"
        )

    # How often each card's rank occurs in its hand
    counts = (ranks[:, :, None] == ranks[:, None, :]).sum(axis=2)

    # Order by (count, rank) descending: quads, trips, pairs, singles
    grouped = -np.sort(-(counts * _COUNT_WEIGHT + ranks), axis=1)
    grouped_ranks = grouped % _COUNT_WEIGHT
    max_count = grouped[:, 0] // _COUNT_WEIGHT

    # First card of each rank group; equal ranks are adjacent
    first = np.ones(grouped_ranks.shape, dtype=bool)
    first[:, 1:] = grouped_ranks[:, 1:] != grouped_ranks[:, :-1]
    n_distinct = first.sum(axis=1)

    # Move one rank per group to the front, pad the rest with 0
    order = np.argsort(~first, axis=1, kind="stable")
    tiebreakers = np.take_along_axis(np.where(first, grouped_ranks, 0), order, axis=1)

    high = grouped_ranks[:, 0]
    all_distinct = n_distinct == HAND_SIZE
    wheel = all_distinct & (high == 14) & (grouped_ranks[:, 1] == 5)
    straight = all_distinct & ((high - grouped_ranks[:, 4] == 4) | wheel)
    straight_top = np.where(wheel, 5, high)
    flush = (suits == suits[:, :1]).all(axis=1)

    category = np.select(
        [
            straight & flush,
            max_count == 4,
            (max_count == 3) & (n_distinct == 2),
            flush,
            straight,
            max_count == 3,
            (max_count == 2) & (n_distinct == 3),
            max_count == 2,
        ],
        [
            Category.STRAIGHT_FLUSH,
            Category.FOUR_OF_A_KIND,
            Category.FULL_HOUSE,
            Category.FLUSH,
            Category.STRAIGHT,
            Category.THREE_OF_A_KIND,
            Category.TWO_PAIR,
            Category.ONE_PAIR,
        ],
        default=Category.HIGH_CARD,
    )

    keys = np.zeros((ranks.shape[0], KEY_SIZE), dtype=np.uint8)
    keys[:, 0] = category
    keys[:, 1:] = tiebreakers
    # Straights are described by their top card alone
    keys[straight, 1:] = 0
    keys[straight, 1] = straight_top[straight]
    return keys


def classify_indices(indices: np.ndarray) -> np.ndarray:
    """Classify a (batch, 5) array of deck indices; see classify_batch."""
    indices = check_card_indices(indices, HAND_SIZE)
    return classify_batch(DECK_RANKS[indices], DECK_SUITS[indices])


def pack_keys(keys: np.ndarray) -> np.ndarray:
    """Pack (batch, 6) keys into int64 codes matching HandDescriptor.code."""
    keys = np.asarray(keys)
    codes = np.zeros(keys.shape[0], dtype=np.int64)
    for column in range(KEY_SIZE):
        codes = (codes << FIELD_BITS) | keys[:, column].astype(np.int64)
    return codes


def unpack_codes(codes: np.ndarray) -> np.ndarray:
    """Inverse of pack_keys."""
    codes = np.asarray(codes, dtype=np.int64)
    mask = (1 << FIELD_BITS) - 1
    shifts = FIELD_BITS * np.arange(KEY_SIZE - 1, -1, -1, dtype=np.int64)
    return ((codes[:, None] >> shifts) & mask).astype(np.uint8)
