"""Best-of-seven hand evaluation against the canonical table."""

from __future__ import annotations

import threading
from typing import NamedTuple, Sequence

import numpy as np

from ..engine import (
    HAND_SIZE,
    Card,
    Category,
    HandDescriptor,
    category_name,
    choose,
    classify_unchecked,
)
from ..engine.errors import InvalidHandError
from .config import TableConfig
from .table import CanonicalTable, build_canonical_table
from .vectorized import (
    DECK_RANKS,
    DECK_SUITS,
    check_card_indices,
    classify_batch,
    combination_index_array,
    pack_keys,
)

SHOWDOWN_SIZE = 7

# (21, 5) positions of every 5-card subset of 7 cards
_SUBSETS_OF_SEVEN = combination_index_array(SHOWDOWN_SIZE, HAND_SIZE)
_SUBSETS_OF_SEVEN.flags.writeable = False


class Evaluation(NamedTuple):
    """Result of a showdown evaluation."""

    rank: int  # 1 (best) .. 7462 (worst)
    category: Category


def best_descriptor(cards: Sequence[Card]) -> HandDescriptor:
    """
    Find the strongest 5-card hand among 5 to 7 cards.

    Args:
        cards: 5-7 distinct cards

    Returns:
        Descriptor of the best 5-card subset; the first one found wins ties

    Raises:
        InvalidHandError: Wrong number of cards or duplicates
    """
    if not HAND_SIZE <= len(cards) <= SHOWDOWN_SIZE:
        raise InvalidHandError(f"Need 5 to 7 cards, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise InvalidHandError(f"Duplicate cards: {list(cards)}")

    best: HandDescriptor | None = None
    for combo in choose(cards, HAND_SIZE):
        descriptor = classify_unchecked(combo)
        if best is None or descriptor.is_better(best):
            best = descriptor
    return best


def evaluate_best(cards: Sequence[Card], table: CanonicalTable) -> Evaluation:
    """
    Evaluate the best 5-card hand out of exactly 7 cards.

    Args:
        cards: 7 distinct cards (2 hole cards + 5 board cards)
        table: Built canonical table

    Returns:
        Evaluation(rank, category)

    Raises:
        InvalidHandError: Not exactly 7 distinct cards
        TableIntegrityError: Best hand is missing from the table
    """
    if len(cards) != SHOWDOWN_SIZE:
        raise InvalidHandError(f"Need exactly {SHOWDOWN_SIZE} cards, got {len(cards)}")
    best = best_descriptor(cards)
    return Evaluation(table.rank(best), best.category)


def evaluate_batch(hands: np.ndarray, table: CanonicalTable) -> tuple[np.ndarray, np.ndarray]:
    """
    Evaluate many 7-card hands at once.

    Args:
        hands: (batch, 7) deck indices (Card.index), distinct within a row
        table: Built canonical table

    Returns:
        (ranks, categories), each of shape (batch,)
    """
    hands = check_card_indices(hands, SHOWDOWN_SIZE)
    subsets = hands[:, _SUBSETS_OF_SEVEN].reshape(-1, HAND_SIZE)  # (batch * 21, 5)
    keys = classify_batch(DECK_RANKS[subsets], DECK_SUITS[subsets])
    ranks = table.ranks_for_codes(pack_keys(keys)).reshape(-1, len(_SUBSETS_OF_SEVEN))
    best = ranks.min(axis=1)
    return best, table.categories[best]


class HandEvaluator:
    """
    Hand evaluator backed by the canonical table.

    Builds the table on construction unless one is supplied; share one
    instance (or one table) across the process.
    """

    def __init__(self, table: CanonicalTable | None = None, config: TableConfig | None = None):
        """
        Initialize evaluator.

        Args:
            table: Prebuilt canonical table (built from config if None)
            config: Table build settings
        """
        self.table = table if table is not None else build_canonical_table(config)

    def evaluate(self, hole_cards: Sequence[Card], board: Sequence[Card]) -> Evaluation:
        """
        Evaluate the best 5-card hand.

        Args:
            hole_cards: Player's hole cards
            board: Community cards (3-5 cards)

        Returns:
            Evaluation(rank, category)
        """
        return self.evaluate_cards(list(hole_cards) + list(board))

    def evaluate_cards(self, cards: Sequence[Card]) -> Evaluation:
        """Evaluate 5-7 cards."""
        best = best_descriptor(cards)
        return Evaluation(self.table.rank(best), best.category)

    def compare_hands(
        self, hands: list[tuple[Sequence[Card], int]], board: Sequence[Card]
    ) -> list[int]:
        """
        Compare multiple hands and return winners.

        Args:
            hands: List of (hole_cards, seat) tuples
            board: Community cards

        Returns:
            List of winning seat numbers (can be multiple for ties)
        """
        if not hands:
            return []

        evaluations = [(self.evaluate(hole_cards, board).rank, seat) for hole_cards, seat in hands]
        best_rank = min(rank for rank, _ in evaluations)
        return [seat for rank, seat in evaluations if rank == best_rank]

    def get_hand_name(self, category: int) -> str:
        """Get human-readable hand name from a category."""
        return category_name(category)


_default_evaluator: HandEvaluator | None = None
_default_lock = threading.Lock()


def get_default_evaluator() -> HandEvaluator:
    """Shared evaluator, built once on first use even under concurrent callers."""
    global _default_evaluator
    if _default_evaluator is None:
        with _default_lock:
            if _default_evaluator is None:
                _default_evaluator = HandEvaluator()
    return _default_evaluator


def evaluate_hand(hole_cards: Sequence[Card], board: Sequence[Card]) -> Evaluation:
    """Convenience function to evaluate a hand."""
    return get_default_evaluator().evaluate(hole_cards, board)


def compare_hands(hands: list[tuple[Sequence[Card], int]], board: Sequence[Card]) -> list[int]:
    """Convenience function to compare hands."""
    return get_default_evaluator().compare_hands(hands, board)
