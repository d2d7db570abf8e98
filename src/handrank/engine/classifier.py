"""Five-card hand classifier."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from .cards import MAX_RANK, Card
from .categories import Category, category_name
from .errors import InvalidHandError

HAND_SIZE = 5
KEY_SIZE = 1 + HAND_SIZE  # category + up to 5 tiebreakers
KEY_PADDING = 0  # Below every real rank
FIELD_BITS = 4

WHEEL = [MAX_RANK, 5, 4, 3, 2]


@dataclass(frozen=True, slots=True)
class HandDescriptor:
    """
    Complete strength descriptor for a 5-card hand.

    Two descriptors with equal category and tiebreakers are exactly
    equal in value. Tiebreakers are ranks, most significant first.
    """

    category: Category
    tiebreakers: tuple[int, ...]

    @property
    def key(self) -> tuple[int, ...]:
        """Fixed-size identity: (category, t1..t5), padded with 0."""
        padding = (KEY_PADDING,) * (HAND_SIZE - len(self.tiebreakers))
        return (int(self.category), *self.tiebreakers, *padding)

    @property
    def code(self) -> int:
        """Key packed into one integer, 4 bits per field."""
        value = 0
        for field in self.key:
            value = (value << FIELD_BITS) | field
        return value

    @property
    def name(self) -> str:
        return category_name(self.category)

    @classmethod
    def from_key(cls, key: Sequence[int]) -> HandDescriptor:
        """Inverse of `key`."""
        category, *rest = (int(v) for v in key)
        return cls(Category(category), tuple(v for v in rest if v != KEY_PADDING))

    @classmethod
    def from_code(cls, code: int) -> HandDescriptor:
        """Inverse of `code`."""
        mask = (1 << FIELD_BITS) - 1
        fields = [(code >> (FIELD_BITS * i)) & mask for i in reversed(range(KEY_SIZE))]
        return cls.from_key(fields)

    def is_better(self, other: HandDescriptor) -> bool:
        return compare_descriptors(self, other) < 0


def compare_descriptors(a: HandDescriptor, b: HandDescriptor) -> int:
    """
    Compare two descriptors.

    Returns:
        Negative if a is stronger, positive if b is stronger, 0 if equal.
        Sorting ascending with this comparator puts the strongest first.
    """
    if a.category != b.category:
        return -1 if a.category < b.category else 1

    # Missing trailing tiebreakers count as lower than any rank
    length = max(len(a.tiebreakers), len(b.tiebreakers))
    for i in range(length):
        av = a.tiebreakers[i] if i < len(a.tiebreakers) else -1
        bv = b.tiebreakers[i] if i < len(b.tiebreakers) else -1
        if av != bv:
            return -1 if av > bv else 1
    return 0


def is_better(a: HandDescriptor, b: HandDescriptor) -> bool:
    """True if a is strictly stronger than b."""
    return compare_descriptors(a, b) < 0


def classify(cards: Sequence[Card]) -> HandDescriptor:
    """
    Classify exactly 5 distinct cards.

    Args:
        cards: The hand, in any order

    Returns:
        HandDescriptor of the hand

    Raises:
        InvalidHandError: Not exactly 5 distinct cards
    """
    if len(cards) != HAND_SIZE:
        raise InvalidHandError(f"Need exactly {HAND_SIZE} cards, got {len(cards)}")
    if len(set(cards)) != HAND_SIZE:
        raise InvalidHandError(f"Duplicate cards in hand: {list(cards)}")
    return classify_unchecked(cards)


def classify_unchecked(cards: Sequence[Card]) -> HandDescriptor:
    """Classify 5 cards without validating them."""
    # Extract ranks and suits
    ranks = sorted((c.rank for c in cards), reverse=True)
    is_flush = len({c.suit for c in cards}) == 1
    straight_top = _straight_top(ranks)

    # Bucket ranks by count, each bucket high to low
    counts = Counter(ranks)
    buckets: dict[int, list[int]] = {4: [], 3: [], 2: [], 1: []}
    for rank in sorted(counts, reverse=True):
        buckets[counts[rank]].append(rank)
    quads, trips, pairs, singles = buckets[4], buckets[3], buckets[2], buckets[1]

    if straight_top and is_flush:
        return HandDescriptor(Category.STRAIGHT_FLUSH, (straight_top,))

    if quads:
        return HandDescriptor(Category.FOUR_OF_A_KIND, (quads[0], singles[0]))

    if trips and pairs:
        return HandDescriptor(Category.FULL_HOUSE, (trips[0], pairs[0]))

    if is_flush:
        return HandDescriptor(Category.FLUSH, tuple(ranks))

    if straight_top:
        return HandDescriptor(Category.STRAIGHT, (straight_top,))

    if trips:
        return HandDescriptor(Category.THREE_OF_A_KIND, (trips[0], *singles))

    if len(pairs) == 2:
        return HandDescriptor(Category.TWO_PAIR, (pairs[0], pairs[1], singles[0]))

    if pairs:
        return HandDescriptor(Category.ONE_PAIR, (pairs[0], *singles))

    return HandDescriptor(Category.HIGH_CARD, tuple(ranks))


def _straight_top(ranks: list[int]) -> int:
    """
    Check for straight.

    Args:
        ranks: Sorted ranks (high to low)

    Returns:
        Top card of the straight (5 for the wheel), or 0
    """
    if len(set(ranks)) != HAND_SIZE:
        return 0
    if ranks[0] - ranks[4] == 4:
        return ranks[0]
    if ranks == WHEEL:
        return 5
    return 0
