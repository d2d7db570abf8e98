"""Hand categories."""

from __future__ import annotations

from enum import IntEnum


class Category(IntEnum):
    """Hand category (lower is better)."""

    STRAIGHT_FLUSH = 1
    FOUR_OF_A_KIND = 2
    FULL_HOUSE = 3
    FLUSH = 4
    STRAIGHT = 5
    THREE_OF_A_KIND = 6
    TWO_PAIR = 7
    ONE_PAIR = 8
    HIGH_CARD = 9


NUM_CATEGORIES = 9

CATEGORY_NAMES = {
    Category.STRAIGHT_FLUSH: "Straight Flush",
    Category.FOUR_OF_A_KIND: "Four of a Kind",
    Category.FULL_HOUSE: "Full House",
    Category.FLUSH: "Flush",
    Category.STRAIGHT: "Straight",
    Category.THREE_OF_A_KIND: "Three of a Kind",
    Category.TWO_PAIR: "Two Pair",
    Category.ONE_PAIR: "One Pair",
    Category.HIGH_CARD: "High Card",
}


def category_name(category: int) -> str:
    """Get human-readable category name, 'Unknown' outside 1-9."""
    return CATEGORY_NAMES.get(category, "Unknown")
