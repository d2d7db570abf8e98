"""Card model and five-card hand classification."""

from .cards import (
    DECK_SIZE,
    PRIMES,
    Card,
    Suit,
    display,
    format_cards,
    parse_cards,
    prime_product,
    standard_deck,
)
from .categories import CATEGORY_NAMES, NUM_CATEGORIES, Category, category_name
from .classifier import (
    HAND_SIZE,
    KEY_SIZE,
    HandDescriptor,
    classify,
    classify_unchecked,
    compare_descriptors,
    is_better,
)
from .combinations import Combinations, choose
from .errors import HandRankError, InvalidCardError, InvalidHandError, TableIntegrityError

__all__ = [
    # Cards
    "Card",
    "Suit",
    "display",
    "format_cards",
    "parse_cards",
    "prime_product",
    "standard_deck",
    # Categories
    "Category",
    "category_name",
    "CATEGORY_NAMES",
    # Classifier
    "HandDescriptor",
    "classify",
    "classify_unchecked",
    "compare_descriptors",
    "is_better",
    # Combinations
    "Combinations",
    "choose",
    # Errors
    "HandRankError",
    "TableIntegrityError",
    "InvalidCardError",
    "InvalidHandError",
    # Constants
    "DECK_SIZE",
    "PRIMES",
    "NUM_CATEGORIES",
    "HAND_SIZE",
    "KEY_SIZE",
]
