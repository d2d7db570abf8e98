"""Card model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from functools import reduce
from typing import Iterable

from .errors import InvalidCardError


class Suit(IntEnum):
    """Card suit."""

    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


MIN_RANK = 2
MAX_RANK = 14  # Ace
NUM_RANKS = 13
NUM_SUITS = 4
DECK_SIZE = NUM_RANKS * NUM_SUITS

PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)
RANK_CHARS = "23456789TJQKA"
SUIT_CHARS = "cdhs"
SUIT_NAMES = ("Clubs", "Diamonds", "Hearts", "Spades")


@dataclass(frozen=True, slots=True)
class Card:
    """
    Card representation.

    Internal: 32-bit integer in Cactus Kev layout
    - bits 0-7: prime of the rank (deuce=2 .. ace=41)
    - bits 8-11: rank (2-14)
    - bits 12-15: suit bit (one-hot, clubs=bit 12)
    - bits 16-28: rank bit (one-hot, deuce=bit 16)

    The raw constructor rejects any value that is not a well-formed
    card; Card.encode() builds one from rank and suit.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise InvalidCardError(f"Card value must be an int, got {self.value!r}")
        rank = (self.value >> 8) & 0xF
        suit_bits = (self.value >> 12) & 0xF
        if not MIN_RANK <= rank <= MAX_RANK:
            raise InvalidCardError(f"Malformed card value {self.value:#x}: rank {rank}")
        if suit_bits == 0 or suit_bits & (suit_bits - 1):
            raise InvalidCardError(f"Malformed card value {self.value:#x}: suit bits {suit_bits:#x}")
        # Prime, rank bit and unused bits must all agree with the rank
        offset = rank - MIN_RANK
        expected = PRIMES[offset] | (rank << 8) | (suit_bits << 12) | (1 << (16 + offset))
        if self.value != expected:
            raise InvalidCardError(f"Malformed card value {self.value:#x}, expected {expected:#x}")

    @classmethod
    def encode(cls, rank: int, suit: int) -> Card:
        """Create card from rank (2-14) and suit (0-3)."""
        if not MIN_RANK <= rank <= MAX_RANK:
            raise InvalidCardError(f"Rank must be in [2, 14], got {rank}")
        if not 0 <= suit < NUM_SUITS:
            raise InvalidCardError(f"Suit must be in [0, 3], got {suit}")
        offset = rank - MIN_RANK
        return cls(PRIMES[offset] | (rank << 8) | (1 << (12 + suit)) | (1 << (16 + offset)))

    @classmethod
    def from_string(cls, s: str) -> Card:
        """Create card from string like 'As', 'Kh', '2d'."""
        if len(s) != 2 or s[0].upper() not in RANK_CHARS or s[1].lower() not in SUIT_CHARS:
            raise InvalidCardError(f"Invalid card string: {s!r}")
        rank = RANK_CHARS.index(s[0].upper()) + MIN_RANK
        suit = SUIT_CHARS.index(s[1].lower())
        return cls.encode(rank, suit)

    @classmethod
    def from_index(cls, index: int) -> Card:
        """Create card from its deck index (0-51)."""
        if not 0 <= index < DECK_SIZE:
            raise InvalidCardError(f"Deck index must be in [0, 51], got {index}")
        suit, offset = divmod(index, NUM_RANKS)
        return cls.encode(offset + MIN_RANK, suit)

    @property
    def rank(self) -> int:
        """Get rank (2-14)."""
        return (self.value >> 8) & 0xF

    @property
    def suit(self) -> int:
        """Get suit (0-3)."""
        return ((self.value >> 12) & 0xF).bit_length() - 1

    @property
    def prime(self) -> int:
        """Get the prime assigned to this card's rank."""
        return self.value & 0xFF

    @property
    def rank_bit(self) -> int:
        """Get one-hot rank mask (bit 0 = deuce)."""
        return self.value >> 16

    @property
    def index(self) -> int:
        """Get position in standard deck order (0-51)."""
        return self.suit * NUM_RANKS + self.rank - MIN_RANK

    def display(self) -> str:
        """Long form, e.g. 'A of Spades'."""
        return f"{RANK_CHARS[self.rank - MIN_RANK]} of {SUIT_NAMES[self.suit]}"

    def __repr__(self) -> str:
        return f"{RANK_CHARS[self.rank - MIN_RANK]}{SUIT_CHARS[self.suit]}"


def display(card: Card) -> str:
    """Render a card as '<RankName> of <SuitName>'."""
    return card.display()


def standard_deck() -> tuple[Card, ...]:
    """All 52 cards, suit-major, deuce to ace within a suit."""
    return tuple(
        Card.encode(rank, suit)
        for suit in range(NUM_SUITS)
        for rank in range(MIN_RANK, MAX_RANK + 1)
    )


def parse_cards(text: str) -> list[Card]:
    """Parse whitespace or comma separated cards, e.g. 'As Kd, 7h'."""
    return [Card.from_string(token) for token in text.replace(",", " ").split()]


def format_cards(cards: Iterable[Card]) -> str:
    """Join cards in long form."""
    return ", ".join(card.display() for card in cards)


def prime_product(cards: Iterable[Card]) -> int:
    """
    Product of rank primes.

    Identical for any two hands holding the same multiset of ranks,
    regardless of suits.
    """
    return reduce(lambda acc, card: acc * card.prime, cards, 1)
