"""Tests for the card model, classifier and combination generator."""

import random

import pytest

from handrank.engine import (
    PRIMES,
    Card,
    Category,
    Combinations,
    HandDescriptor,
    InvalidCardError,
    InvalidHandError,
    Suit,
    category_name,
    choose,
    classify,
    compare_descriptors,
    display,
    format_cards,
    is_better,
    parse_cards,
    prime_product,
    standard_deck,
)


def _cards(*names: str) -> list[Card]:
    """Convert card names to Cards."""
    return [Card.from_string(n) for n in names]


class TestCard:
    """Test Card class."""

    def test_card_encode(self):
        """Test card creation from rank and suit."""
        card = Card.encode(14, Suit.SPADES)
        assert card.rank == 14
        assert card.suit == 3
        assert str(card) == "As"

    def test_cactus_kev_fields(self):
        """Test prime and bit fields of the encoding."""
        card = Card.encode(14, Suit.SPADES)
        assert card.prime == 41
        assert card.rank_bit == 1 << 12
        assert card.value == 41 | (14 << 8) | (1 << 15) | (1 << 28)

        deuce = Card.encode(2, Suit.CLUBS)
        assert deuce.prime == 2
        assert deuce.rank_bit == 1
        assert deuce.value == 2 | (2 << 8) | (1 << 12) | (1 << 16)

    def test_card_from_string(self):
        """Test card creation from string."""
        card = Card.from_string("Kh")
        assert card.rank == 13
        assert card.suit == Suit.HEARTS
        assert repr(card) == "Kh"
        assert Card.from_string("tD") == Card.encode(10, Suit.DIAMONDS)

    def test_display(self):
        """Test long-form rendering."""
        assert Card.encode(14, Suit.SPADES).display() == "A of Spades"
        assert display(Card.encode(10, Suit.HEARTS)) == "T of Hearts"
        assert display(Card.encode(7, Suit.CLUBS)) == "7 of Clubs"
        assert display(Card.encode(12, Suit.DIAMONDS)) == "Q of Diamonds"

    def test_equality(self):
        """Cards are equal iff rank and suit match."""
        assert Card.encode(9, 1) == Card.from_string("9d")
        assert Card.encode(9, 1) != Card.encode(9, 2)
        assert len({Card.encode(9, 1), Card.from_string("9d")}) == 1

    @pytest.mark.parametrize("rank,suit", [(1, 0), (15, 0), (0, 0), (2, 4), (2, -1)])
    def test_encode_out_of_range(self, rank, suit):
        """Out-of-range ranks and suits are rejected."""
        with pytest.raises(InvalidCardError):
            Card.encode(rank, suit)

    @pytest.mark.parametrize("text", ["", "A", "10h", "Xs", "Ax", "As "])
    def test_from_string_invalid(self, text):
        """Malformed strings are rejected."""
        with pytest.raises(InvalidCardError):
            Card.from_string(text)

    def test_raw_value_validated(self):
        """The raw constructor rejects malformed encodings."""
        ace = Card.encode(14, Suit.SPADES)
        assert Card(ace.value) == ace

        with pytest.raises(InvalidCardError):
            Card(0)
        with pytest.raises(InvalidCardError):
            Card(1)
        # Prime of a king with an ace's rank fields
        with pytest.raises(InvalidCardError):
            Card((ace.value & ~0xFF) | 37)
        # Two suit bits
        with pytest.raises(InvalidCardError):
            Card(ace.value | (1 << 12))
        # Rank bit of the wrong rank
        with pytest.raises(InvalidCardError):
            Card((ace.value & 0xFFFF) | (1 << 16))
        with pytest.raises(InvalidCardError):
            Card(ace.value | (1 << 30))
        with pytest.raises(InvalidCardError):
            Card("As")

    def test_malformed_card_never_reaches_classifier(self):
        """Bad cards fail at construction, before classify sees them."""
        with pytest.raises(InvalidCardError):
            classify([Card(0), *_cards("Ah", "Kd", "9c", "7s")])

    def test_invalid_card_is_value_error(self):
        """Precondition errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Card.encode(20, 0)

    def test_all_cards(self):
        """Test all 52 cards."""
        deck = standard_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52
        assert [card.index for card in deck] == list(range(52))
        assert deck[0] == Card.from_string("2c")
        assert deck[-1] == Card.from_string("As")

    def test_from_index(self):
        """Test round trip through deck index."""
        for i in range(52):
            assert Card.from_index(i).index == i
        with pytest.raises(InvalidCardError):
            Card.from_index(52)

    def test_parse_and_format(self):
        """Test parsing and joining card lists."""
        hand = parse_cards("As Kd, 7h")
        assert hand == _cards("As", "Kd", "7h")
        assert format_cards(hand) == "A of Spades, K of Diamonds, 7 of Hearts"

    def test_prime_product(self):
        """Prime product depends on ranks only."""
        a = prime_product(_cards("As", "Ks", "Qs", "Js", "Ts"))
        b = prime_product(_cards("Ah", "Kd", "Qc", "Js", "Th"))
        assert a == b == 41 * 37 * 31 * 29 * 23
        assert prime_product(_cards("2c", "2d")) == PRIMES[0] ** 2


class TestCategories:
    """Test category names."""

    def test_all_names(self):
        """Every category has a name."""
        assert category_name(Category.STRAIGHT_FLUSH) == "Straight Flush"
        assert category_name(2) == "Four of a Kind"
        assert category_name(Category.FULL_HOUSE) == "Full House"
        assert category_name(Category.FLUSH) == "Flush"
        assert category_name(Category.STRAIGHT) == "Straight"
        assert category_name(Category.THREE_OF_A_KIND) == "Three of a Kind"
        assert category_name(Category.TWO_PAIR) == "Two Pair"
        assert category_name(Category.ONE_PAIR) == "One Pair"
        assert category_name(9) == "High Card"

    @pytest.mark.parametrize("category", [0, 10, -1, 100])
    def test_unknown(self, category):
        """Out-of-range categories map to 'Unknown'."""
        assert category_name(category) == "Unknown"

    def test_order(self):
        """Lower category number is stronger."""
        assert Category.STRAIGHT_FLUSH < Category.FOUR_OF_A_KIND < Category.HIGH_CARD
        assert [int(c) for c in Category] == list(range(1, 10))


class TestHandClassifier:
    """Test five-card classification."""

    def test_high_card(self):
        """Test high card detection."""
        hand = classify(_cards("2s", "3h", "5d", "9c", "Ks"))
        assert hand.category == Category.HIGH_CARD
        assert hand.tiebreakers == (13, 9, 5, 3, 2)

    def test_one_pair(self):
        """Test one pair detection."""
        hand = classify(_cards("Jh", "Jd", "2c", "8s", "Ac"))
        assert hand.category == Category.ONE_PAIR
        assert hand.tiebreakers == (11, 14, 8, 2)

    def test_two_pair(self):
        """Test two pair detection."""
        hand = classify(_cards("4h", "Kd", "4c", "Ks", "9c"))
        assert hand.category == Category.TWO_PAIR
        assert hand.tiebreakers == (13, 4, 9)

    def test_three_of_a_kind(self):
        """Test three of a kind detection."""
        hand = classify(_cards("6h", "6d", "6c", "Ts", "Qc"))
        assert hand.category == Category.THREE_OF_A_KIND
        assert hand.tiebreakers == (6, 12, 10)

    def test_straight(self):
        """Test straight detection."""
        hand = classify(_cards("9h", "8d", "Tc", "Jh", "Qs"))
        assert hand.category == Category.STRAIGHT
        assert hand.tiebreakers == (12,)

    def test_wheel_straight(self):
        """Test wheel (A-2-3-4-5) straight."""
        hand = classify(_cards("As", "2h", "3c", "4d", "5s"))
        assert hand.category == Category.STRAIGHT
        assert hand.tiebreakers == (5,)

    def test_broadway_straight(self):
        """Test ace-high straight."""
        hand = classify(_cards("Ts", "Jh", "Qc", "Kd", "As"))
        assert hand.category == Category.STRAIGHT
        assert hand.tiebreakers == (14,)

    def test_no_wraparound_straight(self):
        """Q-K-A-2-3 is not a straight."""
        hand = classify(_cards("Qs", "Kh", "Ac", "2d", "3s"))
        assert hand.category == Category.HIGH_CARD
        assert hand.tiebreakers == (14, 13, 12, 3, 2)

    def test_flush(self):
        """Test flush detection."""
        hand = classify(_cards("2s", "4s", "6s", "9s", "Ks"))
        assert hand.category == Category.FLUSH
        assert hand.tiebreakers == (13, 9, 6, 4, 2)

    def test_full_house(self):
        """Test full house detection."""
        hand = classify(_cards("9s", "9h", "5d", "5c", "9d"))
        assert hand.category == Category.FULL_HOUSE
        assert hand.tiebreakers == (9, 5)

    def test_four_of_a_kind(self):
        """Test four of a kind detection."""
        hand = classify(_cards("7s", "7h", "7d", "7c", "2h"))
        assert hand.category == Category.FOUR_OF_A_KIND
        assert hand.tiebreakers == (7, 2)

    def test_straight_flush(self):
        """Test straight flush detection."""
        hand = classify(_cards("As", "Ks", "Qs", "Js", "Ts"))
        assert hand.category == Category.STRAIGHT_FLUSH
        assert hand.tiebreakers == (14,)

    def test_steel_wheel(self):
        """Test 5-high straight flush."""
        hand = classify(_cards("Ah", "2h", "3h", "4h", "5h"))
        assert hand.category == Category.STRAIGHT_FLUSH
        assert hand.tiebreakers == (5,)

    def test_order_independent(self):
        """Classifying any permutation gives the same descriptor."""
        hand = _cards("Jh", "Jd", "2c", "8s", "Ac")
        rng = random.Random(0)
        expected = classify(hand)
        for _ in range(20):
            rng.shuffle(hand)
            assert classify(hand) == expected

    def test_wrong_size(self):
        """Only 5-card hands are accepted."""
        with pytest.raises(InvalidHandError):
            classify(_cards("As", "Ks", "Qs", "Js"))
        with pytest.raises(InvalidHandError):
            classify(_cards("As", "Ks", "Qs", "Js", "Ts", "9s"))

    def test_duplicate_cards(self):
        """Duplicate cards are rejected."""
        with pytest.raises(InvalidHandError):
            classify(_cards("As", "As", "Qs", "Js", "Ts"))


class TestHandDescriptor:
    """Test descriptor identity and comparison."""

    def test_key_padding(self):
        """Key is always category plus 5 fields."""
        straight = HandDescriptor(Category.STRAIGHT, (9,))
        assert straight.key == (5, 9, 0, 0, 0, 0)
        flush = HandDescriptor(Category.FLUSH, (13, 9, 6, 4, 2))
        assert flush.key == (4, 13, 9, 6, 4, 2)

    def test_key_and_code_round_trip(self):
        """from_key and from_code invert key and code."""
        hand = HandDescriptor(Category.TWO_PAIR, (13, 4, 9))
        assert HandDescriptor.from_key(hand.key) == hand
        assert HandDescriptor.from_code(hand.code) == hand
        assert hand.code == 0x7D4900

    def test_name(self):
        assert HandDescriptor(Category.FULL_HOUSE, (9, 5)).name == "Full House"

    def test_category_beats_tiebreakers(self):
        """A lower category wins regardless of ranks."""
        pair = HandDescriptor(Category.ONE_PAIR, (2, 5, 4, 3))
        high = HandDescriptor(Category.HIGH_CARD, (14, 13, 12, 11, 9))
        assert is_better(pair, high)
        assert not is_better(high, pair)
        assert compare_descriptors(pair, high) < 0

    def test_first_difference_decides(self):
        """Tiebreakers compare lexicographically, larger wins."""
        a = HandDescriptor(Category.TWO_PAIR, (13, 4, 9))
        b = HandDescriptor(Category.TWO_PAIR, (13, 4, 8))
        assert a.is_better(b)
        assert compare_descriptors(b, a) > 0

    def test_equal(self):
        """Identical descriptors are equal in strength."""
        a = classify(_cards("As", "Kd", "9h", "5c", "3s"))
        b = classify(_cards("Ah", "Kc", "9s", "5d", "3h"))
        assert a == b
        assert compare_descriptors(a, b) == 0
        assert not is_better(a, b)
        assert not is_better(b, a)

    def test_shorter_sequence_is_not_better(self):
        """Missing trailing tiebreakers count as the lowest value."""
        short = HandDescriptor(Category.HIGH_CARD, (14, 13))
        long = HandDescriptor(Category.HIGH_CARD, (14, 13, 2))
        assert is_better(long, short)
        assert not is_better(short, long)


class TestCombinations:
    """Test the k-of-n generator."""

    def test_small(self):
        """Combinations come out in lexicographic order."""
        assert list(Combinations(4, 2)) == [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]

    def test_lengths(self):
        """len() is n choose k."""
        assert len(Combinations(52, 5)) == 2_598_960
        assert len(Combinations(7, 5)) == 21
        assert len(list(Combinations(7, 5))) == 21

    def test_restartable(self):
        """Each iteration starts from the beginning."""
        combos = Combinations(6, 3)
        assert list(combos) == list(combos)

    def test_slice(self):
        """slice() yields a contiguous window."""
        combos = Combinations(7, 5)
        assert list(combos.slice(5, 8)) == list(combos)[5:8]

    def test_chunks_cover_everything(self):
        """chunks() partitions the sequence."""
        combos = Combinations(10, 4)
        chunks = list(combos.chunks(64))
        assert [len(c) for c in chunks] == [64, 64, 64, 18]
        assert [c for chunk in chunks for c in chunk] == list(combos)

    def test_ranges(self):
        """ranges() splits positions into contiguous parts."""
        combos = Combinations(52, 5)
        ranges = combos.ranges(4)
        assert len(ranges) == 4
        assert ranges[0][0] == 0
        assert ranges[-1][1] == len(combos)
        for (_, stop), (start, _) in zip(ranges, ranges[1:]):
            assert stop == start
        assert Combinations(3, 3).ranges(8) == [(0, 1)]

    def test_select(self):
        """select() maps indices onto items."""
        assert list(Combinations(3, 2).select("abc")) == [("a", "b"), ("a", "c"), ("b", "c")]
        assert len(list(choose(list(range(7)), 5))) == 21
        with pytest.raises(ValueError):
            list(Combinations(3, 2).select("ab"))

    @pytest.mark.parametrize("n,k", [(3, 4), (-1, 0), (5, -1)])
    def test_invalid(self, n, k):
        """k must lie in [0, n]."""
        with pytest.raises(ValueError):
            Combinations(n, k)

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            list(Combinations(5, 2).chunks(0))
