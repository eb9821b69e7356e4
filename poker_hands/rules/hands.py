"""Five-card hand classification and comparison.

Hand categories (strongest first):
- Royal flush: A-K-Q-J-T of one suit
- Straight flush: five consecutive ranks of one suit
- Four of a kind, full house, flush, straight
- Three of a kind, two pair, one pair, high card

Comparison rules:
- Higher category wins outright
- Within a category, the tie-break sequence is compared lexicographically
- The wheel (A-5-4-3-2) is a 5-high straight, the lowest straight
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

from .ranks import (
    Card,
    InvalidCard,
    PokerHandsError,
    Rank,
    get_rank_counts,
    make_cards_from_string,
)


HAND_SIZE = 5

# Tie-break sequences always carry this many slots, zero-filled
TIEBREAK_SIZE = 5

WHEEL_RANKS = (14, 5, 4, 3, 2)


class MalformedHand(PokerHandsError, ValueError):
    """Raised when a hand does not hold exactly five cards."""


class HandCategory(IntEnum):
    """Hand categories ordered by strength (higher value = stronger hand)."""

    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    def __str__(self) -> str:
        return CATEGORY_NAMES[self]


CATEGORY_NAMES = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.ROYAL_FLUSH: "Royal Flush",
}


class Ordering(IntEnum):
    """Result of comparing two hands, from the first hand's point of view."""

    LESS = -1
    EQUAL = 0
    GREATER = 1

    def reverse(self) -> "Ordering":
        return Ordering(-int(self))


@dataclass(frozen=True, order=True)
class HandValue:
    """A classified five-card hand.

    Field order makes the dataclass ordering match hand strength:
    category first, then the tie-break sequence lexicographically.

    Attributes:
        category: The hand category
        tiebreak: Exactly TIEBREAK_SIZE rank values, most significant first,
            unused slots zero
    """

    category: HandCategory
    tiebreak: Tuple[int, ...]

    @classmethod
    def build(cls, category: HandCategory, ranks: Sequence[int]) -> "HandValue":
        """Create a value, padding the tie-break sequence with zeros."""
        if len(ranks) > TIEBREAK_SIZE:
            raise ValueError(f"At most {TIEBREAK_SIZE} tie-break ranks, got {len(ranks)}")
        padded = tuple(int(r) for r in ranks) + (0,) * (TIEBREAK_SIZE - len(ranks))
        return cls(category=category, tiebreak=padded)

    @property
    def significant_tiebreak(self) -> Tuple[int, ...]:
        """The tie-break ranks without the zero padding."""
        return tuple(r for r in self.tiebreak if r)

    def describe(self) -> str:
        ranks = ", ".join(str(r) for r in self.significant_tiebreak)
        return f"{self.category} ({ranks})"

    def __str__(self) -> str:
        return self.describe()


def is_flush(cards: Sequence[Card]) -> bool:
    """Check if all cards share one suit."""
    suit = cards[0].suit
    return all(card.suit == suit for card in cards[1:])


def is_straight(sorted_ranks: Sequence[int]) -> bool:
    """Check if descending ranks are consecutive (each one less than the last).

    The wheel is not matched here; see is_wheel.
    """
    for i in range(len(sorted_ranks) - 1):
        if sorted_ranks[i] - 1 != sorted_ranks[i + 1]:
            return False
    return True


def is_wheel(sorted_ranks: Sequence[int]) -> bool:
    """Check for the ace-low straight A-5-4-3-2."""
    return tuple(sorted_ranks) == WHEEL_RANKS


def _validate_hand(hand: Sequence[Card]) -> List[Card]:
    cards = list(hand)
    if len(cards) != HAND_SIZE:
        raise MalformedHand(f"Expected {HAND_SIZE} cards, got {len(cards)}")
    for card in cards:
        if not isinstance(card, Card):
            raise InvalidCard(f"Not a card: {card!r}")
    return cards


def _grouped_ranks(counts: Dict[Rank, int]) -> List[int]:
    """Ranks from ace down to two, each repeated by its count."""
    grouped = []
    for rank in range(Rank.ACE, Rank.TWO - 1, -1):
        grouped.extend([rank] * counts.get(rank, 0))
    return grouped


def _kickers(grouped: List[int], used: Sequence[int]) -> List[int]:
    return [r for r in grouped if r not in used]


def classify(hand: Sequence[Card]) -> HandValue:
    """Classify a five-card hand into its category and tie-break sequence.

    Args:
        hand: Exactly five Card objects

    Returns:
        HandValue for the hand

    Raises:
        MalformedHand: If the hand does not hold exactly five cards
        InvalidCard: If an item is not a Card
    """
    cards = _validate_hand(hand)
    counts = get_rank_counts(cards)
    grouped = _grouped_ranks(counts)

    four_rank = 0
    three_rank = 0
    pair_ranks: List[int] = []
    for rank in range(Rank.TWO, Rank.ACE + 1):
        count = counts.get(rank, 0)
        if count == 4:
            four_rank = rank
        elif count == 3:
            three_rank = rank
        elif count == 2:
            pair_ranks.append(rank)

    # Ascending scan order; highest pair must come first
    pair_ranks.sort(reverse=True)

    sorted_ranks = sorted((int(card.rank) for card in cards), reverse=True)

    flush = is_flush(cards)
    wheel = is_wheel(sorted_ranks)
    straight = wheel or is_straight(sorted_ranks)

    if flush and straight:
        if sorted_ranks[0] == Rank.ACE and sorted_ranks[1] == Rank.KING:
            return HandValue.build(HandCategory.ROYAL_FLUSH, sorted_ranks)
        return HandValue.build(HandCategory.STRAIGHT_FLUSH, sorted_ranks)

    if four_rank:
        return HandValue.build(
            HandCategory.FOUR_OF_A_KIND, [four_rank] + _kickers(grouped, [four_rank])
        )

    if three_rank and len(pair_ranks) == 1:
        return HandValue.build(HandCategory.FULL_HOUSE, [three_rank, pair_ranks[0]])

    if flush:
        return HandValue.build(HandCategory.FLUSH, sorted_ranks)

    if straight:
        high = Rank.FIVE if wheel else sorted_ranks[0]
        return HandValue.build(HandCategory.STRAIGHT, [high])

    if three_rank:
        return HandValue.build(
            HandCategory.THREE_OF_A_KIND, [three_rank] + _kickers(grouped, [three_rank])
        )

    if len(pair_ranks) == 2:
        return HandValue.build(
            HandCategory.TWO_PAIR, pair_ranks + _kickers(grouped, pair_ranks)
        )

    if len(pair_ranks) == 1:
        return HandValue.build(
            HandCategory.ONE_PAIR, pair_ranks + _kickers(grouped, pair_ranks)
        )

    return HandValue.build(HandCategory.HIGH_CARD, sorted_ranks)


def compare_values(value1: HandValue, value2: HandValue) -> Ordering:
    """Compare two classified hands.

    Returns:
        GREATER if value1 is stronger, LESS if weaker, EQUAL on a full tie
    """
    if value1.category != value2.category:
        return Ordering.GREATER if value1.category > value2.category else Ordering.LESS

    for r1, r2 in zip(value1.tiebreak, value2.tiebreak):
        if r1 > r2:
            return Ordering.GREATER
        if r1 < r2:
            return Ordering.LESS
    return Ordering.EQUAL


def compare_hands(hand1: Sequence[Card], hand2: Sequence[Card]) -> Ordering:
    """Classify two hands and compare them.

    Raises:
        MalformedHand: If either hand does not hold exactly five cards
        InvalidCard: If either hand holds something other than Cards
    """
    return compare_values(classify(hand1), classify(hand2))


def winner(hand1: Sequence[Card], hand2: Sequence[Card]) -> Optional[int]:
    """Index (0 or 1) of the stronger hand, or None on a tie."""
    result = compare_hands(hand1, hand2)
    if result == Ordering.EQUAL:
        return None
    return 0 if result == Ordering.GREATER else 1


def classify_string(s: str) -> HandValue:
    """Classify a hand written as "AS KS QS JS TS"."""
    return classify(make_cards_from_string(s))
