"""Card rank definitions and utilities.

Rank order (high to low): A > K > Q > J > T > 9 > 8 > 7 > 6 > 5 > 4 > 3 > 2

This module provides:
- Rank and suit constants
- Card representation and token parsing ("AS", "TD", "2c")
- The error types raised for unparseable cards
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List


class PokerHandsError(Exception):
    """Base class for errors raised by the rules engine."""


class InvalidCard(PokerHandsError, ValueError):
    """Raised when a rank or suit cannot be parsed or is out of range."""


class Rank(IntEnum):
    """Card ranks; the integer value is the rank used for comparison."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits. Suits carry no strength; only equality matters."""

    HEART = 0
    DIAMOND = 1
    CLUB = 2
    SPADE = 3


MIN_RANK = Rank.TWO
MAX_RANK = Rank.ACE

RANK_SYMBOLS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

SUIT_SYMBOLS = {
    Suit.HEART: "H",
    Suit.DIAMOND: "D",
    Suit.CLUB: "C",
    Suit.SPADE: "S",
}

# Display only
SUIT_GLYPHS = {
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
    Suit.SPADE: "♠",
}

SYMBOL_TO_RANK = {v: k for k, v in RANK_SYMBOLS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


def parse_rank(symbol: str) -> Rank:
    """Parse a single rank character ('2'-'9', 'T', 'J', 'Q', 'K', 'A').

    Raises:
        InvalidCard: If the character is not a rank symbol
    """
    rank = SYMBOL_TO_RANK.get(symbol.upper())
    if rank is None:
        raise InvalidCard(f"Invalid rank character: {symbol!r}")
    return rank


def parse_suit(symbol: str) -> Suit:
    """Parse a single suit character ('H', 'D', 'C', 'S', any case).

    Raises:
        InvalidCard: If the character is not a suit symbol
    """
    suit = SYMBOL_TO_SUIT.get(symbol.upper())
    if suit is None:
        raise InvalidCard(f"Invalid suit character: {symbol!r}")
    return suit


@dataclass(frozen=True, order=True)
class Card:
    """A playing card with rank and suit.

    Cards are ordered by rank first, then by suit.
    Immutable and hashable for use in sets.
    """

    rank: Rank
    suit: Suit

    def __post_init__(self):
        if isinstance(self.rank, bool) or not isinstance(self.rank, int):
            raise InvalidCard(f"Rank must be an integer, got {self.rank!r}")
        if not MIN_RANK <= self.rank <= MAX_RANK:
            raise InvalidCard(f"Rank out of range [2, 14]: {self.rank}")
        if isinstance(self.suit, bool) or self.suit not in list(Suit):
            raise InvalidCard(f"Invalid suit: {self.suit!r}")
        # Normalise plain ints to the enum types
        object.__setattr__(self, "rank", Rank(self.rank))
        object.__setattr__(self, "suit", Suit(self.suit))

    def __str__(self) -> str:
        return f"{RANK_SYMBOLS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def __repr__(self) -> str:
        return f"Card({RANK_SYMBOLS[self.rank]}{SUIT_GLYPHS[self.suit]})"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse a card from a two-character token like 'AS' or 'td'.

        Args:
            s: Card token in format "RANK+SUIT"

        Returns:
            Card object

        Raises:
            InvalidCard: If the token cannot be parsed
        """
        if len(s) != 2:
            raise InvalidCard(f"Card token must be 2 characters, got {s!r}")
        return cls(rank=parse_rank(s[0]), suit=parse_suit(s[1]))


def make_cards_from_string(s: str) -> List[Card]:
    """Parse cards from a string like "AS KS QS JS TS".

    Args:
        s: Whitespace separated card tokens

    Returns:
        List of Card objects
    """
    return [Card.from_string(token) for token in s.split()]


def get_rank_counts(cards: List[Card]) -> Dict[Rank, int]:
    """Count occurrences of each rank in a list of cards."""
    counts: Dict[Rank, int] = {}
    for card in cards:
        counts[card.rank] = counts.get(card.rank, 0) + 1
    return counts


def create_standard_deck() -> List[Card]:
    """Create a standard 52-card deck.

    Returns:
        List of 52 Card objects (13 ranks × 4 suits)
    """
    deck = []
    for rank in Rank:
        for suit in Suit:
            deck.append(Card(rank=rank, suit=suit))
    return deck


def sort_cards(cards: List[Card]) -> List[Card]:
    """Sort cards by rank (descending), then by suit."""
    return sorted(cards, reverse=True)


def format_cards(cards: List[Card]) -> str:
    """Format cards back into the space separated token form."""
    return " ".join(str(c) for c in cards)
