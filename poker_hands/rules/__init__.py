"""Poker rules implementations.

This module provides:
- Card and rank definitions (ranks.py)
- Hand classification and comparison (hands.py)
"""

from .ranks import (
    PokerHandsError,
    InvalidCard,
    Rank,
    Suit,
    Card,
    RANK_SYMBOLS,
    SUIT_SYMBOLS,
    MIN_RANK,
    MAX_RANK,
    parse_rank,
    parse_suit,
    get_rank_counts,
    create_standard_deck,
    sort_cards,
    format_cards,
    make_cards_from_string,
)

from .hands import (
    HAND_SIZE,
    TIEBREAK_SIZE,
    MalformedHand,
    HandCategory,
    HandValue,
    Ordering,
    CATEGORY_NAMES,
    is_flush,
    is_straight,
    is_wheel,
    classify,
    classify_string,
    compare_values,
    compare_hands,
    winner,
)

__all__ = [
    # Ranks
    "PokerHandsError",
    "InvalidCard",
    "Rank",
    "Suit",
    "Card",
    "RANK_SYMBOLS",
    "SUIT_SYMBOLS",
    "MIN_RANK",
    "MAX_RANK",
    "parse_rank",
    "parse_suit",
    "get_rank_counts",
    "create_standard_deck",
    "sort_cards",
    "format_cards",
    "make_cards_from_string",
    # Hands
    "HAND_SIZE",
    "TIEBREAK_SIZE",
    "MalformedHand",
    "HandCategory",
    "HandValue",
    "Ordering",
    "CATEGORY_NAMES",
    "is_flush",
    "is_straight",
    "is_wheel",
    "classify",
    "classify_string",
    "compare_values",
    "compare_hands",
    "winner",
]
