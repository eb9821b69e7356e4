"""Ordering properties of the comparator over randomly dealt hands.

Hands are dealt with a seeded NumPy generator so failures are reproducible.
"""

import itertools

import numpy as np
import pytest

from poker_hands.rules import (
    HandCategory,
    Ordering,
    classify,
    compare_hands,
    compare_values,
    create_standard_deck,
)

NUM_HANDS = 300
SEED = 20240601


def deal_hands(num_hands: int, seed: int):
    rng = np.random.default_rng(seed)
    deck = create_standard_deck()
    hands = []
    for _ in range(num_hands):
        picks = rng.choice(len(deck), size=5, replace=False)
        hands.append([deck[int(i)] for i in picks])
    return hands


@pytest.fixture(scope="module")
def hands():
    return deal_hands(NUM_HANDS, SEED)


class TestComparatorProperties:
    """Reflexivity, antisymmetry, transitivity and determinism."""

    def test_self_comparison_is_equal(self, hands):
        for hand in hands:
            assert compare_hands(hand, hand) == Ordering.EQUAL

    def test_antisymmetry(self, hands):
        for a, b in zip(hands, hands[1:]):
            assert compare_hands(a, b) == compare_hands(b, a).reverse()

    def test_deterministic(self, hands):
        for hand in hands[:50]:
            assert classify(hand) == classify(list(reversed(hand)))

    def test_matches_hand_value_ordering(self, hands):
        values = [classify(h) for h in hands]
        for v1, v2 in zip(values, values[1:]):
            expected = Ordering.GREATER if v1 > v2 else Ordering.LESS if v1 < v2 else Ordering.EQUAL
            assert compare_values(v1, v2) == expected

    def test_transitivity(self, hands):
        values = [classify(h) for h in hands[:40]]
        for a, b, c in itertools.permutations(values, 3):
            if compare_values(a, b) != Ordering.LESS and compare_values(b, c) != Ordering.LESS:
                assert compare_values(a, c) != Ordering.LESS

    def test_category_decides_before_tiebreak(self, hands):
        values = [classify(h) for h in hands]
        for v1, v2 in zip(values, values[1:]):
            if v1.category > v2.category:
                assert compare_values(v1, v2) == Ordering.GREATER


class TestCategoryCoverage:
    """Every dealt hand lands in a valid category with a well-formed tie-break."""

    def test_valid_categories(self, hands):
        for hand in hands:
            value = classify(hand)
            assert value.category in HandCategory
            assert len(value.tiebreak) == 5
            significant = value.significant_tiebreak
            assert all(2 <= r <= 14 for r in significant)

    def test_kickers_descending(self, hands):
        for hand in hands:
            value = classify(hand)
            if value.category in (HandCategory.HIGH_CARD, HandCategory.FLUSH):
                assert list(value.tiebreak) == sorted(value.tiebreak, reverse=True)
            elif value.category == HandCategory.ONE_PAIR:
                kickers = value.tiebreak[1:4]
                assert list(kickers) == sorted(kickers, reverse=True)
