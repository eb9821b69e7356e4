"""Poker Hands - five-card hand evaluation and head-to-head tallies.

Classifies five-card poker hands, compares pairs of hands and tallies
wins over record files of dealt hands.
"""

__version__ = "0.1.0"
__author__ = "Poker Hands Team"

from poker_hands.utils.seeding import set_seed

__all__ = ["__version__", "set_seed"]
