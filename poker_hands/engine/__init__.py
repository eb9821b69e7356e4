"""Showdown engine: record parsing and win tallies.

This module provides:
- parse_record: Split a record line into two hands
- play_record: Evaluate a single record
- TallyStats: Running totals
- run_showdowns / tally_file: Batch drivers
"""

from .showdown import (
    NUM_PLAYERS,
    TOKENS_PER_RECORD,
    Outcome,
    ShowdownError,
    ShowdownResult,
    TallyStats,
    parse_record,
    play_record,
    run_showdowns,
    tally_file,
)

__all__ = [
    "NUM_PLAYERS",
    "TOKENS_PER_RECORD",
    "Outcome",
    "ShowdownError",
    "ShowdownResult",
    "TallyStats",
    "parse_record",
    "play_record",
    "run_showdowns",
    "tally_file",
]
