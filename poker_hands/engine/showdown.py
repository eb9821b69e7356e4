"""Head-to-head showdowns over record files.

A record is one line holding ten two-character card tokens separated by
whitespace: the first five are player 1's hand, the last five player 2's.

This module provides:
- parse_record: turn a line into two hands
- play_record: classify and compare both hands of a line
- TallyStats: running win/tie/error totals
- run_showdowns / tally_file: drive many records

A line that cannot be parsed is reported as an ERROR result and is never
counted as a tie.
"""

import logging
from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from poker_hands.rules import (
    HAND_SIZE,
    Card,
    HandCategory,
    HandValue,
    MalformedHand,
    Ordering,
    PokerHandsError,
    classify,
    compare_values,
)

logger = logging.getLogger(__name__)

NUM_PLAYERS = 2
TOKENS_PER_RECORD = HAND_SIZE * NUM_PLAYERS


class ShowdownError(PokerHandsError):
    """Raised when a batch is aborted on a bad record.

    Attributes:
        line_number: 1-based line number of the offending record
        line: The raw record text
    """

    def __init__(self, message: str, line_number: int, line: str):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number
        self.line = line


class Outcome(Enum):
    """Result of a single record."""

    PLAYER_ONE = "player_one"
    PLAYER_TWO = "player_two"
    TIE = "tie"
    ERROR = "error"


def parse_record(line: str) -> tuple[list[Card], list[Card]]:
    """Parse a record line into two five-card hands.

    Args:
        line: e.g. "5H 5C 6S 7S KD 2C 3S 8S 8D TD"

    Returns:
        Tuple of (player 1 hand, player 2 hand)

    Raises:
        MalformedHand: If the line does not hold exactly ten tokens
        InvalidCard: If a token is not a valid card
    """
    tokens = line.split()
    if len(tokens) != TOKENS_PER_RECORD:
        raise MalformedHand(f"Expected {TOKENS_PER_RECORD} card tokens, got {len(tokens)}")
    cards = [Card.from_string(token) for token in tokens]
    return cards[:HAND_SIZE], cards[HAND_SIZE:]


@dataclass(frozen=True)
class ShowdownResult:
    """Outcome of one record.

    Attributes:
        line_number: 1-based line number in the source
        line: The record text without its line ending
        outcome: Who won, a tie, or an error
        value_one: Player 1's classified hand (None on error)
        value_two: Player 2's classified hand (None on error)
        error: Error message when outcome is ERROR
    """

    line_number: int
    line: str
    outcome: Outcome
    value_one: HandValue | None = None
    value_two: HandValue | None = None
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.outcome is Outcome.ERROR


_OUTCOMES = {
    Ordering.GREATER: Outcome.PLAYER_ONE,
    Ordering.LESS: Outcome.PLAYER_TWO,
    Ordering.EQUAL: Outcome.TIE,
}


def play_record(line: str, line_number: int = 1) -> ShowdownResult:
    """Classify and compare both hands of a record.

    Parse failures become an ERROR result rather than an exception so the
    caller can decide whether to continue the batch.
    """
    line = line.rstrip("\r\n")
    try:
        hand_one, hand_two = parse_record(line)
        value_one = classify(hand_one)
        value_two = classify(hand_two)
    except PokerHandsError as e:
        return ShowdownResult(
            line_number=line_number, line=line, outcome=Outcome.ERROR, error=str(e)
        )

    outcome = _OUTCOMES[compare_values(value_one, value_two)]
    return ShowdownResult(
        line_number=line_number,
        line=line,
        outcome=outcome,
        value_one=value_one,
        value_two=value_two,
    )


@dataclass
class TallyStats:
    """Running totals over a batch of records.

    Attributes:
        player_one_wins: Records won by player 1
        player_two_wins: Records won by player 2
        ties: Records where both hands are equal
        errors: Records that could not be evaluated
        error_lines: Line numbers of the records that failed
        categories: Per player (0 or 1), count of hands seen per category
    """

    player_one_wins: int = 0
    player_two_wins: int = 0
    ties: int = 0
    errors: int = 0
    error_lines: list[int] = field(default_factory=list)
    categories: dict[int, dict[HandCategory, int]] = field(
        default_factory=lambda: defaultdict(lambda: defaultdict(int))
    )

    @property
    def total(self) -> int:
        """Records seen, errors included."""
        return self.player_one_wins + self.player_two_wins + self.ties + self.errors

    @property
    def decided(self) -> int:
        """Records that produced a comparison (wins and ties)."""
        return self.player_one_wins + self.player_two_wins + self.ties

    def record(self, result: ShowdownResult) -> None:
        """Add a single result to the totals."""
        if result.outcome is Outcome.PLAYER_ONE:
            self.player_one_wins += 1
        elif result.outcome is Outcome.PLAYER_TWO:
            self.player_two_wins += 1
        elif result.outcome is Outcome.TIE:
            self.ties += 1
        else:
            self.errors += 1
            self.error_lines.append(result.line_number)
            return

        self.categories[0][result.value_one.category] += 1
        self.categories[1][result.value_two.category] += 1

    def wins(self, player: int) -> int:
        """Win count for player 0 or 1."""
        if player == 0:
            return self.player_one_wins
        if player == 1:
            return self.player_two_wins
        raise ValueError(f"Player must be 0 or 1, got {player}")

    def win_rate(self, player: int) -> float:
        """Share of decided records won by a player."""
        return self.wins(player) / self.decided if self.decided > 0 else 0.0

    def summary(self) -> str:
        """Generate summary string."""
        lines = [
            "Final Results:",
            f"Player 1 won {self.player_one_wins} times",
            f"Player 2 won {self.player_two_wins} times",
        ]
        if self.ties:
            lines.append(f"Ties: {self.ties}")
        if self.errors:
            lines.append(f"Errors: {self.errors} (lines {', '.join(map(str, self.error_lines))})")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        return {
            "total": self.total,
            "player_one_wins": self.player_one_wins,
            "player_two_wins": self.player_two_wins,
            "ties": self.ties,
            "errors": self.errors,
            "error_lines": list(self.error_lines),
            "categories": {
                f"player_{player + 1}": {
                    category.name.lower(): count
                    for category, count in sorted(self.categories[player].items())
                }
                for player in range(NUM_PLAYERS)
            },
        }


def run_showdowns(lines: Iterable[str], fail_fast: bool = False) -> Iterator[ShowdownResult]:
    """Play every non-blank line.

    Args:
        lines: Record lines (line endings are stripped)
        fail_fast: Raise ShowdownError on the first bad record instead of
            yielding an ERROR result

    Yields:
        One ShowdownResult per non-blank line
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        result = play_record(line, line_number)
        if result.is_error:
            if fail_fast:
                raise ShowdownError(result.error, line_number, result.line)
            logger.warning("Skipping line %d (%s): %r", line_number, result.error, result.line)
        else:
            logger.debug(
                "Line %d: %s vs %s -> %s",
                line_number,
                result.value_one,
                result.value_two,
                result.outcome.value,
            )
        yield result


def tally_file(
    path: str | Path,
    fail_fast: bool = False,
    on_result: Callable[[ShowdownResult, TallyStats], None] | None = None,
) -> TallyStats:
    """Run every record of a file and return the totals.

    Args:
        path: Record file, one pair of hands per line
        fail_fast: Abort on the first bad record (raises ShowdownError)
        on_result: Called after each record is added to the totals

    Returns:
        TallyStats for the whole file
    """
    stats = TallyStats()
    path = Path(path)
    logger.info("Reading records from %s", path)
    # Undecodable bytes become U+FFFD and fail card parsing for that line only
    with path.open("r", encoding="utf-8", errors="replace") as f:
        for result in run_showdowns(f, fail_fast=fail_fast):
            stats.record(result)
            if on_result is not None:
                on_result(result, stats)
    logger.info("Processed %d records from %s", stats.total, path)
    return stats
