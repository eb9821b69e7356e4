#!/usr/bin/env python
"""Tally head-to-head wins over a record file.

Each line of the input holds two five-card hands (ten tokens such as "AS").
The script prints a line per record and a summary table at the end.
Unparseable records are reported as errors and never counted as ties.

Usage:
    python -m poker_hands.scripts.tally
    python -m poker_hands.scripts.tally hands.txt --quiet
    python -m poker_hands.scripts.tally hands.txt --fail-fast --json results.json
    python -m poker_hands.scripts.tally --help
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict, dataclass
from pathlib import Path

from rich.console import Console
from rich.table import Table

from poker_hands.engine.showdown import (
    NUM_PLAYERS,
    Outcome,
    ShowdownError,
    ShowdownResult,
    TallyStats,
    tally_file,
)
from poker_hands.rules import HandCategory

DEFAULT_INPUT = "poker_hands.txt"

logger = logging.getLogger(__name__)


class ResultsWriteError(Exception):
    """Raised when the JSON results file cannot be written."""


@dataclass
class TallyConfig:
    """Tally run configuration."""

    input_path: str = DEFAULT_INPUT
    fail_fast: bool = False
    quiet: bool = False
    verbose: bool = False
    json_path: str | None = None


def describe_result(result: ShowdownResult, stats: TallyStats) -> str:
    """One-line report for a processed record."""
    if result.outcome is Outcome.PLAYER_ONE:
        return f"Player 1 wins (Total: {stats.player_one_wins})"
    if result.outcome is Outcome.PLAYER_TWO:
        return f"Player 2 wins (Total: {stats.player_two_wins})"
    if result.outcome is Outcome.TIE:
        return f"Tie: {result.line}"
    return f"Error on line {result.line_number}: {result.error}"


def build_summary_table(stats: TallyStats) -> Table:
    """Per-player results and hand category counts."""
    table = Table(title=f"Final Results ({stats.total} records)")
    table.add_column("")
    for player in range(NUM_PLAYERS):
        table.add_column(f"Player {player + 1}", justify="right")

    table.add_row("Wins", *(str(stats.wins(p)) for p in range(NUM_PLAYERS)))
    table.add_row("Win rate", *(f"{stats.win_rate(p):.1%}" for p in range(NUM_PLAYERS)))
    for category in reversed(HandCategory):
        counts = [stats.categories[p].get(category, 0) for p in range(NUM_PLAYERS)]
        if any(counts):
            table.add_row(str(category), *(str(c) for c in counts))
    return table


def run(config: TallyConfig, console: Console | None = None) -> TallyStats:
    """Run a tally and print progress and the summary.

    Raises:
        OSError: If the input cannot be opened
        ShowdownError: On the first bad record when fail_fast is set
        ResultsWriteError: If the JSON results file cannot be written
    """
    console = console or Console()

    def report(result: ShowdownResult, stats: TallyStats) -> None:
        if config.quiet:
            return
        console.print(f"Processing: {result.line}", markup=False, highlight=False)
        console.print(describe_result(result, stats), markup=False, highlight=False)

    stats = tally_file(config.input_path, fail_fast=config.fail_fast, on_result=report)

    console.print()
    console.print(stats.summary(), markup=False, highlight=False)
    console.print(build_summary_table(stats))

    if config.json_path is not None:
        payload = {"config": asdict(config), "results": stats.to_dict()}
        try:
            Path(config.json_path).write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            raise ResultsWriteError(f"{config.json_path}: {e}") from e
        logger.info("Wrote results to %s", config.json_path)

    return stats


def parse_args(argv: list[str] | None = None) -> TallyConfig:
    parser = argparse.ArgumentParser(
        description="Tally five-card poker showdowns from a record file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m poker_hands.scripts.tally poker_hands.txt
  python -m poker_hands.scripts.tally poker_hands.txt --quiet --json results.json
        """,
    )
    parser.add_argument(
        "input_path",
        nargs="?",
        default=DEFAULT_INPUT,
        help=f"Record file, one pair of hands per line (default: {DEFAULT_INPUT})",
    )
    parser.add_argument(
        "--fail-fast", action="store_true", help="Abort on the first unparseable record"
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print the summary")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--json", dest="json_path", default=None, help="Write totals as JSON")
    args = parser.parse_args(argv)
    return TallyConfig(**vars(args))


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tally script."""
    config = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run(config)
    except ResultsWriteError as e:
        print(f"Failed to write results: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Failed to open file: {e}", file=sys.stderr)
        return 1
    except ShowdownError as e:
        print(f"Aborted: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nTally interrupted by user.", file=sys.stderr)
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
