#!/usr/bin/env python
"""Deal random record files for the tally script.

Each record is dealt from a freshly shuffled 52-card deck, so the ten cards
of a line never repeat.

Usage:
    python -m poker_hands.scripts.deal --count 1000 --seed 42 --output poker_hands.txt
    python -m poker_hands.scripts.deal -n 5
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from poker_hands.engine.showdown import TOKENS_PER_RECORD
from poker_hands.rules import Card, create_standard_deck, format_cards
from poker_hands.utils.seeding import set_seed

logger = logging.getLogger(__name__)


def deal_record(rng: np.random.Generator, deck: list[Card] | None = None) -> str:
    """Deal one record line (ten distinct cards)."""
    deck = deck if deck is not None else create_standard_deck()
    picks = rng.choice(len(deck), size=TOKENS_PER_RECORD, replace=False)
    return format_cards([deck[int(i)] for i in picks])


def deal_records(count: int, seed: int | None = None) -> list[str]:
    """Deal `count` record lines.

    Args:
        count: Number of records
        seed: Seed for the generator; the same seed yields the same records

    Returns:
        List of record lines without line endings
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    rng = np.random.default_rng(seed)
    deck = create_standard_deck()
    return [deal_record(rng, deck) for _ in range(count)]


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the deal script."""
    parser = argparse.ArgumentParser(description="Deal random five-card showdown records")
    parser.add_argument("--count", "-n", type=int, default=1000, help="Number of records")
    parser.add_argument("--seed", "-s", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--output", "-o", type=str, default=None, help="Output file (default: stdout)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    seed = set_seed(args.seed)
    logger.info("Dealing %d records with seed %d", args.count, seed)

    try:
        records = deal_records(args.count, seed=seed)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    text = "".join(f"{line}\n" for line in records)
    if args.output is None:
        sys.stdout.write(text)
    else:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Wrote {len(records)} records to {args.output} (seed={seed})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
