#!/usr/bin/env python3
"""Print the top-10 leaderboard kept by the terminal snake game.

The score file path comes from --file, then SNAKE_SCORE_FILE (.env is
honoured), then the default scores.txt.
"""

import argparse
import logging
import os
import sys
from typing import List

from dotenv import load_dotenv

# Add backend directory to path for imports
backend_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if backend_path not in sys.path:
    sys.path.insert(0, backend_path)

from config import DEFAULT_SCORE_FILE
from data_access.score_store import ScoreEntry, ScoreStore

logger = logging.getLogger(__name__)


def format_leaderboard(entries: List[ScoreEntry]) -> List[str]:
    lines = [
        "",
        "  ============================================",
        "  |         LEADERBOARD (Top 10)             |",
        "  ============================================",
        "  Rank  Score    Date & Time",
        "  --------------------------------------------",
    ]
    for rank, entry in enumerate(entries, start=1):
        lines.append(f"  {rank:3d}   {entry.score:6d}   {entry.timestamp}")
    if not entries:
        lines.append("  No scores recorded yet.")
    lines.append("  ============================================")
    return lines


def main(argv=None) -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Show the terminal snake leaderboard",
    )
    parser.add_argument(
        "--file",
        type=str,
        default=os.getenv("SNAKE_SCORE_FILE", DEFAULT_SCORE_FILE),
        help="Score file to read (default: $SNAKE_SCORE_FILE or scores.txt)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
    )

    store = ScoreStore(args.file)
    for line in format_leaderboard(store.entries):
        logger.info(line)


if __name__ == "__main__":
    main()
