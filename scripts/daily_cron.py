#!/usr/bin/env python3
"""Daily cron script: writes today's word chain puzzle.

Usage:
    python scripts/daily_cron.py            # write today
    python scripts/daily_cron.py --force    # overwrite even if file already exists

Run this daily (e.g. via crontab or a scheduler):
    0 2 * * * /path/to/venv/bin/python /path/to/scripts/daily_cron.py

Puzzles are saved to:
    backend/daily_puzzles/YYYY-MM-DD.json
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

# ---------------------------------------------------------------------------
# Hardcoded chains, edit this to your taste.
# Chains are selected deterministically: index = date.toordinal() % len(CHAINS)
# ---------------------------------------------------------------------------
CHAINS: list[list[str]] = [
    ["credit", "card", "game", "plan"],
    ["coffee", "table", "tennis", "racket"],
    ["bus", "stop", "sign", "language"],
    ["fire", "work", "shop", "lifter"],
    ["snow", "ball", "room", "mate"],
    ["sun", "flower", "pot", "luck"],
]

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
_BACKEND_DIR = _PROJECT_ROOT / "backend"


def write_daily(target_date: date, force: bool = False) -> None:
    # Add backend to sys.path so we can import wordlink modules directly
    sys.path.insert(0, str(_BACKEND_DIR))
    from wordlink.config import DAILY_PUZZLE_DIR, MIN_PUZZLE_WORDS  # noqa: PLC0415
    from wordlink.puzzle import pick_daily_chain, sanitize_puzzle  # noqa: PLC0415

    daily_dir = Path(DAILY_PUZZLE_DIR)
    out_path = daily_dir / f"{target_date.isoformat()}.json"

    if out_path.exists() and not force:
        print(f"[cron] Puzzle for {target_date} already exists ({out_path.name}). "
              "Use --force to overwrite.")
        return

    words = sanitize_puzzle(pick_daily_chain(CHAINS, target_date))
    if len(words) < MIN_PUZZLE_WORDS:
        raise ValueError(f"Chain for {target_date} has fewer than {MIN_PUZZLE_WORDS} words.")
    print(f"[cron] Writing {' -> '.join(words)} for {target_date} …")

    data = {"words": words, "date": target_date.isoformat()}

    daily_dir.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    print(f"[cron] Saved → {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Write today's daily word chain.")
    parser.add_argument(
        "--date",
        help="Target date in YYYY-MM-DD format (default: today)",
        default=None,
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite even if the file already exists.",
    )
    args = parser.parse_args()

    if args.date:
        target = date.fromisoformat(args.date)
    else:
        target = date.today()

    write_daily(target, force=args.force)


if __name__ == "__main__":
    main()
