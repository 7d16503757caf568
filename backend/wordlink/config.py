"""Centralised runtime configuration loaded from environment variables."""

import os
from pathlib import Path

_BACKEND_DIR = Path(__file__).parent.parent

DEFAULT_PUZZLE: list[str] = [
    w.strip()
    for w in os.getenv("DEFAULT_PUZZLE", "credit,card,game,plan").split(",")
    if w.strip()
]

PUZZLE_FILE: str = os.getenv("PUZZLE_FILE", str(_BACKEND_DIR / "puzzle.json"))
DAILY_PUZZLE_DIR: str = os.getenv(
    "DAILY_PUZZLE_DIR", str(_BACKEND_DIR / "daily_puzzles")
)

SUCCESS_FEEDBACK_MS: int = int(os.getenv("SUCCESS_FEEDBACK_MS", "600"))
FAILURE_FEEDBACK_MS: int = int(os.getenv("FAILURE_FEEDBACK_MS", "900"))

ALLOW_PUZZLE_INJECTION: bool = os.getenv("ALLOW_PUZZLE_INJECTION", "true").lower() in (
    "1",
    "true",
    "yes",
)

# A chain needs a visible first word and at least one word to guess.
MIN_PUZZLE_WORDS = 2

SUCCESS_MESSAGE = "Correct!"
FAILURE_MESSAGE = "Not quite — try again."
ACTIVE_ROW_LABEL = "Type the remaining letters"
