import json
import re
from datetime import date
from pathlib import Path
from typing import Iterable

# Anything outside the ASCII alphabet is dropped from puzzle words and input
_NON_LETTER_RE = re.compile(r"[^a-z]", re.IGNORECASE)

# A single keystroke that can fill a letter slot
_LETTER_RE = re.compile(r"^[a-zA-Z]$")


def only_letters(text: str | None) -> str:
    """Strip every non-letter character from *text*."""
    return _NON_LETTER_RE.sub("", text or "")


def is_letter(key: str) -> bool:
    """Return True if *key* is exactly one ASCII letter."""
    return bool(_LETTER_RE.match(key or ""))


def sanitize_puzzle(words: Iterable | None) -> list[str]:
    """Lowercase each entry, strip non-letters, and drop entries left empty.

    Entries are coerced with ``str()`` first so a loader handing over numbers
    or other scalars degrades to letters-only text instead of failing.
    """
    cleaned = (only_letters(str(w)).lower() for w in (words or []))
    return [w for w in cleaned if w]


def load_puzzle_file(path: str | Path) -> list[str]:
    """Read a puzzle from a JSON file and return its sanitized words.

    The file holds either a bare list of words or an object with a
    ``"words"`` list. Raises OSError, ValueError or KeyError on a missing or
    malformed file; the caller decides how to fall back.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data["words"]
    if not isinstance(data, list):
        raise ValueError(f"Puzzle file must contain a list of words: {path}")
    return sanitize_puzzle(data)


def pick_daily_chain(chains: list[list[str]], target_date: date) -> list[str]:
    """Deterministically pick a chain for the given date.

    index = date.toordinal() % len(chains), so every day maps to the same
    chain across runs.
    """
    if not chains:
        raise ValueError("No word chains to pick from.")
    return chains[target_date.toordinal() % len(chains)]
