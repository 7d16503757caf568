"""Word chain puzzle engine.

One mutable state record (puzzle, progress, attempts, sticky letters, typed
buffer, feedback) and one method per input event. Reveal count, remaining
slots and the active index are recomputed from that state on every read.

Rules:
- Word 0 is always fully shown and never guessed.
- The active word starts with one visible letter; every two wrong guesses
  unlock one more, capped at the word length.
- Letters guessed in the right position on a wrong attempt stay in place
  ("sticky") until the next word becomes active.
- The typed buffer never holds more characters than there are unknown slots.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Literal

from . import config
from .puzzle import is_letter, only_letters, sanitize_puzzle

logger = logging.getLogger(__name__)

CellState = Literal["prefix", "sticky", "typed", "empty", "solved", "masked"]
RowStatus = Literal["active", "solved", "upcoming"]
GuessOutcome = Literal["correct", "wrong"]

MASK_GLYPH = "-"


@dataclass
class Cell:
    ch: str
    state: CellState
    cursor: bool = False


@dataclass
class RowSnapshot:
    index: int
    status: RowStatus
    attempts: int
    cells: list[Cell]
    aria_label: str | None = None


@dataclass
class Feedback:
    """Advisory message that reads as empty once *expires_at* has passed."""

    text: str
    expires_at: float

    def current(self, now: float) -> str:
        return self.text if now < self.expires_at else ""


class PuzzleEngine:
    """State machine for a single word chain.

    States are Active(i) for i in 1..last_index and Complete. A correct
    submit moves Active(i) to Active(i + 1), or to Complete on the last word;
    a wrong submit stays on Active(i). Reloading or resetting returns to
    Active(1).
    """

    def __init__(
        self,
        words: Iterable | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._clock = clock
        clean = sanitize_puzzle(config.DEFAULT_PUZZLE if words is None else words)
        if len(clean) < config.MIN_PUZZLE_WORDS:
            raise ValueError(
                f"Need at least {config.MIN_PUZZLE_WORDS} words, got {len(clean)}"
            )
        self._words: tuple[str, ...] = tuple(clean)
        self._revealed_up_to = 0
        self._attempts: list[int] = []
        self._sticky: dict[int, list[str | None]] = {}
        self._typed = ""
        self._feedback: Feedback | None = None
        self._reset_progress()

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    @property
    def words(self) -> tuple[str, ...]:
        return self._words

    @property
    def last_index(self) -> int:
        return len(self._words) - 1

    @property
    def revealed_up_to(self) -> int:
        return self._revealed_up_to

    @property
    def attempts(self) -> tuple[int, ...]:
        return tuple(self._attempts)

    @property
    def typed(self) -> str:
        return self._typed

    @property
    def is_complete(self) -> bool:
        return self._revealed_up_to >= self.last_index

    @property
    def active_index(self) -> int:
        return min(self._revealed_up_to + 1, self.last_index)

    @property
    def active_target(self) -> str | None:
        return None if self.is_complete else self._words[self.active_index]

    @property
    def total_guesses(self) -> int:
        return sum(self._attempts)

    @property
    def feedback(self) -> str:
        if self._feedback is None:
            return ""
        return self._feedback.current(self._clock())

    def reveal_count(self, index: int) -> int:
        """Number of leading letters of word *index* shown as a hint."""
        word = self._words[index]
        if index == 0 or index <= self._revealed_up_to:
            return len(word)
        return min(1 + self._attempts[index] // 2, len(word))

    def sticky_for(self, index: int) -> tuple[str | None, ...]:
        row = self._sticky.get(index)
        if not row:
            return (None,) * len(self._words[index])
        return tuple(row)

    @property
    def remaining_slots(self) -> int:
        """Characters the player still has to type for the active word."""
        target = self.active_target
        if target is None:
            return 0
        revealed = self.reveal_count(self.active_index)
        stuck = sum(1 for ch in self.sticky_for(self.active_index)[revealed:] if ch)
        return max(0, len(target) - revealed - stuck)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def load(self, words: Iterable | None) -> bool:
        """Replace the puzzle and reset all progress.

        Input is sanitized first; fewer than MIN_PUZZLE_WORDS usable words
        leaves the current state untouched and returns False.
        """
        clean = sanitize_puzzle(words)
        if len(clean) < config.MIN_PUZZLE_WORDS:
            logger.info("[engine] Puzzle rejected: %d usable word(s).", len(clean))
            return False
        self._words = tuple(clean)
        self._reset_progress()
        logger.info("[engine] Loaded puzzle with %d words.", len(self._words))
        return True

    def reset(self) -> None:
        """Start the current puzzle over."""
        self._reset_progress()

    def type_char(self, ch: str) -> None:
        if self.is_complete or not is_letter(ch):
            return
        self._typed = (self._typed + ch.lower())[: self.remaining_slots]

    def backspace(self) -> None:
        self._typed = self._typed[:-1]

    def replace_typed(self, text: str) -> None:
        """Set the typed buffer from free text, e.g. a text field change."""
        if self.is_complete:
            return
        self._typed = only_letters(text).lower()[: self.remaining_slots]

    def press_key(self, key: str) -> GuessOutcome | None:
        """Dispatch a raw key name the way the input widget's keydown does."""
        if self.is_complete:
            return None
        if key == "Enter":
            return self.submit()
        if key == "Backspace":
            self.backspace()
        elif is_letter(key):
            self.type_char(key)
        return None

    def submit(self) -> GuessOutcome | None:
        """Score the active word against prefix + sticky + typed letters.

        Returns None when the puzzle is already complete.
        """
        target = self.active_target
        if target is None:
            return None

        index = self.active_index
        revealed = self.reveal_count(index)
        sticky = list(self.sticky_for(index))

        candidate = list(target[:revealed])
        pending = iter(self._typed)
        for pos in range(revealed, len(target)):
            if sticky[pos]:
                candidate.append(sticky[pos])
            else:
                candidate.append(next(pending, ""))

        self._attempts[index] += 1

        if "".join(candidate) == target:
            self._revealed_up_to = index
            self._typed = ""
            self._set_feedback(config.SUCCESS_MESSAGE, config.SUCCESS_FEEDBACK_MS)
            logger.info(
                "[engine] Solved word %d after %d attempt(s).",
                index,
                self._attempts[index],
            )
            if self.is_complete:
                logger.info(
                    "[engine] Puzzle complete in %d guesses.", self.total_guesses
                )
            else:
                self._advance()
            return "correct"

        # Typed characters are consumed in order over the non-sticky slots only.
        pending = iter(self._typed)
        for pos in range(revealed, len(target)):
            if sticky[pos]:
                continue
            guess = next(pending, "")
            if guess and guess == target[pos]:
                sticky[pos] = guess
        self._sticky[index] = sticky
        self._typed = ""
        self._set_feedback(config.FAILURE_MESSAGE, config.FAILURE_FEEDBACK_MS)
        return "wrong"

    # ------------------------------------------------------------------
    # Render snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> list[RowSnapshot]:
        """Per-row display state for the box renderer.

        Hidden letters of upcoming rows are replaced by MASK_GLYPH, so the
        snapshot can be handed to a client as-is.
        """
        rows: list[RowSnapshot] = []
        for r, word in enumerate(self._words):
            revealed = self.reveal_count(r)
            is_active = r == self.active_index and not self.is_complete
            solved = r <= self._revealed_up_to
            sticky = self.sticky_for(r)

            cells: list[Cell] = []
            typed_ptr = 0
            for i, letter in enumerate(word):
                if i < revealed:
                    cells.append(Cell(letter, "prefix"))
                elif is_active and sticky[i]:
                    cells.append(Cell(sticky[i], "sticky"))
                elif is_active:
                    if typed_ptr < len(self._typed):
                        cells.append(Cell(self._typed[typed_ptr], "typed"))
                        typed_ptr += 1
                    else:
                        cells.append(Cell("", "empty"))
                elif solved:
                    cells.append(Cell(letter, "solved"))
                else:
                    cells.append(Cell(MASK_GLYPH, "masked"))

            if is_active:
                status: RowStatus = "active"
                for cell in cells:
                    if cell.state == "empty":
                        cell.cursor = True
                        break
            elif solved:
                status = "solved"
            else:
                status = "upcoming"

            rows.append(
                RowSnapshot(
                    index=r,
                    status=status,
                    attempts=self._attempts[r],
                    cells=cells,
                    aria_label=config.ACTIVE_ROW_LABEL if is_active else None,
                )
            )
        return rows

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reset_progress(self) -> None:
        self._revealed_up_to = 0
        self._attempts = [0] * len(self._words)
        self._sticky = {}
        self._feedback = None
        self._advance()

    def _advance(self) -> None:
        """Prepare the newly active word: empty buffer, empty sticky row."""
        self._typed = ""
        index = self.active_index
        self._sticky[index] = [None] * len(self._words[index])

    def _set_feedback(self, text: str, duration_ms: int) -> None:
        self._feedback = Feedback(text, self._clock() + duration_ms / 1000)
