from typing import Literal

from pydantic import BaseModel

from .engine import PuzzleEngine


class KeyRequest(BaseModel):
    key: str  # raw key name: "Enter", "Backspace" or a single letter


class TypeRequest(BaseModel):
    char: str


class TextRequest(BaseModel):
    text: str


class PuzzleRequest(BaseModel):
    words: list[str]


class CellModel(BaseModel):
    ch: str
    state: Literal["prefix", "sticky", "typed", "empty", "solved", "masked"]
    cursor: bool = False


class RowModel(BaseModel):
    index: int
    status: Literal["active", "solved", "upcoming"]
    attempts: int
    aria_label: str | None = None
    cells: list[CellModel]


class GameState(BaseModel):
    rows: list[RowModel]
    active_index: int | None  # None once the chain is complete
    complete: bool
    typed: str
    remaining_slots: int
    total_guesses: int
    feedback: str

    @classmethod
    def from_engine(cls, engine: PuzzleEngine) -> "GameState":
        rows = [
            RowModel(
                index=row.index,
                status=row.status,
                attempts=row.attempts,
                aria_label=row.aria_label,
                cells=[
                    CellModel(ch=c.ch, state=c.state, cursor=c.cursor)
                    for c in row.cells
                ],
            )
            for row in engine.snapshot()
        ]
        return cls(
            rows=rows,
            active_index=None if engine.is_complete else engine.active_index,
            complete=engine.is_complete,
            typed=engine.typed,
            remaining_slots=engine.remaining_slots,
            total_guesses=engine.total_guesses,
            feedback=engine.feedback,
        )


class SubmitResponse(BaseModel):
    outcome: Literal["correct", "wrong", "ignored"]
    state: GameState


class PuzzleResponse(BaseModel):
    accepted: bool
    state: GameState
