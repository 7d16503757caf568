import logging
from contextlib import asynccontextmanager
from datetime import date
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

from . import config
from .engine import PuzzleEngine
from .models import (
    GameState,
    KeyRequest,
    PuzzleRequest,
    PuzzleResponse,
    SubmitResponse,
    TextRequest,
    TypeRequest,
)
from .puzzle import load_puzzle_file

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Puzzle state (one in-memory game per process)
# ---------------------------------------------------------------------------
_engine = PuzzleEngine()


def _load_puzzle_words(today: date | None = None) -> list[str]:
    """Try today's daily puzzle → configured puzzle file → built-in default."""
    today = today or date.today()
    candidates = [
        Path(config.DAILY_PUZZLE_DIR) / f"{today.isoformat()}.json",
        Path(config.PUZZLE_FILE),
    ]
    for path in candidates:
        if not path.exists():
            continue
        try:
            words = load_puzzle_file(path)
        except (OSError, ValueError, KeyError) as exc:
            logger.warning("[puzzle] Could not read %s (%s). Trying next.", path, exc)
            continue
        if len(words) < config.MIN_PUZZLE_WORDS:
            logger.warning(
                "[puzzle] %s has only %d usable word(s). Trying next.", path, len(words)
            )
            continue
        logger.info("[puzzle] Loaded %d words from %s", len(words), path)
        return words

    logger.info("[puzzle] Using built-in default puzzle.")
    return list(config.DEFAULT_PUZZLE)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _engine.load(_load_puzzle_words())
    yield


class NoStoreMiddleware(BaseHTTPMiddleware):
    """Game state changes on every request; keep API responses out of caches."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store"
        return response


app = FastAPI(lifespan=lifespan)

app.add_middleware(NoStoreMiddleware)

_STATIC_DIR = Path(__file__).parent.parent / "static"


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------
# Routes are async so every engine mutation runs on the event loop thread.


@app.get("/api/state", response_model=GameState)
async def get_state():
    """Return render snapshots for every row; hidden letters stay masked."""
    return GameState.from_engine(_engine)


@app.post("/api/key", response_model=GameState)
async def post_key(body: KeyRequest):
    _engine.press_key(body.key)
    return GameState.from_engine(_engine)


@app.post("/api/type", response_model=GameState)
async def post_type(body: TypeRequest):
    _engine.type_char(body.char)
    return GameState.from_engine(_engine)


@app.post("/api/backspace", response_model=GameState)
async def post_backspace():
    _engine.backspace()
    return GameState.from_engine(_engine)


@app.post("/api/text", response_model=GameState)
async def post_text(body: TextRequest):
    _engine.replace_typed(body.text)
    return GameState.from_engine(_engine)


@app.post("/api/submit", response_model=SubmitResponse)
async def post_submit():
    outcome = _engine.submit()
    return SubmitResponse(
        outcome=outcome or "ignored", state=GameState.from_engine(_engine)
    )


@app.post("/api/reset", response_model=GameState)
async def post_reset():
    _engine.reset()
    return GameState.from_engine(_engine)


@app.post("/api/puzzle", response_model=PuzzleResponse)
async def post_puzzle(body: PuzzleRequest):
    """Runtime puzzle injection; a rejected puzzle leaves the game as it was."""
    if not config.ALLOW_PUZZLE_INJECTION:
        raise HTTPException(status_code=403, detail="Puzzle injection is disabled.")
    accepted = _engine.load(body.words)
    return PuzzleResponse(accepted=accepted, state=GameState.from_engine(_engine))


# Mount static files last so API routes take priority
if _STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=str(_STATIC_DIR), html=True), name="static")
