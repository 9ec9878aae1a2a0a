from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from ...engine.bugs import PLAYER_NAMES
from ...engine.game import GAME_TYPE, Game
from ...engine.notation import format_move, piece_name
from ...engine.perft import perft as perft_nodes
from ...engine.perft import perft_divide


logger = logging.getLogger(__name__)

# Perft grows roughly 50x per ply; deeper requests would tie up a worker
MAX_PERFT_DEPTH = 4


class PositionRequest(BaseModel):
    game_string: str = Field(default=GAME_TYPE, description="Game string, e.g. Base+MLP;InProgress;Black[1];wQ")
    include_actions: bool = Field(default=False, description="Also return integer action ids")


class PlayRequest(BaseModel):
    game_string: str = Field(default=GAME_TYPE, description="Game string to start from")
    moves: List[str] = Field(..., min_length=1, description="Moves to apply in order, e.g. ['wQ', 'bQ wQ-']")


class PerftRequest(BaseModel):
    game_string: str = Field(default=GAME_TYPE, description="Game string to count from")
    depth: int = Field(default=1, ge=0, le=MAX_PERFT_DEPTH)
    divide: bool = Field(default=False, description="Break the count down by root move")


class PositionState(BaseModel):
    game_string: str
    state: str
    turn: str
    current_player: str
    legal_moves: List[str]
    actions: Optional[List[int]] = None
    pinned: List[str]
    hash: str
    last_move: Optional[str]
    move_history: List[str]


class PerftResponse(BaseModel):
    depth: int
    nodes: int
    divide: Optional[Dict[str, int]] = None


def create_app() -> FastAPI:
    app = FastAPI(title="Hive Engine API", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=logging.INFO)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/analyze", response_model=PositionState)
    async def analyze(req: PositionRequest) -> PositionState:
        game = _load_game(req.game_string)
        return _position_state(game, req.include_actions)

    @app.post("/api/play", response_model=PositionState)
    async def play(req: PlayRequest) -> PositionState:
        game = _load_game(req.game_string)
        for text in req.moves:
            try:
                game.play(text)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=f"{text}: {e}")
        return _position_state(game, False)

    # Plain def: the count is CPU-bound and runs in the threadpool
    @app.post("/api/perft", response_model=PerftResponse)
    def perft(req: PerftRequest) -> PerftResponse:
        game = _load_game(req.game_string)
        if req.divide and req.depth >= 1:
            counts = perft_divide(game.board, req.depth)
            return PerftResponse(depth=req.depth, nodes=sum(counts.values()), divide=counts)
        return PerftResponse(depth=req.depth, nodes=perft_nodes(game.board, req.depth))

    return app


def _load_game(game_string: str) -> Game:
    try:
        return Game.from_game_string(game_string)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"invalid game string: {e}")


def _position_state(game: Game, include_actions: bool) -> PositionState:
    board = game.board
    history = game.move_history()
    return PositionState(
        game_string=game.to_game_string(),
        state=game.state(),
        turn=game.turn_string(),
        current_player=PLAYER_NAMES[game.current_player()],
        legal_moves=[format_move(board, m) for m in game.legal_moves()],
        actions=game.legal_actions() if include_actions else None,
        pinned=sorted(piece_name(board.stacks[c][0]) for c in board.pinned),
        hash=f"{board.zobrist_hash:016x}",
        last_move=history[-1] if history else None,
        move_history=history,
    )


# Default app for non-factory servers
app = create_app()
