"""Core rules and engine for Domino Duel."""

from domino_duel.core.ai import choose_move, choose_side
from domino_duel.core.board import Board, Side
from domino_duel.core.config import EngineConfig
from domino_duel.core.dealing import deal, shuffle
from domino_duel.core.engine import (
    Drew,
    GameEnded,
    GameEngine,
    GameSnapshot,
    Outcome,
    Passed,
    Placed,
    Rejected,
)
from domino_duel.core.errors import DominoError, EmptyPool, InvalidMove, OutOfTurn
from domino_duel.core.game_state import GameState, Seat, Status
from domino_duel.core.scheduler import AsyncioScheduler, ManualScheduler, Scheduler
from domino_duel.core.tiles import (
    OrientedTile,
    Tile,
    create_tile_set,
    generate_full_set,
    pip_total,
)

__all__ = [
    "AsyncioScheduler",
    "Board",
    "DominoError",
    "Drew",
    "EmptyPool",
    "EngineConfig",
    "GameEnded",
    "GameEngine",
    "GameSnapshot",
    "GameState",
    "InvalidMove",
    "ManualScheduler",
    "OrientedTile",
    "OutOfTurn",
    "Outcome",
    "Passed",
    "Placed",
    "Rejected",
    "Scheduler",
    "Seat",
    "Side",
    "Status",
    "Tile",
    "choose_move",
    "choose_side",
    "create_tile_set",
    "deal",
    "generate_full_set",
    "pip_total",
    "shuffle",
]
