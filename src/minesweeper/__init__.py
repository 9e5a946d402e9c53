"""
Minesweeper game module.

Provides the board engine, the game session that drives it, and
collaborators that render or automate play.
"""
from .cell import Cell, CellState, CellView
from .board import (
    Board,
    BoardConfig,
    BoardSnapshot,
    DEFAULT_CONFIG,
    InvalidConfiguration,
    RevealResult,
    build_board,
)
from .ticker import AsyncioTicker, ManualTicker, Ticker
from .session import GameSession, GameState, SessionSnapshot
from .render import format_time, render_board, render_session
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "BoardSnapshot",
    "DEFAULT_CONFIG",
    "InvalidConfiguration",
    "RevealResult",
    "build_board",
    "Ticker",
    "ManualTicker",
    "AsyncioTicker",
    "GameSession",
    "GameState",
    "SessionSnapshot",
    "format_time",
    "render_board",
    "render_session",
    "MinesweeperEnv",
]
