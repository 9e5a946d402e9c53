"""
Game session for Minesweeper.

Wraps a board with the playing/won/lost state machine, the elapsed-time
ticker and snapshot notifications for renderers.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

import numpy as np

from .board import (
    Board,
    BoardConfig,
    BoardSnapshot,
    DEFAULT_CONFIG,
    RevealResult,
    build_board,
)
from .ticker import ManualTicker, Ticker

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(str, Enum):
    """Possible states of the game."""

    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only projection of a session handed to renderers."""

    state: GameState
    flags_used: int
    remaining_flags: int
    elapsed_seconds: int
    revealed_count: int
    board: BoardSnapshot


Listener = Callable[[SessionSnapshot], None]


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    A single game of Minesweeper from start to win or loss.

    The session owns its board and ticker exclusively. Renderers read
    ``snapshot()`` or ``subscribe`` to be handed a fresh snapshot after
    every change, and feed input back through ``on_cell_activate`` and
    ``on_cell_mark``.
    """

    def __init__(
        self,
        config: BoardConfig = DEFAULT_CONFIG,
        ticker: Optional[Ticker] = None,
        rng: Optional[random.Random] = None,
        autostart: bool = True,
    ) -> None:
        """
        Initialize the session.

        Args:
            config: Board configuration for the first game.
            ticker: Elapsed-time ticker (default: a ManualTicker).
            rng: Random source for mine placement.
            autostart: Start the first game immediately.
        """
        self.config = config
        self.ticker = ticker or ManualTicker()
        self.rng = rng
        self._listeners: List[Listener] = []
        self._state = GameState.PLAYING
        self._elapsed_seconds = 0
        # Mine-free placeholder; input is ignored until a game starts.
        self._board = Board(config)
        self._started = False
        if autostart:
            self.initialize(config)

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def initialize(self, config: Optional[BoardConfig] = None) -> None:
        """
        Start a fresh game.

        Args:
            config: New configuration, or None to reuse the current one.
        """
        config = config or self.config
        self._start(build_board(config, self.rng))

    def start_with_mines(
        self,
        positions: Iterable[Tuple[int, int]],
        config: Optional[BoardConfig] = None,
    ) -> None:
        """
        Start a game on a fixed mine layout instead of a random one.

        Args:
            positions: (row, col) pairs, exactly ``mine_count`` of them.
            config: New configuration, or None to reuse the current one.
        """
        board = Board(config or self.config)
        board.place_mines_at(positions)
        board.compute_neighbor_counts()
        self._start(board)

    def _start(self, board: Board) -> None:
        # Ticker first: if it cannot start, the session is left as it was.
        self.ticker.start(self.tick)
        self._board = board
        self.config = board.config
        self._state = GameState.PLAYING
        self._elapsed_seconds = 0
        self._started = True
        logger.debug(
            "New game: %dx%d, %d mines",
            board.config.rows, board.config.cols, board.config.mine_count,
        )
        self._notify()

    def close(self) -> None:
        """Stop the ticker; the session can still be re-initialized."""
        self.ticker.cancel()

    # ========================================================================
    # Input Handlers
    # ========================================================================

    def on_cell_activate(self, row: int, col: int) -> RevealResult:
        """
        Handle a reveal request on a cell.

        Returns:
            The board's reveal result, or IGNORED when the game is over
            or the cell cannot be revealed.
        """
        if not self.is_playing:
            return RevealResult.IGNORED
        cell = self._board.get_cell(row, col)
        if cell is None or not cell.is_hidden:
            return RevealResult.IGNORED

        result = self._board.reveal(row, col)
        if result == RevealResult.LOST:
            self._finish(GameState.LOST)
            self._board.reveal_all_mines()
        elif self._board.check_win():
            self._finish(GameState.WON)
        self._notify()
        return result

    def on_cell_mark(self, row: int, col: int) -> bool:
        """
        Handle a flag toggle request on a cell.

        Returns:
            True if a flag was placed or removed.
        """
        if not self.is_playing:
            return False
        cell = self._board.get_cell(row, col)
        if cell is None or cell.is_revealed:
            return False

        changed = self._board.toggle_flag(row, col)
        if changed:
            self._notify()
        return changed

    def tick(self) -> None:
        """Advance the elapsed time by one second while playing."""
        if not self.is_playing:
            return
        self._elapsed_seconds += 1
        self._notify()

    def _finish(self, state: GameState) -> None:
        self.ticker.cancel()
        self._state = state
        logger.info(
            "Game %s after %d seconds", state.value, self._elapsed_seconds
        )

    # ========================================================================
    # Subscriptions
    # ========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for snapshots.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def started(self) -> bool:
        """Check if a game has been set up with ``initialize``."""
        return self._started

    @property
    def is_playing(self) -> bool:
        """Check if a started game is still in progress."""
        return self._started and self._state == GameState.PLAYING

    @property
    def flags_used(self) -> int:
        return self._board.flags_used

    @property
    def remaining_flags(self) -> int:
        return self._board.remaining_flags

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed_seconds

    def get_observation(self) -> np.ndarray:
        """Board state as an int8 array (see ``Board.get_observation``)."""
        return self._board.get_observation()

    def get_hidden_positions(self) -> List[Tuple[int, int]]:
        """Cells that are neither revealed nor flagged."""
        return self._board.get_hidden_positions()

    def snapshot(self) -> SessionSnapshot:
        """Build an immutable projection of the session."""
        board = self._board.snapshot()
        return SessionSnapshot(
            state=self._state,
            flags_used=board.flags_used,
            remaining_flags=board.mine_count - board.flags_used,
            elapsed_seconds=self._elapsed_seconds,
            revealed_count=board.revealed_count,
            board=board,
        )
