"""
Board module for Minesweeper game.

Implements the game board with mine placement, neighbor counting,
flood-fill revealing, flag bookkeeping and the win check.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, CellState, CellView

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class RevealResult(Enum):
    """Outcome of a reveal request."""

    IGNORED = auto()
    CONTINUE = auto()
    LOST = auto()


class InvalidConfiguration(ValueError):
    """Raised when board dimensions or mine count are out of range."""


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Total mines to place.
    """

    rows: int = 10
    cols: int = 10
    mine_count: int = 15

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.mine_count < 1:
            raise InvalidConfiguration("Board needs at least one mine")
        max_mines = self.total_cells - 1
        if self.mine_count > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.mine_count


DEFAULT_CONFIG = BoardConfig()


@dataclass(frozen=True)
class BoardSnapshot:
    """Immutable picture of the board after a mutation."""

    rows: int
    cols: int
    mine_count: int
    flags_used: int
    revealed_count: int
    cells: Tuple[Tuple[CellView, ...], ...]

    def cell(self, row: int, col: int) -> CellView:
        return self.cells[row][col]


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    The board is the only mutator of its cells. Mines are not placed by
    the constructor; call ``place_mines`` (or ``place_mines_at``) and then
    ``compute_neighbor_counts``.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _flags_used: int = 0

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create grid of hidden, mine-free cells."""
        self._grid = [
            [Cell(row, col) for col in range(self.config.cols)]
            for row in range(self.config.rows)
        ]
        self._flags_used = 0

    def place_mines(self, rng: Optional[random.Random] = None) -> None:
        """
        Place mines uniformly at random without replacement.

        Args:
            rng: Random source, defaults to the ``random`` module.
        """
        rng = rng or random
        positions = self._all_positions()
        mine_positions = rng.sample(positions, self.config.mine_count)
        self._mark_mines(mine_positions)

    def place_mines_at(self, positions: Iterable[Tuple[int, int]]) -> None:
        """
        Place mines at known positions.

        Args:
            positions: Exactly ``mine_count`` distinct (row, col) pairs.

        Raises:
            InvalidConfiguration: If the layout does not fit the config.
        """
        mine_positions = set(positions)
        if len(mine_positions) != self.config.mine_count:
            raise InvalidConfiguration(
                f"Expected {self.config.mine_count} distinct mine positions, "
                f"got {len(mine_positions)}"
            )
        for row, col in mine_positions:
            if not self._is_valid_position(row, col):
                raise InvalidConfiguration(
                    f"Mine position ({row}, {col}) is off the board"
                )
        self._mark_mines(sorted(mine_positions))

    def _mark_mines(self, positions: List[Tuple[int, int]]) -> None:
        for row in self._grid:
            for cell in row:
                cell.is_mine = False
        for row, col in positions:
            self._grid[row][col].is_mine = True
        logger.debug("Placed %d mines", len(positions))

    def _all_positions(self) -> List[Tuple[int, int]]:
        """Get every (row, col) coordinate on the board."""
        return [
            (row, col)
            for row in range(self.config.rows)
            for col in range(self.config.cols)
        ]

    def compute_neighbor_counts(self) -> None:
        """Calculate neighbor mine counts for all non-mine cells."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                cell = self._grid[row][col]
                if cell.is_mine:
                    cell.neighbor_mine_count = 0
                else:
                    cell.neighbor_mine_count = self._count_neighbor_mines(
                        row, col
                    )

    def _count_neighbor_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(
        self, row: int, col: int
    ) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell at the given position.

        A mine is revealed on its own and loses the game. Any other cell
        starts a flood fill that opens every connected zero cell and the
        numbered cells bordering them.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            IGNORED for out-of-range, revealed or flagged cells,
            LOST for a mine, CONTINUE otherwise.
        """
        if not self._is_valid_position(row, col):
            return RevealResult.IGNORED
        cell = self._grid[row][col]
        if not cell.is_hidden:
            return RevealResult.IGNORED

        if cell.is_mine:
            cell.reveal()
            logger.debug("Mine revealed at (%d, %d)", row, col)
            return RevealResult.LOST

        opened = self._flood_fill(cell)
        logger.debug("Reveal at (%d, %d) opened %d cells", row, col, opened)
        return RevealResult.CONTINUE

    def _flood_fill(self, start: Cell) -> int:
        """
        Open cells reachable from ``start`` through zero-count cells.

        Neighbors are pushed unfiltered; revealed, flagged and already
        visited cells are skipped when popped.

        Returns:
            Number of cells opened.
        """
        stack = [start]
        visited: Set[Tuple[int, int]] = set()
        opened = 0

        while stack:
            cell = stack.pop()
            if cell.position in visited or not cell.is_hidden:
                continue

            visited.add(cell.position)
            cell.reveal()
            opened += 1

            if cell.neighbor_mine_count == 0:
                for neighbor_row, neighbor_col in self._get_neighbors(
                    cell.row, cell.col
                ):
                    stack.append(self._grid[neighbor_row][neighbor_col])

        return opened

    def reveal_all_mines(self) -> None:
        """
        Reveal every mine for end-of-game display.

        Flagged mines are shown as revealed too. The flag counter keeps
        the value it had when the game ended.
        """
        for row in self._grid:
            for cell in row:
                if cell.is_mine:
                    cell.state = CellState.REVEALED

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        No more than ``mine_count`` flags can be placed; past that limit
        flagging a new cell does nothing.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if not self._is_valid_position(row, col):
            return False
        cell = self._grid[row][col]
        if cell.is_revealed:
            return False
        if cell.is_flagged:
            cell.toggle_flag()
            self._flags_used -= 1
            return True
        if self._flags_used >= self.config.mine_count:
            return False
        cell.toggle_flag()
        self._flags_used += 1
        return True

    def check_win(self) -> bool:
        """Check if every non-mine cell is revealed."""
        return self.revealed_count == self.config.safe_cells

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def flags_used(self) -> int:
        """
        Number of flags placed during play.

        ``reveal_all_mines`` turns flagged mines into revealed cells
        without changing this count, so after a loss it can exceed the
        number of cells still showing a flag.
        """
        return self._flags_used

    @property
    def remaining_flags(self) -> int:
        """Flags left before the limit is reached."""
        return self.config.mine_count - self._flags_used

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells, mines included."""
        return sum(cell.is_revealed for row in self._grid for cell in row)

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def get_mine_positions(self) -> List[Tuple[int, int]]:
        """Get the (row, col) positions of all mines."""
        return [
            cell.position for row in self._grid for cell in row if cell.is_mine
        ]

    def get_hidden_positions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (row, col) positions that are hidden and unflagged.
        """
        return [
            cell.position for row in self._grid for cell in row if cell.is_hidden
        ]

    def snapshot(self) -> BoardSnapshot:
        """Immutable copy of the current board for renderers."""
        return BoardSnapshot(
            rows=self.config.rows,
            cols=self.config.cols,
            mine_count=self.config.mine_count,
            flags_used=self._flags_used,
            revealed_count=self.revealed_count,
            cells=tuple(
                tuple(cell.view() for cell in row) for row in self._grid
            ),
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with neighbor count
                9 = revealed mine
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs


def build_board(
    config: BoardConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> Board:
    """
    Create a ready-to-play board: grid, random mines and neighbor counts.

    Args:
        config: Board configuration.
        rng: Random source for mine placement.

    Returns:
        A board with mines placed and counts computed.
    """
    board = Board(config)
    board.place_mines(rng)
    board.compute_neighbor_counts()
    logger.debug(
        "Built %dx%d board with %d mines",
        config.rows, config.cols, config.mine_count,
    )
    return board
