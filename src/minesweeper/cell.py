"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their position,
visible state (hidden/revealed/flagged) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    A single ``state`` field holds the visible state, so a cell can never
    be revealed and flagged at the same time.

    Attributes:
        row: Row index, fixed when the board is created.
        col: Column index, fixed when the board is created.
        is_mine: Whether this cell contains a mine.
        neighbor_mine_count: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
    """

    row: int
    col: int
    is_mine: bool = False
    neighbor_mine_count: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def position(self) -> Tuple[int, int]:
        """(row, col) coordinate of the cell."""
        return self.row, self.col

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Convert cell to an integer observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with neighbor mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.neighbor_mine_count

    def view(self) -> "CellView":
        """Immutable copy of this cell for renderers."""
        return CellView(
            row=self.row,
            col=self.col,
            is_mine=self.is_mine,
            is_revealed=self.is_revealed,
            is_flagged=self.is_flagged,
            neighbor_mine_count=self.neighbor_mine_count,
        )


@dataclass(frozen=True)
class CellView:
    """Read-only projection of a cell handed out in snapshots."""

    row: int
    col: int
    is_mine: bool
    is_revealed: bool
    is_flagged: bool
    neighbor_mine_count: int
