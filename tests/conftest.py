"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, GameSession, ManualTicker


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 10x10 board with 15 mines placed."""
    board = Board()
    board.place_mines()
    board.compute_neighbor_counts()
    return board


@pytest.fixture
def center_mine_board() -> Board:
    """Create a 3x3 board with its only mine in the middle."""
    board = Board(BoardConfig(3, 3, 1))
    board.place_mines_at([(1, 1)])
    board.compute_neighbor_counts()
    return board


@pytest.fixture
def corner_mine_board() -> Board:
    """
    Create a 5x5 board with one mine in the bottom-right corner.

    Layout (counts):
        0 0 0 0 0
        0 0 0 0 0
        0 0 0 0 0
        0 0 0 1 1
        0 0 0 1 *
    """
    board = Board(BoardConfig(5, 5, 1))
    board.place_mines_at([(4, 4)])
    board.compute_neighbor_counts()
    return board


@pytest.fixture
def wall_board() -> Board:
    """
    Create a 5x5 board split by a column of mines.

    Layout (counts):
        0 2 * 2 0
        0 3 * 3 0
        0 3 * 3 0
        0 3 * 3 0
        0 2 * 2 0
    """
    board = Board(BoardConfig(5, 5, 5))
    board.place_mines_at([(row, 2) for row in range(5)])
    board.compute_neighbor_counts()
    return board


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(0, 0, is_mine=True)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def ticker() -> ManualTicker:
    """Create a manually driven ticker."""
    return ManualTicker()


@pytest.fixture
def session(ticker: ManualTicker) -> GameSession:
    """Create a default session driven by a manual ticker."""
    return GameSession(ticker=ticker)


@pytest.fixture
def corner_session(ticker: ManualTicker) -> GameSession:
    """Create a 5x5 session with one mine at (4, 4)."""
    session = GameSession(BoardConfig(5, 5, 1), ticker=ticker)
    session.start_with_mines([(4, 4)])
    return session


@pytest.fixture
def wall_session(ticker: ManualTicker) -> GameSession:
    """Create a 5x5 session with a column of mines down the middle."""
    session = GameSession(BoardConfig(5, 5, 5), ticker=ticker)
    session.start_with_mines([(row, 2) for row in range(5)])
    return session
