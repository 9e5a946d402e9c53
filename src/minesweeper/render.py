"""
Plain-text rendering of session snapshots.
"""
from typing import List

from .board import BoardSnapshot
from .cell import CellView
from .session import GameState, SessionSnapshot

_STATUS = {
    GameState.PLAYING: "Playing",
    GameState.WON: "You won!",
    GameState.LOST: "Boom! Game over",
}


def format_time(seconds: int) -> str:
    """Format elapsed seconds as ``mm:ss``."""
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def cell_symbol(cell: CellView) -> str:
    """Single character shown for a cell."""
    if cell.is_flagged:
        return "F"
    if not cell.is_revealed:
        return "."
    if cell.is_mine:
        return "*"
    if cell.neighbor_mine_count == 0:
        return " "
    return str(cell.neighbor_mine_count)


def render_board(board: BoardSnapshot, coordinates: bool = False) -> str:
    """
    Render the board grid as text.

    Args:
        board: Board snapshot to draw.
        coordinates: Add row and column indices around the grid.
    """
    lines: List[str] = []
    if coordinates:
        header = " ".join(str(col % 10) for col in range(board.cols))
        lines.append("   " + header)
    for row in board.cells:
        row_str = " ".join(cell_symbol(cell) for cell in row)
        if coordinates:
            row_str = f"{row[0].row:2d} {row_str}"
        lines.append(row_str)
    return "\n".join(lines)


def render_status(snapshot: SessionSnapshot) -> str:
    """One-line summary: state, flags left and elapsed time."""
    return (
        f"{_STATUS[snapshot.state]} | "
        f"Flags: {snapshot.remaining_flags} | "
        f"Time: {format_time(snapshot.elapsed_seconds)}"
    )


def render_session(snapshot: SessionSnapshot, coordinates: bool = False) -> str:
    """Status line followed by the board."""
    return render_status(snapshot) + "\n" + render_board(
        snapshot.board, coordinates
    )
