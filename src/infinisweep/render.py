"""Plain-text rendering of a rectangular window onto the infinite board."""

from __future__ import annotations

from infinisweep.board import BoardState
from infinisweep.engine import adjacent_mine_count, is_mine

HIDDEN = "#"
FLAG = "F"
MINE = "*"
EMPTY = "."


def render_cell(x: int, y: int, seed: str, base_density: float, *, board: BoardState | None, show_all: bool) -> str:
    state = board.cell(x, y) if board is not None else None
    visible = show_all or (state is not None and state.revealed)
    if not visible:
        return FLAG if state is not None and state.flagged else HIDDEN
    if is_mine(x, y, seed, base_density):
        return MINE
    count = adjacent_mine_count(x, y, seed, base_density)
    return str(count) if count else EMPTY


def render_viewport(
    seed: str,
    base_density: float,
    *,
    origin_x: int,
    origin_y: int,
    width: int,
    height: int,
    board: BoardState | None = None,
    show_all: bool = False,
) -> list[str]:
    """Rows top to bottom (increasing y), columns left to right (increasing x)."""
    return [
        "".join(
            render_cell(origin_x + col, origin_y + row, seed, base_density, board=board, show_all=show_all)
            for col in range(width)
        )
        for row in range(height)
    ]
