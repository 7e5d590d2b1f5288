"""Presentation-side board state applied on top of engine queries.

Shared by the live session controller and replay reconstruction so both derive the
same reveal/flag state from the same moves.
"""

from __future__ import annotations

from infinisweep.engine import adjacent_mine_count, flood_reveal, is_mine, neighbors
from infinisweep.engine.field import MAX_REVEAL_PER_CLICK
from infinisweep.models import CellState, Coordinate


class BoardState:
    """Sparse map of touched cells; untouched cells are hidden and unflagged."""

    def __init__(self) -> None:
        self._cells: dict[Coordinate, CellState] = {}

    def cell(self, x: int, y: int) -> CellState:
        return self._cells.get(Coordinate(x, y)) or CellState()

    def _mutable_cell(self, coord: Coordinate) -> CellState:
        state = self._cells.get(coord)
        if state is None:
            state = self._cells[coord] = CellState()
        return state

    @property
    def revealed(self) -> set[Coordinate]:
        return {coord for coord, state in self._cells.items() if state.revealed}

    @property
    def flagged(self) -> set[Coordinate]:
        return {coord for coord, state in self._cells.items() if state.flagged}

    def reveal(
        self,
        x: int,
        y: int,
        seed: str,
        base_density: float,
        max_cells: int = MAX_REVEAL_PER_CLICK,
    ) -> list[Coordinate]:
        """Reveal ``(x, y)`` and return only the coordinates that were newly revealed.

        A mine is revealed alone; a safe cell pulls in its flood region. Flagged cells
        inside the region stay hidden and flagged.
        """
        if is_mine(x, y, seed, base_density):
            cells = [Coordinate(x, y)]
        else:
            cells = flood_reveal(x, y, seed, base_density, max_cells)

        newly: list[Coordinate] = []
        for coord in cells:
            state = self._mutable_cell(coord)
            if not state.revealed and not state.flagged:
                state.revealed = True
                newly.append(coord)
        return newly

    def set_flag(self, x: int, y: int, flagged: bool) -> bool:
        """Set the flag on a hidden cell. Returns False for revealed cells."""
        coord = Coordinate(x, y)
        if self.cell(x, y).revealed:
            return False
        self._mutable_cell(coord).flagged = flagged
        return True

    def chord_targets(self, x: int, y: int, seed: str, base_density: float) -> list[Coordinate]:
        """Hidden, unflagged neighbours to open when the flag count matches the number."""
        if not self.cell(x, y).revealed:
            return []
        around = neighbors(x, y)
        flags = sum(1 for n in around if self.cell(n.x, n.y).flagged and not self.cell(n.x, n.y).revealed)
        if flags != adjacent_mine_count(x, y, seed, base_density):
            return []
        return [n for n in around if not self.cell(n.x, n.y).revealed and not self.cell(n.x, n.y).flagged]
