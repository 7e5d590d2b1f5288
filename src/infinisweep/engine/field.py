"""Mine placement, adjacency and flood reveal over the implicit infinite field.

Every function here is a pure query of ``(seed, x, y, base_density)``; no grid is ever
allocated and no state survives between calls.
"""

from __future__ import annotations

import random
from collections import deque

from infinisweep.models import Coordinate

from .biome import _effective_density
from .rng import cell_material, value_at
from .validation import check_coordinate, check_count, check_density, check_seed

DEFAULT_MINE_DENSITY = 0.15
MAX_REVEAL_PER_CLICK = 1000

_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)


def neighbors(x: int, y: int) -> list[Coordinate]:
    """The 8 surrounding cells, dx-major. Flood traversal order depends on this order."""
    return [Coordinate(x + dx, y + dy) for dx, dy in _OFFSETS]


def _check_query(x: object, y: object, seed: object, base_density: object) -> None:
    check_coordinate(x, y)
    check_seed(seed)
    check_density(base_density)


def _is_mine(x: int, y: int, seed: str, base_density: float) -> bool:
    return value_at(cell_material(seed, x, y)) < _effective_density(x, y, base_density)


def _adjacent_mine_count(x: int, y: int, seed: str, base_density: float) -> int:
    return sum(_is_mine(x + dx, y + dy, seed, base_density) for dx, dy in _OFFSETS)


def is_mine(x: int, y: int, seed: str, base_density: float = DEFAULT_MINE_DENSITY) -> bool:
    _check_query(x, y, seed, base_density)
    return _is_mine(x, y, seed, base_density)


def adjacent_mine_count(x: int, y: int, seed: str, base_density: float = DEFAULT_MINE_DENSITY) -> int:
    """Number of mines among the 8 neighbours of ``(x, y)``, in [0, 8]."""
    _check_query(x, y, seed, base_density)
    return _adjacent_mine_count(x, y, seed, base_density)


def flood_reveal(
    x: int,
    y: int,
    seed: str,
    base_density: float = DEFAULT_MINE_DENSITY,
    max_cells: int = MAX_REVEAL_PER_CLICK,
) -> list[Coordinate]:
    """Breadth-first reveal starting at ``(x, y)``.

    Safe cells are collected in discovery order; only zero-adjacency cells push their
    neighbours. A mine at the start yields an empty list. Traversal stops as soon as
    ``max_cells`` cells are collected, which bounds the work of a single click.
    """
    _check_query(x, y, seed, base_density)
    check_count("max_cells", max_cells, minimum=1)

    verdicts: dict[Coordinate, bool] = {}

    def mine_at(cell: Coordinate) -> bool:
        verdict = verdicts.get(cell)
        if verdict is None:
            verdict = verdicts[cell] = _is_mine(cell.x, cell.y, seed, base_density)
        return verdict

    visited: set[Coordinate] = set()
    queue: deque[Coordinate] = deque([Coordinate(x, y)])
    revealed: list[Coordinate] = []

    while queue and len(revealed) < max_cells:
        cell = queue.popleft()
        if cell in visited:
            continue
        visited.add(cell)
        if mine_at(cell):
            continue
        revealed.append(cell)

        around = neighbors(cell.x, cell.y)
        if not any(mine_at(n) for n in around):
            queue.extend(n for n in around if n not in visited)

    return revealed


def validate_determinism(
    seed: str,
    iterations: int = 100,
    *,
    base_density: float = DEFAULT_MINE_DENSITY,
    rng: random.Random | None = None,
) -> bool:
    """Spot-check that repeated queries agree for ``iterations`` random coordinates."""
    check_seed(seed)
    sampler = rng or random.Random()
    for _ in range(iterations):
        cx = sampler.randrange(-500, 500)
        cy = sampler.randrange(-500, 500)
        if is_mine(cx, cy, seed, base_density) != is_mine(cx, cy, seed, base_density):
            return False
    return True
