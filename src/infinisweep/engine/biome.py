"""Distance-banded biomes that scale mine density away from the origin."""

from __future__ import annotations

from enum import Enum

from .validation import check_coordinate, check_density


class Biome(str, Enum):
    """Zones ordered by distance from the origin."""

    SAFE_HAVEN = "SAFE_HAVEN"
    WASTELAND = "WASTELAND"
    VOID = "VOID"
    MINEFIELD = "MINEFIELD"


# (exclusive outer radius, biome); anything beyond the last band is MINEFIELD.
BIOME_BANDS: tuple[tuple[int, Biome], ...] = (
    (50, Biome.SAFE_HAVEN),
    (100, Biome.WASTELAND),
    (200, Biome.VOID),
)

DENSITY_MULTIPLIERS: dict[Biome, float] = {
    Biome.SAFE_HAVEN: 1.0,
    Biome.WASTELAND: 1.2,
    Biome.VOID: 1.5,
    Biome.MINEFIELD: 2.0,
}

MAX_EFFECTIVE_DENSITY = 0.9


def _classify(x: int, y: int) -> Biome:
    # Squared integer comparison is exact for sqrt(x^2 + y^2) < r and never overflows.
    distance_sq = x * x + y * y
    for radius, biome in BIOME_BANDS:
        if distance_sq < radius * radius:
            return biome
    return Biome.MINEFIELD


def classify_biome(x: int, y: int) -> Biome:
    check_coordinate(x, y)
    return _classify(x, y)


def density_multiplier(biome: Biome) -> float:
    return DENSITY_MULTIPLIERS[Biome(biome)]


def _effective_density(x: int, y: int, base_density: float) -> float:
    return min(MAX_EFFECTIVE_DENSITY, base_density * DENSITY_MULTIPLIERS[_classify(x, y)])


def effective_density(x: int, y: int, base_density: float) -> float:
    """Mine probability at ``(x, y)`` after the biome multiplier, capped at 0.9."""
    check_coordinate(x, y)
    check_density(base_density)
    return _effective_density(x, y, base_density)
