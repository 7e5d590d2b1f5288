from __future__ import annotations

import pytest

from infinisweep.engine import (
    MAX_EFFECTIVE_DENSITY,
    Biome,
    InvalidQueryError,
    classify_biome,
    density_multiplier,
    effective_density,
)


@pytest.mark.parametrize(
    ("x", "y", "expected"),
    [
        (0, 0, Biome.SAFE_HAVEN),
        (49, 0, Biome.SAFE_HAVEN),
        (35, 35, Biome.SAFE_HAVEN),
        (30, 40, Biome.WASTELAND),
        (-50, 0, Biome.WASTELAND),
        (0, -99, Biome.WASTELAND),
        (60, 80, Biome.VOID),
        (-141, -141, Biome.VOID),
        (-142, -142, Biome.MINEFIELD),
        (120, 160, Biome.MINEFIELD),
        (10**30, -(10**30), Biome.MINEFIELD),
    ],
)
def test_classify_biome_uses_half_open_distance_bands(x: int, y: int, expected: Biome) -> None:
    assert classify_biome(x, y) is expected


def test_density_multipliers() -> None:
    assert density_multiplier(Biome.SAFE_HAVEN) == 1.0
    assert density_multiplier(Biome.WASTELAND) == 1.2
    assert density_multiplier(Biome.VOID) == 1.5
    assert density_multiplier(Biome.MINEFIELD) == 2.0


def test_effective_density_scales_by_zone() -> None:
    assert effective_density(0, 0, 0.15) == 0.15
    assert effective_density(70, 0, 0.15) == pytest.approx(0.18)
    assert effective_density(150, 0, 0.15) == pytest.approx(0.225)
    assert effective_density(500, 0, 0.15) == pytest.approx(0.3)


def test_effective_density_never_exceeds_cap() -> None:
    for x in (0, 75, 150, 300):
        assert effective_density(x, 0, 0.95) <= MAX_EFFECTIVE_DENSITY
    assert effective_density(300, 0, 0.5) == MAX_EFFECTIVE_DENSITY


@pytest.mark.parametrize("bad", [1.5, 0.1j, float("nan")])
def test_classify_biome_rejects_non_integer_coordinates(bad) -> None:
    with pytest.raises(InvalidQueryError):
        classify_biome(bad, 0)


def test_classify_biome_rejects_bool() -> None:
    with pytest.raises(InvalidQueryError):
        classify_biome(True, 0)
