from __future__ import annotations

import pytest

from infinisweep.engine import InvalidQueryError, cell_material, derive_state, generate_seed, mulberry32, value_at


@pytest.mark.parametrize(
    ("material", "expected"),
    [
        ("", 0),
        ("a", 97),
        ("ab", 3105),
        ("hello", 99162322),
        ("polygenelubricants", -2147483648),
        ("test-seed-12345:0,0", 1092046892),
        ("test-seed-12345:-10,-20", -1320840445),
        ("é😀", 1996812),
    ],
)
def test_derive_state_matches_reference_fold(material: str, expected: int) -> None:
    assert derive_state(material) == expected


def test_derive_state_stays_in_int32_range() -> None:
    state = derive_state("x" * 500)

    assert -(2**31) <= state < 2**31


def test_derive_state_rejects_non_string() -> None:
    with pytest.raises(InvalidQueryError):
        derive_state(12345)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("state", "expected"),
    [
        (0, 0.26642920868471265),
        (1, 0.6270739405881613),
        (-1, 0.8964226141106337),
        (2147483647, 0.4290980885270983),
        (-2147483648, 0.8205775609239936),
        (12345, 0.9797282677609473),
    ],
)
def test_mulberry32_first_draw_matches_reference(state: int, expected: float) -> None:
    assert mulberry32(state) == expected


def test_value_at_uses_cell_material() -> None:
    assert cell_material("test-seed-12345", -10, -20) == "test-seed-12345:-10,-20"
    assert value_at(cell_material("test-seed-12345", 0, 0)) == 0.4045811570249498
    assert value_at(cell_material("test-seed-12345", 1, 0)) == 0.07372614229097962


def test_value_at_is_in_unit_interval() -> None:
    for i in range(200):
        value = value_at(f"seed:{i},{-i}")
        assert 0.0 <= value < 1.0


def test_generate_seed_is_hex_and_unique() -> None:
    first = generate_seed()
    second = generate_seed()

    assert len(first) == 64
    int(first, 16)
    assert first != second
