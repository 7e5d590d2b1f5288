"""Per-cell deterministic random values (Mulberry32, first draw only)."""

from __future__ import annotations

from .seed import derive_state

MULBERRY32_INCREMENT = 0x6D2B79F5
_UINT32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296.0


def mulberry32(state: int) -> float:
    """Return the first Mulberry32 output for ``state`` as a float in [0, 1)."""
    t = (state + MULBERRY32_INCREMENT) & _UINT32
    t = ((t ^ (t >> 15)) * (t | 1)) & _UINT32
    t ^= (t + ((t ^ (t >> 7)) * (t | 61))) & _UINT32
    return ((t ^ (t >> 14)) & _UINT32) / _TWO_POW_32


def cell_material(seed: str, x: int, y: int) -> str:
    return f"{seed}:{x},{y}"


def value_at(material: str) -> float:
    """Rebuild the generator from ``material`` and return its single draw.

    Nothing is carried between calls, so cells can be queried in any order.
    """
    return mulberry32(derive_state(material))
