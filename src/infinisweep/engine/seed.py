"""Seed generation and string-to-state derivation."""

from __future__ import annotations

import secrets
import struct

from .validation import check_seed

SEED_BYTES = 32


def generate_seed() -> str:
    """Return a fresh session seed from the system CSPRNG.

    Only the session layer should call this; clients receive a seed, they never mint one.
    """
    return secrets.token_hex(SEED_BYTES)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value & 0x8000_0000 else value


def _utf16_units(material: str) -> tuple[int, ...]:
    encoded = material.encode("utf-16-le", "surrogatepass")
    return struct.unpack(f"<{len(encoded) // 2}H", encoded)


def derive_state(material: str) -> int:
    """Fold ``material`` into a signed 32-bit state with ``h = (h << 5) - h + unit``.

    Units are UTF-16 code units and the accumulator wraps to int32 after every step,
    so the result matches other implementations of the same fold bit for bit.
    """
    check_seed(material)
    state = 0
    for unit in _utf16_units(material):
        state = _to_int32((state << 5) - state + unit)
    return state
