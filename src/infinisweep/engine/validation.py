"""Argument checks applied at the public engine boundary."""

from __future__ import annotations

import math
from numbers import Real


class InvalidQueryError(ValueError):
    """Raised when an engine query receives arguments of the wrong shape or range."""


def check_coordinate(x: object, y: object) -> None:
    for name, value in (("x", x), ("y", y)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidQueryError(f"Coordinate {name} must be an int, got {type(value).__name__}: {value!r}")


def check_seed(seed: object) -> None:
    if not isinstance(seed, str):
        raise InvalidQueryError(f"Seed must be a str, got {type(seed).__name__}")


def check_density(base_density: object) -> None:
    # 0 is allowed and means an empty field; anything else outside [0, 1) is rejected, not clamped.
    if isinstance(base_density, bool) or not isinstance(base_density, Real):
        raise InvalidQueryError(f"Base density must be a real number, got {type(base_density).__name__}")
    if not math.isfinite(base_density) or not 0.0 <= base_density < 1.0:
        raise InvalidQueryError(f"Base density must be within [0, 1), got {base_density!r}")


def check_count(name: str, value: object, *, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQueryError(f"{name} must be an int, got {type(value).__name__}")
    if value < minimum:
        raise InvalidQueryError(f"{name} must be >= {minimum}, got {value}")
