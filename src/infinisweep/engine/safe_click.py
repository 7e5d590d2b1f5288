"""Bounded seed re-roll used by guaranteed-safe clicks."""

from __future__ import annotations

from dataclasses import dataclass

from .field import DEFAULT_MINE_DENSITY, _check_query, _is_mine
from .validation import check_count

SAFE_CLICK_MAX_ATTEMPTS = 100


@dataclass(frozen=True, slots=True)
class SafeSeed:
    """Outcome of a safe-click re-roll.

    ``seed`` is the variant to use from now on; ``safe`` is False when the attempt
    budget ran out, in which case ``seed`` is the unchanged input seed.
    """

    seed: str
    attempts: int
    safe: bool


def resolve_safe_seed(
    x: int,
    y: int,
    seed: str,
    base_density: float = DEFAULT_MINE_DENSITY,
    *,
    salt: int | str = 0,
    max_attempts: int = SAFE_CLICK_MAX_ATTEMPTS,
) -> SafeSeed:
    """Append ``-safe-{salt}`` to ``seed`` until ``(x, y)`` is not a mine."""
    _check_query(x, y, seed, base_density)
    check_count("max_attempts", max_attempts, minimum=0)

    candidate = seed
    attempts = 0
    while _is_mine(x, y, candidate, base_density):
        if attempts >= max_attempts:
            return SafeSeed(seed=seed, attempts=attempts, safe=False)
        candidate = f"{candidate}-safe-{salt}"
        attempts += 1
    return SafeSeed(seed=candidate, attempts=attempts, safe=True)
