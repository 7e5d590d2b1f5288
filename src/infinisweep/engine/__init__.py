"""Deterministic generation and reveal engine for the infinite board."""

from .biome import (
    BIOME_BANDS,
    DENSITY_MULTIPLIERS,
    MAX_EFFECTIVE_DENSITY,
    Biome,
    classify_biome,
    density_multiplier,
    effective_density,
)
from .field import (
    DEFAULT_MINE_DENSITY,
    MAX_REVEAL_PER_CLICK,
    adjacent_mine_count,
    flood_reveal,
    is_mine,
    neighbors,
    validate_determinism,
)
from .rng import cell_material, mulberry32, value_at
from .safe_click import SAFE_CLICK_MAX_ATTEMPTS, SafeSeed, resolve_safe_seed
from .seed import derive_state, generate_seed
from .validation import InvalidQueryError

__all__ = [
    "BIOME_BANDS",
    "DEFAULT_MINE_DENSITY",
    "DENSITY_MULTIPLIERS",
    "MAX_EFFECTIVE_DENSITY",
    "MAX_REVEAL_PER_CLICK",
    "SAFE_CLICK_MAX_ATTEMPTS",
    "Biome",
    "InvalidQueryError",
    "SafeSeed",
    "adjacent_mine_count",
    "cell_material",
    "classify_biome",
    "density_multiplier",
    "derive_state",
    "effective_density",
    "flood_reveal",
    "generate_seed",
    "is_mine",
    "mulberry32",
    "neighbors",
    "resolve_safe_seed",
    "validate_determinism",
    "value_at",
]
