from __future__ import annotations

import pytest

from infinisweep.engine import InvalidQueryError, is_mine, resolve_safe_seed

SEED = "test-seed-12345"


def test_safe_cell_keeps_seed() -> None:
    result = resolve_safe_seed(0, 0, SEED, 0.15)

    assert result.seed == SEED
    assert result.attempts == 0
    assert result.safe is True


def test_mine_is_rerolled_with_suffix() -> None:
    assert is_mine(1, 0, SEED, 0.15)

    result = resolve_safe_seed(1, 0, SEED, 0.15, salt=0)

    assert result.seed == "test-seed-12345-safe-0"
    assert result.attempts == 1
    assert not is_mine(1, 0, result.seed, 0.15)


def test_reroll_suffixes_accumulate() -> None:
    result = resolve_safe_seed(0, 0, SEED, 0.9, salt=0)

    assert result.seed == "test-seed-12345-safe-0-safe-0-safe-0"
    assert result.attempts == 3
    assert result.safe is True


def test_exhausted_budget_returns_original_seed() -> None:
    result = resolve_safe_seed(1, 0, SEED, 0.15, max_attempts=0)

    assert result.seed == SEED
    assert result.safe is False


def test_negative_budget_is_rejected() -> None:
    with pytest.raises(InvalidQueryError):
        resolve_safe_seed(0, 0, SEED, 0.15, max_attempts=-1)
