"""Upgrade catalogue and the gameplay values derived from upgrade levels."""

from __future__ import annotations

from dataclasses import dataclass, fields

from infinisweep.models import PlayerProgress, UpgradeLevels


@dataclass(frozen=True, slots=True)
class UpgradeDefinition:
    id: str
    name: str
    description: str
    max_level: int
    costs: tuple[int, ...]
    effects: tuple[str, ...]

    def cost_for(self, current_level: int) -> int | None:
        """Price of the next level, or None when the upgrade is maxed."""
        if current_level >= self.max_level:
            return None
        return self.costs[current_level]


UPGRADES: tuple[UpgradeDefinition, ...] = (
    UpgradeDefinition(
        id="mine_density_reduction",
        name="Mine Density Reduction",
        description="Reduce the probability of mines spawning",
        max_level=5,
        costs=(100, 250, 500, 1000, 2000),
        effects=("14% mines", "13% mines", "12% mines", "11% mines", "10% mines"),
    ),
    UpgradeDefinition(
        id="safe_zone",
        name="Safe Zone",
        description="Guarantee your first N clicks are safe",
        max_level=4,
        costs=(200, 500, 1000, 2500),
        effects=("3 safe clicks", "5 safe clicks", "7 safe clicks", "10 safe clicks"),
    ),
    UpgradeDefinition(
        id="score_multiplier",
        name="Score Multiplier",
        description="Increase points earned per cell revealed",
        max_level=5,
        costs=(150, 400, 800, 1500, 3000),
        effects=("12 pts/cell", "15 pts/cell", "20 pts/cell", "25 pts/cell", "30 pts/cell"),
    ),
    UpgradeDefinition(
        id="flag_bonus",
        name="Flag Bonus",
        description="Increase points for correctly flagging mines",
        max_level=3,
        costs=(300, 700, 1500),
        effects=("75 pts/flag", "100 pts/flag", "150 pts/flag"),
    ),
    UpgradeDefinition(
        id="second_chance",
        name="Second Chance",
        description="Survive hitting a mine (once per game)",
        max_level=2,
        costs=(5000, 15000),
        effects=("1 life", "2 lives"),
    ),
)

UPGRADE_IDS = tuple(f.name for f in fields(UpgradeLevels))

_POINTS_PER_CELL = (10, 12, 15, 20, 25, 30)
_POINTS_PER_FLAG = (50, 75, 100, 150)
_SAFE_CLICKS = (1, 3, 5, 7, 10)


def get_upgrade(upgrade_id: str) -> UpgradeDefinition:
    for upgrade in UPGRADES:
        if upgrade.id == upgrade_id:
            return upgrade
    raise KeyError(f"Unknown upgrade: {upgrade_id}")


def _lookup(table: tuple[int, ...], level: int, default: int) -> int:
    if 0 <= level < len(table):
        return table[level]
    return default


def calculate_mine_density(level: int) -> float:
    return max(0.10, 0.15 - level * 0.01)


def calculate_points_per_cell(level: int) -> int:
    return _lookup(_POINTS_PER_CELL, level, 10)


def calculate_points_per_flag(level: int) -> int:
    return _lookup(_POINTS_PER_FLAG, level, 50)


def calculate_safe_clicks(level: int) -> int:
    return _lookup(_SAFE_CLICKS, level, 1)


def calculate_second_chances(level: int) -> int:
    return level


def default_progress() -> PlayerProgress:
    return PlayerProgress()


@dataclass(frozen=True, slots=True)
class GameModifiers:
    """Per-game values derived once from the player's upgrade levels."""

    mine_density: float
    safe_clicks: int
    second_chances: int
    points_per_cell: int
    points_per_flag: int

    @classmethod
    def from_upgrades(cls, upgrades: UpgradeLevels) -> "GameModifiers":
        return cls(
            mine_density=calculate_mine_density(upgrades.mine_density_reduction),
            safe_clicks=calculate_safe_clicks(upgrades.safe_zone),
            second_chances=calculate_second_chances(upgrades.second_chance),
            points_per_cell=calculate_points_per_cell(upgrades.score_multiplier),
            points_per_flag=calculate_points_per_flag(upgrades.flag_bonus),
        )
