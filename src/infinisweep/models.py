from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterator


@dataclass(frozen=True, slots=True, order=True)
class Coordinate:
    """A cell position on the unbounded board. Hashable, sortable and unpackable as ``x, y``."""

    x: int
    y: int

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


class GameStatus(str, Enum):
    ACTIVE = "ACTIVE"
    WON = "WON"
    LOST = "LOST"


class CellAction(str, Enum):
    """Player actions recorded in the replay log."""

    REVEAL = "REVEAL"
    FLAG = "FLAG"
    UNFLAG = "UNFLAG"


@dataclass(slots=True)
class CellState:
    revealed: bool = False
    flagged: bool = False


@dataclass(slots=True)
class GameSessionRecord:
    id: str
    seed: str
    mine_density: float
    status: GameStatus = GameStatus.ACTIVE
    score: int = 0
    user_id: str | None = None
    player_name: str | None = None
    cells_revealed: int = 0
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    end_time: datetime | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(slots=True)
class ModifiedCell:
    """One replay event.

    ``seed`` is the seed variant active when the action happened and ``mine_density`` the
    session density it was played at.
    """

    session_id: str
    x: int
    y: int
    action: CellAction
    timestamp: int
    seed: str | None = None
    mine_density: float | None = None


@dataclass(slots=True)
class ReplayMove:
    x: int
    y: int
    action: CellAction
    timestamp: int
    time_offset: int
    seed: str | None = None
    mine_density: float | None = None


@dataclass(slots=True)
class ReplayData:
    session_id: str
    moves: list[ReplayMove] = field(default_factory=list)


@dataclass(slots=True)
class LeaderboardEntry:
    id: str
    session_id: str
    player_name: str
    score: int
    cells_revealed: int
    time_played: int
    created_at: datetime


@dataclass(slots=True)
class UpgradeLevels:
    mine_density_reduction: int = 0
    safe_zone: int = 0
    score_multiplier: int = 0
    flag_bonus: int = 0
    second_chance: int = 0


@dataclass(slots=True)
class PlayerProgress:
    total_coins: int = 0
    lifetime_score: int = 0
    games_played: int = 0
    upgrades: UpgradeLevels = field(default_factory=UpgradeLevels)
