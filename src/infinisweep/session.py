"""Game session orchestration: safe clicks, lives, scoring, persistence and replay recording."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Protocol
from uuid import uuid4

from infinisweep.board import BoardState
from infinisweep.engine import generate_seed, is_mine, resolve_safe_seed
from infinisweep.engine.field import MAX_REVEAL_PER_CLICK
from infinisweep.engine.safe_click import SAFE_CLICK_MAX_ATTEMPTS
from infinisweep.engine.validation import InvalidQueryError
from infinisweep.models import (
    CellAction,
    Coordinate,
    GameSessionRecord,
    GameStatus,
    LeaderboardEntry,
    ModifiedCell,
    PlayerProgress,
)
from infinisweep.progress import ProgressStore
from infinisweep.replay import ReplayStore
from infinisweep.upgrades import GameModifiers

MIN_SESSION_DENSITY = 0.01
MAX_SESSION_DENSITY = 0.5


class SessionNotFoundError(KeyError):
    """Raised when a session id is not present in the repository."""


class GameOverError(RuntimeError):
    """Raised when an action targets a game that has already ended."""


class SessionRepository(Protocol):
    """Persistence contract for game session records."""

    def create(self, record: GameSessionRecord) -> None:
        """Insert a new session."""

    def get(self, session_id: str) -> GameSessionRecord:
        """Return a session or raise :class:`SessionNotFoundError`."""

    def update(self, record: GameSessionRecord) -> None:
        """Persist changes to an existing session."""

    def list_all(self) -> list[GameSessionRecord]:
        """Return every stored session."""


class InMemorySessionRepository:
    def __init__(self) -> None:
        self._sessions: dict[str, GameSessionRecord] = {}

    def create(self, record: GameSessionRecord) -> None:
        self._sessions[record.id] = record

    def get(self, session_id: str) -> GameSessionRecord:
        if session_id not in self._sessions:
            raise SessionNotFoundError(f"Unknown game session id: {session_id}")
        return self._sessions[session_id]

    def update(self, record: GameSessionRecord) -> None:
        if record.id not in self._sessions:
            raise SessionNotFoundError(f"Unknown game session id: {record.id}")
        record.updated_at = datetime.now(timezone.utc)
        self._sessions[record.id] = record

    def list_all(self) -> list[GameSessionRecord]:
        return list(self._sessions.values())


def create_session(
    repository: SessionRepository,
    *,
    mine_density: float,
    user_id: str | None = None,
    seed_factory: Callable[[], str] = generate_seed,
) -> GameSessionRecord:
    """Mint a seed server-side and store a new ACTIVE session."""
    if isinstance(mine_density, bool) or not MIN_SESSION_DENSITY <= mine_density <= MAX_SESSION_DENSITY:
        raise InvalidQueryError(
            f"Session mine density must be within [{MIN_SESSION_DENSITY}, {MAX_SESSION_DENSITY}], got {mine_density!r}"
        )
    record = GameSessionRecord(id=str(uuid4()), seed=seed_factory(), mine_density=mine_density, user_id=user_id)
    repository.create(record)
    return record


def submit_score(repository: SessionRepository, session_id: str, player_name: str, score: int) -> GameSessionRecord:
    record = repository.get(session_id)
    record.player_name = player_name
    record.score = score
    repository.update(record)
    return record


def top_scores(repository: SessionRepository, limit: int = 100) -> list[LeaderboardEntry]:
    """Leaderboard view: sessions ordered by score, best first."""
    ranked = sorted(repository.list_all(), key=lambda record: record.score, reverse=True)
    entries: list[LeaderboardEntry] = []
    for record in ranked[:limit]:
        finished = record.end_time or record.updated_at
        entries.append(
            LeaderboardEntry(
                id=record.id,
                session_id=record.id,
                player_name=record.player_name or record.user_id or "Anonymous",
                score=record.score,
                cells_revealed=record.cells_revealed,
                time_played=max(0, int((finished - record.start_time).total_seconds())),
                created_at=record.start_time,
            )
        )
    return entries


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(slots=True)
class RevealOutcome:
    """Result of one reveal action as seen by the presentation layer."""

    revealed: list[Coordinate] = field(default_factory=list)
    hit_mine: bool = False
    status: GameStatus = GameStatus.ACTIVE
    score: int = 0


class GameSessionController:
    """Drives one live game on top of the pure engine.

    The active seed starts as the session seed and may be replaced by a safe-click
    re-roll; every replay event carries the seed that was active when it happened.
    """

    def __init__(
        self,
        record: GameSessionRecord,
        *,
        modifiers: GameModifiers,
        repository: SessionRepository | None = None,
        replay_store: ReplayStore | None = None,
        progress_store: ProgressStore | None = None,
        max_cells: int = MAX_REVEAL_PER_CLICK,
        safe_click_max_attempts: int = SAFE_CLICK_MAX_ATTEMPTS,
        clock: Callable[[], int] = _now_ms,
        logger: logging.Logger | None = None,
    ) -> None:
        self._record = record
        self._modifiers = modifiers
        self._repository = repository
        self._replay_store = replay_store
        self._progress_store = progress_store
        self._max_cells = max_cells
        self._safe_click_max_attempts = safe_click_max_attempts
        self._clock = clock
        self._logger = logger or logging.getLogger("infinisweep.session")

        self._seed = record.seed
        self._board = BoardState()
        self._clicks = 0
        self._second_chances = modifiers.second_chances
        self._rewarded_flags: set[Coordinate] = set()
        self.coins_earned = 0

    @classmethod
    def start(
        cls,
        repository: SessionRepository,
        *,
        progress: PlayerProgress,
        user_id: str | None = None,
        seed_factory: Callable[[], str] = generate_seed,
        **kwargs,
    ) -> "GameSessionController":
        """Create a session whose density and perks come from ``progress`` upgrades."""
        modifiers = GameModifiers.from_upgrades(progress.upgrades)
        record = create_session(
            repository,
            mine_density=modifiers.mine_density,
            user_id=user_id,
            seed_factory=seed_factory,
        )
        controller = cls(record, modifiers=modifiers, repository=repository, **kwargs)
        controller._logger.info(
            "session_started",
            extra={"session_id": record.id, "mine_density": record.mine_density, "safe_clicks": modifiers.safe_clicks},
        )
        return controller

    @property
    def session_id(self) -> str:
        return self._record.id

    @property
    def record(self) -> GameSessionRecord:
        return self._record

    @property
    def seed(self) -> str:
        """Seed variant currently in effect."""
        return self._seed

    @property
    def mine_density(self) -> float:
        return self._record.mine_density

    @property
    def status(self) -> GameStatus:
        return self._record.status

    @property
    def score(self) -> int:
        return self._record.score

    @property
    def board(self) -> BoardState:
        return self._board

    @property
    def safe_clicks_remaining(self) -> int:
        return max(0, self._modifiers.safe_clicks - self._clicks)

    @property
    def second_chances_remaining(self) -> int:
        return self._second_chances

    def reveal(self, x: int, y: int) -> RevealOutcome:
        self._ensure_active()
        current = self._board.cell(x, y)
        if current.revealed or current.flagged:
            return RevealOutcome(status=self.status, score=self.score)

        if self._clicks < self._modifiers.safe_clicks:
            self._apply_safe_click(x, y)
        self._clicks += 1

        self._record_event(x, y, CellAction.REVEAL)
        hit = is_mine(x, y, self._seed, self.mine_density)
        newly = self._board.reveal(x, y, self._seed, self.mine_density, self._max_cells)

        if hit:
            return self._handle_mine(x, y, newly)

        self._record.score += len(newly) * self._modifiers.points_per_cell
        self._record.cells_revealed += len(newly)
        self._persist()
        self._logger.info(
            "cell_revealed",
            extra={"session_id": self.session_id, "x": x, "y": y, "revealed": len(newly), "score": self.score},
        )
        return RevealOutcome(revealed=newly, status=self.status, score=self.score)

    def toggle_flag(self, x: int, y: int) -> bool | None:
        """Flip the flag on a hidden cell; returns the new flag state, None if refused."""
        self._ensure_active()
        current = self._board.cell(x, y)
        if current.revealed:
            return None

        flagged = not current.flagged
        self._record_event(x, y, CellAction.FLAG if flagged else CellAction.UNFLAG)
        self._board.set_flag(x, y, flagged)

        coord = Coordinate(x, y)
        if flagged and coord not in self._rewarded_flags and is_mine(x, y, self._seed, self.mine_density):
            self._rewarded_flags.add(coord)
            self._record.score += self._modifiers.points_per_flag
            self._persist()
        return flagged

    def chord(self, x: int, y: int) -> list[Coordinate]:
        """Open every chord target around a numbered cell, stopping if the game ends."""
        self._ensure_active()
        opened: list[Coordinate] = []
        for target in self._board.chord_targets(x, y, self._seed, self.mine_density):
            if self.status is not GameStatus.ACTIVE:
                break
            opened.extend(self.reveal(target.x, target.y).revealed)
        return opened

    def _apply_safe_click(self, x: int, y: int) -> None:
        resolved = resolve_safe_seed(
            x,
            y,
            self._seed,
            self.mine_density,
            salt=self._clicks,
            max_attempts=self._safe_click_max_attempts,
        )
        if not resolved.safe:
            self._logger.warning(
                "safe_click_exhausted",
                extra={"session_id": self.session_id, "x": x, "y": y, "attempts": resolved.attempts},
            )
        elif resolved.seed != self._seed:
            self._logger.info(
                "safe_click_rerolled",
                extra={"session_id": self.session_id, "x": x, "y": y, "attempts": resolved.attempts},
            )
            self._seed = resolved.seed

    def _handle_mine(self, x: int, y: int, newly: list[Coordinate]) -> RevealOutcome:
        if self._second_chances > 0:
            self._second_chances -= 1
            self._logger.info(
                "second_chance_used",
                extra={"session_id": self.session_id, "x": x, "y": y, "remaining": self._second_chances},
            )
            return RevealOutcome(revealed=newly, hit_mine=True, status=self.status, score=self.score)

        self._logger.info("mine_hit", extra={"session_id": self.session_id, "x": x, "y": y})
        self._finish(GameStatus.LOST)
        return RevealOutcome(revealed=newly, hit_mine=True, status=self.status, score=self.score)

    def _finish(self, status: GameStatus) -> None:
        self._record.status = status
        self._record.end_time = datetime.now(timezone.utc)
        self._persist()

        self.coins_earned = self.score // 10
        if self._progress_store is not None:
            self._progress_store.update_game_stats(self.score)
            self._progress_store.add_coins(self.coins_earned)

        self._logger.info(
            "session_ended",
            extra={
                "session_id": self.session_id,
                "status": status.value,
                "score": self.score,
                "coins_earned": self.coins_earned,
            },
        )

    def _ensure_active(self) -> None:
        if self.status is not GameStatus.ACTIVE:
            raise GameOverError(f"Game session {self.session_id} has ended ({self.status.value})")

    def _persist(self) -> None:
        if self._repository is not None:
            self._repository.update(self._record)

    def _record_event(self, x: int, y: int, action: CellAction) -> None:
        if self._replay_store is None:
            return
        event = ModifiedCell(
            session_id=self.session_id,
            x=x,
            y=y,
            action=action,
            timestamp=self._clock(),
            seed=self._seed,
            mine_density=self.mine_density,
        )
        try:
            self._replay_store.append(event)
        except Exception:  # noqa: BLE001 - a broken replay sink must not interrupt play.
            self._logger.exception(
                "replay_record_failed",
                extra={"session_id": self.session_id, "x": x, "y": y, "action": action.value},
            )
