"""JSON-file persistence for coins, stats and upgrade levels."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

from infinisweep.models import PlayerProgress, UpgradeLevels
from infinisweep.upgrades import UPGRADE_IDS, default_progress, get_upgrade


class ProgressStore:
    """Loads and saves :class:`PlayerProgress` as a single JSON document.

    Every mutating helper reloads from disk first, so two stores pointed at the same
    file never work from a stale copy.
    """

    def __init__(self, file_path: str | Path, *, logger: logging.Logger | None = None) -> None:
        self._path = Path(file_path).expanduser()
        self._logger = logger or logging.getLogger("infinisweep.progress")

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> PlayerProgress:
        if not self._path.exists():
            return default_progress()

        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
            levels = payload.get("upgrades", {})
            return PlayerProgress(
                total_coins=int(payload.get("total_coins", 0)),
                lifetime_score=int(payload.get("lifetime_score", 0)),
                games_played=int(payload.get("games_played", 0)),
                upgrades=UpgradeLevels(**{key: int(levels.get(key, 0)) for key in UPGRADE_IDS}),
            )
        except (OSError, ValueError, TypeError, AttributeError):
            self._logger.exception("progress_load_failed", extra={"path": str(self._path)})
            return default_progress()

    def save(self, progress: PlayerProgress) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(asdict(progress), indent=2), encoding="utf-8")

    def add_coins(self, amount: int) -> PlayerProgress:
        progress = self.load()
        progress.total_coins += amount
        self.save(progress)
        return progress

    def update_game_stats(self, score: int) -> PlayerProgress:
        progress = self.load()
        progress.games_played += 1
        progress.lifetime_score = max(progress.lifetime_score, score)
        self.save(progress)
        return progress

    def purchase_upgrade(self, upgrade_id: str) -> PlayerProgress | None:
        """Buy the next level of ``upgrade_id``; None when unaffordable or maxed."""
        upgrade = get_upgrade(upgrade_id)
        progress = self.load()
        level = getattr(progress.upgrades, upgrade_id)
        cost = upgrade.cost_for(level)
        if cost is None or progress.total_coins < cost:
            self._logger.info(
                "upgrade_purchase_rejected",
                extra={"upgrade": upgrade_id, "level": level, "coins": progress.total_coins, "cost": cost},
            )
            return None

        progress.total_coins -= cost
        setattr(progress.upgrades, upgrade_id, level + 1)
        self.save(progress)
        self._logger.info("upgrade_purchased", extra={"upgrade": upgrade_id, "level": level + 1, "cost": cost})
        return progress

    def reset(self) -> PlayerProgress:
        progress = default_progress()
        self.save(progress)
        return progress
