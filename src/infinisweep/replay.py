"""Replay event storage and board reconstruction."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import asdict
from pathlib import Path
from typing import Protocol

from infinisweep.board import BoardState
from infinisweep.engine.field import MAX_REVEAL_PER_CLICK
from infinisweep.models import CellAction, ModifiedCell, ReplayData, ReplayMove


class ReplayStore(Protocol):
    """Time-ordered log of cell modifications per session."""

    def append(self, event: ModifiedCell) -> None:
        """Persist one cell modification."""

    def list_for_session(self, session_id: str) -> list[ModifiedCell]:
        """Return the session's events ordered by timestamp (ties keep insertion order)."""


class InMemoryReplayStore:
    def __init__(self) -> None:
        self._events: list[ModifiedCell] = []

    def append(self, event: ModifiedCell) -> None:
        self._events.append(event)

    def list_for_session(self, session_id: str) -> list[ModifiedCell]:
        events = [event for event in self._events if event.session_id == session_id]
        return sorted(events, key=lambda event: event.timestamp)


class JsonlReplayStore:
    """Append-only JSONL replay log."""

    def __init__(self, file_path: str | Path) -> None:
        self._path = Path(file_path).expanduser()
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, event: ModifiedCell) -> None:
        payload = asdict(event)
        payload["action"] = event.action.value
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(payload) + "\n")

    def list_for_session(self, session_id: str) -> list[ModifiedCell]:
        if not self._path.exists():
            return []

        events: list[ModifiedCell] = []
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if not line.strip():
                    continue
                payload = json.loads(line)
                if payload["session_id"] != session_id:
                    continue
                events.append(
                    ModifiedCell(
                        session_id=payload["session_id"],
                        x=int(payload["x"]),
                        y=int(payload["y"]),
                        action=CellAction(payload["action"]),
                        timestamp=int(payload["timestamp"]),
                        seed=payload.get("seed"),
                        mine_density=payload.get("mine_density"),
                    )
                )
        return sorted(events, key=lambda event: event.timestamp)


def build_replay(session_id: str, events: Sequence[ModifiedCell]) -> ReplayData | None:
    """Attach time offsets (ms since the first move) to a session's events."""
    if not events:
        return None

    start = events[0].timestamp
    moves = [
        ReplayMove(
            x=event.x,
            y=event.y,
            action=event.action,
            timestamp=event.timestamp,
            time_offset=event.timestamp - start,
            seed=event.seed,
            mine_density=event.mine_density,
        )
        for event in events
    ]
    return ReplayData(session_id=session_id, moves=moves)


def load_replay(store: ReplayStore, session_id: str) -> ReplayData | None:
    return build_replay(session_id, store.list_for_session(session_id))


def reconstruct_board(
    seed: str,
    mine_density: float,
    moves: Iterable[ReplayMove | ModifiedCell],
    *,
    upto: int | None = None,
    max_cells: int = MAX_REVEAL_PER_CLICK,
) -> BoardState:
    """Rebuild board state by replaying moves through the engine.

    Each move is applied with the seed variant recorded alongside it, falling back to
    the session seed for moves logged without one. ``upto`` is the inclusive index of
    the last move to apply; ``-1`` gives the empty starting board.
    """
    board = BoardState()
    for index, move in enumerate(moves):
        if upto is not None and index > upto:
            break
        move_seed = move.seed or seed
        if move.action is CellAction.REVEAL:
            board.reveal(move.x, move.y, move_seed, mine_density, max_cells)
        elif move.action is CellAction.FLAG:
            board.set_flag(move.x, move.y, True)
        elif move.action is CellAction.UNFLAG:
            board.set_flag(move.x, move.y, False)
    return board
