from __future__ import annotations

import itertools
from pathlib import Path

from infinisweep.engine import is_mine
from infinisweep.models import CellAction, GameStatus, ModifiedCell, PlayerProgress, UpgradeLevels
from infinisweep.replay import InMemoryReplayStore, JsonlReplayStore, build_replay, load_replay, reconstruct_board
from infinisweep.session import GameSessionController, InMemorySessionRepository

SEED = "test-seed-12345"


def test_jsonl_store_filters_and_orders(tmp_path: Path) -> None:
    store = JsonlReplayStore(tmp_path / "replays" / "moves.jsonl")
    store.append(ModifiedCell("s1", 2, 3, CellAction.FLAG, timestamp=20, seed=SEED, mine_density=0.13))
    store.append(ModifiedCell("s2", 0, 0, CellAction.REVEAL, timestamp=5))
    store.append(ModifiedCell("s1", -4, 1, CellAction.REVEAL, timestamp=10, seed=f"{SEED}-safe-0"))

    events = JsonlReplayStore(tmp_path / "replays" / "moves.jsonl").list_for_session("s1")

    assert [(e.x, e.y, e.action) for e in events] == [(-4, 1, CellAction.REVEAL), (2, 3, CellAction.FLAG)]
    assert events[0].seed == f"{SEED}-safe-0"
    assert events[0].mine_density is None
    assert events[1].mine_density == 0.13


def test_missing_log_has_no_events(tmp_path: Path) -> None:
    assert JsonlReplayStore(tmp_path / "none.jsonl").list_for_session("s1") == []


def test_build_replay_offsets() -> None:
    events = [
        ModifiedCell("s1", 0, 0, CellAction.REVEAL, timestamp=1_000),
        ModifiedCell("s1", 1, 0, CellAction.FLAG, timestamp=1_250),
    ]

    data = build_replay("s1", events)

    assert data is not None
    assert [move.time_offset for move in data.moves] == [0, 250]
    assert build_replay("s1", []) is None


def test_reconstruct_board_upto() -> None:
    events = [
        ModifiedCell("s1", 0, 0, CellAction.REVEAL, timestamp=1),
        ModifiedCell("s1", 1, 0, CellAction.FLAG, timestamp=2),
        ModifiedCell("s1", 1, 0, CellAction.UNFLAG, timestamp=3),
    ]

    assert reconstruct_board(SEED, 0.15, events, upto=-1).revealed == set()
    board = reconstruct_board(SEED, 0.15, events, upto=1)
    assert board.cell(1, 0).flagged
    assert not reconstruct_board(SEED, 0.15, events).cell(1, 0).flagged


def _play_session(store: InMemoryReplayStore) -> GameSessionController:
    counter = itertools.count(1)
    controller = GameSessionController.start(
        InMemorySessionRepository(),
        progress=PlayerProgress(upgrades=UpgradeLevels(safe_zone=1, second_chance=1)),
        seed_factory=lambda: SEED,
        replay_store=store,
        clock=lambda: next(counter),
    )
    # (1, 0) is a mine under the session seed, so the first safe click re-rolls.
    controller.reveal(1, 0)
    assert controller.seed != SEED

    safe_moves = 0
    mine_flagged = False
    for x, y in itertools.product(range(-12, 13, 3), range(-12, 13, 4)):
        if controller.status is not GameStatus.ACTIVE:
            break
        if is_mine(x, y, controller.seed, controller.mine_density):
            if not mine_flagged:
                controller.toggle_flag(x, y)
                controller.toggle_flag(x, y)
                controller.toggle_flag(x, y)
                mine_flagged = True
            continue
        controller.reveal(x, y)
        safe_moves += 1

    # Spend the second chance on a known mine.
    for x in range(20, 120):
        if is_mine(x, 0, controller.seed, controller.mine_density) and not controller.board.cell(x, 0).revealed:
            controller.reveal(x, 0)
            break

    assert safe_moves > 5
    assert mine_flagged
    return controller


def test_replay_reconstructs_live_board() -> None:
    store = InMemoryReplayStore()
    controller = _play_session(store)

    data = load_replay(store, controller.session_id)
    assert data is not None
    board = reconstruct_board(controller.record.seed, controller.record.mine_density, data.moves)

    assert board.revealed == controller.board.revealed
    assert board.flagged == controller.board.flagged


def test_replay_through_jsonl_log(tmp_path: Path) -> None:
    memory = InMemoryReplayStore()
    controller = _play_session(memory)
    log = JsonlReplayStore(tmp_path / "moves.jsonl")
    for event in memory.list_for_session(controller.session_id):
        log.append(event)

    board = reconstruct_board(
        controller.record.seed,
        controller.record.mine_density,
        log.list_for_session(controller.session_id),
    )

    assert board.revealed == controller.board.revealed
    assert board.flagged == controller.board.flagged
