"""CLI startup entrypoint for infinisweep."""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path

import typer
from rich import print

from infinisweep.config import settings
from infinisweep.engine import (
    InvalidQueryError,
    adjacent_mine_count,
    classify_biome,
    effective_density,
    flood_reveal,
    generate_seed,
    is_mine,
)
from infinisweep.models import GameStatus
from infinisweep.progress import ProgressStore
from infinisweep.render import render_viewport
from infinisweep.replay import InMemoryReplayStore, JsonlReplayStore, ReplayStore, load_replay, reconstruct_board
from infinisweep.session import GameOverError, GameSessionController, InMemorySessionRepository
from infinisweep.upgrades import UPGRADES

app = typer.Typer(help="Infinite minesweeper engine and game tools")


@app.callback()
def _configure(log_level: str = typer.Option(None, help="Override INFINISWEEP_LOG_LEVEL")) -> None:
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _density(value: float | None) -> float:
    return settings.base_density if value is None else value


def _fail(exc: Exception) -> None:
    print({"error": str(exc)})
    raise typer.Exit(code=1)


def _build_progress_store() -> ProgressStore:
    return ProgressStore(settings.progress_path)


def _build_replay_store() -> ReplayStore:
    if settings.replay_log_path:
        return JsonlReplayStore(settings.replay_log_path)
    return InMemoryReplayStore()


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "base_density": settings.base_density,
            "max_reveal_per_click": settings.max_reveal_per_click,
            "safe_click_max_attempts": settings.safe_click_max_attempts,
            "replay_log_path": settings.replay_log_path,
            "progress_path": settings.progress_path,
        }
    )


@app.command("new-seed")
def new_seed() -> None:
    """Generate a session seed from the system CSPRNG."""
    print({"seed": generate_seed()})


@app.command()
def probe(
    x: int = typer.Option(..., help="Cell X"),
    y: int = typer.Option(..., help="Cell Y"),
    seed: str = typer.Option(..., help="Session seed"),
    density: float = typer.Option(None, help="Base mine density"),
) -> None:
    """Show biome, mine verdict and adjacency for one cell."""
    base = _density(density)
    try:
        print(
            {
                "x": x,
                "y": y,
                "biome": classify_biome(x, y).value,
                "effective_density": effective_density(x, y, base),
                "is_mine": is_mine(x, y, seed, base),
                "adjacent_mines": adjacent_mine_count(x, y, seed, base),
            }
        )
    except InvalidQueryError as exc:
        _fail(exc)


@app.command()
def reveal(
    x: int = typer.Option(..., help="Clicked X"),
    y: int = typer.Option(..., help="Clicked Y"),
    seed: str = typer.Option(..., help="Session seed"),
    density: float = typer.Option(None, help="Base mine density"),
    max_cells: int = typer.Option(None, help="Cell budget (defaults to INFINISWEEP_MAX_REVEAL_PER_CLICK)"),
    show: int = typer.Option(20, help="How many revealed coordinates to list"),
) -> None:
    """Run a flood reveal from one cell."""
    budget = settings.max_reveal_per_click if max_cells is None else max_cells
    try:
        cells = flood_reveal(x, y, seed, _density(density), budget)
    except InvalidQueryError as exc:
        _fail(exc)
    print({"revealed_count": len(cells), "cells": [[cell.x, cell.y] for cell in cells[:show]]})


@app.command()
def render(
    seed: str = typer.Option(..., help="Session seed"),
    x: int = typer.Option(0, help="Viewport centre X"),
    y: int = typer.Option(0, help="Viewport centre Y"),
    width: int = typer.Option(None, help="Viewport width"),
    height: int = typer.Option(None, help="Viewport height"),
    density: float = typer.Option(None, help="Base mine density"),
) -> None:
    """Print the fully uncovered field around a point."""
    width = settings.viewport_width if width is None else width
    height = settings.viewport_height if height is None else height
    if width < 1 or height < 1:
        raise typer.BadParameter("Viewport width and height must be at least 1")
    try:
        rows = render_viewport(
            seed,
            _density(density),
            origin_x=x - width // 2,
            origin_y=y - height // 2,
            width=width,
            height=height,
            show_all=True,
        )
    except InvalidQueryError as exc:
        _fail(exc)
    print("\n".join(rows))


@app.command()
def replay(
    session_id: str = typer.Option(..., help="Session to reconstruct"),
    seed: str = typer.Option(..., help="Canonical session seed"),
    density: float = typer.Option(None, help="Session mine density (defaults to the density recorded in the log)"),
    log: str = typer.Option(None, help="Replay JSONL file (defaults to INFINISWEEP_REPLAY_LOG_PATH)"),
    upto: int = typer.Option(None, help="Last move index to apply"),
    size: int = typer.Option(11, help="Viewport edge length around the last applied move"),
) -> None:
    """Rebuild a session's board from its replay log."""
    path = log or settings.replay_log_path
    if not path:
        raise typer.BadParameter("Provide --log or set INFINISWEEP_REPLAY_LOG_PATH")

    data = load_replay(JsonlReplayStore(Path(path)), session_id)
    if data is None:
        print({"replay": None, "session_id": session_id})
        raise typer.Exit(code=1)

    base = density if density is not None else data.moves[0].mine_density
    if base is None:
        raise typer.BadParameter("Log has no recorded mine density; provide --density")
    if size < 1:
        raise typer.BadParameter("--size must be at least 1")
    last = len(data.moves) - 1 if upto is None else max(-1, min(upto, len(data.moves) - 1))
    board = reconstruct_board(seed, base, data.moves, upto=last, max_cells=settings.max_reveal_per_click)
    focus = data.moves[last] if last >= 0 else None
    centre_x, centre_y = (focus.x, focus.y) if focus else (0, 0)
    rows = render_viewport(
        (focus.seed if focus and focus.seed else seed),
        base,
        origin_x=centre_x - size // 2,
        origin_y=centre_y - size // 2,
        width=size,
        height=size,
        board=board,
    )
    print(
        {
            "session_id": session_id,
            "moves_applied": last + 1,
            "moves_total": len(data.moves),
            "revealed": len(board.revealed),
            "flagged": len(board.flagged),
        }
    )
    print("\n".join(rows))


@app.command()
def progress() -> None:
    """Show coins, stats and the upgrade shop."""
    state = _build_progress_store().load()
    shop = []
    for upgrade in UPGRADES:
        level = getattr(state.upgrades, upgrade.id)
        shop.append(
            {
                "id": upgrade.id,
                "name": upgrade.name,
                "level": f"{level}/{upgrade.max_level}",
                "next_cost": upgrade.cost_for(level),
            }
        )
    print({"progress": asdict(state), "shop": shop})


@app.command()
def buy(upgrade_id: str) -> None:
    """Buy the next level of an upgrade."""
    store = _build_progress_store()
    try:
        updated = store.purchase_upgrade(upgrade_id)
    except KeyError as exc:
        _fail(exc)
    if updated is None:
        print({"purchased": None, "reason": "Not enough coins or upgrade is maxed"})
        raise typer.Exit(code=1)
    print({"purchased": upgrade_id, "progress": asdict(updated)})


@app.command()
def play(
    seed: str = typer.Option(None, help="Play a fixed seed instead of generating one"),
) -> None:
    """Interactive game: 'r X Y' reveal, 'f X Y' flag, 'c X Y' chord, 'q' quit."""
    progress_store = _build_progress_store()
    controller = GameSessionController.start(
        InMemorySessionRepository(),
        progress=progress_store.load(),
        seed_factory=(lambda: seed) if seed else generate_seed,
        replay_store=_build_replay_store(),
        progress_store=progress_store,
        max_cells=settings.max_reveal_per_click,
        safe_click_max_attempts=settings.safe_click_max_attempts,
    )
    print({"session_id": controller.session_id, "mine_density": controller.mine_density})
    centre_x, centre_y = 0, 0

    while controller.status is GameStatus.ACTIVE:
        rows = render_viewport(
            controller.seed,
            controller.mine_density,
            origin_x=centre_x - settings.viewport_width // 2,
            origin_y=centre_y - settings.viewport_height // 2,
            width=settings.viewport_width,
            height=settings.viewport_height,
            board=controller.board,
        )
        print("\n".join(rows))
        print(
            {
                "score": controller.score,
                "safe_clicks": controller.safe_clicks_remaining,
                "lives": controller.second_chances_remaining,
            }
        )

        parts = typer.prompt("move").split()
        if not parts or parts[0] == "q":
            break
        if len(parts) != 3 or parts[0] not in ("r", "f", "c"):
            print({"error": "Expected 'r X Y', 'f X Y', 'c X Y' or 'q'"})
            continue
        try:
            cx, cy = int(parts[1]), int(parts[2])
        except ValueError:
            print({"error": "Coordinates must be integers"})
            continue

        centre_x, centre_y = cx, cy
        try:
            if parts[0] == "r":
                outcome = controller.reveal(cx, cy)
                if outcome.hit_mine:
                    print({"mine": [cx, cy], "status": outcome.status.value})
            elif parts[0] == "f":
                controller.toggle_flag(cx, cy)
            else:
                controller.chord(cx, cy)
        except GameOverError as exc:
            _fail(exc)

    print(
        {
            "session_id": controller.session_id,
            "status": controller.status.value,
            "score": controller.score,
            "coins_earned": controller.coins_earned,
        }
    )


if __name__ == "__main__":
    app()
