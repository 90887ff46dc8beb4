from __future__ import annotations

from typing import Sequence

import click
from rich.console import Console

from catan_hotseat.domain.randomizer import generate_randomized_board
from catan_hotseat.game.actions import (
    ACTION_END_TURN,
    ACTION_ROLL_DICE,
    GameAction,
)
from catan_hotseat.game.config import DEFAULT_TURN_SECONDS, MAX_PLAYERS, MIN_PLAYERS, GameConfig
from catan_hotseat.game.engine import GameEngine, new_game
from catan_hotseat.game.rules import list_legal_actions

from .tables import board_table, event_log_table, scoreboard_table, topology_table

console = Console()

# Every setup turn takes exactly three commands, so this bounds the scripted draft.
_SETUP_COMMAND_LIMIT = 3 * 2 * MAX_PLAYERS + 4


def _config_or_bad_parameter(**kwargs) -> GameConfig:
    try:
        return GameConfig(**kwargs)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error


@click.group()
@click.version_option(package_name="catan-hotseat")
def main() -> None:
    """Hotseat Catan: a shared-screen board game for 2 to 4 players."""


@main.command()
@click.option(
    "--players",
    "-p",
    default=MAX_PLAYERS,
    show_default=True,
    type=click.IntRange(MIN_PLAYERS, MAX_PLAYERS),
    help="Number of seated players.",
)
@click.option("--name", "-n", "names", multiple=True, help="Player name, repeat once per seat.")
@click.option("--seed", default=None, type=int, help="Seed for the board and starting player.")
@click.option(
    "--turn-seconds",
    default=DEFAULT_TURN_SECONDS,
    show_default=True,
    type=click.IntRange(min=1),
    help="Seconds on the turn clock.",
)
@click.option(
    "--theme",
    default="light",
    show_default=True,
    type=click.Choice(["light", "dark"], case_sensitive=False),
    help="Colour theme for the window.",
)
def play(players: int, names: Sequence[str], seed: int | None, turn_seconds: int, theme: str) -> None:
    """Open the game window."""
    if len(names) > players:
        raise click.BadParameter(
            f"Got {len(names)} names for {players} players.",
            param_hint="--name",
        )
    config = _config_or_bad_parameter(player_count=players, turn_seconds=turn_seconds, seed=seed)

    # Tk is only needed for the window; the other commands work headless.
    from catan_hotseat.ui.app import run_app

    run_app(config, player_names=list(names) or None, theme_key=theme.lower())


@main.command()
@click.option("--seed", default=None, type=int, help="Seed for the board layout.")
def board(seed: int | None) -> None:
    """Print a randomized board and its topology counts."""
    generated = generate_randomized_board(seed)
    title = "Board" if seed is None else f"Board (seed {seed})"
    console.print(board_table(generated, title=title))
    console.print(topology_table(generated))


def _first_action(actions: Sequence[GameAction], *, skip: Sequence[str] = ()) -> GameAction | None:
    for action in actions:
        if action.kind not in skip:
            return action
    return None


def run_scripted_setup(engine: GameEngine) -> None:
    """Plays every setup turn by taking the first legal placement."""
    for _ in range(_SETUP_COMMAND_LIMIT):
        if not engine.setup_phase:
            return
        action = _first_action(list_legal_actions(engine.state))
        if action is None:
            raise click.ClickException(f"No legal setup action for {engine.players[engine.current_player_index].name}.")
        result = engine.execute(action)
        if not result.ok:
            raise click.ClickException(result.message)
    if engine.setup_phase:
        raise click.ClickException("Setup did not finish.")


def run_scripted_turns(engine: GameEngine, turns: int) -> None:
    """Each turn rolls, builds the first affordable thing, then passes."""
    for _ in range(turns):
        engine.roll_dice()
        build = _first_action(
            list_legal_actions(engine.state),
            skip=(ACTION_ROLL_DICE, ACTION_END_TURN),
        )
        if build is not None:
            engine.execute(build)
        engine.end_turn()


@main.command()
@click.option(
    "--players",
    "-p",
    default=MAX_PLAYERS,
    show_default=True,
    type=click.IntRange(MIN_PLAYERS, MAX_PLAYERS),
    help="Number of seated players.",
)
@click.option("--seed", default=7, show_default=True, type=int, help="Seed for the board and dice.")
@click.option(
    "--turns",
    default=8,
    show_default=True,
    type=click.IntRange(min=0),
    help="Main-phase turns to play after setup.",
)
def demo(players: int, seed: int, turns: int) -> None:
    """Play a scripted game without a window and print the result."""
    config = _config_or_bad_parameter(player_count=players, seed=seed)
    engine = new_game(config=config)
    try:
        run_scripted_setup(engine)
        run_scripted_turns(engine, turns)
    finally:
        engine.close()

    console.print(board_table(engine.state.board, title=f"Board (seed {seed})"))
    console.print(scoreboard_table(engine.players, current_index=engine.current_player_index))
    console.print(event_log_table(engine.event_log))
    console.print(f"[bold]Last message:[/bold] {engine.last_message}")
