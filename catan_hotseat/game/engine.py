from __future__ import annotations

import random
from typing import Callable, Sequence

from catan_hotseat.domain.board import HexTile, Point
from catan_hotseat.domain.projection import BoardBounds, Size, board_scale, project_point
from catan_hotseat.domain.randomizer import generate_randomized_board

from .actions import (
    GameAction,
    clock_tick,
    end_turn,
    place_road,
    place_settlement,
    roll_dice,
    upgrade_to_city,
)
from .config import GameConfig
from .errors import CommandResult, GameRuleError
from .rules import apply_action
from .state import (
    GameState,
    IntersectionView,
    PlayerView,
    RoadView,
    SetupStage,
    initialize_game_state,
    intersection_snapshots,
    player_snapshots,
    road_snapshots,
)
from .timer import Scheduler, TurnTimer

TickListener = Callable[[CommandResult], None]


class GameEngine:
    """Single-writer command surface over one game session.

    Every command runs the rules against a copy of the state and swaps it in
    only on success. Refusals keep the previous state and just record the
    advisory message.
    """

    def __init__(
        self,
        state: GameState,
        *,
        config: GameConfig | None = None,
        scheduler: Scheduler | None = None,
        on_tick: TickListener | None = None,
    ) -> None:
        self.state = state
        self.config = config or GameConfig(player_count=state.player_count, turn_seconds=state.turn_seconds)
        self._bounds = BoardBounds.for_board(state.board)
        self._on_tick = on_tick
        self._timer: TurnTimer | None = None
        if scheduler is not None:
            self._timer = TurnTimer(scheduler, self._handle_clock, interval_s=self.config.tick_interval_s)
            self._timer.restart()

    # ── read accessors ──────────────────────────────────────────

    @property
    def tiles(self) -> tuple[HexTile, ...]:
        return self.state.board.tiles

    @property
    def intersections(self) -> tuple[IntersectionView, ...]:
        return intersection_snapshots(self.state)

    @property
    def roads(self) -> tuple[RoadView, ...]:
        return road_snapshots(self.state)

    @property
    def players(self) -> tuple[PlayerView, ...]:
        return player_snapshots(self.state)

    @property
    def current_player_index(self) -> int:
        return self.state.current_player_index

    @property
    def setup_phase(self) -> bool:
        return self.state.setup_phase

    @property
    def setup_stage(self) -> SetupStage:
        return self.state.current_stage

    @property
    def dice_result(self) -> int | None:
        return self.state.dice_result

    @property
    def last_message(self) -> str:
        return self.state.last_message

    @property
    def time_remaining(self) -> int:
        return self.state.time_remaining

    @property
    def event_log(self) -> tuple[str, ...]:
        return tuple(self.state.event_log)

    @property
    def clock_pending(self) -> bool:
        return self._timer is not None and self._timer.is_pending

    # ── coordinate services ─────────────────────────────────────

    def project(self, point: Point, size: Size, margin_fraction: float | None = None) -> Point:
        margin = self.config.margin_fraction if margin_fraction is None else margin_fraction
        return project_point(point, self._bounds, size, margin)

    def scale(self, size: Size, margin_fraction: float | None = None) -> float:
        margin = self.config.margin_fraction if margin_fraction is None else margin_fraction
        return board_scale(self._bounds, size, margin)

    # ── commands ────────────────────────────────────────────────

    def roll_dice(self, value: int | None = None) -> CommandResult:
        return self.execute(roll_dice(value))

    def place_settlement(self, intersection_id: int) -> CommandResult:
        return self.execute(place_settlement(intersection_id))

    def upgrade_to_city(self, intersection_id: int) -> CommandResult:
        return self.execute(upgrade_to_city(intersection_id))

    def place_road(self, road_id: int) -> CommandResult:
        return self.execute(place_road(road_id))

    def end_turn(self) -> CommandResult:
        return self.execute(end_turn())

    def tick(self) -> CommandResult:
        return self.execute(clock_tick())

    def execute(self, action: GameAction) -> CommandResult:
        turn_before = self.state.turn_number
        try:
            next_state = apply_action(self.state, action)
        except GameRuleError as error:
            self.state.last_message = error.message
            self.state.record_event(f"Refused {action.kind}: {error.message}")
            return CommandResult.failure(error)
        self.state = next_state
        if self.state.turn_number != turn_before and self._timer is not None:
            self._timer.restart()
        return CommandResult.success(self.state.last_message)

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()

    def _handle_clock(self) -> None:
        result = self.tick()
        if self._on_tick is not None:
            self._on_tick(result)


def new_game(
    player_count: int = 4,
    player_names: Sequence[str] | None = None,
    *,
    seed: int | None = None,
    config: GameConfig | None = None,
    scheduler: Scheduler | None = None,
    on_tick: TickListener | None = None,
) -> GameEngine:
    """Generate a board and seat the players for a fresh session."""
    if config is None:
        config = GameConfig(player_count=player_count, seed=seed)
    rng = random.Random(config.seed)
    board = generate_randomized_board(rng=rng)
    state = initialize_game_state(
        board,
        player_count=config.player_count,
        player_names=player_names,
        rng=rng,
        turn_seconds=config.turn_seconds,
    )
    return GameEngine(state, config=config, scheduler=scheduler, on_tick=on_tick)
