from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class GameAction:
    kind: str
    data: dict[str, Any] = field(default_factory=dict)


def make_action(kind: str, **data: Any) -> GameAction:
    return GameAction(kind=kind, data=dict(data))


ACTION_ROLL_DICE = "roll_dice"
ACTION_PLACE_SETTLEMENT = "place_settlement"
ACTION_UPGRADE_TO_CITY = "upgrade_to_city"
ACTION_PLACE_ROAD = "place_road"
ACTION_END_TURN = "end_turn"
ACTION_CLOCK_TICK = "clock_tick"


def roll_dice(value: int | None = None) -> GameAction:
    payload: dict[str, Any] = {}
    if value is not None:
        payload["value"] = int(value)
    return make_action(ACTION_ROLL_DICE, **payload)


def place_settlement(intersection_id: int) -> GameAction:
    return make_action(ACTION_PLACE_SETTLEMENT, intersection_id=int(intersection_id))


def upgrade_to_city(intersection_id: int) -> GameAction:
    return make_action(ACTION_UPGRADE_TO_CITY, intersection_id=int(intersection_id))


def place_road(road_id: int) -> GameAction:
    return make_action(ACTION_PLACE_ROAD, road_id=int(road_id))


def end_turn() -> GameAction:
    return make_action(ACTION_END_TURN)


def clock_tick() -> GameAction:
    return make_action(ACTION_CLOCK_TICK)
