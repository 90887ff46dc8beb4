from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Mapping, Sequence

from catan_hotseat.domain.board import (
    PRODUCING_RESOURCES,
    BoardState,
    EdgeKey,
    HexTile,
    Point,
    Resource,
)

from .config import DEFAULT_TURN_SECONDS, MAX_PLAYERS, MIN_PLAYERS

DEFAULT_PLAYER_NAMES = ("Red", "Blue", "Green", "Orange")
PLAYER_COLOR_KEYS = ("red", "blue", "green", "orange")
SETUP_PAIRS_PER_PLAYER = 2
EVENT_LOG_LIMIT = 120

_RESOURCE_INDEX: Dict[Resource, int] = {resource: index for index, resource in enumerate(PRODUCING_RESOURCES)}


class BuildingKind(str, Enum):
    SETTLEMENT = "settlement"
    CITY = "city"


class SetupStage(str, Enum):
    AWAIT_SETTLEMENT = "await_settlement"
    AWAIT_ROAD = "await_road"
    TURN_DONE = "turn_done"


@dataclass(frozen=True)
class Occupant:
    kind: BuildingKind
    owner: int

    @property
    def is_city(self) -> bool:
        return self.kind is BuildingKind.CITY

    @property
    def yield_multiplier(self) -> int:
        return 2 if self.is_city else 1


class ResourceHand:
    """Fixed-size resource counter indexed by producing resource kind."""

    __slots__ = ("_counts",)

    def __init__(self, counts: Mapping[Resource, int] | None = None) -> None:
        self._counts = [0] * len(PRODUCING_RESOURCES)
        for resource, amount in (counts or {}).items():
            self.add(resource, amount)

    def __getitem__(self, resource: Resource) -> int:
        index = _RESOURCE_INDEX.get(resource)
        if index is None:
            return 0
        return self._counts[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResourceHand):
            return self._counts == other._counts
        return NotImplemented

    def __repr__(self) -> str:
        return f"ResourceHand({self.as_dict()!r})"

    def add(self, resource: Resource, amount: int) -> None:
        if resource not in _RESOURCE_INDEX:
            raise ValueError(f"{resource.value} is not a producing resource.")
        if amount < 0:
            raise ValueError("Use spend() to remove resources.")
        self._counts[_RESOURCE_INDEX[resource]] += int(amount)

    def can_afford(self, cost: Mapping[Resource, int]) -> bool:
        return all(self[resource] >= amount for resource, amount in cost.items())

    def spend(self, cost: Mapping[Resource, int]) -> None:
        if not self.can_afford(cost):
            raise ValueError("Cost is not affordable.")
        for resource, amount in cost.items():
            self._counts[_RESOURCE_INDEX[resource]] -= int(amount)

    def total(self) -> int:
        return int(sum(self._counts))

    def as_dict(self) -> Dict[Resource, int]:
        return {resource: self._counts[index] for resource, index in _RESOURCE_INDEX.items()}

    def clone(self) -> "ResourceHand":
        cloned = ResourceHand()
        cloned._counts = list(self._counts)
        return cloned


@dataclass
class PlayerState:
    index: int
    name: str
    color_key: str
    hand: ResourceHand = field(default_factory=ResourceHand)
    settlements: int = 0
    cities: int = 0
    roads: int = 0
    victory_points: int = 0

    def clone(self) -> "PlayerState":
        return PlayerState(
            index=self.index,
            name=self.name,
            color_key=self.color_key,
            hand=self.hand.clone(),
            settlements=int(self.settlements),
            cities=int(self.cities),
            roads=int(self.roads),
            victory_points=int(self.victory_points),
        )


@dataclass
class GameState:
    board: BoardState
    players: list[PlayerState]
    current_player_index: int
    occupants: list[Occupant | None]
    road_owners: list[int | None]
    setup_stages: list[SetupStage]
    setup_pairs_built: list[int]
    setup_phase: bool = True
    dice_result: int | None = None
    last_message: str = ""
    turn_seconds: int = DEFAULT_TURN_SECONDS
    time_remaining: int = DEFAULT_TURN_SECONDS
    turn_number: int = 1
    event_log: list[str] = field(default_factory=list)
    _rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_player_index]

    @property
    def current_stage(self) -> SetupStage:
        return self.setup_stages[self.current_player_index]

    def clone(self) -> "GameState":
        cloned = GameState(
            board=self.board,
            players=[player.clone() for player in self.players],
            current_player_index=self.current_player_index,
            occupants=list(self.occupants),
            road_owners=list(self.road_owners),
            setup_stages=list(self.setup_stages),
            setup_pairs_built=list(self.setup_pairs_built),
            setup_phase=self.setup_phase,
            dice_result=self.dice_result,
            last_message=self.last_message,
            turn_seconds=self.turn_seconds,
            time_remaining=self.time_remaining,
            turn_number=self.turn_number,
            event_log=list(self.event_log),
            _rng=random.Random(),
        )
        cloned._rng.setstate(self._rng.getstate())
        return cloned

    def roll_die(self) -> int:
        return self._rng.randint(1, 6)

    def owned_road_ids(self, player_index: int) -> list[int]:
        return [road_id for road_id, owner in enumerate(self.road_owners) if owner == player_index]

    def owns_structure_at(self, player_index: int, intersection_id: int) -> bool:
        occupant = self.occupants[intersection_id]
        return occupant is not None and occupant.owner == player_index

    def owns_road_at(self, player_index: int, intersection_id: int) -> bool:
        return any(self.road_owners[road_id] == player_index for road_id in self.board.roads_at(intersection_id))

    def record_event(self, text: str) -> None:
        self.event_log.append(text)
        if len(self.event_log) > EVENT_LOG_LIMIT:
            self.event_log = self.event_log[-EVENT_LOG_LIMIT:]


@dataclass(frozen=True)
class IntersectionView:
    id: int
    point: Point
    adjacent_tile_ids: tuple[int, ...]
    adjacent_intersection_ids: tuple[int, ...]
    occupant: Occupant | None


@dataclass(frozen=True)
class RoadView:
    id: int
    endpoints: EdgeKey
    owner: int | None


@dataclass(frozen=True)
class PlayerView:
    index: int
    name: str
    color_key: str
    resources: tuple[tuple[Resource, int], ...]
    settlements: int
    cities: int
    roads: int
    victory_points: int

    def resource_count(self, resource: Resource) -> int:
        return dict(self.resources).get(resource, 0)


def tile_snapshots(state: GameState) -> tuple[HexTile, ...]:
    return state.board.tiles


def intersection_snapshots(state: GameState) -> tuple[IntersectionView, ...]:
    return tuple(
        IntersectionView(
            id=intersection.id,
            point=intersection.point,
            adjacent_tile_ids=intersection.adjacent_tile_ids,
            adjacent_intersection_ids=intersection.adjacent_intersection_ids,
            occupant=state.occupants[intersection.id],
        )
        for intersection in state.board.intersections
    )


def road_snapshots(state: GameState) -> tuple[RoadView, ...]:
    return tuple(
        RoadView(id=road.id, endpoints=road.endpoints, owner=state.road_owners[road.id])
        for road in state.board.roads
    )


def player_snapshots(state: GameState) -> tuple[PlayerView, ...]:
    return tuple(
        PlayerView(
            index=player.index,
            name=player.name,
            color_key=player.color_key,
            resources=tuple(player.hand.as_dict().items()),
            settlements=player.settlements,
            cities=player.cities,
            roads=player.roads,
            victory_points=player.victory_points,
        )
        for player in state.players
    )


def resolve_player_names(player_count: int, names: Sequence[str] | None = None) -> list[str]:
    trimmed = [str(name).strip() for name in (names or ())]
    resolved: list[str] = []
    for index in range(player_count):
        provided = trimmed[index] if index < len(trimmed) else ""
        if provided:
            resolved.append(provided)
        elif index < len(DEFAULT_PLAYER_NAMES):
            resolved.append(DEFAULT_PLAYER_NAMES[index])
        else:
            resolved.append(f"Player {index + 1}")
    return resolved


def initialize_game_state(
    board: BoardState,
    *,
    player_count: int = 4,
    player_names: Sequence[str] | None = None,
    seed: int | None = None,
    rng: random.Random | None = None,
    turn_seconds: int = DEFAULT_TURN_SECONDS,
) -> GameState:
    if player_count < MIN_PLAYERS or player_count > MAX_PLAYERS:
        raise ValueError(f"player_count must be between {MIN_PLAYERS} and {MAX_PLAYERS}.")
    rng = rng if rng is not None else random.Random(seed)
    names = resolve_player_names(player_count, player_names)
    players = [
        PlayerState(index=index, name=names[index], color_key=PLAYER_COLOR_KEYS[index])
        for index in range(player_count)
    ]
    return GameState(
        board=board,
        players=players,
        current_player_index=rng.randrange(player_count),
        occupants=[None] * len(board.intersections),
        road_owners=[None] * len(board.roads),
        setup_stages=[SetupStage.AWAIT_SETTLEMENT] * player_count,
        setup_pairs_built=[0] * player_count,
        turn_seconds=turn_seconds,
        time_remaining=turn_seconds,
        _rng=rng,
    )


def computed_victory_points(state: GameState, player_index: int) -> int:
    score = 0
    for occupant in state.occupants:
        if occupant is None or occupant.owner != player_index:
            continue
        score += 2 if occupant.is_city else 1
    return score


def setup_complete(pairs_built: Iterable[int]) -> bool:
    return all(count >= SETUP_PAIRS_PER_PLAYER for count in pairs_built)
