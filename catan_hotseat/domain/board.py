from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

Point = Tuple[float, float]
EdgeKey = Tuple[int, int]

BOARD_RADIUS = 2
DESERT_NUMBER = 7
# Adjacent corners sit one unit apart; shared corners differ only by float noise.
CORNER_TOLERANCE = 0.01


class Resource(str, Enum):
    WOOD = "wood"
    BRICK = "brick"
    SHEEP = "sheep"
    WHEAT = "wheat"
    ORE = "ore"
    DESERT = "desert"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


PRODUCING_RESOURCES = (
    Resource.WOOD,
    Resource.BRICK,
    Resource.SHEEP,
    Resource.WHEAT,
    Resource.ORE,
)


@dataclass(frozen=True)
class HexTile:
    id: int
    q: int
    r: int
    resource: Resource
    number: int
    center: Point
    corner_points: Tuple[Point, ...]
    corner_ids: Tuple[int, ...] = ()

    @property
    def is_desert(self) -> bool:
        return self.resource is Resource.DESERT


@dataclass(frozen=True)
class Intersection:
    id: int
    point: Point
    adjacent_tile_ids: Tuple[int, ...]
    adjacent_intersection_ids: Tuple[int, ...]


@dataclass(frozen=True)
class Road:
    id: int
    endpoints: EdgeKey


@dataclass(frozen=True)
class BoardState:
    """Immutable board topology. Occupancy is tracked by the game state."""

    tiles: Tuple[HexTile, ...]
    intersections: Tuple[Intersection, ...]
    roads: Tuple[Road, ...]
    _road_lookup: Dict[EdgeKey, int] = field(init=False, repr=False, compare=False)
    _roads_at: Dict[int, Tuple[int, ...]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        road_lookup = {road.endpoints: road.id for road in self.roads}
        roads_at: Dict[int, List[int]] = {intersection.id: [] for intersection in self.intersections}
        for road in self.roads:
            for endpoint in road.endpoints:
                roads_at[endpoint].append(road.id)
        object.__setattr__(self, "_road_lookup", road_lookup)
        object.__setattr__(
            self,
            "_roads_at",
            {intersection_id: tuple(road_ids) for intersection_id, road_ids in roads_at.items()},
        )

    def has_intersection(self, intersection_id: int) -> bool:
        return 0 <= intersection_id < len(self.intersections)

    def has_road(self, road_id: int) -> bool:
        return 0 <= road_id < len(self.roads)

    def intersection_tiles(self, intersection_id: int) -> List[HexTile]:
        return [self.tiles[tile_id] for tile_id in self.intersections[intersection_id].adjacent_tile_ids]

    def neighbors(self, intersection_id: int) -> Tuple[int, ...]:
        return self.intersections[intersection_id].adjacent_intersection_ids

    def roads_at(self, intersection_id: int) -> Tuple[int, ...]:
        return self._roads_at.get(intersection_id, ())

    def road_between(self, first: int, second: int) -> Optional[int]:
        return self._road_lookup.get(normalize_edge_key(first, second))

    def tiles_with_number(self, number: int) -> List[HexTile]:
        return [tile for tile in self.tiles if tile.number == number]

    def bounds(self) -> Tuple[float, float, float, float]:
        xs = [intersection.point[0] for intersection in self.intersections]
        ys = [intersection.point[1] for intersection in self.intersections]
        if not xs:
            return (0.0, 0.0, 0.0, 0.0)
        return (min(xs), min(ys), max(xs), max(ys))


def normalize_edge_key(vertex_a: int, vertex_b: int) -> EdgeKey:
    first, second = int(vertex_a), int(vertex_b)
    return (first, second) if first <= second else (second, first)


def build_standard_board(
    resource_order: Sequence[Resource],
    token_order: Sequence[int],
) -> BoardState:
    coords = generate_axial_coords(BOARD_RADIUS)
    resources = list(resource_order)
    numbers = list(token_order)

    if len(resources) != len(coords):
        raise ValueError(f"Expected {len(coords)} resources, received {len(resources)}.")

    if len(numbers) != len(coords) - 1:
        raise ValueError(f"Expected {len(coords) - 1} number tokens, received {len(numbers)}.")

    if DESERT_NUMBER in numbers:
        raise ValueError("Number 7 is reserved for the desert tile.")

    tiles: List[HexTile] = []
    number_index = 0
    for tile_id, (q, r) in enumerate(coords):
        center = axial_to_point(q, r)
        corners = tuple(hex_corner(center, corner_index) for corner_index in range(6))
        resource = resources[tile_id]
        if resource is Resource.DESERT:
            number = DESERT_NUMBER
        else:
            if number_index >= len(numbers):
                raise ValueError("More producing tiles than number tokens.")
            number = numbers[number_index]
            number_index += 1

        tiles.append(
            HexTile(
                id=tile_id,
                q=q,
                r=r,
                resource=resource,
                number=number,
                center=center,
                corner_points=corners,
            )
        )

    if number_index != len(numbers):
        raise ValueError("Number token assignment does not match non-desert tile count.")

    return build_topology(tiles)


def generate_axial_coords(radius: int) -> List[Tuple[int, int]]:
    coords: List[Tuple[int, int]] = []
    for q in range(-radius, radius + 1):
        for r in range(-radius, radius + 1):
            if abs(q + r) <= radius:
                coords.append((q, r))
    coords.sort(key=lambda item: (item[1], item[0]))
    return coords


def axial_to_point(q: int, r: int) -> Point:
    x = math.sqrt(3) * (q + r / 2)
    y = 1.5 * r
    return (x, y)


def hex_corner(center: Point, corner_index: int) -> Point:
    angle_deg = 60 * corner_index - 30
    angle_rad = math.radians(angle_deg)
    return (
        center[0] + math.cos(angle_rad),
        center[1] + math.sin(angle_rad),
    )


def build_topology(tiles: Sequence[HexTile], tolerance: float = CORNER_TOLERANCE) -> BoardState:
    """Merge tile corners into intersections and tile sides into roads.

    Intersection ids follow first discovery while walking tiles in order, and
    road ids follow first discovery of each side, so a given tile layout
    always produces the same graph.
    """
    tolerance_sq = tolerance * tolerance
    points: List[Point] = []
    tile_sets: List[List[int]] = []

    def find_or_create(point: Point, tile_id: int) -> int:
        for index, existing in enumerate(points):
            dx = existing[0] - point[0]
            dy = existing[1] - point[1]
            if dx * dx + dy * dy < tolerance_sq:
                if tile_id not in tile_sets[index]:
                    tile_sets[index].append(tile_id)
                return index
        points.append(point)
        tile_sets.append([tile_id])
        return len(points) - 1

    corner_ids_by_tile: List[Tuple[int, ...]] = []
    for tile in tiles:
        corner_ids_by_tile.append(tuple(find_or_create(corner, tile.id) for corner in tile.corner_points))

    neighbors: List[set[int]] = [set() for _ in points]
    road_keys: Dict[EdgeKey, int] = {}
    roads: List[Road] = []
    for corner_ids in corner_ids_by_tile:
        for first, second in zip(corner_ids, corner_ids[1:] + corner_ids[:1]):
            edge_key = normalize_edge_key(first, second)
            if edge_key in road_keys:
                continue
            road_keys[edge_key] = len(roads)
            roads.append(Road(id=len(roads), endpoints=edge_key))
            neighbors[first].add(second)
            neighbors[second].add(first)

    intersections = tuple(
        Intersection(
            id=index,
            point=point,
            adjacent_tile_ids=tuple(sorted(tile_sets[index])),
            adjacent_intersection_ids=tuple(sorted(neighbors[index])),
        )
        for index, point in enumerate(points)
    )
    linked_tiles = tuple(
        HexTile(
            id=tile.id,
            q=tile.q,
            r=tile.r,
            resource=tile.resource,
            number=tile.number,
            center=tile.center,
            corner_points=tile.corner_points,
            corner_ids=corner_ids,
        )
        for tile, corner_ids in zip(tiles, corner_ids_by_tile)
    )
    return BoardState(tiles=linked_tiles, intersections=intersections, roads=tuple(roads))
