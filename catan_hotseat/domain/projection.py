"""Board-space to viewport mapping for the presentation layer.

Everything here is a pure function of its arguments. Nothing reads or
caches game state, so callers may project as often as they redraw.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .board import BoardState, Point

Size = Tuple[float, float]

DEFAULT_MARGIN_FRACTION = 0.1


@dataclass(frozen=True)
class BoardBounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "BoardBounds":
        xs: list[float] = []
        ys: list[float] = []
        for x, y in points:
            xs.append(float(x))
            ys.append(float(y))
        if not xs:
            return cls(0.0, 0.0, 0.0, 0.0)
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def for_board(cls, board: BoardState) -> "BoardBounds":
        return cls(*board.bounds())


def board_scale(bounds: BoardBounds, size: Size, margin_fraction: float = DEFAULT_MARGIN_FRACTION) -> float:
    """Return the unit-to-pixel factor, or 0.0 when the board has no extent."""
    if bounds.is_degenerate():
        return 0.0
    width, height = size
    available_width = width * (1.0 - margin_fraction)
    available_height = height * (1.0 - margin_fraction)
    return min(available_width / bounds.width, available_height / bounds.height)


def project_point(
    point: Point,
    bounds: BoardBounds,
    size: Size,
    margin_fraction: float = DEFAULT_MARGIN_FRACTION,
) -> Point:
    width, height = size
    if bounds.is_degenerate():
        return (width / 2, height / 2)
    scale = board_scale(bounds, size, margin_fraction)
    center_x, center_y = bounds.center
    offset_x = width / 2 - center_x * scale
    offset_y = height / 2 - center_y * scale
    return (point[0] * scale + offset_x, point[1] * scale + offset_y)


def nearest_intersection(
    board: BoardState,
    screen_point: Point,
    size: Size,
    *,
    max_distance: float,
    margin_fraction: float = DEFAULT_MARGIN_FRACTION,
) -> Optional[int]:
    bounds = BoardBounds.for_board(board)
    max_distance_sq = max_distance**2
    closest: Optional[int] = None
    for intersection in board.intersections:
        x, y = project_point(intersection.point, bounds, size, margin_fraction)
        distance_sq = (x - screen_point[0]) ** 2 + (y - screen_point[1]) ** 2
        if distance_sq <= max_distance_sq:
            max_distance_sq = distance_sq
            closest = intersection.id
    return closest


def nearest_road(
    board: BoardState,
    screen_point: Point,
    size: Size,
    *,
    max_distance: float,
    margin_fraction: float = DEFAULT_MARGIN_FRACTION,
) -> Optional[int]:
    bounds = BoardBounds.for_board(board)
    best_distance_sq = max_distance**2
    best: Optional[int] = None
    for road in board.roads:
        first, second = road.endpoints
        start = project_point(board.intersections[first].point, bounds, size, margin_fraction)
        end = project_point(board.intersections[second].point, bounds, size, margin_fraction)
        distance_sq = point_to_segment_distance_sq(screen_point, start, end)
        if distance_sq <= best_distance_sq:
            best_distance_sq = distance_sq
            best = road.id
    return best


def point_to_segment_distance_sq(point: Point, segment_start: Point, segment_end: Point) -> float:
    segment_dx = segment_end[0] - segment_start[0]
    segment_dy = segment_end[1] - segment_start[1]
    segment_length_sq = segment_dx * segment_dx + segment_dy * segment_dy
    if segment_length_sq <= 1e-9:
        dx = point[0] - segment_start[0]
        dy = point[1] - segment_start[1]
        return dx * dx + dy * dy

    projection = (
        (point[0] - segment_start[0]) * segment_dx
        + (point[1] - segment_start[1]) * segment_dy
    ) / segment_length_sq
    projection = max(0.0, min(1.0, projection))
    nearest_x = segment_start[0] + projection * segment_dx
    nearest_y = segment_start[1] + projection * segment_dy
    dx = point[0] - nearest_x
    dy = point[1] - nearest_y
    return dx * dx + dy * dy
