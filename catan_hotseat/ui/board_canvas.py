from __future__ import annotations

import tkinter as tk
from typing import Callable, Sequence

from catan_hotseat.domain.board import BoardState, Resource
from catan_hotseat.domain.projection import (
    DEFAULT_MARGIN_FRACTION,
    BoardBounds,
    board_scale,
    nearest_intersection,
    nearest_road,
    project_point,
)
from catan_hotseat.game.state import IntersectionView, PlayerView, RoadView
from catan_hotseat.ui.themes import player_color

_RESOURCE_COLORS_LIGHT = {
    Resource.WOOD: "#ABE066",
    Resource.BRICK: "#ED735C",
    Resource.SHEEP: "#DBFAB3",
    Resource.WHEAT: "#FCF7B0",
    Resource.ORE: "#B5B5B5",
    Resource.DESERT: "#F0D4A1",
}

_RESOURCE_COLORS_DARK = {
    Resource.WOOD: "#3BC694",
    Resource.BRICK: "#FF9158",
    Resource.SHEEP: "#73C7FF",
    Resource.WHEAT: "#FFCA4E",
    Resource.ORE: "#A5A5A5",
    Resource.DESERT: "#A18454",
}

_BOARD_VISUAL_THEMES: dict[str, dict[str, object]] = {
    "light": {
        "canvas_bg": "#F8FBFF",
        "resource_colors": _RESOURCE_COLORS_LIGHT,
        "tile_outline": "#2F3E46",
        "token_fill": "#FFFFFF",
        "token_outline": "#444444",
        "token_text": "#222222",
        "token_hot_text": "#C62828",
        "desert_text": "#6B4F2D",
        "open_road": "#C9D5E2",
        "open_vertex": "#2F3E46",
        "building_outline": "#111111",
    },
    "dark": {
        "canvas_bg": "#0F1722",
        "resource_colors": _RESOURCE_COLORS_DARK,
        "tile_outline": "#8AA2BD",
        "token_fill": "#1E2B3A",
        "token_outline": "#B6C5D6",
        "token_text": "#F0F5FA",
        "token_hot_text": "#FF8D8D",
        "desert_text": "#F1D4A6",
        "open_road": "#2D4E6A",
        "open_vertex": "#9AB1C8",
        "building_outline": "#F1F6FF",
    },
}

# Tiles are drawn slightly smaller than their cell so roads stay visible.
TILE_SHRINK = 0.95
ROAD_LINE_WIDTH = 7
OPEN_ROAD_LINE_WIDTH = 3
VERTEX_PICK_TOLERANCE = 14.0
ROAD_PICK_TOLERANCE = 10.0


class BoardCanvas(tk.Canvas):
    def __init__(
        self,
        master: tk.Widget,
        *,
        on_intersection_clicked: Callable[[int], None] | None = None,
        on_road_clicked: Callable[[int], None] | None = None,
        margin_fraction: float = DEFAULT_MARGIN_FRACTION,
        **kwargs,
    ) -> None:
        self._theme_key = "light"
        self._colors = _BOARD_VISUAL_THEMES[self._theme_key]
        super().__init__(
            master,
            width=720,
            height=640,
            bg=str(self._colors["canvas_bg"]),
            highlightthickness=1,
            **kwargs,
        )
        self._board: BoardState | None = None
        self._intersections: Sequence[IntersectionView] = ()
        self._roads: Sequence[RoadView] = ()
        self._players: Sequence[PlayerView] = ()
        self._margin_fraction = margin_fraction
        self._on_intersection_clicked = on_intersection_clicked
        self._on_road_clicked = on_road_clicked

        self.bind("<Configure>", lambda _event: self.draw())
        self.bind("<Button-1>", self._handle_click)

    # ── public API ──────────────────────────────────────────────

    def set_visual_theme(self, theme_key: str) -> None:
        normalized = str(theme_key).strip().lower()
        if normalized not in _BOARD_VISUAL_THEMES:
            normalized = "light"
        self._theme_key = normalized
        self._colors = _BOARD_VISUAL_THEMES[normalized]
        self.configure(bg=str(self._colors["canvas_bg"]))
        self.draw()

    def set_board(self, board: BoardState) -> None:
        self._board = board
        self.draw()

    def set_snapshot(
        self,
        *,
        intersections: Sequence[IntersectionView],
        roads: Sequence[RoadView],
        players: Sequence[PlayerView],
    ) -> None:
        self._intersections = intersections
        self._roads = roads
        self._players = players
        self.draw()

    def draw(self) -> None:
        self.delete("all")
        if self._board is None:
            return

        size = self._size()
        bounds = BoardBounds.for_board(self._board)
        scale = board_scale(bounds, size, self._margin_fraction)

        def to_canvas(point: tuple[float, float]) -> tuple[float, float]:
            return project_point(point, bounds, size, self._margin_fraction)

        # ── tiles ───────────────────────────────────────────────
        for tile in self._board.tiles:
            center_x, center_y = to_canvas(tile.center)
            polygon_points: list[float] = []
            for corner in tile.corner_points:
                x, y = to_canvas(corner)
                polygon_points.extend(
                    [
                        center_x + (x - center_x) * TILE_SHRINK,
                        center_y + (y - center_y) * TILE_SHRINK,
                    ]
                )
            self.create_polygon(
                polygon_points,
                fill=self._resource_color(tile.resource),
                outline=str(self._colors["tile_outline"]),
                width=1.5,
                joinstyle=tk.ROUND,
            )
            token_radius = max(8.0, scale * 0.28)
            if tile.is_desert:
                self.create_text(
                    center_x,
                    center_y,
                    text="ROBBER",
                    font=("Segoe UI", 10, "bold"),
                    fill=str(self._colors["desert_text"]),
                )
                continue
            self.create_oval(
                center_x - token_radius,
                center_y - token_radius,
                center_x + token_radius,
                center_y + token_radius,
                fill=str(self._colors["token_fill"]),
                outline=str(self._colors["token_outline"]),
            )
            token_color = (
                str(self._colors["token_hot_text"])
                if tile.number in (6, 8)
                else str(self._colors["token_text"])
            )
            self.create_text(
                center_x,
                center_y,
                text=str(tile.number),
                font=("Segoe UI", 12, "bold"),
                fill=token_color,
            )

        # ── roads ───────────────────────────────────────────────
        owners = {road.id: road.owner for road in self._roads}
        for road in self._board.roads:
            first, second = road.endpoints
            start = to_canvas(self._board.intersections[first].point)
            end = to_canvas(self._board.intersections[second].point)
            owner = owners.get(road.id)
            if owner is None:
                self.create_line(
                    *start,
                    *end,
                    fill=str(self._colors["open_road"]),
                    width=OPEN_ROAD_LINE_WIDTH,
                )
            else:
                self.create_line(
                    *start,
                    *end,
                    fill=self._player_color(owner),
                    width=ROAD_LINE_WIDTH,
                    capstyle=tk.ROUND,
                )

        # ── intersections ───────────────────────────────────────
        occupants = {intersection.id: intersection.occupant for intersection in self._intersections}
        building_radius = max(6.0, scale * 0.16)
        for intersection in self._board.intersections:
            x, y = to_canvas(intersection.point)
            occupant = occupants.get(intersection.id)
            if occupant is None:
                self.create_oval(x - 3, y - 3, x + 3, y + 3, fill=str(self._colors["open_vertex"]), outline="")
                continue
            fill = self._player_color(occupant.owner)
            outline = str(self._colors["building_outline"])
            if occupant.is_city:
                self.create_rectangle(
                    x - building_radius * 1.2,
                    y - building_radius * 1.2,
                    x + building_radius * 1.2,
                    y + building_radius * 1.2,
                    fill=fill,
                    outline=outline,
                    width=2,
                )
            else:
                self.create_oval(
                    x - building_radius,
                    y - building_radius,
                    x + building_radius,
                    y + building_radius,
                    fill=fill,
                    outline=outline,
                    width=2,
                )

    # ── click handling ──────────────────────────────────────────

    def _handle_click(self, event: tk.Event) -> None:
        if self._board is None:
            return
        click = (float(event.x), float(event.y))
        size = self._size()
        intersection_id = nearest_intersection(
            self._board,
            click,
            size,
            max_distance=VERTEX_PICK_TOLERANCE,
            margin_fraction=self._margin_fraction,
        )
        if intersection_id is not None:
            if self._on_intersection_clicked is not None:
                self._on_intersection_clicked(intersection_id)
            return
        road_id = nearest_road(
            self._board,
            click,
            size,
            max_distance=ROAD_PICK_TOLERANCE,
            margin_fraction=self._margin_fraction,
        )
        if road_id is not None and self._on_road_clicked is not None:
            self._on_road_clicked(road_id)

    # ── helpers ─────────────────────────────────────────────────

    def _size(self) -> tuple[float, float]:
        width = max(self.winfo_width(), int(self.cget("width")))
        height = max(self.winfo_height(), int(self.cget("height")))
        return (float(width), float(height))

    def _resource_color(self, resource: Resource) -> str:
        resource_colors = self._colors.get("resource_colors", {})
        if isinstance(resource_colors, dict):
            return str(resource_colors.get(resource, "#BDBDBD"))
        return "#BDBDBD"

    def _player_color(self, player_index: int) -> str:
        for player in self._players:
            if player.index == player_index:
                return player_color(player.color_key, self._theme_key)
        return "#7A7A7A"
