from __future__ import annotations

from typing import Iterable, Sequence

from rich.table import Table

from catan_hotseat.domain.board import PRODUCING_RESOURCES, BoardState, Resource
from catan_hotseat.game.state import PlayerView

_RESOURCE_STYLES = {
    Resource.WOOD: "green",
    Resource.BRICK: "red",
    Resource.SHEEP: "bright_green",
    Resource.WHEAT: "yellow",
    Resource.ORE: "bright_black",
    Resource.DESERT: "tan",
}


def board_table(board: BoardState, *, title: str = "Board") -> Table:
    table = Table(title=title)
    table.add_column("TILE", justify="right", style="cyan", no_wrap=True)
    table.add_column("q", justify="right")
    table.add_column("r", justify="right")
    table.add_column("RESOURCE")
    table.add_column("NUMBER", justify="right")
    table.add_column("CORNERS")
    for tile in board.tiles:
        style = _RESOURCE_STYLES.get(tile.resource, "")
        number = "-" if tile.is_desert else str(tile.number)
        if tile.number in (6, 8):
            number = f"[bold red]{number}[/bold red]"
        table.add_row(
            str(tile.id),
            str(tile.q),
            str(tile.r),
            f"[{style}]{tile.resource.display_name}[/{style}]" if style else tile.resource.display_name,
            number,
            " ".join(str(corner_id) for corner_id in tile.corner_ids),
        )
    return table


def topology_table(board: BoardState) -> Table:
    interior = sum(1 for intersection in board.intersections if len(intersection.adjacent_tile_ids) == 3)
    table = Table(title="Topology")
    table.add_column("ITEM")
    table.add_column("COUNT", justify="right")
    table.add_row("Tiles", str(len(board.tiles)))
    table.add_row("Intersections", str(len(board.intersections)))
    table.add_row("Roads", str(len(board.roads)))
    table.add_row("Three-tile intersections", str(interior))
    return table


def scoreboard_table(players: Sequence[PlayerView], *, current_index: int | None = None) -> Table:
    table = Table(title="Players")
    table.add_column("PLAYER")
    for resource in PRODUCING_RESOURCES:
        table.add_column(resource.display_name.upper(), justify="right")
    table.add_column("SETTLEMENTS", justify="right")
    table.add_column("CITIES", justify="right")
    table.add_column("ROADS", justify="right")
    table.add_column("VP", justify="right", style="bold")
    for player in players:
        name = f"> {player.name}" if player.index == current_index else player.name
        table.add_row(
            name,
            *(str(player.resource_count(resource)) for resource in PRODUCING_RESOURCES),
            str(player.settlements),
            str(player.cities),
            str(player.roads),
            str(player.victory_points),
        )
    return table


def event_log_table(events: Iterable[str], *, limit: int = 30) -> Table:
    lines = list(events)[-limit:]
    table = Table(title="Event Log")
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("EVENT")
    for index, line in enumerate(lines, start=1):
        style = "yellow" if line.startswith("Refused") else ""
        table.add_row(str(index), f"[{style}]{line}[/{style}]" if style else line)
    return table
