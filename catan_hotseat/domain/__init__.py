"""Board generation, topology and viewport projection."""

from .board import (
    BoardState,
    HexTile,
    Intersection,
    PRODUCING_RESOURCES,
    Resource,
    Road,
    build_standard_board,
    normalize_edge_key,
)
from .projection import BoardBounds, board_scale, project_point
from .randomizer import generate_randomized_board, validate_standard_counts

__all__ = [
    "BoardBounds",
    "BoardState",
    "HexTile",
    "Intersection",
    "PRODUCING_RESOURCES",
    "Resource",
    "Road",
    "board_scale",
    "build_standard_board",
    "generate_randomized_board",
    "normalize_edge_key",
    "project_point",
    "validate_standard_counts",
]
