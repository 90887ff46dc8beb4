from __future__ import annotations

import random
from typing import Dict, Optional

from .board import DESERT_NUMBER, BoardState, Resource, build_standard_board

RESOURCE_COUNTS: Dict[Resource, int] = {
    Resource.WOOD: 4,
    Resource.SHEEP: 4,
    Resource.WHEAT: 4,
    Resource.BRICK: 3,
    Resource.ORE: 3,
    Resource.DESERT: 1,
}

NUMBER_TOKENS = [2, 3, 3, 4, 4, 5, 5, 6, 6, 8, 8, 9, 9, 10, 10, 11, 11, 12]


def resource_pool() -> list[Resource]:
    pool: list[Resource] = []
    for resource, count in RESOURCE_COUNTS.items():
        pool.extend([resource] * count)
    return pool


def generate_randomized_board(seed: Optional[int] = None, *, rng: Optional[random.Random] = None) -> BoardState:
    """Shuffle the fixed resource and token pools onto the standard layout.

    Only the two shuffles are random; the lattice shape and the pool
    contents never change, so the topology size is the same for every seed.
    """
    rng = rng if rng is not None else random.Random(seed)

    resources = resource_pool()
    rng.shuffle(resources)

    numbers = NUMBER_TOKENS[:]
    rng.shuffle(numbers)

    return build_standard_board(resource_order=resources, token_order=numbers)


def validate_standard_counts(board: BoardState) -> bool:
    resource_counts: Dict[Resource, int] = {resource: 0 for resource in RESOURCE_COUNTS}
    numbers = []
    for tile in board.tiles:
        resource_counts[tile.resource] += 1
        if tile.resource is Resource.DESERT:
            if tile.number != DESERT_NUMBER:
                return False
        elif tile.number == DESERT_NUMBER:
            return False
        else:
            numbers.append(tile.number)

    if resource_counts != RESOURCE_COUNTS:
        return False

    return sorted(numbers) == sorted(NUMBER_TOKENS)
