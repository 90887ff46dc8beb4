import math
import unittest

from catan_hotseat.domain.board import (
    CORNER_TOLERANCE,
    Resource,
    build_standard_board,
    build_topology,
    hex_corner,
    normalize_edge_key,
)
from catan_hotseat.domain.randomizer import NUMBER_TOKENS, generate_randomized_board, resource_pool


class BoardGraphTests(unittest.TestCase):
    def test_standard_board_sizes(self) -> None:
        board = generate_randomized_board(seed=14)
        self.assertEqual(len(board.tiles), 19)
        self.assertEqual(len(board.intersections), 54)
        self.assertEqual(len(board.roads), 72)

    def test_sizes_do_not_depend_on_seed(self) -> None:
        for seed in range(5):
            board = generate_randomized_board(seed=seed)
            self.assertEqual((len(board.intersections), len(board.roads)), (54, 72))

    def test_intersection_adjacency_is_symmetric(self) -> None:
        board = generate_randomized_board(seed=12)
        for intersection in board.intersections:
            self.assertNotIn(intersection.id, intersection.adjacent_intersection_ids)
            self.assertIn(len(intersection.adjacent_intersection_ids), (2, 3))
            for neighbor_id in intersection.adjacent_intersection_ids:
                self.assertIn(intersection.id, board.neighbors(neighbor_id))

    def test_every_intersection_touches_one_to_three_tiles(self) -> None:
        board = generate_randomized_board(seed=3)
        for intersection in board.intersections:
            self.assertGreaterEqual(len(intersection.adjacent_tile_ids), 1)
            self.assertLessEqual(len(intersection.adjacent_tile_ids), 3)

    def test_roads_are_unique_and_normalized(self) -> None:
        board = generate_randomized_board(seed=16)
        keys = [road.endpoints for road in board.roads]
        self.assertEqual(len(keys), len(set(keys)))
        for road_id, road in enumerate(board.roads):
            self.assertEqual(road.id, road_id)
            first, second = road.endpoints
            self.assertLess(first, second)
            self.assertEqual(board.road_between(second, first), road.id)
            self.assertIn(second, board.neighbors(first))

    def test_normalize_edge_key_is_order_independent(self) -> None:
        self.assertEqual(normalize_edge_key(9, 4), (4, 9))
        self.assertEqual(normalize_edge_key(4, 9), (4, 9))

    def test_tile_corner_ids_point_at_their_intersections(self) -> None:
        board = generate_randomized_board(seed=21)
        for tile in board.tiles:
            self.assertEqual(len(tile.corner_ids), 6)
            for corner_id, corner in zip(tile.corner_ids, tile.corner_points):
                point = board.intersections[corner_id].point
                self.assertLess(math.dist(point, corner), CORNER_TOLERANCE)
                self.assertIn(tile.id, board.intersections[corner_id].adjacent_tile_ids)

    def test_first_corner_is_thirty_degrees_below_east(self) -> None:
        x, y = hex_corner((0.0, 0.0), 0)
        self.assertAlmostEqual(x, math.sqrt(3) / 2)
        self.assertAlmostEqual(y, -0.5)

    def test_desert_takes_number_seven(self) -> None:
        resources = resource_pool()
        board = build_standard_board(resources, NUMBER_TOKENS)
        desert = [tile for tile in board.tiles if tile.resource is Resource.DESERT]
        self.assertEqual(len(desert), 1)
        self.assertEqual(desert[0].number, 7)

    def test_build_rejects_wrong_pool_sizes(self) -> None:
        with self.assertRaises(ValueError):
            build_standard_board(resource_pool()[:-1], NUMBER_TOKENS)
        with self.assertRaises(ValueError):
            build_standard_board(resource_pool(), NUMBER_TOKENS[:-1])
        with self.assertRaises(ValueError):
            build_standard_board(resource_pool(), [7] + NUMBER_TOKENS[1:])

    def test_topology_of_empty_tile_list_is_empty(self) -> None:
        board = build_topology([])
        self.assertEqual(board.intersections, ())
        self.assertEqual(board.roads, ())
        self.assertEqual(board.bounds(), (0.0, 0.0, 0.0, 0.0))

    def test_same_layout_gives_same_ids(self) -> None:
        first = generate_randomized_board(seed=8)
        second = generate_randomized_board(seed=8)
        self.assertEqual([road.endpoints for road in first.roads], [road.endpoints for road in second.roads])
        self.assertEqual([tile.corner_ids for tile in first.tiles], [tile.corner_ids for tile in second.tiles])


if __name__ == "__main__":
    unittest.main()
