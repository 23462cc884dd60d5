import unittest

from dungeon.core.constants import RAW_SIDE_LENGTH, SIDE_LENGTH, TileType
from dungeon.core.exceptions import PlacementError
from dungeon.core.models import Coordinate, Puzzle
from dungeon.engine.grid import (DiagramGrid, corner_triples, is_in_any_room,
                                 is_room_anchor_available, orthogonal_neighbors,
                                 room_anchor_candidates, room_ring, room_tiles, strip_border,
                                 wall_projections)


def empty_puzzle(rows=None, columns=None, tiles=None) -> Puzzle:
    rows = rows or [RAW_SIDE_LENGTH] * RAW_SIDE_LENGTH
    columns = columns or [RAW_SIDE_LENGTH] * RAW_SIDE_LENGTH
    tiles = tiles or [[0] * RAW_SIDE_LENGTH for _ in range(RAW_SIDE_LENGTH)]
    return Puzzle.from_values(rows, columns, tiles)


class GeometryTests(unittest.TestCase):
    def test_orthogonal_neighbors_order(self) -> None:
        self.assertEqual(
            orthogonal_neighbors(Coordinate(4, 4)),
            (Coordinate(4, 3), Coordinate(5, 4), Coordinate(4, 5), Coordinate(3, 4)),
        )

    def test_room_anchor_candidates_scan_order(self) -> None:
        candidates = room_anchor_candidates(Coordinate(5, 5))
        self.assertEqual(len(candidates), 9)
        self.assertEqual(candidates[0], Coordinate(3, 3))
        self.assertEqual(candidates[1], Coordinate(4, 3))
        self.assertEqual(candidates[3], Coordinate(3, 4))
        self.assertEqual(candidates[-1], Coordinate(5, 5))

    def test_room_tiles_and_ring_do_not_overlap(self) -> None:
        anchor = Coordinate(2, 3)
        tiles = set(room_tiles(anchor))
        ring = room_ring(anchor)
        self.assertEqual(len(tiles), 9)
        self.assertEqual(len(ring), 12)
        self.assertEqual(len(set(ring)), 12)
        self.assertFalse(tiles & set(ring))
        self.assertEqual(ring[0], Coordinate(2, 2))
        self.assertEqual(ring[3], Coordinate(5, 3))
        self.assertEqual(ring[6], Coordinate(2, 6))
        self.assertEqual(ring[9], Coordinate(1, 3))

    def test_room_anchor_must_keep_room_inside_play_area(self) -> None:
        self.assertTrue(is_room_anchor_available(Coordinate(1, 1)))
        self.assertTrue(is_room_anchor_available(Coordinate(SIDE_LENGTH - 3, SIDE_LENGTH - 3)))
        self.assertFalse(is_room_anchor_available(Coordinate(0, 1)))
        self.assertFalse(is_room_anchor_available(Coordinate(1, SIDE_LENGTH - 2)))

    def test_corner_triples_cover_the_eight_neighbours(self) -> None:
        center = Coordinate(4, 4)
        triples = corner_triples(center)
        covered = {coord for triple in triples for coord in triple}
        self.assertEqual(len(covered), 8)
        self.assertNotIn(center, covered)

    def test_is_in_any_room(self) -> None:
        anchors = [Coordinate(2, 2)]
        self.assertTrue(is_in_any_room(Coordinate(4, 4), anchors))
        self.assertFalse(is_in_any_room(Coordinate(5, 4), anchors))
        self.assertFalse(is_in_any_room(Coordinate(4, 4), []))

    def test_hash_id(self) -> None:
        self.assertEqual(Coordinate(3, 7).hash_id, 307)
        with self.assertRaises(AssertionError):
            Coordinate(3, 100).hash_id


class DiagramGridTests(unittest.TestCase):
    def test_border_is_wall_and_interior_is_copied(self) -> None:
        tiles = [[0] * RAW_SIDE_LENGTH for _ in range(RAW_SIDE_LENGTH)]
        tiles[0][0] = 1
        tiles[7][7] = 2
        grid = DiagramGrid(empty_puzzle(tiles=tiles))
        for i in range(SIDE_LENGTH):
            self.assertEqual(grid.tile(Coordinate(0, i)), TileType.WALL)
            self.assertEqual(grid.tile(Coordinate(SIDE_LENGTH - 1, i)), TileType.WALL)
            self.assertEqual(grid.tile(Coordinate(i, 0)), TileType.WALL)
            self.assertEqual(grid.tile(Coordinate(i, SIDE_LENGTH - 1)), TileType.WALL)
        self.assertEqual(grid.treasures, (Coordinate(1, 1),))
        self.assertEqual(grid.monsters, (Coordinate(8, 8),))
        self.assertEqual(len(strip_border(grid.snapshot())), RAW_SIDE_LENGTH)

    def test_counters_start_from_input_walls(self) -> None:
        tiles = [[0] * RAW_SIDE_LENGTH for _ in range(RAW_SIDE_LENGTH)]
        tiles[2][5] = 3
        tiles[2][6] = 3
        grid = DiagramGrid(empty_puzzle(tiles=tiles))
        self.assertEqual(grid.row_counts[2], 2)
        self.assertEqual(grid.column_counts[5], 1)
        interior = strip_border(grid.snapshot())
        self.assertEqual(wall_projections(interior), (grid.row_counts, grid.column_counts))

    def test_is_placeable_respects_targets(self) -> None:
        rows = [1, 0, 0, 0, 0, 0, 0, 0]
        columns = [1, 1, 0, 0, 0, 0, 0, 0]
        grid = DiagramGrid(empty_puzzle(rows=rows, columns=columns))
        self.assertTrue(grid.is_placeable(Coordinate(1, 1)))
        self.assertFalse(grid.is_placeable(Coordinate(1, 3)))
        self.assertFalse(grid.is_placeable(Coordinate(2, 1)))
        self.assertFalse(grid.is_placeable(Coordinate(0, 1)))

    def test_place_wall_rejects_fixed_tiles(self) -> None:
        tiles = [[0] * RAW_SIDE_LENGTH for _ in range(RAW_SIDE_LENGTH)]
        tiles[0][0] = 1
        grid = DiagramGrid(empty_puzzle(tiles=tiles))
        with self.assertRaises(PlacementError):
            grid.place_wall(Coordinate(1, 1))
        with self.assertRaises(PlacementError):
            grid.remove_wall(Coordinate(1, 2))

    def test_tentative_walls_rolls_back(self) -> None:
        grid = DiagramGrid(empty_puzzle())
        before = grid.snapshot()
        coords = [Coordinate(1, 1), Coordinate(1, 2)]
        with grid.tentative_walls(coords) as placed:
            self.assertTrue(placed)
            self.assertEqual(grid.row_counts[0], 2)
            self.assertEqual(grid.tile(Coordinate(1, 2)), TileType.WALL)
        self.assertEqual(grid.snapshot(), before)
        self.assertEqual(grid.row_counts[0], 0)

    def test_tentative_walls_stops_at_capacity(self) -> None:
        rows = [1, 0, 0, 0, 0, 0, 0, 0]
        grid = DiagramGrid(empty_puzzle(rows=rows))
        before = grid.snapshot()
        with grid.tentative_walls([Coordinate(1, 1), Coordinate(1, 2)]) as placed:
            self.assertFalse(placed)
        self.assertEqual(grid.snapshot(), before)
        self.assertEqual(grid.row_counts, [0] * RAW_SIDE_LENGTH)

    def test_tentative_walls_rolls_back_on_exception(self) -> None:
        grid = DiagramGrid(empty_puzzle())
        before = grid.snapshot()
        with self.assertRaises(RuntimeError):
            with grid.tentative_walls([Coordinate(3, 3)]):
                raise RuntimeError("boom")
        self.assertEqual(grid.snapshot(), before)
        self.assertEqual(grid.column_counts, [0] * RAW_SIDE_LENGTH)

    def test_committed_room_is_popped(self) -> None:
        grid = DiagramGrid(empty_puzzle())
        with grid.committed_room(Coordinate(1, 1)):
            self.assertTrue(grid.in_room(Coordinate(3, 3)))
        self.assertEqual(grid.room_anchors, [])

    def test_committed_room_detects_out_of_order_release(self) -> None:
        grid = DiagramGrid(empty_puzzle())
        with self.assertRaises(PlacementError):
            with grid.committed_room(Coordinate(1, 1)):
                grid.room_anchors.append(Coordinate(4, 4))
        self.assertEqual(grid.room_anchors, [Coordinate(1, 1)])

    def test_first_row_below_target(self) -> None:
        rows = [0, 0, 2, 1, 0, 0, 0, 0]
        grid = DiagramGrid(empty_puzzle(rows=rows))
        self.assertEqual(grid.first_row_below_target(), 2)
        self.assertFalse(grid.projections_satisfied())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
