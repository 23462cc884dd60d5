"""Grid representation and geometry helpers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Sequence, Tuple

from ..core.constants import (ORTHOGONAL_STEPS, RAW_SIDE_LENGTH, ROOM_SIZE, SIDE_LENGTH,
                              TileType)
from ..core.exceptions import PlacementError
from ..core.models import Coordinate, Diagram, Puzzle


# ----------------------------------------------------------------------
# Geometry
# ----------------------------------------------------------------------
def orthogonal_neighbors(coord: Coordinate) -> Tuple[Coordinate, ...]:
    x, y = coord
    return tuple(Coordinate(x + dx, y + dy) for dx, dy in ORTHOGONAL_STEPS)


def room_anchor_candidates(coord: Coordinate) -> Tuple[Coordinate, ...]:
    """Top-left corners of every 3x3 room that could contain ``coord``.

    Ordered from (x-2, y-2) to (x, y) with the row offset varying fastest.
    """

    x, y = coord
    return tuple(
        Coordinate(x + dx, y + dy)
        for dy in range(1 - ROOM_SIZE, 1)
        for dx in range(1 - ROOM_SIZE, 1)
    )


def room_tiles(anchor: Coordinate) -> Tuple[Coordinate, ...]:
    x, y = anchor
    return tuple(
        Coordinate(x + dx, y + dy) for dy in range(ROOM_SIZE) for dx in range(ROOM_SIZE)
    )


def room_ring(anchor: Coordinate) -> Tuple[Coordinate, ...]:
    """The 12 tiles surrounding the room whose top-left corner is ``anchor``."""

    x, y = anchor
    span = range(ROOM_SIZE)
    return (
        tuple(Coordinate(x + i, y - 1) for i in span)
        + tuple(Coordinate(x + ROOM_SIZE, y + i) for i in span)
        + tuple(Coordinate(x + i, y + ROOM_SIZE) for i in span)
        + tuple(Coordinate(x - 1, y + i) for i in span)
    )


def corner_triples(coord: Coordinate) -> Tuple[Tuple[Coordinate, Coordinate, Coordinate], ...]:
    """The four L-shaped triples that complete a 2x2 block with ``coord``."""

    x, y = coord
    return (
        (Coordinate(x - 1, y - 1), Coordinate(x, y - 1), Coordinate(x - 1, y)),
        (Coordinate(x, y - 1), Coordinate(x + 1, y - 1), Coordinate(x + 1, y)),
        (Coordinate(x + 1, y), Coordinate(x + 1, y + 1), Coordinate(x, y + 1)),
        (Coordinate(x, y + 1), Coordinate(x - 1, y + 1), Coordinate(x - 1, y)),
    )


def is_room_anchor_available(anchor: Coordinate) -> bool:
    return 1 <= anchor.x < SIDE_LENGTH - 2 and 1 <= anchor.y < SIDE_LENGTH - 2


def is_in_any_room(coord: Coordinate, anchors: Iterable[Coordinate]) -> bool:
    for anchor in anchors:
        if anchor.x <= coord.x < anchor.x + ROOM_SIZE and anchor.y <= coord.y < anchor.y + ROOM_SIZE:
            return True
    return False


def is_interior(coord: Coordinate) -> bool:
    return 1 <= coord.x <= RAW_SIDE_LENGTH and 1 <= coord.y <= RAW_SIDE_LENGTH


def interior_coordinates() -> Iterator[Coordinate]:
    """Yield every non-border coordinate in row-major order."""

    for x in range(1, SIDE_LENGTH - 1):
        for y in range(1, SIDE_LENGTH - 1):
            yield Coordinate(x, y)


def strip_border(tiles: Sequence[Sequence[TileType]]) -> Diagram:
    """Drop the wall border from a padded 10x10 diagram."""

    return tuple(tuple(row[1:-1]) for row in tiles[1:-1])


def wall_projections(tiles: Sequence[Sequence[TileType]]) -> Tuple[List[int], List[int]]:
    """Count walls per row and per column of an unpadded tile map."""

    rows = [0] * RAW_SIDE_LENGTH
    columns = [0] * RAW_SIDE_LENGTH
    for r, row in enumerate(tiles):
        for c, tile in enumerate(row):
            if tile == TileType.WALL:
                rows[r] += 1
                columns[c] += 1
    return rows, columns


# ----------------------------------------------------------------------
# Board
# ----------------------------------------------------------------------
class DiagramGrid:
    """The padded board, its projection counters and undoable wall placements.

    Row/column ``i`` of the 8x8 puzzle lives at padded index ``i + 1``; the
    outer ring is permanently Wall so neighbour lookups never leave the board.
    """

    def __init__(self, puzzle: Puzzle) -> None:
        self.row_targets: Tuple[int, ...] = tuple(puzzle.row_projection)
        self.column_targets: Tuple[int, ...] = tuple(puzzle.column_projection)
        self.tiles: List[List[TileType]] = [
            [TileType.WALL] * SIDE_LENGTH for _ in range(SIDE_LENGTH)
        ]
        for r, row in enumerate(puzzle.tiles):
            for c, tile in enumerate(row):
                self.tiles[r + 1][c + 1] = TileType(tile)
        self.row_counts, self.column_counts = wall_projections(puzzle.tiles)
        self.treasures: Tuple[Coordinate, ...] = self._scan(TileType.TREASURE)
        self.monsters: Tuple[Coordinate, ...] = self._scan(TileType.MONSTER)
        self.room_anchors: List[Coordinate] = []

    def _scan(self, tile_type: TileType) -> Tuple[Coordinate, ...]:
        return tuple(coord for coord in interior_coordinates() if self.tile(coord) == tile_type)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def tile(self, coord: Coordinate) -> TileType:
        return self.tiles[coord.x][coord.y]

    def in_room(self, coord: Coordinate) -> bool:
        return is_in_any_room(coord, self.room_anchors)

    def is_placeable(self, coord: Coordinate) -> bool:
        """Whether one more wall at ``coord`` keeps its row and column within target."""

        if not is_interior(coord):
            return False
        row_i, column_i = coord.x - 1, coord.y - 1
        return (
            self.row_counts[row_i] + 1 <= self.row_targets[row_i]
            and self.column_counts[column_i] + 1 <= self.column_targets[column_i]
        )

    def projections_satisfied(self) -> bool:
        return (
            tuple(self.row_counts) == self.row_targets
            and tuple(self.column_counts) == self.column_targets
        )

    def first_row_below_target(self) -> int | None:
        for row_i, (count, target) in enumerate(zip(self.row_counts, self.row_targets)):
            if count < target:
                return row_i
        return None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place_wall(self, coord: Coordinate) -> None:
        if self.tile(coord) != TileType.EMPTY:
            raise PlacementError(f"Cannot place wall on {self.tile(coord).name} at {tuple(coord)}")
        self.tiles[coord.x][coord.y] = TileType.WALL
        self.row_counts[coord.x - 1] += 1
        self.column_counts[coord.y - 1] += 1

    def remove_wall(self, coord: Coordinate) -> None:
        if self.tile(coord) != TileType.WALL:
            raise PlacementError(f"No wall to remove at {tuple(coord)}")
        self.tiles[coord.x][coord.y] = TileType.EMPTY
        self.row_counts[coord.x - 1] -= 1
        self.column_counts[coord.y - 1] -= 1

    @contextmanager
    def tentative_walls(self, coords: Sequence[Coordinate]) -> Iterator[bool]:
        """Place walls in order while each stays placeable; always undo on exit.

        Yields ``True`` when every wall went down, ``False`` as soon as one
        would push its row or column over target.
        """

        placed: List[Coordinate] = []
        try:
            for coord in coords:
                if not self.is_placeable(coord):
                    yield False
                    return
                self.place_wall(coord)
                placed.append(coord)
            yield True
        finally:
            for coord in reversed(placed):
                self.remove_wall(coord)

    @contextmanager
    def committed_room(self, anchor: Coordinate) -> Iterator[None]:
        self.room_anchors.append(anchor)
        try:
            yield
        finally:
            popped = self.room_anchors.pop()
            if popped != anchor:
                raise PlacementError(
                    f"Room stack out of order: expected {tuple(anchor)}, got {tuple(popped)}"
                )

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def snapshot(self) -> Diagram:
        return tuple(tuple(row) for row in self.tiles)
