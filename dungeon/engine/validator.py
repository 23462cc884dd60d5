"""Structural rule checks: treasure rooms, dead ends and hallway width."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.constants import DEAD_END_WALLS, ROOM_RING_WALLS, TileType
from ..core.exceptions import ValidationError
from ..core.models import Coordinate
from ..utils.logger import get_logger
from .connectivity import check_empty_connectivity, check_fixed_connectivity
from .grid import (DiagramGrid, corner_triples, interior_coordinates, is_in_any_room,
                   is_room_anchor_available, orthogonal_neighbors, room_anchor_candidates,
                   room_ring, room_tiles)


LOGGER = get_logger(__name__)


# ----------------------------------------------------------------------
# Treasure rooms
# ----------------------------------------------------------------------
def is_room_interior_valid(grid: DiagramGrid, anchor: Coordinate) -> bool:
    """The 3x3 block holds exactly one treasure and eight empty tiles."""

    tiles = [grid.tile(coord) for coord in room_tiles(anchor)]
    return tiles.count(TileType.EMPTY) == 8 and tiles.count(TileType.TREASURE) == 1


def is_room_ring_valid(grid: DiagramGrid, anchor: Coordinate) -> bool:
    walls = sum(1 for coord in room_ring(anchor) if grid.tile(coord) == TileType.WALL)
    return walls == ROOM_RING_WALLS


def find_treasure_room(grid: DiagramGrid, treasure: Coordinate) -> Optional[Coordinate]:
    """Return the first valid room anchor for ``treasure`` in scan order."""

    for anchor in room_anchor_candidates(treasure):
        if not is_room_anchor_available(anchor):
            continue
        if is_room_interior_valid(grid, anchor) and is_room_ring_valid(grid, anchor):
            return anchor
    return None


def check_treasure_rooms(grid: DiagramGrid) -> Optional[List[Coordinate]]:
    """Anchors of every treasure's room, or ``None`` if any treasure lacks one."""

    anchors: List[Coordinate] = []
    for treasure in grid.treasures:
        anchor = find_treasure_room(grid, treasure)
        if anchor is None:
            return None
        anchors.append(anchor)
    return anchors


# ----------------------------------------------------------------------
# Dead ends
# ----------------------------------------------------------------------
def is_dead_end(grid: DiagramGrid, coord: Coordinate) -> bool:
    walls = sum(1 for n in orthogonal_neighbors(coord) if grid.tile(n) == TileType.WALL)
    return walls == DEAD_END_WALLS


def is_monster_dead_end(grid: DiagramGrid, monster: Coordinate) -> bool:
    tiles = [grid.tile(n) for n in orthogonal_neighbors(monster)]
    return tiles.count(TileType.WALL) == DEAD_END_WALLS and TileType.EMPTY in tiles


def check_monsters(grid: DiagramGrid) -> bool:
    return all(is_monster_dead_end(grid, monster) for monster in grid.monsters)


# ----------------------------------------------------------------------
# Hallways
# ----------------------------------------------------------------------
def _is_hallway_tile(grid: DiagramGrid, coord: Coordinate, anchors: Sequence[Coordinate]) -> bool:
    return grid.tile(coord) == TileType.EMPTY and not is_in_any_room(coord, anchors)


def check_hallways(grid: DiagramGrid, anchors: Sequence[Coordinate]) -> bool:
    """Reject any 2x2 block of open tiles outside the treasure rooms."""

    for coord in interior_coordinates():
        if not _is_hallway_tile(grid, coord, anchors):
            continue
        for triple in corner_triples(coord):
            if all(_is_hallway_tile(grid, other, anchors) for other in triple):
                return False
    return True


def passes_prechecks(grid: DiagramGrid) -> bool:
    """Cheap checks that hold on every partial state leading to a solution."""

    return (
        check_treasure_rooms(grid) is not None
        and check_monsters(grid)
        and check_fixed_connectivity(grid)
    )


# ----------------------------------------------------------------------
# Full validation
# ----------------------------------------------------------------------
@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class DiagramValidator:
    """Runs the complete rule set over a fully committed grid."""

    def validate(self, grid: DiagramGrid) -> ValidationResult:
        try:
            self._check_connectivity(grid)
            anchors = self._check_treasure_rooms(grid)
            self._check_dead_ends(grid)
            self._check_hallways(grid, anchors)
        except ValidationError as exc:
            LOGGER.debug("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def is_solved(self, grid: DiagramGrid) -> bool:
        return self.validate(grid).ok

    def _check_connectivity(self, grid: DiagramGrid) -> None:
        if not check_empty_connectivity(grid):
            raise ValidationError("Empty tiles are not a single connected region")

    def _check_treasure_rooms(self, grid: DiagramGrid) -> List[Coordinate]:
        anchors: List[Coordinate] = []
        for treasure in grid.treasures:
            anchor = find_treasure_room(grid, treasure)
            if anchor is None:
                raise ValidationError(
                    f"Treasure at {tuple(treasure)} is not inside a valid 3x3 room"
                )
            anchors.append(anchor)
        return anchors

    def _check_dead_ends(self, grid: DiagramGrid) -> None:
        for monster in grid.monsters:
            if not is_monster_dead_end(grid, monster):
                raise ValidationError(f"Monster at {tuple(monster)} is not in a dead end")
        for coord in interior_coordinates():
            if grid.tile(coord) == TileType.EMPTY and is_dead_end(grid, coord):
                raise ValidationError(f"Empty dead end at {tuple(coord)}")

    def _check_hallways(self, grid: DiagramGrid, anchors: Sequence[Coordinate]) -> None:
        if not check_hallways(grid, anchors):
            raise ValidationError("Hallways wider than one tile outside treasure rooms")
