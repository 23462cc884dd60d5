"""Depth-first backtracking search over wall placements.

Each call resolves one item and recurses:

  1. Treasure phase: pick a 3x3 room for the next unhandled treasure and wall
     its ring except for one door.
  2. Monster phase: wall all but one neighbour of the next unhandled monster.
  3. Deficit phase: fill the first row still under its wall target with
     every combination of legal candidate tiles.

Every placement goes through a context manager so the grid, its counters,
the room list and the handled sets are rolled back on every exit path.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Set

from ..core.constants import SIDE_LENGTH, TileType
from ..core.models import Coordinate, Diagram
from ..utils.logger import get_logger
from .combinations import index_combinations
from .connectivity import check_fixed_connectivity
from .grid import (DiagramGrid, is_room_anchor_available, orthogonal_neighbors,
                   room_anchor_candidates, room_ring)
from .validator import DiagramValidator, is_room_interior_valid, passes_prechecks


LOGGER = get_logger(__name__)

_MUTABLE_TILES = (TileType.EMPTY, TileType.WALL)


class SearchOutcome(str, Enum):
    """Result of a search call.

    ``CONTRADICTION`` means no candidate could even be committed;
    ``EXHAUSTED`` means candidates were committed but every subtree failed.
    """

    SOLVED = "SOLVED"
    CONTRADICTION = "CONTRADICTION"
    EXHAUSTED = "EXHAUSTED"


@dataclass
class SearchStats:
    nodes: int = 0
    max_depth: int = 0
    validations: int = 0


class BacktrackingSearch:
    """Single-threaded deterministic search owning one :class:`DiagramGrid`."""

    def __init__(self, grid: DiagramGrid, validator: Optional[DiagramValidator] = None) -> None:
        self.grid = grid
        self.validator = validator or DiagramValidator()
        self.stats = SearchStats()
        self.solution: Optional[Diagram] = None
        self._handled_treasures: Set[int] = set()
        self._handled_monsters: Set[int] = set()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def run(self) -> SearchOutcome:
        self.stats = SearchStats()
        self.solution = None
        LOGGER.debug(
            "Searching: %d treasures, %d monsters, rows=%s cols=%s",
            len(self.grid.treasures),
            len(self.grid.monsters),
            list(self.grid.row_targets),
            list(self.grid.column_targets),
        )
        outcome = self._search(0)
        LOGGER.debug(
            "Search finished: %s after %d nodes (max depth %d, %d full validations)",
            outcome.value,
            self.stats.nodes,
            self.stats.max_depth,
            self.stats.validations,
        )
        return outcome

    # ------------------------------------------------------------------
    # Recursion
    # ------------------------------------------------------------------
    def _search(self, depth: int) -> SearchOutcome:
        self.stats.nodes += 1
        self.stats.max_depth = max(self.stats.max_depth, depth)

        if self.grid.projections_satisfied():
            return self._accept()

        treasure = self._first_unhandled(self.grid.treasures, self._handled_treasures)
        if treasure is not None:
            return self._treasure_phase(treasure, depth)

        monster = self._first_unhandled(self.grid.monsters, self._handled_monsters)
        if monster is not None:
            return self._monster_phase(monster, depth)

        return self._deficit_phase(depth)

    def _accept(self) -> SearchOutcome:
        self.stats.validations += 1
        if not self.validator.is_solved(self.grid):
            return SearchOutcome.CONTRADICTION
        self.solution = self.grid.snapshot()
        return SearchOutcome.SOLVED

    @staticmethod
    def _first_unhandled(coords: Sequence[Coordinate], handled: Set[int]) -> Optional[Coordinate]:
        for coord in coords:
            if coord.hash_id not in handled:
                return coord
        return None

    @contextmanager
    def _handled(self, handled: Set[int], coord: Coordinate) -> Iterator[None]:
        handled.add(coord.hash_id)
        try:
            yield
        finally:
            handled.discard(coord.hash_id)

    def _try_doors(self, openings: Sequence[Coordinate], depth: int) -> SearchOutcome:
        """Wall every opening but one, once per choice of the one left open."""

        outcome = SearchOutcome.CONTRADICTION
        for door in openings:
            walls = [coord for coord in openings if coord != door]
            with self.grid.tentative_walls(walls) as placed:
                if not placed or not check_fixed_connectivity(self.grid):
                    continue
                outcome = SearchOutcome.EXHAUSTED
                if self._search(depth + 1) is SearchOutcome.SOLVED:
                    return SearchOutcome.SOLVED
        return outcome

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def _treasure_phase(self, treasure: Coordinate, depth: int) -> SearchOutcome:
        outcome = SearchOutcome.CONTRADICTION
        for anchor in room_anchor_candidates(treasure):
            if not is_room_anchor_available(anchor):
                continue
            if not is_room_interior_valid(self.grid, anchor):
                continue
            ring = room_ring(anchor)
            if any(self.grid.tile(coord) not in _MUTABLE_TILES for coord in ring):
                continue
            openings = [coord for coord in ring if self.grid.tile(coord) == TileType.EMPTY]
            if not openings:
                # Sealed ring: this anchor can never get a door.
                continue
            with self.grid.committed_room(anchor), self._handled(self._handled_treasures, treasure):
                result = self._try_doors(openings, depth)
            if result is SearchOutcome.SOLVED:
                return result
            if result is SearchOutcome.EXHAUSTED:
                outcome = result

        if outcome is SearchOutcome.CONTRADICTION:
            LOGGER.debug("Depth %d: no room fits treasure at %s", depth, tuple(treasure))
        return outcome

    def _monster_phase(self, monster: Coordinate, depth: int) -> SearchOutcome:
        neighbors = orthogonal_neighbors(monster)
        tiles = [self.grid.tile(coord) for coord in neighbors]
        if any(tile not in _MUTABLE_TILES for tile in tiles):
            LOGGER.debug("Depth %d: monster at %s touches a fixed tile", depth, tuple(monster))
            return SearchOutcome.CONTRADICTION
        if tiles.count(TileType.WALL) >= len(neighbors):
            LOGGER.debug("Depth %d: monster at %s is fully enclosed", depth, tuple(monster))
            return SearchOutcome.CONTRADICTION

        openings = [coord for coord, tile in zip(neighbors, tiles) if tile == TileType.EMPTY]
        with self._handled(self._handled_monsters, monster):
            return self._try_doors(openings, depth)

    def _deficit_phase(self, depth: int) -> SearchOutcome:
        row_i = self.grid.first_row_below_target()
        if row_i is None:
            # Rows are complete but some column is not.
            return SearchOutcome.CONTRADICTION

        deficit = self.grid.row_targets[row_i] - self.grid.row_counts[row_i]
        candidates = self._deficit_candidates(row_i)
        if len(candidates) < deficit:
            LOGGER.debug(
                "Depth %d: row %d needs %d walls, only %d candidates",
                depth, row_i, deficit, len(candidates),
            )
            return SearchOutcome.CONTRADICTION

        outcome = SearchOutcome.CONTRADICTION
        for combination in index_combinations(deficit, len(candidates)):
            walls = [candidates[i] for i in combination]
            with self.grid.tentative_walls(walls) as placed:
                if not placed or not passes_prechecks(self.grid):
                    continue
                outcome = SearchOutcome.EXHAUSTED
                if self._search(depth + 1) is SearchOutcome.SOLVED:
                    return SearchOutcome.SOLVED
        return outcome

    def _deficit_candidates(self, row_i: int) -> List[Coordinate]:
        """Empty non-room tiles of the row that can individually become walls."""

        candidates: List[Coordinate] = []
        x = row_i + 1
        for y in range(1, SIDE_LENGTH - 1):
            coord = Coordinate(x, y)
            if self.grid.tile(coord) != TileType.EMPTY or self.grid.in_room(coord):
                continue
            with self.grid.tentative_walls([coord]) as placed:
                if placed and passes_prechecks(self.grid):
                    candidates.append(coord)
        return candidates
