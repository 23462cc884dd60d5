"""CP-SAT projection pre-check using OR-Tools.

The model is a relaxation of the full puzzle: it only knows which tiles can
hold walls, the exact row/column wall counts and the monster dead-end count.
If the relaxation is infeasible, so is the puzzle, and the backtracking
search can be skipped entirely.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple, Union

from ortools.sat.python import cp_model

from ..core.constants import DEAD_END_WALLS, RAW_SIDE_LENGTH, TileType
from ..core.models import Coordinate, Puzzle
from ..utils.logger import get_logger
from .grid import is_interior, orthogonal_neighbors

LOGGER = get_logger(__name__)

WallTerm = Union[int, cp_model.IntVar]


def projections_feasible(puzzle: Puzzle, timeout_seconds: float = 10.0) -> bool:
    """Return ``False`` only when the puzzle provably has no solution.

    A solver timeout is reported as feasible so the full search still runs.
    """

    model = cp_model.CpModel()
    walls: Dict[Tuple[int, int], WallTerm] = {}
    for r in range(RAW_SIDE_LENGTH):
        for c in range(RAW_SIDE_LENGTH):
            tile = puzzle.tiles[r][c]
            if tile == TileType.WALL:
                walls[(r, c)] = 1
            elif tile in (TileType.TREASURE, TileType.MONSTER):
                walls[(r, c)] = 0
            else:
                walls[(r, c)] = model.new_bool_var(f"W_{r}_{c}")

    for r, target in enumerate(puzzle.row_projection):
        terms = [walls[(r, c)] for c in range(RAW_SIDE_LENGTH)]
        if not _add_exact_count(model, terms, target):
            LOGGER.info("Pre-check: row %d cannot hold %d walls", r, target)
            return False

    for c, target in enumerate(puzzle.column_projection):
        terms = [walls[(r, c)] for r in range(RAW_SIDE_LENGTH)]
        if not _add_exact_count(model, terms, target):
            LOGGER.info("Pre-check: column %d cannot hold %d walls", c, target)
            return False

    for r, row in enumerate(puzzle.tiles):
        for c, tile in enumerate(row):
            if tile != TileType.MONSTER:
                continue
            terms = _monster_neighbor_terms(puzzle, walls, Coordinate(r + 1, c + 1))
            if terms is None or not _add_exact_count(model, terms, DEAD_END_WALLS):
                LOGGER.info("Pre-check: monster at (%d,%d) cannot sit in a dead end", r, c)
                return False

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout_seconds
    solver.parameters.num_workers = 1

    status = solver.solve(model)
    if status == cp_model.INFEASIBLE:
        LOGGER.info("Pre-check: projections are infeasible (%.2fs)", solver.wall_time)
        return False
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("Pre-check inconclusive (status=%s)", solver.status_name(status))
    return True


def _monster_neighbor_terms(
    puzzle: Puzzle,
    walls: Dict[Tuple[int, int], WallTerm],
    monster: Coordinate,
) -> List[WallTerm] | None:
    """Wall terms around a monster; ``None`` if a treasure or monster is adjacent."""

    terms: List[WallTerm] = []
    for neighbor in orthogonal_neighbors(monster):
        if not is_interior(neighbor):
            terms.append(1)
            continue
        tile = puzzle.tiles[neighbor.x - 1][neighbor.y - 1]
        if tile in (TileType.TREASURE, TileType.MONSTER):
            return None
        terms.append(walls[(neighbor.x - 1, neighbor.y - 1)])
    return terms


def _add_exact_count(model: cp_model.CpModel, terms: Sequence[WallTerm], target: int) -> bool:
    """Constrain ``sum(terms) == target``; ``False`` if trivially impossible."""

    constant = sum(term for term in terms if isinstance(term, int))
    variables = [term for term in terms if not isinstance(term, int)]
    remaining = target - constant
    if remaining < 0 or remaining > len(variables):
        return False
    if variables:
        model.add(sum(variables) == remaining)
    return True
