"""Flood-fill connectivity checks over the padded grid."""

from __future__ import annotations

from collections import deque
from typing import Callable, Iterable, Set

from ..core.constants import TileType
from ..core.models import Coordinate
from .grid import DiagramGrid, interior_coordinates, orthogonal_neighbors


def _flood(
    grid: DiagramGrid,
    seed: Coordinate,
    passable: Callable[[TileType], bool],
    visited: Set[Coordinate],
) -> None:
    queue = deque([seed])
    visited.add(seed)
    while queue:
        head = queue.popleft()
        for coord in orthogonal_neighbors(head):
            if coord not in visited and passable(grid.tile(coord)):
                visited.add(coord)
                queue.append(coord)


def _single_component(
    grid: DiagramGrid,
    seeds: Iterable[Coordinate],
    passable: Callable[[TileType], bool],
) -> bool:
    visited: Set[Coordinate] = set()
    components = 0
    for seed in seeds:
        if seed in visited or not passable(grid.tile(seed)):
            continue
        components += 1
        if components > 1:
            return False
        _flood(grid, seed, passable, visited)
    return True


def _is_empty(tile: TileType) -> bool:
    return tile == TileType.EMPTY


def _is_open(tile: TileType) -> bool:
    return tile != TileType.WALL


def check_empty_connectivity(grid: DiagramGrid) -> bool:
    """All Empty tiles form one 4-connected region (vacuously true if none)."""

    return _single_component(grid, interior_coordinates(), _is_empty)


def check_fixed_connectivity(grid: DiagramGrid) -> bool:
    """All treasures and monsters share one region of non-Wall tiles.

    Safe to call on any partial state; the search uses it as a pruning signal.
    """

    return _single_component(grid, grid.treasures + grid.monsters, _is_open)
