"""Shared constants and enumerations for the diagram solver."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class TileType(int, Enum):
    """All supported tile types. Values match the puzzle file encoding."""

    EMPTY = 0
    TREASURE = 1
    MONSTER = 2
    WALL = 3


RAW_SIDE_LENGTH = 8
SIDE_LENGTH = RAW_SIDE_LENGTH + 2
MAX_PROJECTION = RAW_SIDE_LENGTH

ROOM_SIZE = 3
# One ring tile stays open as the room's door.
ROOM_RING_WALLS = 11
DEAD_END_WALLS = 3

# Coordinate hash ids are ``x * HASH_BASE + y``.
HASH_BASE = 100

# (dx, dy) in the order left, down, right, up; the search tries doors in this order.
ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

TILE_SYMBOLS: Dict[TileType, str] = {
    TileType.EMPTY: "-",
    TileType.TREASURE: "T",
    TileType.MONSTER: "M",
    TileType.WALL: "#",
}
SYMBOL_TILES: Dict[str, TileType] = {symbol: tile for tile, symbol in TILE_SYMBOLS.items()}
