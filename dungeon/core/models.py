"""Data models supporting the diagram solver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Sequence, Tuple

from .constants import HASH_BASE, TileType


class Coordinate(NamedTuple):
    """A tile position in the padded grid; ``x`` is the row, ``y`` the column."""

    x: int
    y: int

    @property
    def hash_id(self) -> int:
        assert 0 <= self.x < HASH_BASE and 0 <= self.y < HASH_BASE, self
        return self.x * HASH_BASE + self.y


TileRow = Tuple[TileType, ...]
Diagram = Tuple[TileRow, ...]


@dataclass(frozen=True)
class Puzzle:
    """A parsed puzzle: wall projections plus the fixed 8x8 tile map."""

    row_projection: Tuple[int, ...]
    column_projection: Tuple[int, ...]
    tiles: Diagram

    @classmethod
    def from_values(
        cls,
        row_projection: Sequence[int],
        column_projection: Sequence[int],
        values: Sequence[Sequence[int]],
    ) -> "Puzzle":
        return cls(
            row_projection=tuple(int(v) for v in row_projection),
            column_projection=tuple(int(v) for v in column_projection),
            tiles=tuple(tuple(TileType(v) for v in row) for row in values),
        )
