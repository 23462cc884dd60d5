"""ASCII rendering helpers for diagrams."""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence

from ..core.constants import SYMBOL_TILES, TILE_SYMBOLS, TileType
from ..core.exceptions import PuzzleFormatError
from ..core.models import Diagram


def render_ascii(tiles: Sequence[Sequence[TileType]], include_border: bool = False) -> str:
    """Render a padded 10x10 diagram, one row per line.

    The wall border is dropped unless ``include_border`` is set.
    """

    rows = tiles if include_border else [row[1:-1] for row in tiles[1:-1]]
    return "\n".join("".join(TILE_SYMBOLS[TileType(tile)] for tile in row) for row in rows)


def tiles_from_ascii(text: str) -> Diagram:
    """Parse rendered rows back into tiles. Blank lines are ignored."""

    rows: List[tuple] = []
    for line in text.strip().splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            rows.append(tuple(SYMBOL_TILES[symbol] for symbol in line))
        except KeyError as exc:
            raise PuzzleFormatError(f"Unknown tile symbol {exc.args[0]!r}") from None
    return tuple(rows)


def format_grid(
    tiles: Sequence[Sequence[TileType]],
    row_projection: Optional[Sequence[int]] = None,
    column_projection: Optional[Sequence[int]] = None,
) -> str:
    """Render an unpadded diagram with its projections along the edges."""

    lines: List[str] = []
    if column_projection is not None:
        lines.append("  " + " ".join(str(value) for value in column_projection))
    for r, row in enumerate(tiles):
        cells = " ".join(TILE_SYMBOLS[TileType(tile)] for tile in row)
        prefix = f"{row_projection[r]} " if row_projection is not None else ""
        lines.append(prefix + cells)
    return "\n".join(lines)


def pretty_print_grid(
    tiles: Sequence[Sequence[TileType]],
    row_projection: Optional[Sequence[int]] = None,
    column_projection: Optional[Sequence[int]] = None,
    *,
    label: str | None = None,
    stream=None,
) -> None:
    """Print an unpadded diagram in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(tiles, row_projection, column_projection), file=stream)
