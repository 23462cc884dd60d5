"""Puzzle file parsing.

A puzzle file holds ten non-empty lines of eight whitespace separated
integers: the row projection, the column projection, then the 8x8 tile map
(0 empty, 1 treasure, 2 monster, 3 wall). Blank lines are ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..core.constants import MAX_PROJECTION, RAW_SIDE_LENGTH, TileType
from ..core.exceptions import PuzzleFormatError
from ..core.models import Puzzle
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

EXPECTED_LINES = RAW_SIDE_LENGTH + 2
MAX_TILE_VALUE = max(TileType)


def load_puzzle(path: Path | str) -> Puzzle:
    path = Path(path)
    if not path.exists():
        raise PuzzleFormatError(f'File "{path}" doesn\'t exist')
    if not path.is_file():
        raise PuzzleFormatError(f'File "{path}" isn\'t readable')
    LOGGER.debug("Reading puzzle from %s", path)
    return parse_puzzle_text(path.read_text(encoding="utf-8"), source=str(path))


def parse_puzzle_text(text: str, source: str = "<string>") -> Puzzle:
    rows: List[List[int]] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped:
            continue

        tokens = stripped.split()
        if len(tokens) != RAW_SIDE_LENGTH:
            relation = "fewer" if len(tokens) < RAW_SIDE_LENGTH else "more"
            raise PuzzleFormatError(
                f'File "{source}" has {len(tokens)} numbers, {relation} than '
                f"{RAW_SIDE_LENGTH}, at line {line_number}"
            )

        upper = MAX_PROJECTION if len(rows) < 2 else MAX_TILE_VALUE
        try:
            values = [int(token) for token in tokens]
        except ValueError:
            raise PuzzleFormatError(
                f'File "{source}" contains a non-integer value at line {line_number}'
            ) from None
        if any(value < 0 or value > upper for value in values):
            raise PuzzleFormatError(
                f'File "{source}" contains an illegal value at line {line_number}'
            )
        rows.append(values)

    if len(rows) != EXPECTED_LINES:
        relation = "fewer" if len(rows) < EXPECTED_LINES else "more"
        raise PuzzleFormatError(
            f'File "{source}" has {len(rows)} non-empty lines, {relation} than {EXPECTED_LINES}'
        )

    return Puzzle.from_values(rows[0], rows[1], rows[2:])
