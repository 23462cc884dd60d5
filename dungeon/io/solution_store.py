"""Result file store.

A solved puzzle is written as its ASCII diagram under the puzzle's file
name inside ``output/``. Every attempt, solved or not, also gets a JSON
document ``<stem>.json`` next to it with the projections, timing and grid.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..core.models import Diagram
from ..utils.logger import get_logger
from ..utils.pretty import render_ascii

if TYPE_CHECKING:
    from ..core.models import Puzzle
    from ..engine.solver import SolveResult


LOGGER = get_logger(__name__)

DEFAULT_OUTPUT_DIR = Path("output")


class SolutionStore:
    """Save solver results as text diagrams and JSON documents."""

    def __init__(self, output_dir: Path | str = DEFAULT_OUTPUT_DIR) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------
    def save_success(self, name: str, puzzle: "Puzzle", result: "SolveResult") -> Path:
        """Write the diagram and its JSON document; return the diagram path."""

        if result.grid is None:
            raise ValueError("Cannot save a result without a grid")
        diagram_path = self.output_dir / Path(name).name
        diagram_path.write_text(render_ascii(result.grid), encoding="utf-8")
        self._write_document(name, self._document("success", puzzle, result))
        LOGGER.info("Solution saved: %s", diagram_path)
        return diagram_path

    def save_failure(self, name: str, puzzle: "Puzzle", result: "SolveResult") -> Path:
        """Write only the JSON document for an unsolved puzzle."""

        path = self._write_document(name, self._document("failed", puzzle, result))
        LOGGER.info("Failure saved: %s", path)
        return path

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------
    def _write_document(self, name: str, doc: Dict[str, Any]) -> Path:
        path = self.output_dir / f"{Path(name).stem}.json"
        path.write_text(json.dumps(doc, indent=2), encoding="utf-8")
        return path

    def _document(self, status: str, puzzle: "Puzzle", result: "SolveResult") -> Dict[str, Any]:
        return {
            "created_at": datetime.now(timezone.utc).isoformat(),
            "status": status,
            "row_projection": list(puzzle.row_projection),
            "column_projection": list(puzzle.column_projection),
            "puzzle": self._rows(puzzle.tiles),
            "solution": self._rows(result.interior),
            "elapsed_seconds": round(result.elapsed_seconds, 4),
            "nodes_explored": result.nodes_explored,
            "messages": list(result.validation_messages),
        }

    @staticmethod
    def _rows(tiles: Optional[Diagram]) -> Optional[List[List[int]]]:
        if tiles is None:
            return None
        return [[int(tile) for tile in row] for row in tiles]
