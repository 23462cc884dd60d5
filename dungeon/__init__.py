"""Solver for dungeon diagram puzzles.

A puzzle gives the number of walls in every row and column of an 8x8 board
plus fixed treasure and monster tiles; the solver places the walls so that
treasures sit in walled 3x3 rooms, monsters sit in dead ends and the open
tiles form one-tile-wide connected hallways.

This package exposes the public API surface via:

- ``dungeon.engine.solver.DiagramSolver``: runs the pre-check and the search.
- ``dungeon.io.puzzle_file.load_puzzle``: reads and validates puzzle files.
- ``dungeon.utils.pretty.render_ascii``: renders a solved diagram.
"""

from .core.models import Puzzle
from .engine.solver import DiagramSolver, SolveResult, SolverConfig, SolveStatus
from .io.puzzle_file import load_puzzle, parse_puzzle_text
from .utils.pretty import render_ascii

__all__ = [
    "DiagramSolver",
    "Puzzle",
    "SolveResult",
    "SolveStatus",
    "SolverConfig",
    "load_puzzle",
    "parse_puzzle_text",
    "render_ascii",
]

__version__ = "0.1.0"
