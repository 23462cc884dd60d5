"""Solve orchestration: optional CP-SAT pre-check, then backtracking search."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..core.models import Diagram, Puzzle
from ..utils.logger import get_logger
from .feasibility import projections_feasible
from .grid import DiagramGrid, strip_border
from .search import BacktrackingSearch, SearchOutcome
from .validator import DiagramValidator


LOGGER = get_logger(__name__)


@dataclass
class SolverConfig:
    precheck: bool = True
    precheck_timeout_seconds: float = 10.0


class SolveStatus(str, Enum):
    SOLVED = "SOLVED"
    NO_SOLUTION = "NO_SOLUTION"


@dataclass
class SolveResult:
    status: SolveStatus
    grid: Optional[Diagram] = None
    elapsed_seconds: float = 0.0
    nodes_explored: int = 0
    validation_messages: List[str] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.status == SolveStatus.SOLVED

    @property
    def interior(self) -> Optional[Diagram]:
        """The solved 8x8 tiles without the wall border."""

        if self.grid is None:
            return None
        return strip_border(self.grid)


class DiagramSolver:
    """High-level entrypoint: one fresh grid and search per :meth:`solve` call."""

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        validator: Optional[DiagramValidator] = None,
    ) -> None:
        self.config = config or SolverConfig()
        self.validator = validator or DiagramValidator()

    def solve(self, puzzle: Puzzle) -> SolveResult:
        start = time.perf_counter()

        if self.config.precheck and not projections_feasible(
            puzzle, timeout_seconds=self.config.precheck_timeout_seconds
        ):
            elapsed = time.perf_counter() - start
            LOGGER.info("No solution: rejected by pre-check in %.2fs", elapsed)
            return SolveResult(
                status=SolveStatus.NO_SOLUTION,
                elapsed_seconds=elapsed,
                validation_messages=["Projections are infeasible"],
            )

        grid = DiagramGrid(puzzle)
        search = BacktrackingSearch(grid, self.validator)
        outcome = search.run()
        elapsed = time.perf_counter() - start

        if outcome is not SearchOutcome.SOLVED or search.solution is None:
            LOGGER.info(
                "No solution found in %.2fs (%d nodes)", elapsed, search.stats.nodes
            )
            return SolveResult(
                status=SolveStatus.NO_SOLUTION,
                elapsed_seconds=elapsed,
                nodes_explored=search.stats.nodes,
                validation_messages=["Search space exhausted"],
            )

        LOGGER.info("Solution found in %.2fs (%d nodes)", elapsed, search.stats.nodes)
        return SolveResult(
            status=SolveStatus.SOLVED,
            grid=search.solution,
            elapsed_seconds=elapsed,
            nodes_explored=search.stats.nodes,
        )
