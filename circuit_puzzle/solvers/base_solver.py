"""
Base solver class for circuit path puzzles.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List, Callable
from dataclasses import dataclass, field
from pathlib import Path
import time

import numpy as np

from .. import config
from ..core.grid import Grid
from ..core.validator import GridValidator
from ..core.utils import setup_logger, memory_usage


@dataclass
class SolverConfig:
    """Configuration for puzzle solvers"""
    max_attempts: int = config.SOLVER_MAX_ATTEMPTS
    yield_every: int = config.SOLVER_YIELD_EVERY
    verbose: bool = False
    log_file: Optional[Path] = None
    random_seed: Optional[int] = None

    # Algorithm-specific parameters
    extra_params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be non-negative, got {self.max_attempts}")
        if self.yield_every < 1:
            raise ValueError(f"yield_every must be at least 1, got {self.yield_every}")


@dataclass
class SolverResult:
    """Result from puzzle solver"""
    success: bool
    solution: Optional[Grid] = None
    solve_time: float = 0.0
    attempts: int = 0
    memory_used: float = 0.0  # MB
    message: str = ""
    stats: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self):
        status = "Success" if self.success else "Failed"
        return f"SolverResult({status}, time={self.solve_time:.2f}s, attempts={self.attempts})"


class BaseSolver(ABC):
    """Abstract base class for cooperative grid solvers"""

    def __init__(self, config: Optional[SolverConfig] = None):
        """Initialize solver with configuration."""
        self.config = config or SolverConfig()
        self.logger = setup_logger(
            self.__class__.__name__,
            self.config.log_file,
            "DEBUG" if self.config.verbose else "INFO"
        )
        self.rng = np.random.default_rng(self.config.random_seed)

        # Callbacks for monitoring progress
        self._progress_callbacks: List[Callable] = []

    def add_progress_callback(self, callback: Callable):
        """Register callback(attempts, current_grid, stats), called at every yield."""
        self._progress_callbacks.append(callback)

    async def solve(self, grid: Grid) -> SolverResult:
        """
        Search for a connected rotation assignment without mutating `grid`.

        Per-call state stays local and `_solve` reports its own attempt
        count, so overlapping calls on one solver are independent.
        """
        self.logger.debug(f"Starting {self.__class__.__name__} on {grid!r}")

        validation = GridValidator.validate_structure(grid)
        if not validation:
            return SolverResult(
                success=False,
                solution=grid.copy(),
                message=f"Invalid grid: {'; '.join(validation.errors)}"
            )

        start_time = time.perf_counter()
        initial_memory = memory_usage()

        try:
            result = await self._solve(grid.copy())

            result.solve_time = time.perf_counter() - start_time
            result.memory_used = memory_usage() - initial_memory

            if result.success:
                self.logger.info(f"Solved in {result.solve_time:.3f}s after {result.attempts} attempts")
            else:
                self.logger.warning(f"No connected layout found: {result.message}")

            return result

        except Exception as e:
            self.logger.error(f"Error during solving: {str(e)}", exc_info=True)
            return SolverResult(
                success=False,
                solution=grid.copy(),
                message=f"Solver error: {str(e)}",
                solve_time=time.perf_counter() - start_time
            )

    @abstractmethod
    async def _solve(self, grid: Grid) -> SolverResult:
        """Implement the specific search; `grid` is a private copy. Set `attempts` on the result."""
        pass

    def _call_progress_callbacks(self, attempts: int, current: Optional[Grid] = None,
                                 stats: Optional[Dict[str, Any]] = None):
        """Call all registered progress callbacks"""
        for callback in self._progress_callbacks:
            try:
                callback(attempts, current, stats or {})
            except Exception as e:
                self.logger.error(f"Error in progress callback: {e}")
