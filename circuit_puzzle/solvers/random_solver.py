"""
Randomized rotation search for circuit path puzzles.
"""

import asyncio
from typing import Optional

from .. import config
from ..core.connectivity import ConnectivityAnalyzer
from ..core.grid import Grid
from ..core.utils import GridConverter
from .base_solver import BaseSolver, SolverConfig, SolverResult


class RandomRotationSolver(BaseSolver):
    """
    Best-effort solver: draws a uniformly random rotation for every tile,
    Start and End included, until the start and end cells connect or the
    attempt budget runs out.

    The search suspends at the start of every batch of `yield_every`
    attempts so an event loop stays responsive while it runs. Locked tiles
    keep their rotation.
    """

    async def _solve(self, grid: Grid) -> SolverResult:
        max_attempts = self.config.max_attempts
        yield_every = self.config.yield_every

        _, current_rotations, locked = GridConverter.to_arrays(grid)
        candidate = grid
        attempts = 0
        yields = 0

        for attempt in range(max_attempts):
            if attempt % yield_every == 0:
                await asyncio.sleep(0)
                yields += 1
                self._call_progress_callbacks(attempts, candidate, {'attempt': attempt, 'yields': yields})

            rotations = self.rng.integers(0, 4, size=(grid.rows, grid.cols)) * 90
            rotations[locked] = current_rotations[locked]
            candidate = GridConverter.with_rotations(grid, rotations)
            attempts += 1

            result = ConnectivityAnalyzer.check_path(candidate)
            if result.completed:
                return SolverResult(
                    success=True,
                    solution=candidate,
                    attempts=attempts,
                    message=f"Connected on attempt {attempts}",
                    stats={'yields': yields, 'path_length': len(result.path)}
                )

        return SolverResult(
            success=False,
            solution=candidate,
            attempts=attempts,
            message=f"Gave up after {max_attempts} attempts; returning last layout tried",
            stats={'yields': yields}
        )


async def solve(grid: Grid, max_attempts: int = config.SOLVER_MAX_ATTEMPTS,
                yield_every: int = config.SOLVER_YIELD_EVERY,
                random_seed: Optional[int] = None) -> Grid:
    """
    Search for a rotation assignment that connects start and end.

    Returns the first connected layout found, or the last one tried when
    `max_attempts` runs out. Check the result with `check_path` before
    treating it as solved. The input grid is left untouched.
    """
    solver = RandomRotationSolver(SolverConfig(
        max_attempts=max_attempts,
        yield_every=yield_every,
        random_seed=random_seed
    ))
    result = await solver.solve(grid)
    return result.solution
