"""
Tests for the cooperative random rotation solver.
"""

import asyncio

import pytest

from circuit_puzzle.core.connectivity import check_path
from circuit_puzzle.core.grid import Grid
from circuit_puzzle.core.tile import Tile, TileType
from circuit_puzzle.solvers import (
    SOLVER_REGISTRY, RandomRotationSolver, SolverConfig, SolverResult, get_solver, solve
)


def run(coro):
    return asyncio.run(coro)


class TestSolveFunction:
    """Tests for the module-level solve coroutine"""

    def test_empty_interior_gives_up_without_raising(self, empty_grid):
        result = run(solve(empty_grid, max_attempts=1000, random_seed=0))
        assert isinstance(result, Grid)
        assert check_path(result).completed is False

    def test_input_grid_is_untouched(self, seeded_generator):
        grid = seeded_generator.generate(5, 5)
        before = grid.copy()
        run(solve(grid, max_attempts=200, random_seed=1))
        assert grid == before

    def test_finds_a_layout_for_short_route(self, seeded_generator):
        grid = seeded_generator.generate(1, 3)
        result = run(solve(grid, max_attempts=2000, random_seed=3))
        assert check_path(result).completed
        assert result.start == grid.start
        assert result.end == grid.end

    def test_solution_only_changes_rotations(self, seeded_generator):
        grid = seeded_generator.generate(4, 4)
        result = run(solve(grid, max_attempts=50, random_seed=5))
        for pos, tile in grid.tiles():
            assert result.tile(*pos).type == tile.type

    def test_zero_attempts_returns_copy(self, broken_line):
        result = run(solve(broken_line, max_attempts=0))
        assert result == broken_line
        assert result is not broken_line


class TestCooperativeYielding:
    """The search hands control back to the event loop"""

    def test_other_tasks_run_while_solving(self, empty_grid):
        ticks = 0

        async def ticker(stop):
            nonlocal ticks
            while not stop.is_set():
                ticks += 1
                await asyncio.sleep(0)

        async def main():
            stop = asyncio.Event()
            tick_task = asyncio.create_task(ticker(stop))
            result = await solve(empty_grid, max_attempts=1000, yield_every=25)
            stop.set()
            await tick_task
            return result

        run(main())
        assert ticks > 0

    def test_yields_once_per_batch(self, empty_grid):
        solver = RandomRotationSolver(SolverConfig(max_attempts=1000, yield_every=25, random_seed=0))
        seen = []
        solver.add_progress_callback(lambda attempts, grid, stats: seen.append(stats['attempt']))

        result = run(solver.solve(empty_grid))
        assert seen == list(range(0, 1000, 25))
        assert result.stats['yields'] == 40
        assert result.attempts == 1000

    def test_overlapping_solves_keep_separate_counts(self, empty_grid):
        solver = RandomRotationSolver(SolverConfig(max_attempts=100, yield_every=5, random_seed=0))

        async def main():
            first = asyncio.create_task(solver.solve(empty_grid))
            await asyncio.sleep(0)
            second = asyncio.create_task(solver.solve(empty_grid))
            return await asyncio.gather(first, second)

        first, second = run(main())
        assert first.attempts == 100
        assert second.attempts == 100
        assert first.stats['yields'] == 20
        assert second.stats['yields'] == 20

    def test_progress_reports_attempts_so_far(self, empty_grid):
        solver = RandomRotationSolver(SolverConfig(max_attempts=30, yield_every=10))
        counts = []
        solver.add_progress_callback(lambda attempts, grid, stats: counts.append(attempts))
        run(solver.solve(empty_grid))
        assert counts == [0, 10, 20]

    def test_always_suspends_at_least_once(self, connected_line):
        solver = RandomRotationSolver(SolverConfig(max_attempts=1, yield_every=100))
        result = run(solver.solve(connected_line))
        assert result.stats['yields'] == 1


class TestSolverResult:
    """Tests for the result wrapper"""

    def test_failure_result(self, empty_grid):
        solver = RandomRotationSolver(SolverConfig(max_attempts=10, random_seed=0))
        result = run(solver.solve(empty_grid))
        assert isinstance(result, SolverResult)
        assert not result.success
        assert result.attempts == 10
        assert "Gave up after 10 attempts" in result.message
        assert result.solve_time >= 0
        assert "Failed" in repr(result)

    def test_success_result(self, seeded_generator):
        grid = seeded_generator.generate(1, 3)
        solver = RandomRotationSolver(SolverConfig(max_attempts=2000, random_seed=8))
        result = run(solver.solve(grid))
        assert result.success
        assert check_path(result.solution).completed
        assert result.stats['path_length'] == 3
        assert 1 <= result.attempts <= 2000

    def test_locked_tiles_keep_rotation(self):
        grid = Grid(1, 3, (0, 0), (0, 2), [[
            Tile(TileType.START, 0),
            Tile(TileType.STRAIGHT, 90, locked=True),
            Tile(TileType.END, 180),
        ]])
        solver = RandomRotationSolver(SolverConfig(max_attempts=100, random_seed=2))
        result = run(solver.solve(grid))
        assert not result.success
        assert result.solution.tile(0, 1) == Tile(TileType.STRAIGHT, 90, locked=True)

    def test_invalid_structure_is_reported(self):
        grid = Grid(1, 3, (0, 0), (0, 2), [[
            Tile(TileType.START, 0),
            Tile(TileType.START, 0),
            Tile(TileType.END, 180),
        ]])
        result = run(RandomRotationSolver().solve(grid))
        assert not result.success
        assert result.message.startswith("Invalid grid")
        assert result.solution == grid

    def test_failing_callback_does_not_stop_search(self, empty_grid):
        solver = RandomRotationSolver(SolverConfig(max_attempts=30, yield_every=10))

        def explode(attempts, grid, stats):
            raise RuntimeError("boom")

        solver.add_progress_callback(explode)
        result = run(solver.solve(empty_grid))
        assert result.attempts == 30


class TestSolverConfig:
    """Tests for configuration and the registry"""

    def test_defaults(self):
        cfg = SolverConfig()
        assert cfg.max_attempts == 1000
        assert cfg.yield_every == 25

    @pytest.mark.parametrize("kwargs", [{'max_attempts': -1}, {'yield_every': 0}])
    def test_rejects_bad_values(self, kwargs):
        with pytest.raises(ValueError):
            SolverConfig(**kwargs)

    def test_get_solver(self):
        solver = get_solver('Random', SolverConfig(max_attempts=5))
        assert isinstance(solver, RandomRotationSolver)
        assert solver.config.max_attempts == 5
        assert 'random' in SOLVER_REGISTRY

    def test_unknown_solver(self):
        with pytest.raises(ValueError):
            get_solver('annealing')
