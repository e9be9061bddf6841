#!/usr/bin/env python3
"""
Script to solve a single circuit path puzzle.

Usage:
    python scripts/run_solver.py puzzle.json --max-attempts 5000
    python scripts/run_solver.py --generate 7x7 --seed 3 --verbose
"""

import asyncio
import click
import sys
from pathlib import Path
import json

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from circuit_puzzle.core.grid import Grid
from circuit_puzzle.core.connectivity import check_path
from circuit_puzzle.core.validator import GridValidator
from circuit_puzzle.core.utils import GridConverter, setup_logger
from circuit_puzzle.generators import GridGenerator, GridGeneratorConfig
from circuit_puzzle.solvers import get_solver, SolverConfig


@click.command()
@click.argument('puzzle_file', required=False, type=click.Path())
@click.option('--algorithm', '-a', type=click.Choice(['random']), default='random',
              help='Solving algorithm to use')
@click.option('--max-attempts', '-m', type=int, default=1000,
              help='Number of layouts to try before giving up')
@click.option('--yield-every', type=int, default=25,
              help='Attempts between suspension points')
@click.option('--generate', '-g', type=str,
              help='Generate puzzle instead (format: ROWSxCOLS)')
@click.option('--seed', type=int, default=None,
              help='Random seed for generation and search')
@click.option('--save-solution', '-s', type=click.Path(),
              help='Save solution to file')
@click.option('--verbose', is_flag=True, help='Enable verbose output')
def main(puzzle_file, algorithm, max_attempts, yield_every, generate, seed,
         save_solution, verbose):
    """Solve a circuit path puzzle with the best-effort solver."""

    logger = setup_logger("PuzzleSolver", level="DEBUG" if verbose else "INFO")

    if generate:
        try:
            rows, cols = map(int, generate.lower().split('x'))
        except ValueError:
            click.echo("Error: Generate format should be ROWSxCOLS (e.g., 7x7)")
            sys.exit(1)
        grid = GridGenerator(GridGeneratorConfig(random_seed=seed)).generate(rows, cols)
    elif puzzle_file:
        puzzle_path = Path(puzzle_file)
        if not puzzle_path.exists():
            click.echo(f"Error: Puzzle file '{puzzle_file}' not found")
            sys.exit(1)
        try:
            grid = Grid.load(puzzle_path)
            logger.info(f"Loaded puzzle from {puzzle_path}")
        except (ValueError, KeyError, json.JSONDecodeError) as e:
            click.echo(f"Error loading puzzle: {e}")
            sys.exit(1)
    else:
        click.echo("Error: Either provide a puzzle file or use --generate")
        sys.exit(1)

    validation = GridValidator.validate_structure(grid)
    if not validation:
        click.echo(f"Error: Invalid puzzle - {'; '.join(validation.errors)}")
        sys.exit(1)

    click.echo("\nPuzzle:")
    click.echo(GridConverter.to_string(grid, check_path(grid).path))

    solver = get_solver(algorithm, SolverConfig(
        max_attempts=max_attempts,
        yield_every=yield_every,
        verbose=verbose,
        random_seed=seed
    ))

    if verbose:
        def progress_callback(attempts, current, stats):
            if stats.get('yields', 0) % 10 == 0:
                logger.debug(f"Attempt {attempts}: {stats}")

        solver.add_progress_callback(progress_callback)

    result = asyncio.run(solver.solve(grid))

    click.echo("\n" + "=" * 50)
    click.echo(f"Algorithm: {algorithm}")
    click.echo(f"Status: {'SUCCESS' if result.success else 'BEST EFFORT'}")
    click.echo(f"Time: {result.solve_time:.3f} seconds")
    click.echo(f"Attempts: {result.attempts}")
    click.echo(f"Memory: {result.memory_used:.1f} MB")
    if result.message:
        click.echo(f"Message: {result.message}")
    if result.stats:
        click.echo(f"Additional stats: {json.dumps(result.stats, indent=2)}")
    click.echo("=" * 50 + "\n")

    outcome = check_path(result.solution)
    click.echo("Result:")
    click.echo(GridConverter.to_string(result.solution, outcome.path))

    if save_solution:
        save_path = Path(save_solution)
        result.solution.save(save_path)
        click.echo(f"\nSolution saved to {save_path}")


if __name__ == '__main__':
    main()
