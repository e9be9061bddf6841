#!/usr/bin/env python3
"""
Script to measure how often the best-effort solver connects generated grids.

Usage:
    python scripts/run_benchmark.py --sizes 5x5 7x7 --puzzles 50
    python scripts/run_benchmark.py --suite quick
"""

import asyncio
import click
import sys
from pathlib import Path
import json
from datetime import datetime
from statistics import mean

from tqdm import tqdm

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from circuit_puzzle.generators import GridGenerator, GridGeneratorConfig
from circuit_puzzle.solvers import get_solver, SolverConfig


# Predefined benchmark suites
BENCHMARK_SUITES = {
    'quick': {
        'sizes': [(3, 3), (5, 5)],
        'puzzles': 20,
        'max_attempts': 1000,
    },
    'standard': {
        'sizes': [(3, 3), (5, 5), (7, 7)],
        'puzzles': 50,
        'max_attempts': 1000,
    },
    'budget': {
        'sizes': [(7, 7)],
        'puzzles': 50,
        'max_attempts': 20000,
    },
}


async def run_size(rows, cols, puzzles, max_attempts, seed, pbar):
    generator = GridGenerator(GridGeneratorConfig(random_seed=seed))
    solver = get_solver('random', SolverConfig(max_attempts=max_attempts, random_seed=seed))

    results = []
    for _ in range(puzzles):
        grid = generator.generate(rows, cols)
        result = await solver.solve(grid)
        results.append(result)
        pbar.update(1)

    successes = [r for r in results if r.success]
    return {
        'size': f"{rows}x{cols}",
        'puzzles': puzzles,
        'max_attempts': max_attempts,
        'success_rate': len(successes) / puzzles if puzzles else 0.0,
        'avg_attempts_when_solved': mean(r.attempts for r in successes) if successes else None,
        'avg_time': mean(r.solve_time for r in results) if results else 0.0,
    }


@click.command()
@click.option('--suite', type=click.Choice(list(BENCHMARK_SUITES)),
              help='Use predefined benchmark suite')
@click.option('--sizes', '-s', multiple=True,
              help='Grid sizes (format: ROWSxCOLS)')
@click.option('--puzzles', '-n', type=int, default=20,
              help='Number of puzzles per size')
@click.option('--max-attempts', '-m', type=int, default=1000,
              help='Solver attempt budget')
@click.option('--seed', type=int, default=None,
              help='Random seed for reproducibility')
@click.option('--output-dir', '-o', type=click.Path(), default='results/benchmarks',
              help='Output directory for results')
def main(suite, sizes, puzzles, max_attempts, seed, output_dir):
    """Benchmark solver success rates on generated grids."""

    if suite:
        settings = BENCHMARK_SUITES[suite]
        size_list = settings['sizes']
        puzzles = settings['puzzles']
        max_attempts = settings['max_attempts']
    else:
        try:
            size_list = [tuple(map(int, s.lower().split('x'))) for s in sizes] or [(5, 5)]
        except ValueError:
            click.echo("Error: sizes should look like ROWSxCOLS")
            sys.exit(1)

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    summaries = []
    with tqdm(total=len(size_list) * puzzles, desc="Running benchmarks") as pbar:
        for rows, cols in size_list:
            summaries.append(asyncio.run(run_size(rows, cols, puzzles, max_attempts, seed, pbar)))

    click.echo("\n" + "=" * 60)
    for summary in summaries:
        solved = summary['avg_attempts_when_solved']
        solved_text = f"{solved:.1f}" if solved is not None else "-"
        click.echo(f"{summary['size']:>7}: {summary['success_rate']:6.1%} connected, "
                   f"avg attempts {solved_text}, avg time {summary['avg_time']:.3f}s")
    click.echo("=" * 60)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    results_path = output_path / f"benchmark_{timestamp}.json"
    with open(results_path, 'w') as f:
        json.dump(summaries, f, indent=2)
    click.echo(f"\nResults saved to {results_path}")


if __name__ == '__main__':
    main()
