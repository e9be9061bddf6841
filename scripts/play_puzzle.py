#!/usr/bin/env python3
"""
Play the circuit path puzzle in the terminal.

Usage:
    python scripts/play_puzzle.py
    python scripts/play_puzzle.py --size 5x5 --seed 7

Commands at the prompt:
    ROW COL   rotate the tile at (ROW, COL) clockwise
    s         show the solution / hide it and start a new puzzle
    n         new puzzle
    q         quit
"""

import asyncio
import click
import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from circuit_puzzle.controller import PuzzleController, PuzzleMode
from circuit_puzzle.core.utils import GridConverter
from circuit_puzzle.generators import GridGenerator, GridGeneratorConfig
from circuit_puzzle.solvers import RandomRotationSolver, SolverConfig


def show(controller: PuzzleController):
    click.echo()
    click.echo(GridConverter.to_string(controller.grid, controller.path))
    if controller.revealed:
        status = "solution shown" if controller.check_completion().completed else "best-effort layout shown"
    elif controller.mode == PuzzleMode.COMPLETED:
        status = "connected!"
    else:
        status = f"{len(controller.path)} cells on path" if controller.path else "not connected"
    click.echo(f"[{status}]")


@click.command()
@click.option('--size', '-s', type=str, default='7x7',
              help='Grid size (format: ROWSxCOLS)')
@click.option('--max-attempts', '-m', type=int, default=1000,
              help='Solver attempt budget for the solution view')
@click.option('--seed', type=int, default=None,
              help='Random seed for reproducibility')
def main(size, max_attempts, seed):
    """Rotate tiles until S connects to E."""
    try:
        rows, cols = map(int, size.lower().split('x'))
    except ValueError:
        click.echo(f"Error: Invalid size format '{size}' (use ROWSxCOLS)")
        sys.exit(1)

    controller = PuzzleController(
        rows, cols,
        generator=GridGenerator(GridGeneratorConfig(random_seed=seed)),
        solver=RandomRotationSolver(SolverConfig(max_attempts=max_attempts, random_seed=seed)),
    )
    show(controller)

    while True:
        command = click.prompt("move", default="", show_default=False).strip().lower()
        if command in ('q', 'quit', 'exit'):
            break
        elif command == 's':
            asyncio.run(controller.toggle_solution())
        elif command == 'n':
            controller.new_puzzle()
        else:
            try:
                row, col = map(int, command.replace(',', ' ').split())
            except ValueError:
                click.echo("Enter 'ROW COL', 's', 'n' or 'q'")
                continue
            before = controller.generation
            controller.rotate_tile(row, col)
            if controller.generation == before:
                click.echo("That tile cannot be rotated right now")
                continue
        show(controller)


if __name__ == '__main__':
    main()
