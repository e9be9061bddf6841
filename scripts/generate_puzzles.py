#!/usr/bin/env python3
"""
Script to generate circuit path puzzles.

Usage:
    python scripts/generate_puzzles.py --count 10 --size 7x7
    python scripts/generate_puzzles.py --batch 5x5:10 7x7:10 10x10:5
    python scripts/generate_puzzles.py --size 7x7 --unscrambled --seed 42
"""

import click
import sys
from pathlib import Path
from datetime import datetime
import json
from statistics import mean

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from circuit_puzzle.core.validator import GridValidator
from circuit_puzzle.generators import GridGenerator, GridGeneratorConfig


def parse_size(size: str):
    """Parse ROWSxCOLS"""
    rows, cols = map(int, size.lower().split('x'))
    return rows, cols


def summarize(batch_stats):
    """Average the connection-graph statistics of one batch"""
    if not batch_stats:
        return {}
    return {
        'connected': sum(1 for s in batch_stats if s['is_connected']),
        'avg_connections': mean(s['num_connections'] for s in batch_stats),
        'avg_components': mean(s['num_components'] for s in batch_stats),
        'avg_start_component_size': mean(s['start_component_size'] for s in batch_stats),
        'avg_open_connectors': mean(s['open_connectors'] for s in batch_stats),
    }


@click.command()
@click.option('--count', '-n', type=int, default=10,
              help='Number of puzzles to generate')
@click.option('--size', '-s', type=str, default='7x7',
              help='Grid size (format: ROWSxCOLS)')
@click.option('--batch', '-b', multiple=True,
              help='Batch generation (format: ROWSxCOLS:COUNT)')
@click.option('--output-dir', '-o', type=click.Path(), default='data/puzzles',
              help='Output directory for puzzles')
@click.option('--unscrambled', is_flag=True,
              help='Save the solved layout instead of the scrambled one')
@click.option('--seed', type=int, default=None,
              help='Random seed for reproducibility')
@click.option('--show', is_flag=True,
              help='Print every generated grid')
def main(count, size, batch, output_dir, unscrambled, seed, show):
    """Generate circuit path puzzles and save them as JSON."""

    click.echo("=" * 60)
    click.echo("Circuit Path Puzzle Generator")
    click.echo("=" * 60)

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    generator = GridGenerator(GridGeneratorConfig(
        scramble=not unscrambled,
        random_seed=seed
    ))

    # Determine what to generate
    generation_tasks = []

    if batch:
        click.echo("\nBatch generation:")
        for spec in batch:
            try:
                size_str, count_str = spec.split(':')
                rows, cols = parse_size(size_str)
                num = int(count_str)
            except ValueError as e:
                click.echo(f"Error parsing batch spec '{spec}': {e}")
                click.echo("Format should be ROWSxCOLS:COUNT")
                sys.exit(1)
            generation_tasks.append((rows, cols, num))
            click.echo(f"  - {num} puzzles at {rows}x{cols}")
    else:
        try:
            rows, cols = parse_size(size)
        except ValueError:
            click.echo(f"Error: Invalid size format '{size}' (use ROWSxCOLS)")
            sys.exit(1)
        generation_tasks.append((rows, cols, count))
        click.echo(f"\nGenerating {count} puzzles at {rows}x{cols}")

    total_puzzles = sum(num for _, _, num in generation_tasks)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    already_connected = 0
    generated = []
    summaries = []

    with click.progressbar(length=total_puzzles, label='Generating puzzles') as bar:
        for rows, cols, num in generation_tasks:
            config_dir = output_path / f"{rows}x{cols}"
            config_dir.mkdir(exist_ok=True)

            batch_stats = []
            for i in range(num):
                try:
                    grid = generator.generate(rows, cols)
                except ValueError as e:
                    click.echo(f"\nError: {e}")
                    sys.exit(1)

                validation = GridValidator.validate_structure(grid)
                if not validation:
                    click.echo(f"\nGenerated invalid grid: {'; '.join(validation.errors)}")
                    sys.exit(1)

                stats = GridValidator.get_grid_statistics(grid)
                batch_stats.append(stats)
                if stats['is_connected']:
                    already_connected += 1

                puzzle_id = f"{rows}x{cols}_{timestamp}_{i:04d}"
                grid.save(config_dir / f"{puzzle_id}.json")
                generated.append((puzzle_id, grid))
                bar.update(1)

            batch_info = {
                'rows': rows,
                'cols': cols,
                'count': num,
                'timestamp': timestamp,
                'scrambled': not unscrambled,
                'seed': seed,
                'statistics': summarize(batch_stats),
            }
            with open(config_dir / f"batch_info_{timestamp}.json", 'w') as f:
                json.dump(batch_info, f, indent=2)
            summaries.append((rows, cols, batch_info['statistics']))

    if show:
        for puzzle_id, grid in generated:
            click.echo(f"\n{puzzle_id}")
            click.echo(str(grid))

    click.echo(f"\nGeneration complete!")
    click.echo(f"Generated {len(generated)} puzzles ({already_connected} already connected)")
    for rows, cols, stats in summaries:
        if stats:
            click.echo(f"  {rows}x{cols}: {stats['avg_components']:.1f} components, "
                       f"start component {stats['avg_start_component_size']:.1f} cells, "
                       f"{stats['avg_open_connectors']:.1f} open connectors on average")
    click.echo(f"Puzzles saved to: {output_path}")


if __name__ == '__main__':
    main()
