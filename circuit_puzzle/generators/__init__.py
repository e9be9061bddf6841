"""
Grid generators for the circuit path puzzle.
"""

from .grid_generator import GridGenerator, GridGeneratorConfig, CORNER_ROTATIONS

__all__ = [
    'GridGenerator', 'GridGeneratorConfig',
    'CORNER_ROTATIONS'
]
