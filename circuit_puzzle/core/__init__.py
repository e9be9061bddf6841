# circuit_puzzle/core/__init__.py
"""
Core data structures and utilities for the circuit path puzzle.
"""

from .tile import (
    Direction, TileType, Tile,
    BASE_CONNECTORS, ROTATIONS,
    connectors_of, normalize_rotation, rotation_facing
)
from .grid import Grid, Position, tile_glyph
from .connectivity import (
    ConnectivityAnalyzer, PathResult, BFS_ORDER,
    check_path, tiles_connect, direction_between
)
from .validator import GridValidator, ValidationResult
from .utils import setup_logger, timer, memory_usage, GridConverter

__all__ = [
    # Tiles
    'Direction', 'TileType', 'Tile',
    'BASE_CONNECTORS', 'ROTATIONS',
    'connectors_of', 'normalize_rotation', 'rotation_facing',

    # Grid
    'Grid', 'Position', 'tile_glyph',

    # Connectivity
    'ConnectivityAnalyzer', 'PathResult', 'BFS_ORDER',
    'check_path', 'tiles_connect', 'direction_between',

    # Validation
    'GridValidator', 'ValidationResult',

    # Utilities
    'setup_logger', 'timer', 'memory_usage', 'GridConverter'
]
