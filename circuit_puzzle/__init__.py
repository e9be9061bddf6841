"""
Circuit path puzzle engine: rotate tiles until the start cell connects to the end cell.
"""

from .core import (
    Direction, TileType, Tile, Grid, Position,
    connectors_of, check_path, tiles_connect,
    ConnectivityAnalyzer, PathResult,
    GridValidator, ValidationResult
)
from .generators import GridGenerator, GridGeneratorConfig
from .solvers import RandomRotationSolver, SolverConfig, SolverResult, get_solver, solve
from .controller import PuzzleController, PuzzleSession, PuzzleMode

__version__ = "0.1.0"

__all__ = [
    'Direction', 'TileType', 'Tile', 'Grid', 'Position',
    'connectors_of', 'check_path', 'tiles_connect',
    'ConnectivityAnalyzer', 'PathResult',
    'GridValidator', 'ValidationResult',
    'GridGenerator', 'GridGeneratorConfig',
    'RandomRotationSolver', 'SolverConfig', 'SolverResult', 'get_solver', 'solve',
    'PuzzleController', 'PuzzleSession', 'PuzzleMode',
]
