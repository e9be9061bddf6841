"""
Utility functions for the circuit path puzzle.
"""

import logging
import os
import time
from functools import wraps
from pathlib import Path
from typing import Iterable, Optional, Tuple

import numpy as np
import psutil

from .. import config
from .grid import Grid, Position, tile_glyph
from .tile import Tile, TileType


def setup_logger(name: str, log_file: Optional[Path] = None,
                 level: str = config.LOG_LEVEL) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Loggers are shared by name, so start from a clean slate
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATEFMT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def timer(func):
    """Decorator logging how long a method took on the instance's logger"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start_time

        if args and hasattr(args[0], 'logger'):
            args[0].logger.debug(f"{func.__name__} took {elapsed:.4f} seconds")
        else:
            logging.getLogger(func.__module__).debug(f"{func.__name__} took {elapsed:.4f} seconds")

        return result
    return wrapper


def memory_usage() -> float:
    """Get current memory usage in MB"""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


class GridConverter:
    """Convert grids between different representations"""

    @staticmethod
    def to_arrays(grid: Grid) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Split a grid into three (rows, cols) arrays: tile type codes,
        rotations in degrees and the boolean locked mask.
        """
        types = np.zeros((grid.rows, grid.cols), dtype=int)
        rotations = np.zeros((grid.rows, grid.cols), dtype=int)
        locked = np.zeros((grid.rows, grid.cols), dtype=bool)
        for pos, tile in grid.tiles():
            types[pos.row, pos.col] = int(tile.type)
            rotations[pos.row, pos.col] = tile.rotation
            locked[pos.row, pos.col] = tile.locked
        return types, rotations, locked

    @staticmethod
    def from_arrays(types: np.ndarray, rotations: np.ndarray,
                    start: Tuple[int, int], end: Tuple[int, int],
                    locked: Optional[np.ndarray] = None) -> Grid:
        """Build a grid from type, rotation and optional locked arrays"""
        if locked is None:
            locked = np.zeros(types.shape, dtype=bool)
        if types.shape != rotations.shape or types.shape != locked.shape:
            raise ValueError(f"Shape mismatch: {types.shape}, {rotations.shape}, {locked.shape}")
        rows, cols = types.shape
        tiles = [[Tile(TileType(int(types[r, c])), int(rotations[r, c]), bool(locked[r, c]))
                  for c in range(cols)] for r in range(rows)]
        return Grid(rows, cols, start, end, tiles)

    @staticmethod
    def with_rotations(grid: Grid, rotations: np.ndarray) -> Grid:
        """Copy of `grid` with every tile set to the matching rotation"""
        tiles = [[Tile(grid.tile(r, c).type, int(rotations[r, c]), grid.tile(r, c).locked)
                  for c in range(grid.cols)] for r in range(grid.rows)]
        return Grid(grid.rows, grid.cols, grid.start, grid.end, tiles)

    @staticmethod
    def to_string(grid: Grid, highlight: Optional[Iterable[Tuple[int, int]]] = None) -> str:
        """
        Render a grid with coordinates, marking highlighted cells with '*'.

        Args:
            grid: The grid to render
            highlight: Cells to mark, usually the connected path

        Returns:
            Multi-line string with a column header and row labels
        """
        marked = {Position(*p) for p in highlight} if highlight else set()
        width = len(str(grid.cols - 1))
        header = ' ' * (len(str(grid.rows - 1)) + 1) + ''.join(
            f"{c:>{width}} " for c in range(grid.cols))
        lines = [header.rstrip()]
        for r in range(grid.rows):
            cells = []
            for c in range(grid.cols):
                glyph = tile_glyph(grid.tile(r, c))
                mark = '*' if (r, c) in marked else ' '
                cells.append(f"{glyph:>{width}}{mark}")
            lines.append(f"{r:>{len(str(grid.rows - 1))}} " + ''.join(cells).rstrip())
        return '\n'.join(lines)
