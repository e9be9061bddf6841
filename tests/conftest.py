"""
Shared fixtures for the circuit path puzzle tests.
"""

import pytest

from circuit_puzzle.core.grid import Grid
from circuit_puzzle.core.tile import Tile, TileType
from circuit_puzzle.generators import GridGenerator, GridGeneratorConfig


def line_grid(end_rotation: int) -> Grid:
    """1x2 grid: Start at (0,0) facing east, End at (0,1) with the given rotation"""
    return Grid(1, 2, (0, 0), (0, 1), [[
        Tile(TileType.START, 0),
        Tile(TileType.END, end_rotation),
    ]])


class FixedGenerator:
    """Generator stand-in that always hands out copies of one grid"""

    def __init__(self, grid: Grid):
        self.grid = grid
        self.calls = 0

    def generate(self, rows=None, cols=None, start=None, end=None) -> Grid:
        self.calls += 1
        return self.grid.copy()


@pytest.fixture
def connected_line():
    return line_grid(180)


@pytest.fixture
def broken_line():
    return line_grid(0)


@pytest.fixture
def empty_grid():
    """3x3 grid where every cell but start and end is Empty"""
    return Grid(3, 3)


@pytest.fixture
def seeded_generator():
    return GridGenerator(GridGeneratorConfig(random_seed=1234))
