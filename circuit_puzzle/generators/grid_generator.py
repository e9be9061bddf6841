"""
Grid generator for circuit path puzzles.
"""

from typing import Dict, List, Optional, Tuple

import numpy as np

from .. import config
from ..core.grid import Grid, Position
from ..core.tile import Direction, Tile, TileType, rotation_facing
from ..core.utils import setup_logger, timer


# Corner rotation for each bend of the L-route, keyed by
# (horizontal leg heads east, vertical leg heads south)
CORNER_ROTATIONS: Dict[Tuple[bool, bool], int] = {
    (True, True): 180,    # entered from the west, leaves south
    (True, False): 270,   # entered from the west, leaves north
    (False, True): 90,    # entered from the east, leaves south
    (False, False): 0,    # entered from the east, leaves north
}

FILL_TYPES = {
    'straight': TileType.STRAIGHT,
    'corner': TileType.CORNER,
    't_junction': TileType.T_JUNCTION,
    'cross': TileType.CROSS,
}


class GridGeneratorConfig:
    """Configuration for grid generator"""

    def __init__(self, **kwargs):
        self.tile_weights: Dict[str, float] = kwargs.get('tile_weights', dict(config.TILE_WEIGHTS))
        self.scramble: bool = kwargs.get('scramble', True)
        self.scramble_fraction: Tuple[float, float] = kwargs.get('scramble_fraction', config.SCRAMBLE_FRACTION)
        self.scramble_turns: Tuple[int, int] = kwargs.get('scramble_turns', config.SCRAMBLE_TURNS)
        self.random_seed: Optional[int] = kwargs.get('random_seed', None)

        unknown = set(self.tile_weights) - set(FILL_TYPES)
        if unknown:
            raise ValueError(f"Unknown tile types in weights: {sorted(unknown)}")
        low, high = self.scramble_fraction
        if not 0.0 <= low <= high <= 1.0:
            raise ValueError(f"Invalid scramble fraction range: {self.scramble_fraction}")
        low, high = self.scramble_turns
        if not 1 <= low <= high <= 3:
            raise ValueError(f"Invalid scramble turn range: {self.scramble_turns}")


class GridGenerator:
    """Generate circuit path grids that start from a solvable layout"""

    def __init__(self, config: Optional[GridGeneratorConfig] = None):
        self.config = config or GridGeneratorConfig()
        self.logger = setup_logger(self.__class__.__name__)
        self.rng = np.random.default_rng(self.config.random_seed)

        names = list(self.config.tile_weights)
        weights = np.array([self.config.tile_weights[n] for n in names], dtype=float)
        self._fill_types = [FILL_TYPES[n] for n in names]
        self._fill_probs = weights / weights.sum()

    @timer
    def generate(self, rows: int = config.DEFAULT_ROWS, cols: int = config.DEFAULT_COLS,
                 start: Optional[Tuple[int, int]] = None,
                 end: Optional[Tuple[int, int]] = None) -> Grid:
        """
        Generate a puzzle grid.

        Args:
            rows: Number of rows
            cols: Number of columns
            start: Start cell, defaults to the top-left corner
            end: End cell, defaults to the bottom-right corner

        Returns:
            A grid built around a start-to-end route, then scrambled
            unless the config disables scrambling.
        """
        grid = self.build_solved(rows, cols, start, end)
        if self.config.scramble:
            self.scramble(grid)
        self.logger.info(f"Generated {rows}x{cols} grid from {tuple(grid.start)} to {tuple(grid.end)}")
        return grid

    def build_solved(self, rows: int, cols: int,
                     start: Optional[Tuple[int, int]] = None,
                     end: Optional[Tuple[int, int]] = None) -> Grid:
        """The pre-scramble grid: route laid out, other cells filled at random"""
        start = Position(*(start if start is not None else config.DEFAULT_START))
        end = Position(*(end if end is not None else (config.DEFAULT_END or (rows - 1, cols - 1))))

        grid = Grid(rows, cols, start, end)
        self._lay_route(grid)
        self._fill_random(grid)
        return grid

    @staticmethod
    def solution_path(start: Tuple[int, int], end: Tuple[int, int]) -> List[Position]:
        """
        Cells of the L-shaped route: along the start row to the end column,
        then along the end column to the end row.
        """
        start, end = Position(*start), Position(*end)
        route = [start]
        col_step = 1 if end.col >= start.col else -1
        for col in range(start.col + col_step, end.col + col_step, col_step):
            route.append(Position(start.row, col))
        row_step = 1 if end.row >= start.row else -1
        for row in range(start.row + row_step, end.row + row_step, row_step):
            route.append(Position(row, end.col))
        return route

    def _lay_route(self, grid: Grid):
        start, end = grid.start, grid.end
        route = self.solution_path(start, end)

        heads_east = end.col > start.col
        heads_south = end.row > start.row
        bends = start.row != end.row and start.col != end.col

        for pos in route[1:-1]:
            if bends and pos == (start.row, end.col):
                tile = Tile(TileType.CORNER, CORNER_ROTATIONS[(heads_east, heads_south)])
            elif pos.row == start.row:
                tile = Tile(TileType.STRAIGHT, 0)
            else:
                tile = Tile(TileType.STRAIGHT, 90)
            grid.set_tile(pos.row, pos.col, tile)

        # Start points at the second route cell, End back at the one before it
        out_dir = self._direction(route[0], route[1])
        in_dir = self._direction(route[-1], route[-2])
        grid.set_tile(start.row, start.col, Tile(TileType.START, rotation_facing(TileType.START, out_dir)))
        grid.set_tile(end.row, end.col, Tile(TileType.END, rotation_facing(TileType.END, in_dir)))

    @staticmethod
    def _direction(a: Position, b: Position) -> Direction:
        for direction in Direction:
            if a.step(direction) == b:
                return direction
        raise ValueError(f"{a} and {b} are not adjacent")

    def _fill_random(self, grid: Grid):
        """Give every remaining empty cell a weighted random piece and rotation"""
        for pos, tile in grid.tiles():
            if tile.type != TileType.EMPTY:
                continue
            tile_type = self._fill_types[self.rng.choice(len(self._fill_types), p=self._fill_probs)]
            rotation = int(self.rng.integers(0, 4)) * 90
            grid.set_tile(pos.row, pos.col, Tile(tile_type, rotation))

    def scramble(self, grid: Grid) -> List[Position]:
        """
        Turn a random 60-80% of the cells by 1-3 extra quarter turns each.

        Connectivity is not re-checked afterwards. Locked tiles keep their
        rotation. Returns the positions that were turned.
        """
        positions = list(grid.positions())
        low, high = self.config.scramble_fraction
        count = int(len(positions) * self.rng.uniform(low, high))
        chosen = self.rng.choice(len(positions), size=count, replace=False)

        low_turns, high_turns = self.config.scramble_turns
        turned = []
        for index in chosen:
            pos = positions[int(index)]
            tile = grid.tile(*pos)
            if tile.locked:
                continue
            turns = int(self.rng.integers(low_turns, high_turns + 1))
            grid.set_tile(pos.row, pos.col, tile.rotated(turns))
            turned.append(pos)

        self.logger.debug(f"Scrambled {len(turned)} of {len(positions)} cells")
        return turned
