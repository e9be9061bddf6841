"""
Core data structure for circuit path puzzles.
"""

from typing import List, Tuple, Optional, Iterator, NamedTuple, Union
import json
from pathlib import Path

from .tile import Tile, TileType, Direction


class Position(NamedTuple):
    """Cell coordinates, 0-indexed"""
    row: int
    col: int

    def step(self, direction: Direction) -> 'Position':
        """Neighbouring position in the given direction (may be off-grid)"""
        d_row, d_col = direction.delta
        return Position(self.row + d_row, self.col + d_col)


# Box-drawing glyph for every connector set a tile can show
_GLYPHS = {
    frozenset(): '·',
    frozenset({Direction.EAST, Direction.WEST}): '─',
    frozenset({Direction.NORTH, Direction.SOUTH}): '│',
    frozenset({Direction.NORTH, Direction.EAST}): '└',
    frozenset({Direction.EAST, Direction.SOUTH}): '┌',
    frozenset({Direction.SOUTH, Direction.WEST}): '┐',
    frozenset({Direction.WEST, Direction.NORTH}): '┘',
    frozenset({Direction.NORTH, Direction.EAST, Direction.WEST}): '┴',
    frozenset({Direction.NORTH, Direction.EAST, Direction.SOUTH}): '├',
    frozenset({Direction.EAST, Direction.SOUTH, Direction.WEST}): '┬',
    frozenset({Direction.NORTH, Direction.SOUTH, Direction.WEST}): '┤',
    frozenset(Direction): '┼',
}

_ENDPOINT_ARROWS = {
    Direction.NORTH: '^',
    Direction.EAST: '>',
    Direction.SOUTH: 'v',
    Direction.WEST: '<',
}


def tile_glyph(tile: Tile) -> str:
    """Single-character picture of a tile"""
    if tile.type in (TileType.START, TileType.END):
        return 'S' if tile.type == TileType.START else 'E'
    return _GLYPHS.get(tile.connectors, '?')


class Grid:
    """Rectangular grid of rotatable tiles with a fixed start and end cell"""

    def __init__(self, rows: int, cols: int,
                 start: Tuple[int, int] = (0, 0),
                 end: Optional[Tuple[int, int]] = None,
                 tiles: Optional[List[List[Tile]]] = None):
        """
        Initialize a grid.

        Args:
            rows: Number of rows
            cols: Number of columns
            start: Start cell, defaults to the top-left corner
            end: End cell, defaults to the bottom-right corner
            tiles: Optional rows of tiles. When omitted the grid is empty
                apart from a Start tile at `start` and an End tile at `end`.

        Raises:
            ValueError: On non-positive dimensions, out-of-bounds or
                coinciding start/end, or tiles of the wrong shape.
        """
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Invalid grid dimensions: {rows}x{cols}")

        self._rows = rows
        self._cols = cols
        self._start = Position(*start)
        self._end = Position(*end) if end is not None else Position(rows - 1, cols - 1)

        for name, pos in (('start', self._start), ('end', self._end)):
            if not self.in_bounds(*pos):
                raise ValueError(f"{name} {tuple(pos)} is outside the {rows}x{cols} grid")
        if self._start == self._end:
            raise ValueError("Start and end must be different cells")

        if tiles is None:
            self._tiles = [[Tile() for _ in range(cols)] for _ in range(rows)]
            self._tiles[self._start.row][self._start.col] = Tile(TileType.START)
            self._tiles[self._end.row][self._end.col] = Tile(TileType.END)
        else:
            if len(tiles) != rows or any(len(row) != cols for row in tiles):
                raise ValueError(f"Tiles do not form a {rows}x{cols} grid")
            self._tiles = [list(row) for row in tiles]

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def start(self) -> Position:
        return self._start

    @property
    def end(self) -> Position:
        return self._end

    @property
    def size(self) -> int:
        return self._rows * self._cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._cols

    def tile(self, row: int, col: int) -> Tile:
        """Tile at (row, col)"""
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside the grid")
        return self._tiles[row][col]

    def __getitem__(self, pos: Tuple[int, int]) -> Tile:
        return self.tile(*pos)

    def set_tile(self, row: int, col: int, tile: Tile):
        """Replace the tile at (row, col)"""
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside the grid")
        self._tiles[row][col] = tile

    def positions(self) -> Iterator[Position]:
        """All cell positions in row-major order"""
        for row in range(self._rows):
            for col in range(self._cols):
                yield Position(row, col)

    def neighbors(self, pos: Tuple[int, int],
                  order: Tuple[Direction, ...] = tuple(Direction)) -> Iterator[Tuple[Direction, Position]]:
        """In-bounds neighbours of a cell with the direction leading to each"""
        pos = Position(*pos)
        for direction in order:
            nxt = pos.step(direction)
            if self.in_bounds(*nxt):
                yield direction, nxt

    def tiles(self) -> Iterator[Tuple[Position, Tile]]:
        for pos in self.positions():
            yield pos, self._tiles[pos.row][pos.col]

    def copy(self) -> 'Grid':
        """Create an independent copy of the grid (tiles are immutable)"""
        return Grid(self._rows, self._cols, self._start, self._end,
                    [list(row) for row in self._tiles])

    def to_dict(self) -> dict:
        """Convert grid to dictionary for serialization"""
        return {
            'rows': self._rows,
            'cols': self._cols,
            'start': list(self._start),
            'end': list(self._end),
            'tiles': [[tile.to_dict() for tile in row] for row in self._tiles],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Grid':
        """Create grid from dictionary"""
        tiles = [[Tile.from_dict(t) for t in row] for row in data['tiles']]
        return cls(data['rows'], data['cols'],
                   tuple(data['start']), tuple(data['end']), tiles)

    def save(self, filepath: Union[str, Path]):
        """Save grid to JSON file"""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> 'Grid':
        """Load grid from JSON file"""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    def __eq__(self, other):
        if isinstance(other, Grid):
            return (self._rows == other._rows and self._cols == other._cols
                    and self._start == other._start and self._end == other._end
                    and self._tiles == other._tiles)
        return NotImplemented

    __hash__ = None

    def __str__(self):
        """Text picture of the grid; start/end show an arrow for their connector"""
        lines = []
        for row in range(self._rows):
            cells = []
            for col in range(self._cols):
                tile = self._tiles[row][col]
                glyph = tile_glyph(tile)
                if tile.type in (TileType.START, TileType.END):
                    arrows = ''.join(_ENDPOINT_ARROWS[d] for d in sorted(tile.connectors))
                    glyph += arrows or ' '
                else:
                    glyph += ' '
                cells.append(glyph)
            lines.append(''.join(cells).rstrip())
        return '\n'.join(lines)

    def __repr__(self):
        return f"Grid({self._rows}x{self._cols}, start={tuple(self._start)}, end={tuple(self._end)})"
