"""
Tile types, directions and the rotation-to-connector mapping.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from functools import lru_cache
from typing import Dict, FrozenSet, Tuple


class Direction(IntEnum):
    """Compass direction a tile can connect on"""
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def opposite(self) -> 'Direction':
        return Direction((self + 2) % 4)

    @property
    def delta(self) -> Tuple[int, int]:
        """Row/column offset of the neighbour in this direction"""
        return _DELTAS[self]

    def rotated(self, steps: int) -> 'Direction':
        """Turn clockwise by the given number of quarter turns"""
        return Direction((self + steps) % 4)


_DELTAS = {
    Direction.NORTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (1, 0),
    Direction.WEST: (0, -1),
}


class TileType(IntEnum):
    """Circuit pieces"""
    EMPTY = 0
    STRAIGHT = 1
    CORNER = 2
    T_JUNCTION = 3
    CROSS = 4
    START = 5
    END = 6


# Connectors of each piece at rotation 0
BASE_CONNECTORS: Dict[TileType, Tuple[Direction, ...]] = {
    TileType.EMPTY: (),
    TileType.STRAIGHT: (Direction.EAST, Direction.WEST),
    TileType.CORNER: (Direction.NORTH, Direction.EAST),
    TileType.T_JUNCTION: (Direction.NORTH, Direction.EAST, Direction.WEST),
    TileType.CROSS: (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST),
    TileType.START: (Direction.EAST,),
    TileType.END: (Direction.EAST,),
}

ROTATIONS = (0, 90, 180, 270)


def normalize_rotation(rotation: int) -> int:
    """Map any angle onto 0, 90, 180 or 270 (partial turns are floored)"""
    return (int(rotation) // 90) % 4 * 90


@lru_cache(maxsize=None)
def connectors_of(tile_type, rotation: int) -> FrozenSet[Direction]:
    """
    Directions a tile of the given type exposes at the given rotation.

    Each base connector d becomes (d + rotation / 90) mod 4. Unknown types
    have no connectors.
    """
    try:
        base = BASE_CONNECTORS.get(TileType(tile_type), ())
    except ValueError:
        return frozenset()
    steps = normalize_rotation(rotation) // 90
    return frozenset(d.rotated(steps) for d in base)


def rotation_facing(tile_type: TileType, direction: Direction) -> int:
    """First rotation at which the tile exposes a connector on `direction`"""
    for rotation in ROTATIONS:
        if direction in connectors_of(tile_type, rotation):
            return rotation
    raise ValueError(f"{tile_type.name} has no connector that can face {direction.name}")


@dataclass(frozen=True)
class Tile:
    """A single grid cell"""
    type: TileType = TileType.EMPTY
    rotation: int = 0
    locked: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'type', TileType(self.type))
        object.__setattr__(self, 'rotation', normalize_rotation(self.rotation))

    @property
    def connectors(self) -> FrozenSet[Direction]:
        return connectors_of(self.type, self.rotation)

    def rotated(self, turns: int = 1) -> 'Tile':
        """Copy of this tile turned clockwise by `turns` quarter turns"""
        return replace(self, rotation=(self.rotation + 90 * turns) % 360)

    def to_dict(self) -> dict:
        return {
            'type': self.type.name,
            'rotation': self.rotation,
            'locked': self.locked,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Tile':
        tile_type = data['type']
        if isinstance(tile_type, str):
            try:
                tile_type = TileType[tile_type.upper()]
            except KeyError:
                raise ValueError(f"Unknown tile type: {data['type']}")
        return cls(tile_type, data.get('rotation', 0), data.get('locked', False))

    def __repr__(self):
        lock = ", locked" if self.locked else ""
        return f"Tile({self.type.name}, {self.rotation}{lock})"
