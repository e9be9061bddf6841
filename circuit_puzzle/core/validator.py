"""
Validator for circuit path grid invariants.
"""

from collections import Counter
from typing import List

import networkx as nx

from .connectivity import ConnectivityAnalyzer, tiles_connect
from .grid import Grid
from .tile import ROTATIONS, Direction, TileType


class ValidationResult:
    """Result of grid validation"""

    def __init__(self):
        self.is_valid = True
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def add_error(self, error: str):
        """Add an error message"""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str):
        """Add a warning message"""
        self.warnings.append(warning)

    def merge(self, other: 'ValidationResult'):
        for error in other.errors:
            self.add_error(error)
        self.warnings.extend(other.warnings)

    def __bool__(self):
        return self.is_valid

    def __repr__(self):
        status = "Valid" if self.is_valid else "Invalid"
        return f"ValidationResult({status}, {len(self.errors)} errors, {len(self.warnings)} warnings)"


class GridValidator:
    """Checks grid invariants and reports statistics"""

    @staticmethod
    def validate_structure(grid: Grid) -> ValidationResult:
        """Exactly one Start at grid.start, exactly one End at grid.end, legal rotations"""
        result = ValidationResult()

        starts = [pos for pos, tile in grid.tiles() if tile.type == TileType.START]
        ends = [pos for pos, tile in grid.tiles() if tile.type == TileType.END]

        if starts != [grid.start]:
            result.add_error(f"Expected a single Start tile at {tuple(grid.start)}, found {[tuple(p) for p in starts]}")
        if ends != [grid.end]:
            result.add_error(f"Expected a single End tile at {tuple(grid.end)}, found {[tuple(p) for p in ends]}")
        if grid.start == grid.end:
            result.add_error("Start and end share a cell")

        for pos, tile in grid.tiles():
            if tile.rotation not in ROTATIONS:
                result.add_error(f"Tile at {tuple(pos)} has invalid rotation {tile.rotation}")
            if tile.type == TileType.EMPTY:
                result.add_warning(f"Empty tile at {tuple(pos)}")

        return result

    @staticmethod
    def validate_solution(grid: Grid) -> ValidationResult:
        """Structure checks plus a connected start-to-end path"""
        result = GridValidator.validate_structure(grid)
        if not ConnectivityAnalyzer.check_path(grid).completed:
            result.add_error("Start and end are not connected")
        return result

    @staticmethod
    def check_connection_symmetry(grid: Grid) -> bool:
        """Every adjacent pair agrees on its connection in both directions"""
        for pos in grid.positions():
            for _, nxt in grid.neighbors(pos):
                if tiles_connect(grid, pos, nxt) != tiles_connect(grid, nxt, pos):
                    return False
        return True

    @staticmethod
    def connection_graph(grid: Grid) -> nx.Graph:
        """Undirected graph of cells joined by agreed connections"""
        graph = nx.Graph()
        graph.add_nodes_from(grid.positions())
        for pos in grid.positions():
            # East and south cover every adjacent pair once
            for nxt in (pos.step(Direction.EAST), pos.step(Direction.SOUTH)):
                if tiles_connect(grid, pos, nxt):
                    graph.add_edge(pos, nxt)
        return graph

    @staticmethod
    def get_grid_statistics(grid: Grid) -> dict:
        """Get various statistics about the grid"""
        graph = GridValidator.connection_graph(grid)
        start_component = nx.node_connected_component(graph, grid.start)
        type_counts = Counter(tile.type.name for _, tile in grid.tiles())

        # Connectors that point at nothing matching (off-grid or unanswered)
        open_ends = sum(
            1 for pos, tile in grid.tiles() for d in tile.connectors
            if not tiles_connect(grid, pos, pos.step(d))
        )

        return {
            'rows': grid.rows,
            'cols': grid.cols,
            'start': tuple(grid.start),
            'end': tuple(grid.end),
            'type_distribution': dict(type_counts),
            'num_connections': graph.number_of_edges(),
            'num_components': nx.number_connected_components(graph),
            'start_component_size': len(start_component),
            'is_connected': grid.end in start_component,
            'open_connectors': open_ends,
        }
