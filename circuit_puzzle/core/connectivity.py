"""
Breadth-first connectivity check between the start and end cells.
"""

from collections import deque
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Set, Tuple

from .grid import Grid, Position
from .tile import Direction


# Fixed exploration order; it only decides which route is reported
BFS_ORDER = (Direction.NORTH, Direction.SOUTH, Direction.WEST, Direction.EAST)


class PathResult(NamedTuple):
    """Outcome of a connectivity check"""
    completed: bool
    path: FrozenSet[Position]


def direction_between(a: Tuple[int, int], b: Tuple[int, int]) -> Optional[Direction]:
    """Direction leading from cell a to cell b, or None when not adjacent"""
    d_row, d_col = b[0] - a[0], b[1] - a[1]
    for direction in Direction:
        if direction.delta == (d_row, d_col):
            return direction
    return None


def tiles_connect(grid: Grid, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    """
    True when cells a and b are adjacent and agree on a connection.

    A's connector towards B and B's connector back towards A must both be
    present; a one-sided connector does not connect.
    """
    if not (grid.in_bounds(*a) and grid.in_bounds(*b)):
        return False
    direction = direction_between(a, b)
    if direction is None:
        return False
    return (direction in grid.tile(*a).connectors and
            direction.opposite in grid.tile(*b).connectors)


class ConnectivityAnalyzer:
    """Path finding over agreed tile connections"""

    @staticmethod
    def _search(grid: Grid) -> Tuple[Dict[Position, Optional[Position]], bool]:
        """BFS from start; returns the parent map and whether end was reached"""
        start, end = grid.start, grid.end
        parent: Dict[Position, Optional[Position]] = {start: None}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            if current == end:
                return parent, True

            connectors = grid.tile(*current).connectors
            for direction, nxt in grid.neighbors(current, BFS_ORDER):
                if nxt in parent or direction not in connectors:
                    continue
                if direction.opposite in grid.tile(*nxt).connectors:
                    parent[nxt] = current
                    queue.append(nxt)

        return parent, False

    @staticmethod
    def find_route(grid: Grid) -> Optional[List[Position]]:
        """Ordered cells from start to end, or None if they are not connected"""
        parent, reached = ConnectivityAnalyzer._search(grid)
        if not reached:
            return None

        route = []
        node: Optional[Position] = grid.end
        while node is not None:
            route.append(node)
            node = parent[node]
        route.reverse()
        return route

    @staticmethod
    def check_path(grid: Grid) -> PathResult:
        """Whether start and end are connected, and the cells of the route found"""
        route = ConnectivityAnalyzer.find_route(grid)
        if route is None:
            return PathResult(False, frozenset())
        return PathResult(True, frozenset(route))

    @staticmethod
    def reachable(grid: Grid) -> Set[Position]:
        """Every cell connected to the start cell"""
        start = grid.start
        seen = {start}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            for _, nxt in grid.neighbors(current, BFS_ORDER):
                if nxt not in seen and tiles_connect(grid, current, nxt):
                    seen.add(nxt)
                    queue.append(nxt)

        return seen


def check_path(grid: Grid) -> PathResult:
    """Shortcut for ConnectivityAnalyzer.check_path"""
    return ConnectivityAnalyzer.check_path(grid)
