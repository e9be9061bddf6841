"""
Puzzle controller: the single owner and writer of the playing grid.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Tuple

from .. import config
from ..core.connectivity import ConnectivityAnalyzer, PathResult
from ..core.grid import Grid, Position
from ..core.utils import setup_logger
from ..generators import GridGenerator
from ..solvers import BaseSolver, RandomRotationSolver


class PuzzleMode(Enum):
    """Controller states"""
    ACTIVE = "active"
    SOLVING = "solving"
    COMPLETED = "completed"


@dataclass
class PuzzleSession:
    """Everything the controller owns about the game in progress"""
    grid: Grid
    generation: int = 0
    mode: PuzzleMode = PuzzleMode.ACTIVE
    revealed: bool = False  # grid on display came from the solver
    path: FrozenSet[Position] = field(default_factory=frozenset)

    @property
    def can_rotate(self) -> bool:
        return self.mode != PuzzleMode.SOLVING and not self.revealed

    @property
    def completed(self) -> bool:
        return self.mode == PuzzleMode.COMPLETED


class PuzzleController:
    """
    Orchestrates rotate, reveal and regenerate.

    Collaborators read `grid`, `mode` and `path` but never write the grid;
    every change goes through this class. Each change bumps `generation`, and
    a solver run whose captured generation is out of date is discarded.
    """

    def __init__(self, rows: int = config.DEFAULT_ROWS, cols: int = config.DEFAULT_COLS,
                 generator: Optional[GridGenerator] = None,
                 solver: Optional[BaseSolver] = None,
                 start: Optional[Tuple[int, int]] = None,
                 end: Optional[Tuple[int, int]] = None):
        self.logger = setup_logger(self.__class__.__name__)
        self.generator = generator or GridGenerator()
        self.solver = solver or RandomRotationSolver()
        self._rows = rows
        self._cols = cols
        self._start = start
        self._end = end
        self._listeners: List[Callable[[PuzzleSession], None]] = []

        grid = self.generator.generate(rows, cols, start, end)
        self._session = PuzzleSession(grid=grid)
        self._refresh_path()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def session(self) -> PuzzleSession:
        return self._session

    @property
    def grid(self) -> Grid:
        return self._session.grid

    @property
    def generation(self) -> int:
        return self._session.generation

    @property
    def mode(self) -> PuzzleMode:
        return self._session.mode

    @property
    def revealed(self) -> bool:
        return self._session.revealed

    @property
    def path(self) -> FrozenSet[Position]:
        return self._session.path

    def add_listener(self, callback: Callable[[PuzzleSession], None]):
        """Register callback(session), called after every state change."""
        self._listeners.append(callback)

    def check_completion(self, grid: Optional[Grid] = None) -> PathResult:
        """Connectivity of `grid`, or of the current grid when omitted"""
        return ConnectivityAnalyzer.check_path(grid if grid is not None else self.grid)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def new_puzzle(self, rows: Optional[int] = None, cols: Optional[int] = None) -> Grid:
        """Replace the grid with a freshly generated one and return to play."""
        if rows is not None:
            self._rows = rows
        if cols is not None:
            self._cols = cols
        # Corners only carry over while they still fit
        start, end = self._start, self._end
        if start is not None and not (start[0] < self._rows and start[1] < self._cols):
            start = None
        if end is not None and not (end[0] < self._rows and end[1] < self._cols):
            end = None
        # A kept corner may land on the other one's default cell
        resolved_start = tuple(start if start is not None else config.DEFAULT_START)
        resolved_end = tuple(end if end is not None else
                             (config.DEFAULT_END or (self._rows - 1, self._cols - 1)))
        if resolved_start == resolved_end:
            self.logger.debug(f"Start {resolved_start} collides with end; using default corners")
            start = end = None

        session = self._session
        session.grid = self.generator.generate(self._rows, self._cols, start, end)
        session.generation += 1
        session.mode = PuzzleMode.ACTIVE
        session.revealed = False
        session.path = self.check_completion().path

        self.logger.info(f"New {self._rows}x{self._cols} puzzle (generation {session.generation})")
        self._notify()
        return session.grid

    def rotate_tile(self, row: int, col: int) -> Grid:
        """
        Turn one tile 90 degrees clockwise and re-check connectivity.

        Out-of-bounds cells, locked tiles, a running solve and the solution
        view all make this a no-op that returns the grid unchanged.
        """
        session = self._session
        grid = session.grid

        if not session.can_rotate:
            self.logger.debug(f"Ignoring rotate ({row}, {col}): mode={session.mode.value}, revealed={session.revealed}")
            return grid
        if not grid.in_bounds(row, col):
            self.logger.debug(f"Ignoring rotate ({row}, {col}): outside the grid")
            return grid
        tile = grid.tile(row, col)
        if tile.locked:
            self.logger.debug(f"Ignoring rotate ({row}, {col}): tile is locked")
            return grid

        # Grids already handed out stay as they were
        rotated = grid.copy()
        rotated.set_tile(row, col, tile.rotated())
        session.grid = rotated
        session.generation += 1
        result = self._refresh_path()
        self.logger.debug(f"Rotated ({row}, {col}) to {rotated.tile(row, col).rotation}; completed={result.completed}")

        if result.completed and session.mode != PuzzleMode.COMPLETED:
            self.logger.info("Puzzle completed")
        session.mode = PuzzleMode.COMPLETED if result.completed else PuzzleMode.ACTIVE

        self._notify()
        return rotated

    async def request_solution(self) -> Grid:
        """
        Run the solver on the current grid and show its result.

        Rotation is disabled while the search runs. If the grid was replaced
        in the meantime the solver's answer is dropped and the current grid
        is returned.
        """
        session = self._session
        if session.mode == PuzzleMode.SOLVING:
            self.logger.debug("Solution already being searched for")
            return session.grid

        captured = session.generation
        session.mode = PuzzleMode.SOLVING
        self._notify()

        result = await self.solver.solve(session.grid)

        if session.generation != captured:
            self.logger.debug(f"Discarding stale solver result for generation {captured} "
                              f"(current {session.generation})")
            return session.grid

        session.grid = result.solution
        session.generation += 1
        session.mode = PuzzleMode.COMPLETED
        session.revealed = True
        self._refresh_path()
        if not result.success:
            self.logger.warning("Showing best-effort layout; start and end are not connected")

        self._notify()
        return session.grid

    async def toggle_solution(self) -> Grid:
        """
        Reveal the solution, or start a new puzzle when it is already shown
        or still being searched for. A pending search is then discarded.
        """
        if self._session.revealed or self._session.mode == PuzzleMode.SOLVING:
            return self.new_puzzle()
        return await self.request_solution()

    # ------------------------------------------------------------------

    def _refresh_path(self) -> PathResult:
        result = self.check_completion()
        self._session.path = result.path
        return result

    def _notify(self):
        for callback in self._listeners:
            try:
                callback(self._session)
            except Exception as e:
                self.logger.error(f"Error in listener: {e}")
