"""
Tests for logging helpers and grid conversions.
"""

import logging

import numpy as np
import pytest

from circuit_puzzle.core.grid import Grid
from circuit_puzzle.core.tile import Tile, TileType
from circuit_puzzle.core.utils import GridConverter, memory_usage, setup_logger, timer


class TestLogging:

    def test_no_duplicate_handlers(self):
        setup_logger("circuit_puzzle.tests.dup")
        logger = setup_logger("circuit_puzzle.tests.dup")
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "run.log"
        logger = setup_logger("circuit_puzzle.tests.file", log_file, "DEBUG")
        logger.debug("hello")
        for handler in logger.handlers:
            handler.flush()
        assert logger.level == logging.DEBUG
        assert "hello" in log_file.read_text()
        setup_logger("circuit_puzzle.tests.file")

    def test_timer_keeps_return_value(self):
        class Worker:
            logger = logging.getLogger("circuit_puzzle.tests.timer")

            @timer
            def work(self, x):
                return x * 2

        assert Worker().work(21) == 42
        assert Worker.work.__name__ == "work"

    def test_memory_usage_is_positive(self):
        assert memory_usage() > 0


class TestGridConverter:

    def test_arrays(self, connected_line):
        types, rotations, locked = GridConverter.to_arrays(connected_line)
        assert types.shape == (1, 2)
        assert types.tolist() == [[int(TileType.START), int(TileType.END)]]
        assert rotations.tolist() == [[0, 180]]
        assert not locked.any()

    def test_locked_tiles_survive_arrays(self):
        grid = Grid(2, 2)
        grid.set_tile(0, 1, Tile(TileType.CORNER, 90, locked=True))
        types, rotations, locked = GridConverter.to_arrays(grid)
        assert locked.tolist() == [[False, True], [False, False]]
        assert GridConverter.from_arrays(types, rotations, grid.start, grid.end, locked) == grid

    def test_from_arrays(self, connected_line):
        types, rotations, _ = GridConverter.to_arrays(connected_line)
        assert GridConverter.from_arrays(types, rotations, (0, 0), (0, 1)) == connected_line

    def test_from_arrays_shape_mismatch(self):
        with pytest.raises(ValueError):
            GridConverter.from_arrays(np.zeros((2, 2), dtype=int), np.zeros((2, 3), dtype=int),
                                      (0, 0), (1, 1))

    def test_with_rotations_keeps_types_and_locks(self):
        grid = Grid(1, 3, (0, 0), (0, 2))
        grid.set_tile(0, 1, Tile(TileType.CORNER, 0, locked=True))
        turned = GridConverter.with_rotations(grid, np.array([[90, 180, 270]]))
        assert turned.tile(0, 1) == Tile(TileType.CORNER, 180, locked=True)
        assert turned.tile(0, 2).rotation == 270
        assert grid.tile(0, 1).rotation == 0

    def test_to_string_marks_path(self, connected_line):
        text = GridConverter.to_string(connected_line, {(0, 0), (0, 1)})
        lines = text.splitlines()
        assert lines[0].split() == ['0', '1']
        assert lines[1] == "0 S*E*"

    def test_to_string_without_highlight(self, broken_line):
        assert "*" not in GridConverter.to_string(broken_line)
