"""
Game state controller for the circuit path puzzle.
"""

from .puzzle_controller import PuzzleController, PuzzleSession, PuzzleMode

__all__ = ['PuzzleController', 'PuzzleSession', 'PuzzleMode']
