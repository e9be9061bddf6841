"""
Default settings for the circuit path puzzle.
"""

# Grid defaults
DEFAULT_ROWS = 7
DEFAULT_COLS = 7
DEFAULT_START = (0, 0)
DEFAULT_END = None  # bottom-right corner of whatever size is generated

# Generation parameters
TILE_WEIGHTS = {
    'straight': 0.4,
    'corner': 0.3,
    't_junction': 0.2,
    'cross': 0.1,
}
SCRAMBLE_FRACTION = (0.6, 0.8)  # share of cells that get extra turns
SCRAMBLE_TURNS = (1, 3)  # quarter turns per scrambled cell, inclusive

# Solver parameters
SOLVER_MAX_ATTEMPTS = 1000
SOLVER_YIELD_EVERY = 25

# Logging configuration
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
