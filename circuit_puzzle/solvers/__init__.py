"""
Solvers for circuit path puzzles.
"""

from .base_solver import BaseSolver, SolverConfig, SolverResult
from .random_solver import RandomRotationSolver, solve

__all__ = [
    # Base classes
    'BaseSolver',
    'SolverConfig',
    'SolverResult',

    # Random search
    'RandomRotationSolver',
    'solve',
]


# Solver registry for easy access
SOLVER_REGISTRY = {
    'random': RandomRotationSolver,
}


def get_solver(name: str, config: SolverConfig = None) -> BaseSolver:
    """
    Get a solver by name.

    Args:
        name: Solver name (random)
        config: Optional solver configuration

    Returns:
        Solver instance

    Raises:
        ValueError: If solver name is not recognized
    """
    solver_class = SOLVER_REGISTRY.get(name.lower())
    if not solver_class:
        raise ValueError(f"Unknown solver: {name}. Available: {list(SOLVER_REGISTRY.keys())}")
    return solver_class(config or SolverConfig())
