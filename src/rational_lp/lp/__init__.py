"""Linear programming: LP text parsing and the exact tableau simplex."""

from .parser import parse_lp
from .simplex import simplex_solve, solve_parsed_lp
from .geometry import feasible_vertices

__all__ = ["parse_lp", "simplex_solve", "solve_parsed_lp", "feasible_vertices"]
