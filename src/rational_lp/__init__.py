"""Exact-arithmetic LP parsing, simplex and linear-system solving."""

from .errors import (
    LPError,
    ParseError,
    InputError,
    RationalOverflowError,
    RationalZeroDivisionError,
    SolutionUnavailableError,
)
from .rational import ExactRational
from .schemas import (
    Constraint,
    ParsedLP,
    SolveOptions,
    PivotStep,
    SimplexSolution,
    LinearSystemSolution,
)
from .lp import parse_lp, simplex_solve, solve_parsed_lp, feasible_vertices
from .linear import solve_linear_system

__all__ = [
    "LPError",
    "ParseError",
    "InputError",
    "RationalOverflowError",
    "RationalZeroDivisionError",
    "SolutionUnavailableError",
    "ExactRational",
    "Constraint",
    "ParsedLP",
    "SolveOptions",
    "PivotStep",
    "SimplexSolution",
    "LinearSystemSolution",
    "parse_lp",
    "simplex_solve",
    "solve_parsed_lp",
    "feasible_vertices",
    "solve_linear_system",
]
