"""Floating-point square linear systems with rank-based classification."""

from .solver import solve_linear_system

__all__ = ["solve_linear_system"]
