from typing import List, Union

from mcp.server.fastmcp import FastMCP

from .schemas import SolveOptions
from .lp.parser import parse_lp
from .lp.simplex import simplex_solve, solve_parsed_lp
from .lp.geometry import feasible_vertices
from .linear.solver import solve_linear_system as _solve_linear_system

mcp = FastMCP("Rational LP")

Number = Union[int, str]


@mcp.tool()
def parse_lp_text(text: str) -> dict:
    "Parse LP text (objective line, optional constraints keyword, constraint lines) into matrix form."
    return parse_lp(text).model_dump(mode="json")


@mcp.tool()
def solve_lp_text(text: str, options: SolveOptions | None = None) -> dict:
    "Parse LP text and solve it with the exact tableau simplex."
    parsed = parse_lp(text)
    solution = solve_parsed_lp(parsed, SolveOptions.model_validate(options or {}))
    result = {
        "parsed": parsed.model_dump(mode="json"),
        "solution": solution.model_dump(mode="json"),
    }
    if solution.has_optimal_solution:
        values = solution.values_by_name(parsed.variable_order)
        result["values"] = {name: str(value) for name, value in values.items()}
    return result


@mcp.tool()
def solve_simplex(
    c: List[Number],
    A: List[List[Number]],
    b: List[Number],
    options: SolveOptions | None = None,
) -> dict:
    "Maximize c.x subject to A x <= b, x >= 0 (b >= 0). Entries are ints or literals like '2/3' or '0.5'."
    opts = SolveOptions.model_validate(options or {})
    return simplex_solve(c, A, b, opts).model_dump(mode="json")


@mcp.tool()
def solve_linear_system(A: List[List[float]], b: List[float]) -> dict:
    "Solve a square system A x = b and classify it as unique / no_solution / infinite_solutions."
    return _solve_linear_system(A, b).model_dump(mode="json")


@mcp.tool()
def feasible_region(text: str) -> dict:
    "Return the ordered corner points of a two-variable LP's feasible region."
    parsed = parse_lp(text)
    vertices = feasible_vertices(parsed.constraint_matrix, parsed.constraint_rhs)
    return {
        "variables": parsed.variable_order,
        "vertices": [list(vertex) for vertex in vertices],
    }


if __name__ == "__main__":
    # Allow: `uv run mcp dev src/rational_lp/server.py` or run as a stdio server
    mcp.run()
