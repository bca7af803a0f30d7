import math
from itertools import combinations
from typing import List, Sequence, Tuple

import numpy as np

from ..errors import InputError
from ..linear.solver import solve_linear_system
from ..rational import ExactRational, RationalLike

FEASIBILITY_TOLERANCE = 1e-6

Point = Tuple[float, float]


def feasible_vertices(
    A: Sequence[Sequence[RationalLike]],
    b: Sequence[RationalLike],
) -> List[Point]:
    """
    Corner points of {x in R^2 : A x <= b, x >= 0}.

    Candidates are the origin, each constraint's axis intercepts and every
    pairwise constraint intersection. Feasible candidates are de-duplicated
    and, when there are three or more, ordered counter-clockwise around
    their centroid so they trace the region's boundary.
    """

    A_arr, b_arr = _as_float_system(A, b)

    candidates: List[Point] = [(0.0, 0.0)]
    for (a1, a2), rhs in zip(A_arr, b_arr):
        if abs(a1) > FEASIBILITY_TOLERANCE:
            candidates.append((rhs / a1, 0.0))
        if abs(a2) > FEASIBILITY_TOLERANCE:
            candidates.append((0.0, rhs / a2))

    for i, j in combinations(range(len(A_arr)), 2):
        result = solve_linear_system(A_arr[[i, j]], b_arr[[i, j]])
        if result.has_unique_solution:
            x, y = result.solution_vector
            candidates.append((float(x), float(y)))

    vertices: List[Point] = []
    for point in candidates:
        if not _is_feasible(point, A_arr, b_arr):
            continue
        if any(_squared_distance(point, seen) < FEASIBILITY_TOLERANCE**2 for seen in vertices):
            continue
        vertices.append((point[0] + 0.0, point[1] + 0.0))

    if len(vertices) >= 3:
        cx = sum(x for x, _ in vertices) / len(vertices)
        cy = sum(y for _, y in vertices) / len(vertices)
        vertices.sort(key=lambda p: math.atan2(p[1] - cy, p[0] - cx))
    return vertices


def _as_float_system(A, b) -> Tuple[np.ndarray, np.ndarray]:
    if len(A) == 0 or len(b) != len(A):
        raise InputError("Feasible-region vertices need a non-empty A with one rhs per row.")
    if any(len(row) != 2 for row in A):
        raise InputError("Feasible-region vertices are only defined for two-variable problems.")
    A_arr = np.array([[_to_float(value) for value in row] for row in A], dtype=float)
    b_arr = np.array([_to_float(value) for value in b], dtype=float)
    return A_arr, b_arr


def _to_float(value) -> float:
    if isinstance(value, str):
        return float(ExactRational.parse(value))
    return float(value)


def _is_feasible(point: Point, A: np.ndarray, b: np.ndarray) -> bool:
    x, y = point
    if x < -FEASIBILITY_TOLERANCE or y < -FEASIBILITY_TOLERANCE:
        return False
    return bool(np.all(A @ np.array([x, y]) <= b + FEASIBILITY_TOLERANCE))


def _squared_distance(p: Point, q: Point) -> float:
    return (p[0] - q[0]) ** 2 + (p[1] - q[1]) ** 2
