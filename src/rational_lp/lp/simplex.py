import logging
from typing import List, Optional, Sequence, Tuple

from ..errors import InputError
from ..rational import ExactRational, ZERO, ONE, RationalLike
from ..schemas import ParsedLP, PivotStep, SimplexSolution, SolveOptions

LOG = logging.getLogger(__name__)

Tableau = List[List[ExactRational]]


def simplex_solve(
    c: Sequence[RationalLike],
    A: Sequence[Sequence[RationalLike]],
    b: Sequence[RationalLike],
    opts: Optional[SolveOptions] = None,
) -> SimplexSolution:
    """
    Tableau simplex for: maximize c.x subject to A x <= b, x >= 0, b >= 0.

    All pivoting is done in exact rational arithmetic. Structural problems
    with the inputs raise InputError; solver outcomes (unbounded, alternate
    optima, iteration limit) come back as a status on the solution.
    """

    opts = opts or SolveOptions()
    c_vec, A_mat, b_vec = _validate(c, A, b)
    m = len(c_vec)
    k = len(A_mat)

    tableau, basis = _build_tableau(c_vec, A_mat, b_vec)
    rhs_col = m + k
    pivots: List[PivotStep] = []
    iterations = 0

    while True:
        entering = _select_entering(tableau[k], rhs_col, opts)
        if entering is None:
            return _extract_solution(tableau, basis, m, iterations, pivots, opts)

        leaving = _select_leaving(tableau, basis, entering, opts)
        if leaving is None:
            LOG.info("Simplex unbounded at iteration %d (column %d).", iterations, entering)
            return SimplexSolution(
                status="unbounded",
                basis=list(basis),
                iterations=iterations,
                pivots=pivots if opts.record_pivots else None,
                message=(
                    f"Problem is unbounded (entering variable in column {entering} "
                    "can increase indefinitely)."
                ),
            )
        pivot_row, ratio = leaving

        if iterations >= opts.max_iters:
            LOG.info("Simplex hit the iteration limit (%d).", opts.max_iters)
            return SimplexSolution(
                status="iteration_limit",
                basis=list(basis),
                iterations=iterations,
                pivots=pivots if opts.record_pivots else None,
                message=(
                    f"Maximum iterations ({opts.max_iters}) reached. "
                    "Check for cycling or increase the limit."
                ),
            )

        pivot_element = tableau[pivot_row][entering]
        if pivot_element <= 0:
            return SimplexSolution(
                status="internal_error",
                basis=list(basis),
                iterations=iterations,
                pivots=pivots if opts.record_pivots else None,
                message=(
                    f"Internal error: pivot element is non-positive ({pivot_element}) "
                    f"at row {pivot_row}, column {entering}."
                ),
            )

        leaving_col = basis[pivot_row]
        _pivot(tableau, pivot_row, entering)
        basis[pivot_row] = entering
        iterations += 1
        LOG.debug(
            "Pivot %d: column %d enters at row %d, column %d leaves (ratio %s).",
            iterations,
            entering,
            pivot_row,
            leaving_col,
            ratio,
        )
        if opts.record_pivots:
            pivots.append(
                PivotStep(
                    iteration=iterations,
                    entering_column=entering,
                    leaving_row=pivot_row,
                    leaving_column=leaving_col,
                    ratio=ratio,
                    objective_value=tableau[k][rhs_col],
                    point=_basic_point(tableau, basis, m),
                )
            )


def solve_parsed_lp(parsed: ParsedLP, opts: Optional[SolveOptions] = None) -> SimplexSolution:
    return simplex_solve(
        parsed.objective_coefficients,
        parsed.constraint_matrix,
        parsed.constraint_rhs,
        opts,
    )


def _validate(
    c: Sequence[RationalLike],
    A: Sequence[Sequence[RationalLike]],
    b: Sequence[RationalLike],
) -> Tuple[List[ExactRational], Tuple[List[ExactRational], ...], List[ExactRational]]:
    if len(c) == 0:
        raise InputError("Objective coefficient vector c cannot be empty.")
    if len(A) == 0 or any(len(row) == 0 for row in A):
        raise InputError("Constraint matrix A dimensions must be positive.")
    if len(b) == 0:
        raise InputError("Right-hand side vector b cannot be empty.")

    m = len(c)
    for idx, row in enumerate(A):
        if len(row) != m:
            raise InputError(
                f"Constraint matrix A row {idx} has {len(row)} columns; "
                f"expected {m} to match the objective coefficients."
            )
    if len(b) != len(A):
        raise InputError(
            f"Right-hand side vector b size ({len(b)}) must match constraint matrix A rows ({len(A)})."
        )

    c_vec = [ExactRational.coerce(value) for value in c]
    A_mat = tuple([ExactRational.coerce(value) for value in row] for row in A)
    b_vec = [ExactRational.coerce(value) for value in b]

    for idx, value in enumerate(b_vec):
        if value < 0:
            # No two-phase / Big-M support.
            raise InputError(
                "This simplex implementation requires non-negative right-hand sides (b >= 0). "
                f"Constraint {idx + 1} has right-hand side {value}."
            )
    return c_vec, A_mat, b_vec


def _build_tableau(
    c: List[ExactRational],
    A: Sequence[List[ExactRational]],
    b: List[ExactRational],
) -> Tuple[Tableau, List[int]]:
    """Rows [A | I | b] for each constraint, then the objective row [-c | 0 | 0]."""

    m = len(c)
    k = len(A)
    tableau: Tableau = []
    for i, row in enumerate(A):
        slacks = [ONE if j == i else ZERO for j in range(k)]
        tableau.append(list(row) + slacks + [b[i]])
    tableau.append([-value for value in c] + [ZERO] * k + [ZERO])
    basis = [m + i for i in range(k)]
    return tableau, basis


def _select_entering(objective_row: List[ExactRational], rhs_col: int, opts: SolveOptions) -> Optional[int]:
    if opts.pivot_rule == "bland":
        return next((j for j in range(rhs_col) if objective_row[j] < 0), None)

    entering: Optional[int] = None
    most_negative = ZERO
    for j in range(rhs_col):
        if objective_row[j] < most_negative:
            most_negative = objective_row[j]
            entering = j
    return entering


def _select_leaving(
    tableau: Tableau,
    basis: List[int],
    entering: int,
    opts: SolveOptions,
) -> Optional[Tuple[int, ExactRational]]:
    """Minimum-ratio test over rows with a strictly positive entry in the entering column."""

    rhs_col = len(tableau[0]) - 1
    best: Optional[Tuple[int, ExactRational]] = None
    for i in range(len(basis)):
        element = tableau[i][entering]
        if element <= 0:
            continue
        ratio = tableau[i][rhs_col] / element
        if best is None or ratio < best[1]:
            best = (i, ratio)
        elif opts.pivot_rule == "bland" and ratio == best[1] and basis[i] < basis[best[0]]:
            best = (i, ratio)
    return best


def _pivot(tableau: Tableau, pivot_row: int, pivot_col: int) -> None:
    pivot_element = tableau[pivot_row][pivot_col]
    normalized = [value / pivot_element for value in tableau[pivot_row]]
    tableau[pivot_row] = normalized
    for i, row in enumerate(tableau):
        if i == pivot_row:
            continue
        factor = row[pivot_col]
        if factor.is_zero():
            continue
        tableau[i] = [value - factor * pivot_value for value, pivot_value in zip(row, normalized)]


def _basic_point(tableau: Tableau, basis: List[int], num_original: int) -> List[ExactRational]:
    point = [ZERO] * num_original
    for row_idx, col in enumerate(basis):
        if col < num_original:
            point[col] = tableau[row_idx][-1]
    return point


def _extract_solution(
    tableau: Tableau,
    basis: List[int],
    num_original: int,
    iterations: int,
    pivots: List[PivotStep],
    opts: SolveOptions,
) -> SimplexSolution:
    objective_row = tableau[-1]
    value = objective_row[-1]
    x = _basic_point(tableau, basis, num_original)

    # A non-basic column with a zero reduced cost signals alternate optima.
    # This does not check that the column could actually enter the basis.
    basic = set(basis)
    alternate = any(
        objective_row[j].is_zero() for j in range(len(objective_row) - 1) if j not in basic
    )

    if alternate:
        status = "infinite_solutions"
        message = (
            "Optimal solution found, but infinite solutions exist "
            "(zero objective coefficient for a non-basic variable)."
        )
    else:
        status = "optimal"
        message = "Optimal solution found."
    LOG.info("Simplex finished with status %s after %d iterations (objective %s).", status, iterations, value)

    return SimplexSolution(
        status=status,
        objective_value=value,
        x=x,
        basis=list(basis),
        iterations=iterations,
        pivots=pivots if opts.record_pivots else None,
        message=message,
    )
