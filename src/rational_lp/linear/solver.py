import logging
from typing import Sequence, Union

import numpy as np
from scipy import linalg

from ..errors import InputError
from ..schemas import LinearSystemSolution

LOG = logging.getLogger(__name__)

ArrayLike = Union[np.ndarray, Sequence[Sequence[float]], Sequence[float]]

RESIDUAL_TOLERANCE = 1e-6
MIN_RANK_TOLERANCE = 1e-12


def solve_linear_system(A: ArrayLike, b: ArrayLike) -> LinearSystemSolution:
    """
    Solve a square system A x = b in floating point and classify it by rank:
      - rank(A) == n                  -> unique
      - rank(A) < rank([A|b])         -> no_solution
      - rank(A) == rank([A|b]) < n    -> infinite_solutions
    A unique solution with a relative residual above 1e-6 keeps its status
    but carries a warning in the message.
    """

    A_arr, b_arr = _validate(A, b)
    n = A_arr.shape[0]

    tol = rank_tolerance(A_arr)
    rank_a = matrix_rank(A_arr, tol)
    rank_aug = matrix_rank(np.column_stack([A_arr, b_arr]), tol)

    if rank_a < n:
        if rank_a < rank_aug:
            LOG.info("Linear system inconsistent: rank(A)=%d < rank([A|b])=%d.", rank_a, rank_aug)
            return LinearSystemSolution(
                status="no_solution",
                rank=rank_a,
                augmented_rank=rank_aug,
                message="No solution exists (inconsistent system - rank(A) < rank([A|b])).",
            )
        LOG.info("Linear system underdetermined: rank(A)=rank([A|b])=%d < %d.", rank_a, n)
        return LinearSystemSolution(
            status="infinite_solutions",
            rank=rank_a,
            augmented_rank=rank_aug,
            message="Infinite solutions exist (rank(A) == rank([A|b]) < n).",
        )

    try:
        x = linalg.solve(A_arr, b_arr)
    except linalg.LinAlgError as exc:
        return LinearSystemSolution(
            status="numerical_error",
            rank=rank_a,
            augmented_rank=rank_aug,
            message=f"Numerical error: factorization failed ({exc}).",
        )

    if not np.all(np.isfinite(x)):
        return LinearSystemSolution(
            status="numerical_error",
            rank=rank_a,
            augmented_rank=rank_aug,
            message="Numerical error: solution contains NaN or Inf. Matrix might be severely ill-conditioned.",
        )

    residual = relative_residual(A_arr, x, b_arr)
    message = "Unique solution found."
    if residual > RESIDUAL_TOLERANCE:
        LOG.warning("High relative residual %.3e for a %dx%d system.", residual, n, n)
        message += (
            f" Warning: High relative residual ({residual:.6e}) suggests potential "
            "numerical instability or ill-conditioning."
        )

    return LinearSystemSolution(
        status="unique",
        x=[float(value) for value in x],
        rank=rank_a,
        augmented_rank=rank_aug,
        residual=residual,
        message=message,
    )


def rank_tolerance(A: np.ndarray) -> float:
    tol = A.shape[0] * np.linalg.norm(A, np.inf) * np.finfo(float).eps
    return float(tol) if tol > 0 else MIN_RANK_TOLERANCE


def matrix_rank(M: np.ndarray, tol: float) -> int:
    """Rank from the diagonal of a column-pivoted QR factorization."""

    R, _ = linalg.qr(M, mode="r", pivoting=True)
    diag = np.abs(np.diag(R))
    return int(np.count_nonzero(diag > tol))


def relative_residual(A: np.ndarray, x: np.ndarray, b: np.ndarray) -> float:
    """||A x - b|| / ||b||, or ||A x|| / ||A|| when b is exactly zero."""

    b_norm = np.linalg.norm(b)
    if b_norm > 0:
        return float(np.linalg.norm(A @ x - b) / b_norm)

    # Homogeneous system: measure A x against the scale of A.
    ax_norm = np.linalg.norm(A @ x)
    a_norm = np.linalg.norm(A)
    if a_norm > 0:
        return float(ax_norm / a_norm)
    return float(ax_norm)


def _validate(A: ArrayLike, b: ArrayLike):
    try:
        A_arr = np.asarray(A, dtype=float)
        b_arr = np.asarray(b, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InputError(f"Matrix A and vector b must be numeric arrays: {exc}") from exc

    if A_arr.ndim != 2 or A_arr.shape[0] == 0 or A_arr.shape[1] == 0:
        raise InputError("Matrix A must be two-dimensional with positive dimensions.")
    if b_arr.ndim != 1 or b_arr.size == 0:
        raise InputError("Vector b must be one-dimensional with positive size.")
    if A_arr.shape[0] != A_arr.shape[1]:
        raise InputError(f"Matrix A must be square, got shape {A_arr.shape}.")
    if A_arr.shape[0] != b_arr.size:
        raise InputError(
            f"Dimension mismatch - A rows [{A_arr.shape[0]}] must equal b size [{b_arr.size}]."
        )
    if not (np.all(np.isfinite(A_arr)) and np.all(np.isfinite(b_arr))):
        raise InputError("Matrix A or vector b contains NaN or Inf.")
    return A_arr, b_arr
