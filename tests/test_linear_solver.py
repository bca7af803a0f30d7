import numpy as np
import pytest

from rational_lp.errors import InputError, SolutionUnavailableError
from rational_lp.linear import solver as linear_solver
from rational_lp.linear.solver import matrix_rank, rank_tolerance, solve_linear_system


def test_singular_consistent_system_has_infinite_solutions():
    result = solve_linear_system([[1, 2], [2, 4]], [2, 4])

    assert result.status == "infinite_solutions"
    assert result.rank == 1
    assert result.augmented_rank == 1
    assert result.x is None
    with pytest.raises(SolutionUnavailableError):
        result.solution_vector


def test_singular_inconsistent_system_has_no_solution():
    result = solve_linear_system([[1, 2], [2, 4]], [2, 5])

    assert result.status == "no_solution"
    assert result.rank == 1
    assert result.augmented_rank == 2
    assert "inconsistent" in result.message


def test_nonsingular_system_has_unique_solution():
    A = np.array([[2.0, 1.0], [1.0, 3.0]])
    b = np.array([3.0, 5.0])
    result = solve_linear_system(A, b)

    assert result.status == "unique"
    assert result.has_unique_solution
    assert result.solution_vector == pytest.approx([0.8, 1.4], rel=1e-9)
    assert np.linalg.norm(A @ result.solution_vector - b) < 1e-9
    assert result.residual is not None and result.residual < 1e-6
    assert result.message == "Unique solution found."


def test_homogeneous_system_uses_scale_of_a():
    result = solve_linear_system([[1.0, 2.0], [3.0, 4.0]], [0.0, 0.0])

    assert result.status == "unique"
    assert result.solution_vector == pytest.approx([0.0, 0.0], abs=1e-12)
    assert result.residual == pytest.approx(0.0, abs=1e-12)


def test_zero_matrix_uses_floor_tolerance():
    A = np.zeros((3, 3))
    assert rank_tolerance(A) == 1e-12
    assert solve_linear_system(A, [0.0, 0.0, 0.0]).status == "infinite_solutions"
    assert solve_linear_system(A, [0.0, 1.0, 0.0]).status == "no_solution"


def test_larger_system_matches_numpy():
    rng = np.random.default_rng(7)
    A = rng.normal(size=(6, 6)) + 6 * np.eye(6)
    b = rng.normal(size=6)
    result = solve_linear_system(A, b)

    assert result.status == "unique"
    assert result.solution_vector == pytest.approx(np.linalg.solve(A, b), rel=1e-9, abs=1e-12)


def test_matrix_rank_counts_independent_columns():
    M = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [1.0, 0.0, 1.0]])
    assert matrix_rank(M, rank_tolerance(M)) == 2


def test_high_residual_adds_warning_but_keeps_status(monkeypatch):
    monkeypatch.setattr(linear_solver, "relative_residual", lambda A, x, b: 1e-3)
    result = solve_linear_system([[1.0, 0.0], [0.0, 1.0]], [1.0, 2.0])

    assert result.status == "unique"
    assert "Warning: High relative residual" in result.message


def test_inaccurate_solve_is_flagged_by_the_computed_residual(monkeypatch):
    A = np.array([[1.0, 0.0], [0.0, 1.0]])
    b = np.array([1.0, 2.0])
    x = np.array([1.0, 2.01])
    assert linear_solver.relative_residual(A, x, b) == pytest.approx(0.01 / np.sqrt(5.0))

    monkeypatch.setattr(linear_solver.linalg, "solve", lambda A, b: x)
    result = solve_linear_system(A, b)

    assert result.status == "unique"
    assert result.residual == pytest.approx(0.01 / np.sqrt(5.0))
    assert "Warning: High relative residual" in result.message


def test_residual_uses_matrix_scale_only_for_an_exactly_zero_b():
    A = np.array([[1.0, 0.0], [0.0, 1.0]])

    assert linear_solver.relative_residual(A, np.array([1.0, 0.0]), np.zeros(2)) == pytest.approx(
        1.0 / np.sqrt(2.0)
    )
    assert linear_solver.relative_residual(A, np.zeros(2), np.array([1e-20, 0.0])) == pytest.approx(1.0)


def test_non_finite_solution_is_numerical_error(monkeypatch):
    monkeypatch.setattr(linear_solver.linalg, "solve", lambda A, b: np.array([np.nan, 1.0]))
    result = solve_linear_system([[1.0, 0.0], [0.0, 1.0]], [1.0, 2.0])

    assert result.status == "numerical_error"
    assert result.x is None
    assert "NaN or Inf" in result.message


@pytest.mark.parametrize(
    "A, b",
    [
        ([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]], [1.0, 2.0]),
        ([[1.0, 0.0], [0.0, 1.0]], [1.0, 2.0, 3.0]),
        ([[1.0, np.nan], [0.0, 1.0]], [1.0, 2.0]),
        ([[1.0, 0.0], [0.0, 1.0]], [np.inf, 2.0]),
        (np.zeros((0, 0)), []),
        ([1.0, 2.0], [1.0, 2.0]),
        ([[1.0, 0.0], [0.0, 1.0]], [[1.0], [2.0]]),
        ([["a", "b"], ["c", "d"]], [1.0, 2.0]),
    ],
)
def test_structural_errors_are_raised(A, b):
    with pytest.raises(InputError):
        solve_linear_system(A, b)


def test_solution_json_dump():
    payload = solve_linear_system([[1.0, 2.0], [2.0, 4.0]], [2.0, 4.0]).model_dump(mode="json")

    assert payload["status"] == "infinite_solutions"
    assert payload["x"] is None
