from pathlib import Path

import pytest
from pydantic import ValidationError

from rational_lp.errors import InputError, SolutionUnavailableError
from rational_lp.lp.parser import parse_lp
from rational_lp.lp.simplex import simplex_solve, solve_parsed_lp
from rational_lp.rational import ExactRational as R
from rational_lp.schemas import SolveOptions


def load_example(name: str) -> str:
    return Path(__file__).parent.parent.joinpath("examples", name).read_text()


def test_simplex_solves_textbook_lp_exactly():
    parsed = parse_lp(load_example("textbook.lp"))
    solution = solve_parsed_lp(parsed, SolveOptions())

    assert solution.status == "optimal"
    assert solution.objective_value == R(36)
    assert solution.x == [R(2), R(6)]
    assert solution.values_by_name(parsed.variable_order) == {"x1": R(2), "x2": R(6)}
    assert solution.iterations == 2
    assert solution.pivots is None


def test_simplex_accepts_int_and_literal_inputs():
    solution = simplex_solve([3, 5], [[1, 0], [0, 2], [3, 2]], ["4", "12", "18"])

    assert solution.status == "optimal"
    assert solution.objective_value == 36


def test_simplex_resources_example():
    solution = solve_parsed_lp(parse_lp(load_example("resources.lp")))

    assert solution.status == "optimal"
    assert solution.objective_value == R(5400)
    assert solution.x == [R(60), R(30)]


def test_fractional_optimum_is_exact():
    solution = simplex_solve([1, 1], [[3, 1], [1, 3]], [1, 1])

    assert solution.status == "optimal"
    assert solution.x == [R(1, 4), R(1, 4)]
    assert solution.objective_value == R(1, 2)


def test_unbounded_problem():
    parsed = parse_lp("maximize x1\nsubject to x1 >= 0")
    solution = solve_parsed_lp(parsed)

    assert solution.status == "unbounded"
    assert solution.objective_value is None
    assert solution.x is None
    assert "unbounded" in solution.message
    with pytest.raises(SolutionUnavailableError):
        solution.values_by_name(parsed.variable_order)


def test_alternate_optima_reported_as_infinite_solutions():
    solution = simplex_solve([1, 1], [[1, 1]], [4])

    assert solution.status == "infinite_solutions"
    assert solution.has_optimal_solution
    assert solution.objective_value == 4
    assert solution.x == [R(4), R(0)]


def test_minimize_reports_value_in_maximize_sense():
    parsed = parse_lp("minimize x + 2y\nsubject to x + y <= 3")
    solution = solve_parsed_lp(parsed)

    assert solution.status == "optimal"
    assert solution.objective_value == 0
    assert solution.x == [R(0), R(0)]


def test_negative_rhs_is_rejected():
    with pytest.raises(InputError, match="non-negative right-hand sides"):
        simplex_solve([1], [[1]], [-1])


def test_equality_with_nonzero_rhs_is_rejected_after_parsing():
    parsed = parse_lp("maximize x + y\nsubject to x + y = 4")

    assert parsed.constraint_rhs == [R(4), R(-4)]
    with pytest.raises(InputError):
        solve_parsed_lp(parsed)


@pytest.mark.parametrize(
    "c, A, b",
    [
        ([], [[1]], [1]),
        ([1], [], [1]),
        ([1], [[]], [1]),
        ([1, 2], [[1]], [1]),
        ([1], [[1], [2]], [1]),
        ([1], [[1]], []),
    ],
)
def test_structural_input_errors(c, A, b):
    with pytest.raises(InputError):
        simplex_solve(c, A, b)


def test_cycling_lp_hits_iteration_limit():
    parsed = parse_lp(load_example("beale.lp"))
    solution = solve_parsed_lp(parsed, SolveOptions(max_iters=50))

    assert solution.status == "iteration_limit"
    assert solution.iterations == 50
    assert "Maximum iterations (50)" in solution.message
    assert solution.objective_value is None


def test_cycling_lp_with_default_limit_terminates():
    solution = solve_parsed_lp(parse_lp(load_example("beale.lp")))

    assert solution.status == "iteration_limit"
    assert solution.iterations == 1000


def test_bland_rule_escapes_cycling():
    parsed = parse_lp(load_example("beale.lp"))
    solution = solve_parsed_lp(parsed, SolveOptions(pivot_rule="bland"))

    assert solution.status == "optimal"
    assert solution.objective_value == R(5, 4)
    assert solution.values_by_name(parsed.variable_order) == {
        "a": R(1),
        "b": R(0),
        "c": R(1),
        "d": R(0),
    }
    assert solution.iterations == 6


def test_pivot_path_is_recorded():
    parsed = parse_lp(load_example("textbook.lp"))
    solution = solve_parsed_lp(parsed, SolveOptions(record_pivots=True))

    assert solution.pivots is not None
    assert [(step.entering_column, step.leaving_row, step.leaving_column) for step in solution.pivots] == [
        (1, 1, 3),
        (0, 2, 4),
    ]
    assert [step.ratio for step in solution.pivots] == [R(6), R(2)]
    assert [step.objective_value for step in solution.pivots] == [R(30), R(36)]
    assert [step.point for step in solution.pivots] == [[R(0), R(6)], [R(2), R(6)]]
    assert solution.basis == [2, 1, 0]


def test_zero_iteration_budget_still_detects_optimal_start():
    solution = simplex_solve([-1, -1], [[1, 1]], [1], SolveOptions(max_iters=0))

    assert solution.status == "optimal"
    assert solution.iterations == 0


def test_solve_is_repeatable_and_does_not_mutate_inputs():
    c = [R(3), R(5)]
    A = [[R(1), R(0)], [R(0), R(2)], [R(3), R(2)]]
    b = [R(4), R(12), R(18)]

    first = simplex_solve(c, A, b)
    second = simplex_solve(c, A, b)

    assert first == second
    assert A == [[R(1), R(0)], [R(0), R(2)], [R(3), R(2)]]
    assert b == [R(4), R(12), R(18)]


def test_solve_options_are_immutable():
    opts = SolveOptions()
    with pytest.raises(ValidationError):
        opts.max_iters = 5  # type: ignore[misc]


def test_solution_json_uses_rational_strings():
    payload = simplex_solve([1, 1], [[3, 1], [1, 3]], [1, 1]).model_dump(mode="json")

    assert payload["status"] == "optimal"
    assert payload["objective_value"] == "1/2"
    assert payload["x"] == ["1/4", "1/4"]
