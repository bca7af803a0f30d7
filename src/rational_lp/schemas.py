from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Literal, List, Dict, Optional

import numpy as np

from .errors import SolutionUnavailableError
from .rational import ExactRational

Relation = Literal["<=", ">=", "<", ">", "="]
PivotRule = Literal["dantzig", "bland"]
LinearStatus = Literal["unique", "no_solution", "infinite_solutions", "numerical_error"]
SimplexStatus = Literal["optimal", "infinite_solutions", "unbounded", "iteration_limit", "internal_error"]


class Constraint(BaseModel):
    """One parsed constraint line entry before standardization to `<=` form."""

    lhs: Dict[str, ExactRational] = Field(default_factory=dict)
    relation: Relation
    rhs: ExactRational


class ParsedLP(BaseModel):
    # Always maximize: a minimize objective is negated while parsing.
    objective_maximize: bool = True
    variable_order: List[str]
    objective_coefficients: List[ExactRational]
    constraint_matrix: List[List[ExactRational]]
    constraint_rhs: List[ExactRational]

    @model_validator(mode="after")
    def _check_shape(self) -> "ParsedLP":
        n = len(self.variable_order)
        if len(set(self.variable_order)) != n:
            raise ValueError("variable_order contains duplicate names")
        if len(self.objective_coefficients) != n:
            raise ValueError(
                f"objective has {len(self.objective_coefficients)} coefficients for {n} variables"
            )
        for idx, row in enumerate(self.constraint_matrix):
            if len(row) != n:
                raise ValueError(f"constraint row {idx} has {len(row)} entries for {n} variables")
        if len(self.constraint_rhs) != len(self.constraint_matrix):
            raise ValueError(
                f"{len(self.constraint_rhs)} right-hand sides for {len(self.constraint_matrix)} rows"
            )
        return self

    @property
    def num_variables(self) -> int:
        return len(self.variable_order)

    @property
    def num_constraints(self) -> int:
        return len(self.constraint_matrix)

    def has_nonnegative_rhs(self) -> bool:
        return all(value >= 0 for value in self.constraint_rhs)


class SolveOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_iters: int = Field(default=1000, ge=0)
    pivot_rule: PivotRule = "dantzig"
    record_pivots: bool = False


class PivotStep(BaseModel):
    iteration: int
    entering_column: int
    leaving_row: int
    leaving_column: int
    ratio: ExactRational
    objective_value: ExactRational
    point: List[ExactRational]


class SimplexSolution(BaseModel):
    status: SimplexStatus
    objective_value: Optional[ExactRational] = None
    x: Optional[List[ExactRational]] = None
    basis: Optional[List[int]] = None
    iterations: int = 0
    pivots: Optional[List[PivotStep]] = None
    message: str = ""

    @model_validator(mode="after")
    def _check_payload(self) -> "SimplexSolution":
        if self.has_optimal_solution and (self.objective_value is None or self.x is None):
            raise ValueError(f"status '{self.status}' requires objective_value and x")
        return self

    @property
    def has_optimal_solution(self) -> bool:
        return self.status in ("optimal", "infinite_solutions")

    def values_by_name(self, variable_order: List[str]) -> Dict[str, ExactRational]:
        if not self.has_optimal_solution or self.x is None:
            raise SolutionUnavailableError(
                f"Variable values are only defined for optimal solutions (status '{self.status}')."
            )
        if len(variable_order) != len(self.x):
            raise ValueError(f"{len(variable_order)} names for {len(self.x)} variable values")
        return dict(zip(variable_order, self.x))


class LinearSystemSolution(BaseModel):
    status: LinearStatus
    x: Optional[List[float]] = None
    rank: Optional[int] = None
    augmented_rank: Optional[int] = None
    residual: Optional[float] = None
    message: str = ""

    @property
    def has_unique_solution(self) -> bool:
        return self.status == "unique"

    @property
    def solution_vector(self) -> np.ndarray:
        if self.status != "unique" or self.x is None:
            raise SolutionUnavailableError(
                f"Solution vector is only available for unique solutions (status '{self.status}')."
            )
        return np.asarray(self.x, dtype=float)
