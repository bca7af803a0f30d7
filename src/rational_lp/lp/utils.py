import logging
from typing import Dict, List, Sequence

from ..rational import ExactRational, ZERO
from ..schemas import Constraint, ParsedLP

LOG = logging.getLogger(__name__)


def standardize_constraints(constraints: Sequence[Constraint]) -> List[Constraint]:
    """
    Rewrite every constraint as `<=`:
      - `<` is kept as `<=`
      - `>` / `>=` are negated
      - `=` becomes the original row plus its negation
    """

    standardized: List[Constraint] = []
    for cons in constraints:
        if cons.relation in ("<=", "<"):
            standardized.append(Constraint(lhs=dict(cons.lhs), relation="<=", rhs=cons.rhs))
        elif cons.relation in (">=", ">"):
            standardized.append(_negated(cons))
        elif cons.relation == "=":
            standardized.append(Constraint(lhs=dict(cons.lhs), relation="<=", rhs=cons.rhs))
            standardized.append(_negated(cons))
        else:  # pragma: no cover - Relation literal rejects anything else
            raise ValueError(f"Unknown relation '{cons.relation}'")
    return standardized


def _negated(cons: Constraint) -> Constraint:
    return Constraint(
        lhs={name: -coef for name, coef in cons.lhs.items()},
        relation="<=",
        rhs=-cons.rhs,
    )


def build_parsed_lp(
    variable_order: Sequence[str],
    objective: Dict[str, ExactRational],
    constraints: Sequence[Constraint],
) -> ParsedLP:
    """Standardize constraints and lay them out as dense rows over `variable_order`."""

    index = {name: idx for idx, name in enumerate(variable_order)}
    n = len(index)

    c = [ZERO] * n
    for name, coef in objective.items():
        if name not in index:
            raise ValueError(f"Objective references unknown variable '{name}'.")
        c[index[name]] = coef

    rows: List[List[ExactRational]] = []
    rhs_values: List[ExactRational] = []
    for cons in standardize_constraints(constraints):
        row = [ZERO] * n
        for name, coef in cons.lhs.items():
            if name not in index:
                raise ValueError(f"Constraint references unknown variable '{name}'.")
            row[index[name]] = coef
        rows.append(row)
        rhs_values.append(cons.rhs)

    parsed = ParsedLP(
        objective_maximize=True,
        variable_order=list(variable_order),
        objective_coefficients=c,
        constraint_matrix=rows,
        constraint_rhs=rhs_values,
    )
    if not parsed.has_nonnegative_rhs():
        negative = [idx for idx, value in enumerate(rhs_values) if value < 0]
        LOG.warning(
            "Standardized constraints %s have negative right-hand sides; the simplex solver will reject them.",
            negative,
        )
    return parsed
