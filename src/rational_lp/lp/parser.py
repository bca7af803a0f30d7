import logging
import re
from collections import OrderedDict
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..errors import ParseError
from ..rational import ExactRational
from ..schemas import Constraint, ParsedLP
from .utils import build_parsed_lp

LOG = logging.getLogger(__name__)

_OBJECTIVE = re.compile(r"^(maximize|minimize)\s*:?(.*)$", re.IGNORECASE)
_CONSTRAINTS_KEYWORD = re.compile(
    r"^(s\.t\.|(?:constraints|subject\s+to|st)(?=$|\s|:))\s*:?(.*)$", re.IGNORECASE
)
_VARIABLE = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")
# Preference order matters: "<=" must be tried before "<" and "=".
_RELATIONS = ("<=", ">=", "<", ">", "=")


class _State(Enum):
    EXPECT_OBJECTIVE = "expect_objective"
    EXPECT_CONSTRAINTS_KEYWORD = "expect_constraints_keyword"
    EXPECT_CONSTRAINTS = "expect_constraints"


def parse_lp(text: str) -> ParsedLP:
    """
    Parse a textual LP such as

        Maximize: 3x1 + 5x2
        Subject To: x1 <= 4, 2x2 <= 12, 3x1 + 2x2 <= 18

    into its standardized matrix form. A minimize objective is negated so the
    result is always a maximization over `<=` rows.
    """

    if not text or not text.strip():
        raise ParseError("LP text is empty.")
    return _LPTextParser().run(text)


class _LPTextParser:
    """Holds the state of one parse; a new instance is built for every call."""

    def __init__(self) -> None:
        self.state = _State.EXPECT_OBJECTIVE
        self.variables: "OrderedDict[str, int]" = OrderedDict()
        self.objective: Optional[Dict[str, ExactRational]] = None
        self.constraints: List[Constraint] = []

    def run(self, text: str) -> ParsedLP:
        for lineno, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.split("#", 1)[0].strip()
            if not line:
                continue
            try:
                self._process_line(line)
            except ParseError as exc:
                raise ParseError(f"Line {lineno}: {exc}") from exc

        if self.objective is None:
            raise ParseError("Objective missing: expected a 'maximize' or 'minimize' line.")
        if not self.constraints:
            raise ParseError("Constraints missing or empty.")

        return build_parsed_lp(list(self.variables), self.objective, self.constraints)

    def _process_line(self, line: str) -> None:
        if self.state is _State.EXPECT_OBJECTIVE:
            self._parse_objective_line(line)
            self._transition(_State.EXPECT_CONSTRAINTS_KEYWORD)
        elif self.state is _State.EXPECT_CONSTRAINTS_KEYWORD:
            keyword = _CONSTRAINTS_KEYWORD.match(line)
            if keyword:
                remainder = keyword.group(2).strip()
                if remainder:
                    self._parse_constraint_line(remainder)
            else:
                # The constraints keyword is optional.
                self._parse_constraint_line(line)
            self._transition(_State.EXPECT_CONSTRAINTS)
        else:
            self._parse_constraint_line(line)

    def _transition(self, state: _State) -> None:
        LOG.debug("Parser state %s -> %s", self.state.value, state.value)
        self.state = state

    def _parse_objective_line(self, line: str) -> None:
        match = _OBJECTIVE.match(line)
        if not match:
            raise ParseError(f"Expected 'maximize' or 'minimize' objective, got '{line}'.")
        sense_word, expr_text = match.groups()
        if not expr_text.strip():
            raise ParseError("Objective expression missing.")
        coeffs = self._parse_expression(expr_text)
        if sense_word.lower() == "minimize":
            coeffs = OrderedDict((name, -coef) for name, coef in coeffs.items())
        self.objective = coeffs

    def _parse_constraint_line(self, line: str) -> None:
        for piece in line.split(","):
            piece = piece.strip()
            if piece:
                self.constraints.append(self._parse_single_constraint(piece))

    def _parse_single_constraint(self, text: str) -> Constraint:
        relation, position = _find_relation(text)
        lhs_text = text[:position].strip()
        rhs_text = text[position + len(relation) :].strip()
        if not lhs_text:
            raise ParseError(f"Missing left-hand side in constraint '{text}'.")
        if not rhs_text:
            raise ParseError(f"Missing right-hand side in constraint '{text}'.")

        lhs = self._parse_expression(lhs_text)
        try:
            rhs = ExactRational.parse(rhs_text)
        except ParseError as exc:
            raise ParseError(f"Cannot parse right-hand side '{rhs_text}': {exc}") from exc
        return Constraint(lhs=lhs, relation=relation, rhs=rhs)

    def _parse_expression(self, text: str) -> "OrderedDict[str, ExactRational]":
        coeffs: "OrderedDict[str, ExactRational]" = OrderedDict()
        term = ""
        negative = False
        for char in text:
            if char.isspace():
                continue
            if char in "+-":
                if term:
                    self._add_term(coeffs, term, negative, text)
                    term = ""
                    negative = False
                if char == "-":
                    negative = not negative
                continue
            term += char

        if not term:
            raise ParseError(f"Expression '{text}' ends without a term.")
        self._add_term(coeffs, term, negative, text)
        return coeffs

    def _add_term(
        self,
        coeffs: "OrderedDict[str, ExactRational]",
        term: str,
        negative: bool,
        expr: str,
    ) -> None:
        coef, name = _split_term(term, expr)
        if negative:
            coef = -coef
        self.variables.setdefault(name, len(self.variables))
        coeffs[name] = coeffs[name] + coef if name in coeffs else coef


def _find_relation(text: str) -> Tuple[str, int]:
    for relation in _RELATIONS:
        position = text.find(relation)
        if position != -1:
            return relation, position
    raise ParseError(f"No relational operator found in constraint '{text}'.")


def _split_term(term: str, expr: str) -> Tuple[ExactRational, str]:
    first_letter = next((idx for idx, char in enumerate(term) if char.isalpha()), None)
    if first_letter is None:
        raise ParseError(f"Constant term '{term}' in expression '{expr}' is not supported.")

    coef_text = term[:first_letter]
    name = term[first_letter:]
    if not _VARIABLE.match(name):
        raise ParseError(f"Invalid variable name '{name}' in expression '{expr}'.")

    if coef_text.endswith("*"):
        coef_text = coef_text[:-1]
    if not coef_text:
        return ExactRational(1), name
    try:
        return ExactRational.parse(coef_text), name
    except ParseError as exc:
        raise ParseError(f"Cannot parse coefficient '{coef_text}' of '{name}': {exc}") from exc
