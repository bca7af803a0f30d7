from __future__ import annotations

import math
import re
from typing import Any, Union

from pydantic_core import core_schema

from .errors import ParseError, RationalOverflowError, RationalZeroDivisionError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER = re.compile(r"^([+-]?)(\d+)$")
_DECIMAL = re.compile(r"^([+-]?)(\d*)\.(\d+)$")
_FRACTION = re.compile(r"^([+-]?\d+)\s*/\s*(\d+)$")

RationalLike = Union["ExactRational", int, str]


class ExactRational:
    """
    Reduced fraction backed by signed 64-bit integers.

    The stored form always has a positive denominator and
    gcd(|numerator|, denominator) == 1; zero is 0/1. Every operation builds
    its result from the exact integer arithmetic and raises
    RationalOverflowError when the reduced result leaves the int64 range.
    """

    __slots__ = ("_num", "_den")

    def __init__(self, numerator: int = 0, denominator: int = 1) -> None:
        if isinstance(numerator, bool) or not isinstance(numerator, int):
            raise TypeError(f"numerator must be an int, got {type(numerator).__name__}")
        if isinstance(denominator, bool) or not isinstance(denominator, int):
            raise TypeError(f"denominator must be an int, got {type(denominator).__name__}")
        if denominator == 0:
            raise RationalZeroDivisionError(f"Zero denominator in {numerator}/0")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        divisor = math.gcd(numerator, denominator)
        numerator //= divisor
        denominator //= divisor
        if not INT64_MIN <= numerator <= INT64_MAX or denominator > INT64_MAX:
            raise RationalOverflowError(
                f"Rational {numerator}/{denominator} exceeds the 64-bit integer range"
            )
        self._num = numerator
        self._den = denominator

    @property
    def numerator(self) -> int:
        return self._num

    @property
    def denominator(self) -> int:
        return self._den

    # -- construction -----------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "ExactRational":
        """Parse an integer ("-3"), decimal ("0.25", "-.5") or fraction ("2/3") literal."""

        literal = text.strip()
        if not literal:
            raise ParseError("Cannot convert an empty string to a rational")

        match = _FRACTION.match(literal)
        if match:
            return cls(int(match.group(1)), int(match.group(2)))

        match = _DECIMAL.match(literal)
        if match:
            sign, int_part, frac_part = match.groups()
            denominator = 10 ** len(frac_part)
            numerator = int(int_part or "0") * denominator + int(frac_part)
            return cls(-numerator if sign == "-" else numerator, denominator)

        match = _INTEGER.match(literal)
        if match:
            return cls(int(literal))

        raise ParseError(f"Invalid numeric literal '{text}'")

    @classmethod
    def coerce(cls, value: Any) -> "ExactRational":
        if isinstance(value, ExactRational):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            return cls.parse(value)
        raise ParseError(
            f"Cannot build an exact rational from {type(value).__name__} {value!r}; "
            "pass an int or a string literal"
        )

    # -- pydantic integration ----------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(str, info_arg=False, when_used="json"),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: Any, handler: Any) -> dict:
        return {
            "type": "string",
            "pattern": r"^[+-]?(\d+|\d*\.\d+|\d+\s*/\s*\d+)$",
            "examples": ["3", "-0.25", "2/3"],
        }

    # -- arithmetic ---------------------------------------------------------

    @staticmethod
    def _other(value: Any) -> "ExactRational | None":
        if isinstance(value, ExactRational):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return ExactRational(value)
        return None

    def __add__(self, other: Any) -> "ExactRational":
        rhs = self._other(other)
        if rhs is None:
            return NotImplemented
        return ExactRational(self._num * rhs._den + rhs._num * self._den, self._den * rhs._den)

    __radd__ = __add__

    def __sub__(self, other: Any) -> "ExactRational":
        rhs = self._other(other)
        if rhs is None:
            return NotImplemented
        return ExactRational(self._num * rhs._den - rhs._num * self._den, self._den * rhs._den)

    def __rsub__(self, other: Any) -> "ExactRational":
        lhs = self._other(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: Any) -> "ExactRational":
        rhs = self._other(other)
        if rhs is None:
            return NotImplemented
        return ExactRational(self._num * rhs._num, self._den * rhs._den)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> "ExactRational":
        rhs = self._other(other)
        if rhs is None:
            return NotImplemented
        if rhs._num == 0:
            raise RationalZeroDivisionError(f"Division of {self} by zero")
        return ExactRational(self._num * rhs._den, self._den * rhs._num)

    def __rtruediv__(self, other: Any) -> "ExactRational":
        lhs = self._other(other)
        if lhs is None:
            return NotImplemented
        return lhs / self

    def __neg__(self) -> "ExactRational":
        return ExactRational(-self._num, self._den)

    def __pos__(self) -> "ExactRational":
        return self

    def __abs__(self) -> "ExactRational":
        return ExactRational(abs(self._num), self._den)

    # -- comparison -------------------------------------------------------------

    def _cmp(self, other: Any) -> "int | None":
        rhs = self._other(other)
        if rhs is None:
            return None
        left = self._num * rhs._den
        right = rhs._num * self._den
        return (left > right) - (left < right)

    def __eq__(self, other: Any) -> bool:
        result = self._cmp(other)
        if result is None:
            return NotImplemented
        return result == 0

    def __lt__(self, other: Any) -> bool:
        result = self._cmp(other)
        if result is None:
            return NotImplemented
        return result < 0

    def __le__(self, other: Any) -> bool:
        result = self._cmp(other)
        if result is None:
            return NotImplemented
        return result <= 0

    def __gt__(self, other: Any) -> bool:
        result = self._cmp(other)
        if result is None:
            return NotImplemented
        return result > 0

    def __ge__(self, other: Any) -> bool:
        result = self._cmp(other)
        if result is None:
            return NotImplemented
        return result >= 0

    def __hash__(self) -> int:
        if self._den == 1:
            return hash(self._num)
        return hash((self._num, self._den))

    # -- conversion ---------------------------------------------------------------

    def is_zero(self) -> bool:
        return self._num == 0

    def __bool__(self) -> bool:
        return self._num != 0

    def __float__(self) -> float:
        return self._num / self._den

    def __str__(self) -> str:
        if self._den == 1:
            return str(self._num)
        return f"{self._num}/{self._den}"

    def __repr__(self) -> str:
        return f"ExactRational({self._num}, {self._den})"


ZERO = ExactRational(0)
ONE = ExactRational(1)
