"""
Arbitrary-precision integers.

Integer wraps a Python int so that whole-number results keep their own type
through the expression evaluator. Division and negative powers leave the
integers and return a Rational.

Author: xwest
"""

import math
import re
from fractions import Fraction

from .errors import (
    FormatError, DivisionByZeroError, UndefinedOperationError,
    create_zero_to_zero_error, create_factorial_error,
)
from .exact import ExactValue, INTEGER_RANK, RATIONAL_RANK, INTERVAL_RANK, as_value
from .interval import RationalInterval
from .provenance import Provenance
from .rational import Rational

_WHOLE_NUMBER = re.compile(r"^-?\d+$")


class Integer(ExactValue):
    """An exact whole number."""

    RANK = INTEGER_RANK
    __slots__ = ("_value",)

    def __init__(self, value=0):
        if isinstance(value, Integer):
            value = value.value
        elif isinstance(value, str):
            text = value.strip()
            if not _WHOLE_NUMBER.match(text):
                raise FormatError("Invalid integer format. Must be a whole number", source=value)
            value = int(text)
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Integer value must be an int, got {type(value).__name__}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    @property
    def is_zero(self) -> bool:
        return self._value == 0

    def lift(self, rank: int) -> ExactValue:
        if rank == INTEGER_RANK:
            return self
        if rank == RATIONAL_RANK:
            return Rational._raw(self._value, 1)
        if rank == INTERVAL_RANK:
            point = Rational._raw(self._value, 1)
            return RationalInterval(point, point)
        raise ValueError(f"Unknown rank {rank}")

    # Arithmetic

    def _add(self, other: "Integer") -> "Integer":
        return Integer(self._value + other._value)

    def _subtract(self, other: "Integer") -> "Integer":
        return Integer(self._value - other._value)

    def _multiply(self, other: "Integer") -> "Integer":
        return Integer(self._value * other._value)

    def _divide(self, other: "Integer"):
        if other._value == 0:
            raise DivisionByZeroError("Division by zero")
        quotient, remainder = divmod(self._value, other._value)
        if remainder == 0:
            return Integer(quotient)
        return Rational(self._value, other._value)

    def negate(self) -> "Integer":
        return Integer(-self._value)

    def abs(self) -> "Integer":
        return Integer(abs(self._value))

    def sign(self) -> int:
        return (self._value > 0) - (self._value < 0)

    def pow(self, exponent: int):
        """
        Raise to an integer power; negative exponents return a Rational.

        Raises:
            UndefinedOperationError: For 0^0
            DivisionByZeroError: For zero to a negative power
        """
        if exponent == 0:
            if self._value == 0:
                raise create_zero_to_zero_error()
            return Integer(1)
        if exponent < 0:
            return Rational._raw(self._value, 1).pow(exponent)
        return Integer(self._value ** exponent)

    def factorial(self) -> "Integer":
        if self._value < 0:
            raise create_factorial_error()
        return Integer(math.factorial(self._value))

    def double_factorial(self) -> "Integer":
        if self._value < 0:
            raise create_factorial_error(double=True)
        return Integer(math.prod(range(self._value, 0, -2)))

    def scale(self, radix: int, exponent: int):
        """Multiply by ``radix ** exponent``; a negative exponent gives a Rational."""
        if exponent >= 0:
            return Integer(self._value * radix ** exponent)
        return Rational(self._value, radix ** -exponent)

    def modulo(self, other) -> "Integer":
        other = Integer(as_value(other))
        if other._value == 0:
            raise DivisionByZeroError("Modulo by zero")
        return Integer(self._value % other._value)

    def gcd(self, other) -> "Integer":
        return Integer(math.gcd(self._value, Integer(as_value(other))._value))

    def lcm(self, other) -> "Integer":
        other_value = Integer(as_value(other))._value
        if self._value == 0 or other_value == 0:
            return Integer(0)
        return Integer(abs(self._value * other_value) // math.gcd(self._value, other_value))

    # Conversion

    def to_rational(self) -> Rational:
        return Rational._raw(self._value, 1)

    @classmethod
    def from_rational(cls, rational: Rational) -> "Integer":
        """
        Demote a whole-valued rational.

        Raises:
            UndefinedOperationError: If the denominator is not 1, or the value
                was written as an explicit fraction
        """
        if rational.denominator != 1:
            raise UndefinedOperationError(f"Cannot convert {rational} to an integer")
        if rational.provenance is Provenance.EXPLICIT_FRACTION:
            raise UndefinedOperationError(f"{rational} was written as a fraction and stays one")
        return cls(rational.numerator)

    def to_fraction(self) -> Fraction:
        return Fraction(self._value)

    def to_mixed_string(self) -> str:
        return str(self._value)

    def to_repeating_decimal(self, max_digits: int = 0) -> str:
        return str(self._value)

    # Comparison

    def compare_to(self, other) -> int:
        return self.to_rational().compare_to(other)

    def equals(self, other) -> bool:
        return self.compare_to(other) == 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, bool) or not isinstance(other, (ExactValue, int, Fraction)):
            return NotImplemented
        return self.to_rational() == other

    def __hash__(self) -> int:
        return hash(self._value)

    def __lt__(self, other) -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other) -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other) -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other) -> bool:
        return self.compare_to(other) >= 0

    def __abs__(self) -> "Integer":
        return self.abs()

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Integer({self._value})"
