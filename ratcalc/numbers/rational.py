"""
Exact rational numbers over Python's unbounded integers.

Values are always stored reduced with a positive denominator. Besides the
field operations this module carries the display conversions the REPL
offers: mixed numbers, repeating decimals and continued fractions.

Author: xwest
"""

import math
import re
from fractions import Fraction
from typing import List, Optional, Sequence, Tuple

from .errors import (
    FormatError, RangeError, DivisionByZeroError, UndefinedOperationError,
    create_zero_to_zero_error,
)
from .exact import ExactValue, INTEGER_RANK, RATIONAL_RANK, INTERVAL_RANK, as_value
from .provenance import Provenance

# Long division gives up after this many fractional digits
MAX_REPEATING_DIGITS = 1000

_DECIMAL_STRING = re.compile(r"^([+-]?)(\d*)(?:\.(\d*))?$")
_FRACTION_STRING = re.compile(r"^([+-]?\d+)/([+-]?\d+)$")


def _parse_number_string(text: str) -> Tuple[int, int]:
    """Split ``"1.25"``, ``"-3"`` or ``"7/4"`` into numerator and denominator."""
    stripped = text.strip()

    match = _FRACTION_STRING.match(stripped)
    if match:
        return int(match.group(1)), int(match.group(2))

    match = _DECIMAL_STRING.match(stripped)
    if not match or not (match.group(2) or match.group(3)):
        raise FormatError("Invalid number format", source=text)

    sign, whole, fraction = match.group(1), match.group(2) or "0", match.group(3) or ""
    numerator = int(whole + fraction)
    if sign == "-":
        numerator = -numerator
    return numerator, 10 ** len(fraction)


class Rational(ExactValue):
    """
    A reduced fraction ``numerator/denominator``.

    Example:
        >>> Rational(6, -4)
        Rational(-3, 2)
        >>> Rational("1.25") + 1
        Rational(9, 4)
    """

    RANK = RATIONAL_RANK
    __slots__ = ("_numerator", "_denominator", "_provenance")

    def __init__(self, numerator=0, denominator=1, provenance: Provenance = Provenance.PLAIN):
        if isinstance(numerator, str):
            numerator, scale = _parse_number_string(numerator)
            denominator = denominator * scale
        elif isinstance(numerator, ExactValue) and numerator.RANK == INTEGER_RANK:
            numerator = numerator.value
        elif isinstance(numerator, Fraction):
            numerator, denominator = numerator.numerator, numerator.denominator * denominator

        if isinstance(denominator, ExactValue) and denominator.RANK == INTEGER_RANK:
            denominator = denominator.value

        if not isinstance(numerator, int) or not isinstance(denominator, int):
            raise TypeError("Rational components must be integers")

        if denominator == 0:
            raise DivisionByZeroError("Denominator cannot be zero")

        if denominator < 0:
            numerator, denominator = -numerator, -denominator

        divisor = math.gcd(numerator, denominator)
        if divisor > 1:
            numerator //= divisor
            denominator //= divisor
        if numerator == 0:
            denominator = 1

        self._numerator = numerator
        self._denominator = denominator
        self._provenance = provenance

    @classmethod
    def _raw(cls, numerator: int, denominator: int) -> "Rational":
        """Build from components already known to be reduced."""
        value = cls.__new__(cls)
        value._numerator = numerator
        value._denominator = denominator
        value._provenance = Provenance.PLAIN
        return value

    # Properties

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def provenance(self) -> Provenance:
        return self._provenance

    @property
    def is_integer(self) -> bool:
        return self._denominator == 1

    @property
    def is_zero(self) -> bool:
        return self._numerator == 0

    def with_provenance(self, provenance: Provenance) -> "Rational":
        if provenance is self._provenance:
            return self
        value = Rational._raw(self._numerator, self._denominator)
        value._provenance = provenance
        return value

    def lift(self, rank: int) -> ExactValue:
        if rank == RATIONAL_RANK:
            return self
        if rank == INTERVAL_RANK:
            from .interval import RationalInterval
            return RationalInterval(self, self)
        raise ValueError(f"Cannot lower a Rational to rank {rank}")

    # Arithmetic

    def _add(self, other: "Rational") -> "Rational":
        return Rational(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def _subtract(self, other: "Rational") -> "Rational":
        return Rational(
            self._numerator * other._denominator - other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def _multiply(self, other: "Rational") -> "Rational":
        return Rational(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def _divide(self, other: "Rational") -> "Rational":
        if other._numerator == 0:
            raise DivisionByZeroError("Division by zero")
        return Rational(
            self._numerator * other._denominator,
            self._denominator * other._numerator,
        )

    def negate(self) -> "Rational":
        value = Rational._raw(-self._numerator, self._denominator)
        value._provenance = self._provenance
        return value

    def abs(self) -> "Rational":
        return Rational._raw(abs(self._numerator), self._denominator)

    def reciprocal(self) -> "Rational":
        if self._numerator == 0:
            raise DivisionByZeroError("Cannot take the reciprocal of zero")
        return Rational(self._denominator, self._numerator)

    def pow(self, exponent: int) -> "Rational":
        """
        Raise to an integer power.

        Raises:
            UndefinedOperationError: For 0^0
            DivisionByZeroError: For zero to a negative power
        """
        if exponent == 0:
            if self._numerator == 0:
                raise create_zero_to_zero_error()
            return Rational._raw(1, 1)

        if exponent < 0:
            if self._numerator == 0:
                raise DivisionByZeroError("Zero cannot be raised to a negative power")
            return Rational(self._denominator ** -exponent, self._numerator ** -exponent)

        return Rational._raw(self._numerator ** exponent, self._denominator ** exponent)

    def scale(self, radix: int, exponent: int) -> "Rational":
        """Multiply by ``radix ** exponent``."""
        if exponent >= 0:
            return Rational(self._numerator * radix ** exponent, self._denominator)
        return Rational(self._numerator, self._denominator * radix ** -exponent)

    def floor(self) -> int:
        return self._numerator // self._denominator

    def ceil(self) -> int:
        return -(-self._numerator // self._denominator)

    # Comparison

    def compare_to(self, other) -> int:
        other = as_value(other)
        if other.RANK == INTERVAL_RANK:
            raise UndefinedOperationError("Cannot order a rational against an interval")
        other = other.lift(RATIONAL_RANK)
        left = self._numerator * other._denominator
        right = other._numerator * self._denominator
        return (left > right) - (left < right)

    def equals(self, other) -> bool:
        return self.compare_to(other) == 0

    def less_than(self, other) -> bool:
        return self.compare_to(other) < 0

    def greater_than(self, other) -> bool:
        return self.compare_to(other) > 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, bool) or not isinstance(other, (ExactValue, int, Fraction)):
            return NotImplemented
        other = as_value(other)
        if other.RANK == INTERVAL_RANK:
            return False
        return self.compare_to(other) == 0

    def __hash__(self) -> int:
        if self._denominator == 1:
            return hash(self._numerator)
        return hash(Fraction(self._numerator, self._denominator))

    def __lt__(self, other) -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other) -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other) -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other) -> bool:
        return self.compare_to(other) >= 0

    def __abs__(self) -> "Rational":
        return self.abs()

    # Conversion

    def to_fraction(self) -> Fraction:
        return Fraction(self._numerator, self._denominator)

    @classmethod
    def from_continued_fraction(cls, terms: Sequence[int]) -> "Rational":
        """
        Fold continued fraction coefficients ``[a0; a1, ..., ak]`` into a value.

        Args:
            terms: The integer part followed by strictly positive terms

        Raises:
            FormatError: Empty sequence, or a non-positive term after the first
        """
        coefficients = [int(term) for term in terms]
        if not coefficients:
            raise FormatError("Continued fraction must have at least one term")

        for term in coefficients[1:]:
            if term <= 0:
                raise FormatError(f"Continued fraction terms must be positive integers: {term}")

        numerator, denominator = coefficients[-1], 1
        for term in reversed(coefficients[:-1]):
            numerator, denominator = term * numerator + denominator, numerator
        return cls(numerator, denominator)

    def to_continued_fraction(self) -> List[int]:
        """Euclid's algorithm with floor division, so only the first term can be negative."""
        terms = []
        numerator, denominator = self._numerator, self._denominator
        while True:
            quotient, remainder = divmod(numerator, denominator)
            terms.append(quotient)
            if remainder == 0:
                return terms
            numerator, denominator = denominator, remainder

    # Display

    def __str__(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def to_mixed_string(self) -> str:
        """``w..n/d`` with the sign on the whole part, e.g. ``-2..1/4``."""
        if self._denominator == 1:
            return str(self._numerator)

        magnitude = abs(self._numerator)
        whole, remainder = divmod(magnitude, self._denominator)
        sign = "-" if self._numerator < 0 else ""
        if whole == 0:
            return f"{sign}{remainder}/{self._denominator}"
        return f"{sign}{whole}..{remainder}/{self._denominator}"

    def _long_division(self, max_digits: int) -> Tuple[List[str], Optional[int]]:
        """
        Fractional digits of ``|self|`` up to the start of their cycle.

        Returns the digits and the index where the repeating block starts:
        None when the expansion terminates, -1 when no cycle closes within
        ``max_digits`` digits.
        """
        remainder = abs(self._numerator) % self._denominator
        digits: List[str] = []
        seen = {}
        while remainder:
            if remainder in seen:
                return digits, seen[remainder]
            if len(digits) >= max_digits:
                return digits, -1
            seen[remainder] = len(digits)
            digit, remainder = divmod(remainder * 10, self._denominator)
            digits.append(str(digit))
        return digits, None

    def repeating_decimal_with_period(self, max_digits: int = MAX_REPEATING_DIGITS) -> Tuple[str, int]:
        """
        Render as ``I.F#R`` together with the length of the repeating block.

        The period is 0 for terminating expansions. An expansion whose cycle
        does not close within ``max_digits`` digits is cut off with ``...``
        and reported with period -1.
        """
        sign = "-" if self._numerator < 0 else ""
        whole = abs(self._numerator) // self._denominator
        if self._denominator == 1:
            return f"{sign}{whole}", 0

        digits, start = self._long_division(max_digits)
        if start is None:
            return f"{sign}{whole}.{''.join(digits)}#0", 0
        if start < 0:
            return f"{sign}{whole}.{''.join(digits)}...", -1
        prefix, cycle = "".join(digits[:start]), "".join(digits[start:])
        return f"{sign}{whole}.{prefix}#{cycle}", len(cycle)

    def to_repeating_decimal(self, max_digits: int = MAX_REPEATING_DIGITS) -> str:
        """
        Render as ``I.F#R`` by long division.

        Terminating expansions end in ``#0``; integers print bare.

        Raises:
            RangeError: If the expansion needs more than ``max_digits`` digits
        """
        text, period = self.repeating_decimal_with_period(max_digits)
        if period < 0:
            raise RangeError(
                f"Decimal expansion of {self} exceeds {max_digits} digits",
                help_text="Use the fraction or mixed display for this value",
            )
        return text

    def decimal_places(self) -> Optional[int]:
        """Digits after the point when the decimal expansion terminates, else None."""
        denominator = self._denominator
        twos = fives = 0
        while denominator % 2 == 0:
            denominator //= 2
            twos += 1
        while denominator % 5 == 0:
            denominator //= 5
            fives += 1
        if denominator != 1:
            return None
        return max(twos, fives)

    def to_decimal(self, max_digits: int = 20) -> str:
        """Plain decimal cut (not rounded) after ``max_digits`` places."""
        sign = "-" if self._numerator < 0 else ""
        whole, remainder = divmod(abs(self._numerator), self._denominator)
        digits = []
        while remainder and len(digits) < max_digits:
            digit, remainder = divmod(remainder * 10, self._denominator)
            digits.append(str(digit))
        if not digits:
            return f"{sign}{whole}"
        return f"{sign}{whole}.{''.join(digits)}"

    def to_scientific_notation(self, precision: int = 11) -> str:
        """
        ``d.dddE+n`` with ``precision`` significant digits, cut not rounded.

        >>> Rational(1, 8).to_scientific_notation()
        '1.25E-1'
        """
        if self._numerator == 0:
            return "0"

        numerator, denominator = abs(self._numerator), self._denominator
        exponent = len(str(numerator)) - len(str(denominator))
        if exponent >= 0:
            below = numerator < denominator * 10 ** exponent
        else:
            below = numerator * 10 ** -exponent < denominator
        if below:
            exponent -= 1

        mantissa = Rational(numerator, denominator).scale(10, -exponent)
        sign = "-" if self._numerator < 0 else ""
        return f"{sign}{mantissa.to_decimal(max(precision - 1, 0))}E{exponent:+d}"
