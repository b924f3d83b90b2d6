"""
Closed intervals with exact rational endpoints.

Arithmetic follows the usual interval rules: every result contains every
value obtainable by picking one point from each operand. Two powers are
offered because they disagree on intervals that straddle zero: ``pow`` is
the tight range of x**n, ``mpow`` multiplies the interval by itself and so
treats each factor as independent.

Author: xwest
"""

import os
from fractions import Fraction
from typing import Optional

from .errors import (
    DivisionByZeroError, RangeError, UndefinedOperationError,
    create_zero_to_zero_error, create_factorial_error,
)
from .exact import ExactValue, INTERVAL_RANK, as_value
from .provenance import Provenance
from .rational import Rational


def _to_rational(value) -> Rational:
    if isinstance(value, Rational):
        return value
    if isinstance(value, str):
        return Rational(value)
    value = as_value(value)
    if value.RANK == INTERVAL_RANK:
        raise UndefinedOperationError("Nested intervals are not supported")
    return value.lift(Rational.RANK)


class RationalInterval(ExactValue):
    """
    The closed interval ``[low, high]``.

    The constructor keeps the bounds as given; use ``ordered`` when the
    endpoints may arrive in either order.
    """

    RANK = INTERVAL_RANK
    __slots__ = ("_low", "_high", "_provenance")

    def __init__(self, low, high, provenance: Provenance = Provenance.PLAIN):
        self._low = _to_rational(low)
        self._high = _to_rational(high)
        self._provenance = provenance

    @classmethod
    def ordered(cls, a, b, provenance: Provenance = Provenance.PLAIN) -> "RationalInterval":
        a, b = _to_rational(a), _to_rational(b)
        if b < a:
            a, b = b, a
        return cls(a, b, provenance)

    @classmethod
    def point(cls, value, provenance: Provenance = Provenance.PLAIN) -> "RationalInterval":
        value = _to_rational(value)
        return cls(value, value, provenance)

    # Properties

    @property
    def low(self) -> Rational:
        return self._low

    @property
    def high(self) -> Rational:
        return self._high

    @property
    def provenance(self) -> Provenance:
        return self._provenance

    @property
    def is_point(self) -> bool:
        return self._low == self._high

    @property
    def is_zero(self) -> bool:
        return self._low.is_zero and self._high.is_zero

    def with_provenance(self, provenance: Provenance) -> "RationalInterval":
        if provenance is self._provenance:
            return self
        return RationalInterval(self._low, self._high, provenance)

    def lift(self, rank: int) -> ExactValue:
        if rank != INTERVAL_RANK:
            raise ValueError(f"Cannot lower an interval to rank {rank}")
        return self

    # Set operations

    def contains_zero(self) -> bool:
        return self._low.numerator <= 0 <= self._high.numerator

    def contains_value(self, value) -> bool:
        value = _to_rational(value)
        return self._low <= value <= self._high

    def contains(self, other: "RationalInterval") -> bool:
        return self._low <= other._low and other._high <= self._high

    def overlaps(self, other: "RationalInterval") -> bool:
        return not (self._high < other._low or other._high < self._low)

    def intersection(self, other: "RationalInterval") -> Optional["RationalInterval"]:
        """Common part of two intervals, or None when they are disjoint."""
        if not self.overlaps(other):
            return None
        return RationalInterval(max(self._low, other._low), min(self._high, other._high))

    def union(self, other: "RationalInterval") -> Optional["RationalInterval"]:
        """Smallest interval covering both, or None when a gap lies between them."""
        if not self.overlaps(other):
            return None
        return RationalInterval(min(self._low, other._low), max(self._high, other._high))

    def midpoint(self) -> Rational:
        return (self._low + self._high) / Rational._raw(2, 1)

    def mediant(self) -> Rational:
        return Rational(
            self._low.numerator + self._high.numerator,
            self._low.denominator + self._high.denominator,
        )

    def width(self) -> Rational:
        return self._high - self._low

    # Arithmetic

    def _add(self, other: "RationalInterval") -> "RationalInterval":
        return RationalInterval(self._low + other._low, self._high + other._high)

    def _subtract(self, other: "RationalInterval") -> "RationalInterval":
        return RationalInterval(self._low - other._high, self._high - other._low)

    def _multiply(self, other: "RationalInterval") -> "RationalInterval":
        products = [
            self._low * other._low,
            self._low * other._high,
            self._high * other._low,
            self._high * other._high,
        ]
        return RationalInterval(min(products), max(products))

    def _divide(self, other: "RationalInterval") -> "RationalInterval":
        if other.contains_zero():
            if other.is_zero:
                raise DivisionByZeroError("Division by zero")
            raise DivisionByZeroError(
                f"Cannot divide by an interval containing zero: {other}",
                help_text="Split the divisor at zero and divide by each half",
            )
        quotients = [
            self._low / other._low,
            self._low / other._high,
            self._high / other._low,
            self._high / other._high,
        ]
        return RationalInterval(min(quotients), max(quotients))

    def negate(self) -> "RationalInterval":
        return RationalInterval(self._high.negate(), self._low.negate(), self._provenance)

    def reciprocate(self) -> "RationalInterval":
        if self.contains_zero():
            raise DivisionByZeroError(f"Cannot reciprocate an interval containing zero: {self}")
        return RationalInterval(self._high.reciprocal(), self._low.reciprocal())

    def pow(self, exponent: int) -> "RationalInterval":
        """
        Tight image of the interval under x -> x**exponent.

        Raises:
            UndefinedOperationError: For exponent 0 when zero is in the interval
            DivisionByZeroError: For a negative exponent when zero is in the interval
        """
        if exponent == 0:
            if self.is_zero:
                raise create_zero_to_zero_error()
            if self.contains_zero():
                raise UndefinedOperationError(
                    "Cannot raise an interval containing zero to the power of zero"
                )
            return RationalInterval.point(Rational._raw(1, 1))

        if exponent < 0:
            if self.contains_zero():
                raise DivisionByZeroError(
                    "Cannot raise an interval containing zero to a negative power"
                )
            return self.pow(-exponent).reciprocate()

        low_power = self._low.pow(exponent)
        high_power = self._high.pow(exponent)

        if exponent % 2 == 0:
            if self.contains_zero():
                return RationalInterval(Rational._raw(0, 1), max(low_power, high_power))
            if self._high.numerator <= 0:
                return RationalInterval(high_power, low_power)

        return RationalInterval(low_power, high_power)

    def mpow(self, exponent: int) -> "RationalInterval":
        """
        Multiply the interval by itself ``exponent`` times.

        The result keeps its width through later promotion.
        """
        if exponent < 0:
            return self.reciprocate().mpow(-exponent)

        result = RationalInterval.point(Rational._raw(1, 1))
        if exponent > 0:
            result = self
            for _ in range(exponent - 1):
                result = result._multiply(self)
        return result.with_provenance(Provenance.SKIP_PROMOTION)

    def _point_integer(self, double: bool) -> int:
        if not self.is_point or not self._low.is_integer or self._low.numerator < 0:
            raise create_factorial_error(double)
        return self._low.numerator

    def factorial(self) -> "RationalInterval":
        from .integer import Integer
        value = Integer(self._point_integer(double=False)).factorial()
        return RationalInterval.point(value, self._provenance)

    def double_factorial(self) -> "RationalInterval":
        from .integer import Integer
        value = Integer(self._point_integer(double=True)).double_factorial()
        return RationalInterval.point(value, self._provenance)

    def scale(self, radix: int, exponent: int) -> "RationalInterval":
        return RationalInterval(
            self._low.scale(radix, exponent),
            self._high.scale(radix, exponent),
            self._provenance,
        )

    # Comparison

    def equals(self, other) -> bool:
        return self == other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RationalInterval):
            if isinstance(other, (ExactValue, int, Fraction)):
                return False
            return NotImplemented
        return self._low == other._low and self._high == other._high

    def __hash__(self) -> int:
        return hash((self._low, self._high))

    # Display

    def __str__(self) -> str:
        return f"{self._low}:{self._high}"

    def __repr__(self) -> str:
        return f"RationalInterval({self._low!r}, {self._high!r})"

    def to_mixed_string(self) -> str:
        return f"{self._low.to_mixed_string()}:{self._high.to_mixed_string()}"

    def to_repeating_decimal(self, **kwargs) -> str:
        return (
            f"{self._low.to_repeating_decimal(**kwargs)}:"
            f"{self._high.to_repeating_decimal(**kwargs)}"
        )

    # Uncertainty notation

    def to_compact_decimal(self) -> str:
        """
        Share the leading digits of both endpoints: ``1.2345:1.2355`` becomes
        ``1.23[45,55]``. Endpoints without a common tail of equal length
        print as ``low:high``.
        """
        low, high = _decimal_text(self._low), _decimal_text(self._high)
        fallback = f"{low}:{high}"
        if "#" in low or "#" in high:
            return fallback

        prefix = os.path.commonprefix([low, high])
        if len(prefix) <= 1 or (prefix.startswith("-") and len(prefix) <= 2):
            return fallback
        low_rest, high_rest = low[len(prefix):], high[len(prefix):]
        if len(low_rest) != len(high_rest) or not (low_rest.isdigit() and high_rest.isdigit()):
            return fallback
        return f"{prefix}[{low_rest},{high_rest}]"

    def to_symmetric_decimal(self) -> str:
        """
        ``midpoint[+-offset]`` with the offset counted in units of the digit
        after the midpoint's last one. Falls back to the relative form when
        the midpoint has no terminating decimal.
        """
        center = self.midpoint()
        places = center.decimal_places()
        if places is None:
            return self.to_relative_decimal()
        offset = self._high - center
        if places:
            offset = offset.scale(10, places + 1)
        return f"{center.to_decimal(places)}[+-{_decimal_text(offset)}]"

    def to_relative_decimal(self) -> str:
        """
        ``x[+above,-below]`` around the shortest decimal inside the interval,
        collapsing to ``x[+-offset]`` when both offsets agree.
        """
        center = self._shortest_precise_decimal()
        places = center.decimal_places()
        if places is None:
            return self.to_compact_decimal()

        below, above = center - self._low, self._high - center
        if places:
            below, above = below.scale(10, places + 1), above.scale(10, places + 1)
        text = center.to_decimal(places)
        if below == above:
            return f"{text}[+-{_decimal_text(above)}]"
        return f"{text}[+{_decimal_text(above)},-{_decimal_text(below)}]"

    def _shortest_precise_decimal(self) -> Rational:
        """Fewest-digit decimal in the interval, nearest the midpoint; the midpoint after 20 digits."""
        middle = self.midpoint()
        for precision in range(21):
            lowest = self._low.scale(10, precision).ceil()
            highest = self._high.scale(10, precision).floor()
            if lowest > highest:
                continue
            target = middle.scale(10, precision)
            nearest = target.floor()
            # ties go to the smaller candidate
            if (target - Rational._raw(nearest, 1)).scale(2, 1) > Rational._raw(1, 1):
                nearest += 1
            nearest = min(max(nearest, lowest), highest)
            return Rational(nearest, 10 ** precision)
        return middle

    def shortest_decimal(self, base: int = 10) -> Optional[Rational]:
        """
        The number in the interval with the smallest power-of-``base``
        denominator, the lowest one when several share it.

        A point interval whose value needs a denominator beyond ``base ** 50``
        gives None.

        Raises:
            RangeError: If base is below 2
        """
        if base < 2:
            raise RangeError(f"Base must be greater than 1, got {base}")

        if self.is_point:
            for exponent in range(51):
                scaled = self._low.scale(base, exponent)
                if scaled.is_integer:
                    return Rational(scaled.numerator, base ** exponent)
            return None

        exponent = 0
        while True:
            lowest = self._low.scale(base, exponent).ceil()
            if lowest <= self._high.scale(base, exponent).floor():
                return Rational(lowest, base ** exponent)
            exponent += 1


def _decimal_text(value: Rational) -> str:
    """Exact decimal: plain when it terminates, ``I.F#R`` otherwise."""
    places = value.decimal_places()
    if places is not None:
        return value.to_decimal(places)
    return value.repeating_decimal_with_period()[0]
