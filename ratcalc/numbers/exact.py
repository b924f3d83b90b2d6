"""
Shared machinery for the three exact value types.

Integer, Rational and RationalInterval form a closed family ordered by rank.
A binary operation lifts both operands to the higher rank and then runs the
same-type implementation, so every operator has exactly one code path per
type instead of a chain of isinstance checks.

Author: xwest
"""

from fractions import Fraction

from .provenance import Provenance

INTEGER_RANK = 0
RATIONAL_RANK = 1
INTERVAL_RANK = 2


class ExactValue:
    """Base class for Integer, Rational and RationalInterval."""

    RANK = -1
    __slots__ = ()

    @property
    def provenance(self) -> Provenance:
        return Provenance.PLAIN

    def with_provenance(self, provenance: Provenance) -> "ExactValue":
        return self

    def lift(self, rank: int) -> "ExactValue":
        """Convert to the representation with the given rank."""
        raise NotImplementedError

    def _lift_pair(self, other):
        other = as_value(other)
        rank = max(self.RANK, other.RANK)
        return self.lift(rank), other.lift(rank)

    # Arithmetic entry points

    def add(self, other):
        left, right = self._lift_pair(other)
        return left._add(right)

    def subtract(self, other):
        left, right = self._lift_pair(other)
        return left._subtract(right)

    def multiply(self, other):
        left, right = self._lift_pair(other)
        return left._multiply(right)

    def divide(self, other):
        left, right = self._lift_pair(other)
        return left._divide(right)

    def E(self, exponent: int):
        """Multiply by 10**exponent."""
        return self.scale(10, exponent)

    def scale(self, radix: int, exponent: int):
        raise NotImplementedError

    # Python operators

    def __add__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return as_value(other).add(self)

    def __sub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return as_value(other).subtract(self)

    def __mul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return as_value(other).multiply(self)

    def __truediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return as_value(other).divide(self)

    def __neg__(self):
        return self.negate()

    def __pow__(self, exponent):
        if not isinstance(exponent, int):
            return NotImplemented
        return self.pow(exponent)


def _is_operand(value) -> bool:
    return isinstance(value, (ExactValue, Fraction)) or (
        isinstance(value, int) and not isinstance(value, bool)
    )


def as_value(value) -> ExactValue:
    """Wrap Python ints and Fractions; pass exact values through."""
    if isinstance(value, ExactValue):
        return value

    from .integer import Integer
    from .rational import Rational

    if isinstance(value, bool):
        raise TypeError("bool is not an exact numeric value")
    if isinstance(value, int):
        return Integer(value)
    if isinstance(value, Fraction):
        return Rational(value.numerator, value.denominator)
    raise TypeError(f"Cannot use {type(value).__name__} as an exact value")
