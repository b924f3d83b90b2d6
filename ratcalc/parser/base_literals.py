"""
Numerals written in an arbitrary digit alphabet.

``parse_base_notation`` reads the body of a ``digits[radix]`` literal, or a
bare numeral when the expression has a non-decimal input base. The body may
be an integer, a fraction, a mixed number, a radix-point fraction, an
interval, and may carry a scientific exponent in the same base.

Author: xwest
"""

from typing import Union

from ..logging_config import get_logger
from ..numbers.base_system import BaseSystem
from ..numbers.errors import (
    FormatError, InvalidDigitError, DivisionByZeroError, UndefinedOperationError,
)
from ..numbers.integer import Integer
from ..numbers.interval import RationalInterval
from ..numbers.provenance import Provenance
from ..numbers.rational import Rational

logger = get_logger(__name__)

BaseValue = Union[Integer, Rational, RationalInterval]


def _split_exponent(text: str, base_system: BaseSystem):
    """Split off a trailing ``E`` / ``_^`` exponent, returning (mantissa, exponent or None)."""
    if base_system.uses_alternate_exponent:
        index = text.find("_^")
        width = 2
    else:
        index = text.upper().find("E")
        width = 1
    if index < 0:
        return text, None
    return text[:index], text[index + width:]


def _demote(value: Rational, type_aware: bool) -> Union[Integer, Rational]:
    if type_aware and value.is_integer:
        return Integer(value.numerator)
    return value


def _as_rational(value: BaseValue) -> Rational:
    if isinstance(value, RationalInterval):
        if not value.is_point:
            raise UndefinedOperationError("Interval endpoints must be single values, not intervals")
        return value.low
    return value.lift(Rational.RANK)


def parse_base_notation(text: str, base_system: BaseSystem, type_aware: bool = True) -> BaseValue:
    """
    Read a numeral written in ``base_system``.

    Args:
        text: Numeral body such as ``"101"``, ``"-A/F"``, ``"1..1/2"``,
            ``"10.1"``, ``"A:F"`` or ``"12E2"``
        base_system: Alphabet the digits are drawn from
        type_aware: Return Integer for whole values instead of Rational

    Returns:
        Integer, Rational (fractions are tagged EXPLICIT_FRACTION) or an
        interval tagged EXPLICIT_INTERVAL

    Raises:
        FormatError: Malformed structure
        InvalidDigitError: A digit outside the alphabet
        DivisionByZeroError: Zero denominator
        UndefinedOperationError: Exponent applied to an interval
    """
    negative = text.startswith("-")
    body = text[1:] if negative else text

    mantissa, exponent_text = _split_exponent(body, base_system)
    mantissa = base_system.normalize_case(mantissa)

    if exponent_text is not None:
        if not exponent_text.lstrip("-"):
            raise FormatError("Missing exponent after E notation", source=text)
        exponent_text = base_system.normalize_case(exponent_text)
        if not base_system.is_valid_string(exponent_text.replace("-", "", 1)):
            raise InvalidDigitError(
                f'Invalid exponent "{exponent_text}" for base {base_system.base}',
                base=base_system.base,
                source=text,
            )
        exponent = base_system.to_decimal(exponent_text)

        value = parse_base_notation(mantissa, base_system, type_aware)
        if isinstance(value, RationalInterval):
            raise UndefinedOperationError(
                "E notation can only be applied to simple numbers, not intervals",
                source=text,
            )
        result = value.lift(Rational.RANK).scale(base_system.base, exponent)
        if negative:
            result = result.negate()
        return _demote(result, type_aware)

    if ":" in mantissa:
        parts = mantissa.split(":")
        if len(parts) != 2:
            raise FormatError('Base notation intervals must have exactly two endpoints separated by ":"')
        left_text = ("-" if negative else "") + parts[0]
        left = _as_rational(parse_base_notation(left_text, base_system, type_aware))
        right = _as_rational(parse_base_notation(parts[1], base_system, type_aware))
        return RationalInterval.ordered(left, right, Provenance.EXPLICIT_INTERVAL)

    if ".." in mantissa:
        parts = mantissa.split("..")
        if len(parts) != 2:
            raise FormatError('Mixed number notation must have exactly one ".." separator')
        whole_text, fraction_text = parts
        if "/" not in fraction_text:
            raise FormatError('Mixed number fractional part must contain "/"')
        whole = Rational(base_system.to_decimal(whole_text))
        fraction = parse_base_notation(fraction_text, base_system, type_aware)
        if isinstance(fraction, RationalInterval):
            raise FormatError("Mixed number fractional part must be a simple fraction")
        magnitude = whole.abs() + fraction.lift(Rational.RANK).abs()
        result = magnitude.negate() if negative != (whole.numerator < 0) else magnitude
        return _demote(result, type_aware)

    if "/" in mantissa:
        parts = mantissa.split("/")
        if len(parts) != 2:
            raise FormatError('Fraction notation must have exactly one "/" separator')
        numerator = base_system.to_decimal(parts[0])
        denominator = base_system.to_decimal(parts[1])
        if denominator == 0:
            raise DivisionByZeroError("Denominator cannot be zero", source=text)
        if negative:
            numerator = -numerator
        return Rational(numerator, denominator, Provenance.EXPLICIT_FRACTION)

    if "." in mantissa:
        parts = mantissa.split(".")
        if len(parts) != 2:
            raise FormatError('Decimal notation must have exactly one "." separator')
        integer_text, fraction_text = parts[0] or base_system.min_digit, parts[1]
        if not fraction_text:
            raise FormatError("Decimal point must be followed by fractional digits", source=text)
        digits = base_system.to_decimal(integer_text + fraction_text)
        result = Rational(digits, base_system.base ** len(fraction_text))
        if negative:
            result = result.negate()
        return _demote(result, type_aware)

    value = base_system.to_decimal(mantissa)
    if negative:
        value = -value
    logger.debug("Base %d numeral %s -> %d", base_system.base, text, value)
    return Integer(value) if type_aware else Rational(value)
