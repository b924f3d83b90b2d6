"""
Decimal numeral notations that need more than a digit scan.

Covers three families of base-10 literals:

- uncertainty brackets: ``1.23[56,67]``, ``1.3[+-1]``, ``1.23[+5,-6]``,
  ``0.[#3,#6]``
- repeating decimals: ``0.#3``, ``1.23#45``, ``0.#3:0.5#0``
- continued fractions: ``3.~7~15~1~292``

Each function takes the complete literal text and raises a typed error when
it is malformed.

Author: xwest
"""

import re
from typing import List, Union

from ..logging_config import get_logger
from ..numbers.errors import FormatError, UndefinedOperationError
from ..numbers.interval import RationalInterval
from ..numbers.rational import Rational

logger = get_logger(__name__)

Numeral = Union[Rational, RationalInterval]

_UNCERTAINTY = re.compile(r"^(-?\d*\.?\d*)\[([^\]]+)\]$")
_DECIMAL_POINT_BASE = re.compile(r"^-?\d+\.$")
_TRAILING_DECIMALS = re.compile(r"\.(\d+)$")
_RANGE_PART = re.compile(r"^\d+(\.\d+)?$")
_PLAIN_NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)$")
_EXPONENT = re.compile(r"^-?\d+$")
_DIGITS = re.compile(r"^\d*$")
_CONTINUED_FRACTION = re.compile(r"^(-?\d+)\.~(.*)$")
_TERM = re.compile(r"^-?\d+$")


# ---------------------------------------------------------------------------
# Uncertainty notation
# ---------------------------------------------------------------------------

def parse_decimal_uncertainty(text: str, allow_integer_range: bool = True) -> RationalInterval:
    """
    Read ``base[spec]`` uncertainty notation.

    Args:
        text: The whole literal, e.g. ``"1.23[56,67]"`` or ``"42[+-3]"``
        allow_integer_range: Accept ``[lo,hi]`` ranges on an integer base

    Returns:
        The interval described by the literal

    Raises:
        FormatError: For any malformed part
    """
    match = _UNCERTAINTY.match(text)
    if not match:
        raise FormatError("Invalid uncertainty format", source=text)

    base_text, spec = match.group(1), match.group(2)

    if _DECIMAL_POINT_BASE.match(base_text) and not spec.startswith(("+-", "-+")):
        return _parse_decimal_point_range(base_text, spec)

    base_value = Rational(base_text)
    decimals = _TRAILING_DECIMALS.search(base_text)
    places = len(decimals.group(1)) if decimals else 0

    if "," in spec and "+" not in spec and "-" not in spec:
        return _parse_range(base_text, spec, places, allow_integer_range)

    if spec.startswith(("+-", "-+")):
        offset_text = spec[2:]
        if not offset_text:
            raise FormatError("Symmetric notation must have a valid number after +- or -+", source=text)
        offset = _scale_offset(_parse_offset(offset_text), places)
        return RationalInterval(base_value - offset, base_value + offset)

    return _parse_relative(base_value, spec, places)


def _parse_range(base_text: str, spec: str, places: int, allow_integer_range: bool) -> RationalInterval:
    if places == 0 and not allow_integer_range:
        raise FormatError("Range notation on integer bases is not supported in this context")

    parts = spec.split(",")
    if len(parts) != 2:
        raise FormatError("Range notation must have exactly two values separated by comma")

    lower, upper = parts[0].strip(), parts[1].strip()
    if not _RANGE_PART.match(lower) or not _RANGE_PART.match(upper):
        raise FormatError("Range values must be valid decimal numbers")

    if places == 0:
        lower_int = lower.split(".")[0]
        upper_int = upper.split(".")[0]
        if len(lower_int) != len(upper_int):
            raise FormatError(
                f"Invalid range notation: {base_text}[{lower},{upper}] - integer parts of range "
                f"values must have the same number of digits ({lower_int} has {len(lower_int)}, "
                f"{upper_int} has {len(upper_int)})"
            )

    return RationalInterval.ordered(Rational(base_text + lower), Rational(base_text + upper))


def _parse_relative(base_value: Rational, spec: str, places: int) -> RationalInterval:
    parts = [part.strip() for part in spec.split(",")]
    if len(parts) != 2:
        raise FormatError("Relative notation must have exactly two values separated by comma")

    positive = negative = None
    for part in parts:
        if part.startswith("+"):
            if positive is not None:
                raise FormatError("Only one positive offset allowed")
            if len(part) == 1:
                raise FormatError("Offset must be a valid number")
            positive = _parse_offset(part[1:])
        elif part.startswith("-"):
            if negative is not None:
                raise FormatError("Only one negative offset allowed")
            if len(part) == 1:
                raise FormatError("Offset must be a valid number")
            negative = _parse_offset(part[1:])
        else:
            raise FormatError("Relative notation values must start with + or -")

    if positive is None or negative is None:
        raise FormatError("Relative notation must have exactly one + and one - value")

    return RationalInterval(
        base_value - _scale_offset(negative, places),
        base_value + _scale_offset(positive, places),
    )


def _scale_offset(offset: Rational, places: int) -> Rational:
    """Offsets on a base with k decimals count in units of the (k+1)th decimal."""
    if places == 0:
        return offset
    return offset.scale(10, -(places + 1))


def _parse_offset(text: str) -> Rational:
    """Offset inside brackets: plain decimal, repeating decimal, or either with E."""
    mantissa, exponent = text, None
    if "E" in text:
        mantissa, exponent_text = text.split("E", 1)
        if not _EXPONENT.match(exponent_text):
            raise FormatError("E notation exponent must be an integer")
        exponent = int(exponent_text)

    if "#" in mantissa:
        value = parse_repeating_decimal(mantissa)
    elif _PLAIN_NUMBER.match(mantissa):
        value = Rational(mantissa)
    elif exponent is not None:
        raise FormatError("Invalid number format before E notation")
    else:
        raise FormatError("Symmetric notation must have a valid number after +- or -+")

    if isinstance(value, RationalInterval):
        raise UndefinedOperationError("Nested intervals are not supported")
    return value if exponent is None else value.E(exponent)


def _parse_decimal_point_range(base_text: str, spec: str) -> RationalInterval:
    """``I.[lo,hi]``: each endpoint continues the digits right after the point."""
    if "," not in spec:
        raise FormatError("Invalid uncertainty format for decimal point notation")

    parts = spec.split(",")
    if len(parts) != 2:
        raise FormatError("Range notation must have exactly two values separated by comma")

    endpoints = []
    for part in parts:
        part = part.strip()
        if part.startswith("#"):
            endpoints.append(parse_repeating_decimal(base_text + part))
        elif part.isdigit():
            endpoints.append(Rational(base_text + part))
        else:
            raise FormatError(f"Invalid endpoint format: {part}")
    return RationalInterval.ordered(*endpoints)


# ---------------------------------------------------------------------------
# Repeating decimals
# ---------------------------------------------------------------------------

def parse_repeating_decimal(text: str) -> Numeral:
    """
    Read a decimal that may carry a repeating block after ``#``.

    ``I.F#R`` is the value with digits R repeating forever; ``#0`` marks a
    terminating decimal. Without ``#`` the input is a measured decimal and
    becomes an interval of half a unit in its last place.

    Example:
        >>> parse_repeating_decimal("0.#3")
        Rational(1, 3)
        >>> parse_repeating_decimal("1.23")
        RationalInterval(Rational(49, 40), Rational(247, 200))
    """
    if not isinstance(text, str) or not text.strip():
        raise FormatError("Input must be a non-empty string")

    text = text.strip()

    if "[" in text and "]" in text:
        return parse_decimal_uncertainty(text, allow_integer_range=False)

    if ":" in text:
        return _parse_repeating_interval(text)

    negative = text.startswith("-")
    if negative:
        text = text[1:]

    if "#" not in text:
        return parse_non_repeating_decimal(text, negative)

    parts = text.split("#")
    if len(parts) != 2:
        raise FormatError('Invalid repeating decimal format. Use format like "0.12#45"', source=text)

    prefix, repeating = parts
    if not repeating.isdigit():
        raise FormatError("Repeating part must contain only digits", source=text)

    decimal_parts = prefix.split(".")
    if len(decimal_parts) > 2:
        raise FormatError("Invalid decimal format - multiple decimal points", source=text)

    integer_part = decimal_parts[0] or "0"
    fractional_part = decimal_parts[1] if len(decimal_parts) == 2 else ""
    if not _DIGITS.match(integer_part) or not _DIGITS.match(fractional_part):
        raise FormatError(
            "Non-repeating part must contain only digits and at most one decimal point",
            source=text,
        )

    if repeating == "0":
        value = Rational(int(integer_part + fractional_part), 10 ** len(fractional_part))
    else:
        with_repeat = int(integer_part + fractional_part + repeating)
        without_repeat = int(integer_part + fractional_part)
        value = Rational(
            with_repeat - without_repeat,
            10 ** len(fractional_part) * (10 ** len(repeating) - 1),
        )

    logger.debug("Repeating decimal %s -> %s", text, value)
    return value.negate() if negative else value


def parse_non_repeating_decimal(text: str, negative: bool = False) -> Numeral:
    """
    Read an unsigned decimal as a measurement.

    Integers are exact. ``1.23`` is ``[1.225, 1.235]``: half a unit of the
    last written digit either way.
    """
    parts = text.split(".")
    if len(parts) > 2:
        raise FormatError("Invalid decimal format - multiple decimal points", source=text)

    integer_part = parts[0] or "0"
    fractional_part = parts[1] if len(parts) == 2 else ""
    if not integer_part.isdigit() or not _DIGITS.match(fractional_part):
        raise FormatError("Decimal must contain only digits and at most one decimal point", source=text)

    if not fractional_part:
        value = Rational(int(integer_part))
        return value.negate() if negative else value

    scale = 10 ** (len(fractional_part) + 1)
    center = int(integer_part + fractional_part) * 10
    if negative:
        return RationalInterval(Rational(-(center + 5), scale), Rational(-(center - 5), scale))
    return RationalInterval(Rational(center - 5, scale), Rational(center + 5, scale))


def _parse_repeating_interval(text: str) -> RationalInterval:
    parts = text.split(":")
    if len(parts) != 2:
        raise FormatError('Invalid interval format. Use format like "0.#3:0.5#0"', source=text)

    left = parse_repeating_decimal(parts[0].strip())
    right = parse_repeating_decimal(parts[1].strip())
    if isinstance(left, RationalInterval) or isinstance(right, RationalInterval):
        raise UndefinedOperationError("Nested intervals are not supported", source=text)
    return RationalInterval.ordered(left, right)


# ---------------------------------------------------------------------------
# Continued fractions
# ---------------------------------------------------------------------------

def parse_continued_fraction(text: str) -> List[int]:
    """
    Read ``I.~a1~a2~...~ak`` into its coefficient list ``[I, a1, ..., ak]``.

    ``I.~0`` stands for the plain integer I.

    Raises:
        FormatError: Missing terms, stray or doubled ``~``, or a term that is
            not a positive integer
    """
    match = _CONTINUED_FRACTION.match(text)
    if not match:
        raise FormatError("Invalid continued fraction format", source=text)

    integer_part, tail = int(match.group(1)), match.group(2)

    if tail == "0":
        return [integer_part]
    if not tail:
        raise FormatError("Continued fraction must have at least one term after .~", source=text)
    if tail.endswith("~"):
        raise FormatError("Continued fraction cannot end with ~", source=text)
    if "~~" in tail:
        raise FormatError("Invalid continued fraction format: double tilde", source=text)

    terms = [integer_part]
    for term in tail.split("~"):
        if not _TERM.match(term):
            raise FormatError(f"Invalid continued fraction term: {term}", source=text)
        value = int(term)
        if value <= 0:
            raise FormatError(f"Continued fraction terms must be positive integers: {term}", source=text)
        terms.append(value)
    return terms


def continued_fraction_value(text: str) -> Rational:
    """Exact value of a continued fraction literal."""
    return Rational.from_continued_fraction(parse_continued_fraction(text))
