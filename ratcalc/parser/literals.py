"""
Reading numerals out of an expression.

A numeral has no fixed token shape: ``1.5``, ``0.#3``, ``2..1/4``, ``1:3``,
``3.~7~15`` and ``A/F`` (hexadecimal input) are all single literals. The
NumeralReader tries each notation in a fixed order at the scanner position
and consumes the first one that applies.

Author: xwest
"""

import re
from typing import Optional

from ..logging_config import get_logger
from ..numbers.base_system import BaseSystem
from ..numbers.errors import (
    RatcalcError, FormatError, InvalidDigitError, create_unsupported_base_error,
)
from ..numbers.exact import ExactValue
from ..numbers.integer import Integer
from ..numbers.interval import RationalInterval
from ..numbers.provenance import Provenance
from ..numbers.rational import Rational
from .base_literals import parse_base_notation
from .errors import create_invalid_exponent_error
from .numerals import (
    parse_decimal_uncertainty, parse_repeating_decimal, parse_non_repeating_decimal,
    continued_fraction_value,
)
from .options import ParseOptions
from .scanner import Scanner
from .tokens import SPACED_E_MARKER, SPACED_SLASH_MARKER

logger = get_logger(__name__)

# Body of a digits[radix] literal. '-' only follows an exponent marker.
_BASE_BODY = r"(?:[0-9A-Za-z./]|_\^|(?<=[Ee^])-)+"
_BASE_LITERAL = re.compile(rf"(-?{_BASE_BODY}(?::-?{_BASE_BODY})?)\[(\d+)\]")
_UNCERTAINTY_LITERAL = re.compile(r"(-?\d*\.?\d*)\[([^\]]+)\]")

# Signed terms are consumed here and rejected by the term check
_CONTINUED_FRACTION = re.compile(r"-?\d+\.~-?\d*(?:~-?\d*)*")
_SIMPLE_DECIMAL = re.compile(r"-?\d*\.\d+")
_REPEATING_DECIMAL = re.compile(r"-?(?:\d+\.?\d*|\.\d+)#\d*")
_INTEGER = re.compile(r"-?\d+")
_DIGITS = re.compile(r"\d+")
_EXPONENT_BEFORE_COLON = re.compile(r"E(-?\d+)(?=:)")

_HEAD_STOP = frozenset("+*()!" + SPACED_E_MARKER + SPACED_SLASH_MARKER)


class NumeralReader:
    """
    Consumes numerals from a Scanner according to the parse options.

    Every ``read_*`` method either consumes a literal and returns its value
    or leaves the scanner untouched and returns None; malformed literals
    raise instead.
    """

    def __init__(self, scanner: Scanner, options: ParseOptions):
        self.scanner = scanner
        self.options = options
        self.base_system: BaseSystem = options.input_base

    # Bracketed literals

    def read_bracket_literal(self) -> Optional[ExactValue]:
        """Read ``digits[radix]`` or decimal uncertainty ``base[spec]``."""
        scanner = self.scanner

        found = _BASE_LITERAL.match(scanner.text, scanner.pos)
        if found:
            literal, body, radix = found.group(0), found.group(1), int(found.group(2))
            if not 2 <= radix <= 62:
                raise create_unsupported_base_error(radix)
            try:
                value = parse_base_notation(body, BaseSystem.from_base(radix), self.options.type_aware)
            except RatcalcError as error:
                raise error.with_context(f"Invalid base notation {literal}") from error
            scanner.pos = found.end()
            logger.debug("Base literal %s -> %s", literal, value)
            return value

        found = _UNCERTAINTY_LITERAL.match(scanner.text, scanner.pos)
        if found:
            if found.group(1) in ("", "-"):
                raise FormatError(
                    "Uncertainty notation requires a base value",
                    source=found.group(0),
                    help_text="Write the measured value before the brackets, e.g. 1.3[+-1]",
                )
            value = parse_decimal_uncertainty(found.group(0), allow_integer_range=True)
            scanner.pos = found.end()
            logger.debug("Uncertainty literal %s -> %s", found.group(0), value)
            return value

        return None

    # Plain numerals

    def read_numeral(self) -> ExactValue:
        """
        Read the numeral at the cursor.

        Notations are tried in order: continued fraction, input-base
        numeral, plain decimal, then rational with an optional ``:`` second
        endpoint.

        Raises:
            FormatError: When no notation matches
        """
        scanner = self.scanner
        head = self._numeral_head()

        found = _CONTINUED_FRACTION.match(scanner.text, scanner.pos)
        if found:
            scanner.pos = found.end()
            return continued_fraction_value(found.group())

        if not self.options.is_decimal_input:
            if "[" not in head and "#" not in head:
                value = self._read_input_base()
                if value is not None:
                    return value

        if "." in head and not any(symbol in head for symbol in "#:["):
            found = scanner.match_pattern(_SIMPLE_DECIMAL)
            if found:
                return self._decimal_value(found.group())

        return self._read_rational_or_interval()

    def _decimal_value(self, text: str) -> ExactValue:
        if self.options.type_aware:
            return Rational(text)
        negative = text.startswith("-")
        return parse_non_repeating_decimal(text.lstrip("-"), negative)

    def _numeral_head(self) -> str:
        """Text from the cursor up to the first operator outside a numeral."""
        text, start = self.scanner.text, self.scanner.pos
        i = start
        while i < len(text):
            char = text[i]
            if char == "[":
                close = text.find("]", i)
                if close < 0:
                    break
                i = close + 1
            elif char == "-":
                if i != start and text[i - 1] not in ":Ee^[,":
                    break
                i += 1
            elif char == "/":
                if i + 1 >= len(text) or not text[i + 1].isalnum():
                    break
                i += 1
            elif char == "^":
                if i == start or text[i - 1] != "_":
                    break
                i += 1
            elif char in _HEAD_STOP:
                break
            else:
                i += 1
        return text[start:i]

    # Input base

    def _read_input_base(self) -> Optional[ExactValue]:
        """Read a numeral in the configured input base, or None to fall back to decimal."""
        scanner = self.scanner
        text, start = scanner.text, scanner.pos
        base = self.base_system

        i = start
        if i < len(text) and text[i] == "-":
            i += 1
        digits_start = i
        has_point = has_mixed = has_fraction = has_colon = False

        while i < len(text):
            char = text[i]
            if base.accepts_char(char):
                i += 1
            elif text.startswith("..", i) and not (has_mixed or has_point or has_fraction):
                has_mixed = True
                i += 2
            elif char == "." and not (has_point or has_mixed or has_fraction):
                has_point = True
                i += 1
            elif char == "/" and not has_fraction and base.accepts_char(text[i + 1:i + 2] or " "):
                has_fraction = True
                i += 1
            elif char == ":" and not has_colon:
                has_colon = True
                has_point = has_mixed = has_fraction = False
                i += 1
                if text.startswith("-", i):
                    i += 1
            else:
                break

        # Only a numeral that starts outside the alphabet is read as decimal
        if i == digits_start:
            return None

        literal = text[start:i]
        try:
            value = parse_base_notation(literal, base, self.options.type_aware)
        except (FormatError, InvalidDigitError) as error:
            logger.debug("Not a base %d numeral %r: %s", base.base, literal, error.message)
            return None

        scanner.pos = i
        logger.debug("Input-base numeral %s -> %s", literal, value)
        return value

    def read_base_exponent(self) -> int:
        """Read an exponent written in the input base after E or ``_^``."""
        scanner = self.scanner
        start = scanner.pos
        if scanner.check("-"):
            scanner.advance()
        digits_start = scanner.pos
        while not scanner.is_at_end() and self.base_system.accepts_char(scanner.peek_char()):
            scanner.advance()
        if scanner.pos == digits_start:
            scanner.pos = start
            raise FormatError(
                "Missing exponent after E notation",
                source=scanner.text,
                help_text=f"Write the exponent in {self.base_system.name} digits",
            )
        return self.base_system.to_decimal(scanner.text[start:scanner.pos])

    # Decimal rationals and intervals

    def _read_rational_or_interval(self) -> ExactValue:
        scanner = self.scanner
        first = self._read_rational()

        found = scanner.match_pattern(_EXPONENT_BEFORE_COLON)
        if found:
            first = first.E(int(found.group(1)))

        if not scanner.match(":"):
            if not self.options.type_aware:
                return RationalInterval.point(first)
            if first.is_integer and first.provenance is not Provenance.EXPLICIT_FRACTION:
                return Integer(first.numerator)
            return first

        second = self._read_rational()
        if scanner.match("E"):
            exponent = scanner.read_decimal_exponent()
            if exponent is None:
                raise create_invalid_exponent_error("E", scanner.pos, scanner.text)
            second = second.E(exponent)

        return RationalInterval.ordered(first, second, Provenance.EXPLICIT_INTERVAL)

    def _read_rational(self) -> Rational:
        """Read a repeating decimal, decimal, integer, fraction or mixed number."""
        scanner = self.scanner

        found = scanner.match_pattern(_REPEATING_DECIMAL)
        if found:
            try:
                value = parse_repeating_decimal(found.group())
            except RatcalcError as error:
                raise FormatError(f"Invalid repeating decimal: {error.message}", source=found.group()) from error
            return value

        found = scanner.match_pattern(_SIMPLE_DECIMAL)
        if found:
            return Rational(found.group())

        found = scanner.match_pattern(_INTEGER)
        if not found:
            raise FormatError("Invalid rational number format", source=scanner.remaining)

        numerator = int(found.group())
        if scanner.match(".."):
            return self._read_mixed_tail(found.group())

        if scanner.check("/") and scanner.peek_char(1).isdigit():
            scanner.advance()
            denominator_text = scanner.match_pattern(_DIGITS).group()
            self._reject_exponent("fraction")
            provenance = Provenance.EXPLICIT_FRACTION if int(denominator_text) == 1 else Provenance.PLAIN
            return Rational(numerator, int(denominator_text), provenance)

        return Rational(numerator)

    def _read_mixed_tail(self, whole_text: str) -> Rational:
        scanner = self.scanner
        fraction_numerator = scanner.match_pattern(_DIGITS)
        if not fraction_numerator:
            raise FormatError('Invalid mixed number format: missing numerator after ".."')
        if not (scanner.check("/") and scanner.peek_char(1).isdigit()):
            raise FormatError("Invalid mixed number format: missing denominator")
        scanner.advance()
        denominator = int(scanner.match_pattern(_DIGITS).group())
        self._reject_exponent("mixed number")

        fraction = Rational(int(fraction_numerator.group()), denominator)
        magnitude = Rational(abs(int(whole_text))) + fraction
        return magnitude.negate() if whole_text.startswith("-") else magnitude

    def _reject_exponent(self, kind: str):
        if self.scanner.check("E"):
            raise FormatError(
                f"E notation not allowed directly after {kind} without parentheses",
                help_text="Wrap the value in parentheses, e.g. (1/2)E3",
            )
