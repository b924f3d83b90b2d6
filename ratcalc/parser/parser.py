"""
ratcalc Expression Parser

Recursive-descent parser that evaluates arithmetic over exact numerals as
it reads them. Binary operators are driven by precedence and infix tables;
numerals are delegated to the NumeralReader.

Author: xwest
"""

from dataclasses import replace
from enum import IntEnum
from typing import Callable, Dict, Mapping, Optional, Union

from ..logging_config import get_logger
from ..numbers import Value
from ..numbers.base_system import BaseSystem
from ..numbers.errors import FormatError, create_factorial_error, create_zero_to_zero_error
from ..numbers.exact import INTERVAL_RANK
from ..numbers.integer import Integer
from ..numbers.interval import RationalInterval
from ..numbers.provenance import Provenance
from ..numbers.rational import Rational
from .errors import (
    create_unexpected_token_error, create_trailing_input_error,
    create_missing_paren_error, create_unexpected_eof_error,
    create_invalid_exponent_error,
)
from .literals import NumeralReader
from .options import ParseOptions
from .scanner import Scanner
from .tokens import TokenType, preprocess

logger = get_logger(__name__)


class Precedence(IntEnum):
    """Binding strength of the binary operators."""
    NONE = 0
    SUM = 1         # +, -
    PRODUCT = 2     # *, /, "/ ", E


class Parser:
    """
    Parser and evaluator for a single expression.

    Grammar::

        expression := term (('+' | '-') term)*
        term       := factor (('*' | '/' | E) factor)*
        factor     := '(' expression ')' suffixes
                    | digits[radix] | base[uncertainty]
                    | '-' factor
                    | numeral suffixes
        suffixes   := [E exponent] ['!' | '!!'] ['^' n | '**' n]
    """

    def __init__(self, expression: str, options: Optional[ParseOptions] = None):
        """
        Initialize parser for an expression.

        Args:
            expression: Raw expression text
            options: Parse options, defaults to type-aware decimal input
        """
        self.expression = expression
        self.options = options or ParseOptions()

        base = self.options.input_base
        self.radix = base.base
        self.scanner = Scanner(
            preprocess(expression, spaced_e=not base.uses_alternate_exponent),
            base.exponent_marker,
        )
        self.numerals = NumeralReader(self.scanner, self.options)

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize operator precedence and infix evaluation tables."""

        self.infix_parsers: Dict[TokenType, Callable[[Value, Value], Value]] = {
            TokenType.PLUS: lambda left, right: left.add(right),
            TokenType.MINUS: lambda left, right: left.subtract(right),
            TokenType.STAR: lambda left, right: left.multiply(right),
            TokenType.SLASH: lambda left, right: left.divide(right),
            TokenType.DIVIDE_SPACED: lambda left, right: left.divide(right),
            TokenType.E_NOTATION: self._apply_scale,
            TokenType.E_SPACED: self._apply_scale,
        }

        self.precedences: Dict[TokenType, Precedence] = {
            TokenType.PLUS: Precedence.SUM,
            TokenType.MINUS: Precedence.SUM,
            TokenType.STAR: Precedence.PRODUCT,
            TokenType.SLASH: Precedence.PRODUCT,
            TokenType.DIVIDE_SPACED: Precedence.PRODUCT,
            TokenType.E_NOTATION: Precedence.PRODUCT,
            TokenType.E_SPACED: Precedence.PRODUCT,
        }

    def parse(self) -> Value:
        """
        Evaluate the whole expression.

        Returns:
            Integer, Rational or RationalInterval; always a RationalInterval
            when type awareness is off

        Raises:
            FormatError: Empty input or a malformed numeral
            ExpressionSyntaxError: Malformed structure or leftover input
        """
        if not self.expression or not self.expression.strip():
            raise FormatError("Expression cannot be empty")

        value = self._parse_expression()

        if not self.scanner.is_at_end():
            raise create_trailing_input_error(self.scanner.remaining, self.scanner.pos, self.scanner.text)

        if not self.options.type_aware:
            value = value.lift(INTERVAL_RANK)

        logger.debug("Parsed %r -> %r", self.expression, value)
        return value

    # Binary operators

    def _parse_expression(self) -> Value:
        return self._parse_precedence(Precedence.SUM)

    def _parse_precedence(self, precedence: Precedence) -> Value:
        """Parse operands joined by operators of exactly this precedence."""
        left = self._parse_operand(precedence)

        while True:
            token_type = self.scanner.peek_operator()
            if token_type is None or self._get_precedence(token_type) != precedence:
                break
            self.scanner.advance(self.scanner.operator_length(token_type))
            right = self._parse_operand(precedence)
            left = self.infix_parsers[token_type](left, right)

        return self._promote(left)

    def _parse_operand(self, precedence: Precedence) -> Value:
        if precedence == Precedence.PRODUCT:
            return self._parse_factor()
        return self._parse_precedence(Precedence(precedence + 1))

    def _get_precedence(self, token_type: TokenType) -> Precedence:
        return self.precedences.get(token_type, Precedence.NONE)

    def _apply_scale(self, left: Value, right: Value) -> Value:
        """Term-level E: multiply by radix**right, where right must be integral."""
        return left.scale(self.radix, self._integral_exponent(right))

    @staticmethod
    def _integral_exponent(value: Value) -> int:
        if isinstance(value, Integer):
            return value.value
        if isinstance(value, RationalInterval) and value.is_point:
            value = value.low
        if isinstance(value, Rational) and value.is_integer:
            return value.numerator
        raise FormatError("E notation exponent must be an integer")

    # Factors

    def _parse_factor(self) -> Value:
        scanner = self.scanner

        if scanner.is_at_end():
            raise create_unexpected_eof_error(scanner.text)

        if scanner.match("("):
            open_position = scanner.pos - 1
            value = self._parse_expression()
            if not scanner.match(")"):
                raise create_missing_paren_error(open_position, scanner.text)
            return self._parse_suffixes(value)

        value = self.numerals.read_bracket_literal()
        if value is not None:
            return value

        if scanner.match("-"):
            return self._parse_factor().negate()

        if scanner.peek_operator() is not None:
            raise create_unexpected_token_error(scanner.peek_char(), scanner.pos, scanner.text)

        return self._parse_suffixes(self.numerals.read_numeral())

    def _parse_suffixes(self, value: Value) -> Value:
        """Apply tight E, then factorial, then a power, in that order."""
        scanner = self.scanner

        if scanner.peek_operator() is TokenType.E_NOTATION:
            scanner.advance(len(scanner.exponent_marker))
            value = self._promote(self._apply_tight_exponent(value))

        if scanner.match("!!"):
            value = self._factorial(value, double=True)
        elif scanner.match("!"):
            value = self._factorial(value, double=False)

        if scanner.match("**"):
            exponent = self._read_power_exponent("**")
            if value.is_zero and exponent == 0:
                raise create_zero_to_zero_error()
            value = value.lift(INTERVAL_RANK).mpow(exponent)
        elif scanner.match("^"):
            exponent = self._read_power_exponent("^")
            value = value.pow(exponent)

        return value

    def _apply_tight_exponent(self, value: Value) -> Value:
        if self.options.is_decimal_input:
            exponent = self.scanner.read_decimal_exponent()
            if exponent is None:
                raise create_invalid_exponent_error("E", self.scanner.pos, self.scanner.text)
            return value.E(exponent)
        return value.scale(self.radix, self.numerals.read_base_exponent())

    def _read_power_exponent(self, operator: str) -> int:
        exponent = self.scanner.read_decimal_exponent()
        if exponent is None:
            raise create_invalid_exponent_error(operator, self.scanner.pos, self.scanner.text)
        return exponent

    @staticmethod
    def _factorial(value: Value, double: bool) -> Value:
        """Factorial keeps the operand's representation."""
        if isinstance(value, Integer):
            return value.double_factorial() if double else value.factorial()

        if isinstance(value, Rational):
            if not value.is_integer:
                raise create_factorial_error(double)
            whole = Integer(value.numerator)
            result = whole.double_factorial() if double else whole.factorial()
            return result.to_rational().with_provenance(value.provenance)

        return value.double_factorial() if double else value.factorial()

    # Type promotion

    def _promote(self, value: Value) -> Value:
        """
        Narrow a value to the simplest type that represents it exactly.

        Point intervals become Rationals and whole Rationals become
        Integers, unless the literal's provenance asks to keep its form.
        """
        if not self.options.type_aware:
            return value

        provenance = value.provenance
        if provenance is Provenance.SKIP_PROMOTION:
            return value

        if isinstance(value, RationalInterval):
            if not value.is_point or provenance is Provenance.EXPLICIT_INTERVAL:
                return value
            value = value.low
            if value.is_integer:
                return Integer(value.numerator)
            return value

        if isinstance(value, Rational) and value.is_integer and provenance is not Provenance.EXPLICIT_FRACTION:
            return Integer(value.numerator)

        return value


def parse(
    expression: str,
    options: Union[ParseOptions, Mapping, None] = None,
    *,
    type_aware: Optional[bool] = None,
    input_base: Optional[BaseSystem] = None,
) -> Value:
    """
    Parse and evaluate an expression.

    Args:
        expression: Expression text, e.g. ``"1/2 + 0.#3"``
        options: ParseOptions, or a dict such as ``{"typeAware": False}``
        type_aware: Override ``options.type_aware``
        input_base: Override ``options.input_base``

    Returns:
        Integer, Rational or RationalInterval

    Example:
        >>> parse("1/2 + 1/3")
        Rational(5, 6)
        >>> parse("1.23[56,67]")
        RationalInterval(Rational(3089, 2500), Rational(12367, 10000))
    """
    if not isinstance(options, ParseOptions):
        options = ParseOptions.from_mapping(options)

    overrides = {}
    if type_aware is not None:
        overrides["type_aware"] = type_aware
    if input_base is not None:
        overrides["input_base"] = input_base
    if overrides:
        options = replace(options, **overrides)

    return Parser(expression, options).parse()
