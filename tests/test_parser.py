"""
Test suite for the ratcalc expression parser in type-aware mode.

Tests cover:
- Numeral dispatch (fractions, mixed numbers, decimals, repeating decimals,
  continued fractions, uncertainty and radix literals)
- Operator precedence, tight and spaced E, spaced division
- Factorial and the two power operators
- Type promotion of results
- Error reporting

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from ratcalc import parse, ParseOptions, Parser
from ratcalc.numbers import (
    Integer, Rational, RationalInterval, Provenance,
    FormatError, InvalidDigitError, RangeError, DivisionByZeroError, UndefinedOperationError,
)
from ratcalc.parser import ExpressionSyntaxError


class ParserTestCase(unittest.TestCase):
    """Shared assertions for parser tests."""

    def assertParses(self, expression, expected_type, expected):
        result = parse(expression)
        self.assertIsInstance(result, expected_type, f"{expression!r} -> {result!r}")
        self.assertEqual(result, expected, expression)
        return result


class TestNumerals(ParserTestCase):
    """Test single literals."""

    def test_integer(self):
        self.assertParses("42", Integer, Integer(42))

    def test_fraction(self):
        self.assertParses("3/4", Rational, Rational(3, 4))

    def test_reducible_fraction_promotes(self):
        self.assertParses("4/2", Integer, Integer(2))

    def test_explicit_whole_fraction_stays_rational(self):
        result = self.assertParses("3/1", Rational, Rational(3))
        self.assertIs(result.provenance, Provenance.EXPLICIT_FRACTION)

    def test_mixed_number(self):
        self.assertParses("5..2/3", Rational, Rational(17, 3))
        self.assertParses("-2..1/4", Rational, Rational(-9, 4))

    def test_decimal_is_exact(self):
        self.assertParses("1.25", Rational, Rational(5, 4))
        self.assertParses(".5", Rational, Rational(1, 2))

    def test_whole_decimal_promotes(self):
        self.assertParses("2.0", Integer, Integer(2))

    def test_repeating_decimal(self):
        self.assertParses("0.#3", Rational, Rational(1, 3))
        self.assertParses("733.#3", Rational, Rational(2200, 3))
        self.assertParses("0.#9", Integer, Integer(1))

    def test_continued_fraction(self):
        self.assertParses("3.~7~15~1~292", Rational, Rational(103993, 33102))
        self.assertParses("-3.~7", Rational, Rational(-22, 7))
        self.assertParses("3.~7-1", Rational, Rational(15, 7))

    def test_interval(self):
        self.assertParses("1/2:3/4", RationalInterval, RationalInterval(Rational(1, 2), Rational(3, 4)))
        self.assertParses("3/4:1/2", RationalInterval, RationalInterval(Rational(1, 2), Rational(3, 4)))
        self.assertParses(" 1/2 : 3/4 ", RationalInterval, RationalInterval(Rational(1, 2), Rational(3, 4)))

    def test_explicit_point_interval_stays_interval(self):
        result = self.assertParses("1:1", RationalInterval, RationalInterval(1, 1))
        self.assertIs(result.provenance, Provenance.EXPLICIT_INTERVAL)

    def test_interval_of_repeating_decimals(self):
        self.assertParses("0.#3:0.5#0", RationalInterval, RationalInterval(Rational(1, 3), Rational(1, 2)))
        self.assertParses("0.#142857:3.#142857", RationalInterval, RationalInterval(Rational(1, 7), Rational(22, 7)))

    def test_interval_of_decimals(self):
        self.assertParses("1.5:2.5", RationalInterval, RationalInterval(Rational(3, 2), Rational(5, 2)))

    def test_uncertainty_range(self):
        self.assertParses(
            "1.23[56,67]", RationalInterval,
            RationalInterval(Rational(12356, 10000), Rational(12367, 10000)),
        )

    def test_uncertainty_symmetric(self):
        self.assertParses("1.3[+-1]", RationalInterval, RationalInterval(Rational(129, 100), Rational(131, 100)))

    def test_negative_uncertainty_base(self):
        self.assertParses("-1.3[+-1]", RationalInterval, RationalInterval(Rational(-131, 100), Rational(-129, 100)))

    def test_uncertainty_needs_base_value(self):
        with self.assertRaises(FormatError):
            parse("[+-1]")

    def test_radix_literal(self):
        self.assertParses("101[2]", Integer, Integer(5))
        self.assertParses("FF[16]", Integer, Integer(255))
        self.assertParses("12E2[10]", Integer, Integer(1200))
        self.assertParses("-10[2]", Integer, Integer(-2))

    def test_radix_fraction_stays_rational(self):
        self.assertParses("1/11[2]", Rational, Rational(1, 3))
        self.assertParses("110/11[2]", Rational, Rational(2))

    def test_radix_interval(self):
        self.assertParses("1:11[2]", RationalInterval, RationalInterval(1, 3))

    def test_radix_literal_errors_keep_type(self):
        with self.assertRaises(InvalidDigitError) as context:
            parse("13[2]")
        self.assertTrue(context.exception.message.startswith("Invalid base notation 13[2]: "))

    def test_radix_out_of_range(self):
        with self.assertRaises(RangeError):
            parse("1[63]")
        with self.assertRaises(RangeError):
            parse("1[1]")


class TestArithmetic(ParserTestCase):
    """Test operators and precedence."""

    def test_basic_operations(self):
        self.assertParses("1/2 + 1/4", Rational, Rational(3, 4))
        self.assertParses("1/2 - 1/4", Rational, Rational(1, 4))
        self.assertParses("1/2 * 1/4", Rational, Rational(1, 8))
        self.assertParses("1/2 + 1/3", Rational, Rational(5, 6))

    def test_result_promotion(self):
        self.assertParses("1/2 + 1/2", Integer, Integer(1))
        self.assertParses("0.#3 + 0.#6", Integer, Integer(1))

    def test_precedence(self):
        self.assertParses("1 + 2 * 3", Integer, Integer(7))
        self.assertParses("(1 + 2) * 3", Integer, Integer(9))
        self.assertParses("1/2 + 1/4 * 2/3", Rational, Rational(2, 3))

    def test_left_associativity(self):
        self.assertParses("10 - 2 - 3", Integer, Integer(5))
        self.assertParses("12/3/2", Integer, Integer(2))

    def test_spaced_slash_is_division(self):
        self.assertParses("1/2 / 1/4", Integer, Integer(2))
        self.assertParses("12/ 3", Integer, Integer(4))
        self.assertParses("1/ 2E1", Rational, Rational(1, 20))

    def test_slash_before_paren_or_sign_is_division(self):
        self.assertParses("1/(2+2)", Rational, Rational(1, 4))
        self.assertParses("1/-2", Rational, Rational(-1, 2))

    def test_integer_division(self):
        self.assertParses("(6)/(3)", Integer, Integer(2))
        self.assertParses("(7)/(2)", Rational, Rational(7, 2))

    def test_unary_minus(self):
        self.assertParses("-3/4", Rational, Rational(-3, 4))
        self.assertParses("-(1/2+1/4)", Rational, Rational(-3, 4))
        self.assertParses("2*-3", Integer, Integer(-6))
        self.assertParses("1 - -1", Integer, Integer(2))
        self.assertParses("--2", Integer, Integer(2))

    def test_nested_parentheses(self):
        self.assertParses("(1/2 + (1/4 * 2)) / 2", Rational, Rational(1, 2))

    def test_interval_arithmetic(self):
        self.assertParses("1/2:3/4 + 1/4:1/2", RationalInterval, RationalInterval(Rational(3, 4), Rational(5, 4)))
        self.assertParses(
            "(1/2:3/4 + 1/4:1/3) * (2:3 - 1:2)", RationalInterval,
            RationalInterval(Rational(0), Rational(13, 6)),
        )

    def test_interval_collapsing_to_point_promotes(self):
        self.assertParses("1:2 - 1:2 + 1", RationalInterval, RationalInterval(0, 2))
        self.assertParses("(1:2) * 0", Integer, Integer(0))


class TestScientificNotation(ParserTestCase):
    """Test tight and spaced E."""

    def test_tight_E(self):
        self.assertParses("2E3", Integer, Integer(2000))
        self.assertParses("1.5E2", Integer, Integer(150))
        self.assertParses("2E-3", Rational, Rational(1, 500))

    def test_tight_E_on_parenthesis(self):
        self.assertParses("(1/2)E3", Integer, Integer(500))

    def test_tight_E_binds_before_power(self):
        self.assertParses("1E1^2", Integer, Integer(100))

    def test_spaced_E_is_multiplicative(self):
        self.assertParses("2 E3", Integer, Integer(2000))
        self.assertParses("2 E-1", Rational, Rational(1, 5))
        self.assertParses("1 + 2 E2", Integer, Integer(201))

    def test_spaced_E_exponent_must_be_integral(self):
        with self.assertRaises(FormatError):
            parse("2 E(1/2)")

    def test_E_before_colon(self):
        self.assertParses("1E2:3", RationalInterval, RationalInterval(3, 100))
        self.assertParses("1:2E1", RationalInterval, RationalInterval(1, 20))

    def test_E_after_fraction_rejected(self):
        with self.assertRaises(FormatError) as context:
            parse("1/2E3")
        self.assertIn("without parentheses", context.exception.message)
        with self.assertRaises(FormatError):
            parse("1..1/2E3")

    def test_missing_exponent(self):
        with self.assertRaises(ExpressionSyntaxError):
            parse("2E")


class TestPowersAndFactorials(ParserTestCase):
    """Test ^, ** and factorial suffixes."""

    def test_pow(self):
        self.assertParses("2^10", Integer, Integer(1024))
        self.assertParses("1/2^3", Rational, Rational(1, 8))
        self.assertParses("2^-1", Rational, Rational(1, 2))

    def test_minus_applies_after_power(self):
        self.assertParses("-2^2", Integer, Integer(-4))
        self.assertParses("(-2)^2", Integer, Integer(4))

    def test_mpow_result_stays_interval(self):
        result = self.assertParses("2**2", RationalInterval, RationalInterval(4, 4))
        self.assertIs(result.provenance, Provenance.SKIP_PROMOTION)

    def test_pow_and_mpow_on_intervals(self):
        self.assertParses("(2:3)^2", RationalInterval, RationalInterval(4, 9))
        self.assertParses("(2:3)**2", RationalInterval, RationalInterval(4, 9))
        self.assertParses("(0:2 - 1)^2", RationalInterval, RationalInterval(0, 1))
        self.assertParses("(0:2 - 1)**2", RationalInterval, RationalInterval(-1, 1))

    def test_interval_pow_binds_to_literal(self):
        self.assertParses("1/2:3/4^2", RationalInterval, RationalInterval(Rational(1, 4), Rational(9, 16)))

    def test_zero_to_zero(self):
        for expression in ("0^0", "0**0", "(0/1)^0", "(0:0)^0", "(1-1)**0"):
            with self.assertRaises(UndefinedOperationError, msg=expression):
                parse(expression)

    def test_factorial(self):
        self.assertParses("5!", Integer, Integer(120))
        self.assertParses("0!", Integer, Integer(1))
        self.assertParses("5!!", Integer, Integer(15))
        self.assertParses("3!^2", Integer, Integer(36))
        self.assertParses("2 + 3!", Integer, Integer(8))

    def test_factorial_keeps_representation(self):
        self.assertParses("(6/2)!", Integer, Integer(6))
        result = self.assertParses("(3/1)!", Rational, Rational(6))
        self.assertIs(result.provenance, Provenance.EXPLICIT_FRACTION)
        self.assertParses("(3:3)!", RationalInterval, RationalInterval(6, 6))

    def test_factorial_errors(self):
        for expression in ("(1/2)!", "(-1)!", "(1:2)!", "(-3)!!"):
            with self.assertRaises(UndefinedOperationError, msg=expression):
                parse(expression)

    def test_power_exponent_is_decimal(self):
        with self.assertRaises(ExpressionSyntaxError) as context:
            parse("2^")
        self.assertEqual(context.exception.diagnostic.code, "P005")
        with self.assertRaises(ExpressionSyntaxError):
            parse("2**x")


class TestErrors(ParserTestCase):
    """Test error reporting."""

    def test_empty(self):
        for expression in ("", "   "):
            with self.assertRaises(FormatError) as context:
                parse(expression)
            self.assertEqual(context.exception.message, "Expression cannot be empty")

    def test_unexpected_end(self):
        with self.assertRaises(ExpressionSyntaxError) as context:
            parse("1/2 + ")
        self.assertEqual(context.exception.diagnostic.code, "P010")

    def test_missing_paren(self):
        with self.assertRaises(ExpressionSyntaxError) as context:
            parse("(1/2")
        self.assertEqual(context.exception.message, "Missing closing parenthesis")
        self.assertEqual(context.exception.position, 0)

    def test_trailing_input(self):
        with self.assertRaises(ExpressionSyntaxError) as context:
            parse("1/2)")
        self.assertEqual(context.exception.message, "Unexpected token at end: )")

    def test_unexpected_operator(self):
        with self.assertRaises(ExpressionSyntaxError) as context:
            parse("*2")
        self.assertIn("Unexpected token", context.exception.message)

    def test_division_by_zero(self):
        with self.assertRaises(DivisionByZeroError) as context:
            parse("1/0")
        self.assertEqual(context.exception.message, "Denominator cannot be zero")
        with self.assertRaises(DivisionByZeroError):
            parse("1 / 0")
        with self.assertRaises(DivisionByZeroError):
            parse("1:2 / 0:0")
        with self.assertRaises(DivisionByZeroError):
            parse("1/(1:2 - 1:2)")

    def test_interval_with_zero_to_negative_power(self):
        with self.assertRaises(DivisionByZeroError):
            parse("0:1 ^ -1")

    def test_invalid_repeating_decimal(self):
        for expression in ("1.2#", "1.2#a5"):
            with self.assertRaises(FormatError) as context:
                parse(expression)
            self.assertIn("Invalid repeating decimal", context.exception.message)

    def test_negative_continued_fraction_term(self):
        for expression in ("3.~-1", "3.~1~-2"):
            with self.assertRaises(FormatError, msg=expression) as context:
                parse(expression)
            self.assertIn("positive integers", context.exception.message)

    def test_invalid_mixed_number(self):
        with self.assertRaises(FormatError):
            parse("1..")
        with self.assertRaises(FormatError):
            parse("1..2")

    def test_not_a_number(self):
        with self.assertRaises(FormatError):
            parse("abc")

    def test_errors_are_catchable_as_base_class(self):
        from ratcalc import RatcalcError
        with self.assertRaises(RatcalcError):
            parse("(")


class TestOptions(unittest.TestCase):
    """Test ParseOptions handling."""

    def test_defaults(self):
        options = ParseOptions()
        self.assertTrue(options.type_aware)
        self.assertTrue(options.is_decimal_input)

    def test_from_mapping_aliases(self):
        options = ParseOptions.from_mapping({"typeAware": False})
        self.assertFalse(options.type_aware)
        self.assertEqual(ParseOptions.from_mapping({"type_aware": False}), options)

    def test_unknown_option(self):
        with self.assertRaises(TypeError):
            ParseOptions.from_mapping({"precision": 3})

    def test_keyword_overrides(self):
        result = parse("3/4", {"typeAware": True}, type_aware=False)
        self.assertIsInstance(result, RationalInterval)

    def test_parser_class(self):
        parser = Parser("1 + 1")
        self.assertEqual(parser.parse(), Integer(2))


if __name__ == "__main__":
    unittest.main(verbosity=2)
