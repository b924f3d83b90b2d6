"""
Test suite for result display helpers.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from ratcalc import format_value, parse
from ratcalc.formatting import describe_type, truncate_decimal
from ratcalc.numbers import Integer, Rational, RationalInterval, BINARY, HEXADECIMAL, DECIMAL


class TestFormatValue(unittest.TestCase):
    """Test format_value display modes."""

    def test_default(self):
        self.assertEqual(format_value(Rational(9, 4)), "9/4")
        self.assertEqual(format_value(Integer(-7)), "-7")

    def test_mixed(self):
        self.assertEqual(format_value(Rational(9, 4), mixed=True), "2..1/4")
        self.assertEqual(format_value(Rational(-1, 2), mixed=True), "-1/2")
        self.assertEqual(format_value(Integer(3), mixed=True), "3")

    def test_repeating(self):
        self.assertEqual(format_value(Rational(1, 3), repeating=True), "0.#3")
        self.assertEqual(format_value(Rational(1, 4), repeating=True), "0.25#0")
        self.assertEqual(format_value(Rational(-1, 6), repeating=True), "-0.1#6")

    def test_interval(self):
        value = RationalInterval(Rational(1, 2), Rational(3, 4))
        self.assertEqual(format_value(value), "1/2:3/4")
        self.assertEqual(format_value(value, repeating=True), "0.5#0:0.75#0")

    def test_base(self):
        self.assertEqual(format_value(Integer(255), base=HEXADECIMAL), "FF")
        self.assertEqual(format_value(Rational(1, 2), base=BINARY), "1/10")
        self.assertEqual(format_value(Rational(-5), base=BINARY), "-101")
        self.assertEqual(format_value(RationalInterval(2, 3), base=BINARY), "10:11")

    def test_decimal_base_uses_default_display(self):
        self.assertEqual(format_value(Rational(9, 4), mixed=True, base=DECIMAL), "2..1/4")

    def test_parse_results(self):
        self.assertEqual(format_value(parse("1/2 + 1/3")), "5/6")
        self.assertEqual(format_value(parse("1.23", type_aware=False)), "49/40:247/200")

    def test_repeating_long_period_is_cut(self):
        """Test that a period beyond the long-division budget is shown cut instead of failing."""
        text = format_value(Rational(1, 1019), repeating=True)
        self.assertTrue(text.startswith("0.00098"))
        self.assertTrue(text.endswith("..."))

    def test_unknown_settings(self):
        with self.assertRaises(ValueError):
            format_value(Rational(1, 2), mode="hex")
        with self.assertRaises(ValueError):
            format_value(Rational(1, 2), interval_style="fuzzy")


class TestDecimalModes(unittest.TestCase):
    """Test the decimal, both and scientific output modes."""

    def test_decimal_reports_period(self):
        self.assertEqual(format_value(Rational(1, 3), mode="decimal"), "0.#3 {period: 1}")
        self.assertEqual(format_value(Rational(22, 7), mode="decimal"), "3.#142857 {period: 6}")
        self.assertEqual(format_value(Rational(1, 4), mode="decimal"), "0.25#0")
        self.assertEqual(format_value(Integer(7), mode="decimal"), "7")

    def test_decimal_limit(self):
        self.assertEqual(
            format_value(Rational(1, 97), mode="decimal"),
            "0.#01030927835051546391... {period: 96}",
        )
        self.assertEqual(
            format_value(Rational(1, 7), mode="decimal", decimal_limit=4),
            "0.#1428... {period: 6}",
        )

    def test_decimal_unknown_period(self):
        text = format_value(Rational(1, 1019), mode="decimal")
        self.assertEqual(text, "0.00098135426889106967... {period: >1000}")

    def test_decimal_text_reads_back(self):
        for value in (Rational(1, 3), Rational(-13, 6), Rational(22, 7), Rational(5, 8)):
            text = format_value(value, mode="decimal").split(" {")[0]
            self.assertEqual(parse(text), value, text)

    def test_both(self):
        self.assertEqual(format_value(Rational(1, 3), mode="both"), "0.#3 {period: 1} (1/3)")
        self.assertEqual(format_value(Rational(1, 4), mode="both"), "0.25#0 (1/4)")
        self.assertEqual(format_value(Integer(4), mode="both"), "4")

    def test_interval_decimal(self):
        value = RationalInterval(Rational(1, 3), Rational(1, 2))
        self.assertEqual(format_value(value, mode="decimal"), "0.#3:0.5#0 {period: low: 1}")
        self.assertEqual(format_value(value, mode="both"), "0.#3:0.5#0 {period: low: 1} (1/3:1/2)")
        value = RationalInterval(Rational(1, 3), Rational(2, 3))
        self.assertEqual(format_value(value, mode="decimal"), "0.#3:0.#6 {period: low: 1, high: 1}")

    def test_scientific(self):
        self.assertEqual(format_value(Rational(1, 8), mode="scientific"), "1.25E-1")
        self.assertEqual(format_value(Integer(1500), mode="scientific"), "1.5E+3")
        self.assertEqual(format_value(RationalInterval(1, 100), mode="scientific"), "1E+0:1E+2")


class TestIntervalStyles(unittest.TestCase):
    """Test uncertainty notation for intervals and that it reads back."""

    def setUp(self):
        self.value = RationalInterval(Rational(2469, 2000), Rational(2471, 2000))

    def test_styles(self):
        self.assertEqual(format_value(self.value), "2469/2000:2471/2000")
        self.assertEqual(format_value(self.value, interval_style="compact"), "1.23[45,55]")
        self.assertEqual(format_value(self.value, interval_style="symmetric"), "1.235[+-5]")
        self.assertEqual(format_value(self.value, interval_style="relative"), "1.235[+-5]")

    def test_round_trip(self):
        for source in ("1.23[45,55]", "1.3[+-1]", "1.23[+5,-6]", "42[+-3]", "0.[#3,#6]"):
            value = parse(source)
            for style in ("compact", "symmetric", "relative"):
                text = format_value(value, interval_style=style)
                self.assertEqual(parse(text), value, f"{source} -> {text}")

    def test_style_ignored_for_exact_values(self):
        self.assertEqual(format_value(Rational(1, 2), interval_style="compact"), "1/2")


class TestTruncateDecimal(unittest.TestCase):
    """Test cutting decimals to a number of places."""

    def test_short_values_unchanged(self):
        for text in ("5", "0.25", "0.#3", "0.25#0", "3.#142857"):
            self.assertEqual(truncate_decimal(text, 6), text)

    def test_cut(self):
        self.assertEqual(truncate_decimal("0.123456", 3), "0.123...")
        self.assertEqual(truncate_decimal("0.1#234567", 3), "0.1#23...")
        self.assertEqual(truncate_decimal("0.12#3", 2), "0.12...")
        self.assertEqual(truncate_decimal("-1.12345#0", 2), "-1.12...")
        self.assertEqual(truncate_decimal("0.1234...", 2), "0.12...")


class TestDescribeType(unittest.TestCase):
    """Test type labels."""

    def test_labels(self):
        self.assertEqual(describe_type(Integer(1)), "integer")
        self.assertEqual(describe_type(Rational(1, 2)), "rational")
        self.assertEqual(describe_type(RationalInterval(1, 2)), "interval")


if __name__ == "__main__":
    unittest.main(verbosity=2)
