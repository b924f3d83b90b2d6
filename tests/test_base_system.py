"""
Test suite for ratcalc digit alphabets.

Tests cover:
- Construction from explicit sequences, ranges and patterns
- Validation of duplicates, reserved symbols and size limits
- Digit conversion in both directions for every radix 2-62
- Case folding and exponent marker selection

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from ratcalc.numbers import (
    BaseSystem, to_base_string, PRESETS,
    BINARY, OCTAL, DECIMAL, HEXADECIMAL, BASE36, BASE60, BASE62, ROMAN,
    FormatError, InvalidDigitError, RangeError, DuplicateDigitError,
)
from ratcalc.numbers.base_system import CANONICAL_DIGITS
from ratcalc.numbers.errors import suggest_minimum_base


class TestBaseSystemConstruction(unittest.TestCase):
    """Test alphabet construction and validation."""

    def test_range_expansion(self):
        """Test that x-y ranges expand to every code point in between."""
        system = BaseSystem("0-9a-f")
        self.assertEqual(system.base, 16)
        self.assertEqual(system.characters[10], "a")
        self.assertEqual(system.max_digit, "f")
        self.assertEqual(system.min_digit, "0")

    def test_default_name(self):
        self.assertEqual(BaseSystem("01234").name, "Base 5")
        self.assertEqual(BaseSystem("01", "Bits").name, "Bits")

    def test_from_base_uses_canonical_alphabet(self):
        """Test 0-9, then A-Z, then a-z ordering."""
        self.assertEqual("".join(BaseSystem.from_base(12).characters), "0123456789AB")
        self.assertEqual(BaseSystem.from_base(62).characters[36], "a")
        self.assertEqual(BaseSystem.from_base(2), BINARY)

    def test_from_base_out_of_range(self):
        """Test that radixes outside 2..62 raise RangeError."""
        for base in (0, 1, 63, 100):
            with self.assertRaises(RangeError) as context:
                BaseSystem.from_base(base)
            self.assertIn("must be between 2 and 62", str(context.exception))

    def test_duplicate_characters(self):
        """Test that a repeated digit is rejected with both error types."""
        with self.assertRaises(DuplicateDigitError) as context:
            BaseSystem("0120")
        self.assertIsInstance(context.exception, FormatError)
        self.assertIsInstance(context.exception, RangeError)
        self.assertEqual(context.exception.diagnostic.suggestions, ["remove the repeated '0'"])

    def test_too_few_characters(self):
        with self.assertRaises(RangeError):
            BaseSystem("0")

    def test_empty_sequence(self):
        with self.assertRaises(FormatError):
            BaseSystem("")

    def test_reversed_range(self):
        with self.assertRaises(FormatError) as context:
            BaseSystem("z-a")
        self.assertIn("Invalid range", context.exception.message)

    def test_reserved_symbols_rejected(self):
        """Test that parser symbols cannot be digits."""
        for sequence in ("01+", "01:", "01#", "01."):
            with self.assertRaises(FormatError, msg=sequence):
                BaseSystem(sequence)

    def test_create_pattern(self):
        system = BaseSystem.create_pattern("lowercase", 5)
        self.assertEqual("".join(system.characters), "abcde")
        with self.assertRaises(RangeError):
            BaseSystem.create_pattern("digits", 11)
        with self.assertRaises(FormatError):
            BaseSystem.create_pattern("emoji", 3)


class TestPresets(unittest.TestCase):
    """Test the named alphabets."""

    def test_preset_sizes(self):
        expected = {
            BINARY: 2, OCTAL: 8, DECIMAL: 10, HEXADECIMAL: 16,
            BASE36: 36, BASE60: 60, BASE62: 62, ROMAN: 7,
        }
        for system, size in expected.items():
            self.assertEqual(system.base, size, system.name)

    def test_preset_lookup(self):
        self.assertIs(PRESETS["hex"], HEXADECIMAL)
        self.assertIs(PRESETS["hexadecimal"], HEXADECIMAL)
        self.assertIs(PRESETS["roman"], ROMAN)

    def test_roman_digit_values(self):
        self.assertEqual(ROMAN.digit_value("V"), 1)
        self.assertEqual(ROMAN.to_decimal("VI"), 7)

    def test_exponent_marker(self):
        """Test that alphabets containing E switch to the _^ marker."""
        self.assertEqual(DECIMAL.exponent_marker, "E")
        self.assertEqual(BINARY.exponent_marker, "E")
        self.assertTrue(HEXADECIMAL.uses_alternate_exponent)
        self.assertEqual(HEXADECIMAL.exponent_marker, "_^")
        self.assertTrue(BASE60.uses_alternate_exponent)
        self.assertFalse(BaseSystem.from_base(14).uses_alternate_exponent)
        self.assertTrue(BaseSystem.from_base(15).uses_alternate_exponent)


class TestDigitConversion(unittest.TestCase):
    """Test string <-> integer conversion."""

    def test_to_decimal(self):
        self.assertEqual(BINARY.to_decimal("1010"), 10)
        self.assertEqual(HEXADECIMAL.to_decimal("FF"), 255)
        self.assertEqual(OCTAL.to_decimal("-17"), -15)

    def test_from_decimal(self):
        self.assertEqual(BINARY.from_decimal(10), "1010")
        self.assertEqual(HEXADECIMAL.from_decimal(255), "FF")
        self.assertEqual(BINARY.from_decimal(-5), "-101")
        self.assertEqual(BINARY.from_decimal(0), "0")
        self.assertEqual(to_base_string(35, 36), "Z")

    def test_case_folding_for_single_case_alphabets(self):
        """Test that hexadecimal accepts lowercase input."""
        self.assertTrue(HEXADECIMAL.accepts_char("f"))
        self.assertEqual(HEXADECIMAL.to_decimal("ff"), 255)
        self.assertTrue(HEXADECIMAL.is_valid_string("DeadBeef"))

    def test_mixed_case_alphabet_is_case_sensitive(self):
        self.assertEqual(BASE62.digit_value("A"), 10)
        self.assertEqual(BASE62.digit_value("a"), 36)

    def test_invalid_digit(self):
        """Test the error raised for a digit outside the alphabet."""
        with self.assertRaises(InvalidDigitError) as context:
            BINARY.to_decimal("12")
        error = context.exception
        self.assertEqual(error.char, "2")
        self.assertEqual(error.base, 2)
        self.assertEqual(error.diagnostic.code, "N002")
        self.assertIn("base 3", error.diagnostic.suggestions[0])

    def test_no_digits(self):
        with self.assertRaises(FormatError):
            DECIMAL.to_decimal("-")

    def test_round_trip_every_base(self):
        """Test from_decimal/to_decimal agreement for radix 2..62."""
        for base in range(2, 63):
            system = BaseSystem.from_base(base)
            limit = base ** 4
            samples = {0, 1, base - 1, base, limit - 1, limit // 3, limit // 7 + 5}
            for value in samples:
                for signed in (value, -value):
                    text = system.from_decimal(signed)
                    self.assertEqual(system.to_decimal(text), signed, f"base {base}: {text}")

    def test_equality_and_hash(self):
        self.assertEqual(BaseSystem("0-9"), DECIMAL)
        self.assertEqual(hash(BaseSystem("0-9")), hash(DECIMAL))
        self.assertNotEqual(BaseSystem("0-9"), BaseSystem("0-8"))


class TestMinimumBaseSuggestion(unittest.TestCase):
    """Test the radix suggested for digits outside an alphabet."""

    def test_follows_canonical_alphabet(self):
        self.assertEqual(suggest_minimum_base("12"), 3)
        self.assertEqual(suggest_minimum_base("FF"), 16)
        self.assertEqual(suggest_minimum_base("Z"), 36)
        self.assertEqual(suggest_minimum_base("z"), 62)
        self.assertEqual(suggest_minimum_base("0"), 2)

    def test_every_canonical_digit(self):
        """Test that each digit of the canonical alphabet maps to the radix it first appears in."""
        for position, char in enumerate(CANONICAL_DIGITS):
            self.assertEqual(suggest_minimum_base(char), max(position + 1, 2), char)
            self.assertIn(char, BaseSystem.from_base(max(position + 1, 2)).characters)

    def test_no_suggestion(self):
        self.assertIsNone(suggest_minimum_base(""))
        self.assertIsNone(suggest_minimum_base("1$"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
