"""
ratcalc - exact numeral parsing and rational/interval arithmetic

Reads arithmetic expressions whose numerals may be fractions, mixed numbers,
repeating decimals, continued fractions, uncertainty ranges or literals in
any radix from 2 to 62, and evaluates them without rounding.

Architecture:
    ratcalc/
    ├── numbers/         # Integer, Rational, RationalInterval, BaseSystem, errors
    ├── parser/          # Scanner, numeral readers and the expression parser
    ├── formatting.py    # Display of results (fraction, mixed, repeating)
    ├── logging_config.py
    └── cli.py           # ratcalc command and interactive session

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@ratcalc.org"
__license__ = "MIT"

from . import logging_config
from .numbers import (
    Integer, Rational, RationalInterval, Provenance, Value,
    BaseSystem, PRESETS, BINARY, OCTAL, DECIMAL, DUODECIMAL, HEXADECIMAL,
    BASE36, BASE60, BASE62, ROMAN,
    RatcalcError, FormatError, InvalidDigitError, RangeError, DuplicateDigitError,
    DivisionByZeroError, UndefinedOperationError,
)
from .parser import (
    ParseOptions, Parser, parse, ExpressionSyntaxError,
    parse_repeating_decimal, parse_continued_fraction,
)
from .formatting import format_value

__all__ = [
    # Entry points
    "parse",
    "ParseOptions",
    "Parser",
    "format_value",
    "parse_repeating_decimal",
    "parse_continued_fraction",

    # Values
    "Integer",
    "Rational",
    "RationalInterval",
    "Provenance",
    "Value",

    # Digit systems
    "BaseSystem",
    "PRESETS",
    "BINARY", "OCTAL", "DECIMAL", "DUODECIMAL", "HEXADECIMAL",
    "BASE36", "BASE60", "BASE62", "ROMAN",

    # Errors
    "RatcalcError",
    "FormatError",
    "InvalidDigitError",
    "RangeError",
    "DuplicateDigitError",
    "DivisionByZeroError",
    "UndefinedOperationError",
    "ExpressionSyntaxError",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
