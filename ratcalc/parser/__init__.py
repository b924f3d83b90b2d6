"""
ratcalc expression parser.

Key Features:
- Recursive-descent evaluation with + - * / and scientific E operators
- Tight and spaced E, fraction bar versus spaced division
- Factorial, double factorial, pow (^) and multiplicative pow (**)
- Numeral notations: decimals, fractions, mixed numbers, repeating
  decimals, continued fractions, uncertainty brackets, radix literals
- Type-aware results or legacy all-interval results
- Configurable input base for bare numerals

Author: xwest
"""

from .errors import ExpressionSyntaxError, PARSER_ERROR_CODES
from .options import ParseOptions
from .parser import Parser, Precedence, parse
from .numerals import (
    parse_decimal_uncertainty, parse_repeating_decimal, parse_non_repeating_decimal,
    parse_continued_fraction, continued_fraction_value,
)
from .base_literals import parse_base_notation
from .tokens import TokenType

__all__ = [
    'ExpressionSyntaxError', 'PARSER_ERROR_CODES',
    'ParseOptions', 'Parser', 'Precedence', 'parse',
    'parse_decimal_uncertainty', 'parse_repeating_decimal', 'parse_non_repeating_decimal',
    'parse_continued_fraction', 'continued_fraction_value',
    'parse_base_notation', 'TokenType',
]
