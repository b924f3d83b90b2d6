"""
Exact number types and digit systems for ratcalc.

Key Features:
- Integer, Rational and RationalInterval with exact, unbounded arithmetic
- Mixed-type operations lift to the wider type automatically
- Two interval powers: tight ``pow`` and multiplicative ``mpow``
- Digit alphabets for radix 2-62 plus custom alphabets
- Provenance tags that record how a literal was written
- Typed errors carrying diagnostics with stable codes

Author: xwest
"""

from typing import Union

from .errors import (
    Diagnostic, RatcalcError, FormatError, InvalidDigitError, RangeError,
    DuplicateDigitError, DivisionByZeroError, UndefinedOperationError, ERROR_CODES,
)
from .provenance import Provenance
from .exact import ExactValue, as_value
from .rational import Rational
from .interval import RationalInterval
from .integer import Integer
from .base_system import (
    BaseSystem, to_base_string, PRESETS,
    BINARY, OCTAL, DECIMAL, DUODECIMAL, HEXADECIMAL, BASE36, BASE60, BASE62, ROMAN,
)

Value = Union[Integer, Rational, RationalInterval]

__all__ = [
    'Diagnostic', 'RatcalcError', 'FormatError', 'InvalidDigitError', 'RangeError',
    'DuplicateDigitError', 'DivisionByZeroError', 'UndefinedOperationError', 'ERROR_CODES',
    'Provenance', 'ExactValue', 'as_value', 'Value',
    'Rational', 'RationalInterval', 'Integer',
    'BaseSystem', 'to_base_string', 'PRESETS',
    'BINARY', 'OCTAL', 'DECIMAL', 'DUODECIMAL', 'HEXADECIMAL',
    'BASE36', 'BASE60', 'BASE62', 'ROMAN',
]
