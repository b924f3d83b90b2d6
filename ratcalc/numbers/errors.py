"""
Error handling for the ratcalc value layer.

Every failure raised by the number types, the digit systems and the numeral
parsers is a typed exception carrying a Diagnostic with a stable error code,
so front ends can report problems uniformly.

Author: xwest
"""

import copy
from dataclasses import dataclass, replace
from typing import Optional, List, Dict


@dataclass(frozen=True)
class Diagnostic:
    """A single reported problem with an optional pointer into the input."""
    message: str
    code: Optional[str] = None
    source: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        prefix = f"ERROR[{self.code}]" if self.code else "ERROR"
        result = f"{prefix}: {self.message}"

        if self.source:
            result += f"\n  --> {self.source}"

        if self.help_text:
            result += f"\n  help: {self.help_text}"

        if self.suggestions:
            result += "\n  suggestions:"
            for suggestion in self.suggestions:
                result += f"\n    - {suggestion}"

        return result


class RatcalcError(Exception):
    """
    Base class for every error raised while parsing or evaluating.

    Subclasses only pin the error code; the message, the offending input
    and any help text travel in ``self.diagnostic``.
    """

    code: Optional[str] = None

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            code=self.code,
            source=source,
            help_text=help_text,
            suggestions=suggestions,
        )

    @property
    def message(self) -> str:
        return self.diagnostic.message

    def with_context(self, prefix: str) -> "RatcalcError":
        """Return a copy of this error whose message is prefixed with context."""
        message = f"{prefix}: {self.message}"
        clone = copy.copy(self)
        clone.args = (message,)
        clone.diagnostic = replace(self.diagnostic, message=message)
        return clone

    def __str__(self) -> str:
        return str(self.diagnostic)


class FormatError(RatcalcError):
    """Malformed numeral syntax or an empty expression."""
    code = "N001"


class InvalidDigitError(RatcalcError):
    """A character is not part of the active digit alphabet."""
    code = "N002"

    def __init__(self, message: str, char: str = "", base: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.char = char
        self.base = base


class RangeError(RatcalcError):
    """A radix or a size lies outside its supported range."""
    code = "N003"


class DuplicateDigitError(FormatError, RangeError):
    """A custom alphabet repeats a character."""
    code = "N006"


class DivisionByZeroError(RatcalcError, ZeroDivisionError):
    """Zero denominator, zero divisor, or an interval divisor spanning zero."""
    code = "N004"


class UndefinedOperationError(RatcalcError):
    """0^0, factorial outside the non-negative integers, nested intervals."""
    code = "N005"


# Error codes and their descriptions
ERROR_CODES: Dict[str, str] = {
    "N001": "Malformed numeral",
    "N002": "Invalid digit for base",
    "N003": "Value out of supported range",
    "N004": "Division by zero",
    "N005": "Undefined operation",
    "N006": "Duplicate digit in alphabet",
}


def suggest_minimum_base(digits: str) -> Optional[int]:
    """Smallest canonical radix whose alphabet contains every character of ``digits``."""
    from .base_system import CANONICAL_DIGITS
    highest = -1
    for char in digits:
        position = CANONICAL_DIGITS.find(char)
        if position < 0:
            return None
        highest = max(highest, position)
    if highest < 0:
        return None
    return max(highest + 1, 2)


def create_invalid_digit_error(char: str, base: int, name: str, text: str) -> InvalidDigitError:
    """Create error for a character outside a digit alphabet."""
    suggestions = []
    minimum = suggest_minimum_base(text.lstrip("-"))
    if minimum is not None and minimum > base:
        suggestions.append(f"'{text}' is a valid numeral in base {minimum} and above")

    return InvalidDigitError(
        f"Invalid character '{char}' for {name} (base {base})",
        char=char,
        base=base,
        source=text,
        suggestions=suggestions or None,
    )


def create_unsupported_base_error(base: int) -> RangeError:
    """Create error for a radix outside 2..62."""
    return RangeError(
        f"Base {base} is not supported. Base must be between 2 and 62.",
        help_text="Bases above 62 need a custom alphabet",
    )


def create_zero_to_zero_error() -> UndefinedOperationError:
    """Create error for 0^0 in any representation."""
    return UndefinedOperationError("Zero cannot be raised to the power of zero")


def create_factorial_error(double: bool = False) -> UndefinedOperationError:
    """Create error for factorial of a negative or non-integer value."""
    kind = "Double factorial" if double else "Factorial"
    return UndefinedOperationError(
        f"{kind} is only defined for non-negative integers",
        help_text="Factorials apply to whole numbers and to point intervals holding one",
    )
