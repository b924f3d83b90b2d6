"""
Error handling for the ratcalc expression parser.

Syntax problems in the expression structure (operators, parentheses,
exponents) raise ExpressionSyntaxError. Problems inside a numeral are the
number layer's typed errors and propagate unchanged.

Author: xwest
"""

from typing import Optional

from ..numbers.errors import RatcalcError
from .tokens import render


class ExpressionSyntaxError(RatcalcError):
    """
    Exception raised when an expression is structurally malformed.

    The error code narrows the problem down; see PARSER_ERROR_CODES.
    """

    code = "P001"

    def __init__(self, message: str, code: Optional[str] = None, position: Optional[int] = None, **kwargs):
        if code is not None:
            self.code = code
        super().__init__(message, **kwargs)
        self.position = position


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Expected token not found",
    "P004": "Unclosed delimiter",
    "P005": "Invalid expression",
    "P009": "Invalid operator usage",
    "P010": "Unexpected end of input",
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(found: str, position: int, expression: str) -> ExpressionSyntaxError:
    """Create an error for an operator that cannot start a factor."""
    return ExpressionSyntaxError(
        f"Unexpected token '{render(found)}'",
        code="P001",
        position=position,
        source=render(expression),
        help_text="A number, '(' or '-' was expected here",
    )


def create_trailing_input_error(rest: str, position: int, expression: str) -> ExpressionSyntaxError:
    """Create an error for input left over after a complete expression."""
    return ExpressionSyntaxError(
        f"Unexpected token at end: {render(rest)}",
        code="P001",
        position=position,
        source=render(expression),
    )


def create_missing_paren_error(position: int, expression: str) -> ExpressionSyntaxError:
    """Create an error for an unclosed parenthesis."""
    return ExpressionSyntaxError(
        "Missing closing parenthesis",
        code="P004",
        position=position,
        source=render(expression),
        suggestions=["add ')' to close the group"],
    )


def create_unexpected_eof_error(expression: str) -> ExpressionSyntaxError:
    """Create an error for input that stops where a factor was expected."""
    return ExpressionSyntaxError(
        "Unexpected end of expression",
        code="P010",
        position=len(expression),
        source=render(expression),
    )


def create_invalid_exponent_error(operator: str, position: int, expression: str) -> ExpressionSyntaxError:
    """Create an error for a power or E operator without an integer exponent."""
    return ExpressionSyntaxError(
        f"Invalid exponent after '{operator}'",
        code="P005",
        position=position,
        source=render(expression),
        help_text="Exponents are written as an optional '-' followed by decimal digits",
    )
