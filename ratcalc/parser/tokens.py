"""
Operator tokens for ratcalc expressions.

Numerals are not tokenized ahead of time: their shape depends on the input
base and on what follows them, so the numeral readers work on the raw text.
Only the operators and grouping symbols between numerals are classified
here.

Whitespace is insignificant except in two places, which ``preprocess``
records with private-use marker characters before stripping it:

- ``" E"`` is the spaced scientific operator (``2 E3`` reads as 2 * 10^3
  applied at term level, not as a suffix bound to the literal)
- ``"/ "`` is always division, never a fraction bar

Author: xwest
"""

import re
from enum import Enum, auto
from typing import List, Tuple

SPACED_E_MARKER = "\ue000"
SPACED_SLASH_MARKER = "\ue001"

_WHITESPACE = re.compile(r"\s+")


class TokenType(Enum):
    """Operators and delimiters recognized between numerals."""

    PLUS = auto()               # +
    MINUS = auto()              # -
    STAR = auto()               # *
    SLASH = auto()              # / written without a following space
    DIVIDE_SPACED = auto()      # "/ "
    E_NOTATION = auto()         # E or _^ written tight
    E_SPACED = auto()           # " E"
    CARET = auto()              # ^  tight power
    DOUBLE_STAR = auto()        # ** multiplicative power
    BANG = auto()               # !
    DOUBLE_BANG = auto()        # !!
    LEFT_PAREN = auto()         # (
    RIGHT_PAREN = auto()        # )


# Longest spelling first so that "**" wins over "*" and "!!" over "!"
OPERATORS: List[Tuple[str, TokenType]] = [
    (SPACED_E_MARKER, TokenType.E_SPACED),
    ("/" + SPACED_SLASH_MARKER, TokenType.DIVIDE_SPACED),
    ("**", TokenType.DOUBLE_STAR),
    ("!!", TokenType.DOUBLE_BANG),
    ("+", TokenType.PLUS),
    ("-", TokenType.MINUS),
    ("*", TokenType.STAR),
    ("/", TokenType.SLASH),
    ("^", TokenType.CARET),
    ("!", TokenType.BANG),
    ("(", TokenType.LEFT_PAREN),
    (")", TokenType.RIGHT_PAREN),
]


def preprocess(expression: str, spaced_e: bool = True) -> str:
    """
    Mark significant spaces, then drop all whitespace.

    Args:
        expression: Raw user input
        spaced_e: Whether ``" E"`` is an operator; off when ``E`` is a digit

    Returns:
        The compacted expression containing marker characters
    """
    if spaced_e:
        expression = expression.replace(" E", SPACED_E_MARKER)
    expression = re.sub(r"/\s", "/" + SPACED_SLASH_MARKER, expression)
    return _WHITESPACE.sub("", expression)


def render(text: str) -> str:
    """Turn marker characters back into their spelling for messages."""
    return text.replace(SPACED_E_MARKER, " E").replace(SPACED_SLASH_MARKER, " ")
