"""
Cursor over a preprocessed expression.

The parser and the numeral readers share one Scanner. It knows the operator
table and the active exponent marker, and offers the small set of
look/consume primitives the recursive descent needs.

Author: xwest
"""

import re
from typing import Optional, Pattern, Match

from .tokens import TokenType, OPERATORS

_DECIMAL_EXPONENT = re.compile(r"-?\d+")


class Scanner:
    """Position-tracking reader for an expression string."""

    def __init__(self, text: str, exponent_marker: str = "E"):
        self.text = text
        self.pos = 0
        self.exponent_marker = exponent_marker

    @property
    def remaining(self) -> str:
        return self.text[self.pos:]

    def is_at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek_char(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def check(self, literal: str) -> bool:
        """Check whether the input continues with ``literal`` without consuming."""
        return self.text.startswith(literal, self.pos)

    def match(self, literal: str) -> bool:
        """Consume ``literal`` if the input continues with it."""
        if self.check(literal):
            self.pos += len(literal)
            return True
        return False

    def advance(self, count: int = 1) -> str:
        consumed = self.text[self.pos:self.pos + count]
        self.pos += len(consumed)
        return consumed

    def match_pattern(self, pattern: Pattern) -> Optional[Match]:
        """Consume a regex match anchored at the cursor."""
        found = pattern.match(self.text, self.pos)
        if found:
            self.pos = found.end()
        return found

    def peek_operator(self) -> Optional[TokenType]:
        """Classify the operator at the cursor, or None if a numeral starts here."""
        if self.check(self.exponent_marker):
            return TokenType.E_NOTATION
        for spelling, token_type in OPERATORS:
            if self.check(spelling):
                return token_type
        return None

    def operator_length(self, token_type: TokenType) -> int:
        if token_type is TokenType.E_NOTATION:
            return len(self.exponent_marker)
        for spelling, candidate in OPERATORS:
            if candidate is token_type:
                return len(spelling)
        raise KeyError(token_type)

    def read_decimal_exponent(self) -> Optional[int]:
        """Consume ``-?digits`` and return its value, or None if absent."""
        found = self.match_pattern(_DECIMAL_EXPONENT)
        return int(found.group()) if found else None
