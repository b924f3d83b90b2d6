"""
Digit alphabets for arbitrary-radix numerals.

A BaseSystem maps each character of an ordered alphabet to its digit value
and back. Alphabets are immutable and shared by reference, so the presets at
the bottom of this module are safe to hand out freely.

Author: xwest
"""

import string
from typing import Dict, Optional, Tuple

from ..logging_config import get_logger
from .errors import (
    FormatError, RangeError, DuplicateDigitError,
    create_invalid_digit_error, create_unsupported_base_error,
)

logger = get_logger(__name__)

# Characters the expression grammar gives meaning to; none may be a digit.
RESERVED_SYMBOLS = frozenset("+-*/^!()[]:.#~,_")

CANONICAL_DIGITS = string.digits + string.ascii_uppercase + string.ascii_lowercase

MIN_BASE = 2
MAX_BASE = len(CANONICAL_DIGITS)

# Alphabets larger than this still work but get slow to validate and print
LARGE_BASE_WARNING = 1000


def _expand_ranges(sequence: str) -> Tuple[str, ...]:
    """Expand ``a-z`` style ranges inside a character sequence."""
    characters = []
    i = 0
    while i < len(sequence):
        if i + 2 < len(sequence) and sequence[i + 1] == "-":
            start, end = sequence[i], sequence[i + 2]
            if ord(start) > ord(end):
                raise FormatError(
                    f"Invalid range: '{start}-{end}'. Start character must come before end character."
                )
            characters.extend(chr(code) for code in range(ord(start), ord(end) + 1))
            i += 3
        else:
            characters.append(sequence[i])
            i += 1
    return tuple(characters)


class BaseSystem:
    """
    An ordered digit alphabet defining a radix.

    The radix is the alphabet length. Letters are accepted in either case
    when the alphabet itself only uses one case.
    """

    __slots__ = ("_characters", "_char_map", "_name", "_letter_case")

    def __init__(self, character_sequence: str, name: Optional[str] = None):
        """
        Build an alphabet from an explicit character sequence.

        Args:
            character_sequence: Digits in ascending value order; ``x-y``
                expands to the code point range from x to y
            name: Display name, defaults to ``Base N``

        Raises:
            FormatError: Empty sequence, reversed range, or a reserved symbol
            DuplicateDigitError: A character occurs twice
            RangeError: Fewer than two characters
        """
        if not isinstance(character_sequence, str) or not character_sequence:
            raise FormatError("Character sequence must be a non-empty string")

        characters = _expand_ranges(character_sequence)

        if len(set(characters)) != len(characters):
            seen = set()
            duplicates = []
            for char in characters:
                if char in seen and char not in duplicates:
                    duplicates.append(char)
                seen.add(char)
            raise DuplicateDigitError(
                "Character sequence contains duplicate characters",
                source=character_sequence,
                suggestions=[f"remove the repeated '{char}'" for char in duplicates],
            )

        if len(characters) < MIN_BASE:
            raise RangeError("Base system must have at least 2 characters")

        conflicts = [c for c in characters if c in RESERVED_SYMBOLS or c.isspace()]
        if conflicts:
            raise FormatError(
                f"Base system characters conflict with parser symbols: {', '.join(conflicts)}",
                source=character_sequence,
            )

        if len(characters) > LARGE_BASE_WARNING:
            logger.warning("Very large base system (%d). This may impact performance.", len(characters))

        self._characters = characters
        self._char_map: Dict[str, int] = {char: value for value, char in enumerate(characters)}
        self._name = name or f"Base {len(characters)}"

        has_lower = any(c in string.ascii_lowercase for c in characters)
        has_upper = any(c in string.ascii_uppercase for c in characters)
        if has_upper and not has_lower:
            self._letter_case = "upper"
        elif has_lower and not has_upper:
            self._letter_case = "lower"
        else:
            self._letter_case = None

    @classmethod
    def from_base(cls, base: int, name: Optional[str] = None) -> "BaseSystem":
        """
        Canonical alphabet for a radix: 0-9, then A-Z, then a-z.

        Raises:
            RangeError: If base is outside 2..62
        """
        if not isinstance(base, int) or not MIN_BASE <= base <= MAX_BASE:
            raise create_unsupported_base_error(base)
        return cls(CANONICAL_DIGITS[:base], name or f"Base {base}")

    @classmethod
    def create_pattern(cls, pattern: str, size: int, name: Optional[str] = None) -> "BaseSystem":
        """Alphabet of ``size`` characters drawn from a named character pool."""
        pools = {
            "alphanumeric": CANONICAL_DIGITS,
            "digits": string.digits,
            "letters": string.ascii_uppercase + string.ascii_lowercase,
            "uppercase": string.ascii_uppercase,
            "lowercase": string.ascii_lowercase,
        }
        if pattern not in pools:
            raise FormatError(
                f"Unknown pattern '{pattern}'",
                suggestions=sorted(pools),
            )
        pool = pools[pattern]
        if not MIN_BASE <= size <= len(pool):
            raise RangeError(f"Pattern '{pattern}' supports sizes 2 to {len(pool)}, got {size}")
        return cls(pool[:size], name or f"{pattern.capitalize()} base {size}")

    # Properties

    @property
    def base(self) -> int:
        return len(self._characters)

    @property
    def characters(self) -> Tuple[str, ...]:
        return self._characters

    @property
    def name(self) -> str:
        return self._name

    @property
    def uses_alternate_exponent(self) -> bool:
        """True when 'E' or 'e' is a digit, so scientific notation must use ``_^``."""
        return "E" in self._char_map or "e" in self._char_map

    @property
    def exponent_marker(self) -> str:
        return "_^" if self.uses_alternate_exponent else "E"

    @property
    def max_digit(self) -> str:
        return self._characters[-1]

    @property
    def min_digit(self) -> str:
        return self._characters[0]

    # Digit handling

    def normalize_case(self, text: str) -> str:
        """Fold letters to the alphabet's case when it only uses one case."""
        if self._letter_case == "upper":
            return text.upper()
        if self._letter_case == "lower":
            return text.lower()
        return text

    def accepts_char(self, char: str) -> bool:
        """Check a single character, allowing the opposite letter case where permitted."""
        return self.normalize_case(char) in self._char_map

    def digit_value(self, char: str) -> int:
        return self._char_map[self.normalize_case(char)]

    def is_valid_string(self, text: str) -> bool:
        return all(self.accepts_char(char) for char in text)

    def to_decimal(self, text: str) -> int:
        """
        Convert a digit string to an integer.

        Args:
            text: Digits of this alphabet, optionally preceded by '-'

        Returns:
            The integer value

        Raises:
            FormatError: If there are no digits
            InvalidDigitError: At the first character outside the alphabet
        """
        negative = text.startswith("-")
        digits = text[1:] if negative else text
        if not digits:
            raise FormatError(f"Expected digits for {self._name}", source=text)

        radix = self.base
        value = 0
        for char in digits:
            normalized = self.normalize_case(char)
            if normalized not in self._char_map:
                raise create_invalid_digit_error(char, radix, self._name, text)
            value = value * radix + self._char_map[normalized]

        return -value if negative else value

    def from_decimal(self, value: int) -> str:
        """Render an integer with this alphabet."""
        if value == 0:
            return self._characters[0]

        radix = self.base
        magnitude = abs(value)
        digits = []
        while magnitude > 0:
            magnitude, remainder = divmod(magnitude, radix)
            digits.append(self._characters[remainder])

        if value < 0:
            digits.append("-")
        return "".join(reversed(digits))

    # Dunder methods

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseSystem):
            return NotImplemented
        return self._characters == other._characters

    def __hash__(self) -> int:
        return hash(self._characters)

    def __str__(self) -> str:
        return f"{self._name} ({''.join(self._characters)})"

    def __repr__(self) -> str:
        return f"BaseSystem({''.join(self._characters)!r}, {self._name!r})"


def to_base_string(value: int, base: int) -> str:
    """Render ``value`` with the canonical alphabet of ``base``."""
    return BaseSystem.from_base(base).from_decimal(value)


# Presets

BINARY = BaseSystem("01", "Binary")
OCTAL = BaseSystem("0-7", "Octal")
DECIMAL = BaseSystem("0-9", "Decimal")
DUODECIMAL = BaseSystem.from_base(12, "Duodecimal")
HEXADECIMAL = BaseSystem.from_base(16, "Hexadecimal")
BASE36 = BaseSystem.from_base(36, "Base 36")
BASE60 = BaseSystem("0-9a-zA-X", "Base 60")
BASE62 = BaseSystem.from_base(62, "Base 62")
ROMAN = BaseSystem("IVXLCDM", "Roman")

PRESETS: Dict[str, BaseSystem] = {
    "binary": BINARY,
    "octal": OCTAL,
    "decimal": DECIMAL,
    "duodecimal": DUODECIMAL,
    "hexadecimal": HEXADECIMAL,
    "hex": HEXADECIMAL,
    "base36": BASE36,
    "base60": BASE60,
    "base62": BASE62,
    "roman": ROMAN,
}
