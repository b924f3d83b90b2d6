"""
Provenance tags carried by parsed values.

A tag records how a literal was written so the type-promotion pass can keep
the shape the user asked for. Tags never change arithmetic results.

Author: xwest
"""

from enum import Enum, auto


class Provenance(Enum):
    """How a value came to exist."""

    PLAIN = auto()              # computed, or written without special notation
    EXPLICIT_FRACTION = auto()  # written as n/1, keep it a fraction
    EXPLICIT_INTERVAL = auto()  # written as a:b, keep it an interval
    SKIP_PROMOTION = auto()     # result of **, keep the operator-defined width
