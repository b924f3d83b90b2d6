"""
Parser configuration.

Author: xwest
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..numbers.base_system import BaseSystem, DECIMAL

_KEY_ALIASES = {
    "typeAware": "type_aware",
    "inputBase": "input_base",
}


@dataclass(frozen=True)
class ParseOptions:
    """
    Options controlling how an expression is read.

    Attributes:
        type_aware: Keep Integer and Rational results and read plain
            decimals exactly. When False every literal is an interval and
            decimals carry half a unit of their last digit as uncertainty.
        input_base: Digit alphabet for bare numerals.
    """

    type_aware: bool = True
    input_base: BaseSystem = field(default=DECIMAL)

    @property
    def is_decimal_input(self) -> bool:
        return self.input_base == DECIMAL

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "ParseOptions":
        """Build options from a dict using either ``typeAware`` or ``type_aware`` spelling."""
        if not options:
            return cls()

        values = {}
        for key, value in options.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in ("type_aware", "input_base"):
                raise TypeError(f"Unknown parse option '{key}'")
            if value is not None:
                values[name] = value
        return cls(**values)
