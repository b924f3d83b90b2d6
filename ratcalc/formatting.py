"""
Display helpers for parse results.

Results print as fractions by default. The decimal output modes show
repeating decimals together with the length of their period, cut to a
number of places; intervals can also be shown in the uncertainty notation
the parser reads back.

Author: xwest
"""

from typing import Optional, Tuple

from .numbers import Value, BaseSystem, Integer, Rational, RationalInterval, DECIMAL
from .numbers.rational import MAX_REPEATING_DIGITS

OUTPUT_MODES = ("fraction", "decimal", "both", "scientific")
INTERVAL_STYLES = ("range", "compact", "symmetric", "relative")

# Places shown by the decimal output modes before ``...``
DEFAULT_DECIMAL_LIMIT = 20

_UNCERTAINTY_STYLES = {
    "compact": RationalInterval.to_compact_decimal,
    "symmetric": RationalInterval.to_symmetric_decimal,
    "relative": RationalInterval.to_relative_decimal,
}


def format_value(
    value: Value,
    mixed: bool = False,
    repeating: bool = False,
    base: Optional[BaseSystem] = None,
    mode: str = "fraction",
    interval_style: str = "range",
    decimal_limit: int = DEFAULT_DECIMAL_LIMIT,
) -> str:
    """
    Render a value for display.

    Args:
        value: Result of ``parse``
        mixed: Show non-integral rationals as mixed numbers (``2..1/4``)
        repeating: Show rationals as repeating decimals (``0.#3``)
        base: Render numerators and denominators in this alphabet
        mode: ``fraction``, ``decimal`` (``0.#3 {period: 1}``), ``both``
            (decimal followed by the fraction) or ``scientific``
        interval_style: ``range`` (``low:high``) or one of the uncertainty
            notations ``compact``, ``symmetric`` and ``relative``
        decimal_limit: Places the decimal modes show before cutting with ``...``

    Returns:
        The display string

    Raises:
        ValueError: For an unknown mode or interval style
    """
    if mode not in OUTPUT_MODES:
        raise ValueError(f"Unknown output mode '{mode}', use one of: {', '.join(OUTPUT_MODES)}")
    if interval_style not in INTERVAL_STYLES:
        raise ValueError(
            f"Unknown interval style '{interval_style}', use one of: {', '.join(INTERVAL_STYLES)}"
        )

    if base is not None and base != DECIMAL:
        if isinstance(value, RationalInterval):
            return f"{_format_in_base(value.low, base)}:{_format_in_base(value.high, base)}"
        return _format_in_base(value, base)

    if isinstance(value, RationalInterval) and interval_style != "range":
        return _UNCERTAINTY_STYLES[interval_style](value)

    if mode == "scientific":
        if isinstance(value, RationalInterval):
            return f"{value.low.to_scientific_notation()}:{value.high.to_scientific_notation()}"
        return _as_rational(value).to_scientific_notation()
    if mode != "fraction":
        return _format_decimal_mode(value, mode == "both", decimal_limit)

    if isinstance(value, RationalInterval):
        return (
            f"{format_value(value.low, mixed, repeating)}:"
            f"{format_value(value.high, mixed, repeating)}"
        )
    if repeating:
        return _as_rational(value).repeating_decimal_with_period()[0]
    if mixed:
        return value.to_mixed_string()
    return str(value)


def truncate_decimal(text: str, limit: int) -> str:
    """
    Cut a decimal or ``I.F#R`` repeating decimal to ``limit`` places after
    the point, marking the cut with ``...``.

    The places of a repeating decimal count both the fixed digits and the
    repeating block.
    """
    body = text[:-3] if text.endswith("...") else text
    point = body.find(".")
    if point < 0:
        return text

    head, fraction = body[:point + 1], body[point + 1:]
    prefix, hash_mark, cycle = fraction.partition("#")
    if len(prefix) > limit or (len(prefix) == limit and cycle and cycle != "0"):
        return f"{head}{prefix[:limit]}..."
    if hash_mark and cycle != "0" and len(prefix) + len(cycle) > limit:
        return f"{head}{prefix}#{cycle[:limit - len(prefix)]}..."
    return text


def _format_decimal_mode(value: Value, with_fraction: bool, limit: int) -> str:
    if isinstance(value, RationalInterval):
        low, low_period = _decimal_with_period(value.low, limit)
        high, high_period = _decimal_with_period(value.high, limit)
        parts = []
        if low_period:
            parts.append(f"low: {_period_text(low_period)}")
        if high_period:
            parts.append(f"high: {_period_text(high_period)}")
        note = f" {{period: {', '.join(parts)}}}" if parts else ""
        shown = f"{low}:{high}{note}"
        return f"{shown} ({value})" if with_fraction else shown

    rational = _as_rational(value)
    text, period = _decimal_with_period(rational, limit)
    shown = f"{text} {{period: {_period_text(period)}}}" if period else text
    if with_fraction and not rational.is_integer:
        return f"{shown} ({rational})"
    return shown


def _decimal_with_period(value: Rational, limit: int) -> Tuple[str, int]:
    text, period = value.repeating_decimal_with_period()
    return truncate_decimal(text, limit), period


def _period_text(period: int) -> str:
    return f">{MAX_REPEATING_DIGITS}" if period < 0 else str(period)


def _as_rational(value: Value) -> Rational:
    if isinstance(value, Integer):
        return value.to_rational()
    return value


def _format_in_base(value: Value, base: BaseSystem) -> str:
    if isinstance(value, Integer):
        return base.from_decimal(value.value)
    rational: Rational = value
    if rational.is_integer:
        return base.from_decimal(rational.numerator)
    return f"{base.from_decimal(rational.numerator)}/{base.from_decimal(rational.denominator)}"


def describe_type(value: Value) -> str:
    """Short type label shown next to REPL results."""
    if isinstance(value, Integer):
        return "integer"
    if isinstance(value, Rational):
        return "rational"
    return "interval"
