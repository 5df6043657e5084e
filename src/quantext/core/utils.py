"""
quantext.core.utils
===================

Small numeric helpers shared by the value model and the formatters.

- :func:`rationalize` turns exponents (``int``, ``float``, ``Fraction``) into
  exact reduced fractions.
- :func:`value_to_text` is the host "to text" conversion for bare numeric
  values.
"""

from __future__ import annotations

from fractions import Fraction
from numbers import Complex, Real
from typing import Any, Union

Exponent = Union[int, float, Fraction]

# Denominators above this are treated as float noise, not intent.
_MAX_DENOMINATOR = 1000


def rationalize(x: Exponent) -> Fraction:
    """
    Return ``x`` as an exact, reduced :class:`~fractions.Fraction`.

    Integers and fractions pass through unchanged. Floats are accepted only
    if they are (to within float precision) a ratio with a small
    denominator, e.g. ``0.5 -> 1/2`` or ``1/3 -> 1/3``.

    Raises
    ------
    TypeError
        If ``x`` is not an int, float or Fraction (``bool`` included).
    ValueError
        If ``x`` is a non-finite float or not close to a small ratio.
    """
    if isinstance(x, bool) or not isinstance(x, (int, float, Fraction)):
        raise TypeError(f"Exponent must be int, float, or Fraction, got {type(x).__name__}")

    if isinstance(x, (int, Fraction)):
        return Fraction(x)

    if x != x or x in (float("inf"), float("-inf")):
        raise ValueError(f"Exponent must be finite, got {x!r}")

    frac = Fraction(x).limit_denominator(_MAX_DENOMINATOR)
    if abs(float(frac) - x) > 1e-12 * max(1.0, abs(x)):
        raise ValueError(f"Exponent {x!r} is not a simple rational number")
    return frac


def value_to_text(value: Any) -> str:
    """
    Plain text for a bare value.

    Mirrors ``str(value)`` except for non-real complex numbers, whose Python
    spelling carries enclosing parentheses (``(1+2j)``); those are dropped so
    grouping is left to the caller.
    """
    if isinstance(value, Complex) and not isinstance(value, Real):
        text = str(value)
        if text.startswith("(") and text.endswith(")"):
            return text[1:-1]
        return text
    return str(value)


__all__ = ["Exponent", "rationalize", "value_to_text"]
