"""
quantext.io.brackets
====================

When do the value and unit halves of a quantity need parentheses?
"""

from __future__ import annotations

from numbers import Complex, Integral, Rational, Real
from typing import Any, Optional, Protocol, runtime_checkable

from quantext.core.quantity import Gain, Level, Quantity
from quantext.core.unit import Unit, UnitExpression
from quantext.core.utils import value_to_text
from quantext.io.settings import is_u_str_expression

_DIGITS = frozenset("0123456789")


@runtime_checkable
class BracketAware(Protocol):
    """Numeric types that know whether their text needs grouping."""

    def __needs_bracket__(self) -> bool: ...


def has_value_bracket(value: Any) -> bool:
    """
    True when the text of ``value`` must be parenthesized to stay one token.

    Gains, levels, complex numbers and non-integral rationals always are;
    integers and reals never are. Other types either implement
    :class:`BracketAware` or are judged by their text: any character that
    is not a decimal digit means brackets.
    """
    if isinstance(value, Quantity):
        return has_value_bracket(value.value)
    if isinstance(value, (Gain, Level)):
        return True
    if isinstance(value, BracketAware):
        return bool(value.__needs_bracket__())
    if isinstance(value, Integral):
        return False
    if isinstance(value, Rational):
        return True
    if isinstance(value, Real):
        return False
    if isinstance(value, Complex):
        return True
    return any(ch not in _DIGITS for ch in value_to_text(value))


def has_unit_bracket(unit: Any, u_str: Optional[bool] = None) -> bool:
    """True for multi-atom units, unless they are written as a ``u"..."`` literal.

    ``u_str`` is the literal-wrap mode of the calling formatter; ``None``
    reads it from the environment.
    """
    if isinstance(unit, Quantity):
        unit = unit.unit
    elif isinstance(unit, Unit):
        unit = unit.as_expression()
    if not isinstance(unit, UnitExpression):
        raise TypeError(f"Expected a unit expression, got {type(unit).__name__}")
    if u_str is None:
        u_str = is_u_str_expression()
    return len(unit) > 1 and not u_str


__all__ = ["BracketAware", "has_value_bracket", "has_unit_bracket"]
