"""
quantext.io.quantity_format
===========================

Compose value text and unit text into parsable quantity text.

A quantity is written as::

    [ ( ] value [ ) ] [ * ] [ ( ] unit [ ) ]

Each pair of brackets is decided by :mod:`quantext.io.brackets`. The ``*``
appears only when *both* halves are bracketed; a bracketed value followed by
a bare unit reads as juxtaposition (``(1/2)m``). Each entry point reads the
literal-wrap mode once and hands it to every helper it calls.

Examples
--------
>>> to_string(2.0 * u.s ** 2)
'2.0s^2'
>>> to_string(1.0 * (u.m * u.kg))
'1.0(m*kg)'
>>> to_string(Fraction(1, 2) * u.m)
'(1/2)m'
>>> to_string((1 + 2j) * (u.m / u.s))
'(1+2j)*(m/s)'
"""

from __future__ import annotations

from typing import Any, Optional, Union

from quantext.core.quantity import Gain, Level, LogUnit, Quantity, QuantityLinRange, QuantityRange
from quantext.core.unit import Unit, UnitExpression
from quantext.core.utils import value_to_text
from quantext.io.brackets import has_unit_bracket, has_value_bracket
from quantext.io.context import ContextLike
from quantext.io.settings import is_u_str_expression, wrap_u_str
from quantext.io.symbols import resolve_symbol
from quantext.io.unit_format import format_unit

NO_UNITS_TEXT = "NoUnits"


def _bracket(text: str, flag: bool) -> str:
    return f"({text})" if flag else text


def format_quantity(q: Quantity, context: Optional[ContextLike] = None) -> str:
    """Text for a plain quantity."""
    v = value_to_text(q.value)
    if q.is_dimensionless:
        return v
    u_str = is_u_str_expression()
    u = format_unit(q.unit, context, u_str)
    vb = has_value_bracket(q)
    ub = has_unit_bracket(q, u_str)
    sep = "*" if vb and ub else ""
    return f"{_bracket(v, vb)}{sep}{_bracket(u, ub)}"


def format_log_unit(
    unit: LogUnit, context: Optional[ContextLike] = None, u_str: Optional[bool] = None
) -> str:
    name = resolve_symbol(unit, context)
    if u_str is None:
        u_str = is_u_str_expression()
    return wrap_u_str(name) if u_str else name


def format_log(x: Union[Gain, Level], context: Optional[ContextLike] = None) -> str:
    """Text for a gain or level; the log unit is atomic, so it is never bracketed."""
    raw = x.ustrip()
    v = value_to_text(raw)
    vb = has_value_bracket(raw)
    u_str = is_u_str_expression()
    sep = "*" if vb and u_str else ""
    return f"{_bracket(v, vb)}{sep}{format_log_unit(x.unit, context, u_str)}"


def format_range(
    r: Union[QuantityRange, QuantityLinRange], context: Optional[ContextLike] = None
) -> str:
    """
    Text for a range: the bare numeric range in parentheses, then the unit.

    ``(1:5)m``, ``(1:2:9)*(m/s)``, ``(0.0:0.25:1.0)s``.
    """
    a, s, b = r.first.value, r.step.value, r.last.value
    if isinstance(r, QuantityRange) and s == 1:
        rng = f"{value_to_text(a)}:{value_to_text(b)}"
    else:
        rng = f"{value_to_text(a)}:{value_to_text(s)}:{value_to_text(b)}"

    u_str = is_u_str_expression()
    u = format_unit(r.unit, context, u_str)
    uni = f"*({u})" if has_unit_bracket(r.unit, u_str) else u
    return f"({rng}){uni}"


def to_string(x: Any, context: Optional[ContextLike] = None) -> str:
    """
    Parsable text for any supported value.

    Handles quantities, gains and levels, quantity ranges, units, unit
    expressions and the ``NoUnits`` marker. Anything else is passed to
    the plain value-to-text conversion.
    """
    if isinstance(x, Quantity):
        return format_quantity(x, context)
    if isinstance(x, (Gain, Level)):
        return format_log(x, context)
    if isinstance(x, (QuantityRange, QuantityLinRange)):
        return format_range(x, context)
    if isinstance(x, LogUnit):
        return format_log_unit(x, context)
    if isinstance(x, Unit):
        return format_unit(x.as_expression(), context)
    if isinstance(x, UnitExpression):
        if x.is_dimensionless:
            return NO_UNITS_TEXT
        return format_unit(x, context)
    return value_to_text(x)


__all__ = [
    "NO_UNITS_TEXT",
    "format_quantity",
    "format_log_unit",
    "format_log",
    "format_range",
    "to_string",
]
