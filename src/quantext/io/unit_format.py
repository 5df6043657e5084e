"""
quantext.io.unit_format
=======================

Render a :class:`~quantext.core.unit.UnitExpression` as parsable text.

Atoms are separated by ``*``. Atoms with a positive exponent come first;
within each sign group the expression's own storage order is kept.

When at least one exponent is positive and every exponent is an integer,
negative atoms are written after ``/`` with their magnitude
(``m/s^2``). Otherwise the sign stays on the exponent and every separator is
``*`` (``m^-1*s^-1``, ``m^(1/2)*s^-2``).

Exponent spelling for ``p = n/d``:

========================  ===========
``p == 1``                (nothing)
``d == 1``                ``^n``
``n/d`` exact as a float  ``^(n/d)``
otherwise                 ``^(n//d)``
========================  ===========

The ``//`` spelling tells the reader that the float ``n/d`` would lose
precision. In literal-wrap mode (``QUANTEXT_U_STR=true``) the whole text is wrapped as
``u"..."``.
"""

from __future__ import annotations

from fractions import Fraction
from typing import List, Optional

from quantext.core.unit import MalformedExponentError, UnitAtom, UnitExpression
from quantext.io.context import ContextLike
from quantext.io.settings import is_u_str_expression, wrap_u_str
from quantext.io.symbols import resolve_symbol


def sorted_atoms(expr: UnitExpression) -> List[UnitAtom]:
    """Positive exponents first; stable, so storage order breaks ties."""
    return sorted(expr, key=lambda a: 0 if a.exponent > 0 else 1)


def uses_division(atoms: List[UnitAtom]) -> bool:
    return (
        any(a.exponent > 0 for a in atoms)
        and all(a.exponent.denominator == 1 for a in atoms)
    )


def exponent_text(p: Fraction) -> str:
    if p == 0:
        raise MalformedExponentError("Zero exponents cannot be formatted")
    if p == 1:
        return ""
    if p.denominator == 1:
        return f"^{p.numerator}"
    if p == p.numerator / p.denominator:
        return f"^({p.numerator}/{p.denominator})"
    return f"^({p.numerator}//{p.denominator})"


def format_unit(
    expr: UnitExpression,
    context: Optional[ContextLike] = None,
    u_str: Optional[bool] = None,
) -> str:
    """
    Parsable text for ``expr``; ``""`` for an expression with no atoms.

    ``u_str`` forces literal-wrap mode on or off; ``None`` reads the
    environment.
    """
    atoms = sorted_atoms(expr)
    if not atoms:
        return ""
    div = uses_division(atoms)

    parts: List[str] = []
    for i, atom in enumerate(atoms):
        sep = "*"
        p = atom.exponent
        if div and p < 0:
            sep = "/"
            p = -p
        name = resolve_symbol(atom.unit, context)
        parts.append(f"{'' if i == 0 else sep}{atom.prefix.symbol}{name}{exponent_text(p)}")

    text = "".join(parts)
    if u_str is None:
        u_str = is_u_str_expression()
    return wrap_u_str(text) if u_str else text


__all__ = ["sorted_atoms", "uses_division", "exponent_text", "format_unit"]
