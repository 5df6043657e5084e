"""
quantext.core.unit
==================

Unit identities and composite unit expressions.

- :class:`Unit` is an opaque identity token (``name`` + default ``abbr``).
- :class:`UnitAtom` is one possibly-prefixed unit raised to a rational power.
- :class:`UnitExpression` is a product of atoms. Multiplicities are folded
  into the exponent and atoms whose exponent folds to zero disappear, so an
  expression never holds two atoms for the same prefixed unit.

Only the algebra needed to *build* expressions is provided (``*``, ``/``,
``**``). There is no dimensional analysis and no scale conversion.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Dict, Iterable, Tuple, Union

from quantext.core.utils import Exponent, rationalize
from quantext.units.prefixes import Prefix

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from quantext.core.quantity import Quantity


class MalformedExponentError(ValueError):
    """An atom exponent that violates the data model (zero)."""


@dataclass(frozen=True, slots=True)
class Unit:
    """
    A primitive unit.

    Attributes
    ----------
    name : str
        Long, descriptive name (e.g. ``"meter"``). Part of the identity.
    abbr : str
        Intrinsic short name (e.g. ``"m"``). This is the first identifier the
        formatter tries when printing the unit.
    """

    name: str
    abbr: str

    def __post_init__(self) -> None:
        if not self.name or not self.abbr:
            raise ValueError("Unit name and abbr must be non-empty strings")

    def as_expression(self) -> "UnitExpression":
        return UnitExpression((UnitAtom(self),))

    def __mul__(self, other: "UnitLike") -> "UnitExpression":
        return self.as_expression() * other

    def __truediv__(self, other: "UnitLike") -> "UnitExpression":
        return self.as_expression() / other

    def __rtruediv__(self, n: Any) -> "UnitExpression":
        return n / self.as_expression()

    def __pow__(self, n: Exponent) -> "UnitExpression":
        return self.as_expression() ** n

    def __rmul__(self, value: Any) -> Any:
        return value * self.as_expression()

    def __str__(self) -> str:
        from quantext.io.quantity_format import to_string

        return to_string(self)


@dataclass(frozen=True, slots=True)
class UnitAtom:
    """One ``prefix + unit`` raised to a non-zero rational ``exponent``."""

    unit: Unit
    exponent: Fraction = Fraction(1)
    prefix: Prefix = Prefix.NONE

    def __post_init__(self) -> None:
        exp = rationalize(self.exponent)
        if exp == 0:
            raise MalformedExponentError(
                f"Atom '{self.prefix.symbol}{self.unit.abbr}' has a zero exponent; "
                "zero-exponent atoms must be dropped, not constructed."
            )
        object.__setattr__(self, "exponent", exp)

    @property
    def key(self) -> Tuple[Unit, Prefix]:
        """Identity used for folding: the prefixed unit, ignoring the exponent."""
        return (self.unit, self.prefix)

    def __repr__(self) -> str:
        text = f"{self.prefix.symbol}{self.unit.abbr}"
        if self.exponent != 1:
            text += f"^{self.exponent}"
        return f"UnitAtom({text})"


def _fold(atoms: Iterable[Union[UnitAtom, Unit]]) -> Tuple[UnitAtom, ...]:
    """
    Sum exponents of atoms sharing a prefixed unit.

    The result keeps first-appearance order and drops atoms whose exponent
    sums to zero.
    """
    exps: Dict[Tuple[Unit, Prefix], Fraction] = {}
    for atom in atoms:
        if isinstance(atom, Unit):
            atom = UnitAtom(atom)
        elif not isinstance(atom, UnitAtom):
            raise TypeError(f"Expected UnitAtom or Unit, got {type(atom).__name__}")
        exps[atom.key] = exps.get(atom.key, Fraction(0)) + atom.exponent

    return tuple(
        UnitAtom(unit, exp, prefix)
        for (unit, prefix), exp in exps.items()
        if exp != 0
    )


def _coerce(other: object) -> "UnitExpression | None":
    if isinstance(other, UnitExpression):
        return other
    if isinstance(other, Unit):
        return other.as_expression()
    return None


class UnitExpression(tuple):
    """
    Immutable product of :class:`UnitAtom` objects.

    Tuple subclass: iteration yields atoms in storage (first-appearance)
    order, which the formatter uses as its tie-break order. Equality and
    hashing ignore that order.
    """

    __slots__ = ()

    def __new__(cls, atoms: Iterable[Union[UnitAtom, Unit]] = ()) -> "UnitExpression":
        return tuple.__new__(cls, _fold(atoms))

    @property
    def atoms(self) -> Tuple[UnitAtom, ...]:
        return tuple(self)

    @property
    def is_dimensionless(self) -> bool:
        return len(self) == 0

    # --- Algebra (operator overloads) ---
    def __mul__(self, other: object) -> "UnitExpression":  # type: ignore[override]
        o = _coerce(other)
        if o is None:
            # Returning NotImplemented would fall back to tuple repetition.
            raise TypeError(f"Cannot multiply a unit by {type(other).__name__}; use value * unit.")
        return UnitExpression((*self, *o))

    def __truediv__(self, other: object) -> "UnitExpression":
        o = _coerce(other)
        if o is None:
            raise TypeError(f"Cannot divide a unit by {type(other).__name__}.")
        return UnitExpression((*self, *(o ** -1)))

    def __rtruediv__(self, n: object) -> "UnitExpression":
        if n != 1:
            raise TypeError(
                f"Invalid operation: cannot divide {n!r} by a unit. "
                "Only 1/unit (reciprocal) is supported."
            )
        return self ** -1

    def __pow__(self, n: Exponent, modulo: Any | None = None) -> "UnitExpression":
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for units.")
        power = rationalize(n)
        if power == 0:
            return NoUnits
        return UnitExpression(
            UnitAtom(a.unit, a.exponent * power, a.prefix) for a in self
        )

    def __rmul__(self, value: Any) -> Any:  # type: ignore[override]
        """``value * unit`` builds a :class:`Quantity`; dimensionless returns ``value``."""
        o = _coerce(value)
        if o is not None:
            return o * self
        if len(self) == 0:
            return value

        from quantext.core.quantity import Quantity

        return Quantity(value, self)

    def __add__(self, other: Any) -> Any:
        """Block tuple concatenation."""
        return NotImplemented

    def __radd__(self, other: Any) -> Any:
        return NotImplemented

    # --- Identity ---
    def __eq__(self, other: object) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return frozenset(self) == frozenset(o)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash(frozenset(self))

    def __repr__(self) -> str:
        if not self:
            return "NoUnits"
        parts = []
        for a in self:
            text = f"{a.prefix.symbol}{a.unit.abbr}"
            if a.exponent != 1:
                text += f"^{a.exponent}"
            parts.append(text)
        return f"UnitExpression({' '.join(parts)})"

    def __str__(self) -> str:
        from quantext.io.quantity_format import to_string

        return to_string(self)


UnitLike = Union[Unit, UnitExpression]

# The dimensionless marker: the expression with no atoms.
NoUnits: UnitExpression = UnitExpression()


__all__ = [
    "MalformedExponentError",
    "Unit",
    "UnitAtom",
    "UnitExpression",
    "UnitLike",
    "NoUnits",
]
