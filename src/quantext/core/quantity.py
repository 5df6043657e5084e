"""
quantext.core.quantity
======================

Value types that the formatters know how to print.

This module provides:
- :class:`Quantity`, a value paired with a :class:`UnitExpression`.
- :class:`LogUnit`, :class:`Gain` and :class:`Level` for logarithmic scales
  (``3 dB``, ``10 dBm``). A log unit is atomic: it never decomposes into
  unit atoms.
- :class:`QuantityRange` and :class:`QuantityLinRange`, evenly spaced runs
  of quantities that share one unit.

The types carry no conversion or dimensional logic; they exist so that
values can be turned into parsable text.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from math import floor
from typing import Any, Iterator, Optional, cast

from quantext.core.unit import NoUnits, Unit, UnitExpression


def _as_expression(unit: object) -> UnitExpression:
    if isinstance(unit, UnitExpression):
        return unit
    if isinstance(unit, Unit):
        return unit.as_expression()
    raise TypeError(f"unit must be a Unit or UnitExpression, got {type(unit).__name__}")


@dataclass(frozen=True, slots=True)
class Quantity:
    """A value with a unit. ``value`` may be any number-like object."""

    value: Any
    unit: UnitExpression = NoUnits

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit", _as_expression(self.unit))

    @property
    def is_dimensionless(self) -> bool:
        return self.unit.is_dimensionless

    def ustrip(self) -> Any:
        """Return the bare value in the quantity's own unit."""
        return self.value

    def __str__(self) -> str:
        from quantext.io.quantity_format import to_string

        return to_string(self)


@dataclass(frozen=True, slots=True)
class LogUnit:
    """
    A logarithmic unit such as ``dB`` or ``dBm``.

    Attributes
    ----------
    name : str
        Descriptive name (``"decibel"``).
    abbr : str
        Intrinsic short name (``"dB"``), tried first when printing.
    reference : Quantity, optional
        Reference level for level units (``dBm`` is relative to ``1 mW``).
        ``None`` marks a pure gain unit.
    """

    name: str
    abbr: str
    reference: Optional[Quantity] = None

    def __post_init__(self) -> None:
        if not self.name or not self.abbr:
            raise ValueError("LogUnit name and abbr must be non-empty strings")

    @property
    def is_level(self) -> bool:
        return self.reference is not None

    def __rmul__(self, value: Any) -> "Gain | Level":
        if self.is_level:
            return Level(value, self)
        return Gain(value, self)

    def __str__(self) -> str:
        from quantext.io.quantity_format import to_string

        return to_string(self)


@dataclass(frozen=True, slots=True)
class Gain:
    """A ratio on a logarithmic scale, e.g. ``3 dB``."""

    value: Any
    unit: LogUnit

    def __post_init__(self) -> None:
        if not isinstance(self.unit, LogUnit):
            raise TypeError(f"Gain unit must be a LogUnit, got {type(self.unit).__name__}")
        if self.unit.is_level:
            raise ValueError(f"'{self.unit.abbr}' is a level unit; use Level instead of Gain")

    def ustrip(self) -> Any:
        return self.value

    def __str__(self) -> str:
        from quantext.io.quantity_format import to_string

        return to_string(self)


@dataclass(frozen=True, slots=True)
class Level:
    """An absolute level on a logarithmic scale, e.g. ``10 dBm``.

    ``value`` is expressed in the log unit itself.
    """

    value: Any
    unit: LogUnit

    def __post_init__(self) -> None:
        if not isinstance(self.unit, LogUnit):
            raise TypeError(f"Level unit must be a LogUnit, got {type(self.unit).__name__}")
        if not self.unit.is_level:
            raise ValueError(f"'{self.unit.abbr}' has no reference level; use Gain instead of Level")

    @property
    def reference(self) -> Quantity:
        return cast(Quantity, self.unit.reference)

    def ustrip(self) -> Any:
        return self.value

    def __str__(self) -> str:
        from quantext.io.quantity_format import to_string

        return to_string(self)


def _decimal(x: Any) -> Decimal:
    # str() of a float is its shortest round-tripping spelling
    return Decimal(str(x))


def _shared_unit(*qs: Quantity) -> UnitExpression:
    for q in qs:
        if not isinstance(q, Quantity):
            raise TypeError(f"Range bounds must be Quantity objects, got {type(q).__name__}")
    unit = qs[0].unit
    for q in qs[1:]:
        if q.unit != unit:
            raise ValueError(
                f"All range bounds must share one unit; got {unit!r} and {q.unit!r}"
            )
    return unit


@dataclass(frozen=True, slots=True)
class QuantityRange:
    """
    Inclusive, evenly stepped range ``start, start + step, ... <= stop``.

    ``step`` defaults to one of the shared unit. As with integer ranges the
    last element may fall short of ``stop`` when the step does not divide
    the span; :attr:`last` reports the element actually reached.
    """

    start: Quantity
    stop: Quantity
    step: Optional[Quantity] = None

    def __post_init__(self) -> None:
        unit = _shared_unit(self.start, self.stop)
        if self.step is None:
            object.__setattr__(self, "step", Quantity(1, unit))
        _shared_unit(self.start, self._step)
        if self._step.value == 0:
            raise ValueError("Range step cannot be zero")

    @property
    def _step(self) -> Quantity:
        # always set by __post_init__
        return cast(Quantity, self.step)

    def _is_float_range(self) -> bool:
        values = (self.start.value, self.stop.value, self._step.value)
        return (
            any(isinstance(v, float) for v in values)
            and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in values)
        )

    def _nth(self, i: int) -> Any:
        """Value of element ``i``, computed on the decimal spelling of float bounds."""
        a, s = self.start.value, self._step.value
        if self._is_float_range():
            return float(_decimal(a) + i * _decimal(s))
        return a + i * s

    @property
    def unit(self) -> UnitExpression:
        return self.start.unit

    def __len__(self) -> int:
        a, b, s = self.start.value, self.stop.value, self._step.value
        if self._is_float_range():
            # 0.3 / 0.1 is 2.9999999999999996 in binary, exactly 3 in decimal
            n = floor((_decimal(b) - _decimal(a)) / _decimal(s)) + 1
        else:
            n = floor((b - a) / s) + 1
        return max(0, n)

    @property
    def first(self) -> Quantity:
        return self.start

    @property
    def last(self) -> Quantity:
        return Quantity(self._nth(len(self) - 1), self.unit)

    def __iter__(self) -> Iterator[Quantity]:
        for i in range(len(self)):
            yield Quantity(self._nth(i), self.unit)

    def __str__(self) -> str:
        from quantext.io.quantity_format import to_string

        return to_string(self)


@dataclass(frozen=True, slots=True)
class QuantityLinRange:
    """
    ``length`` evenly spaced quantities from ``start`` to ``stop`` inclusive.

    Built like ``linspace``; the step is derived and always printed.
    """

    start: Quantity
    stop: Quantity
    length: int = 2

    def __post_init__(self) -> None:
        _shared_unit(self.start, self.stop)
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise TypeError("length must be an int")
        if self.length < 1:
            raise ValueError("length must be at least 1")

    @classmethod
    def from_length(cls, start: Quantity, stop: Quantity, length: int) -> "QuantityLinRange":
        return cls(start, stop, length)

    @property
    def unit(self) -> UnitExpression:
        return self.start.unit

    @property
    def step(self) -> Quantity:
        if self.length == 1:
            return Quantity(self.stop.value - self.start.value, self.unit)
        return Quantity((self.stop.value - self.start.value) / (self.length - 1), self.unit)

    def __len__(self) -> int:
        return self.length

    @property
    def first(self) -> Quantity:
        return self.start

    @property
    def last(self) -> Quantity:
        return self.stop

    def __iter__(self) -> Iterator[Quantity]:
        if self.length == 1:
            yield self.start
            return
        span = self.stop.value - self.start.value
        for i in range(self.length - 1):
            yield Quantity(self.start.value + span * i / (self.length - 1), self.unit)
        yield self.stop

    def __str__(self) -> str:
        from quantext.io.quantity_format import to_string

        return to_string(self)


__all__ = [
    "Quantity",
    "LogUnit",
    "Gain",
    "Level",
    "QuantityRange",
    "QuantityLinRange",
]
