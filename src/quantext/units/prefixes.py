"""
quantext.units.prefixes
=======================

SI prefixes as magnitude-order tags.

A prefix is carried by a :class:`~quantext.core.unit.UnitAtom` and printed
verbatim in front of the unit identifier (``k`` + ``m`` -> ``km``).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Prefix(Enum):
    """Magnitude-order tag: ``(symbol, power of ten)``."""

    QUECTO = ("q", -30)
    RONTO = ("r", -27)
    YOCTO = ("y", -24)
    ZEPTO = ("z", -21)
    ATTO = ("a", -18)
    FEMTO = ("f", -15)
    PICO = ("p", -12)
    NANO = ("n", -9)
    MICRO = ("µ", -6)
    MILLI = ("m", -3)
    CENTI = ("c", -2)
    DECI = ("d", -1)
    NONE = ("", 0)
    DECA = ("da", 1)
    HECTO = ("h", 2)
    KILO = ("k", 3)
    MEGA = ("M", 6)
    GIGA = ("G", 9)
    TERA = ("T", 12)
    PETA = ("P", 15)
    EXA = ("E", 18)
    ZETTA = ("Z", 21)
    YOTTA = ("Y", 24)
    RONNA = ("R", 27)
    QUETTA = ("Q", 30)

    @property
    def symbol(self) -> str:
        return self.value[0]

    @property
    def power(self) -> int:
        return self.value[1]

    @property
    def factor(self) -> float:
        return 10.0 ** self.power

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["Prefix"]:
        """Return the prefix spelled ``symbol`` (``None`` if there is none)."""
        return _BY_SYMBOL.get(symbol)

    def __str__(self) -> str:
        return self.symbol


_BY_SYMBOL = {p.symbol: p for p in Prefix if p is not Prefix.NONE}

# Longest first so "da" wins over "d" when splitting "dam".
PREFIX_SYMBOLS_DESC = tuple(sorted(_BY_SYMBOL, key=len, reverse=True))

__all__ = ["Prefix", "PREFIX_SYMBOLS_DESC"]
