"""
quantext.units.registry
=======================

A thread-safe units registry and the namespace view the formatter searches.

- Encapsulates symbol bindings in a `UnitsRegistry` class (thread-safe).
- Data-driven registration of SI base/derived units and logarithmic units.
- Normalization that handles ASCII fallbacks and Unicode NFC.
- Lazy synthesis of prefixed units with anti-stacking checks.
- Support for aliases (e.g., "ohm" → "Ω", "Ohm" → "Ω").
- Clear public API: `register`, `register_alias`, `get`, `has`, `lookup`,
  `names`, `all`.

A registry binds identifiers to values: a `Unit`, a `LogUnit`, or (for
synthesized prefixed symbols such as "km") a one-atom `UnitExpression`.
Composed expressions like "m/s^2" are not parsed.
"""
from __future__ import annotations


import re
import threading
import unicodedata
from typing import ClassVar, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union, cast

from quantext.core.quantity import LogUnit, Quantity
from quantext.core.unit import Unit, UnitAtom, UnitExpression
from quantext.units.prefixes import PREFIX_SYMBOLS_DESC, Prefix

Binding = Union[Unit, LogUnit, UnitExpression]

# ---------------------------------------------------------------------------
# Normalization & aliases
# ---------------------------------------------------------------------------
_OHM_RE = re.compile(r"(?i)ohm")


def normalize_symbol(s: str) -> str:
    """Normalize user-provided unit symbols.

    Rules:
    - Unicode normalize to NFC (composed forms like "µ").
    - Map textual aliases to canonical symbols (e.g. any 'ohm' → 'Ω').
    - Strip surrounding whitespace.
    - Leave case as-is except for alias mapping handled via regex.

    The ASCII micro fallback ('um' → 'µm') is applied by the registry only
    when the literal spelling is unknown.
    """
    if not s:
        return s

    s = s.strip()
    s = unicodedata.normalize("NFC", s)

    # Replace all forms of 'ohm' with Ω
    s = _OHM_RE.sub("Ω", s)
    return s


# ---------------------------------------------------------------------------
# Units registry
# ---------------------------------------------------------------------------
class UnitsRegistry:
    """Thread-safe registry of unit bindings with SI prefix synthesis.

    Units are registered under their ``abbr``. Prefixed spellings ("km",
    "µs") are synthesized on lookup and cached, but they are not part of
    :meth:`names`: only registered symbols and aliases are enumerated.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._units: Dict[str, Union[Unit, LogUnit]] = {}
        self._aliases: Dict[str, str] = {}
        self._prefixed: Dict[str, UnitExpression] = {}
        self._non_prefixable: set[str] = set()
        self._namespace: Optional[UnitNamespace] = None

    def __contains__(self, symbol: str) -> bool:
        return self.has(symbol)

    def set_non_prefixable(self, symbols: Iterable[str]) -> None:
        """Mark unit symbols that must not accept SI prefixes (e.g., 'kg', 'min')."""
        with self._lock:
            self._non_prefixable = {normalize_symbol(s) for s in symbols}
            self._prefixed.clear()

    def is_non_prefixable(self, symbol: str) -> bool:
        """Query helper (symbol may be alias; we normalize only the token)."""
        return normalize_symbol(symbol) in self._non_prefixable

    # -------------------------- public API ---------------------------------
    def register(self, unit: Union[Unit, LogUnit], replace: bool = False) -> None:
        """Register (or overwrite if replace is True) a unit under its ``abbr``.

        Use `register_alias` to add additional spellings without duplication.
        """
        if not isinstance(unit, (Unit, LogUnit)):
            raise TypeError(f"Expected Unit or LogUnit, got {type(unit).__name__}")

        with self._lock:
            if unit.abbr in getattr(UnitNamespace, "_reserved_names", ()):
                raise ValueError(
                    f"Cannot register unit '{unit.abbr}': "
                    "name conflicts with UnitNamespace attribute/method."
                )

            if not replace:
                if unit.abbr in self._units:
                    raise ValueError(
                        f"Cannot register unit '{unit.abbr}': "
                        "a unit with this name already exists."
                    )
                if unit.abbr in self._aliases:
                    raise ValueError(
                        f"Cannot register unit '{unit.abbr}': "
                        "an alias with this name already exists."
                    )

            self._units[unit.abbr] = unit
            self._prefixed.clear()

    def register_alias(self, alias: str, canonical: str, replace: bool = False) -> None:
        # 1) normalized form (e.g., 'ohm' -> 'Ω')
        norm_key = normalize_symbol(alias)

        # 2) literal, NFC/trimmed spelling (for discoverability in __dir__)
        literal_key = unicodedata.normalize("NFC", alias.strip())

        with self._lock:
            if canonical not in self._units:
                raise ValueError(
                    f"Cannot register alias '{alias}': unknown canonical unit '{canonical}'."
                )
            reserved = getattr(UnitNamespace, "_reserved_names", ())
            if literal_key in reserved or norm_key in reserved:
                raise ValueError(
                    f"Cannot register alias '{alias}': "
                    "name conflicts with UnitNamespace attribute/method."
                )
            if not replace:
                for key in {literal_key, norm_key}:
                    # Aliasing a symbol onto itself (e.g. 'ohm' normalising to 'Ω')
                    # is not a conflict.
                    if key in self._units and key != canonical:
                        raise ValueError(
                            f"Cannot register alias '{alias}' (which maps to '{key}'): "
                            f"a unit with the name '{key}' already exists."
                        )

            self._aliases[literal_key] = canonical
            if norm_key != canonical:
                self._aliases[norm_key] = canonical

    def has(self, symbol: str) -> bool:
        return self.lookup(symbol) is not None

    def get(self, symbol: str) -> Binding:
        """Lookup a binding by symbol. If missing, try to synthesize via SI prefix.

        Raises `ValueError` if unknown.
        """
        found = self.lookup(symbol)
        if found is None:
            raise ValueError(f"Unknown unit symbol: {symbol}")
        return found

    def lookup(self, symbol: str) -> Optional[Binding]:
        """Like :meth:`get` but returns ``None`` for unknown symbols."""
        if not isinstance(symbol, str) or not symbol:
            return None

        sym = normalize_symbol(symbol)
        with self._lock:
            found = self._resolve(sym)
            if found is None and sym.startswith("u"):
                # Leading 'u' as ASCII micro → 'µ'
                found = self._resolve("µ" + sym[1:])
            return found

    def names(self) -> Iterator[str]:
        """Every bound identifier: registered symbols first, then aliases."""
        with self._lock:
            snapshot: List[str] = list(self._units)
            snapshot.extend(a for a in self._aliases if a not in self._units)
        return iter(snapshot)

    def all(self) -> Mapping[str, Union[Unit, LogUnit]]:
        with self._lock:
            return dict(self._units)

    def as_namespace(self) -> "UnitNamespace":
        """Return the namespace view of this registry (one per registry)."""
        with self._lock:
            if self._namespace is None:
                self._namespace = UnitNamespace(self)
            return self._namespace

    # ------------------------- internals -----------------------------------
    def _resolve(self, sym: str) -> Optional[Binding]:
        target = self._aliases.get(sym)
        if target is not None:
            sym = target

        u = self._units.get(sym)
        if u is not None:
            return u
        return self._try_synthesize_prefixed(sym)

    def _split_prefix(self, symbol: str) -> Tuple[Optional[Prefix], str]:
        for p in PREFIX_SYMBOLS_DESC:
            if symbol.startswith(p):
                return Prefix.from_symbol(p), symbol[len(p):]
        return None, symbol

    def _try_synthesize_prefixed(self, sym: str) -> Optional[UnitExpression]:
        cached = self._prefixed.get(sym)
        if cached is not None:
            return cached

        prefix, base_sym = self._split_prefix(sym)
        if prefix is None or not base_sym:
            return None

        # Only registered symbols can take a prefix, so "kkm" never stacks.
        base_sym = self._aliases.get(base_sym, base_sym)
        base = self._units.get(base_sym)
        if not isinstance(base, Unit):
            return None

        if base_sym in self._non_prefixable:
            return None

        expr = UnitExpression((UnitAtom(base, 1, prefix),))
        self._prefixed[sym] = expr
        return expr


class UnitNamespace:
    """Attribute-style view over a registry; the default formatting scope."""

    _reserved_names: ClassVar[set[str]] = set()

    def __init__(self, reg: "UnitsRegistry") -> None:
        self._reg = reg

    def __contains__(self, symbol: str) -> bool:
        return self._reg.has(symbol)

    def define(self, abbr: str, name: Optional[str] = None, replace: bool = False) -> Unit:
        """Create, register and return a new primitive unit."""
        if abbr in getattr(UnitNamespace, "_reserved_names", ()):
            raise ValueError(
                f"Cannot define unit '{abbr}': "
                "name conflicts with UnitNamespace attribute/method."
            )
        unit = Unit(name or abbr, abbr)
        self._reg.register(unit, replace)
        return unit

    def lookup(self, name: str) -> Optional[Binding]:
        return self._reg.lookup(name)

    def names(self) -> Iterator[str]:
        return self._reg.names()

    def __call__(self, symbol: str) -> Binding:
        return self._reg.get(symbol)

    def __getattr__(self, name: str) -> Binding:
        try:
            return self._reg.get(name)
        except ValueError as e:
            # Unknown symbol should look like a missing attribute
            raise AttributeError(name) from e

    def __dir__(self) -> list[str]:
        """List all available unit symbols for autocomplete."""
        base_dir = set(super().__dir__())
        return sorted(base_dir | set(self._reg.names()))

    def __repr__(self) -> str:
        return f"<UnitNamespace of {len(self._reg.all())} units>"


UnitNamespace._reserved_names = set(dir(UnitNamespace))


# ---------------------------------------------------------------------------
# Bootstrap a default registry with SI units
# ---------------------------------------------------------------------------

def _bootstrap_default_registry() -> UnitsRegistry:
    reg = UnitsRegistry()

    # Base SI units (abbr, name)
    base_units = (
        ("m",   "meter"),
        ("kg",  "kilogram"),
        ("s",   "second"),
        ("A",   "ampere"),
        ("K",   "kelvin"),
        ("mol", "mole"),
        ("cd",  "candela"),
    )

    # Named derived units
    derived_units = (
        ("g",   "gram"),
        ("rad", "radian"),
        ("sr",  "steradian"),
        ("Hz",  "hertz"),
        ("N",   "newton"),
        ("Pa",  "pascal"),
        ("J",   "joule"),
        ("W",   "watt"),
        ("C",   "coulomb"),
        ("V",   "volt"),
        ("F",   "farad"),
        ("Ω",   "ohm"),
        ("S",   "siemens"),
        ("Wb",  "weber"),
        ("T",   "tesla"),
        ("H",   "henry"),
        ("lm",  "lumen"),
        ("lx",  "lux"),
        ("Bq",  "becquerel"),
        ("Gy",  "gray"),
        ("Sv",  "sievert"),
        ("kat", "katal"),
        ("L",   "liter"),
        ("eV",  "electronvolt"),
    )

    time_units = (
        ("min",        "minute"),
        ("h",          "hour"),
        ("d",          "day"),
        ("wk",         "week"),
        ("fortnight",  "fortnight"),
        ("mo",         "month"),   # avoid "m"
        ("yr",         "year"),
        ("yr_julian",  "julian_year"),
        ("decade",     "decade"),
        ("century",    "century"),
        ("millennium", "millennium"),
    )

    for abbr, name in (*base_units, *derived_units, *time_units):
        reg.register(Unit(name, abbr))

    # Logarithmic units. Level units carry their reference quantity.
    watt = cast(Unit, reg.get("W"))
    volt = cast(Unit, reg.get("V"))
    milliwatt = UnitExpression((UnitAtom(watt, 1, Prefix.MILLI),))

    log_units = (
        LogUnit("bel", "B"),
        LogUnit("decibel", "dB"),
        LogUnit("neper", "Np"),
        LogUnit("decibel_milliwatt", "dBm", Quantity(1, milliwatt)),
        LogUnit("decibel_watt", "dBW", Quantity(1, watt)),
        LogUnit("decibel_volt", "dBV", Quantity(1, volt)),
    )
    for lu in log_units:
        reg.register(lu)

    # Common aliases
    reg.register_alias("ohm", "Ω")
    reg.register_alias("Ohm", "Ω")
    reg.register_alias("OHM", "Ω")
    reg.register_alias("l", "L")

    # Time aliases
    reg.register_alias("minute", "min")
    reg.register_alias("minutes", "min")
    reg.register_alias("hr", "h")
    reg.register_alias("hour", "h")
    reg.register_alias("hours", "h")
    reg.register_alias("day", "d")
    reg.register_alias("days", "d")
    reg.register_alias("week", "wk")
    reg.register_alias("weeks", "wk")
    reg.register_alias("fortnights", "fortnight")
    reg.register_alias("month", "mo")
    reg.register_alias("months", "mo")
    reg.register_alias("year", "yr")
    reg.register_alias("years", "yr")
    reg.register_alias("annum", "yr")
    reg.register_alias("decades", "decade")
    reg.register_alias("centuries", "century")
    reg.register_alias("millennia", "millennium")

    reg.set_non_prefixable([
        "kg",
        "min", "h", "d", "wk", "fortnight",
        "mo", "yr", "yr_julian",
        "decade", "century", "millennium",
    ])

    return reg


# Public, shared default registry
DEFAULT_REGISTRY: UnitsRegistry = _bootstrap_default_registry()


__all__ = [
    "Binding",
    "UnitsRegistry",
    "UnitNamespace",
    "DEFAULT_REGISTRY",
    "normalize_symbol",
]
