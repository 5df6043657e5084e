"""
quantext: parsable text for physical quantities and unit expressions.

quantext turns quantities, unit expressions, logarithmic quantities and
quantity ranges into strings that a unit grammar can read back, e.g.
``"m/s^2"``, ``"(1/2)m"`` or ``"(1+2j)*(m/s)"``.
This module exposes a minimal, stable public API. Heavy subsystems (the units
registry, the formatters) are imported lazily to avoid import-time side
effects and circular imports.
"""

from importlib import metadata as _metadata


__author__ = "Parneet Sidhu"
__license__ = "MIT"

# Try to read the installed package version first; fall back to a default for local dev.
try:
    __version__ = _metadata.version("quantext")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public names exposed by the package. Keep this minimal and stable.
__all__ = ["__version__", "__author__", "__license__"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from quantext.units.registry import UnitsRegistry

# name -> defining module, resolved on first access
_LAZY = {
    "Unit": "quantext.core.unit",
    "UnitAtom": "quantext.core.unit",
    "UnitExpression": "quantext.core.unit",
    "NoUnits": "quantext.core.unit",
    "Quantity": "quantext.core.quantity",
    "LogUnit": "quantext.core.quantity",
    "Gain": "quantext.core.quantity",
    "Level": "quantext.core.quantity",
    "QuantityRange": "quantext.core.quantity",
    "QuantityLinRange": "quantext.core.quantity",
    "Prefix": "quantext.units.prefixes",
    "FormatContext": "quantext.io.context",
    "add_context": "quantext.io.context",
    "remove_context": "quantext.io.context",
    "format_unit": "quantext.io.unit_format",
    "to_string": "quantext.io.quantity_format",
}

# Lazy access helpers -------------------------------------------------------

def _get_default_registry() -> "UnitsRegistry":
    # Import here to avoid import-time side-effects / circular imports.
    from quantext.units.registry import DEFAULT_REGISTRY  # local import
    return DEFAULT_REGISTRY

def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. Accessing 'u' returns the namespace of the
    package's default registry; public API names import their module on
    first use.
    """
    if name == "u":
        return _get_default_registry().as_namespace()
    if name in _LAZY:
        import importlib
        return getattr(importlib.import_module(_LAZY[name]), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + ["u", *_LAZY])
