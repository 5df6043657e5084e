"""
quantext.units
==============

Unit catalog: SI prefixes and the default registry.

``from quantext.units import u`` gives a namespace over the default
registry (``u.m``, ``u.kPa``, ``u.dBm``). The registry is built on first use.
"""

from typing import TYPE_CHECKING, Any

from quantext.units.prefixes import Prefix

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from quantext.units.registry import UnitNamespace, UnitsRegistry

# Lazy access helpers -------------------------------------------------------

def _get_default_registry() -> "UnitsRegistry":
    # Import here to avoid circular imports: the registry needs core.unit,
    # which needs units.prefixes.
    from quantext.units.registry import DEFAULT_REGISTRY
    return DEFAULT_REGISTRY

def _default_namespace() -> "UnitNamespace":
    return _get_default_registry().as_namespace()

def __getattr__(name: str) -> Any:
    """
    Lazy attribute access for ``u`` and ``DEFAULT_REGISTRY``.
    """
    if name == "u":
        return _default_namespace()
    if name == "DEFAULT_REGISTRY":
        return _get_default_registry()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["u", "DEFAULT_REGISTRY"])


__all__ = ["Prefix"]
