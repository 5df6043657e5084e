"""
quantext.io.symbols
===================

Map a unit back to an identifier that a parser would accept.

For every scope of a context, in order, the resolver

1. tries the unit's own ``abbr`` and accepts it if the scope binds that name
   to the same unit;
2. otherwise consults a reverse index of the scope (unit → first identifier
   bound to it, in the scope's own enumeration order), built once per scope.

Results are memoized per ``(unit, scope)``, misses included. When no scope
knows the unit a warning is logged, once per unit and list of scopes, and
``abbr`` is used anyway. Formatting never fails because of an unknown unit;
it only risks emitting text that will not parse.

Bindings match a :class:`Unit` when they are that unit, or a one-atom
expression of it with no prefix and exponent 1. Bindings match a
:class:`LogUnit` only when they are equal to it as a whole.
"""

from __future__ import annotations

import logging
import threading
from types import ModuleType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Protocol, Tuple, Union, runtime_checkable

from quantext.core.quantity import LogUnit
from quantext.core.unit import Unit, UnitExpression
from quantext.io.context import ContextLike, Scope, resolve_scopes
from quantext.units.prefixes import Prefix

logger = logging.getLogger(__name__)

Target = Union[Unit, LogUnit]


@runtime_checkable
class LookupScope(Protocol):
    """A scope with explicit lookup and enumeration (registries, namespaces)."""

    def lookup(self, name: str) -> Any: ...
    def names(self) -> Iterable[str]: ...


# --------------------------------------------------------------------------
# Scope adapters
# --------------------------------------------------------------------------

def _lookup(scope: Scope, name: str) -> Any:
    if isinstance(scope, ModuleType):
        return vars(scope).get(name)
    if isinstance(scope, Mapping):
        return scope.get(name)
    if isinstance(scope, LookupScope):
        return scope.lookup(name)
    raise TypeError(f"Unsupported scope type: {type(scope).__name__}")


def _bindings(scope: Scope) -> Iterator[Tuple[str, Any]]:
    if isinstance(scope, ModuleType):
        yield from list(vars(scope).items())
    elif isinstance(scope, Mapping):
        yield from list(scope.items())
    elif isinstance(scope, LookupScope):
        for name in scope.names():
            value = scope.lookup(name)
            if value is not None:
                yield name, value
    else:
        raise TypeError(f"Unsupported scope type: {type(scope).__name__}")


def _scope_label(scope: Scope) -> str:
    if isinstance(scope, ModuleType):
        return scope.__name__
    if isinstance(scope, Mapping):
        return f"<{type(scope).__name__} of {len(scope)} names>"
    return repr(scope)


# --------------------------------------------------------------------------
# Identity matching
# --------------------------------------------------------------------------

def identity_of(value: Any) -> Optional[Target]:
    """The unit a bound value stands for, or ``None`` if it is not a plain unit."""
    if isinstance(value, (Unit, LogUnit)):
        return value
    if isinstance(value, UnitExpression) and len(value) == 1:
        (atom,) = value
        if atom.prefix is Prefix.NONE and atom.exponent == 1:
            return atom.unit
    return None


def matches(value: Any, target: Target) -> bool:
    if isinstance(target, LogUnit):
        return isinstance(value, LogUnit) and value == target
    ident = identity_of(value)
    return isinstance(ident, Unit) and ident == target


# --------------------------------------------------------------------------
# Resolver
# --------------------------------------------------------------------------

class SymbolResolver:
    """
    Memoizing unit → identifier resolver.

    Safe to share between threads: the cache and indexes are guarded by a
    lock, and a race only costs a duplicate (identical) computation.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: Dict[Tuple[Target, int], Optional[str]] = {}
        self._indexes: Dict[int, Dict[Target, str]] = {}
        # (target, scope ids) already reported as unresolved
        self._warned: set[Tuple[Target, Tuple[int, ...]]] = set()
        # Keep scopes alive so their ids are not reused by new objects.
        self._scopes: Dict[int, Scope] = {}

    def resolve(self, target: Target, context: Optional[ContextLike] = None) -> str:
        """Return the identifier for ``target``, falling back to ``target.abbr``."""
        scopes = resolve_scopes(context)
        for scope in scopes:
            name = self.resolve_in(target, scope)
            if name is not None:
                return name

        key = (target, tuple(id(s) for s in scopes))
        with self._lock:
            first_miss = key not in self._warned
            if first_miss:
                self._warned.add(key)
                for s in scopes:
                    self._scopes.setdefault(id(s), s)
        if not first_miss:
            return target.abbr

        searched = [_scope_label(s) for s in scopes]
        logger.warning(
            "No identifier found for unit %r in %s; using %r, which may not parse.",
            target.abbr,
            searched,
            target.abbr,
            extra={"abbreviation": target.abbr, "namespaces": searched},
        )
        return target.abbr

    def resolve_in(self, target: Target, scope: Scope) -> Optional[str]:
        """Identifier for ``target`` in one scope, or ``None``. Memoized."""
        key = (target, id(scope))
        with self._lock:
            if key in self._cache:
                return self._cache[key]

        name = self._search(target, scope)

        with self._lock:
            self._scopes.setdefault(id(scope), scope)
            return self._cache.setdefault(key, name)

    def clear_cache(self) -> None:
        """Forget every memoized result, index and reported miss."""
        with self._lock:
            self._cache.clear()
            self._indexes.clear()
            self._warned.clear()
            self._scopes.clear()

    # ------------------------------------------------------------------
    def _search(self, target: Target, scope: Scope) -> Optional[str]:
        candidate = target.abbr
        if matches(_lookup(scope, candidate), target):
            return candidate
        return self._index_for(scope).get(target)

    def _index_for(self, scope: Scope) -> Dict[Target, str]:
        with self._lock:
            index = self._indexes.get(id(scope))
        if index is not None:
            return index

        index = {}
        for name, value in _bindings(scope):
            ident = identity_of(value)
            if ident is not None and ident not in index:
                index[ident] = name
        logger.debug("Indexed %d units in scope %s", len(index), _scope_label(scope))

        with self._lock:
            self._scopes.setdefault(id(scope), scope)
            return self._indexes.setdefault(id(scope), index)


DEFAULT_RESOLVER = SymbolResolver()


def resolve_symbol(target: Target, context: Optional[ContextLike] = None) -> str:
    """Resolve ``target`` with the shared resolver."""
    return DEFAULT_RESOLVER.resolve(target, context)


__all__ = [
    "LookupScope",
    "SymbolResolver",
    "DEFAULT_RESOLVER",
    "identity_of",
    "matches",
    "resolve_symbol",
]
