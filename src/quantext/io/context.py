"""
quantext.io.context
===================

Ordered lists of scopes searched when turning a unit back into an
identifier.

A scope is anything the symbol resolver can look names up in: a
``UnitNamespace``, a ``UnitsRegistry``, a mapping of names to units, or a
module. :class:`FormatContext` holds an ordered, thread-safe list of them;
``DEFAULT_CONTEXT`` is the process-wide instance used when a formatting call
is not given one explicitly.
"""

from __future__ import annotations

import threading
from typing import Any, Iterable, Iterator, Optional, Sequence, Tuple, Union

from quantext.units.registry import DEFAULT_REGISTRY

Scope = Any


class FormatContext:
    """
    Ordered, mutable list of lookup scopes.

    Earlier scopes are searched first. Scopes are compared by identity, so
    adding the same object twice is a no-op and ``remove`` only drops that
    exact object. Readers use :meth:`snapshot`, which returns an immutable
    copy that stays stable while other threads add or remove scopes.
    """

    def __init__(self, scopes: Iterable[Scope] = ()) -> None:
        self._lock = threading.RLock()
        self._scopes: list[Scope] = []
        self.add(*scopes)

    def add(self, *scopes: Scope) -> None:
        with self._lock:
            for scope in scopes:
                if scope is None:
                    raise TypeError("scope cannot be None")
                if not any(s is scope for s in self._scopes):
                    self._scopes.append(scope)

    def remove(self, *scopes: Scope) -> None:
        with self._lock:
            self._scopes = [
                s for s in self._scopes if not any(s is r for r in scopes)
            ]

    def snapshot(self) -> Tuple[Scope, ...]:
        with self._lock:
            return tuple(self._scopes)

    def __iter__(self) -> Iterator[Scope]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self.snapshot())

    def __contains__(self, scope: object) -> bool:
        return any(s is scope for s in self.snapshot())

    def __repr__(self) -> str:
        return f"FormatContext({list(self.snapshot())!r})"


ContextLike = Union[FormatContext, Sequence[Scope], Scope]

DEFAULT_CONTEXT = FormatContext([DEFAULT_REGISTRY.as_namespace()])


def add_context(*scopes: Scope) -> None:
    """Append scopes to the process-wide default context."""
    DEFAULT_CONTEXT.add(*scopes)


def remove_context(*scopes: Scope) -> None:
    """Drop scopes (by identity) from the process-wide default context."""
    DEFAULT_CONTEXT.remove(*scopes)


def resolve_scopes(context: Optional[ContextLike] = None) -> Tuple[Scope, ...]:
    """
    Return the scopes to search for one formatting call.

    ``None`` means the default context; a :class:`FormatContext` is
    snapshotted; a list or tuple is taken as-is; any other object is a
    single scope.
    """
    if context is None:
        return DEFAULT_CONTEXT.snapshot()
    if isinstance(context, FormatContext):
        return context.snapshot()
    if isinstance(context, (list, tuple)):
        return tuple(context)
    return (context,)


__all__ = [
    "Scope",
    "ContextLike",
    "FormatContext",
    "DEFAULT_CONTEXT",
    "add_context",
    "remove_context",
    "resolve_scopes",
]
