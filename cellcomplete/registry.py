"""Namespace registry: the query-only oracle behind completion.

NamespaceRegistry is the protocol the engine consumes. StaticRegistry is an
in-memory implementation that can be reloaded while completions run:
writers swap in a fresh snapshot under a lock, readers never take it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from cellcomplete.exceptions import RegistryError

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    FUNCTION = "function"
    MACRO = "macro"
    TYPE = "type"


CALLABLE_KINDS = (SymbolKind.FUNCTION, SymbolKind.MACRO)


class Symbol(BaseModel):
    """One exported (name, arity) clause of a namespace.

    default_arities lists the lower arities the same clause also answers
    through default arguments; they share signature and documentation.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    arity: int
    kind: SymbolKind = SymbolKind.FUNCTION
    signature: str | None = None
    documentation: str | None = None
    spec: str | None = None
    default_arities: tuple[int, ...] = ()
    hidden: bool = False


@runtime_checkable
class NamespaceRegistry(Protocol):
    """Read-only view over the loadable namespaces."""

    def namespace_exists(self, name: str) -> bool: ...

    def list_namespaces(self, prefix: str = "") -> list[str]: ...

    def exported_symbols(self, namespace: str, kind: SymbolKind) -> list[Symbol]: ...

    def namespace_doc(self, name: str) -> str | None: ...


class Namespace(BaseModel):
    """A namespace as stored by StaticRegistry."""

    model_config = ConfigDict(frozen=True)

    name: str
    documentation: str | None = None
    symbols: tuple[Symbol, ...] = ()


class StaticRegistry:
    """In-memory registry with copy-on-write reloads.

    load() and unload() replace the whole snapshot, so a reader that already
    grabbed self._namespaces keeps a consistent view for its query.
    """

    def __init__(self, namespaces: Iterable[Namespace] = ()) -> None:
        self._write_lock = threading.Lock()
        self._namespaces: Mapping[str, Namespace] = {ns.name: ns for ns in namespaces}

    def load(self, namespace: Namespace) -> None:
        """Add or replace a namespace."""
        with self._write_lock:
            snapshot = dict(self._namespaces)
            snapshot[namespace.name] = namespace
            self._namespaces = snapshot
        logger.debug("Loaded namespace %s (%d symbols)", namespace.name, len(namespace.symbols))

    def unload(self, name: str) -> None:
        with self._write_lock:
            snapshot = dict(self._namespaces)
            snapshot.pop(name, None)
            self._namespaces = snapshot

    def namespace_exists(self, name: str) -> bool:
        return name in self._namespaces

    def list_namespaces(self, prefix: str = "") -> list[str]:
        return sorted(name for name in self._namespaces if name.startswith(prefix))

    def exported_symbols(self, namespace: str, kind: SymbolKind) -> list[Symbol]:
        ns = self._namespaces.get(namespace)
        if ns is None:
            raise RegistryError(f"Namespace {namespace} is not loaded", namespace=namespace)
        return [s for s in ns.symbols if s.kind is kind]

    def namespace_doc(self, name: str) -> str | None:
        ns = self._namespaces.get(name)
        return ns.documentation if ns else None

    def __repr__(self) -> str:
        return f"StaticRegistry({len(self._namespaces)} namespaces)"
