"""Static namespace manifests.

A manifest is a JSON document describing loadable namespaces, for
platforms where completion cannot reflect on live code:

    {"namespaces": [
        {"name": "System",
         "documentation": "System interface.",
         "functions": [{"name": "version", "arity": 0,
                        "signature": "version()",
                        "spec": "@spec version() :: String.t()"}]}
    ]}
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from cellcomplete.exceptions import ManifestError
from cellcomplete.registry import Namespace, StaticRegistry, Symbol, SymbolKind


class SymbolEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    arity: int = 0
    signature: str | None = None
    documentation: str | None = None
    spec: str | None = None
    default_arities: list[int] = []
    hidden: bool = False

    def to_symbol(self, kind: SymbolKind) -> Symbol:
        return Symbol(kind=kind, **self.model_dump())


class NamespaceEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    documentation: str | None = None
    functions: list[SymbolEntry] = []
    macros: list[SymbolEntry] = []
    types: list[SymbolEntry] = []

    def to_namespace(self) -> Namespace:
        symbols = [s.to_symbol(SymbolKind.FUNCTION) for s in self.functions]
        symbols += [s.to_symbol(SymbolKind.MACRO) for s in self.macros]
        symbols += [s.to_symbol(SymbolKind.TYPE) for s in self.types]
        return Namespace(name=self.name, documentation=self.documentation, symbols=tuple(symbols))


class Manifest(BaseModel):
    namespaces: list[NamespaceEntry] = []

    def to_registry(self) -> StaticRegistry:
        return StaticRegistry(entry.to_namespace() for entry in self.namespaces)


def parse_manifest(text: str) -> Manifest:
    """Validate manifest JSON text."""
    try:
        return Manifest.model_validate(json.loads(text))
    except json.JSONDecodeError as e:
        raise ManifestError(f"Manifest is not valid JSON: {e}", cause=e)
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest: {e.error_count()} errors", cause=e)


def load_manifest(path: Path) -> StaticRegistry:
    """Read a manifest file into a StaticRegistry."""
    try:
        text = Path(path).read_text()
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}", cause=e)
    return parse_manifest(text).to_registry()
