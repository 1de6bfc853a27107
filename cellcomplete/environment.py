"""Lexical environment: current namespace, aliases, imports, requires."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cellcomplete.registry import SymbolKind


class Import(BaseModel):
    """One import of a namespace, with an optional allow- or deny-list.

    Usage:
        Import(namespace="Enum")
        Import(namespace="System", only=[("version", 0)])
        Import(namespace="Kernel", except_=[("length", 1)])
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    namespace: str
    only: tuple[tuple[str, int], ...] | None = None
    except_: tuple[tuple[str, int], ...] | None = Field(default=None, alias="except")
    kind: SymbolKind | None = None

    def decides(self, name: str, arity: int, kind: SymbolKind) -> bool | None:
        """True/False when this import settles the symbol's visibility, None if silent."""
        if self.kind is not None and kind is not self.kind:
            return None
        if self.only is not None:
            return True if (name, arity) in self.only else None
        if self.except_ is not None:
            return (name, arity) not in self.except_
        return True


class Environment(BaseModel):
    """Immutable snapshot of the lexical environment at the cursor."""

    model_config = ConfigDict(frozen=True)

    namespace: str | None = None
    aliases: dict[str, str] = Field(default_factory=dict)
    imports: tuple[Import, ...] = ()
    requires: tuple[str, ...] = ()

    def imports_for(self, namespace: str) -> list[Import]:
        return [imp for imp in self.imports if imp.namespace == namespace]

    def imported_namespaces(self) -> list[str]:
        """Explicitly imported namespaces in first-import order."""
        return list(dict.fromkeys(imp.namespace for imp in self.imports))


def lookup_alias(env: Environment, short_name: str) -> str | None:
    """Full namespace name an alias stands for, or None."""
    return env.aliases.get(short_name)


def is_imported(imports: list[Import], name: str, arity: int, kind: SymbolKind) -> bool:
    """Visibility of a symbol under every import of its namespace.

    The last import that decides the symbol wins, so a later allow- or
    deny-list refines earlier imports only for the symbols it names.
    """
    visible = False
    for imp in imports:
        decision = imp.decides(name, arity, kind)
        if decision is not None:
            visible = decision
    return visible
