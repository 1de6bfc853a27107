"""Namespace registry backed by the live Python interpreter.

Namespaces are the modules in sys.modules. Every query looks at the
modules as they are now, so a reloaded module shows its new members on the
next completion.
"""

from __future__ import annotations

import inspect
import logging
import sys
import types

from cellcomplete.exceptions import RegistryError
from cellcomplete.registry import Symbol, SymbolKind

logger = logging.getLogger(__name__)


def _public_members(module: types.ModuleType) -> list[tuple[str, object]]:
    names = getattr(module, "__all__", None)
    if names is None:
        names = [n for n in vars(module) if not n.startswith("_")]
    members = []
    for name in names:
        try:
            members.append((name, getattr(module, name)))
        except AttributeError:
            continue
    return members


def _routine_symbol(name: str, fn: object) -> Symbol | None:
    """Symbol for a function; defaulted positional parameters become extra arities."""
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return None
    positional = [
        p for p in sig.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    required = sum(1 for p in positional if p.default is p.empty)
    return Symbol(
        name=name,
        arity=len(positional),
        kind=SymbolKind.FUNCTION,
        signature=f"{name}{sig}",
        documentation=inspect.getdoc(fn),
        default_arities=tuple(range(required, len(positional))),
    )


class ModuleRegistry:
    """Registry over sys.modules.

    Functions are the module's public routines; types are its public
    classes, with arity equal to their number of type parameters. Python
    has no macros.
    """

    def _module(self, name: str) -> types.ModuleType:
        module = sys.modules.get(name)
        if not isinstance(module, types.ModuleType):
            raise RegistryError(f"Module {name} is not loaded", namespace=name)
        return module

    def namespace_exists(self, name: str) -> bool:
        return isinstance(sys.modules.get(name), types.ModuleType)

    def list_namespaces(self, prefix: str = "") -> list[str]:
        return sorted(
            name for name, module in list(sys.modules.items())
            if name.startswith(prefix) and isinstance(module, types.ModuleType)
        )

    def exported_symbols(self, namespace: str, kind: SymbolKind) -> list[Symbol]:
        module = self._module(namespace)
        symbols = []
        for name, obj in _public_members(module):
            if kind is SymbolKind.FUNCTION and inspect.isroutine(obj):
                symbol = _routine_symbol(name, obj)
                if symbol is None:
                    logger.debug("No signature for %s.%s", namespace, name)
                    continue
                symbols.append(symbol)
            elif kind is SymbolKind.TYPE and isinstance(obj, type):
                symbols.append(Symbol(
                    name=name,
                    arity=len(getattr(obj, "__type_params__", ())),
                    kind=SymbolKind.TYPE,
                    documentation=inspect.getdoc(obj),
                ))
        return symbols

    def namespace_doc(self, name: str) -> str | None:
        module = sys.modules.get(name)
        if not isinstance(module, types.ModuleType):
            return None
        return inspect.getdoc(module)
