"""Candidate providers, one per item kind.

Each provider returns items matching the hint, sorted and free of
duplicates. Registry failures for one namespace only empty that namespace's
contribution.
"""

from __future__ import annotations

import logging
import re

from cellcomplete.docs import first_paragraph, format_documentation
from cellcomplete.environment import Environment, Import, is_imported
from cellcomplete.exceptions import RegistryError
from cellcomplete.items import CompletionItem, ItemKind
from cellcomplete.registry import CALLABLE_KINDS, NamespaceRegistry, Symbol, SymbolKind
from cellcomplete.settings import CompletionSettings
from cellcomplete.values import Bindings, Record, render_value

logger = logging.getLogger(__name__)

_ALIAS_SEGMENT = re.compile(r"[A-Z][A-Za-z0-9_]*")
_ATOM_NAME = re.compile(r"[a-z_][A-Za-z0-9_]*")
_ANY_SEGMENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


# --- variables and fields ---


def variables(bindings: Bindings, hint: str, settings: CompletionSettings) -> list[CompletionItem]:
    return [
        CompletionItem(
            label=b.name,
            kind=ItemKind.VARIABLE,
            detail="variable",
            documentation=render_value(b.value, settings.value_width),
            insert_text=b.name,
        )
        for b in bindings.visible()
        if b.name.startswith(hint)
    ]


def fields(record: Record, hint: str, settings: CompletionSettings) -> list[CompletionItem]:
    return [
        CompletionItem(
            label=name,
            kind=ItemKind.FIELD,
            detail="field",
            documentation=render_value(record.fields[name], settings.value_width),
            insert_text=name,
        )
        for name in sorted(record.fields)
        if name.startswith(hint)
    ]


# --- namespaces ---


def _namespace_item(registry: NamespaceRegistry, label: str, full_name: str | None) -> CompletionItem:
    doc = None
    if full_name is not None and registry.namespace_exists(full_name):
        doc = registry.namespace_doc(full_name)
    return CompletionItem(
        label=label,
        kind=ItemKind.NAMESPACE,
        detail="namespace",
        documentation=first_paragraph(doc) if doc is not None else None,
        insert_text=label,
    )


def namespaces(
    registry: NamespaceRegistry, parent: str, hint: str, *, atom_style: bool = False
) -> list[CompletionItem]:
    """Next-level namespace segments under parent ("" for the root).

    Root-level atom-style names (lists, zlib) are only offered when
    atom_style is set. Below a capitalized parent only capitalized segments
    are offered; below an atom-style parent any identifier is.
    """
    prefix = f"{parent}." if parent else ""
    if not parent:
        pattern = _ATOM_NAME if atom_style else _ALIAS_SEGMENT
    elif parent[0].isupper():
        pattern = _ALIAS_SEGMENT
    else:
        pattern = _ANY_SEGMENT
    found: dict[str, str] = {}
    for name in registry.list_namespaces(prefix):
        segment = name[len(prefix):].split(".", 1)[0]
        if pattern.fullmatch(segment) and segment.startswith(hint):
            found.setdefault(segment, prefix + segment)
    return [_namespace_item(registry, label, found[label]) for label in sorted(found)]


def root_namespaces(
    registry: NamespaceRegistry, env: Environment, hint: str, settings: CompletionSettings
) -> list[CompletionItem]:
    """Bare-identifier namespaces: top-level names, aliases and the root proxy."""
    by_label = {item.label: item for item in namespaces(registry, "", hint)}
    if settings.root_namespace.startswith(hint):
        by_label[settings.root_namespace] = _namespace_item(registry, settings.root_namespace, None)
    for short, full in env.aliases.items():
        if short.startswith(hint):
            by_label[short] = _namespace_item(registry, short, full)
    return [by_label[label] for label in sorted(by_label)]


# --- functions, macros and types ---


def _exported(registry: NamespaceRegistry, namespace: str, kind: SymbolKind) -> list[Symbol]:
    try:
        return registry.exported_symbols(namespace, kind)
    except RegistryError as e:
        logger.debug("Skipping %s symbols of %s: %s", kind.value, namespace, e)
        return []


def _offered(symbol: Symbol, hint: str) -> bool:
    if symbol.hidden or (symbol.name.startswith("__") and symbol.name.endswith("__")):
        return False
    return symbol.name.startswith(hint)


def expand_defaults(symbols: list[Symbol]) -> list[Symbol]:
    """One symbol per (name, arity), default-argument arities included.

    Every arity answered by a clause with defaults takes that clause's
    signature. Members of the group without documentation take the
    documentation and spec of the first documented member, the clause
    itself before the lower arities.
    """
    by_key = {(s.name, s.arity): s for s in symbols}
    for s in symbols:
        if not s.default_arities:
            continue
        lower = {arity: by_key.get((s.name, arity)) for arity in s.default_arities}
        documented = next(
            (m for m in (s, *lower.values()) if m is not None and m.documentation is not None),
            None,
        )
        shared = {}
        if documented is not None:
            shared = {"documentation": documented.documentation, "spec": documented.spec}
        for arity, existing in lower.items():
            update = {"arity": arity, "signature": s.signature, "default_arities": ()}
            if existing is None or existing.documentation is None:
                update |= shared
            by_key[(s.name, arity)] = (existing or s).model_copy(update=update)
        if s.documentation is None and shared:
            by_key[(s.name, s.arity)] = by_key[(s.name, s.arity)].model_copy(update=shared)
    return list(by_key.values())


def _callable_item(namespace: str, symbol: Symbol, settings: CompletionSettings) -> CompletionItem:
    if symbol.signature:
        detail = f"{namespace}.{symbol.signature}"
    else:
        detail = f"{namespace}.{symbol.name}/{symbol.arity}"
    return CompletionItem(
        label=f"{symbol.name}/{symbol.arity}",
        kind=ItemKind.FUNCTION,
        detail=detail,
        documentation=format_documentation(symbol.documentation, symbol.spec, settings.spec_width),
        insert_text=symbol.name,
    )


def _callable_symbols(
    registry: NamespaceRegistry, namespace: str, kinds: tuple[SymbolKind, ...]
) -> list[Symbol]:
    symbols = []
    for kind in kinds:
        symbols.extend(_exported(registry, namespace, kind))
    return expand_defaults(symbols)


def _sorted(items: dict[tuple[str, int], CompletionItem]) -> list[CompletionItem]:
    return [items[key] for key in sorted(items)]


def callables(
    registry: NamespaceRegistry, namespace: str, hint: str, settings: CompletionSettings
) -> list[CompletionItem]:
    """Functions and macros exported by one namespace."""
    items = {
        (s.name, s.arity): _callable_item(namespace, s, settings)
        for s in _callable_symbols(registry, namespace, CALLABLE_KINDS)
        if _offered(s, hint)
    }
    return _sorted(items)


def types(registry: NamespaceRegistry, namespace: str, hint: str, settings: CompletionSettings) -> list[CompletionItem]:
    items = {
        (s.name, s.arity): CompletionItem(
            label=f"{s.name}/{s.arity}",
            kind=ItemKind.TYPE,
            detail="typespec",
            documentation=format_documentation(s.documentation, s.spec, settings.spec_width),
            insert_text=s.name,
        )
        for s in _exported(registry, namespace, SymbolKind.TYPE)
        if _offered(s, hint)
    }
    return _sorted(items)


def _unqualified_sources(
    env: Environment, settings: CompletionSettings
) -> list[tuple[str, tuple[SymbolKind, ...], list[Import] | None]]:
    """(namespace, kinds, imports) reachable without qualification, lowest precedence first.

    imports is None when every symbol of the kinds is visible.
    """
    core = settings.core_namespace
    sources = [
        (settings.special_forms_namespace, CALLABLE_KINDS, None),
        (core, CALLABLE_KINDS, env.imports_for(core) or [Import(namespace=core)]),
    ]
    sources += [(ns, (SymbolKind.MACRO,), None) for ns in env.requires]
    sources += [
        (ns, CALLABLE_KINDS, env.imports_for(ns))
        for ns in env.imported_namespaces()
        if ns != core
    ]
    if env.namespace:
        sources.append((env.namespace, CALLABLE_KINDS, None))
    return sources


def unqualified_callables(
    registry: NamespaceRegistry, env: Environment, hint: str, settings: CompletionSettings
) -> list[CompletionItem]:
    """Callables usable by bare name, merged by precedence.

    A later source replaces an earlier one on the same (name, arity), so
    special forms only survive where nothing shadows them.
    """
    items: dict[tuple[str, int], CompletionItem] = {}
    for namespace, kinds, imports in _unqualified_sources(env, settings):
        for s in _callable_symbols(registry, namespace, kinds):
            if not _offered(s, hint):
                continue
            if imports is not None and not is_imported(imports, s.name, s.arity, s.kind):
                continue
            items[(s.name, s.arity)] = _callable_item(namespace, s, settings)
    return _sorted(items)
