"""Completion entry point: tokenize, classify, resolve, provide, merge.

get_completion_items() never raises. Every failure (bad input, unknown
namespace, registry errors) degrades to fewer or no items.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from cellcomplete import providers
from cellcomplete.environment import Environment
from cellcomplete.exceptions import RegistryError
from cellcomplete.items import CompletionItem, ItemKind
from cellcomplete.registry import NamespaceRegistry
from cellcomplete.resolver import resolve
from cellcomplete.settings import DEFAULT_SETTINGS, CompletionSettings
from cellcomplete.tokenizer import Chain, Strategy, tokenize
from cellcomplete.values import Bindings, NamespaceRef, Record

logger = logging.getLogger(__name__)


def merge(*groups: Iterable[CompletionItem]) -> list[CompletionItem]:
    """Concatenate provider results, lowest precedence first.

    A later item replaces an earlier one with the same (label, kind) and
    takes over its position.
    """
    merged: dict[tuple[str, ItemKind], CompletionItem] = {}
    for group in groups:
        for item in group:
            merged[(item.label, item.kind)] = item
    return list(merged.values())


def _branch(provider, *args, **kwargs) -> list[CompletionItem]:
    """Run one provider; a registry failure empties only its contribution."""
    try:
        return provider(*args, **kwargs)
    except RegistryError as e:
        logger.debug("%s degraded: %s", provider.__name__, e)
        return []


def _declared_members(
    registry: NamespaceRegistry, namespace: str, hint: str, settings: CompletionSettings
) -> list[CompletionItem]:
    if not namespace or not registry.namespace_exists(namespace):
        return []
    return [
        *_branch(providers.callables, registry, namespace, hint, settings),
        *_branch(providers.types, registry, namespace, hint, settings),
    ]


def _namespace_members(
    registry: NamespaceRegistry, namespace: str, hint: str, settings: CompletionSettings
) -> list[CompletionItem]:
    return merge(
        _branch(providers.namespaces, registry, namespace, hint),
        _branch(_declared_members, registry, namespace, hint, settings),
    )


def _complete_chain(
    chain: Chain,
    bindings: Bindings,
    env: Environment,
    registry: NamespaceRegistry,
    settings: CompletionSettings,
) -> list[CompletionItem]:
    strategy = chain.strategy
    if strategy is Strategy.NONE:
        return []
    if strategy is Strategy.NAMESPACE_LITERAL:
        return _branch(providers.namespaces, registry, "", chain.hint, atom_style=True)
    if strategy is Strategy.BARE:
        return merge(
            providers.variables(bindings, chain.hint, settings),
            _branch(providers.root_namespaces, registry, env, chain.hint, settings),
            _branch(providers.unqualified_callables, registry, env, chain.hint, settings),
        )

    target = resolve(chain, bindings, env, registry, settings)
    if isinstance(target, Record):
        return providers.fields(target, chain.hint, settings)
    if isinstance(target, NamespaceRef):
        return _namespace_members(registry, target.name, chain.hint, settings)
    return []


def get_completion_items(
    prefix: str,
    bindings: Bindings | Mapping[str, object],
    env: Environment | None,
    registry: NamespaceRegistry,
    settings: CompletionSettings | None = None,
) -> list[CompletionItem]:
    """Completion items for the expression ending at the cursor.

    Args:
        prefix: Source text of the cell up to the cursor.
        bindings: Bound variables; a plain dict is read like a REPL namespace.
        env: Lexical environment at the cursor (None for an empty one).
        registry: Namespace registry to query.
        settings: Root, core and special-forms names, wrap widths.

    Returns:
        Items ordered variables, namespaces, callables, types; each group
        sorted by name then arity.
    """
    env = env or Environment()
    settings = settings or DEFAULT_SETTINGS
    try:
        if not isinstance(bindings, Bindings):
            bindings = Bindings.from_namespace(bindings)
        chain = tokenize(prefix)
        items = _complete_chain(chain, bindings, env, registry, settings)
    except Exception:
        logger.debug("Completion failed for %r", prefix, exc_info=True)
        return []
    logger.debug("%d items for %r (%s)", len(items), prefix, chain.strategy.value)
    return items
