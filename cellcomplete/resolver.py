"""Segment resolver: walks a chain to the value or namespace it names.

Resolution is all or nothing. A segment that does not resolve exactly
(unknown alias, missing field, scalar in the middle of the chain) ends the
walk with None; fuzzy matching is left to the hint.
"""

from __future__ import annotations

import logging

from cellcomplete.environment import Environment, lookup_alias
from cellcomplete.registry import NamespaceRegistry
from cellcomplete.settings import CompletionSettings
from cellcomplete.tokenizer import Chain, Strategy
from cellcomplete.values import Bindings, NamespaceRef, Record

logger = logging.getLogger(__name__)


def is_namespace_family(registry: NamespaceRegistry, name: str) -> bool:
    """True if name is a loaded namespace or the prefix of one."""
    return registry.namespace_exists(name) or bool(registry.list_namespaces(f"{name}."))


def walk_namespace(
    registry: NamespaceRegistry, name: str, segments: tuple[str, ...]
) -> NamespaceRef | None:
    """Append segments to name one at a time, checking each step exists."""
    for segment in segments:
        name = f"{name}.{segment}" if name else segment
        if not is_namespace_family(registry, name):
            logger.debug("No namespace %s", name)
            return None
    return NamespaceRef(name)


def resolve_qualified(
    chain: Chain,
    env: Environment,
    registry: NamespaceRegistry,
    settings: CompletionSettings,
) -> NamespaceRef | None:
    head, *rest = chain.segments
    if chain.sigil == ":":
        start = head
    elif head == settings.root_namespace:
        start = ""
    else:
        start = lookup_alias(env, head) or head
    if start and not is_namespace_family(registry, start):
        logger.debug("No namespace %s", start)
        return None
    return walk_namespace(registry, start, tuple(rest))


def resolve_variable(
    chain: Chain, bindings: Bindings, registry: NamespaceRegistry
) -> Record | NamespaceRef | None:
    head, *rest = chain.segments
    value = bindings.lookup(head)
    for i, segment in enumerate(rest):
        if isinstance(value, Record):
            value = value.fields.get(segment)
        elif isinstance(value, NamespaceRef):
            return walk_namespace(registry, value.name, tuple(rest[i:]))
        else:
            value = None
        if value is None:
            logger.debug("Cannot resolve %s in %s", segment, ".".join(chain.segments))
            return None
    if isinstance(value, (Record, NamespaceRef)):
        return value
    return None


def resolve(
    chain: Chain,
    bindings: Bindings,
    env: Environment,
    registry: NamespaceRegistry,
    settings: CompletionSettings,
) -> Record | NamespaceRef | None:
    """Resolve the segments of a qualified or variable-rooted chain.

    Returns the Record whose fields complete the hint, the namespace whose
    members complete it (NamespaceRef("") is the root), or None.
    """
    strategy = chain.strategy
    if strategy is Strategy.QUALIFIED:
        return resolve_qualified(chain, env, registry, settings)
    if strategy is Strategy.VARIABLE:
        return resolve_variable(chain, bindings, registry)
    return None
