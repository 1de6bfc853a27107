"""Cellcomplete: context-aware symbol completion for notebook cells."""

from cellcomplete.complete import NotebookCompleter
from cellcomplete.engine import get_completion_items
from cellcomplete.environment import Environment, Import, lookup_alias
from cellcomplete.exceptions import CompletionError, ManifestError, RegistryError, SettingsError
from cellcomplete.items import CompletionItem, ItemKind
from cellcomplete.manifest import load_manifest, parse_manifest
from cellcomplete.reflect import ModuleRegistry
from cellcomplete.registry import Namespace, NamespaceRegistry, StaticRegistry, Symbol, SymbolKind
from cellcomplete.settings import CompletionSettings
from cellcomplete.tokenizer import Chain, Strategy, tokenize
from cellcomplete.values import Binding, Bindings, NamespaceRef, Record, Scalar, to_value

__all__ = [
    # Entry point
    "get_completion_items",
    "NotebookCompleter",
    # Inputs
    "Binding",
    "Bindings",
    "Scalar",
    "Record",
    "NamespaceRef",
    "to_value",
    "Environment",
    "Import",
    "lookup_alias",
    # Registries
    "NamespaceRegistry",
    "StaticRegistry",
    "ModuleRegistry",
    "Namespace",
    "Symbol",
    "SymbolKind",
    "load_manifest",
    "parse_manifest",
    # Output
    "CompletionItem",
    "ItemKind",
    # Tokenizer
    "Chain",
    "Strategy",
    "tokenize",
    # Config
    "CompletionSettings",
    # Exceptions
    "CompletionError",
    "RegistryError",
    "ManifestError",
    "SettingsError",
]
