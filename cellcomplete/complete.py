"""Tab completer for prompt_toolkit editors backed by the completion engine.

The Completer ABC from prompt_toolkit serves as the provider interface, so
the same engine feeds a terminal REPL or any prompt_toolkit buffer.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from cellcomplete.engine import get_completion_items
from cellcomplete.environment import Environment
from cellcomplete.registry import NamespaceRegistry
from cellcomplete.settings import CompletionSettings
from cellcomplete.tokenizer import tokenize
from cellcomplete.values import Bindings


class NotebookCompleter(Completer):
    """Completion on a live namespace dict and lexical environment.

    env may be a callable so the environment can follow evaluation; it is
    read on every completion request, like the namespace itself.
    """

    def __init__(
        self,
        namespace: dict,
        registry: NamespaceRegistry,
        env: Environment | Callable[[], Environment] | None = None,
        settings: CompletionSettings | None = None,
    ) -> None:
        self._ns = namespace
        self._registry = registry
        self._env = env
        self._settings = settings

    def _environment(self) -> Environment | None:
        if callable(self._env):
            return self._env()
        return self._env

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        if not text.strip():
            return
        items = get_completion_items(
            text,
            Bindings.from_namespace(self._ns),
            self._environment(),
            self._registry,
            self._settings,
        )
        hint = tokenize(text).hint
        # "Enum.concat/" replaces the slash too
        start = -len(hint) - (1 if hint and text.endswith("/") else 0)
        for item in items:
            yield Completion(
                item.insert_text,
                start_position=start,
                display=item.label,
                display_meta=item.detail,
            )
