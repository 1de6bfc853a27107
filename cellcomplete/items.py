"""Completion items returned to the editor."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ItemKind(Enum):
    VARIABLE = "variable"
    NAMESPACE = "namespace"
    FUNCTION = "function"
    TYPE = "type"
    FIELD = "field"


class CompletionItem(BaseModel):
    """One candidate.

    label carries "/arity" for callables and types; insert_text is always
    the bare name to splice at the cursor. documentation is None when no
    documentation is stored, as opposed to an empty string.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    kind: ItemKind
    detail: str
    documentation: str | None = None
    insert_text: str
