"""Bound values as seen by the completion engine.

The evaluation side hands over arbitrary Python objects; to_value() folds
them once into a closed set of variants so resolution can dispatch on the
variant instead of probing types at every step:

- Record:       structure with named fields (dicts, dataclasses, models)
- NamespaceRef: a value that names a namespace (modules)
- Scalar:       anything else; nothing can be completed through it
"""

from __future__ import annotations

import dataclasses
import re
import types
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from pydantic import BaseModel
from rich.pretty import pretty_repr

_FIELD_NAME = re.compile(r"[^\W\d]\w*[?!]?")


@dataclass(frozen=True)
class Scalar:
    value: object


@dataclass(frozen=True)
class Record:
    """Ordered field map; field values are themselves variants."""

    fields: Mapping[str, Value] = field(default_factory=dict)


@dataclass(frozen=True)
class NamespaceRef:
    name: str


Value = Scalar | Record | NamespaceRef


def to_value(obj: object) -> Value:
    """Fold a raw Python object into a Value variant.

    Only identifier-like string keys become fields; other dict keys are
    dropped since they cannot be reached with dot access.
    """
    if isinstance(obj, (Scalar, Record, NamespaceRef)):
        return obj
    if isinstance(obj, types.ModuleType):
        return NamespaceRef(obj.__name__)
    if isinstance(obj, dict):
        return Record({
            k: to_value(v)
            for k, v in obj.items()
            if isinstance(k, str) and _FIELD_NAME.fullmatch(k)
        })
    if isinstance(obj, BaseModel):
        return Record({name: to_value(getattr(obj, name)) for name in type(obj).model_fields})
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return Record({f.name: to_value(getattr(obj, f.name)) for f in dataclasses.fields(obj)})
    return Scalar(obj)


class _Literal:
    """Object whose repr is the given text, for rendering namespace refs."""

    def __init__(self, text: str) -> None:
        self._text = text

    def __repr__(self) -> str:
        return self._text


def _plain(value: Value) -> object:
    if isinstance(value, Record):
        return {name: _plain(v) for name, v in value.fields.items()}
    if isinstance(value, NamespaceRef):
        return _Literal(value.name)
    return value.value


def render_value(value: Value, width: int = 30) -> str:
    """Fenced markdown rendering of a value, pretty-printed to width."""
    return f"```\n{pretty_repr(_plain(value), max_width=width)}\n```"


@dataclass(frozen=True)
class Binding:
    """A named value in scope. Hidden bindings are compiler-internal."""

    name: str
    value: Value
    hidden: bool = False


class Bindings:
    """Immutable set of bindings keyed by name."""

    def __init__(self, bindings: Iterable[Binding] = ()) -> None:
        self._by_name: dict[str, Binding] = {b.name: b for b in bindings}

    @classmethod
    def from_dict(cls, values: Mapping[str, object], *, hidden: Iterable[str] = ()) -> Bindings:
        """Build from name -> raw value; names in hidden are not user-visible."""
        hidden = set(hidden)
        return cls(
            Binding(name, to_value(obj), hidden=name in hidden)
            for name, obj in values.items()
        )

    @classmethod
    def from_namespace(cls, namespace: Mapping[str, object]) -> Bindings:
        """Build from a live REPL namespace dict. Underscore names are hidden."""
        return cls.from_dict(
            namespace, hidden=[name for name in namespace if name.startswith("_")]
        )

    def lookup(self, name: str) -> Value | None:
        """Value bound to a visible name, or None."""
        binding = self._by_name.get(name)
        if binding is None or binding.hidden:
            return None
        return binding.value

    def visible(self) -> Iterator[Binding]:
        """Visible bindings sorted by name."""
        for name in sorted(self._by_name):
            binding = self._by_name[name]
            if not binding.hidden:
                yield binding

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"Bindings({sorted(self._by_name)!r})"
