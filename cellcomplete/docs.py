"""Documentation formatting for completion items.

Items show the first paragraph of the stored documentation followed by the
symbol's spec in a fenced block. Long specs are wrapped so they fit the
narrow documentation pane of the editor.
"""

from __future__ import annotations

import re

_BLANK_LINE = re.compile(r"\n[ \t]*\n")
_OPEN = "([{"
_CLOSE = ")]}"


def first_paragraph(doc: str) -> str:
    """Text up to the first blank line."""
    return _BLANK_LINE.split(doc.strip(), maxsplit=1)[0].rstrip()


def _top_level(text: str, sep: str) -> list[int]:
    """Offsets of sep in text outside any brackets."""
    offsets = []
    depth = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in _OPEN:
            depth += 1
        elif ch in _CLOSE:
            depth -= 1
        elif depth == 0 and text.startswith(sep, i):
            offsets.append(i)
            i += len(sep)
            continue
        i += 1
    return offsets


def _split_args(args: str) -> list[str]:
    parts = []
    start = 0
    for offset in _top_level(args, ","):
        parts.append(args[start:offset].strip())
        start = offset + 1
    parts.append(args[start:].strip())
    return [p for p in parts if p]


def wrap_spec(spec: str, width: int = 30) -> str:
    """Wrap a one-line spec at "::" and then, if needed, one argument per line.

    Specs already spanning several lines are returned as they are.
    """
    spec = spec.strip()
    if "\n" in spec or len(spec) <= width:
        return spec

    arrows = _top_level(spec, " :: ")
    if not arrows:
        return spec
    head, ret = spec[: arrows[-1]], spec[arrows[-1] + 4 :]
    if len(head) + 3 <= width:
        return f"{head} ::\n  {ret}"

    open_at = head.find("(")
    if open_at == -1 or not head.endswith(")"):
        return f"{head} ::\n  {ret}"
    args = _split_args(head[open_at + 1 : -1])
    if not args:
        return f"{head} ::\n  {ret}"
    lines = [head[: open_at + 1]]
    lines += [f"  {arg}," for arg in args[:-1]]
    lines.append(f"  {args[-1]}")
    lines.append(f") :: {ret}")
    return "\n".join(lines)


def format_documentation(doc: str | None, spec: str | None = None, width: int = 30) -> str | None:
    """Markdown documentation for an item, or None when nothing is stored."""
    if doc is None:
        return None
    parts = [first_paragraph(doc)]
    if spec:
        parts.append(f"```\n{wrap_spec(spec, width)}\n```")
    return "\n\n".join(p for p in parts if p)
