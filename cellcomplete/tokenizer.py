"""Access-chain tokenizer and context classifier.

tokenize() looks only at the trailing expression before the cursor:

    "f = &Enum.al"        -> sigil "&", segments ("Enum",), hint "al"
    "map.nested.f"        -> segments ("map", "nested"), hint "f"
    ":zl"                 -> sigil ":", hint "zl"
    "map[:k].x"           -> invalid (member access on an unresolvable expression)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

SIGILS = ":&!^@"
_NAME = r"[^\W\d]\w*[?!]?"
_FRAGMENT = re.compile(
    rf"(?P<sigil>[{re.escape(SIGILS)}]?)(?P<body>(?:{_NAME}\.)*(?:{_NAME})?)"
)
_PUNCTUATION = frozenset("_?!")


def _is_name_char(ch: str) -> bool:
    return ch.isalnum() or ch in _PUNCTUATION


def _is_scanned(ch: str) -> bool:
    return _is_name_char(ch) or ch == "." or ch in SIGILS


class Strategy(Enum):
    """Which resolution applies to a chain."""

    NONE = "none"
    NAMESPACE_LITERAL = "namespace_literal"
    QUALIFIED = "qualified"
    VARIABLE = "variable"
    BARE = "bare"


@dataclass(frozen=True)
class Chain:
    """Tokenized trailing expression: resolvable segments plus the hint."""

    sigil: str = ""
    segments: tuple[str, ...] = ()
    hint: str = ""
    valid: bool = True

    @property
    def strategy(self) -> Strategy:
        return classify(self)


INVALID = Chain(valid=False)


def tokenize(prefix: str) -> Chain:
    """Split the expression ending at the cursor into a Chain."""
    # "Enum.concat/" asks for the arities of concat
    if len(prefix) > 1 and prefix.endswith("/") and _is_name_char(prefix[-2]):
        prefix = prefix[:-1]

    start = len(prefix)
    while start > 0 and _is_scanned(prefix[start - 1]):
        start -= 1

    match = _FRAGMENT.fullmatch(prefix[start:])
    if match is None:
        return INVALID
    *segments, hint = match["body"].split(".")
    return Chain(sigil=match["sigil"], segments=tuple(segments), hint=hint)


def classify(chain: Chain) -> Strategy:
    """Select exactly one resolution strategy for a chain."""
    if not chain.valid:
        return Strategy.NONE
    if chain.sigil == ":":
        return Strategy.QUALIFIED if chain.segments else Strategy.NAMESPACE_LITERAL
    if not chain.segments:
        return Strategy.BARE
    if chain.segments[0][0].isupper():
        return Strategy.QUALIFIED
    return Strategy.VARIABLE
