"""--debug token stream dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from yodalint.stream import TokenStream
from yodalint.tokens import EMPTY_TYPES, Token


def dump_tokens(stream: TokenStream, *, file: TextIO = sys.stderr, trivia: bool = False) -> None:
    """Print one line per token: index, line:column, type, and source text.

    Whitespace and comments are left out unless *trivia* is set.
    """
    width = len(str(max(len(stream) - 1, 0)))
    for i, tok in enumerate(stream):
        if tok.type in EMPTY_TYPES and not trivia:
            continue
        file.write(f"{i:>{width}} {_location(tok):<9} {tok.type.name:<20} {_preview(tok)}\n")


def _location(tok: Token) -> str:
    return f"{tok.span.start.line}:{tok.span.start.column}"


def _preview(tok: Token, limit: int = 40) -> str:
    text = tok.value
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return repr(text)
