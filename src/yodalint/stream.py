"""Read-only token stream with bracket matching and directional search."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from yodalint.tokens import BRACKET_PAIRS, Token, TokenType


class TokenStream:
    """An immutable, indexable view over one source unit's tokens.

    Matching bracket pairs are resolved once on construction so that
    statement-local searches can hop over nested groups.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens: tuple[Token, ...] = tuple(tokens)
        self._openers: dict[int, int] = _match_brackets(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, index: int) -> Token:
        return self._tokens[index]

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def opener_of(self, closer: int) -> int | None:
        """Return the index of the bracket matching the closer at *closer*."""
        return self._openers.get(closer)

    def find_previous(
        self,
        types: frozenset[TokenType],
        start: int,
        end: int | None = None,
        *,
        exclude: bool = False,
        local: bool = False,
    ) -> int | None:
        """Return the nearest index at or before *start* whose type matches.

        With ``exclude`` the match is inverted. The search never goes below
        *end* (default 0). With ``local`` it stays inside the current
        statement: matched bracket groups are skipped as a whole and the
        search gives up at a semicolon.
        """
        lower = 0 if end is None else max(end, 0)
        i = min(start, len(self._tokens) - 1)
        while i >= lower:
            tt = self._tokens[i].type
            if (tt in types) != exclude:
                return i
            if local:
                opener = self._openers.get(i)
                if opener is not None:
                    i = opener
                elif tt == TokenType.SEMICOLON:
                    break
            i -= 1
        return None

    def find_next(
        self,
        types: frozenset[TokenType],
        start: int,
        end: int | None = None,
        *,
        exclude: bool = False,
    ) -> int | None:
        """Return the nearest index at or after *start*, before *end*, whose type matches."""
        upper = len(self._tokens) if end is None else min(end, len(self._tokens))
        for i in range(max(start, 0), upper):
            if (self._tokens[i].type in types) != exclude:
                return i
        return None


def _match_brackets(tokens: Sequence[Token]) -> dict[int, int]:
    """Map each closing bracket index to its opener; unmatched closers are left out."""
    closers = {closer: opener for opener, closer in BRACKET_PAIRS.items()}
    stack: list[tuple[TokenType, int]] = []
    result: dict[int, int] = {}
    for i, tok in enumerate(tokens):
        if tok.type in BRACKET_PAIRS:
            stack.append((tok.type, i))
        elif tok.type in closers:
            want = closers[tok.type]
            # Unwind to the nearest opener of the same kind; stray openers are dropped
            for depth in range(len(stack) - 1, -1, -1):
                if stack[depth][0] == want:
                    result[i] = stack[depth][1]
                    del stack[depth:]
                    break
    return result
