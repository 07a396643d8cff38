"""Host engine: routes trigger tokens to rules and collects diagnostics."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from yodalint.lexer import tokenize
from yodalint.rules import DEFAULT_RULES, Diagnostic, Rule
from yodalint.stream import TokenStream
from yodalint.tokens import Token, TokenType


class Linter:
    """Dispatch every token to the rules registered for its type."""

    def __init__(self, rules: Iterable[Rule] = DEFAULT_RULES) -> None:
        self.rules: tuple[Rule, ...] = tuple(rules)
        self._by_trigger: dict[TokenType, list[Rule]] = {}
        for rule in self.rules:
            for tt in rule.triggers:
                self._by_trigger.setdefault(tt, []).append(rule)

    def lint_stream(self, stream: TokenStream) -> list[Diagnostic]:
        """Run all rules over *stream*; results come back in source order."""
        diagnostics: list[Diagnostic] = []
        for i, tok in enumerate(stream):
            for rule in self._by_trigger.get(tok.type, ()):
                found = rule.check(stream, i)
                if found is not None:
                    diagnostics.append(found)
        return diagnostics

    def lint_tokens(self, tokens: Sequence[Token]) -> list[Diagnostic]:
        return self.lint_stream(TokenStream(tokens))

    def lint_source(self, source: str, filename: str = "input.php") -> list[Diagnostic]:
        """Tokenize and lint PHP source. Raises LexError on malformed input."""
        return self.lint_tokens(tokenize(source, filename))

    def lint_file(self, path: Path) -> tuple[str, list[Diagnostic]]:
        """Read and lint a file, returning its source alongside the findings."""
        source = path.read_text(encoding="utf-8")
        return source, self.lint_source(source, str(path))
