"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from yodalint.engine import Linter
from yodalint.lexer import tokenize
from yodalint.rules import Diagnostic
from yodalint.tokens import Token, TokenType

# Snippets are prefixed on the same line, so line numbers match the snippet
PHP_PREFIX = "<?php "


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def php_lex(lex):
    """Like ``lex`` but for PHP code without an open tag; the tag token is dropped."""

    def _lex(code: str) -> list[Token]:
        return lex(PHP_PREFIX + code)[2:]

    return _lex


def lint_snippet(code: str) -> list[Diagnostic]:
    """Lint PHP code that has no open tag of its own."""
    return Linter().lint_source(PHP_PREFIX + code)


def flagged_lines(code: str) -> list[int]:
    """Return the line of every diagnostic reported for *code*."""
    return [d.span.start.line for d in lint_snippet(code)]


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def significant(tokens: list[Token]) -> list[Token]:
    """Drop whitespace and comment tokens."""
    return [
        t
        for t in tokens
        if t.type not in (TokenType.WHITESPACE, TokenType.COMMENT, TokenType.DOC_COMMENT)
    ]
