"""Yoda condition linter for PHP."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from yodalint.rules import Diagnostic

__version__ = "0.1.0"


def lint(source: str, filename: str = "input.php") -> list[Diagnostic]:
    """Tokenize PHP source and return its Yoda-condition diagnostics."""
    from yodalint.engine import Linter

    return Linter().lint_source(source, filename)
