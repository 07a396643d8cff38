"""Lint rules over the PHP token stream."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from yodalint.stream import TokenStream
from yodalint.tokens import (
    BOOLEAN_OPERATORS,
    CAST_TYPES,
    EMPTY_TYPES,
    EQUALITY_OPERATORS,
    Span,
    TokenType,
)


class Severity(Enum):
    """Diagnostic severity levels."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single finding, anchored at a token index."""

    index: int
    code: str
    message: str
    severity: Severity
    span: Span


class Rule(Protocol):
    """A token-triggered check.

    The host calls ``check`` once for every token whose type is in
    ``triggers``. Rules keep no state between calls.
    """

    code: str
    triggers: frozenset[TokenType]

    def check(self, stream: TokenStream, index: int) -> Diagnostic | None: ...


# Where a condition's left operand can start
BOUNDARY_TYPES: frozenset[TokenType] = BOOLEAN_OPERATORS | {TokenType.IF, TokenType.ELSEIF}

# Left operand is a variable or array access
VARIABLE_LIKE_TYPES: frozenset[TokenType] = frozenset(
    {TokenType.VARIABLE, TokenType.CLOSE_SQUARE_BRACKET}
)

# Left operand is a literal, call, parenthesized group, or a return expression
EXEMPTING_LEFT_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.CONSTANT_STRING,
        TokenType.CLOSE_PARENTHESIS,
        TokenType.OPEN_PARENTHESIS,
        TokenType.RETURN,
    }
)

SCOPE_KEYWORD_TYPES: frozenset[TokenType] = frozenset(
    {TokenType.SELF, TokenType.PARENT, TokenType.STATIC}
)

_EMPTY_OR_DOUBLE_COLON = EMPTY_TYPES | {TokenType.DOUBLE_COLON}


class YodaConditionsRule:
    """Require the constant side of ``==``/``!=``/``===``/``!==`` to come first.

    ``$foo == 'bar'`` is reported; ``'bar' == $foo``, ``$foo == $bar`` and
    ``foo() == $bar`` are not.
    """

    code = "NotYoda"
    message = "Use Yoda Condition checks, you must."
    triggers = EQUALITY_OPERATORS

    def __init__(self, severity: Severity = Severity.ERROR) -> None:
        self.severity = severity

    def check(self, stream: TokenStream, index: int) -> Diagnostic | None:
        if not self._left_needs_yoda(stream, index):
            return None
        if self._right_is_variable(stream, index):
            return None
        return Diagnostic(index, self.code, self.message, self.severity, stream[index].span)

    def _left_needs_yoda(self, stream: TokenStream, index: int) -> bool:
        beginning = stream.find_previous(BOUNDARY_TYPES, index, local=True)
        stop = -1 if beginning is None else beginning

        # Note: going backwards, and the first decisive token wins
        for i in range(index - 1, stop, -1):
            tt = stream[i].type
            if tt in EMPTY_TYPES:
                continue
            if tt in VARIABLE_LIKE_TYPES:
                return True
            if tt in EXEMPTING_LEFT_TYPES:
                return False
        return False

    def _right_is_variable(self, stream: TokenStream, index: int) -> bool:
        right = stream.find_next(EMPTY_TYPES, index + 1, exclude=True)

        if right is not None and stream[right].type in CAST_TYPES:
            right = stream.find_next(EMPTY_TYPES, right + 1, exclude=True)

        if right is not None and stream[right].type in SCOPE_KEYWORD_TYPES:
            right = stream.find_next(_EMPTY_OR_DOUBLE_COLON, right + 1, exclude=True)

        return right is not None and stream[right].type == TokenType.VARIABLE


DEFAULT_RULES: tuple[Rule, ...] = (YodaConditionsRule(),)
