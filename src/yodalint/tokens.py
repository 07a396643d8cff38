"""Token types, data structures, and token-kind sets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Markup
    INLINE_HTML = auto()  # text outside <?php ... ?>
    OPEN_TAG = auto()  # <?php or <?
    OPEN_TAG_WITH_ECHO = auto()  # <?=
    CLOSE_TAG = auto()  # ?>

    # Trivia
    WHITESPACE = auto()
    COMMENT = auto()  # // ... , # ... , /* ... */
    DOC_COMMENT = auto()  # /** ... */

    # Operands
    VARIABLE = auto()  # $name
    IDENTIFIER = auto()  # bare names: functions, constants, classes
    LNUMBER = auto()  # integer literal
    DNUMBER = auto()  # float literal
    CONSTANT_STRING = auto()  # '...' or "..." without interpolation, nowdoc
    INTERPOLATED_STRING = auto()  # "...$x..." or `...`
    HEREDOC = auto()  # <<<ID ... ID, including <<<'ID' nowdoc

    # Keywords
    IF = auto()
    ELSEIF = auto()
    ELSE = auto()
    RETURN = auto()
    SELF = auto()
    PARENT = auto()
    STATIC = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()
    NEW = auto()
    FUNCTION = auto()
    ECHO = auto()
    INSTANCEOF = auto()
    LOGICAL_AND = auto()  # and
    LOGICAL_OR = auto()  # or
    LOGICAL_XOR = auto()  # xor
    KEYWORD = auto()  # any other reserved word

    # Casts
    INT_CAST = auto()  # (int) (integer)
    FLOAT_CAST = auto()  # (float) (double) (real)
    STRING_CAST = auto()  # (string)
    BOOL_CAST = auto()  # (bool) (boolean)
    ARRAY_CAST = auto()  # (array)
    OBJECT_CAST = auto()  # (object)
    UNSET_CAST = auto()  # (unset)
    BINARY_CAST = auto()  # (binary)

    # Comparison
    IS_EQUAL = auto()  # ==
    IS_NOT_EQUAL = auto()  # != <>
    IS_IDENTICAL = auto()  # ===
    IS_NOT_IDENTICAL = auto()  # !==
    LESS_THAN = auto()  # <
    GREATER_THAN = auto()  # >
    IS_SMALLER_OR_EQUAL = auto()  # <=
    IS_GREATER_OR_EQUAL = auto()  # >=
    SPACESHIP = auto()  # <=>

    # Boolean
    BOOLEAN_AND = auto()  # &&
    BOOLEAN_OR = auto()  # ||
    BOOLEAN_NOT = auto()  # !

    # Other operators
    ASSIGN = auto()  # =
    COMPOUND_ASSIGN = auto()  # += -= .= ??= ...
    ARITHMETIC = auto()  # + - * / % **
    CONCAT = auto()  # .
    BITWISE = auto()  # & | ^ ~ << >>
    INC_DEC = auto()  # ++ --
    OBJECT_OPERATOR = auto()  # -> ?->
    DOUBLE_COLON = auto()  # ::
    DOUBLE_ARROW = auto()  # =>
    COALESCE = auto()  # ??
    INLINE_THEN = auto()  # ?
    COLON = auto()  # :
    ELLIPSIS = auto()  # ...
    AT = auto()  # @
    NS_SEPARATOR = auto()  # \
    DOLLAR = auto()  # $ not followed by a name

    # Punctuation
    OPEN_PARENTHESIS = auto()
    CLOSE_PARENTHESIS = auto()
    OPEN_SQUARE_BRACKET = auto()
    CLOSE_SQUARE_BRACKET = auto()
    OPEN_CURLY_BRACKET = auto()
    CLOSE_CURLY_BRACKET = auto()
    SEMICOLON = auto()
    COMMA = auto()

    EOF = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with its source text."""

    type: TokenType
    value: str
    span: Span


EMPTY_TYPES: frozenset[TokenType] = frozenset(
    {TokenType.WHITESPACE, TokenType.COMMENT, TokenType.DOC_COMMENT}
)

BOOLEAN_OPERATORS: frozenset[TokenType] = frozenset(
    {
        TokenType.BOOLEAN_AND,
        TokenType.BOOLEAN_OR,
        TokenType.LOGICAL_AND,
        TokenType.LOGICAL_OR,
        TokenType.LOGICAL_XOR,
    }
)

CAST_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.INT_CAST,
        TokenType.FLOAT_CAST,
        TokenType.STRING_CAST,
        TokenType.BOOL_CAST,
        TokenType.ARRAY_CAST,
        TokenType.OBJECT_CAST,
        TokenType.UNSET_CAST,
        TokenType.BINARY_CAST,
    }
)

EQUALITY_OPERATORS: frozenset[TokenType] = frozenset(
    {
        TokenType.IS_EQUAL,
        TokenType.IS_NOT_EQUAL,
        TokenType.IS_IDENTICAL,
        TokenType.IS_NOT_IDENTICAL,
    }
)

# Opener -> closer for bracket pairs tracked by the token stream
BRACKET_PAIRS: dict[TokenType, TokenType] = {
    TokenType.OPEN_PARENTHESIS: TokenType.CLOSE_PARENTHESIS,
    TokenType.OPEN_SQUARE_BRACKET: TokenType.CLOSE_SQUARE_BRACKET,
    TokenType.OPEN_CURLY_BRACKET: TokenType.CLOSE_CURLY_BRACKET,
}


def is_name_start(ch: str) -> bool:
    """Return True if ch can start a PHP label (identifier or variable name)."""
    if not ch:
        return False
    return ch.isalpha() or ch == "_" or ord(ch) >= 0x80


def is_name_char(ch: str) -> bool:
    """Return True if ch can continue a PHP label."""
    return is_name_start(ch) or ch.isdigit()
