"""PHP lexer: converts source text into a flat token stream."""

from __future__ import annotations

import re

from yodalint.errors import LexError
from yodalint.tokens import (
    EMPTY_TYPES,
    Position,
    Span,
    Token,
    TokenType,
    is_name_char,
    is_name_start,
)

KEYWORDS: dict[str, TokenType] = {
    "if": TokenType.IF,
    "elseif": TokenType.ELSEIF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
    "self": TokenType.SELF,
    "parent": TokenType.PARENT,
    "static": TokenType.STATIC,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "null": TokenType.NULL,
    "new": TokenType.NEW,
    "function": TokenType.FUNCTION,
    "echo": TokenType.ECHO,
    "instanceof": TokenType.INSTANCEOF,
    "and": TokenType.LOGICAL_AND,
    "or": TokenType.LOGICAL_OR,
    "xor": TokenType.LOGICAL_XOR,
}

RESERVED_WORDS = frozenset(
    """
    abstract array as break callable case catch class clone const continue
    declare default do empty enddeclare endfor endforeach endif endswitch
    endwhile extends final finally fn for foreach global goto implements
    include include_once insteadof interface isset list match namespace print
    private protected public readonly require require_once switch throw trait
    try unset use var while yield
    """.split()
)

CAST_WORDS: dict[str, TokenType] = {
    "int": TokenType.INT_CAST,
    "integer": TokenType.INT_CAST,
    "float": TokenType.FLOAT_CAST,
    "double": TokenType.FLOAT_CAST,
    "real": TokenType.FLOAT_CAST,
    "string": TokenType.STRING_CAST,
    "bool": TokenType.BOOL_CAST,
    "boolean": TokenType.BOOL_CAST,
    "array": TokenType.ARRAY_CAST,
    "object": TokenType.OBJECT_CAST,
    "unset": TokenType.UNSET_CAST,
    "binary": TokenType.BINARY_CAST,
}

# Longest match first
OPERATORS: tuple[tuple[str, TokenType], ...] = (
    ("<=>", TokenType.SPACESHIP),
    ("===", TokenType.IS_IDENTICAL),
    ("!==", TokenType.IS_NOT_IDENTICAL),
    ("**=", TokenType.COMPOUND_ASSIGN),
    ("??=", TokenType.COMPOUND_ASSIGN),
    ("<<=", TokenType.COMPOUND_ASSIGN),
    (">>=", TokenType.COMPOUND_ASSIGN),
    ("...", TokenType.ELLIPSIS),
    ("?->", TokenType.OBJECT_OPERATOR),
    ("==", TokenType.IS_EQUAL),
    ("!=", TokenType.IS_NOT_EQUAL),
    ("<>", TokenType.IS_NOT_EQUAL),
    ("<=", TokenType.IS_SMALLER_OR_EQUAL),
    (">=", TokenType.IS_GREATER_OR_EQUAL),
    ("&&", TokenType.BOOLEAN_AND),
    ("||", TokenType.BOOLEAN_OR),
    ("++", TokenType.INC_DEC),
    ("--", TokenType.INC_DEC),
    ("->", TokenType.OBJECT_OPERATOR),
    ("::", TokenType.DOUBLE_COLON),
    ("=>", TokenType.DOUBLE_ARROW),
    ("??", TokenType.COALESCE),
    ("+=", TokenType.COMPOUND_ASSIGN),
    ("-=", TokenType.COMPOUND_ASSIGN),
    ("*=", TokenType.COMPOUND_ASSIGN),
    ("/=", TokenType.COMPOUND_ASSIGN),
    (".=", TokenType.COMPOUND_ASSIGN),
    ("%=", TokenType.COMPOUND_ASSIGN),
    ("&=", TokenType.COMPOUND_ASSIGN),
    ("|=", TokenType.COMPOUND_ASSIGN),
    ("^=", TokenType.COMPOUND_ASSIGN),
    ("**", TokenType.ARITHMETIC),
    ("<<", TokenType.BITWISE),
    (">>", TokenType.BITWISE),
    ("=", TokenType.ASSIGN),
    ("<", TokenType.LESS_THAN),
    (">", TokenType.GREATER_THAN),
    ("!", TokenType.BOOLEAN_NOT),
    ("+", TokenType.ARITHMETIC),
    ("-", TokenType.ARITHMETIC),
    ("*", TokenType.ARITHMETIC),
    ("/", TokenType.ARITHMETIC),
    ("%", TokenType.ARITHMETIC),
    (".", TokenType.CONCAT),
    ("&", TokenType.BITWISE),
    ("|", TokenType.BITWISE),
    ("^", TokenType.BITWISE),
    ("~", TokenType.BITWISE),
    ("?", TokenType.INLINE_THEN),
    (":", TokenType.COLON),
    ("@", TokenType.AT),
    ("\\", TokenType.NS_SEPARATOR),
    ("(", TokenType.OPEN_PARENTHESIS),
    (")", TokenType.CLOSE_PARENTHESIS),
    ("[", TokenType.OPEN_SQUARE_BRACKET),
    ("]", TokenType.CLOSE_SQUARE_BRACKET),
    ("{", TokenType.OPEN_CURLY_BRACKET),
    ("}", TokenType.CLOSE_CURLY_BRACKET),
    (";", TokenType.SEMICOLON),
    (",", TokenType.COMMA),
)

_WS_CHARS = " \t\n\r\v\f"

_CAST_RE = re.compile(r"\([ \t]*([A-Za-z]+)[ \t]*\)")
_HEREDOC_RE = re.compile(
    r"<<<[ \t]*(['\"]?)([A-Za-z_\x80-\U0010ffff][A-Za-z0-9_\x80-\U0010ffff]*)\1\r?\n"
)

# Member names after -> and :: are never keywords
_MEMBER_ACCESS = frozenset({TokenType.OBJECT_OPERATOR, TokenType.DOUBLE_COLON})


class Lexer:
    """Tokenize PHP source text into a stream of Token objects."""

    def __init__(self, source: str, filename: str = "input.php") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []
        self._in_php = False

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while self._pos < len(self._source):
            if self._in_php:
                self._lex_php()
            else:
                self._lex_inline_html()

        self._emit(TokenType.EOF, "")
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _startswith(self, text: str) -> bool:
        return self._source.startswith(text, self._pos)

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _advance_to(self, end: int) -> None:
        while self._pos < end:
            self._advance()

    def _emit(self, tt: TokenType, value: str, start: Position | None = None) -> Token:
        end = self._current_pos()
        if start is None:
            start = end
        tok = Token(tt, value, Span(start, end))
        self._tokens.append(tok)
        return tok

    def _emit_from(self, tt: TokenType, start: Position) -> Token:
        """Emit a token whose value is the source consumed since *start*."""
        return self._emit(tt, self._source[start.offset : self._pos], start)

    def _error(self, message: str, pos: Position | None = None) -> LexError:
        if pos is None:
            pos = self._current_pos()
        return LexError(message, pos, self._source)

    def _prev_significant(self) -> TokenType | None:
        for tok in reversed(self._tokens):
            if tok.type not in EMPTY_TYPES:
                return tok.type
        return None

    # ------------------------------------------------------------------
    # Inline HTML and open tags
    # ------------------------------------------------------------------

    def _lex_inline_html(self) -> None:
        start = self._current_pos()
        search = self._pos
        while True:
            idx = self._source.find("<?", search)
            if idx == -1:
                self._advance_to(len(self._source))
                self._emit_from(TokenType.INLINE_HTML, start)
                return
            tag = self._open_tag_at(idx)
            if tag is not None:
                break
            search = idx + 2

        if idx > self._pos:
            self._advance_to(idx)
            self._emit_from(TokenType.INLINE_HTML, start)

        tt, length = tag
        tag_start = self._current_pos()
        self._advance_to(self._pos + length)
        self._emit_from(tt, tag_start)
        self._in_php = True

    def _open_tag_at(self, idx: int) -> tuple[TokenType, int] | None:
        """Return (type, length) if an open tag starts at *idx*."""
        src = self._source
        if src.startswith("<?=", idx):
            return TokenType.OPEN_TAG_WITH_ECHO, 3
        if src[idx : idx + 5].lower() == "<?php":
            after = src[idx + 5 : idx + 6]
            if after == "" or after in _WS_CHARS:
                return TokenType.OPEN_TAG, 5
            return None
        after = src[idx + 2 : idx + 3]
        if after == "" or after in _WS_CHARS:
            return TokenType.OPEN_TAG, 2
        return None

    # ------------------------------------------------------------------
    # PHP mode
    # ------------------------------------------------------------------

    def _lex_php(self) -> None:
        ch = self._peek()

        if ch == "\0":
            raise self._error("NUL character in source")

        if ch in _WS_CHARS:
            self._lex_whitespace()
            return

        if ch == "?" and self._peek(1) == ">":
            self._lex_close_tag()
            return

        if ch == "#":
            if self._peek(1) == "[":
                # PHP 8 attribute opener, closed by a plain ]
                start = self._current_pos()
                self._advance()
                self._advance()
                self._emit_from(TokenType.OPEN_SQUARE_BRACKET, start)
                return
            self._lex_line_comment()
            return

        if ch == "/" and self._peek(1) == "/":
            self._lex_line_comment()
            return

        if ch == "/" and self._peek(1) == "*":
            self._lex_block_comment()
            return

        if ch == "$":
            self._lex_variable()
            return

        if is_name_start(ch):
            self._lex_label()
            return

        if ch.isdigit() or (ch == "." and self._peek(1).isdigit()):
            self._lex_number()
            return

        if ch == "'":
            self._lex_single_quoted()
            return

        if ch == '"' or ch == "`":
            self._lex_double_quoted(ch)
            return

        if ch == "<" and self._startswith("<<<"):
            m = _HEREDOC_RE.match(self._source, self._pos)
            if m is not None:
                self._lex_heredoc(m)
                return

        if ch == "(":
            m = _CAST_RE.match(self._source, self._pos)
            if m is not None and m.group(1).lower() in CAST_WORDS:
                start = self._current_pos()
                self._advance_to(m.end())
                self._emit_from(CAST_WORDS[m.group(1).lower()], start)
                return

        for text, tt in OPERATORS:
            if self._startswith(text):
                start = self._current_pos()
                self._advance_to(self._pos + len(text))
                self._emit(tt, text, start)
                return

        raise self._error(f"unexpected character {ch!r}")

    def _lex_whitespace(self) -> None:
        start = self._current_pos()
        while self._pos < len(self._source) and self._peek() in _WS_CHARS:
            self._advance()
        self._emit_from(TokenType.WHITESPACE, start)

    def _lex_close_tag(self) -> None:
        start = self._current_pos()
        self._advance()
        self._advance()
        # A single newline directly after ?> belongs to the tag
        if self._peek() == "\n":
            self._advance()
        elif self._peek() == "\r" and self._peek(1) == "\n":
            self._advance()
            self._advance()
        self._emit_from(TokenType.CLOSE_TAG, start)
        self._in_php = False

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _lex_line_comment(self) -> None:
        start = self._current_pos()
        while self._pos < len(self._source):
            ch = self._peek()
            if ch in "\r\n" or (ch == "?" and self._peek(1) == ">"):
                break
            self._advance()
        self._emit_from(TokenType.COMMENT, start)

    def _lex_block_comment(self) -> None:
        start = self._current_pos()
        end = self._source.find("*/", self._pos + 2)
        if end == -1:
            raise self._error("unterminated comment", start)
        is_doc = self._startswith("/**") and self._peek(3) != "" and self._peek(3) in _WS_CHARS
        self._advance_to(end + 2)
        self._emit_from(TokenType.DOC_COMMENT if is_doc else TokenType.COMMENT, start)

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------

    def _lex_variable(self) -> None:
        start = self._current_pos()
        self._advance()  # consume $
        if not is_name_start(self._peek()):
            self._emit(TokenType.DOLLAR, "$", start)
            return
        while self._pos < len(self._source) and is_name_char(self._peek()):
            self._advance()
        self._emit_from(TokenType.VARIABLE, start)

    def _lex_label(self) -> None:
        start = self._current_pos()
        while self._pos < len(self._source) and is_name_char(self._peek()):
            self._advance()
        text = self._source[start.offset : self._pos]

        if self._prev_significant() in _MEMBER_ACCESS:
            self._emit(TokenType.IDENTIFIER, text, start)
            return

        lowered = text.lower()
        tt = KEYWORDS.get(lowered)
        if tt is None:
            tt = TokenType.KEYWORD if lowered in RESERVED_WORDS else TokenType.IDENTIFIER
        self._emit(tt, text, start)

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def _lex_number(self) -> None:
        start = self._current_pos()

        if self._peek() == "0" and self._peek(1) in ("x", "X", "b", "B", "o", "O"):
            prefix = self._peek(1).lower()
            digits = {"x": "0123456789abcdefABCDEF_", "b": "01_", "o": "01234567_"}[prefix]
            self._advance()
            self._advance()
            while self._pos < len(self._source) and self._peek() in digits:
                self._advance()
            self._emit_from(TokenType.LNUMBER, start)
            return

        is_float = False
        self._consume_digits()
        if self._peek() == "." and self._peek(1).isdigit():
            is_float = True
            self._advance()
            self._consume_digits()
        if self._peek() in ("e", "E"):
            sign = 1 if self._peek(1) in ("+", "-") else 0
            if self._peek(1 + sign).isdigit():
                is_float = True
                self._advance_to(self._pos + 1 + sign)
                self._consume_digits()
        self._emit_from(TokenType.DNUMBER if is_float else TokenType.LNUMBER, start)

    def _consume_digits(self) -> None:
        while self._pos < len(self._source) and (self._peek().isdigit() or self._peek() == "_"):
            self._advance()

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    def _lex_single_quoted(self) -> None:
        start = self._current_pos()
        self._advance()  # opening quote
        while self._pos < len(self._source):
            ch = self._advance()
            if ch == "\\" and self._pos < len(self._source):
                self._advance()
            elif ch == "'":
                self._emit_from(TokenType.CONSTANT_STRING, start)
                return
        raise self._error("unterminated string", start)

    def _lex_double_quoted(self, quote: str) -> None:
        """Lex a "..." or `...` string, noting whether it interpolates."""
        start = self._current_pos()
        self._advance()  # opening quote
        interpolated = quote == "`"
        while self._pos < len(self._source):
            ch = self._advance()
            if ch == "\\" and self._pos < len(self._source):
                self._advance()
            elif ch == quote:
                tt = TokenType.INTERPOLATED_STRING if interpolated else TokenType.CONSTANT_STRING
                self._emit_from(tt, start)
                return
            elif ch == "$" and (is_name_start(self._peek()) or self._peek() == "{"):
                interpolated = True
            elif ch == "{" and self._peek() == "$":
                interpolated = True
        raise self._error("unterminated string", start)

    def _lex_heredoc(self, opening: re.Match[str]) -> None:
        start = self._current_pos()
        label = opening.group(2)
        closing = re.compile(
            r"^[ \t]*" + re.escape(label) + r"(?![A-Za-z0-9_\x80-\U0010ffff])", re.MULTILINE
        )
        m = closing.search(self._source, opening.end())
        if m is None:
            raise self._error(f"unterminated heredoc (expected closing {label!r})", start)
        self._advance_to(m.end())
        self._emit_from(TokenType.HEREDOC, start)


def tokenize(source: str, filename: str = "input.php") -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, filename).tokenize()
