"""Error types and source-context formatting."""

from __future__ import annotations

from yodalint.tokens import Position, Span


def format_context(
    message: str,
    span: Span,
    source: str,
    filename: str,
    *,
    label: str = "error",
) -> str:
    """Render *message* with a gutter, the offending source line, and carets."""
    # Only "\n" advances the lexer's line count
    lines = source.split("\n")
    line_idx = span.start.line - 1
    col = span.start.column

    # Build the source line (strip a CRLF remainder for display)
    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\r")
    else:
        source_line = ""

    # Underline the full span when on one line, otherwise to end of line
    if span.end.line == span.start.line:
        underline_len = max(1, span.end.column - col)
    else:
        underline_len = max(1, len(source_line) - col + 1)

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(span.start.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"{label}: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{span.start.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class LexError(Exception):
    """Raised on the first lexing error, with position and source context."""

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.php") -> str:
        # A one-character span keeps the caret under the failing character
        end = Position(self.position.line, self.position.column + 1, self.position.offset + 1)
        return format_context(self.message, Span(self.position, end), self.source, filename)
