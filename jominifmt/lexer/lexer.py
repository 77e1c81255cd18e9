"""Lossless lexer."""

from collections.abc import Iterator

from jominifmt.diagnostics import LEXER_UNTERMINATED_STRING, Diagnostic
from jominifmt.lexer.tokens import (
    SINGLE_CHAR_TOKENS,
    TWO_CHAR_OPERATORS,
    Token,
    TokenFlags,
    TokenKind,
)
from jominifmt.text import TextRange, slice_text_range


class Lexer:
    """Lossless lexer that emits trivia and non-trivia tokens.

    Concatenating the text of every emitted token reproduces the source.
    """

    def __init__(self, source: str, *, allow_multiline_strings: bool = True) -> None:
        self._source = source
        self._position = 0
        self._start = 0
        self._flags = TokenFlags.NONE
        self._after_newline = False
        self._allow_multiline_strings = allow_multiline_strings
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Diagnostics emitted so far."""
        return self._diagnostics

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def tokens(self) -> Iterator[Token]:
        """Yield every token in source order, ending with a single EOF token."""
        while not self.is_eof:
            self._start = self._position
            self._flags = TokenFlags.NONE
            kind = self._lex_token()
            if self._after_newline:
                self._flags |= TokenFlags.PRECEDING_LINE_BREAK
            if kind == TokenKind.NEWLINE:
                self._after_newline = True
            elif not kind.is_trivia:
                self._after_newline = False
            yield Token(kind, TextRange(self._start, self._position), self._flags)

        flags = TokenFlags.PRECEDING_LINE_BREAK if self._after_newline else TokenFlags.NONE
        yield Token(TokenKind.EOF, TextRange.empty(self._position), flags)

    def lex(self) -> list[Token]:
        return list(self.tokens())

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch == "\n" or ch == "\r":
            self._consume_newline()
            return TokenKind.NEWLINE
        if ch == " " or ch == "\t" or ch == "\ufeff":
            self._consume_whitespace()
            return TokenKind.WHITESPACE
        if ch == "#":
            return self._lex_comment()
        if ch == '"':
            return self._lex_string()
        if ch.isdigit():
            return self._lex_number()
        if ch.isalpha() or ch == "_":
            return self._lex_identifier()

        pair = self._source[self._position : self._position + 2]
        if pair in TWO_CHAR_OPERATORS:
            self._position += 2
            return TWO_CHAR_OPERATORS[pair]

        self._position += 1
        return SINGLE_CHAR_TOKENS.get(ch, TokenKind.OTHER)

    def _lex_comment(self) -> TokenKind:
        # The newline itself is not part of the comment.
        while not self.is_eof and self._current_char() not in "\r\n":
            self._position += 1
        return TokenKind.COMMENT

    def _lex_string(self) -> TokenKind:
        self._position += 1
        self._flags |= TokenFlags.WAS_QUOTED
        closed = False

        while not self.is_eof:
            ch = self._current_char()
            if ch == '"':
                self._position += 1
                closed = True
                break
            if ch == "\\":
                self._flags |= TokenFlags.HAS_ESCAPE
                self._position = min(self._position + 2, len(self._source))
                continue
            if (ch == "\n" or ch == "\r") and not self._allow_multiline_strings:
                break
            self._position += 1

        if not closed:
            self._diagnostics.append(
                Diagnostic.from_spec(LEXER_UNTERMINATED_STRING, TextRange(self._start, self._position))
            )
        return TokenKind.STRING

    def _lex_number(self) -> TokenKind:
        saw_dot = False
        while not self.is_eof:
            ch = self._current_char()
            if ch.isdigit():
                self._position += 1
            elif ch == "." and not saw_dot and self._peek_char().isdigit():
                saw_dot = True
                self._position += 1
            else:
                break
        return TokenKind.FLOAT if saw_dot else TokenKind.INT

    def _lex_identifier(self) -> TokenKind:
        self._position += 1
        while not self.is_eof:
            ch = self._current_char()
            if not (ch.isalnum() or ch == "_"):
                break
            self._position += 1
        return TokenKind.IDENTIFIER

    def _consume_whitespace(self) -> None:
        while not self.is_eof and self._current_char() in " \t\ufeff":
            self._position += 1

    def _consume_newline(self) -> None:
        if self._current_char() == "\r" and self._peek_char() == "\n":
            self._position += 2
        else:
            self._position += 1

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]


def token_text(source: str, token: Token) -> str:
    """Text of a token, sliced from the source by its range."""
    if token.kind == TokenKind.EOF:
        return ""
    return slice_text_range(source, token.range)
