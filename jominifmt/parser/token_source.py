"""Token source that hides trivia from the parser and records it separately."""

from collections.abc import Iterator

from jominifmt.diagnostics import Diagnostic
from jominifmt.lexer import Lexer, Token, TokenKind, Trivia, TriviaKind, trivia_kind_from_token_kind
from jominifmt.text import TextRange


class TokenSource:
    """Bridge between lexer and parser.

    Trivia up to the first newline after a token is recorded as trailing
    (owned by that token); everything else leads the next token.
    """

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._tokens: Iterator[Token] = lexer.tokens()
        self._trivia: list[Trivia] = []
        self._current = Token(TokenKind.EOF, TextRange.empty(0))
        self._preceding_line_break = False
        self._preceding_trivia = False
        self._next_non_trivia_token(first_token=True)

    @property
    def current(self) -> TokenKind:
        return self._current.kind

    @property
    def current_range(self) -> TextRange:
        return self._current.range

    @property
    def text(self) -> str:
        return self._lexer.source

    @property
    def position(self) -> int:
        return self._current.range.start

    @property
    def has_preceding_line_break(self) -> bool:
        return self._preceding_line_break

    @property
    def has_preceding_trivia(self) -> bool:
        return self._preceding_trivia

    @property
    def trivia(self) -> list[Trivia]:
        return self._trivia

    def bump(self) -> None:
        if self._current.kind != TokenKind.EOF:
            self._next_non_trivia_token(first_token=False)

    def finish(self) -> tuple[list[Trivia], list[Diagnostic]]:
        return self._trivia, self._lexer.diagnostics

    def _next_non_trivia_token(self, first_token: bool) -> None:
        trailing = not first_token
        self._preceding_line_break = False
        self._preceding_trivia = False

        for token in self._tokens:
            if token.kind.is_trivia:
                self._preceding_trivia = True
                trivia_kind = trivia_kind_from_token_kind(token.kind)
                if trivia_kind == TriviaKind.NEWLINE:
                    trailing = False
                    self._preceding_line_break = True
                self._trivia.append(Trivia(trivia_kind, token.range, trailing))
                continue

            self._current = token
            if token.has_preceding_line_break():
                self._preceding_line_break = True
            return
