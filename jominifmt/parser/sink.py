"""Lossless tree sink for parser events."""

from dataclasses import dataclass

from jominifmt.cst import GreenNode, TreeBuilder
from jominifmt.diagnostics import Diagnostic
from jominifmt.lexer import Trivia, TriviaPiece
from jominifmt.syntax import SyntaxKind


@dataclass(frozen=True, slots=True)
class ParsedGreenTree:
    root: GreenNode
    diagnostics: list[Diagnostic]


class LosslessTreeSink:
    """Converts parser events plus trivia ownership into a green CST."""

    def __init__(self, text: str, trivia: list[Trivia], builder: TreeBuilder | None = None) -> None:
        self._text = text
        self._trivia = trivia
        self._text_pos = 0
        self._trivia_pos = 0
        self._parents_count = 0
        self._builder = builder if builder is not None else TreeBuilder()
        self._needs_eof = True
        self._pieces: list[TriviaPiece] = []

    def token(self, kind: SyntaxKind, end: int) -> None:
        self._do_token(kind, end)

    def start_node(self, kind: SyntaxKind) -> None:
        self._builder.start_node(kind)
        self._parents_count += 1

    def finish_node(self) -> None:
        self._parents_count -= 1
        if self._parents_count < 0:
            raise RuntimeError("finish_node called more often than start_node")

        # The outermost node owns the EOF token and with it the trailing trivia of the file.
        if self._parents_count == 0 and self._needs_eof:
            self._do_token(SyntaxKind.EOF, len(self._text))

        self._builder.finish_node()

    def finish(self, diagnostics: list[Diagnostic]) -> ParsedGreenTree:
        return ParsedGreenTree(root=self._builder.finish(), diagnostics=diagnostics)

    def _do_token(self, kind: SyntaxKind, token_end: int) -> None:
        if kind == SyntaxKind.EOF:
            self._needs_eof = False

        self._eat_trivia(trailing=False, token_end=token_end)
        token_start = self._text_pos
        trailing_start = len(self._pieces)

        self._text_pos = token_end
        self._eat_trivia(trailing=True, token_end=token_end)

        self._builder.token(
            kind=kind,
            text=self._text[token_start:token_end],
            leading=tuple(self._pieces[:trailing_start]),
            trailing=tuple(self._pieces[trailing_start:]),
        )
        self._pieces.clear()

    def _eat_trivia(self, trailing: bool, token_end: int) -> None:
        while self._trivia_pos < len(self._trivia):
            trivia = self._trivia[self._trivia_pos]
            if trivia.trailing != trailing or self._text_pos != trivia.range.start:
                break
            if not trailing and trivia.range.end > token_end:
                break

            self._pieces.append(TriviaPiece(kind=trivia.kind, length=trivia.range.len()))
            self._text_pos = trivia.range.end
            self._trivia_pos += 1
