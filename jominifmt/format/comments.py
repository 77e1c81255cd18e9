"""Comment and blank-line annotations recovered from CST trivia."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from jominifmt.cst import SyntaxNode, SyntaxTriviaPiece
from jominifmt.lexer import TriviaKind


@dataclass(frozen=True, slots=True)
class Comment:
    """A `#` comment; `trailing` when code precedes it on the same line."""

    position: int
    text: str
    trailing: bool = False


@dataclass(frozen=True, slots=True)
class BlankLine:
    """An empty source line, anchored at its newline."""

    position: int


Annotation: TypeAlias = Comment | BlankLine


def collect_annotations(root: SyntaxNode) -> list[Annotation]:
    """Collect comments and blank lines from every token's trivia, in source order."""
    annotations: list[Annotation] = []
    for token in root.descendants_tokens():
        _collect_leading(token.leading_trivia, annotations)
        for piece in token.trailing_trivia:
            if piece.kind == TriviaKind.COMMENT:
                annotations.append(Comment(piece.offset, piece.text.rstrip(), trailing=True))
    annotations.sort(key=lambda annotation: annotation.position)
    return annotations


def _collect_leading(pieces: tuple[SyntaxTriviaPiece, ...], annotations: list[Annotation]) -> None:
    # Leading trivia starts right before the newline that ends the previous
    # token's line, so the second newline of a run is the first empty line.
    newlines = 0
    for piece in pieces:
        if piece.kind == TriviaKind.NEWLINE:
            newlines += 1
            if newlines >= 2:
                annotations.append(BlankLine(piece.offset))
        elif piece.kind == TriviaKind.COMMENT:
            annotations.append(Comment(piece.offset, piece.text.rstrip(), trailing=False))
            newlines = 0


__all__ = ["Annotation", "BlankLine", "Comment", "collect_annotations"]
