"""Minimal immutable green CST representation."""

from dataclasses import dataclass
from typing import TypeAlias

from jominifmt.lexer import TriviaPiece
from jominifmt.syntax import SyntaxKind


@dataclass(frozen=True, slots=True)
class GreenToken:
    kind: SyntaxKind
    text: str
    leading_trivia: tuple[TriviaPiece, ...]
    trailing_trivia: tuple[TriviaPiece, ...]

    @property
    def text_len(self) -> int:
        return (
            sum(piece.length for piece in self.leading_trivia)
            + len(self.text)
            + sum(piece.length for piece in self.trailing_trivia)
        )


@dataclass(frozen=True, slots=True)
class GreenNode:
    kind: SyntaxKind
    children: tuple["GreenElement", ...]

    @property
    def text_len(self) -> int:
        return sum(child.text_len for child in self.children)


GreenElement: TypeAlias = GreenNode | GreenToken


class TreeBuilder:
    """Stack-based builder producing immutable green nodes."""

    def __init__(self) -> None:
        self._stack: list[tuple[SyntaxKind, list[GreenElement]]] = []
        self._roots: list[GreenElement] = []

    def start_node(self, kind: SyntaxKind) -> None:
        self._stack.append((kind, []))

    def token(
        self,
        kind: SyntaxKind,
        text: str,
        leading: tuple[TriviaPiece, ...] = (),
        trailing: tuple[TriviaPiece, ...] = (),
    ) -> None:
        self._push(GreenToken(kind=kind, text=text, leading_trivia=leading, trailing_trivia=trailing))

    def finish_node(self) -> None:
        if not self._stack:
            raise RuntimeError("finish_node called with empty builder stack")
        kind, children = self._stack.pop()
        self._push(GreenNode(kind=kind, children=tuple(children)))

    def finish(self) -> GreenNode:
        if self._stack:
            raise RuntimeError("Cannot finish tree: unclosed nodes remain on stack")

        if len(self._roots) == 1 and isinstance(self._roots[0], GreenNode):
            root = self._roots[0]
            if root.kind == SyntaxKind.ROOT:
                return root

        return GreenNode(kind=SyntaxKind.ROOT, children=tuple(self._roots))

    def _push(self, element: GreenElement) -> None:
        if self._stack:
            self._stack[-1][1].append(element)
        else:
            self._roots.append(element)
