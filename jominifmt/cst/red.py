"""Red CST wrappers over immutable green nodes/tokens.

Red elements know their absolute offsets and their parent. The parent link is
a back reference: traversals go through `children` only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from jominifmt.cst.green import GreenNode
from jominifmt.lexer import TriviaKind, TriviaPiece
from jominifmt.syntax import SyntaxKind
from jominifmt.text import TextRange


@dataclass(frozen=True, slots=True)
class SyntaxTriviaPiece:
    kind: TriviaKind
    text: str
    offset: int

    @property
    def range(self) -> TextRange:
        return TextRange.at(self.offset, len(self.text))


class SyntaxToken:
    __slots__ = (
        "kind",
        "text",
        "leading_trivia",
        "trailing_trivia",
        "parent",
        "index_in_parent",
        "_start",
        "_token_start",
        "_token_end",
        "_end",
    )

    def __init__(
        self,
        *,
        kind: SyntaxKind,
        text: str,
        leading_pieces: tuple[TriviaPiece, ...],
        trailing_pieces: tuple[TriviaPiece, ...],
        parent: SyntaxNode,
        index_in_parent: int,
        source: str,
        start: int,
    ) -> None:
        self.kind = kind
        self.text = text
        self.parent = parent
        self.index_in_parent = index_in_parent
        self._start = start

        self.leading_trivia = _build_trivia(source=source, start=start, pieces=leading_pieces)
        self._token_start = start + sum(piece.length for piece in leading_pieces)
        self._token_end = self._token_start + len(text)
        self.trailing_trivia = _build_trivia(source=source, start=self._token_end, pieces=trailing_pieces)
        self._end = self._token_end + sum(piece.length for piece in trailing_pieces)

    @property
    def children(self) -> tuple[()]:
        return ()

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def token_start(self) -> int:
        return self._token_start

    @property
    def token_end(self) -> int:
        return self._token_end

    @property
    def trimmed_range(self) -> TextRange:
        return TextRange(self._token_start, self._token_end)

    def __repr__(self) -> str:
        return f"SyntaxToken({self.kind.name}, {self.text!r}, {self.trimmed_range!r})"


class SyntaxNode:
    __slots__ = (
        "kind",
        "parent",
        "index_in_parent",
        "_children",
        "_source",
        "_start",
        "_end",
    )

    def __init__(
        self,
        *,
        kind: SyntaxKind,
        parent: SyntaxNode | None,
        index_in_parent: int,
        source: str,
        start: int,
    ) -> None:
        self.kind = kind
        self.parent = parent
        self.index_in_parent = index_in_parent
        self._source = source
        self._start = start
        self._end = start
        self._children: tuple[SyntaxElement, ...] = ()

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def text(self) -> str:
        return self._source[self._start : self._end]

    @property
    def children(self) -> tuple[SyntaxElement, ...]:
        return self._children

    @property
    def trimmed_range(self) -> TextRange:
        """Range from the first token's text to the last token's text, trivia excluded.

        Nodes without tokens get an empty range at their start offset.
        """
        tokens = [token for token in self.descendants_tokens() if token.text]
        if not tokens:
            return TextRange.empty(self._start)
        return TextRange(tokens[0].token_start, tokens[-1].token_end)

    @property
    def text_trimmed(self) -> str:
        rng = self.trimmed_range
        return self._source[rng.start : rng.end]

    def child_nodes(self) -> tuple[SyntaxNode, ...]:
        return tuple(child for child in self._children if isinstance(child, SyntaxNode))

    def first_child_node(self, kind: SyntaxKind) -> SyntaxNode | None:
        for child in self._children:
            if isinstance(child, SyntaxNode) and child.kind == kind:
                return child
        return None

    def descendants_tokens(self) -> tuple[SyntaxToken, ...]:
        tokens: list[SyntaxToken] = []

        def walk(node: SyntaxNode) -> None:
            for child in node.children:
                if isinstance(child, SyntaxToken):
                    tokens.append(child)
                else:
                    walk(child)

        walk(self)
        return tuple(tokens)

    def next_sibling(self) -> SyntaxElement | None:
        if self.parent is None:
            return None
        index = self.index_in_parent + 1
        if index >= len(self.parent.children):
            return None
        return self.parent.children[index]

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind.name}, {self._start}..{self._end})"


SyntaxElement: TypeAlias = SyntaxNode | SyntaxToken


def from_green(root: GreenNode, source: str = "") -> SyntaxNode:
    red_root, _ = _build_node(green=root, parent=None, index_in_parent=0, source=source, start=0)
    return red_root


def _build_node(
    *,
    green: GreenNode,
    parent: SyntaxNode | None,
    index_in_parent: int,
    source: str,
    start: int,
) -> tuple[SyntaxNode, int]:
    node = SyntaxNode(kind=green.kind, parent=parent, index_in_parent=index_in_parent, source=source, start=start)

    current = start
    children: list[SyntaxElement] = []
    for child_index, child in enumerate(green.children):
        if isinstance(child, GreenNode):
            red_child, current = _build_node(
                green=child,
                parent=node,
                index_in_parent=child_index,
                source=source,
                start=current,
            )
            children.append(red_child)
            continue

        token = SyntaxToken(
            kind=child.kind,
            text=child.text,
            leading_pieces=child.leading_trivia,
            trailing_pieces=child.trailing_trivia,
            parent=node,
            index_in_parent=child_index,
            source=source,
            start=current,
        )
        children.append(token)
        current = token.end

    node._children = tuple(children)
    node._end = current
    return node, current


def _build_trivia(*, source: str, start: int, pieces: tuple[TriviaPiece, ...]) -> tuple[SyntaxTriviaPiece, ...]:
    out: list[SyntaxTriviaPiece] = []
    offset = start
    for piece in pieces:
        piece_end = offset + piece.length
        out.append(SyntaxTriviaPiece(kind=piece.kind, text=source[offset:piece_end], offset=offset))
        offset = piece_end
    return tuple(out)


__all__ = [
    "SyntaxElement",
    "SyntaxNode",
    "SyntaxToken",
    "SyntaxTriviaPiece",
    "from_green",
]
