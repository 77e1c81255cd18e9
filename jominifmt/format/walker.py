"""Tree walker: dispatches nodes to lowerings and interleaves comments."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping
from typing import Protocol

from jominifmt.format.formatter import Formatter
from jominifmt.format.options import FormatOptions
from jominifmt.text import TextRange

logger = logging.getLogger(__name__)


class NonTreeError(ValueError):
    """The input graph has a cycle or a node reachable through two parents."""


class UnknownNodeKindError(KeyError):
    """No lowering is registered for a node kind."""

    def __init__(self, kind: Hashable) -> None:
        super().__init__(kind)
        self.kind = kind

    def __str__(self) -> str:
        return f"No lowering registered for node kind {self.kind!r}"


class WalkableNode(Protocol):
    @property
    def kind(self) -> Hashable: ...

    @property
    def children(self) -> Iterable[WalkableNode]: ...

    @property
    def trimmed_range(self) -> TextRange: ...


class NodeLowering(Protocol):
    def __call__(self, node, walker: TreeWalker, /) -> None: ...


class NodeCatalog:
    """Mapping from node kind to the lowering that emits its document."""

    def __init__(
        self,
        lowerings: Mapping[Hashable, NodeLowering] | None = None,
        *,
        places_comments: Iterable[Hashable] = (),
    ) -> None:
        self._lowerings: dict[Hashable, NodeLowering] = dict(lowerings or {})
        self._places_comments: set[Hashable] = set(places_comments)

    def register(self, kind: Hashable, lowering: NodeLowering, *, places_comments: bool = False) -> None:
        """Register `lowering` for `kind`.

        With `places_comments`, the walker leaves the comments before such a
        node in the queue for the lowering to place itself.
        """
        self._lowerings[kind] = lowering
        if places_comments:
            self._places_comments.add(kind)
        else:
            self._places_comments.discard(kind)

    def lowering_for(self, kind: Hashable) -> NodeLowering:
        try:
            return self._lowerings[kind]
        except KeyError:
            raise UnknownNodeKindError(kind) from None

    def places_comments(self, kind: Hashable) -> bool:
        return kind in self._places_comments

    def __contains__(self, kind: object) -> bool:
        return kind in self._lowerings

    def __len__(self) -> int:
        return len(self._lowerings)


def ensure_tree(root: WalkableNode) -> None:
    """Raise NonTreeError unless every node is reachable exactly once from `root`."""
    seen: set[int] = {id(root)}
    stack: list[WalkableNode] = [root]
    while stack:
        node = stack.pop()
        for child in node.children:
            if id(child) in seen:
                raise NonTreeError(f"Node {child!r} is reachable more than once (shared node or cycle)")
            seen.add(id(child))
            stack.append(child)


class TreeWalker:
    """Visits a syntax tree in source order and lowers each node through the catalog.

    Before a node is lowered, the queued comments positioned at or before the
    start of its text are emitted, unless the catalog says that kind places
    comments itself.
    """

    def __init__(self, formatter: Formatter, catalog: NodeCatalog) -> None:
        self.formatter = formatter
        self.catalog = catalog
        self._visited = 0

    @property
    def options(self) -> FormatOptions:
        return self.formatter.options

    def visit(self, node: WalkableNode) -> None:
        lowering = self.catalog.lowering_for(node.kind)
        if not self.catalog.places_comments(node.kind):
            for comment in self.formatter.take_comments_through(node.trimmed_range.start):
                self.formatter.comment(comment)
        self._visited += 1
        lowering(node, self)

    def walk(self, root: WalkableNode) -> str:
        """Lower the whole tree, emit any comments left over, and render."""
        ensure_tree(root)
        self.visit(root)
        for comment in self.formatter.remaining_comments():
            self.formatter.breakable("")
            self.formatter.comment(comment)
        logger.debug("Lowered %d nodes", self._visited)
        return self.formatter.flush()


__all__ = [
    "NodeCatalog",
    "NodeLowering",
    "NonTreeError",
    "TreeWalker",
    "UnknownNodeKindError",
    "WalkableNode",
    "ensure_tree",
]
