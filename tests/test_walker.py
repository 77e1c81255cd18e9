from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from jominifmt.format.comments import Comment
from jominifmt.format.formatter import Formatter
from jominifmt.format.walker import (
    NodeCatalog,
    NonTreeError,
    TreeWalker,
    UnknownNodeKindError,
    ensure_tree,
)
from jominifmt.text import TextRange


@dataclass(eq=False)
class Node:
    kind: str
    start: int
    end: int
    label: str = ""
    children: list[Node] = field(default_factory=list)

    @property
    def trimmed_range(self) -> TextRange:
        return TextRange(self.start, self.end)


def _lower_lines(node: Node, walker: TreeWalker) -> None:
    with walker.formatter.group():
        for index, child in enumerate(node.children):
            if index:
                walker.formatter.breakable()
            walker.visit(child)
        walker.formatter.break_parent()


def _lower_call(node: Node, walker: TreeWalker) -> None:
    formatter = walker.formatter
    with formatter.group():
        formatter.text(node.label + "(")
        with formatter.indent(2):
            for index, child in enumerate(node.children):
                formatter.text("," if index else "")
                formatter.breakable("")
                walker.visit(child)
        formatter.breakable("")
        formatter.text(")")


def _lower_atom(node: Node, walker: TreeWalker) -> None:
    walker.formatter.text(node.label)


def _catalog() -> NodeCatalog:
    return NodeCatalog({"lines": _lower_lines, "call": _lower_call, "atom": _lower_atom})


def _walk(root: Node, comments: list[Comment] | None = None, width: int = 80) -> str:
    from jominifmt.format.options import FormatOptions

    formatter = Formatter(FormatOptions(max_width=width), comments or [])
    return TreeWalker(formatter, _catalog()).walk(root)


def _call() -> Node:
    return Node(
        "call",
        0,
        12,
        "foo",
        [Node("atom", 4, 7, "bar"), Node("atom", 8, 11, "baz")],
    )


def test_walk_lowers_through_catalog() -> None:
    assert _walk(_call()) == "foo(bar,baz)"
    assert _walk(_call(), width=5) == "foo(\n  bar,\n  baz\n)"


def test_walk_of_empty_tree_is_empty() -> None:
    assert _walk(Node("lines", 0, 0)) == ""


def test_unknown_kind_raises_key_error() -> None:
    root = Node("lines", 0, 5, children=[Node("mystery", 0, 5)])
    with pytest.raises(UnknownNodeKindError) as excinfo:
        _walk(root)
    assert isinstance(excinfo.value, KeyError)
    assert excinfo.value.kind == "mystery"
    assert "mystery" in str(excinfo.value)


def test_shared_node_is_rejected_before_lowering() -> None:
    shared = Node("atom", 0, 1, "x")
    root = Node("lines", 0, 1, children=[shared, shared])
    with pytest.raises(NonTreeError):
        _walk(root)


def test_cycle_is_rejected() -> None:
    root = Node("lines", 0, 1)
    child = Node("lines", 0, 1, children=[root])
    root.children.append(child)
    with pytest.raises(NonTreeError):
        ensure_tree(root)


def test_ensure_tree_accepts_a_tree() -> None:
    ensure_tree(_call())


@pytest.mark.parametrize("position", [10, 15, 19, 20])
def test_comment_between_nodes_is_placed_between_them(position: int) -> None:
    root = Node("lines", 0, 25, children=[Node("atom", 0, 10, "first"), Node("atom", 20, 25, "second")])
    output = _walk(root, [Comment(position, "# note")])

    assert output.index("first") < output.index("# note") < output.index("second")
    assert output == "first\n# note\nsecond"


def test_comments_after_last_node_are_emitted_at_the_end() -> None:
    root = Node("lines", 0, 5, children=[Node("atom", 0, 5, "only")])
    output = _walk(root, [Comment(7, "# tail")])

    assert output == "only\n# tail\n"


def test_catalog_registration_and_comment_placement_flag() -> None:
    catalog = NodeCatalog()
    catalog.register("atom", _lower_atom)
    catalog.register("lines", _lower_lines, places_comments=True)

    assert "atom" in catalog
    assert len(catalog) == 2
    assert catalog.places_comments("lines") is True
    assert catalog.places_comments("atom") is False
    assert catalog.lowering_for("atom") is _lower_atom

    catalog.register("lines", _lower_lines)
    assert catalog.places_comments("lines") is False


def test_lowering_that_places_comments_keeps_them_queued() -> None:
    seen: list[list[Comment]] = []

    def lower_lines(node: Node, walker: TreeWalker) -> None:
        seen.append(walker.formatter.take_comments_through(node.end))
        _lower_lines(node, walker)

    catalog = NodeCatalog({"atom": _lower_atom})
    catalog.register("lines", lower_lines, places_comments=True)
    formatter = Formatter(annotations=[Comment(0, "# head")])
    root = Node("lines", 5, 10, children=[Node("atom", 5, 10, "x")])

    assert TreeWalker(formatter, catalog).walk(root) == "x"
    assert seen == [[Comment(0, "# head")]]
