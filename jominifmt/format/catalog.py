"""Jomini node lowerings: how each CST node kind becomes a document.

Statements are laid out one per line at the top level. Blocks stay on one line
(`{ a b c }`) while they fit, otherwise they break into one statement per line
indented by `indent_width`.
"""

from __future__ import annotations

from collections.abc import Iterable

from jominifmt.cst import SyntaxNode, SyntaxToken
from jominifmt.format.comments import Annotation, BlankLine
from jominifmt.format.doc import BreakMode, align, breakable, forced_group, join
from jominifmt.format.formatter import Formatter
from jominifmt.format.walker import NodeCatalog, TreeWalker
from jominifmt.syntax import ASSIGNMENT_OPERATORS, SyntaxKind

_BLOCK_VALUE_KINDS = frozenset({SyntaxKind.BLOCK, SyntaxKind.TAGGED_BLOCK_VALUE})


def lower_source_file(node: SyntaxNode, walker: TreeWalker) -> None:
    with walker.formatter.group(BreakMode.FORCED):
        for child in node.child_nodes():
            walker.visit(child)


def lower_statement_list(node: SyntaxNode, walker: TreeWalker) -> None:
    """One statement per line, with the comments and blank lines found between them.

    Tokens directly inside the list (`;` terminators and stray legacy `}`)
    are not emitted.
    """
    formatter = walker.formatter
    in_block = node.parent is not None and node.parent.kind == SyntaxKind.BLOCK
    lines = _StatementLines(formatter, leading_break=in_block)

    for child in node.child_nodes():
        lines.place_annotations(formatter.take_annotations_before(child.trimmed_range.start))
        lines.start_line()
        walker.visit(child)

    lines.place_annotations(formatter.take_annotations_before(_statement_list_end(node)))

    if not in_block and lines.started:
        formatter.breakable("")


def lower_block(node: SyntaxNode, walker: TreeWalker) -> None:
    formatter = walker.formatter
    options = walker.options
    body = node.first_child_node(SyntaxKind.STATEMENT_LIST)

    mode = BreakMode.AUTO
    if options.break_nested_blocks and body is not None and _holds_block(body):
        mode = BreakMode.FORCED

    with formatter.group(mode):
        formatter.text("{")
        if body is not None:
            for comment in formatter.take_trailing_comments_before(body.start):
                formatter.text(" " * options.comment_padding + comment.text)
                formatter.break_parent()
            with formatter.indent():
                walker.visit(body)
        formatter.breakable()
        formatter.text("}")


def lower_spaced(node: SyntaxNode, walker: TreeWalker) -> None:
    """`key op value`, `key { ... }` and `tag { ... }`, parts separated by one space."""
    formatter = walker.formatter
    first = True
    for child in node.children:
        if isinstance(child, SyntaxToken) and child.kind not in ASSIGNMENT_OPERATORS:
            continue
        if not first:
            formatter.text(" ")
        first = False

        if isinstance(child, SyntaxNode):
            walker.visit(child)
        else:
            formatter.text(child.text)


def lower_scalar(node: SyntaxNode, walker: TreeWalker) -> None:
    _verbatim(walker.formatter, node.text_trimmed)


def lower_error(node: SyntaxNode, walker: TreeWalker) -> None:
    formatter = walker.formatter
    # Comments inside the node are part of its verbatim text.
    formatter.take_annotations_before(node.trimmed_range.end)
    _verbatim(formatter, node.text_trimmed)


def jomini_catalog() -> NodeCatalog:
    """A fresh catalog with the lowerings for every Jomini node kind."""
    catalog = NodeCatalog()
    catalog.register(SyntaxKind.ROOT, lower_source_file, places_comments=True)
    catalog.register(SyntaxKind.SOURCE_FILE, lower_source_file, places_comments=True)
    catalog.register(SyntaxKind.STATEMENT_LIST, lower_statement_list, places_comments=True)
    catalog.register(SyntaxKind.KEY_VALUE, lower_spaced)
    catalog.register(SyntaxKind.TAGGED_BLOCK_VALUE, lower_spaced)
    catalog.register(SyntaxKind.BLOCK, lower_block)
    catalog.register(SyntaxKind.SCALAR, lower_scalar)
    catalog.register(SyntaxKind.ERROR, lower_error)
    return catalog


class _StatementLines:
    """Separates statements and own-line comments; keeps trailing comments on their line."""

    def __init__(self, formatter: Formatter, *, leading_break: bool) -> None:
        self.formatter = formatter
        self.leading_break = leading_break
        self.started = False
        self._blank_lines = 0
        self._after_comment = False

    def place_annotations(self, annotations: Iterable[Annotation]) -> None:
        formatter = self.formatter
        for annotation in annotations:
            if isinstance(annotation, BlankLine):
                if self.started:
                    self._blank_lines += 1
                continue

            if annotation.trailing and self.started and not self._blank_lines and not self._after_comment:
                formatter.text(" " * formatter.options.comment_padding + annotation.text)
            else:
                self.start_line()
                formatter.text(annotation.text)
            formatter.break_parent()
            self._after_comment = True

    def start_line(self) -> None:
        formatter = self.formatter
        if self.started or self.leading_break:
            for _ in range(min(self._blank_lines, formatter.options.max_blank_lines)):
                formatter.blank_line()
            formatter.breakable()
        self.started = True
        self._blank_lines = 0
        self._after_comment = False


def _statement_list_end(node: SyntaxNode) -> int:
    # A list ends where the token after it (`}` or EOF) starts its text.
    following = node.next_sibling()
    if isinstance(following, SyntaxToken):
        return following.token_start
    return node.end


def _holds_block(statements: SyntaxNode) -> bool:
    for statement in statements.child_nodes():
        if statement.kind == SyntaxKind.BLOCK:
            return True
        if statement.kind == SyntaxKind.KEY_VALUE and any(
            part.kind in _BLOCK_VALUE_KINDS for part in statement.child_nodes()
        ):
            return True
    return False


def _verbatim(formatter: Formatter, text: str) -> None:
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if len(lines) == 1:
        formatter.text(text)
        return
    formatter.append(forced_group(align(0, join(breakable(""), lines))))


__all__ = [
    "jomini_catalog",
    "lower_block",
    "lower_error",
    "lower_scalar",
    "lower_source_file",
    "lower_spaced",
    "lower_statement_list",
]
