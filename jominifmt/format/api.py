"""Entry points that format a syntax tree or Jomini source text."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from jominifmt.cst import from_green
from jominifmt.diagnostics import Diagnostic, has_errors
from jominifmt.format.catalog import jomini_catalog
from jominifmt.format.comments import Annotation, collect_annotations
from jominifmt.format.formatter import Formatter
from jominifmt.format.options import FormatOptions
from jominifmt.format.walker import NodeCatalog, TreeWalker, WalkableNode
from jominifmt.parser import ParserOptions, parse

logger = logging.getLogger(__name__)


class SourceParseError(ValueError):
    """Source text could not be parsed, so it cannot be formatted."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        errors = [diagnostic for diagnostic in diagnostics if diagnostic.severity == "error"]
        first = errors[0] if errors else None
        detail = f": {first.message} at offset {first.range.start}" if first is not None else ""
        super().__init__(f"Source has {len(errors)} parse error(s){detail}")


def format_tree(
    tree: WalkableNode,
    annotations: Iterable[Annotation] = (),
    options: FormatOptions | None = None,
    *,
    catalog: NodeCatalog | None = None,
) -> str:
    """Render `tree` (with its comments and blank lines) as formatted text.

    Raises NonTreeError when `tree` has cycles or shared nodes and
    UnknownNodeKindError when the catalog has no lowering for a node kind.
    """
    formatter = Formatter(options, annotations)
    walker = TreeWalker(formatter, catalog if catalog is not None else jomini_catalog())
    return walker.walk(tree)


def format_source(
    text: str,
    options: FormatOptions | None = None,
    *,
    parser_options: ParserOptions | None = None,
) -> str:
    """Parse and format Jomini source text.

    Raises SourceParseError when the source has error diagnostics; warnings
    (legacy brace recovery in permissive mode) do not stop formatting.
    """
    parsed = parse(text, parser_options)
    if has_errors(parsed.diagnostics):
        raise SourceParseError(parsed.diagnostics)

    root = from_green(parsed.root, text)
    formatted = format_tree(root, collect_annotations(root), options)
    logger.debug("Formatted %d characters into %d", len(text), len(formatted))
    return formatted


__all__ = ["SourceParseError", "format_source", "format_tree"]
