"""Document based pretty printer for Jomini syntax trees."""

from jominifmt.format.api import SourceParseError, format_source, format_tree
from jominifmt.format.catalog import jomini_catalog
from jominifmt.format.comments import Annotation, BlankLine, Comment, collect_annotations
from jominifmt.format.doc import BreakMode, Doc, DocumentError
from jominifmt.format.formatter import Formatter
from jominifmt.format.layout import render
from jominifmt.format.options import FormatOptions
from jominifmt.format.walker import (
    NodeCatalog,
    NodeLowering,
    NonTreeError,
    TreeWalker,
    UnknownNodeKindError,
    ensure_tree,
)

__all__ = [
    "Annotation",
    "BlankLine",
    "BreakMode",
    "Comment",
    "Doc",
    "DocumentError",
    "FormatOptions",
    "Formatter",
    "NodeCatalog",
    "NodeLowering",
    "NonTreeError",
    "SourceParseError",
    "TreeWalker",
    "UnknownNodeKindError",
    "collect_annotations",
    "ensure_tree",
    "format_source",
    "format_tree",
    "jomini_catalog",
    "render",
]
