"""Jomini / Clausewitz script formatter built on a document pretty printer."""

from jominifmt.format import FormatOptions, SourceParseError, format_source, format_tree
from jominifmt.parser import ParseMode, ParserOptions, parse, parse_or_none

__all__ = [
    "FormatOptions",
    "ParseMode",
    "ParserOptions",
    "SourceParseError",
    "format_source",
    "format_tree",
    "parse",
    "parse_or_none",
]
