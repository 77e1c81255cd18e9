"""Parser infrastructure (token source + event-based parser + tree sink)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jominifmt.diagnostics import collect_diagnostics, has_errors
from jominifmt.lexer import Lexer
from jominifmt.parser.event import Event, FinishEvent, StartEvent, TokenEvent, process_events
from jominifmt.parser.grammar import parse_source_file
from jominifmt.parser.options import ParseMode, ParserOptions
from jominifmt.parser.parser import CompletedMarker, Marker, Parser
from jominifmt.parser.sink import LosslessTreeSink, ParsedGreenTree
from jominifmt.parser.token_source import TokenSource

if TYPE_CHECKING:
    from jominifmt.pipeline import JominiParseResult


def resolve_options(options: ParserOptions | None, mode: ParseMode | None) -> ParserOptions:
    if mode is not None and options is not None:
        raise ValueError("Pass either options or mode, not both")
    if options is not None:
        return options
    if mode is not None:
        return ParserOptions.for_mode(mode)
    return ParserOptions()


def parse(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ParsedGreenTree:
    """Parse Jomini source into a lossless green tree plus diagnostics."""
    resolved = resolve_options(options, mode)

    lexer = Lexer(text, allow_multiline_strings=resolved.allow_multiline_strings)
    source = TokenSource(lexer)
    parser = Parser(source, options=resolved)

    parse_source_file(parser)
    events, parser_diagnostics = parser.finish()
    trivia, lexer_diagnostics = source.finish()

    sink = LosslessTreeSink(text=text, trivia=trivia)
    process_events(sink, events)
    return sink.finish(collect_diagnostics(lexer_diagnostics, parser_diagnostics))


def parse_or_none(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ParsedGreenTree | None:
    """Like `parse`, but returns None when the source has errors."""
    parsed = parse(text, options, mode=mode)
    if has_errors(parsed.diagnostics):
        return None
    return parsed


def parse_result(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> JominiParseResult:
    from jominifmt.pipeline import JominiParseResult

    resolved = resolve_options(options, mode)
    return JominiParseResult(source_text=text, parsed=parse(text, resolved), options=resolved)


__all__ = [
    "CompletedMarker",
    "Event",
    "FinishEvent",
    "LosslessTreeSink",
    "Marker",
    "ParseMode",
    "ParsedGreenTree",
    "Parser",
    "ParserOptions",
    "StartEvent",
    "TokenEvent",
    "TokenSource",
    "parse",
    "parse_or_none",
    "parse_result",
    "process_events",
    "resolve_options",
]
