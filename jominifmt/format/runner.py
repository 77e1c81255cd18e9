"""Format runner over a shared Jomini parse result."""

from __future__ import annotations

from jominifmt.format.api import format_tree
from jominifmt.format.options import FormatOptions
from jominifmt.parser import ParseMode, ParserOptions, parse_result
from jominifmt.pipeline.result import FormatRunResult, JominiParseResult


def run_format(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: JominiParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> FormatRunResult:
    """Run formatting from a single parse lifecycle.

    Sources with parse errors are returned unchanged together with their
    diagnostics.
    """
    resolved_parse = _resolve_parse(text, options=options, mode=mode, parse=parse)
    diagnostics = list(resolved_parse.diagnostics)

    if resolved_parse.has_errors:
        formatted_text = resolved_parse.source_text
    else:
        formatted_text = format_tree(
            resolved_parse.syntax_root(),
            resolved_parse.annotations(),
            format_options,
        )
    changed = formatted_text != resolved_parse.source_text

    return FormatRunResult(
        parse=resolved_parse,
        formatted_text=formatted_text,
        diagnostics=diagnostics,
        changed=changed,
    )


def _resolve_parse(
    text: str,
    *,
    options: ParserOptions | None,
    mode: ParseMode | None,
    parse: JominiParseResult | None,
) -> JominiParseResult:
    if parse is not None:
        if options is not None or mode is not None:
            raise ValueError("Pass either parse or options/mode, not both")
        return parse
    return parse_result(text, options=options, mode=mode)
