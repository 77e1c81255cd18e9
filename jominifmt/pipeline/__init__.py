"""Shared parse carriers and lazy pipeline entrypoint exports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jominifmt.parser.options import ParseMode, ParserOptions
from jominifmt.pipeline.result import FormatRunResult, JominiParseResult, ParseResultBase

if TYPE_CHECKING:
    from jominifmt.format.options import FormatOptions


def run_format(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: JominiParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> FormatRunResult:
    from jominifmt.format.runner import run_format as _run_format

    return _run_format(text, options, mode=mode, parse=parse, format_options=format_options)


__all__ = [
    "FormatRunResult",
    "JominiParseResult",
    "ParseResultBase",
    "run_format",
]
