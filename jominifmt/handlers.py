"""Per-extension handlers that know how to parse and format a file type."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from jominifmt.format import FormatOptions
from jominifmt.parser import ParserOptions, parse_result
from jominifmt.pipeline import FormatRunResult, JominiParseResult, run_format

logger = logging.getLogger(__name__)

JOMINI_EXTENSIONS: tuple[str, ...] = (".txt", ".gui", ".gfx", ".sfx", ".asset", ".mod")


class Handler(Protocol):
    """Parses and formats one file type."""

    def parse(self, text: str) -> JominiParseResult: ...

    def format(self, text: str) -> FormatRunResult: ...


class JominiHandler:
    """Handler for Jomini / Clausewitz script files."""

    def __init__(
        self,
        parser_options: ParserOptions | None = None,
        format_options: FormatOptions | None = None,
    ) -> None:
        self.parser_options = parser_options if parser_options is not None else ParserOptions()
        self.format_options = format_options

    def parse(self, text: str) -> JominiParseResult:
        return parse_result(text, self.parser_options)

    def format(self, text: str) -> FormatRunResult:
        return run_format(text, parse=self.parse(text), format_options=self.format_options)


class HandlerRegistry:
    """Maps file extensions to handlers; unknown extensions use the default handler."""

    def __init__(self, default: Handler) -> None:
        self.default = default
        self._handlers: dict[str, Handler] = {}

    def register(self, extension: str, handler: Handler) -> None:
        self._handlers[_normalize_extension(extension)] = handler

    def for_path(self, path: str | Path) -> Handler:
        extension = _normalize_extension(Path(path).suffix)
        handler = self._handlers.get(extension)
        if handler is None:
            logger.debug("No handler registered for %r, using the default", extension)
            return self.default
        return handler

    def extensions(self) -> tuple[str, ...]:
        return tuple(sorted(self._handlers))


def default_registry(
    parser_options: ParserOptions | None = None,
    format_options: FormatOptions | None = None,
) -> HandlerRegistry:
    """A fresh registry with the Jomini handler for every script extension."""
    handler = JominiHandler(parser_options, format_options)
    registry = HandlerRegistry(default=handler)
    for extension in JOMINI_EXTENSIONS:
        registry.register(extension, handler)
    return registry


def _normalize_extension(extension: str) -> str:
    extension = extension.lower()
    if extension and not extension.startswith("."):
        extension = "." + extension
    return extension


__all__ = [
    "JOMINI_EXTENSIONS",
    "Handler",
    "HandlerRegistry",
    "JominiHandler",
    "default_registry",
]
