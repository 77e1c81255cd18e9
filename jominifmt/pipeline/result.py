"""Parse and format carriers shared by every consumer of one parse."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jominifmt.cst import from_green
from jominifmt.diagnostics import has_errors
from jominifmt.parser.options import ParserOptions
from jominifmt.parser.sink import ParsedGreenTree

if TYPE_CHECKING:
    from jominifmt.cst import GreenNode, SyntaxNode
    from jominifmt.diagnostics import Diagnostic
    from jominifmt.format.comments import Annotation


@dataclass(slots=True)
class ParseResultBase:
    """Source text plus its green tree, parsed once and consumed many times."""

    source_text: str
    parsed: ParsedGreenTree

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.parsed.diagnostics

    @property
    def has_errors(self) -> bool:
        return has_errors(self.parsed.diagnostics)

    def green_root(self) -> GreenNode:
        return self.parsed.root


@dataclass(slots=True)
class JominiParseResult(ParseResultBase):
    """Jomini parse result with cached red tree and comment annotations."""

    options: ParserOptions
    _syntax_root: SyntaxNode | None = field(default=None, init=False, repr=False)
    _annotations: list[Annotation] | None = field(default=None, init=False, repr=False)

    def syntax_root(self) -> SyntaxNode:
        if self._syntax_root is None:
            self._syntax_root = from_green(self.parsed.root, self.source_text)
        return self._syntax_root

    def annotations(self) -> list[Annotation]:
        if self._annotations is None:
            from jominifmt.format.comments import collect_annotations

            self._annotations = collect_annotations(self.syntax_root())
        return self._annotations


@dataclass(frozen=True, slots=True)
class FormatRunResult:
    """Formatted text for one parse, plus the diagnostics that came with it.

    `changed` compares against the parsed source, so a caller can skip
    writing files that are already formatted.
    """

    parse: JominiParseResult
    formatted_text: str
    diagnostics: list[Diagnostic]
    changed: bool

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)
