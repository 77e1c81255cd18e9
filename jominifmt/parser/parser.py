"""Event-based parser core."""

from dataclasses import dataclass

from jominifmt.diagnostics import Diagnostic, DiagnosticSpec
from jominifmt.lexer import TokenKind
from jominifmt.parser.event import Event, FinishEvent, StartEvent, TokenEvent
from jominifmt.parser.options import ParserOptions
from jominifmt.parser.token_source import TokenSource
from jominifmt.syntax import SyntaxKind
from jominifmt.text import TextRange


@dataclass(slots=True)
class ParserProgress:
    """Detect parser stalls inside list-style loops."""

    _position: int | None = None

    def assert_progressing(self, parser: "Parser") -> None:
        if self._position is not None and self._position >= parser.position:
            raise RuntimeError(f"Parser stopped making progress at {parser.current.name} {parser.current_range}")
        self._position = parser.position


class Parser:
    """Event-based parser.

    Grammar routines open nodes with `start()` and close them through the
    returned marker; the events are turned into a tree afterwards.
    """

    def __init__(self, source: TokenSource, options: ParserOptions | None = None) -> None:
        self._source = source
        self._options = options or ParserOptions()
        self._events: list[Event] = []
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> TokenSource:
        return self._source

    @property
    def options(self) -> ParserOptions:
        return self._options

    @property
    def events(self) -> list[Event]:
        return self._events

    @property
    def current(self) -> TokenKind:
        return self._source.current

    @property
    def current_range(self) -> TextRange:
        return self._source.current_range

    @property
    def position(self) -> int:
        return self._source.position

    @property
    def has_preceding_line_break(self) -> bool:
        return self._source.has_preceding_line_break

    @property
    def has_preceding_trivia(self) -> bool:
        return self._source.has_preceding_trivia

    def at(self, kind: TokenKind) -> bool:
        return self.current == kind

    def at_set(self, kinds: frozenset[TokenKind]) -> bool:
        return self.current in kinds

    def start(self) -> "Marker":
        pos = len(self._events)
        self._events.append(StartEvent.tombstone())
        return Marker(pos=pos, start=self.position)

    def bump(self) -> None:
        if self.current == TokenKind.EOF:
            return
        self._events.append(TokenEvent(kind=SyntaxKind.from_token_kind(self.current), end=self.current_range.end))
        self._source.bump()

    def eat(self, kind: TokenKind) -> bool:
        if self.current == kind:
            self.bump()
            return True
        return False

    def error(self, spec: DiagnosticSpec, message: str | None = None) -> None:
        """Report a diagnostic at the current token; one per start offset."""
        diagnostic = Diagnostic.from_spec(spec, self.current_range, message)
        if self._diagnostics and self._diagnostics[-1].range.start == diagnostic.range.start:
            return
        self._diagnostics.append(diagnostic)

    def finish(self) -> tuple[list[Event], list[Diagnostic]]:
        return self._events, self._diagnostics


@dataclass(slots=True)
class Marker:
    pos: int
    start: int

    def complete(self, parser: Parser, kind: SyntaxKind) -> "CompletedMarker":
        event = parser.events[self.pos]
        if not isinstance(event, StartEvent):
            raise RuntimeError("Marker must point to a StartEvent")
        parser.events[self.pos] = StartEvent(kind=kind, forward_parent=event.forward_parent)

        finish_pos = len(parser.events)
        parser.events.append(FinishEvent())
        return CompletedMarker(start_pos=self.pos, finish_pos=finish_pos, offset=self.start)


@dataclass(frozen=True, slots=True)
class CompletedMarker:
    start_pos: int
    finish_pos: int
    offset: int

    def range(self, parser: Parser) -> TextRange:
        end = self.offset
        for event in reversed(parser.events[self.start_pos : self.finish_pos]):
            if isinstance(event, TokenEvent):
                end = event.end
                break
        return TextRange(self.offset, end)

    def text(self, parser: Parser) -> str:
        rng = self.range(parser)
        return parser.source.text[rng.start : rng.end]

    def precede(self, parser: Parser) -> Marker:
        """Open a new node that will become the parent of this one."""
        new_marker = parser.start()
        event = parser.events[self.start_pos]
        if not isinstance(event, StartEvent):
            raise RuntimeError("CompletedMarker points to non-start event")
        distance = new_marker.pos - self.start_pos
        if distance <= 0:
            raise RuntimeError("Invalid precede distance")
        parser.events[self.start_pos] = StartEvent(kind=event.kind, forward_parent=distance)
        new_marker.start = self.offset
        return new_marker
