"""Parser events."""

from dataclasses import dataclass
from typing import Protocol

from jominifmt.syntax import SyntaxKind


@dataclass(frozen=True, slots=True)
class StartEvent:
    kind: SyntaxKind
    forward_parent: int | None = None

    @staticmethod
    def tombstone() -> "StartEvent":
        return StartEvent(kind=SyntaxKind.TOMBSTONE)


@dataclass(frozen=True, slots=True)
class FinishEvent:
    pass


@dataclass(frozen=True, slots=True)
class TokenEvent:
    kind: SyntaxKind
    end: int


Event = StartEvent | FinishEvent | TokenEvent


class TreeSink(Protocol):
    def token(self, kind: SyntaxKind, end: int) -> None: ...

    def start_node(self, kind: SyntaxKind) -> None: ...

    def finish_node(self) -> None: ...


def process_events(sink: TreeSink, events: list[Event]) -> None:
    """Replay events into a sink, resolving `precede` forward parents.

    Consumed forward parents are replaced by tombstones in `events`.
    """
    forward_parents: list[SyntaxKind] = []

    for idx, event in enumerate(events):
        if isinstance(event, FinishEvent):
            sink.finish_node()
            continue
        if isinstance(event, TokenEvent):
            sink.token(event.kind, event.end)
            continue
        if event.kind == SyntaxKind.TOMBSTONE:
            continue

        forward_parents.append(event.kind)
        parent_idx = idx
        parent_offset = event.forward_parent
        while parent_offset is not None:
            parent_idx += parent_offset
            if parent_idx >= len(events):
                raise RuntimeError("Invalid forward_parent offset in parser events")
            parent_event = events[parent_idx]
            if not isinstance(parent_event, StartEvent):
                raise RuntimeError("forward_parent must point to StartEvent")
            events[parent_idx] = StartEvent.tombstone()
            if parent_event.kind != SyntaxKind.TOMBSTONE:
                forward_parents.append(parent_event.kind)
            parent_offset = parent_event.forward_parent

        while forward_parents:
            sink.start_node(forward_parents.pop())
