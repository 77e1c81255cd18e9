"""Incremental document builder used by node lowerings."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import StrEnum

from jominifmt.format.comments import Annotation, Comment
from jominifmt.format.doc import (
    Align,
    Breakable,
    BreakMode,
    Doc,
    DocLike,
    DocumentError,
    Group,
    IfBreak,
    Indent,
    Text,
)
from jominifmt.format.layout import render
from jominifmt.format.options import FormatOptions

logger = logging.getLogger(__name__)


class ScopeKind(StrEnum):
    GROUP = "group"
    INDENT = "indent"
    ALIGN = "align"


@dataclass(slots=True)
class _Scope:
    kind: ScopeKind
    mode: BreakMode = BreakMode.AUTO
    delta: int = 0
    align_to: int | str = 0
    parts: list[Doc] = field(default_factory=list)

    def build(self) -> Doc:
        children = tuple(self.parts)
        match self.kind:
            case ScopeKind.GROUP:
                return Group(children, self.mode)
            case ScopeKind.INDENT:
                return Indent(self.delta, children)
            case ScopeKind.ALIGN:
                return Align(self.align_to, children)


def _as_doc(part: DocLike) -> Doc:
    return Text(part) if isinstance(part, str) else part


class Formatter:
    """Builds one document from a stack of open scopes, then renders it.

    The root scope is an AUTO group, so everything appended ends up inside a
    group. Comments and blank lines wait in a queue ordered by source position
    until a lowering takes them.

    A Formatter is used for a single format operation by a single caller.
    """

    def __init__(self, options: FormatOptions | None = None, annotations: Iterable[Annotation] = ()) -> None:
        self.options = options if options is not None else FormatOptions()
        self.output: list[str] = []
        self._scopes: list[_Scope] = [_Scope(ScopeKind.GROUP)]
        self._annotations: deque[Annotation] = deque(sorted(annotations, key=lambda item: item.position))
        self._rendered: str | None = None

    # -- document building ------------------------------------------------

    def append(self, doc: DocLike) -> None:
        self._current().parts.append(_as_doc(doc))

    def text(self, value: str) -> None:
        self.append(Text(value))

    def breakable(self, separator: str = " ", indent_delta: int = 0) -> None:
        self.append(Breakable(separator, indent_delta))

    def if_break(self, flat: DocLike, broken: DocLike) -> None:
        self.append(IfBreak(_as_doc(flat), _as_doc(broken)))

    def open_group(self, mode: BreakMode = BreakMode.AUTO) -> None:
        self._open(_Scope(ScopeKind.GROUP, mode=mode))

    def close_group(self) -> None:
        if len(self._scopes) == 1 or self._scopes[-1].kind != ScopeKind.GROUP:
            raise DocumentError("close_group() without a matching open_group()")
        self._close()

    def open_indent(self, delta: int | None = None) -> None:
        if delta is None:
            delta = self.options.indent_width
        if delta < 0:
            raise DocumentError("Indent delta cannot be negative")
        self._open(_Scope(ScopeKind.INDENT, delta=delta))

    def open_align(self, width_or_text: int | str) -> None:
        if isinstance(width_or_text, int) and width_or_text < 0:
            raise DocumentError("Align column cannot be negative")
        self._open(_Scope(ScopeKind.ALIGN, align_to=width_or_text))

    def close_scope(self) -> None:
        if len(self._scopes) == 1 or self._scopes[-1].kind == ScopeKind.GROUP:
            raise DocumentError("close_scope() without a matching open_indent() or open_align()")
        self._close()

    @contextmanager
    def group(self, mode: BreakMode = BreakMode.AUTO) -> Iterator[None]:
        self.open_group(mode)
        try:
            yield
        finally:
            self.close_group()

    @contextmanager
    def indent(self, delta: int | None = None) -> Iterator[None]:
        self.open_indent(delta)
        try:
            yield
        finally:
            self.close_scope()

    @contextmanager
    def align(self, width_or_text: int | str) -> Iterator[None]:
        self.open_align(width_or_text)
        try:
            yield
        finally:
            self.close_scope()

    def break_parent(self) -> None:
        """Force the innermost open group to break."""
        for scope in reversed(self._scopes):
            if scope.kind == ScopeKind.GROUP:
                scope.mode = BreakMode.FORCED
                return

    def blank_line(self) -> None:
        """Emit an empty line (no indentation) and force the enclosing group."""
        self.append(Align(0, (Breakable(""),)))
        self.break_parent()

    @property
    def depth(self) -> int:
        """Number of scopes opened on top of the root group."""
        return len(self._scopes) - 1

    # -- annotations ------------------------------------------------------

    def take_annotations_before(self, offset: int) -> list[Annotation]:
        taken: list[Annotation] = []
        while self._annotations and self._annotations[0].position < offset:
            taken.append(self._annotations.popleft())
        return taken

    def take_comments_through(self, offset: int) -> list[Comment]:
        """Comments positioned at or before `offset`; blank lines in that range are dropped."""
        taken: list[Comment] = []
        while self._annotations and self._annotations[0].position <= offset:
            item = self._annotations.popleft()
            if isinstance(item, Comment):
                taken.append(item)
        return taken

    def take_trailing_comments_before(self, offset: int) -> list[Comment]:
        """Trailing comments at the front of the queue, positioned before `offset`."""
        taken: list[Comment] = []
        while self._annotations:
            item = self._annotations[0]
            if not isinstance(item, Comment) or not item.trailing or item.position >= offset:
                break
            taken.append(self._annotations.popleft())
        return taken

    def remaining_comments(self) -> list[Comment]:
        remaining = [item for item in self._annotations if isinstance(item, Comment)]
        self._annotations.clear()
        return remaining

    @property
    def has_pending_annotations(self) -> bool:
        return bool(self._annotations)

    def comment(self, comment: Comment) -> None:
        """Lower one comment as the last thing on its line."""
        self.text(comment.text)
        self.breakable()
        self.break_parent()

    # -- rendering --------------------------------------------------------

    def flush(self) -> str:
        """Close the root group, render it and return the text."""
        if self._rendered is not None:
            raise DocumentError("Formatter was already flushed")
        if len(self._scopes) != 1:
            open_kinds = ", ".join(scope.kind.value for scope in self._scopes[1:])
            raise DocumentError(f"Cannot flush with open scopes: {open_kinds}")

        document = self._scopes.pop().build()
        self._rendered = render(document, self.options.max_width, self.output)
        logger.debug("Flushed document to %d characters", len(self._rendered))
        return self._rendered

    def _current(self) -> _Scope:
        if not self._scopes:
            raise DocumentError("Formatter was already flushed")
        return self._scopes[-1]

    def _open(self, scope: _Scope) -> None:
        self._current()
        self._scopes.append(scope)

    def _close(self) -> None:
        scope = self._scopes.pop()
        self._scopes[-1].parts.append(scope.build())


__all__ = ["Formatter", "ScopeKind"]
