"""Doc tree: the layout primitives tree lowerings compose into a document.

Every node measures itself bottom-up when it is constructed:

- `flat_width` is the width of the node rendered without any line breaks. It
  is infinite when a FORCED group is inside, so a fit check can never choose
  flat mode for it.
- `forced` records whether a FORCED group is inside.
- `loose` records whether a Breakable or IfBreak is present that no Group
  encloses. Only a Group clears it.

Nodes are frozen and built from already built children, so a document is
always a finite tree.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeAlias


class DocumentError(ValueError):
    """A document violates the layout contract (detected while building it)."""


class BreakMode(StrEnum):
    AUTO = "auto"
    FORCED = "forced"


def _measure(node: object, flat_width: float, forced: bool, loose: bool) -> None:
    object.__setattr__(node, "flat_width", flat_width)
    object.__setattr__(node, "forced", forced)
    object.__setattr__(node, "loose", loose)


def _measure_children(node: object, children: tuple[Doc, ...]) -> None:
    _measure(
        node,
        flat_width=sum((child.flat_width for child in children), 0),
        forced=any(child.forced for child in children),
        loose=any(child.loose for child in children),
    )


@dataclass(frozen=True, slots=True)
class Text:
    """Literal characters; never contains a line break."""

    value: str
    flat_width: float = field(init=False, repr=False, compare=False)
    forced: bool = field(init=False, repr=False, compare=False)
    loose: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if "\n" in self.value or "\r" in self.value:
            raise DocumentError(f"Text cannot contain line breaks: {self.value!r}")
        _measure(self, len(self.value), False, False)


@dataclass(frozen=True, slots=True)
class Breakable:
    """`separator` when its group is flat, otherwise a newline plus indentation."""

    separator: str = " "
    indent_delta: int = 0
    flat_width: float = field(init=False, repr=False, compare=False)
    forced: bool = field(init=False, repr=False, compare=False)
    loose: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if "\n" in self.separator or "\r" in self.separator:
            raise DocumentError("Breakable separator cannot contain line breaks")
        if self.indent_delta < 0:
            raise DocumentError("Breakable indent_delta cannot be negative")
        _measure(self, len(self.separator), False, True)


@dataclass(frozen=True, slots=True)
class Concat:
    children: tuple[Doc, ...]
    flat_width: float = field(init=False, repr=False, compare=False)
    forced: bool = field(init=False, repr=False, compare=False)
    loose: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _measure_children(self, self.children)


@dataclass(frozen=True, slots=True)
class Group:
    """The unit of the fit/break decision."""

    children: tuple[Doc, ...]
    mode: BreakMode = BreakMode.AUTO
    flat_width: float = field(init=False, repr=False, compare=False)
    forced: bool = field(init=False, repr=False, compare=False)
    loose: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        forced = self.mode == BreakMode.FORCED or any(child.forced for child in self.children)
        width = math.inf if forced else sum((child.flat_width for child in self.children), 0)
        _measure(self, width, forced, False)

    @property
    def is_forced(self) -> bool:
        return self.mode == BreakMode.FORCED


@dataclass(frozen=True, slots=True)
class Indent:
    """Breaks inside the children are indented by `delta` more columns."""

    delta: int
    children: tuple[Doc, ...]
    flat_width: float = field(init=False, repr=False, compare=False)
    forced: bool = field(init=False, repr=False, compare=False)
    loose: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.delta < 0:
            raise DocumentError("Indent delta cannot be negative")
        _measure_children(self, self.children)


@dataclass(frozen=True, slots=True)
class Align:
    """Set the indentation of breaks inside the children.

    An int is an absolute column (`Align(0, ...)` starts lines at column 0); a
    string is appended to the current indentation.
    """

    width_or_text: int | str
    children: tuple[Doc, ...]
    flat_width: float = field(init=False, repr=False, compare=False)
    forced: bool = field(init=False, repr=False, compare=False)
    loose: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.width_or_text, int):
            if self.width_or_text < 0:
                raise DocumentError("Align column cannot be negative")
        elif "\n" in self.width_or_text or "\r" in self.width_or_text:
            raise DocumentError("Align text cannot contain line breaks")
        _measure_children(self, self.children)

    def indentation(self, current: str) -> str:
        if isinstance(self.width_or_text, int):
            return " " * self.width_or_text
        return current + self.width_or_text


@dataclass(frozen=True, slots=True)
class IfBreak:
    """`flat` when the nearest enclosing group is flat, `broken` otherwise."""

    flat: Doc
    broken: Doc
    flat_width: float = field(init=False, repr=False, compare=False)
    forced: bool = field(init=False, repr=False, compare=False)
    loose: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _measure(self, self.flat.flat_width, self.flat.forced, True)


Doc: TypeAlias = Text | Breakable | Concat | Group | Indent | Align | IfBreak
DocLike: TypeAlias = Doc | str


def _as_doc(part: DocLike) -> Doc:
    if isinstance(part, str):
        return Text(part)
    return part


def _as_children(parts: Iterable[DocLike]) -> tuple[Doc, ...]:
    return tuple(_as_doc(part) for part in parts)


def text(value: str) -> Text:
    return Text(value)


def breakable(separator: str = " ", indent_delta: int = 0) -> Breakable:
    return Breakable(separator, indent_delta)


def softline() -> Breakable:
    return Breakable("")


def concat(*parts: DocLike) -> Concat:
    flat: list[Doc] = []
    for part in _as_children(parts):
        if isinstance(part, Concat):
            flat.extend(part.children)
        else:
            flat.append(part)
    return Concat(tuple(flat))


def join(separator: DocLike, parts: Iterable[DocLike]) -> Concat:
    out: list[DocLike] = []
    for index, part in enumerate(parts):
        if index:
            out.append(separator)
        out.append(part)
    return concat(*out)


def group(*parts: DocLike, mode: BreakMode = BreakMode.AUTO) -> Group:
    return Group(_as_children(parts), mode)


def forced_group(*parts: DocLike) -> Group:
    return Group(_as_children(parts), BreakMode.FORCED)


def indent(delta: int, *parts: DocLike) -> Indent:
    return Indent(delta, _as_children(parts))


def align(width_or_text: int | str, *parts: DocLike) -> Align:
    return Align(width_or_text, _as_children(parts))


def if_break(flat: DocLike, broken: DocLike) -> IfBreak:
    return IfBreak(_as_doc(flat), _as_doc(broken))


def flat_text(doc: Doc) -> str:
    """The text `doc` renders to when nothing breaks.

    Raises DocumentError for documents that cannot render flat.
    """
    if doc.forced:
        raise DocumentError("Document contains a forced group and cannot be rendered flat")

    parts: list[str] = []
    stack: list[Doc] = [doc]
    while stack:
        current = stack.pop()
        if isinstance(current, Text):
            parts.append(current.value)
        elif isinstance(current, Breakable):
            parts.append(current.separator)
        elif isinstance(current, IfBreak):
            stack.append(current.flat)
        else:
            stack.extend(reversed(current.children))
    return "".join(parts)


__all__ = [
    "Align",
    "BreakMode",
    "Breakable",
    "Concat",
    "Doc",
    "DocLike",
    "DocumentError",
    "Group",
    "IfBreak",
    "Indent",
    "Text",
    "align",
    "breakable",
    "concat",
    "flat_text",
    "forced_group",
    "group",
    "if_break",
    "indent",
    "join",
    "softline",
    "text",
]
