"""Structural dumps of values and syntax trees, laid out with the doc renderer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from jominifmt.cst import SyntaxNode, SyntaxToken
from jominifmt.format.doc import (
    Doc,
    align,
    breakable,
    concat,
    group,
    if_break,
    indent,
    join,
    softline,
    text,
)
from jominifmt.format.layout import render

_INDENT = 2
_CYCLE = "<...>"


def pformat(value: object, max_width: int = 80) -> str:
    """Pretty-format dataclasses, slotted objects, containers and scalars.

    An object that is already being formatted further up prints as `<...>`,
    so back references such as `SyntaxNode.parent` do not recurse forever.
    """
    return render(group(_Dumper().doc(value)), max_width)


class _Dumper:
    def __init__(self) -> None:
        # ids of the containers currently being formatted
        self._active: set[int] = set()

    def doc(self, value: object) -> Doc:
        if isinstance(value, Enum):
            return text(f"{type(value).__name__}.{value.name}")
        if value is None or isinstance(value, (bool, int, float, complex, str, bytes)):
            return _repr_text(value)

        if id(value) in self._active:
            return text(_CYCLE)
        self._active.add(id(value))
        try:
            return self._container(value)
        finally:
            self._active.discard(id(value))

    def _container(self, value: Any) -> Doc:
        name = type(value).__name__

        if is_dataclass(value) and not isinstance(value, type):
            items = [
                self._field(field.name, getattr(value, field.name))
                for field in fields(value)
                if field.repr
            ]
            return _bracketed(f"{name}(", items, ")")

        if isinstance(value, Mapping):
            items = [concat(_repr_text(key), ": ", self.doc(item)) for key, item in value.items()]
            return _bracketed("{", items, "}")

        if isinstance(value, list):
            return _bracketed("[", [self.doc(item) for item in value], "]")
        if isinstance(value, tuple):
            if len(value) == 1:
                return concat("(", self.doc(value[0]), ",)")
            return _bracketed("(", [self.doc(item) for item in value], ")")
        if isinstance(value, (set, frozenset)):
            if not value:
                return text(f"{name}()")
            items = [self.doc(item) for item in sorted(value, key=repr)]
            return _bracketed(f"{name}({{", items, "})")

        slots = _slot_names(type(value))
        if slots:
            items = [self._field(slot, getattr(value, slot)) for slot in slots if hasattr(value, slot)]
            return _bracketed(f"{name}(", items, ")")

        return _repr_text(value)

    def _field(self, name: str, value: object) -> Doc:
        prefix = f"{name}="
        return concat(prefix, align(" " * len(prefix), self.doc(value)))


def _bracketed(opening: str, items: list[Doc], closing: str) -> Doc:
    if not items:
        return text(opening + closing)
    return group(
        opening,
        indent(_INDENT, softline(), join(concat(",", breakable()), items), if_break("", ",")),
        softline(),
        closing,
    )


def _repr_text(value: object) -> Doc:
    return text(" ".join(repr(value).splitlines()))


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__") or slot in names:
                continue
            names.append(slot)
    return names


def tree_sexp(node: SyntaxNode, max_width: int = 80) -> str:
    """S-expression view of a syntax tree: `(KEY_VALUE (SCALAR "a") "=" (SCALAR "1"))`."""
    return render(group(_sexp(node)), max_width)


def _sexp(element: SyntaxNode | SyntaxToken) -> Doc:
    if isinstance(element, SyntaxToken):
        return _quoted(element.text)
    parts: list[Doc] = [text(f"({element.kind.name}")]
    for child in element.children:
        if isinstance(child, SyntaxToken) and not child.text:
            continue
        parts.append(breakable())
        parts.append(_sexp(child))
    return group(indent(_INDENT, *parts), ")")


def _quoted(value: str) -> Doc:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\r", "\\r").replace("\n", "\\n")
    return text(f'"{escaped}"')


def tree_to_dict(node: SyntaxNode | SyntaxToken) -> dict[str, Any]:
    """JSON-ready view of a syntax tree (trivia excluded)."""
    rng = node.trimmed_range
    out: dict[str, Any] = {"kind": node.kind.name, "range": [rng.start, rng.end]}
    if isinstance(node, SyntaxToken):
        out["text"] = node.text
        return out
    out["children"] = [
        tree_to_dict(child)
        for child in node.children
        if not (isinstance(child, SyntaxToken) and not child.text)
    ]
    return out


__all__ = ["pformat", "tree_sexp", "tree_to_dict"]
