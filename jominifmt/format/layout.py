"""Layout renderer: turns a doc tree into text within a width budget.

A group is rendered flat when its whole flat width fits on the rest of the
current line (`col + flat_width <= max_width`); otherwise its breakables become
newlines and the groups inside it decide again at the column they are reached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jominifmt.format.doc import (
    Align,
    Breakable,
    BreakMode,
    Concat,
    Doc,
    DocumentError,
    Group,
    IfBreak,
    Indent,
    Text,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Fragment:
    doc: Doc
    indentation: str
    flat: bool


def render(document: Doc, max_width: int, out: list[str] | None = None) -> str:
    """Render `document` into a string, wrapping at `max_width` columns.

    Rendered chunks are also appended to `out` when given.
    """
    if max_width < 1:
        raise ValueError(f"max_width must be at least 1, got {max_width}")
    if document.loose:
        raise DocumentError("Breakable or IfBreak outside of any group")

    chunks: list[str] = []
    col = 0
    flat_groups = 0
    broken_groups = 0

    stack: list[_Fragment] = [_Fragment(document, "", False)]

    while stack:
        fragment = stack.pop()
        doc, indentation, flat = fragment.doc, fragment.indentation, fragment.flat

        if isinstance(doc, Text):
            chunks.append(doc.value)
            col += len(doc.value)
            continue

        if isinstance(doc, Breakable):
            if flat:
                chunks.append(doc.separator)
                col += len(doc.separator)
            else:
                line_start = indentation + " " * doc.indent_delta
                chunks.append("\n" + line_start)
                col = len(line_start)
            continue

        if isinstance(doc, Concat):
            # push in reverse so the first child is rendered first
            for child in reversed(doc.children):
                stack.append(_Fragment(child, indentation, flat))
            continue

        if isinstance(doc, Group):
            if flat:
                child_flat = True
            elif doc.mode == BreakMode.FORCED:
                child_flat = False
            else:
                child_flat = col + doc.flat_width <= max_width

            if child_flat:
                flat_groups += 1
            else:
                broken_groups += 1
            for child in reversed(doc.children):
                stack.append(_Fragment(child, indentation, child_flat))
            continue

        if isinstance(doc, Indent):
            nested = indentation + " " * doc.delta
            for child in reversed(doc.children):
                stack.append(_Fragment(child, nested, flat))
            continue

        if isinstance(doc, Align):
            nested = doc.indentation(indentation)
            for child in reversed(doc.children):
                stack.append(_Fragment(child, nested, flat))
            continue

        if isinstance(doc, IfBreak):
            stack.append(_Fragment(doc.flat if flat else doc.broken, indentation, flat))
            continue

        raise TypeError(f"Not a document node: {doc!r}")

    logger.debug(
        "Rendered %d chunks (%d flat groups, %d broken groups, width %d)",
        len(chunks),
        flat_groups,
        broken_groups,
        max_width,
    )
    if out is not None:
        out.extend(chunks)
    return "".join(chunks)


__all__ = ["render"]
