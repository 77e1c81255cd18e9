import math

import pytest

from jominifmt.format.doc import (
    Align,
    Breakable,
    BreakMode,
    Concat,
    DocumentError,
    Group,
    IfBreak,
    Indent,
    Text,
    align,
    breakable,
    concat,
    flat_text,
    forced_group,
    group,
    if_break,
    indent,
    join,
)


def test_text_width_is_its_length() -> None:
    assert Text("hello").flat_width == 5
    assert Text("").flat_width == 0
    assert Text("hello").loose is False


@pytest.mark.parametrize("value", ["a\nb", "a\rb", "\n"])
def test_text_rejects_line_breaks(value: str) -> None:
    with pytest.raises(DocumentError):
        Text(value)


def test_breakable_width_and_looseness() -> None:
    assert Breakable().flat_width == 1
    assert Breakable("").flat_width == 0
    assert Breakable(", ").flat_width == 2
    assert Breakable().loose is True


def test_negative_deltas_are_rejected_at_construction() -> None:
    with pytest.raises(DocumentError):
        Breakable(" ", indent_delta=-1)
    with pytest.raises(DocumentError):
        Indent(-2, (Text("x"),))
    with pytest.raises(DocumentError):
        Align(-1, (Text("x"),))


def test_group_width_is_memoized_sum_of_children() -> None:
    doc = group("foo(", indent(2, breakable(""), "bar", breakable(","), "baz"), breakable(""), ")")
    assert doc.flat_width == len("foo(bar,baz)")
    assert doc.loose is False
    assert doc.forced is False


def test_forced_group_has_infinite_width_and_propagates() -> None:
    inner = forced_group("a", breakable(), "b")
    assert inner.flat_width == math.inf
    assert inner.forced is True

    outer = group("x", indent(4, inner))
    assert outer.forced is True
    assert outer.flat_width == math.inf
    assert outer.mode == BreakMode.AUTO


def test_looseness_stops_at_groups() -> None:
    loose = concat("a", breakable(), "b")
    assert loose.loose is True
    assert indent(2, loose).loose is True
    assert align(" ", loose).loose is True
    assert group(loose).loose is False


def test_if_break_measures_its_flat_branch() -> None:
    doc = if_break("", ",")
    assert doc.flat_width == 0
    assert doc.loose is True

    forced_when_flat = IfBreak(forced_group("x"), Text("y"))
    assert forced_when_flat.forced is True


def test_factories_convert_strings_to_text() -> None:
    doc = group("a", breakable(), "b")
    assert doc.children == (Text("a"), Breakable(), Text("b"))
    assert isinstance(doc, Group)


def test_concat_flattens_nested_concats() -> None:
    doc = concat("a", concat("b", concat("c")), "d")
    assert isinstance(doc, Concat)
    assert [child.value for child in doc.children if isinstance(child, Text)] == ["a", "b", "c", "d"]


def test_join_places_separator_between_parts() -> None:
    doc = join(",", ["a", "b", "c"])
    assert flat_text(doc) == "a,b,c"
    assert join(",", []).children == ()


def test_flat_text_uses_flat_branches_and_separators() -> None:
    doc = group("[", indent(2, breakable(""), join(concat(",", breakable()), ["1", "2"]), if_break("", ",")), "]")
    assert flat_text(doc) == "[1, 2]"


def test_flat_text_rejects_forced_documents() -> None:
    with pytest.raises(DocumentError):
        flat_text(group("a", forced_group("b")))


def test_align_indentation() -> None:
    assert Align(3, ()).indentation("    ") == "   "
    assert Align(0, ()).indentation("    ") == ""
    assert Align("# ", ()).indentation("  ") == "  # "


def test_documents_are_immutable() -> None:
    doc = Text("a")
    with pytest.raises(AttributeError):
        doc.value = "b"  # type: ignore[misc]
