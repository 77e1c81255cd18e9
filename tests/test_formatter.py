import pytest

from jominifmt.format.comments import BlankLine, Comment
from jominifmt.format.doc import BreakMode, DocumentError, text
from jominifmt.format.formatter import Formatter
from jominifmt.format.options import FormatOptions


def test_flush_renders_root_group() -> None:
    formatter = Formatter()
    formatter.text("a")
    formatter.breakable()
    formatter.text("b")

    assert formatter.flush() == "a b"
    assert "".join(formatter.output) == "a b"


def test_flush_uses_configured_width() -> None:
    formatter = Formatter(FormatOptions(max_width=2))
    formatter.text("a")
    formatter.breakable()
    formatter.text("b")

    assert formatter.flush() == "a\nb"


def test_group_and_indent_context_managers() -> None:
    formatter = Formatter(FormatOptions(max_width=10))
    formatter.text("items")
    with formatter.group():
        formatter.text(" {")
        with formatter.indent():
            for item in ("alpha", "beta"):
                formatter.breakable()
                formatter.text(item)
        formatter.breakable()
        formatter.text("}")

    assert formatter.depth == 0
    assert formatter.flush() == "items {\n    alpha\n    beta\n}"


def test_open_and_close_scopes_explicitly() -> None:
    formatter = Formatter()
    formatter.open_group(BreakMode.FORCED)
    formatter.text("a")
    formatter.open_indent(2)
    formatter.breakable()
    formatter.text("b")
    formatter.close_scope()
    formatter.open_align("> ")
    formatter.breakable()
    formatter.text("c")
    formatter.close_scope()
    formatter.close_group()

    assert formatter.flush() == "a\n  b\n> c"


def test_scope_mismatches_raise() -> None:
    formatter = Formatter()
    with pytest.raises(DocumentError):
        formatter.close_group()
    with pytest.raises(DocumentError):
        formatter.close_scope()

    formatter.open_indent()
    with pytest.raises(DocumentError):
        formatter.close_group()
    formatter.close_scope()

    formatter.open_group()
    with pytest.raises(DocumentError):
        formatter.close_scope()


def test_flush_with_open_scope_raises() -> None:
    formatter = Formatter()
    formatter.open_group()
    with pytest.raises(DocumentError, match="open scopes"):
        formatter.flush()


def test_flush_twice_raises() -> None:
    formatter = Formatter()
    formatter.text("a")
    formatter.flush()
    with pytest.raises(DocumentError):
        formatter.flush()
    with pytest.raises(DocumentError):
        formatter.text("b")


def test_context_manager_closes_scope_when_body_raises() -> None:
    formatter = Formatter()
    with pytest.raises(RuntimeError):
        with formatter.group():
            formatter.text("a")
            raise RuntimeError("boom")
    assert formatter.depth == 0


def test_break_parent_forces_innermost_group() -> None:
    formatter = Formatter()
    with formatter.group():
        formatter.text("a")
        formatter.breakable()
        with formatter.indent(2):
            formatter.break_parent()
        formatter.text("b")

    assert formatter.flush() == "a\nb"


def test_blank_line_has_no_indentation() -> None:
    formatter = Formatter()
    with formatter.indent():
        formatter.text("a")
        formatter.blank_line()
        formatter.breakable()
        formatter.text("b")

    assert formatter.flush() == "a\n\n    b"


def test_if_break_and_append() -> None:
    formatter = Formatter(FormatOptions(max_width=3))
    formatter.append(text("[1"))
    formatter.breakable("")
    formatter.append("2")
    formatter.if_break("", ",")
    formatter.text("]")

    assert formatter.flush() == "[1\n2,]"


def test_negative_scopes_are_rejected() -> None:
    formatter = Formatter()
    with pytest.raises(DocumentError):
        formatter.open_indent(-1)
    with pytest.raises(DocumentError):
        formatter.open_align(-1)


def test_annotation_queue_is_consumed_in_position_order() -> None:
    annotations = [
        Comment(30, "# later"),
        BlankLine(5),
        Comment(2, "# first"),
        Comment(12, "# trailing", trailing=True),
    ]
    formatter = Formatter(annotations=annotations)

    assert formatter.take_annotations_before(6) == [Comment(2, "# first"), BlankLine(5)]
    assert formatter.take_trailing_comments_before(20) == [Comment(12, "# trailing", trailing=True)]
    assert formatter.take_comments_through(20) == []
    assert formatter.has_pending_annotations is True
    assert formatter.remaining_comments() == [Comment(30, "# later")]
    assert formatter.has_pending_annotations is False


def test_take_trailing_comments_stops_at_own_line_comment() -> None:
    formatter = Formatter(annotations=[Comment(1, "# own"), Comment(5, "# trailing", trailing=True)])

    assert formatter.take_trailing_comments_before(10) == []
    assert formatter.take_comments_through(10) == [Comment(1, "# own"), Comment(5, "# trailing", trailing=True)]


def test_take_comments_through_drops_blank_lines() -> None:
    formatter = Formatter(annotations=[BlankLine(1), Comment(3, "# c"), BlankLine(8)])

    assert formatter.take_comments_through(5) == [Comment(3, "# c")]
    assert formatter.take_annotations_before(10) == [BlankLine(8)]


def test_take_comments_through_includes_the_offset_itself() -> None:
    formatter = Formatter(annotations=[Comment(4, "# at"), Comment(5, "# after")])

    assert formatter.take_annotations_before(4) == []
    assert formatter.take_comments_through(4) == [Comment(4, "# at")]
    assert formatter.remaining_comments() == [Comment(5, "# after")]


def test_comment_ends_its_line() -> None:
    formatter = Formatter()
    formatter.text("a = ")
    formatter.comment(Comment(4, "# why"))
    formatter.text("1")

    assert formatter.flush() == "a = # why\n1"
