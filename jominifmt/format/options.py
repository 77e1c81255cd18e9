"""Formatting policy shared by the formatter and the Jomini lowerings."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormatOptions:
    max_width: int = 100
    indent_width: int = 4

    # Blank-line runs between statements collapse to at most this many lines.
    max_blank_lines: int = 1
    # Spaces between code and a comment that trails it on the same line.
    comment_padding: int = 1
    # Blocks that contain a nested block statement always break.
    break_nested_blocks: bool = True

    def __post_init__(self) -> None:
        if self.max_width < 1:
            raise ValueError("max_width must be at least 1")
        if self.indent_width < 0:
            raise ValueError("indent_width cannot be negative")
        if self.max_blank_lines < 0:
            raise ValueError("max_blank_lines cannot be negative")
        if self.comment_padding < 0:
            raise ValueError("comment_padding cannot be negative")


__all__ = ["FormatOptions"]
