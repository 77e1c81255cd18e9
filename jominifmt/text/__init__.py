"""Source offsets and ranges."""

from jominifmt.text.text import TextRange, slice_text_range

__all__ = ["TextRange", "slice_text_range"]
