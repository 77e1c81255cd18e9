"""Parser modes and configuration options."""

from dataclasses import dataclass
from enum import StrEnum


class ParseMode(StrEnum):
    """Top-level parser behavior profile."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Feature flags controlling grammar compatibility and recovery behavior."""

    mode: ParseMode = ParseMode.STRICT
    allow_legacy_extra_rbrace: bool = False
    allow_legacy_missing_rbrace: bool = False
    allow_semicolon_terminator: bool = True
    allow_multiline_strings: bool = True

    @staticmethod
    def for_mode(mode: ParseMode) -> "ParserOptions":
        permissive = mode == ParseMode.PERMISSIVE
        return ParserOptions(
            mode=mode,
            allow_legacy_extra_rbrace=permissive,
            allow_legacy_missing_rbrace=permissive,
        )
