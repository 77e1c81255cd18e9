"""Reading and writing script files with their original encoding."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Paradox script files are UTF-8 (often with a BOM) or, in older games, Windows-1252.
FALLBACK_ENCODING = "cp1252"


@dataclass(frozen=True, slots=True)
class SourceFile:
    path: Path
    text: str
    encoding: str
    had_bom: bool


def read_source(path: str | Path) -> SourceFile:
    """Read a script file, detecting a UTF-8 BOM and falling back to cp1252."""
    file_path = Path(path)
    raw = file_path.read_bytes()
    try:
        decoded = raw.decode("utf-8")
        encoding = "utf-8"
    except UnicodeDecodeError:
        decoded = raw.decode(FALLBACK_ENCODING, errors="surrogateescape")
        encoding = FALLBACK_ENCODING

    had_bom = decoded.startswith("\ufeff")
    text = decoded[1:] if had_bom else decoded
    logger.debug("Read %s (%s%s, %d characters)", file_path, encoding, ", BOM" if had_bom else "", len(text))
    return SourceFile(path=file_path, text=text, encoding=encoding, had_bom=had_bom)


def write_source(source: SourceFile, text: str) -> None:
    """Write `text` back to `source.path` with the encoding and BOM it was read with."""
    prefix = "\ufeff" if source.had_bom else ""
    # newline="" keeps "\n" as-is on every platform.
    with source.path.open("w", encoding=source.encoding, errors="surrogateescape", newline="") as handle:
        handle.write(prefix + text)
    logger.debug("Wrote %s (%s, %d characters)", source.path, source.encoding, len(text))


__all__ = ["FALLBACK_ENCODING", "SourceFile", "read_source", "write_source"]
