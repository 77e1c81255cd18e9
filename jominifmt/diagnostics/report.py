"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from jominifmt.diagnostics.diagnostic import Diagnostic


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    return sorted(diagnostics, key=lambda d: d.range.start)


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def render_diagnostic(diagnostic: Diagnostic, source: str, path: str = "<input>") -> str:
    """Render a diagnostic as `path:line:col: severity[code] message`."""
    line = source.count("\n", 0, diagnostic.range.start) + 1
    line_start = source.rfind("\n", 0, diagnostic.range.start) + 1
    column = diagnostic.range.start - line_start + 1
    rendered = f"{path}:{line}:{column}: {diagnostic.severity}[{diagnostic.code}] {diagnostic.message}"
    if diagnostic.hint:
        rendered += f" (hint: {diagnostic.hint})"
    return rendered
