"""Diagnostics."""

from jominifmt.diagnostics.codes import (
    LEXER_UNTERMINATED_STRING,
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_VALUE,
    PARSER_LEGACY_EXTRA_RBRACE,
    PARSER_LEGACY_MISSING_RBRACE,
    PARSER_UNEXPECTED_TOKEN,
    DiagnosticSpec,
)
from jominifmt.diagnostics.diagnostic import Diagnostic, Severity
from jominifmt.diagnostics.report import collect_diagnostics, has_errors, render_diagnostic

__all__ = [
    "LEXER_UNTERMINATED_STRING",
    "PARSER_EXPECTED_TOKEN",
    "PARSER_EXPECTED_VALUE",
    "PARSER_LEGACY_EXTRA_RBRACE",
    "PARSER_LEGACY_MISSING_RBRACE",
    "PARSER_UNEXPECTED_TOKEN",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "has_errors",
    "render_diagnostic",
]
