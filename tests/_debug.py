"""Shared debug printers for lexer/parser/format tests.

Set PRINT_TOKENS, PRINT_CST, PRINT_DIAGNOSTICS or PRINT_SOURCE to 1 and run
pytest with `-s` to see them.
"""

from __future__ import annotations

import os

from jominifmt.cst import SyntaxNode
from jominifmt.diagnostics import Diagnostic
from jominifmt.dump import tree_sexp
from jominifmt.lexer import Token, token_text


def _flag(name: str) -> bool:
    return os.getenv(name, "0").lower() in {"1", "true", "yes", "on"}


PRINT_TOKENS = _flag("PRINT_TOKENS")
PRINT_CST = _flag("PRINT_CST")
PRINT_SOURCE = _flag("PRINT_SOURCE")
PRINT_DIAGNOSTICS = _flag("PRINT_DIAGNOSTICS")


def debug_print_source(test_name: str, source: str) -> None:
    if not PRINT_SOURCE:
        return
    print(f"\n===== {test_name} SOURCE =====")
    print(source)


def debug_dump_tokens(test_name: str, source: str, tokens: list[Token]) -> None:
    if not PRINT_TOKENS:
        return
    debug_print_source(test_name, source)
    print(f"\n===== {test_name} TOKENS =====")
    for index, tok in enumerate(tokens):
        text = token_text(source, tok)
        print(f"{index:03d} {tok.kind.name:<24} range={tok.range.as_tuple()} flags={tok.flags} text={text!r}")


def debug_dump_cst(test_name: str, root: SyntaxNode) -> None:
    if not PRINT_CST:
        return
    print(f"\n===== {test_name} CST =====")
    print(tree_sexp(root))


def debug_dump_diagnostics(test_name: str, diagnostics: list[Diagnostic]) -> None:
    if not PRINT_DIAGNOSTICS:
        return
    print(f"===== {test_name} DIAGNOSTICS =====")
    if not diagnostics:
        print("(none)")
        return
    for diagnostic in diagnostics:
        print(diagnostic)
