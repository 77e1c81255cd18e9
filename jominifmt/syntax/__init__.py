"""Syntax kinds."""

from jominifmt.syntax.kind import ASSIGNMENT_OPERATORS, SyntaxKind

__all__ = ["ASSIGNMENT_OPERATORS", "SyntaxKind"]
