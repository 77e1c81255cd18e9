"""Lexer."""

from jominifmt.lexer.lexer import Lexer, token_text
from jominifmt.lexer.tokens import (
    Token,
    TokenFlags,
    TokenKind,
    Trivia,
    TriviaKind,
    TriviaPiece,
    trivia_kind_from_token_kind,
)

__all__ = [
    "Lexer",
    "Token",
    "TokenFlags",
    "TokenKind",
    "Trivia",
    "TriviaKind",
    "TriviaPiece",
    "token_text",
    "trivia_kind_from_token_kind",
]
