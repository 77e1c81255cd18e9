"""Unified syntax kinds for parser and CST."""

from enum import IntEnum

from jominifmt.lexer import TokenKind


class SyntaxKind(IntEnum):
    """Language syntax vocabulary (tokens + nodes).

    Token kinds share their values with `TokenKind`.
    """

    TOMBSTONE = 0
    EOF = 1

    # Trivia tokens
    WHITESPACE = 10
    NEWLINE = 11
    COMMENT = 12

    # Lexical tokens
    IDENTIFIER = 20
    STRING = 21
    INT = 22
    FLOAT = 23

    EQUAL = 30
    EQUAL_EQUAL = 31
    NOT_EQUAL = 32
    LESS_THAN_OR_EQUAL = 33
    GREATER_THAN_OR_EQUAL = 34
    LESS_THAN = 35
    GREATER_THAN = 36
    QUESTION_EQUAL = 37

    COLON = 40
    SEMICOLON = 41
    COMMA = 42
    DOT = 43
    SLASH = 44
    BACKSLASH = 45
    AT = 46

    PLUS = 50
    MINUS = 51
    STAR = 52
    PERCENT = 53
    CARET = 54
    PIPE = 55
    AMP = 56
    QUESTION = 57
    BANG = 58
    OTHER = 59

    LBRACE = 60
    RBRACE = 61
    LBRACKET = 62
    RBRACKET = 63
    LPAREN = 64
    RPAREN = 65

    # Node kinds
    ROOT = 1000
    ERROR = 1001
    SOURCE_FILE = 1002
    STATEMENT_LIST = 1003
    KEY_VALUE = 1004
    BLOCK = 1005
    SCALAR = 1006
    TAGGED_BLOCK_VALUE = 1007

    @property
    def is_node(self) -> bool:
        return self.value >= SyntaxKind.ROOT.value

    @staticmethod
    def from_token_kind(kind: TokenKind) -> "SyntaxKind":
        try:
            return SyntaxKind(kind.value)
        except ValueError:
            raise ValueError(f"Unsupported TokenKind mapping: {kind!r}") from None


ASSIGNMENT_OPERATORS: frozenset[SyntaxKind] = frozenset(
    {
        SyntaxKind.EQUAL,
        SyntaxKind.EQUAL_EQUAL,
        SyntaxKind.NOT_EQUAL,
        SyntaxKind.LESS_THAN_OR_EQUAL,
        SyntaxKind.GREATER_THAN_OR_EQUAL,
        SyntaxKind.LESS_THAN,
        SyntaxKind.GREATER_THAN,
        SyntaxKind.QUESTION_EQUAL,
    }
)
