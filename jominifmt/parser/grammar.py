"""Jomini grammar routines that emit CST events."""

from jominifmt.diagnostics import (
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_VALUE,
    PARSER_LEGACY_EXTRA_RBRACE,
    PARSER_LEGACY_MISSING_RBRACE,
    PARSER_UNEXPECTED_TOKEN,
)
from jominifmt.lexer import TokenKind
from jominifmt.parser.parser import CompletedMarker, Parser, ParserProgress
from jominifmt.syntax import SyntaxKind

ASSIGNMENT_TOKENS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.EQUAL,
        TokenKind.EQUAL_EQUAL,
        TokenKind.NOT_EQUAL,
        TokenKind.LESS_THAN_OR_EQUAL,
        TokenKind.GREATER_THAN_OR_EQUAL,
        TokenKind.LESS_THAN,
        TokenKind.GREATER_THAN,
        TokenKind.QUESTION_EQUAL,
    }
)

_NON_SCALAR_TOKENS: frozenset[TokenKind] = frozenset(
    {TokenKind.EOF, TokenKind.LBRACE, TokenKind.RBRACE, *ASSIGNMENT_TOKENS}
)


def parse_source_file(parser: Parser) -> None:
    root = parser.start()
    parse_statement_list(parser, stop_at=frozenset({TokenKind.EOF}))
    root.complete(parser, SyntaxKind.SOURCE_FILE)


def parse_statement_list(parser: Parser, stop_at: frozenset[TokenKind]) -> CompletedMarker:
    marker = parser.start()
    progress = ParserProgress()

    recovery_set = set(stop_at)
    if parser.options.allow_semicolon_terminator:
        recovery_set.add(TokenKind.SEMICOLON)

    while not parser.at(TokenKind.EOF) and not parser.at_set(stop_at):
        progress.assert_progressing(parser)

        if parser.options.allow_semicolon_terminator and parser.eat(TokenKind.SEMICOLON):
            continue
        if parse_statement(parser):
            continue

        parser.error(PARSER_UNEXPECTED_TOKEN, f"Unexpected token {parser.current.name}")
        _recover(parser, frozenset(recovery_set))

    return marker.complete(parser, SyntaxKind.STATEMENT_LIST)


def _recover(parser: Parser, recovery_set: frozenset[TokenKind]) -> None:
    """Consume tokens into an ERROR node until a safe token or a new line."""
    marker = parser.start()
    parser.bump()
    while not parser.at(TokenKind.EOF):
        if parser.at_set(recovery_set) or parser.has_preceding_line_break:
            break
        parser.bump()
    marker.complete(parser, SyntaxKind.ERROR)


def parse_statement(parser: Parser) -> bool:
    if parser.at(TokenKind.RBRACE):
        if parser.options.allow_legacy_extra_rbrace:
            parser.error(PARSER_LEGACY_EXTRA_RBRACE)
            parser.bump()
            return True
        return False

    if parser.at(TokenKind.LBRACE):
        parse_block(parser)
        return True

    key_or_value = parse_scalar(parser)
    if key_or_value is None:
        return False

    if parser.at_set(ASSIGNMENT_TOKENS):
        marker = key_or_value.precede(parser)
        parser.bump()
        if parser.at(TokenKind.EOF) or parser.at(TokenKind.RBRACE):
            parser.error(PARSER_EXPECTED_VALUE)
        else:
            parse_value(parser)
        marker.complete(parser, SyntaxKind.KEY_VALUE)
        return True

    if parser.at(TokenKind.LBRACE):
        # Implicit block assignment: `foo { ... }`.
        marker = key_or_value.precede(parser)
        parse_block(parser)
        marker.complete(parser, SyntaxKind.KEY_VALUE)

    return True


def parse_value(parser: Parser) -> bool:
    if parser.at(TokenKind.LBRACE):
        parse_block(parser)
        return True

    scalar = parse_scalar(parser)
    if scalar is None:
        parser.error(PARSER_EXPECTED_VALUE)
        return False

    if parser.at(TokenKind.LBRACE):
        tagged = scalar.precede(parser)
        parse_block(parser)
        tagged.complete(parser, SyntaxKind.TAGGED_BLOCK_VALUE)

    return True


def parse_block(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    if not parser.eat(TokenKind.LBRACE):
        parser.error(PARSER_EXPECTED_TOKEN, "Expected token LBRACE")
        return marker.complete(parser, SyntaxKind.BLOCK)

    parse_statement_list(parser, stop_at=frozenset({TokenKind.RBRACE, TokenKind.EOF}))

    if parser.at(TokenKind.RBRACE):
        parser.bump()
    elif parser.at(TokenKind.EOF) and parser.options.allow_legacy_missing_rbrace:
        parser.error(PARSER_LEGACY_MISSING_RBRACE)
    else:
        parser.error(PARSER_EXPECTED_TOKEN, "Expected token RBRACE")

    return marker.complete(parser, SyntaxKind.BLOCK)


def parse_scalar(parser: Parser) -> CompletedMarker | None:
    """Parse adjacent tokens (no trivia between them) as one scalar.

    `scope:root.owner`, `-1` and `1444.11.11` are single scalars; a quoted
    string always stands alone.
    """
    if parser.current in _NON_SCALAR_TOKENS:
        return None

    marker = parser.start()
    first_kind = parser.current
    parser.bump()

    if first_kind == TokenKind.STRING:
        return marker.complete(parser, SyntaxKind.SCALAR)

    while parser.current not in _NON_SCALAR_TOKENS and parser.current != TokenKind.STRING:
        if parser.has_preceding_trivia:
            break
        if parser.options.allow_semicolon_terminator and parser.at(TokenKind.SEMICOLON):
            break
        parser.bump()

    return marker.complete(parser, SyntaxKind.SCALAR)
