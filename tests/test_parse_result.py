from jominifmt.format import BlankLine, Comment
from jominifmt.parser import ParseMode, ParserOptions, parse, parse_result


def test_parse_result_exposes_green_diagnostics_and_error_state() -> None:
    result = parse_result("a=1\n")

    assert result.green_root() is result.parsed.root
    assert result.diagnostics == []
    assert result.has_errors is False
    assert result.options == ParserOptions()


def test_parse_result_caches_syntax_root_and_annotations() -> None:
    result = parse_result("# head\na=1\n\n\nb=2\n")

    assert result.syntax_root() is result.syntax_root()
    assert result.annotations() is result.annotations()
    assert result.annotations() == [Comment(0, "# head"), BlankLine(11), BlankLine(12)]


def test_parse_result_strict_and_permissive_match_parse_contract() -> None:
    source = "a = { 1 }\n}\n"

    strict_result = parse_result(source)
    permissive_result = parse_result(source, mode=ParseMode.PERMISSIVE)

    assert strict_result.diagnostics == parse(source).diagnostics
    assert permissive_result.diagnostics == parse(source, mode=ParseMode.PERMISSIVE).diagnostics
    assert strict_result.has_errors is True
    assert permissive_result.has_errors is False
    assert permissive_result.options.allow_legacy_extra_rbrace


def test_parse_result_for_empty_source() -> None:
    result = parse_result("")

    assert result.has_errors is False
    assert result.syntax_root().text == ""
    assert result.annotations() == []
