import pytest

from jominifmt.format import FormatOptions
from jominifmt.parser import ParseMode, ParserOptions, parse_result
from jominifmt.pipeline import run_format


def test_run_format_reuses_provided_parse_result() -> None:
    parsed = parse_result("a=1\n")

    result = run_format("ignored", parse=parsed)

    assert result.parse is parsed
    assert result.diagnostics == parsed.diagnostics
    assert result.formatted_text == "a = 1\n"
    assert result.changed is True


def test_run_format_rejects_parse_with_mode_or_options() -> None:
    parsed = parse_result("a=1\n")

    with pytest.raises(ValueError, match="Pass either parse or options/mode, not both"):
        run_format("a=1\n", parse=parsed, mode=ParseMode.PERMISSIVE)
    with pytest.raises(ValueError, match="Pass either parse or options/mode, not both"):
        run_format("a=1\n", ParserOptions(), parse=parsed)


def test_run_format_leaves_formatted_source_unchanged() -> None:
    result = run_format("a = 1\n")

    assert result.formatted_text == "a = 1\n"
    assert result.changed is False
    assert result.diagnostics == []
    assert result.has_errors is False


def test_run_format_keeps_source_with_parse_errors() -> None:
    source = "a = { 1 }\n}\n"

    result = run_format(source)

    assert result.parse.has_errors
    assert result.has_errors
    assert result.formatted_text == source
    assert result.changed is False
    assert [diagnostic.code for diagnostic in result.diagnostics] == ["PARSER_UNEXPECTED_TOKEN"]


def test_run_format_in_permissive_mode_keeps_warnings() -> None:
    result = run_format("a = { 1 }\n}\n", mode=ParseMode.PERMISSIVE)

    assert result.has_errors is False
    assert result.formatted_text == "a = { 1 }\n"
    assert [diagnostic.severity for diagnostic in result.diagnostics] == ["warning"]


def test_run_format_passes_format_options() -> None:
    result = run_format("a={b=1 c=2}\n", format_options=FormatOptions(max_width=8, indent_width=2))
    assert result.formatted_text == "a = {\n  b = 1\n  c = 2\n}\n"
