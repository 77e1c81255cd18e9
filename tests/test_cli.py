from pathlib import Path

import pytest

from jominifmt.cli import EXIT_CHANGED, EXIT_ERROR, EXIT_OK, build_parser, main
from jominifmt.format import FormatOptions


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8", newline="")
    return path


def test_format_prints_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, "a.txt", "a=1 b={c=2}\n")

    assert main(["format", str(path)]) == EXIT_OK
    assert capsys.readouterr().out == "a = 1\nb = { c = 2 }\n"
    assert path.read_text(encoding="utf-8") == "a=1 b={c=2}\n"


def test_format_respects_width_options(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, "a.txt", "b={c=2 d=3}\n")

    assert main(["format", "--print-width", "10", "--indent-width", "2", str(path)]) == EXIT_OK
    assert capsys.readouterr().out == "b = {\n  c = 2\n  d = 3\n}\n"


def test_width_options_default_to_format_options(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    args = build_parser().parse_args(["format", "a.txt"])
    defaults = FormatOptions()

    assert args.print_width == defaults.max_width == 100
    assert args.indent_width == defaults.indent_width == 4

    path = _write(tmp_path, "a.txt", "b={c=2 d=3}\n")
    assert main(["format", str(path)]) == EXIT_OK
    assert capsys.readouterr().out == "b = { c = 2 d = 3 }\n"


def test_write_rewrites_changed_files_only(tmp_path: Path) -> None:
    messy = _write(tmp_path, "messy.txt", "a=1\n")
    clean = _write(tmp_path, "clean.txt", "a = 1\n")
    clean_mtime = clean.stat().st_mtime_ns

    assert main(["write", "--no-progress", str(messy), str(clean)]) == EXIT_OK
    assert messy.read_text(encoding="utf-8") == "a = 1\n"
    assert clean.stat().st_mtime_ns == clean_mtime


def test_check_reports_files_that_would_change(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    messy = _write(tmp_path, "messy.txt", "a=1\n")
    clean = _write(tmp_path, "clean.txt", "a = 1\n")

    assert main(["check", "--no-progress", str(clean)]) == EXIT_OK
    assert main(["check", "--no-progress", str(messy), str(clean)]) == EXIT_CHANGED
    assert capsys.readouterr().out == f"would reformat {messy}\n"
    assert messy.read_text(encoding="utf-8") == "a=1\n"


def test_parse_errors_exit_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, "broken.txt", "a = { b=c\n")

    assert main(["format", str(path)]) == EXIT_ERROR
    assert capsys.readouterr().out == ""

    assert main(["format", "--mode", "permissive", str(path)]) == EXIT_OK
    assert capsys.readouterr().out == "a = { b = c }\n"


def test_parse_errors_are_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = _write(tmp_path, "broken.txt", "a = 1\nb = { c\n")

    assert main(["check", str(path)]) == EXIT_ERROR
    errors = [record.getMessage() for record in caplog.records if record.levelname == "ERROR"]
    assert errors
    assert all(message.startswith(f"{path}:") for message in errors)


def test_missing_file_exits_with_error(tmp_path: Path) -> None:
    assert main(["format", str(tmp_path / "missing.txt")]) == EXIT_ERROR


def test_dump_prints_sexp(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, "a.txt", "a=1\n")

    assert main(["dump", str(path)]) == EXIT_OK
    assert capsys.readouterr().out == (
        '(ROOT (SOURCE_FILE (STATEMENT_LIST (KEY_VALUE (SCALAR "a") "=" (SCALAR "1")))))\n'
    )


def test_json_prints_tree(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, "a.txt", "a=1\n")

    assert main(["json", str(path)]) == EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith('{\n  "kind": "ROOT"')
    assert '"text": "="' in out


def test_invalid_width_is_a_usage_error(tmp_path: Path) -> None:
    path = _write(tmp_path, "a.txt", "a=1\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["format", "--print-width", "0", str(path)])
    assert excinfo.value.code == 2


def test_missing_command_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2
