"""Command line interface: format, check and inspect Jomini script files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from tqdm import tqdm

from jominifmt.diagnostics import render_diagnostic
from jominifmt.dump import tree_sexp, tree_to_dict
from jominifmt.format import FormatOptions
from jominifmt.handlers import HandlerRegistry, default_registry
from jominifmt.io import read_source, write_source
from jominifmt.parser import ParseMode, ParserOptions
from jominifmt.pipeline import JominiParseResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CHANGED = 1
EXIT_ERROR = 2

COMMANDS: tuple[str, ...] = ("format", "write", "check", "dump", "json")
# Commands that print file contents to stdout never show a progress bar.
_PRINTING_COMMANDS = frozenset({"format", "dump", "json"})
_DEFAULTS = FormatOptions()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jominifmt", description="Format Jomini / Clausewitz script files")
    subparsers = parser.add_subparsers(dest="command", required=True)

    helps = {
        "format": "Print the formatted files to stdout",
        "write": "Format the files in place",
        "check": "Exit with status 1 if any file would be reformatted",
        "dump": "Print the syntax tree as an s-expression",
        "json": "Print the syntax tree as JSON",
    }
    for command in COMMANDS:
        sub = subparsers.add_parser(command, help=helps[command])
        sub.add_argument("paths", nargs="+", type=Path, help="Script files to process")
        sub.add_argument(
            "--print-width",
            type=int,
            default=_DEFAULTS.max_width,
            help=f"Maximum line width (default: {_DEFAULTS.max_width})",
        )
        sub.add_argument(
            "--indent-width",
            type=int,
            default=_DEFAULTS.indent_width,
            help=f"Spaces per indentation level (default: {_DEFAULTS.indent_width})",
        )
        sub.add_argument(
            "--mode",
            type=ParseMode,
            choices=list(ParseMode),
            default=ParseMode.STRICT,
            help="Parser mode; permissive accepts legacy brace mistakes (default: strict)",
        )
        sub.add_argument("--no-progress", action="store_true", help="Disable the tqdm progress bar")
        verbosity = sub.add_mutually_exclusive_group()
        verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
        verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        format_options = FormatOptions(max_width=args.print_width, indent_width=args.indent_width)
    except ValueError as exc:
        parser.error(str(exc))

    registry = default_registry(ParserOptions.for_mode(args.mode), format_options)
    paths: list[Path] = args.paths
    show_progress = len(paths) > 1 and not args.no_progress and args.command not in _PRINTING_COMMANDS
    iterator = tqdm(paths, desc=args.command, unit="file") if show_progress else paths

    status = EXIT_OK
    changed = 0
    for path in iterator:
        file_status = _run_file(args.command, path, registry, format_options, sys.stdout)
        if file_status == EXIT_CHANGED:
            changed += 1
        status = max(status, file_status)

    if args.command == "check":
        logger.info("%d of %d file(s) would be reformatted", changed, len(paths))
    return status


def _configure_logging(*, verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _run_file(
    command: str,
    path: Path,
    registry: HandlerRegistry,
    format_options: FormatOptions,
    stdout: TextIO,
) -> int:
    try:
        source = read_source(path)
    except OSError as exc:
        logger.error("%s: %s", path, exc.strerror or exc)
        return EXIT_ERROR

    handler = registry.for_path(path)

    if command in ("dump", "json"):
        parsed = handler.parse(source.text)
        if _report(parsed, path):
            return EXIT_ERROR
        root = parsed.syntax_root()
        if command == "dump":
            stdout.write(tree_sexp(root, format_options.max_width) + "\n")
        else:
            stdout.write(json.dumps(tree_to_dict(root), indent=2) + "\n")
        return EXIT_OK

    result = handler.format(source.text)
    _report(result.parse, path)
    if result.has_errors:
        return EXIT_ERROR

    if command == "format":
        stdout.write(result.formatted_text)
        return EXIT_OK

    if command == "write":
        if result.changed:
            write_source(source, result.formatted_text)
            logger.info("Formatted %s", path)
        return EXIT_OK

    if result.changed:
        stdout.write(f"would reformat {path}\n")
        return EXIT_CHANGED
    return EXIT_OK


def _report(parsed: JominiParseResult, path: Path) -> bool:
    """Log the parse diagnostics; True when there are errors."""
    for diagnostic in parsed.diagnostics:
        message = render_diagnostic(diagnostic, parsed.source_text, str(path))
        if diagnostic.severity == "error":
            logger.error(message)
        else:
            logger.warning(message)
    return parsed.has_errors


__all__ = ["COMMANDS", "EXIT_CHANGED", "EXIT_ERROR", "EXIT_OK", "build_parser", "main"]
