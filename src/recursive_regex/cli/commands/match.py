# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Match command: find balanced delimited regions in text."""

from __future__ import annotations

import re
import sys

from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import cyclopts

from cyclopts import App
from pydantic_core import to_json
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from recursive_regex.common.logging import setup_logger
from recursive_regex.config.settings import RecursiveRegexSettings, get_settings
from recursive_regex.core.enum import BaseEnum
from recursive_regex.core.matches import RegexMatch
from recursive_regex.engine.patterns import MarkerPattern, compile_pattern
from recursive_regex.exceptions import ConfigurationError, RecursiveRegexError
from recursive_regex.matcher import RecursiveRegex


console = Console(markup=True, emoji=False)
err_console = Console(stderr=True, markup=True, emoji=False, soft_wrap=True)
app = App("match", help="Find balanced, possibly nested, delimited regions.", console=console)

EXIT_MATCHED = 0
EXIT_NO_MATCH = 1
EXIT_CONFIG_ERROR = 2


class OutputFormat(BaseEnum):
    """How matches are printed."""

    TABLE = "table"
    JSON = "json"
    TEXT = "text"


def _marker(source: str | None, *, literal: bool) -> MarkerPattern | None:
    """Plain strings are matched literally, so regex sources are compiled here."""
    if source is None or literal:
        return source
    return compile_pattern(source, re.NOFLAG)


def _read_input(text: str | None, file: Path | None) -> str:
    if text is not None and file is not None:
        raise ConfigurationError(
            "Pass either --text or --file, not both", suggestions=["Drop one of the two options."]
        )
    if text is not None:
        return text
    if file is not None:
        try:
            return file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read input file: {e.strerror}", details={"field": str(file)}
            ) from e
    return sys.stdin.read()


def _print_error(error: RecursiveRegexError) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", highlight=False)
    for suggestion in error.suggestions:
        err_console.print(f"  [yellow]•[/yellow] {escape(suggestion)}", highlight=False)


def _print_table(matches: Sequence[RegexMatch], capture_group_name: str | None) -> None:
    table = Table(show_header=True, header_style="bold blue", title="Matches")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Start", style="white", justify="right")
    table.add_column("End", style="white", justify="right")
    table.add_column("Match", style="cyan")
    if capture_group_name:
        table.add_column(capture_group_name, style="green")
    for index, found in enumerate(matches):
        row: list[str | Text] = [str(index), str(found.start), str(found.end), Text(found.text)]
        if capture_group_name:
            row.append(Text(found.groups.get(capture_group_name) or ""))
        table.add_row(*row)
    console.print(table)


def _print_matches(
    matches: Sequence[RegexMatch], output_format: OutputFormat, capture_group_name: str | None
) -> None:
    match output_format:
        case OutputFormat.JSON:
            payload = [found.serialize_for_cli() for found in matches]
            console.out(to_json(payload, indent=2).decode("utf-8"), highlight=False)
        case OutputFormat.TEXT:
            for found in matches:
                console.out(found.text, highlight=False)
        case OutputFormat.TABLE:
            if matches:
                _print_table(matches, capture_group_name)
            else:
                console.print("[yellow]No matches found.[/yellow]")


def _build_matcher(
    settings: RecursiveRegexSettings,
    start_marker: str,
    end_marker: str,
    *,
    literal: bool,
    prepended: str | None,
    appended: str | None,
    inverse_match: str | None,
    capture_group_name: str | None,
    overrides: dict[str, bool | None],
) -> RecursiveRegex:
    flags = settings.matcher_defaults() | {
        name: value for name, value in overrides.items() if value is not None
    }
    return RecursiveRegex(
        _marker(start_marker, literal=literal),  # type: ignore[arg-type]
        _marker(end_marker, literal=literal),  # type: ignore[arg-type]
        prepended=_marker(prepended, literal=literal),
        appended=_marker(appended, literal=literal),
        inverse_match=_marker(inverse_match, literal=literal),
        capture_group_name=capture_group_name,
        **flags,
    )


@app.default
def match(
    start_marker: Annotated[str, cyclopts.Parameter(help="Pattern opening a delimited region")],
    end_marker: Annotated[str, cyclopts.Parameter(help="Pattern closing a delimited region")],
    *,
    text: Annotated[
        str | None, cyclopts.Parameter(name=["--text", "-t"], help="Text to search")
    ] = None,
    file: Annotated[
        Path | None,
        cyclopts.Parameter(name=["--file", "-f"], help="File to search; stdin if neither is given"),
    ] = None,
    prepended: Annotated[
        str | None, cyclopts.Parameter(help="Pattern required directly before each opening")
    ] = None,
    appended: Annotated[
        str | None, cyclopts.Parameter(help="Pattern required directly after each closing")
    ] = None,
    capture_group_name: Annotated[
        str | None, cyclopts.Parameter(help="Name of the group capturing the delimited text")
    ] = None,
    inverse_match: Annotated[
        str | None, cyclopts.Parameter(help="Match this pattern outside every delimited region")
    ] = None,
    global_search: Annotated[
        bool | None, cyclopts.Parameter(help="Match nested regions, not only top-level ones")
    ] = None,
    ignore_case: Annotated[bool | None, cyclopts.Parameter(help="Ignore letter case")] = None,
    multi_line: Annotated[
        bool | None, cyclopts.Parameter(help="`^` and `$` match at line breaks")
    ] = None,
    dot_all: Annotated[bool | None, cyclopts.Parameter(help="`.` matches line breaks")] = None,
    unicode: Annotated[
        bool | None, cyclopts.Parameter(help="Unicode semantics for character classes")
    ] = None,
    reverse: Annotated[bool, cyclopts.Parameter(help="Count match indexes from the end")] = False,
    start: Annotated[int, cyclopts.Parameter(help="Index of the first match to print")] = 0,
    stop: Annotated[
        int | None, cyclopts.Parameter(help="Index of the last match to print")
    ] = None,
    literal: Annotated[
        bool, cyclopts.Parameter(help="Treat every pattern argument as literal text")
    ] = False,
    output_format: Annotated[
        OutputFormat, cyclopts.Parameter(name=["--output-format", "-o"], help="Output format")
    ] = OutputFormat.TABLE,
) -> None:
    """Find balanced delimited regions and print them.

    Exits with 0 when something matched, 1 when nothing did, and 2 when the
    patterns or options are invalid.
    """
    settings = get_settings()
    setup_logger(
        level=settings.logging.level_number,
        rich=settings.logging.use_rich,
        rich_options=settings.logging.rich_options,
    )
    try:
        matcher = _build_matcher(
            settings,
            start_marker,
            end_marker,
            literal=literal,
            prepended=prepended,
            appended=appended,
            inverse_match=inverse_match,
            capture_group_name=capture_group_name,
            overrides={
                "global_search": global_search,
                "case_sensitive": None if ignore_case is None else not ignore_case,
                "multi_line": multi_line,
                "dot_all": dot_all,
                "unicode": unicode,
            },
        )
        content = _read_input(text, file)
        matches = matcher.get_matches(content, start=start, stop=stop, reverse=reverse) or []
    except ConfigurationError as e:
        _print_error(e)
        sys.exit(EXIT_CONFIG_ERROR)

    _print_matches(matches, output_format, matcher.capture_group_name)
    sys.exit(EXIT_MATCHED if matches else EXIT_NO_MATCH)


__all__ = ("EXIT_CONFIG_ERROR", "EXIT_MATCHED", "EXIT_NO_MATCH", "OutputFormat", "app", "match")
