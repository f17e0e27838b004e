# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""recursive-regex CLI entrypoint.

Commands are registered from here.
"""

from __future__ import annotations

import sys

from cyclopts import App, Parameter
from rich.console import Console

from recursive_regex._version import __version__
from recursive_regex.cli.commands.match import app as match_app


console = Console(markup=True, emoji=False)
app = App(
    "recursive-regex",
    help="recursive-regex: regular expressions for balanced, nested delimiters.",
    default_parameter=Parameter(negative=()),
    version=__version__,
    console=console,
)
app.command(match_app)


def main() -> None:
    """Main CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[bold red]Fatal error: {e}[/bold red]")
        console.print("\n[red]Traceback:[/red]")
        console.print_exception(max_frames=10)
        sys.exit(1)


if __name__ == "__main__":
    main()


__all__ = ("app", "main")
