# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""tsbindgen CLI entrypoint.

Commands are registered and lazy-loaded from here.
"""

from __future__ import annotations

import sys

from cyclopts import App, Parameter
from rich.console import Console
from rich.markup import escape

from tsbindgen._version import __version__
from tsbindgen.cli.options import report_error
from tsbindgen.exceptions import TsBindgenError


console = Console(markup=True, emoji=True)
app = App(
    "tsbindgen",
    help="tsbindgen: typed bindings for tree-sitter grammars.",
    default_parameter=Parameter(negative=()),
    version=__version__,
    console=console,
)
app.command("tsbindgen.cli.commands.constants:app", name="constants")
app.command("tsbindgen.cli.commands.bindings:app", name="bindings", alias="wrapper")
app.command("tsbindgen.cli.commands.check:app", name="check")
app.command("tsbindgen.cli.commands.plan:app", name="plan")
app.command("tsbindgen.cli.commands.targets:app", name="targets")


def main() -> None:
    """Main CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(130)
    except TsBindgenError as e:
        report_error(console, e)
    except Exception as e:
        console.print(f"[bold red]Fatal error: {escape(str(e))}[/bold red]")
        console.print("\n[red]Traceback:[/red]")
        console.print_exception(max_frames=10)
        sys.exit(1)


if __name__ == "__main__":
    main()


__all__ = ("app", "main")
