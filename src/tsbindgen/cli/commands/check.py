# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Check that a grammar and its node types agree, without generating anything."""

from __future__ import annotations

from cyclopts import App
from rich.console import Console
from rich.markup import escape

from tsbindgen.cli.options import (
    InputDirectory,
    ParentGrammars,
    Verbosity,
    load_settings,
    report_error,
)
from tsbindgen.exceptions import TsBindgenError
from tsbindgen.generate import load_plan


console = Console(markup=True, emoji=True)
app = App(
    "check",
    help="Check that grammar.json and node-types.json are structurally consistent.",
    console=console,
)


@app.default
def check(
    *,
    input_directory: InputDirectory = None,
    parent: ParentGrammars = None,
    verbose: Verbosity = 0,
) -> None:
    """Unify the two documents and report every inconsistency found.

    Exits with status 1 when anything disagrees; every problem is listed, not just the first.
    """
    settings = load_settings(
        console, input_directory=input_directory, parents=parent, verbose=verbose
    )
    try:
        plan = load_plan(settings)
    except TsBindgenError as e:
        report_error(console, e)
    console.print(
        f"[green]✅[/green] The [bold]{escape(plan.grammar_name)}[/bold] grammar is consistent: "
        f"{len(plan.nodes)} node types, {len(plan.synthesized_unions)} synthesized unions"
    )


if __name__ == "__main__":
    app()
