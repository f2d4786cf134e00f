# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Write the node kind and field name constants file."""

from __future__ import annotations

from typing import Annotated

import cyclopts

from cyclopts import App
from rich.console import Console

from tsbindgen.cli.options import (
    ForLanguage,
    InputDirectory,
    OutputDirectory,
    ParentGrammars,
    Verbosity,
    load_settings,
    write_artifact,
)
from tsbindgen.emit.backend import Artifact


console = Console(markup=True, emoji=True)
app = App("constants", help="Write node kind and field name constants.", console=console)


@app.default
def constants(
    *,
    for_language: ForLanguage = None,
    input_directory: InputDirectory = None,
    output_directory: OutputDirectory = None,
    parent: ParentGrammars = None,
    stdout: Annotated[
        bool, cyclopts.Parameter(help="Print the file instead of writing it.")
    ] = False,
    verbose: Verbosity = 0,
) -> None:
    """Write `nodes.<ext>` with one constant per node kind and per field name."""
    settings = load_settings(
        console,
        input_directory=input_directory,
        output_directory=output_directory,
        for_language=for_language,
        parents=parent,
        verbose=verbose,
    )
    write_artifact(console, settings, Artifact.CONSTANTS, stdout=stdout)


if __name__ == "__main__":
    app()
