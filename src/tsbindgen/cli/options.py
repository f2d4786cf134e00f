# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Options and helpers shared by the CLI commands."""

from __future__ import annotations

import sys

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, NoReturn

import cyclopts

from pydantic import ValidationError
from rich.markup import escape

from tsbindgen.common.logging import setup_logger, verbosity_to_level
from tsbindgen.config.settings import TsBindgenSettings
from tsbindgen.exceptions import SchemaInconsistencyError, TsBindgenError
from tsbindgen.generate import generate


if TYPE_CHECKING:
    from rich.console import Console

    from tsbindgen.emit.backend import Artifact


ForLanguage = Annotated[
    str | None,
    cyclopts.Parameter(
        name=["--for-language", "-l"], help="Target language of the generated code."
    ),
]
InputDirectory = Annotated[
    Path | None,
    cyclopts.Parameter(
        name=["--input-directory", "-i"],
        help="Directory holding grammar.json and node-types.json (default: src).",
    ),
]
OutputDirectory = Annotated[
    Path | None,
    cyclopts.Parameter(
        name=["--output-directory", "-o"],
        help="Directory to write into (default: bindings/<language>).",
    ),
]
ParentGrammars = Annotated[
    list[Path] | None,
    cyclopts.Parameter(
        name=["--parent", "-p"],
        help="grammar.json of a grammar named by `inherits`. Repeat for each ancestor, nearest first.",
    ),
]
Verbosity = Annotated[
    int,
    cyclopts.Parameter(
        name=["--verbose", "-v"], count=True, help="Log more. Repeat for debug output."
    ),
]


def load_settings(
    console: Console,
    *,
    input_directory: Path | None = None,
    output_directory: Path | None = None,
    for_language: str | None = None,
    parents: list[Path] | None = None,
    verbose: int = 0,
) -> TsBindgenSettings:
    """Build settings with command line flags on top, then configure logging from them."""
    overrides: dict[str, Any] = {
        "input_directory": input_directory,
        "output_directory": output_directory,
        "for_language": for_language,
        "parent_grammars": tuple(parents) if parents else None,
    }
    try:
        settings = TsBindgenSettings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        console.print(f"[bold red]Invalid configuration:[/bold red] {escape(str(e))}")
        sys.exit(1)
    _ = setup_logger(
        level=verbosity_to_level(verbose, settings.log_level_number), rich=settings.rich_logging
    )
    return settings


def report_error(console: Console, error: TsBindgenError) -> NoReturn:
    """Print a tsbindgen error with its details and suggestions, then exit with status 1."""
    console.print(f"[bold red]Error:[/bold red] {escape(error.message)}")
    if isinstance(error, SchemaInconsistencyError):
        for index, problem in enumerate(error.inconsistencies, 1):
            console.print(f"  {index}. {escape(str(problem))}")
    else:
        for key, value in error.details.items():
            if isinstance(value, list | tuple):
                console.print(f"  [dim]{escape(key)}:[/dim]")
                for item in value:
                    console.print(f"    - {escape(str(item))}")
            else:
                console.print(f"  [dim]{escape(key)}:[/dim] {escape(str(value))}")
    if error.suggestions:
        console.print("\n[yellow]Suggestions:[/yellow]")
        for suggestion in error.suggestions:
            console.print(f"  • {escape(suggestion)}")
    sys.exit(1)


def write_artifact(
    console: Console, settings: TsBindgenSettings, artifact: Artifact, *, stdout: bool
) -> None:
    """Generate one artifact and write it, or print it when `stdout` is set."""
    try:
        generated = generate(settings, artifact, write=not stdout)
    except TsBindgenError as e:
        report_error(console, e)
    if stdout:
        console.print(
            generated.content, end="", markup=False, highlight=False, emoji=False, soft_wrap=True
        )
        return
    path = escape(str(generated.path))
    console.print(f"[green]✅[/green] {artifact.as_title} file written to [cyan]{path}[/cyan]")


__all__ = (
    "ForLanguage",
    "InputDirectory",
    "OutputDirectory",
    "ParentGrammars",
    "Verbosity",
    "load_settings",
    "report_error",
    "write_artifact",
)
