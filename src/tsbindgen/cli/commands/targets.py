# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""List the registered emission backends."""

from __future__ import annotations

from cyclopts import App
from rich.console import Console
from rich.table import Table

from tsbindgen.emit.registry import available_targets, get_backend


console = Console(markup=True, emoji=True)
app = App("targets", help="List the target languages tsbindgen can generate.", console=console)


@app.default
def targets() -> None:
    """Show every target language with its file extension and artifacts."""
    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Target", style="cyan", no_wrap=True)
    table.add_column("Extension", style="white")
    table.add_column("Artifacts", style="green")
    for target in available_targets():
        backend = get_backend(target)
        table.add_row(
            target,
            f".{backend.file_extension}",
            ", ".join(str(artifact) for artifact in backend.artifacts()),
        )
    console.print(table)


if __name__ == "__main__":
    app()
