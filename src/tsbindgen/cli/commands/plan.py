# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Print the resolved binding plan."""

from __future__ import annotations

from typing import Annotated, Literal

import cyclopts

from cyclopts import App
from pydantic_core import to_json
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tsbindgen.binding.plan import BindingPlan, CompoundNode, UnionNode, ValueLeaf
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
app = App("plan", help="Print the resolved shape of every node type.", console=console)


def _describe(shape: ValueLeaf | CompoundNode | UnionNode) -> str:
    match shape:
        case CompoundNode(fields=fields):
            return "\n".join(
                f"{field.name}: {field.target.identifier} ({field.cardinality})"
                for field in fields
            )
        case UnionNode(variants=variants):
            return " | ".join(variants)
        case _:
            return ""


def plan_table(plan: BindingPlan) -> Table:
    """One row per node type, then one per synthesized union."""
    table = Table(title=f"Binding plan for {plan.grammar_name}", show_lines=True)
    table.add_column("Identifier", style="cyan", no_wrap=True)
    table.add_column("Shape", style="magenta")
    table.add_column("Kind", style="green")
    table.add_column("Details", style="white")
    for identifier, shape in plan.nodes.items():
        marker = " (root)" if identifier == plan.root else ""
        table.add_row(
            f"{identifier}{marker}",
            shape.shape,
            escape(str(shape.node_type)) if shape.node_type else "",
            escape(_describe(shape)),
        )
    for identifier, union in plan.synthesized_unions.items():
        table.add_row(identifier, "union (synthesized)", "", escape(_describe(union)))
    return table


@app.default
def plan(
    *,
    input_directory: InputDirectory = None,
    parent: ParentGrammars = None,
    output_format: Annotated[
        Literal["table", "json"],
        cyclopts.Parameter(name=["--format", "-f"], help="Output format."),
    ] = "table",
    verbose: Verbosity = 0,
) -> None:
    """Unify the inputs and print the binding plan as a table or as JSON."""
    settings = load_settings(
        console, input_directory=input_directory, parents=parent, verbose=verbose
    )
    try:
        binding_plan = load_plan(settings)
    except TsBindgenError as e:
        report_error(console, e)
    if output_format == "json":
        console.print(
            to_json(binding_plan, indent=2, by_alias=True).decode(),
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        return
    console.print(plan_table(binding_plan))


if __name__ == "__main__":
    app()
