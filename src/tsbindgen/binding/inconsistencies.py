# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Structural inconsistencies between a grammar and its node types.

These are collected by the unifier, never raised one at a time. The unifier raises a single
`tsbindgen.exceptions.SchemaInconsistencyError` carrying all of them.
"""

from __future__ import annotations

from typing import override

from tsbindgen.core import BaseEnum, BasedModel


class InconsistencyKind(BaseEnum):
    """What went wrong."""

    UNRESOLVED_SYMBOL = "unresolved_symbol"
    """A grammar symbol names no rule or external token in the grammar or its ancestors."""

    UNRESOLVED_NODE_TYPE = "unresolved_node_type"
    """A field type or subtype names a node type the node types document does not define."""

    CLASSIFICATION_MISMATCH = "classification_mismatch"
    """The two documents disagree on whether a node is a terminal, a compound or a union."""

    EMPTY_CARDINALITY = "empty_cardinality"
    """A field or children slot declares `multiple`/`required` but lists no types."""

    UNRESOLVED_SUPERTYPE = "unresolved_supertype"
    """A grammar supertype has no super type definition in the node types document."""

    DUPLICATE_DEFINITION = "duplicate_definition"
    """The same `(type, named)` node type is defined twice."""


class Inconsistency(BasedModel):
    """A single problem, with enough context to find it in the source documents."""

    kind: InconsistencyKind
    identifier: str
    """The offending name: a symbol, a node type or a field."""

    context: str
    """Where it was found, e.g. `rule 'module'` or `field 'body' of 'module'`."""

    @override
    def __str__(self) -> str:
        return f"{self.kind.as_title}: {self.identifier!r} ({self.context})"


__all__ = ("Inconsistency", "InconsistencyKind")
