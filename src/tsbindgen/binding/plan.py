# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""The binding plan: every node type's resolved shape, ready to become an emission request.

Each node type resolves to exactly one shape:

- `ValueLeaf`: a terminal; the binding just wraps the node's source text.
- `CompoundNode`: a node with fields and/or positional children, each a `ResolvedField`.
- `UnionNode`: a super type, or a synthesized union for a field that accepts several types.

Field targets refer to other shapes by binding identifier only. Syntax trees are recursive
(an expression contains expressions), so shapes never embed each other.
"""

from __future__ import annotations

from typing import Annotated, Literal, Self

from pydantic import Field

from tsbindgen.core import BaseEnum, BasedModel
from tsbindgen.node_types.document import NodeType


class Cardinality(BaseEnum):
    """How many nodes a field accessor returns."""

    SINGLE = "single"
    OPTIONAL = "optional"
    REPEATED = "repeated"

    @classmethod
    def from_flags(cls, *, multiple: bool, required: bool) -> Self:
        """`multiple` wins over `required`: a repeated field is already allowed to be empty."""
        if multiple:
            return cls.REPEATED
        return cls.SINGLE if required else cls.OPTIONAL


class ShapeKind(BaseEnum):
    """The three node shapes."""

    LEAF = "leaf"
    COMPOUND = "compound"
    UNION = "union"


class NodeRef(BasedModel):
    """A field target that is a single node type."""

    ref: Literal["node"] = "node"
    identifier: str
    node_type: NodeType


class SynthesizedUnionRef(BasedModel):
    """A field target that is an anonymous union over several node types, in declared order."""

    ref: Literal["union"] = "union"
    identifier: str
    variants: tuple[str, ...]


ResolvedFieldTarget = Annotated[NodeRef | SynthesizedUnionRef, Field(discriminator="ref")]


class ResolvedField(BasedModel):
    """A field (or the positional children slot) of a compound node."""

    name: str
    cardinality: Cardinality
    target: ResolvedFieldTarget
    positional: bool = False
    """True for the synthetic slot built from a node's unnamed `children`."""


class ValueLeaf(BasedModel):
    shape: Literal["leaf"] = "leaf"
    node_type: NodeType


class CompoundNode(BasedModel):
    shape: Literal["compound"] = "compound"
    node_type: NodeType
    fields: tuple[ResolvedField, ...] = ()

    def field(self, name: str) -> ResolvedField | None:
        return next((field for field in self.fields if field.name == name), None)


class UnionNode(BasedModel):
    shape: Literal["union"] = "union"
    node_type: NodeType | None = None
    """The super type's own node type; `None` for a union synthesized for a field."""

    variants: tuple[str, ...]
    """Binding identifiers of the variants, in declared order, without duplicates."""


ResolvedNodeShape = Annotated[ValueLeaf | CompoundNode | UnionNode, Field(discriminator="shape")]


class BindingPlan(BasedModel):
    """The resolved shape of every node type, plus the unions synthesized for fields.

    `nodes` follows the node types document order; `synthesized_unions` follows first use.
    Both are keyed by binding identifier and never share a key.
    """

    grammar_name: str
    root: str | None = None
    """Binding identifier of the root node type, when it is known."""

    nodes: dict[str, ResolvedNodeShape]
    synthesized_unions: dict[str, UnionNode] = {}

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.nodes or identifier in self.synthesized_unions

    def __getitem__(self, identifier: str) -> ValueLeaf | CompoundNode | UnionNode:
        if identifier in self.nodes:
            return self.nodes[identifier]
        return self.synthesized_unions[identifier]

    def get(self, identifier: str) -> ValueLeaf | CompoundNode | UnionNode | None:
        return self[identifier] if identifier in self else None

    def shape_of(self, identifier: str) -> ShapeKind:
        """The shape kind of a node type or synthesized union.

        Raises:
            KeyError: if the plan has no such identifier.
        """
        return ShapeKind(self[identifier].shape)

    def leaves(self) -> tuple[str, ...]:
        return tuple(key for key, shape in self.nodes.items() if isinstance(shape, ValueLeaf))

    def compounds(self) -> tuple[str, ...]:
        return tuple(key for key, shape in self.nodes.items() if isinstance(shape, CompoundNode))

    def unions(self) -> tuple[str, ...]:
        """Super type identifiers; synthesized unions are in `synthesized_unions`."""
        return tuple(key for key, shape in self.nodes.items() if isinstance(shape, UnionNode))


__all__ = (
    "BindingPlan",
    "Cardinality",
    "CompoundNode",
    "NodeRef",
    "ResolvedField",
    "ResolvedFieldTarget",
    "ResolvedNodeShape",
    "ShapeKind",
    "SynthesizedUnionRef",
    "UnionNode",
    "ValueLeaf",
)
