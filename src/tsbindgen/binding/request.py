# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Flatten a binding plan into an emission request.

The emission request is what a backend renders: named types with named accessors, already in
final order. `build_request()` makes the last naming decisions (PascalCase type names,
snake_case accessor names, UPPER_CASE constant names, each made unique in unit order) and
nothing else. It cannot fail on a plan the unifier produced.

Unit order is fixed: unions (super types and synthesized unions) first, then compound nodes,
then leaves, each group sorted by binding identifier. Two runs over unchanged input produce
identical requests and therefore identical output.
"""

from __future__ import annotations

import logging

from collections.abc import Iterator
from typing import Final, Literal, cast

import textcase

from tsbindgen.binding.identifiers import is_valid_identifier
from tsbindgen.binding.plan import (
    BindingPlan,
    Cardinality,
    CompoundNode,
    ShapeKind,
    UnionNode,
    ValueLeaf,
)
from tsbindgen.core import BasedModel, unique_names
from tsbindgen.node_types.document import NodeType


logger = logging.getLogger(__name__)

TYPE_NAME_FALLBACK_PREFIX: Final[str] = "Node"
FIELD_CONSTANT_PREFIX: Final[str] = "FIELD_"
KIND_CONSTANT_PREFIX: Final[str] = "KIND_"


class VariantSpec(BasedModel):
    """One variant of a union unit."""

    identifier: str
    type_name: str
    shape: ShapeKind
    kind: str | None = None
    """The raw node kind string; `None` when the variant is itself a synthesized union."""

    named: bool = True
    concrete_kinds: tuple[str, ...] = ()
    """Kind strings of the concrete nodes this variant stands for, for dispatch on `node.type`."""


class FieldSpec(BasedModel):
    """One accessor of a compound unit."""

    name: str
    """The field name as tree-sitter knows it (`child_by_field_name` argument)."""

    accessor: str
    """The accessor method name."""

    cardinality: Cardinality
    target_identifier: str
    target_type_name: str
    target_shape: ShapeKind
    target_kinds: tuple[str, ...] = ()
    """Concrete kind strings the target accepts."""

    positional: bool = False
    """Set for the accessor over unnamed children, which has no tree-sitter field name."""


class UnionUnit(BasedModel):
    unit: Literal["union"] = "union"
    identifier: str
    type_name: str
    kind: str | None = None
    """The super type's raw kind string; `None` for synthesized unions."""

    synthesized: bool = False
    variants: tuple[VariantSpec, ...]
    concrete_kinds: tuple[str, ...] = ()
    """Every concrete kind reachable through the variants, nested unions flattened."""


class CompoundUnit(BasedModel):
    unit: Literal["compound"] = "compound"
    identifier: str
    type_name: str
    kind: str
    named: bool = True
    fields: tuple[FieldSpec, ...] = ()


class LeafUnit(BasedModel):
    unit: Literal["leaf"] = "leaf"
    identifier: str
    type_name: str
    kind: str
    named: bool = True


class KindConstant(BasedModel):
    """A constant holding one node kind string."""

    constant_name: str
    identifier: str
    kind: str
    named: bool
    shape: ShapeKind


class FieldConstant(BasedModel):
    """A constant holding one field name."""

    constant_name: str
    name: str


class EmissionRequest(BasedModel):
    """Everything a backend needs, in the order it should be emitted."""

    grammar_name: str
    root: str | None = None
    """Binding identifier of the root node type, if known."""

    root_type_name: str | None = None
    unions: tuple[UnionUnit, ...] = ()
    compounds: tuple[CompoundUnit, ...] = ()
    leaves: tuple[LeafUnit, ...] = ()
    kind_constants: tuple[KindConstant, ...] = ()
    field_constants: tuple[FieldConstant, ...] = ()

    def units(self) -> Iterator[UnionUnit | CompoundUnit | LeafUnit]:
        """Every unit in emission order."""
        yield from self.unions
        yield from self.compounds
        yield from self.leaves

    def type_name_of(self, identifier: str) -> str | None:
        return next((unit.type_name for unit in self.units() if unit.identifier == identifier), None)


def _type_name(identifier: str) -> str:
    name = textcase.pascal(identifier)
    return name if is_valid_identifier(name) else f"{TYPE_NAME_FALLBACK_PREFIX}{name}"


def _constant_name(prefix: str, name: str) -> str:
    return f"{prefix}{textcase.constant(name)}"


def concrete_kinds(plan: BindingPlan, identifier: str) -> tuple[str, ...]:
    """Kind strings of the concrete nodes `identifier` can be, in declared order.

    Super types never appear in a tree, so nested unions are flattened. A union that (wrongly)
    contains itself is only expanded once.
    """
    kinds: dict[str, None] = {}
    seen: set[str] = set()
    stack = [identifier]
    while stack:
        current = stack.pop()
        if current in seen:
            continue
        seen.add(current)
        shape = plan[current]
        if isinstance(shape, UnionNode):
            stack.extend(reversed(shape.variants))
        else:
            kinds.setdefault(shape.node_type.name)
    return tuple(kinds)


def build_request(plan: BindingPlan) -> EmissionRequest:
    """Translate `plan` into an `EmissionRequest`."""
    union_ids = sorted([*plan.unions(), *plan.synthesized_unions])
    compound_ids = sorted(plan.compounds())
    leaf_ids = sorted(plan.leaves())
    ordered = [*union_ids, *compound_ids, *leaf_ids]
    type_names = dict(
        zip(ordered, unique_names([_type_name(identifier) for identifier in ordered]), strict=True)
    )

    def node_type_of(identifier: str) -> NodeType | None:
        return plan[identifier].node_type  # type: ignore[union-attr]

    def variant(identifier: str) -> VariantSpec:
        node_type = node_type_of(identifier)
        return VariantSpec(
            identifier=identifier,
            type_name=type_names[identifier],
            shape=plan.shape_of(identifier),
            kind=node_type.name if node_type else None,
            named=node_type.named if node_type else True,
            concrete_kinds=concrete_kinds(plan, identifier),
        )

    unions: list[UnionUnit] = []
    for identifier in union_ids:
        union = cast(UnionNode, plan[identifier])
        unions.append(
            UnionUnit(
                identifier=identifier,
                type_name=type_names[identifier],
                kind=union.node_type.name if union.node_type else None,
                synthesized=union.node_type is None,
                variants=tuple(variant(name) for name in union.variants),
                concrete_kinds=concrete_kinds(plan, identifier),
            )
        )

    compounds: list[CompoundUnit] = []
    for identifier in compound_ids:
        node = cast(CompoundNode, plan.nodes[identifier])
        accessors = unique_names([textcase.snake(field.name) for field in node.fields])
        compounds.append(
            CompoundUnit(
                identifier=identifier,
                type_name=type_names[identifier],
                kind=node.node_type.name,
                named=node.node_type.named,
                fields=tuple(
                    FieldSpec(
                        name=field.name,
                        accessor=accessor,
                        cardinality=field.cardinality,
                        target_identifier=field.target.identifier,
                        target_type_name=type_names[field.target.identifier],
                        target_shape=plan.shape_of(field.target.identifier),
                        target_kinds=concrete_kinds(plan, field.target.identifier),
                        positional=field.positional,
                    )
                    for field, accessor in zip(node.fields, accessors, strict=True)
                ),
            )
        )

    leaves: list[LeafUnit] = []
    for identifier in leaf_ids:
        leaf = cast(ValueLeaf, plan.nodes[identifier])
        leaves.append(
            LeafUnit(
                identifier=identifier,
                type_name=type_names[identifier],
                kind=leaf.node_type.name,
                named=leaf.node_type.named,
            )
        )

    node_ids = [identifier for identifier in ordered if identifier in plan.nodes]
    kind_names = unique_names([_constant_name(KIND_CONSTANT_PREFIX, identifier) for identifier in node_ids])
    kind_constants = tuple(
        KindConstant(
            constant_name=constant_name,
            identifier=identifier,
            kind=plan.nodes[identifier].node_type.name,  # type: ignore[union-attr]
            named=plan.nodes[identifier].node_type.named,  # type: ignore[union-attr]
            shape=plan.shape_of(identifier),
        )
        for identifier, constant_name in zip(node_ids, kind_names, strict=True)
    )

    field_names = sorted({
        field.name
        for identifier in compound_ids
        for field in plan.nodes[identifier].fields  # type: ignore[union-attr]
        if not field.positional
    })
    field_constants = tuple(
        FieldConstant(constant_name=constant_name, name=name)
        for name, constant_name in zip(
            field_names,
            unique_names([_constant_name(FIELD_CONSTANT_PREFIX, name) for name in field_names]),
            strict=True,
        )
    )

    request = EmissionRequest(
        grammar_name=plan.grammar_name,
        root=plan.root,
        root_type_name=type_names.get(plan.root) if plan.root else None,
        unions=tuple(unions),
        compounds=tuple(compounds),
        leaves=tuple(leaves),
        kind_constants=kind_constants,
        field_constants=field_constants,
    )
    logger.debug(
        "Built emission request for %s: %d unions, %d compounds, %d leaves",
        request.grammar_name,
        len(request.unions),
        len(request.compounds),
        len(request.leaves),
    )
    return request


__all__ = (
    "CompoundUnit",
    "EmissionRequest",
    "FieldConstant",
    "FieldSpec",
    "KindConstant",
    "LeafUnit",
    "UnionUnit",
    "VariantSpec",
    "build_request",
    "concrete_kinds",
)
