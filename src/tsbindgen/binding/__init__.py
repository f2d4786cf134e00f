# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Unify grammar and node types documents into a binding plan, and flatten it for emission."""

from types import MappingProxyType
from typing import TYPE_CHECKING

from tsbindgen.core.lazy import create_lazy_getattr


if TYPE_CHECKING:
    from tsbindgen.binding.identifiers import Identifier, binding_identifier, is_valid_identifier
    from tsbindgen.binding.inconsistencies import Inconsistency, InconsistencyKind
    from tsbindgen.binding.plan import (
        BindingPlan,
        Cardinality,
        CompoundNode,
        NodeRef,
        ResolvedField,
        ShapeKind,
        SynthesizedUnionRef,
        UnionNode,
        ValueLeaf,
    )
    from tsbindgen.binding.request import EmissionRequest, build_request
    from tsbindgen.binding.rule_table import LayeredRuleTable
    from tsbindgen.binding.unifier import SchemaUnifier, unify


_dynamic_imports: MappingProxyType[str, tuple[str, str]] = MappingProxyType({
    "BindingPlan": (__spec__.parent, "plan"),
    "Cardinality": (__spec__.parent, "plan"),
    "CompoundNode": (__spec__.parent, "plan"),
    "EmissionRequest": (__spec__.parent, "request"),
    "Identifier": (__spec__.parent, "identifiers"),
    "Inconsistency": (__spec__.parent, "inconsistencies"),
    "InconsistencyKind": (__spec__.parent, "inconsistencies"),
    "LayeredRuleTable": (__spec__.parent, "rule_table"),
    "NodeRef": (__spec__.parent, "plan"),
    "ResolvedField": (__spec__.parent, "plan"),
    "SchemaUnifier": (__spec__.parent, "unifier"),
    "ShapeKind": (__spec__.parent, "plan"),
    "SynthesizedUnionRef": (__spec__.parent, "plan"),
    "UnionNode": (__spec__.parent, "plan"),
    "ValueLeaf": (__spec__.parent, "plan"),
    "binding_identifier": (__spec__.parent, "identifiers"),
    "build_request": (__spec__.parent, "request"),
    "is_valid_identifier": (__spec__.parent, "identifiers"),
    "unify": (__spec__.parent, "unifier"),
})


__getattr__ = create_lazy_getattr(_dynamic_imports, globals(), __name__)


__all__ = (
    "BindingPlan",
    "Cardinality",
    "CompoundNode",
    "EmissionRequest",
    "Identifier",
    "Inconsistency",
    "InconsistencyKind",
    "LayeredRuleTable",
    "NodeRef",
    "ResolvedField",
    "SchemaUnifier",
    "ShapeKind",
    "SynthesizedUnionRef",
    "UnionNode",
    "ValueLeaf",
    "binding_identifier",
    "build_request",
    "is_valid_identifier",
    "unify",
)


def __dir__() -> list[str]:
    return list(__all__)
