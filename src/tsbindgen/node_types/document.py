# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""The node types document model: a validated, immutable `node-types.json`.

Terminology (tree-sitter's, used throughout tsbindgen):

- **node type**: a `(type, named)` pair. The same `type` string with a different `named` flag is
  a different kind of node: `"if"` the keyword token is not `if` the statement.
- **super type**: an abstract node type listing its `subtypes`; it never appears in a tree.
- **regular**: a concrete node type. A regular definition with neither `fields` nor `children`
  is a **terminal**: it wraps source text and nothing else.

In the file every definition is a flat object:

```json
{"type": "module", "named": true, "root": true,
 "fields": {"name": {"multiple": false, "required": true,
                     "types": [{"type": "identifier", "named": true}]}}}
```

`NodeTypeDefinition` reshapes that into a `NodeType` plus a `kind` that is either a
`SuperTypeDefinition` or a `RegularDefinition`, so consumers can match on the kind instead of
testing which keys were present.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Self, override

from pydantic import ConfigDict, Field, RootModel, model_validator

from tsbindgen.binding.identifiers import binding_identifier
from tsbindgen.core import BasedModel


class NodeType(BasedModel):
    """The identity of one kind of node: its type string and whether it is named."""

    name: str = Field(alias="type")
    """The node type string, e.g. `"function_definition"` or `"("`."""

    named: bool
    """Whether the node is named (a grammar rule) rather than anonymous (literal token text)."""

    @classmethod
    def of(cls, name: str, *, named: bool = True) -> Self:
        """Build a node type without going through the JSON alias."""
        return cls(type=name, named=named)

    @property
    def identifier(self) -> str:
        """The binding identifier, before the unifier numbers apart any clash with another node."""
        return binding_identifier(self.name, named=self.named)

    @override
    def __str__(self) -> str:
        return self.name if self.named else f'"{self.name}"'


class NodeChildren(BasedModel):
    """The child or field slot of a regular node: how many, whether required, of which types."""

    multiple: bool
    required: bool
    types: tuple[NodeType, ...] = ()

    @property
    def has_types(self) -> bool:
        return bool(self.types)


class SuperTypeDefinition(BasedModel):
    """An abstract union over `subtypes`, in declared order."""

    subtypes: tuple[NodeType, ...]


class RegularDefinition(BasedModel):
    """A concrete node type. With no `fields` and no `children` it is a terminal."""

    fields: dict[str, NodeChildren] | None = None
    children: NodeChildren | None = None

    @property
    def is_terminal(self) -> bool:
        """Terminal means both slots are absent; an empty `fields` object still counts as present."""
        return self.fields is None and self.children is None

    def field_names(self) -> tuple[str, ...]:
        """Declared field names, in document order."""
        return tuple(self.fields or ())


class NodeTypeDefinition(BasedModel):
    """One entry of `node-types.json`."""

    node_type: NodeType
    kind: SuperTypeDefinition | RegularDefinition
    root: bool = False
    """Set by tree-sitter on the start rule's node type."""

    extra: bool = False
    """Set by tree-sitter on node types that come from `extras` and may appear anywhere."""

    @model_validator(mode="before")
    @classmethod
    def _from_flat_entry(cls, data: Any) -> Any:
        """Accept the flat JSON shape tree-sitter writes."""
        if not isinstance(data, dict) or "node_type" in data:
            return data
        kind: SuperTypeDefinition | RegularDefinition
        if "subtypes" in data:
            if "fields" in data or "children" in data:
                raise ValueError(
                    f"node type {data.get('type')!r} declares both subtypes and fields/children"
                )
            kind = SuperTypeDefinition.model_validate({"subtypes": data["subtypes"]})
        else:
            kind = RegularDefinition.model_validate({
                "fields": data.get("fields"),
                "children": data.get("children"),
            })
        return {
            "node_type": {"type": data.get("type"), "named": data.get("named")},
            "kind": kind,
            "root": data.get("root", False),
            "extra": data.get("extra", False),
        }

    @property
    def name(self) -> str:
        return self.node_type.name

    @property
    def named(self) -> bool:
        return self.node_type.named

    @property
    def is_super_type(self) -> bool:
        return isinstance(self.kind, SuperTypeDefinition)

    @property
    def is_terminal(self) -> bool:
        return isinstance(self.kind, RegularDefinition) and self.kind.is_terminal

    @property
    def is_regular(self) -> bool:
        """A concrete node type with fields or children (a non-terminal)."""
        return isinstance(self.kind, RegularDefinition) and not self.kind.is_terminal


class NodeTypesDocument(RootModel[tuple[NodeTypeDefinition, ...]]):
    """The whole `node-types.json`: a flat list of definitions, in document order.

    Lookups by classification return definitions in document order; the `*_names` helpers
    return sorted, deduplicated names (a name can be defined once named and once anonymous).
    """

    model_config = ConfigDict(frozen=True)

    @property
    def definitions(self) -> tuple[NodeTypeDefinition, ...]:
        return self.root

    @override
    def __iter__(self) -> Iterator[NodeTypeDefinition]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def super_type_definitions(self) -> tuple[NodeTypeDefinition, ...]:
        return tuple(definition for definition in self.root if definition.is_super_type)

    def regular_definitions(self) -> tuple[NodeTypeDefinition, ...]:
        """Concrete definitions with fields or children."""
        return tuple(definition for definition in self.root if definition.is_regular)

    def terminal_definitions(self) -> tuple[NodeTypeDefinition, ...]:
        return tuple(definition for definition in self.root if definition.is_terminal)

    def node_type_names(self) -> tuple[str, ...]:
        return tuple(sorted({definition.name for definition in self.root}))

    def super_type_names(self) -> tuple[str, ...]:
        return tuple(sorted({definition.name for definition in self.super_type_definitions()}))

    def regular_names(self) -> tuple[str, ...]:
        return tuple(sorted({definition.name for definition in self.regular_definitions()}))

    def terminal_names(self) -> tuple[str, ...]:
        return tuple(sorted({definition.name for definition in self.terminal_definitions()}))

    def field_names(self) -> tuple[str, ...]:
        """Every field name declared by any regular definition, sorted and deduplicated."""
        return tuple(
            sorted({
                name
                for definition in self.root
                if isinstance(definition.kind, RegularDefinition)
                for name in definition.kind.field_names()
            })
        )

    def get(self, name: str, named: bool | None = None) -> NodeTypeDefinition | None:
        """Find the definition for `name`, or `None` if there is none.

        With `named=None` a named definition is preferred over an anonymous one with the same
        type string.
        """
        matches = [definition for definition in self.root if definition.name == name]
        if named is not None:
            return next((definition for definition in matches if definition.named is named), None)
        return next((definition for definition in matches if definition.named), None) or next(
            iter(matches), None
        )

    def get_node_type(self, node_type: NodeType) -> NodeTypeDefinition | None:
        """Find the definition for an exact `(type, named)` identity."""
        return self.get(node_type.name, node_type.named)

    def root_definition(self) -> NodeTypeDefinition | None:
        """The definition tree-sitter flagged as the root, if the file carries the flag."""
        return next((definition for definition in self.root if definition.root), None)


__all__ = (
    "NodeChildren",
    "NodeType",
    "NodeTypeDefinition",
    "NodeTypesDocument",
    "RegularDefinition",
    "SuperTypeDefinition",
)
