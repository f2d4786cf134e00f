# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Unify a grammar and its node types into a binding plan.

The node types document already says what every node looks like; the grammar is used to check
that the two documents describe the same language. The unifier runs one pass over both, collects
every structural inconsistency it finds, and only then decides: either it returns a complete
`BindingPlan`, or it raises one `SchemaInconsistencyError` listing every problem. There is no
partial plan.

Resolution is by name. A field target only needs the binding identifier of the node type it
points at, never that node's resolved shape, so forward references and recursive node types
(expressions inside expressions) need no special ordering.

The checks:

- every grammar symbol (in rule bodies, extras, reserved words, `word`, `inline` and
  `supertypes`) names a rule or external token in the grammar or one of its ancestors;
- every field type and super type subtype names a node type the node types document defines;
- every grammar supertype has a super type definition, and every super type definition that is
  also a grammar rule is listed as a grammar supertype;
- nodes with fields or children are not tokens in the grammar, and terminals are not rules
  declaring fields;
- no field slot lists zero types;
- no node type is defined twice.

Distinct node types whose binding identifiers coincide (`"="` and `"eq"` both spell `anon_eq`)
are numbered apart in document order: the first keeps the name, later ones get `2`, `3`, ...
"""

from __future__ import annotations

import hashlib
import logging

from collections.abc import Iterable, Mapping
from typing import Final

from tsbindgen.binding.inconsistencies import Inconsistency, InconsistencyKind
from tsbindgen.binding.plan import (
    BindingPlan,
    Cardinality,
    CompoundNode,
    NodeRef,
    ResolvedField,
    ResolvedNodeShape,
    SynthesizedUnionRef,
    UnionNode,
    ValueLeaf,
)
from tsbindgen.binding.rule_table import LayeredRuleTable
from tsbindgen.core import unique_names
from tsbindgen.exceptions import SchemaInconsistencyError
from tsbindgen.grammar.document import GrammarDocument
from tsbindgen.grammar.rules import Rule
from tsbindgen.node_types.document import (
    NodeChildren,
    NodeType,
    NodeTypeDefinition,
    NodeTypesDocument,
    RegularDefinition,
    SuperTypeDefinition,
)


logger = logging.getLogger(__name__)

CHILDREN_FIELD_NAME: Final[str] = "children"
POSITIONAL_CHILDREN_FIELD_NAME: Final[str] = "positional_children"

UNION_NAME_SEPARATOR: Final[str] = "_or_"
MAX_UNION_NAME_LENGTH: Final[int] = 64
UNION_HASH_PREFIX: Final[str] = "union_"


def _digest_name(variants: tuple[str, ...]) -> str:
    digest = hashlib.blake2b("\x00".join(variants).encode("utf-8"), digest_size=6).hexdigest()
    return f"{UNION_HASH_PREFIX}{digest}"


def synthesized_union_name(variants: Iterable[str]) -> str:
    """Name an anonymous union after its variants, in order.

    `("iri", "blank")` gives `iri_or_blank`. Names over 64 characters are replaced by
    `union_` and 12 hex characters of a digest of the ordered variants.
    """
    ordered = tuple(variants)
    name = UNION_NAME_SEPARATOR.join(ordered)
    return name if len(name) <= MAX_UNION_NAME_LENGTH else _digest_name(ordered)


class SchemaUnifier:
    """One unification run over a grammar (with its ancestors) and a node types document.

    A unifier is single use: `unify()` may be called again and returns an identical plan, but the
    instance holds the run's scratch state.
    """

    def __init__(
        self,
        grammar: GrammarDocument,
        node_types: NodeTypesDocument,
        *,
        parents: Iterable[GrammarDocument] | Mapping[str, GrammarDocument] = (),
    ) -> None:
        """Prepare a run.

        Raises:
            SchemaReadError: if the grammar's `inherits` chain cannot be assembled from `parents`.
        """
        self.rules = LayeredRuleTable.from_chain(grammar, parents)
        self.node_types = node_types
        self._problems: dict[Inconsistency, None] = {}
        self._definitions: dict[NodeType, NodeTypeDefinition] = {}
        self._identifiers: dict[NodeType, str] = {}
        self._unions: dict[tuple[str, ...], UnionNode] = {}
        self._union_names: dict[tuple[str, ...], str] = {}

    @property
    def inconsistencies(self) -> tuple[Inconsistency, ...]:
        """Problems found so far, deduplicated, in the order they were found."""
        return tuple(self._problems)

    def unify(self) -> BindingPlan:
        """Run every check and resolve every node type.

        Raises:
            SchemaInconsistencyError: listing every problem, if there is at least one.
        """
        self._reset()
        self._index_definitions()
        self._check_symbols()
        self._check_supertypes()
        self._check_terminal_agreement()
        nodes: dict[str, ResolvedNodeShape] = {}
        for node_type, definition in self._definitions.items():
            nodes[self._identifiers[node_type]] = self._resolve(definition)
        if self._problems:
            logger.info(
                "Unification of %s failed with %d inconsistencies",
                self.rules.grammar.name,
                len(self._problems),
            )
            raise SchemaInconsistencyError(self.inconsistencies)
        plan = BindingPlan(
            grammar_name=self.rules.grammar.name,
            root=self._root_identifier(),
            nodes=nodes,
            synthesized_unions={
                self._union_names[key]: union for key, union in self._unions.items()
            },
        )
        logger.info(
            "Unified %s: %d node types, %d synthesized unions",
            plan.grammar_name,
            len(plan.nodes),
            len(plan.synthesized_unions),
        )
        return plan

    def _reset(self) -> None:
        self._problems.clear()
        self._definitions.clear()
        self._identifiers.clear()
        self._unions.clear()
        self._union_names.clear()

    def _report(self, kind: InconsistencyKind, identifier: str, context: str) -> None:
        problem = Inconsistency(kind=kind, identifier=identifier, context=context)
        if problem not in self._problems:
            logger.debug("Inconsistency: %s", problem)
            self._problems[problem] = None

    # ------------------------------------------------------------------
    # Definitions

    def _index_definitions(self) -> None:
        for definition in self.node_types:
            node_type = definition.node_type
            if node_type in self._definitions:
                self._report(
                    InconsistencyKind.DUPLICATE_DEFINITION,
                    str(node_type),
                    "node type is defined more than once",
                )
                continue
            self._definitions[node_type] = definition
        names = unique_names([node_type.identifier for node_type in self._definitions])
        self._identifiers.update(zip(self._definitions, names, strict=True))

    def _identifier_of(self, node_type: NodeType) -> str:
        return self._identifiers.get(node_type, node_type.identifier)

    def _reference(self, node_type: NodeType, context: str) -> str:
        if node_type not in self._definitions:
            self._report(InconsistencyKind.UNRESOLVED_NODE_TYPE, str(node_type), context)
        return self._identifier_of(node_type)

    # ------------------------------------------------------------------
    # Grammar checks

    def _check_symbols(self) -> None:
        scope = set(self.rules.rule_names()) | set(self.rules.external_names())

        def check(rules: Iterable[Rule], context: str) -> None:
            for rule in rules:
                for symbol in rule.symbols():
                    if symbol not in scope:
                        self._report(InconsistencyKind.UNRESOLVED_SYMBOL, symbol, context)

        for name, rule in self.rules.effective_rules():
            check((rule,), f"rule {name!r}")
        check(self.rules.extras(), "extras")
        for context_name, words in self.rules.reserved().items():
            check(words, f"reserved words {context_name!r}")
        if (word := self.rules.word()) is not None and word not in scope:
            self._report(InconsistencyKind.UNRESOLVED_SYMBOL, word, "word")
        for name in self.rules.inline():
            if name not in scope:
                self._report(InconsistencyKind.UNRESOLVED_SYMBOL, name, "inline")
        for name in self.rules.supertypes():
            if name not in scope:
                self._report(InconsistencyKind.UNRESOLVED_SYMBOL, name, "supertypes")

    def _check_supertypes(self) -> None:
        grammar_supertypes = self.rules.supertypes()
        for name in grammar_supertypes:
            definition = self._definitions.get(NodeType.of(name))
            if definition is None:
                self._report(
                    InconsistencyKind.UNRESOLVED_SUPERTYPE,
                    name,
                    "grammar supertype has no node type definition",
                )
            elif not definition.is_super_type:
                self._report(
                    InconsistencyKind.UNRESOLVED_SUPERTYPE,
                    name,
                    "grammar supertype is defined as a regular node type",
                )
        for node_type, definition in self._definitions.items():
            if (
                definition.is_super_type
                and node_type.named
                and node_type.name in self.rules
                and node_type.name not in grammar_supertypes
            ):
                self._report(
                    InconsistencyKind.CLASSIFICATION_MISMATCH,
                    node_type.name,
                    "super type in node types, but not a grammar supertype",
                )

    def _check_terminal_agreement(self) -> None:
        externals = set(self.rules.external_names())
        for node_type, definition in self._definitions.items():
            if not node_type.named:
                continue
            name = node_type.name
            if definition.is_regular:
                if name in externals:
                    self._report(
                        InconsistencyKind.CLASSIFICATION_MISMATCH,
                        name,
                        "declares fields or children, but the grammar lists it as an external",
                    )
                elif self.rules.is_token_rule(name):
                    self._report(
                        InconsistencyKind.CLASSIFICATION_MISMATCH,
                        name,
                        "declares fields or children, but its grammar rule is a single token",
                    )
            elif definition.is_terminal and name not in externals:
                rule = self.rules.lookup(name)
                if rule is not None and (declared := rule.field_names()):
                    self._report(
                        InconsistencyKind.CLASSIFICATION_MISMATCH,
                        name,
                        f"terminal in node types, but its rule declares fields {', '.join(declared)}",
                    )

    # ------------------------------------------------------------------
    # Resolution

    def _resolve(self, definition: NodeTypeDefinition) -> ResolvedNodeShape:
        node_type = definition.node_type
        match definition.kind:
            case SuperTypeDefinition(subtypes=subtypes):
                variants = tuple(
                    dict.fromkeys(
                        self._reference(subtype, f"subtype of {node_type}") for subtype in subtypes
                    )
                )
                return UnionNode(node_type=node_type, variants=variants)
            case RegularDefinition(fields=None, children=None):
                return ValueLeaf(node_type=node_type)
            case RegularDefinition(fields=fields, children=children):
                resolved: list[ResolvedField] = []
                for field_name, slot in (fields or {}).items():
                    if (field := self._resolve_field(node_type, field_name, slot)) is not None:
                        resolved.append(field)
                if children is not None:
                    name = (
                        POSITIONAL_CHILDREN_FIELD_NAME
                        if CHILDREN_FIELD_NAME in (fields or {})
                        else CHILDREN_FIELD_NAME
                    )
                    field = self._resolve_field(node_type, name, children, positional=True)
                    if field is not None:
                        resolved.append(field)
                return CompoundNode(node_type=node_type, fields=tuple(resolved))
        raise TypeError(f"unexpected definition kind for {node_type}: {definition.kind!r}")

    def _resolve_field(
        self, owner: NodeType, name: str, slot: NodeChildren, *, positional: bool = False
    ) -> ResolvedField | None:
        context = f"{'children' if positional else f'field {name!r}'} of {owner}"
        if not slot.has_types:
            self._report(InconsistencyKind.EMPTY_CARDINALITY, name, f"{context} lists no types")
            return None
        cardinality = Cardinality.from_flags(multiple=slot.multiple, required=slot.required)
        types = tuple(dict.fromkeys(slot.types))
        if len(types) == 1:
            (node_type,) = types
            target: NodeRef | SynthesizedUnionRef = NodeRef(
                identifier=self._reference(node_type, context), node_type=node_type
            )
        else:
            target = self._synthesize(types, context)
        return ResolvedField(name=name, cardinality=cardinality, target=target, positional=positional)

    def _synthesize(self, types: tuple[NodeType, ...], context: str) -> SynthesizedUnionRef:
        """Get or create the anonymous union for exactly this ordered type list."""
        variants = tuple(dict.fromkeys(self._reference(node_type, context) for node_type in types))
        if variants not in self._unions:
            name = synthesized_union_name(variants)
            taken = set(self._identifiers.values()) | set(self._union_names.values())
            if name in taken:
                name = _digest_name(variants)
            self._unions[variants] = UnionNode(variants=variants)
            self._union_names[variants] = name
        return SynthesizedUnionRef(identifier=self._union_names[variants], variants=variants)

    def _root_identifier(self) -> str | None:
        if (definition := self.node_types.root_definition()) is not None:
            return self._identifier_of(definition.node_type)
        root = NodeType.of(self.rules.root_rule_name)
        return self._identifiers.get(root)


def unify(
    grammar: GrammarDocument,
    node_types: NodeTypesDocument,
    *,
    parents: Iterable[GrammarDocument] | Mapping[str, GrammarDocument] = (),
) -> BindingPlan:
    """Unify `grammar` (with any `parents` it inherits from) and `node_types` into a plan.

    Raises:
        SchemaReadError: if the grammar's `inherits` chain cannot be assembled.
        SchemaInconsistencyError: listing every structural inconsistency found.
    """
    return SchemaUnifier(grammar, node_types, parents=parents).unify()


__all__ = (
    "CHILDREN_FIELD_NAME",
    "POSITIONAL_CHILDREN_FIELD_NAME",
    "SchemaUnifier",
    "synthesized_union_name",
    "unify",
)
