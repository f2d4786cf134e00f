# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Layered rule lookup across a grammar's `inherits` chain.

A grammar that inherits from another only stores its parent's name. `LayeredRuleTable` keeps
every document of the chain intact and answers lookups child first, then parent, then
grandparent, so a child's rule shadows its ancestors' rule of the same name. Nothing is copied
down or merged.
"""

from __future__ import annotations

import logging

from collections.abc import Iterable, Iterator, Mapping
from typing import Self

from tsbindgen.exceptions import SchemaReadError
from tsbindgen.grammar.document import GrammarDocument
from tsbindgen.grammar.rules import Rule


logger = logging.getLogger(__name__)


class LayeredRuleTable:
    """Rule lookup over a grammar and its ancestors, nearest layer first."""

    def __init__(self, layers: Iterable[GrammarDocument]) -> None:
        """Create a table from an already ordered chain (`layers[0]` is the grammar itself)."""
        self._layers: tuple[GrammarDocument, ...] = tuple(layers)
        if not self._layers:
            raise ValueError("a rule table needs at least one grammar")

    @classmethod
    def from_chain(
        cls,
        grammar: GrammarDocument,
        parents: Iterable[GrammarDocument] | Mapping[str, GrammarDocument] = (),
    ) -> Self:
        """Follow `grammar.inherits` through `parents` (looked up by grammar name).

        Raises:
            SchemaReadError: if a parent is missing or the chain loops back on itself.
        """
        available = (
            dict(parents)
            if isinstance(parents, Mapping)
            else {parent.name: parent for parent in parents}
        )
        layers = [grammar]
        seen = {grammar.name}
        current = grammar
        while current.inherits is not None:
            parent_name = current.inherits
            if parent_name in seen:
                chain = " -> ".join([*(layer.name for layer in layers), parent_name])
                raise SchemaReadError(
                    f"Grammar inheritance cycle: {chain}",
                    details={"grammar": grammar.name, "chain": chain},
                )
            if (parent := available.get(parent_name)) is None:
                raise SchemaReadError(
                    f"Grammar {current.name!r} inherits from {parent_name!r}, which was not supplied",
                    details={"grammar": current.name, "inherits": parent_name},
                    suggestions=[
                        f"Pass the parent's grammar.json with --parent, e.g. `--parent ../tree-sitter-{parent_name}/src/grammar.json`."
                    ],
                )
            logger.debug("Grammar %s inherits from %s", current.name, parent_name)
            layers.append(parent)
            seen.add(parent_name)
            current = parent
        return cls(layers)

    @property
    def layers(self) -> tuple[GrammarDocument, ...]:
        """The chain, the grammar itself first."""
        return self._layers

    @property
    def grammar(self) -> GrammarDocument:
        return self._layers[0]

    def lookup(self, name: str) -> Rule | None:
        """Return the nearest layer's rule called `name`, or `None` if no layer defines one."""
        for layer in self._layers:
            if (rule := layer.rule(name)) is not None:
                return rule
        return None

    def owner(self, name: str) -> GrammarDocument | None:
        """Return the nearest layer defining a rule called `name`."""
        return next((layer for layer in self._layers if layer.has_rule(name)), None)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.owner(name) is not None

    def rule_names(self) -> tuple[str, ...]:
        """Effective rule names: the grammar's own in order, then each ancestor's new ones."""
        return tuple(dict.fromkeys(name for layer in self._layers for name in layer.rule_names()))

    def effective_rules(self) -> Iterator[tuple[str, Rule]]:
        """Each effective rule with the body that wins the lookup, in `rule_names()` order."""
        for name in self.rule_names():
            rule = self.lookup(name)
            if rule is not None:
                yield name, rule

    @property
    def root_rule_name(self) -> str:
        return self.grammar.root_rule_name

    def external_names(self) -> tuple[str, ...]:
        """External token names declared anywhere in the chain."""
        return tuple(dict.fromkeys(name for layer in self._layers for name in layer.external_names()))

    def supertypes(self) -> tuple[str, ...]:
        """The union of every layer's supertypes, nearest layer first."""
        return tuple(dict.fromkeys(name for layer in self._layers for name in layer.supertypes))

    def inline(self) -> tuple[str, ...]:
        """The union of every layer's inlined rules."""
        return tuple(dict.fromkeys(name for layer in self._layers for name in layer.inline))

    def extras(self) -> tuple[Rule, ...]:
        """The nearest layer's extras; a layer without extras defers to its parent."""
        return next((layer.extras for layer in self._layers if layer.extras), ())

    def reserved(self) -> dict[str, tuple[Rule, ...]]:
        """The nearest layer's reserved-word contexts."""
        return next((dict(layer.reserved) for layer in self._layers if layer.reserved), {})

    def word(self) -> str | None:
        """The nearest layer's word token."""
        return next((layer.word for layer in self._layers if layer.word is not None), None)

    def is_token_rule(self, name: str) -> bool:
        """Whether `name` is an external token or a rule that always lexes as a single token."""
        if name in self.external_names():
            return True
        rule = self.lookup(name)
        return rule is not None and rule.is_token_rule()


__all__ = ("LayeredRuleTable",)
