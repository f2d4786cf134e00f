# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""The grammar document model: a validated, immutable `grammar.json`.

`GrammarDocument` only stores what the file says. In particular `inherits` is kept as a name;
composing the rule tables of a grammar and its ancestors is done by
`tsbindgen.binding.rule_table.LayeredRuleTable`.
"""

from __future__ import annotations

from typing import Annotated, Final

from pydantic import Field

from tsbindgen.binding.identifiers import Identifier
from tsbindgen.core import BasedModel
from tsbindgen.grammar.rules import Rule, SymbolRule


SCHEMA_URI: Final[str] = "https://tree-sitter.github.io/tree-sitter/assets/schemas/grammar.schema.json"


class GrammarDocument(BasedModel):
    """A tree-sitter grammar, as written to `src/grammar.json` by `tree-sitter generate`."""

    schema_uri: Annotated[str | None, Field(alias="$schema")] = None
    """The JSON schema the document claims to follow."""

    name: Identifier
    """The grammar (language) name."""

    rules: Annotated[dict[Identifier, Rule], Field(min_length=1)]
    """Every production, keyed by rule name. The first rule is the grammar's root."""

    inherits: Identifier | None = None
    """Name of the parent grammar this one extends, if any."""

    conflicts: tuple[tuple[Identifier, ...], ...] = ()
    """Sets of rules that are allowed to conflict. Passed through unresolved."""

    precedences: tuple[tuple[Rule, ...], ...] = ()
    """Ordered named-precedence lists. Passed through unresolved."""

    externals: tuple[Rule, ...] = ()
    """Tokens produced by an external scanner."""

    extras: tuple[Rule, ...] = ()
    """Tokens that may appear anywhere (whitespace, comments)."""

    inline: tuple[Identifier, ...] = ()
    """Rules that are inlined at every use and never appear in the tree."""

    reserved: dict[Identifier, tuple[Rule, ...]] = {}
    """Reserved-word sets, keyed by context name."""

    supertypes: tuple[Identifier, ...] = ()
    """Rules that are exposed as abstract unions of their alternatives."""

    word: Identifier | None = None
    """The keyword-extraction token."""

    def rule(self, name: str) -> Rule | None:
        """Return this document's own rule called `name`, or `None` if it defines none."""
        return self.rules.get(name)

    def has_rule(self, name: str) -> bool:
        """Whether this document itself defines a rule called `name`."""
        return name in self.rules

    def rule_names(self) -> tuple[str, ...]:
        """Rule names in document order."""
        return tuple(self.rules)

    @property
    def root_rule_name(self) -> str:
        """The first rule, which tree-sitter treats as the start rule."""
        return next(iter(self.rules))

    def external_names(self) -> tuple[str, ...]:
        """Names of the external tokens declared by symbol (string externals have no name)."""
        return tuple(rule.name for rule in self.externals if isinstance(rule, SymbolRule))

    def field_names(self) -> tuple[str, ...]:
        """Every field name used anywhere in the rule table, sorted and deduplicated."""
        return tuple(sorted({name for rule in self.rules.values() for name in rule.field_names()}))


__all__ = ("SCHEMA_URI", "GrammarDocument")
