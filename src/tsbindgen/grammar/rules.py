# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""The grammar rule algebra: one production of a tree-sitter `grammar.json`.

A rule is a closed, recursive sum type. Each variant is a frozen pydantic model tagged by the
same `type` string tree-sitter writes (`SEQ`, `CHOICE`, `FIELD`, ...), so a rule validates
directly from the JSON and dumps back to it.

Rules own their sub-rules; there is no sharing and no cycles inside a rule tree. Recursion
between productions only happens by name, through `SymbolRule`, and is resolved by whoever
consumes the symbol stream (see `tsbindgen.binding.unifier`). Nothing here checks that a
symbol resolves.

Note that `optional(x)` is not a variant: tree-sitter writes it as `CHOICE(x, BLANK)`.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter, model_validator

from tsbindgen.binding.identifiers import Identifier, is_valid_identifier
from tsbindgen.core import BaseEnum, BasedModel


class RuleKind(BaseEnum):
    """The `type` tag of each rule variant, as written in `grammar.json`."""

    SEQ = "SEQ"
    CHOICE = "CHOICE"
    FIELD = "FIELD"
    TOKEN = "TOKEN"  # noqa: S105  # not a secret
    IMMEDIATE_TOKEN = "IMMEDIATE_TOKEN"  # noqa: S105
    REPEAT = "REPEAT"
    REPEAT1 = "REPEAT1"
    RESERVED = "RESERVED"
    PREC = "PREC"
    PREC_LEFT = "PREC_LEFT"
    PREC_RIGHT = "PREC_RIGHT"
    PREC_DYNAMIC = "PREC_DYNAMIC"
    STRING = "STRING"
    PATTERN = "PATTERN"
    SYMBOL = "SYMBOL"
    ALIAS = "ALIAS"
    BLANK = "BLANK"

    @property
    def is_precedence(self) -> bool:
        """Whether this is one of the four precedence wrappers."""
        return self in {RuleKind.PREC, RuleKind.PREC_LEFT, RuleKind.PREC_RIGHT, RuleKind.PREC_DYNAMIC}

    @property
    def is_lexical(self) -> bool:
        """Whether a rule of this kind always matches a single token."""
        return self in {RuleKind.TOKEN, RuleKind.IMMEDIATE_TOKEN, RuleKind.STRING, RuleKind.PATTERN}


class BaseRule(BasedModel):
    """Behavior shared by every rule variant: structural traversal only."""

    @property
    def kind(self) -> RuleKind:
        """The variant tag as a `RuleKind`."""
        return RuleKind(self.type)  # type: ignore[attr-defined]

    def children(self) -> tuple[Rule, ...]:
        """Direct sub-rules, in declaration order."""
        return ()

    def walk(self) -> Iterator[Rule]:
        """Visit this rule and every sub-rule depth first, parents before children.

        Iterative, so deeply nested rules do not hit the recursion limit.
        """
        stack: list[BaseRule] = [self]
        while stack:
            rule = stack.pop()
            yield rule  # type: ignore[misc]
            stack.extend(reversed(rule.children()))

    def symbols(self) -> Iterator[str]:
        """Yield every symbol reference in visit order (duplicates included)."""
        for rule in self.walk():
            if isinstance(rule, SymbolRule):
                yield rule.name

    def field_names(self) -> tuple[str, ...]:
        """Names of the fields declared in this rule tree, first-seen order, deduplicated."""
        return tuple(dict.fromkeys(rule.name for rule in self.walk() if isinstance(rule, FieldRule)))

    def unwrap(self) -> Rule:
        """Strip precedence and reserved-word wrappers from the top of this rule."""
        rule: BaseRule = self
        while isinstance(rule, _WRAPPER_RULES):
            rule = rule.content
        return rule  # type: ignore[return-value]

    def is_token_rule(self) -> bool:
        """Whether this rule always produces a single token (a leaf with no structure)."""
        return self.unwrap().kind.is_lexical


class _ContentRule(BaseRule):
    content: Rule

    def children(self) -> tuple[Rule, ...]:
        return (self.content,)


class _MembersRule(BaseRule):
    members: tuple[Rule, ...]

    def children(self) -> tuple[Rule, ...]:
        return self.members


class SequenceRule(_MembersRule):
    """All members, in order."""

    type: Literal["SEQ"] = "SEQ"


class ChoiceRule(_MembersRule):
    """Exactly one of the members."""

    type: Literal["CHOICE"] = "CHOICE"

    @property
    def is_optional(self) -> bool:
        """Whether this choice is tree-sitter's spelling of `optional(...)`."""
        return any(isinstance(member, BlankRule) for member in self.members)


class FieldRule(_ContentRule):
    """Names the node(s) matched by `content` so they can be looked up by field name."""

    type: Literal["FIELD"] = "FIELD"
    name: Identifier


class TokenRule(_ContentRule):
    """Matches `content` as a single token."""

    type: Literal["TOKEN"] = "TOKEN"


class ImmediateTokenRule(_ContentRule):
    """A token that may not be preceded by extras (whitespace)."""

    type: Literal["IMMEDIATE_TOKEN"] = "IMMEDIATE_TOKEN"


class RepeatRule(_ContentRule):
    """Zero or more repetitions of `content`."""

    type: Literal["REPEAT"] = "REPEAT"


class Repeat1Rule(_ContentRule):
    """One or more repetitions of `content`."""

    type: Literal["REPEAT1"] = "REPEAT1"


class ReservedRule(_ContentRule):
    """`content` with the reserved words of a named context in effect."""

    type: Literal["RESERVED"] = "RESERVED"
    context: Annotated[Identifier, Field(alias="context_name")]


class PrecedenceRule(_ContentRule):
    """Static precedence. Named precedences (declared in `precedences`) are strings."""

    type: Literal["PREC"] = "PREC"
    value: int | str


class PrecedenceLeftRule(_ContentRule):
    """Left-associative precedence."""

    type: Literal["PREC_LEFT"] = "PREC_LEFT"
    value: int | str


class PrecedenceRightRule(_ContentRule):
    """Right-associative precedence."""

    type: Literal["PREC_RIGHT"] = "PREC_RIGHT"
    value: int | str


class PrecedenceDynamicRule(_ContentRule):
    """Precedence applied at runtime, during conflict resolution."""

    type: Literal["PREC_DYNAMIC"] = "PREC_DYNAMIC"
    value: int


class StringRule(BaseRule):
    """A literal string."""

    type: Literal["STRING"] = "STRING"
    value: str


class PatternRule(BaseRule):
    """A regular expression, with optional flags (tree-sitter only supports `i`)."""

    type: Literal["PATTERN"] = "PATTERN"
    value: str
    flags: str | None = None


class SymbolRule(BaseRule):
    """A reference to another rule (or an external token) by name."""

    type: Literal["SYMBOL"] = "SYMBOL"
    name: Identifier


class AliasRule(_ContentRule):
    """Makes `content` appear in the tree under another name.

    A named alias renames the node and its value is an identifier; an anonymous alias turns the
    node into token text and its value can be anything (`"=>"`).
    """

    type: Literal["ALIAS"] = "ALIAS"
    value: str
    named: bool

    @model_validator(mode="after")
    def _check_named_value(self) -> AliasRule:
        if self.named and not is_valid_identifier(self.value):
            raise ValueError(f"named alias value {self.value!r} is not a valid identifier")
        return self


class BlankRule(BaseRule):
    """Matches the empty string."""

    type: Literal["BLANK"] = "BLANK"


Rule = Annotated[
    SequenceRule
    | ChoiceRule
    | FieldRule
    | TokenRule
    | ImmediateTokenRule
    | RepeatRule
    | Repeat1Rule
    | ReservedRule
    | PrecedenceRule
    | PrecedenceLeftRule
    | PrecedenceRightRule
    | PrecedenceDynamicRule
    | StringRule
    | PatternRule
    | SymbolRule
    | AliasRule
    | BlankRule,
    Field(discriminator="type"),
]

_WRAPPER_RULES = (
    PrecedenceRule,
    PrecedenceLeftRule,
    PrecedenceRightRule,
    PrecedenceDynamicRule,
    ReservedRule,
)

for _model in (
    _ContentRule,
    _MembersRule,
    SequenceRule,
    ChoiceRule,
    FieldRule,
    TokenRule,
    ImmediateTokenRule,
    RepeatRule,
    Repeat1Rule,
    ReservedRule,
    PrecedenceRule,
    PrecedenceLeftRule,
    PrecedenceRightRule,
    PrecedenceDynamicRule,
    AliasRule,
):
    _ = _model.model_rebuild()

RULE_ADAPTER: TypeAdapter[Any] = TypeAdapter(Rule)


def parse_rule(data: Any) -> Rule:
    """Validate one rule from its `grammar.json` form."""
    return RULE_ADAPTER.validate_python(data)


__all__ = (
    "RULE_ADAPTER",
    "AliasRule",
    "BaseRule",
    "BlankRule",
    "ChoiceRule",
    "FieldRule",
    "ImmediateTokenRule",
    "PatternRule",
    "PrecedenceDynamicRule",
    "PrecedenceLeftRule",
    "PrecedenceRightRule",
    "PrecedenceRule",
    "Repeat1Rule",
    "RepeatRule",
    "ReservedRule",
    "Rule",
    "RuleKind",
    "SequenceRule",
    "StringRule",
    "SymbolRule",
    "TokenRule",
    "parse_rule",
)
