# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Tests for the rule algebra: parsing every variant and traversing rule trees."""

from __future__ import annotations

import pytest

from pydantic import ValidationError
from schema_builders import choice, field, pattern, seq, string, symbol

from tsbindgen.grammar.rules import (
    AliasRule,
    BlankRule,
    ChoiceRule,
    FieldRule,
    PatternRule,
    PrecedenceDynamicRule,
    PrecedenceLeftRule,
    PrecedenceRule,
    ReservedRule,
    RuleKind,
    SequenceRule,
    StringRule,
    SymbolRule,
    TokenRule,
    parse_rule,
)


pytestmark = [pytest.mark.unit]


class TestParsing:
    """Each `type` tag maps to its own model."""

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (seq(string("a")), SequenceRule),
            (choice(string("a"), {"type": "BLANK"}), ChoiceRule),
            (field("name", symbol("identifier")), FieldRule),
            ({"type": "TOKEN", "content": pattern("x")}, TokenRule),
            ({"type": "PREC", "value": 2, "content": symbol("a")}, PrecedenceRule),
            ({"type": "PREC_LEFT", "value": "binary", "content": symbol("a")}, PrecedenceLeftRule),
            ({"type": "PREC_DYNAMIC", "value": -1, "content": symbol("a")}, PrecedenceDynamicRule),
            (string("if"), StringRule),
            ({"type": "PATTERN", "value": "[a-z]+", "flags": "i"}, PatternRule),
            (symbol("expression"), SymbolRule),
            ({"type": "BLANK"}, BlankRule),
        ],
    )
    def test_tag_selects_variant(self, data: dict, expected: type) -> None:
        """Test the discriminator picks the right model."""
        rule = parse_rule(data)
        assert isinstance(rule, expected)
        assert rule.kind is RuleKind(data["type"])

    def test_reserved_reads_context_name(self) -> None:
        """Test RESERVED uses the `context_name` key from grammar.json."""
        rule = parse_rule({"type": "RESERVED", "context_name": "properties", "content": symbol("a")})
        assert isinstance(rule, ReservedRule)
        assert rule.context == "properties"

    def test_pattern_flags_are_optional(self) -> None:
        rule = parse_rule(pattern("\\d+"))
        assert isinstance(rule, PatternRule)
        assert rule.flags is None

    def test_unknown_tag_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _ = parse_rule({"type": "LOOKAHEAD", "content": symbol("a")})

    def test_symbol_name_must_be_an_identifier(self) -> None:
        with pytest.raises(ValidationError):
            _ = parse_rule(symbol("not-an-identifier"))

    def test_named_alias_requires_identifier_value(self) -> None:
        """Test a named alias renames a node, so its value must be an identifier."""
        with pytest.raises(ValidationError):
            _ = parse_rule({"type": "ALIAS", "value": "=>", "named": True, "content": symbol("a")})

    def test_anonymous_alias_accepts_token_text(self) -> None:
        rule = parse_rule({"type": "ALIAS", "value": "=>", "named": False, "content": symbol("a")})
        assert isinstance(rule, AliasRule)
        assert rule.value == "=>"

    def test_deeply_nested_rules_parse(self) -> None:
        data = symbol("leaf")
        for _ in range(50):
            data = {"type": "REPEAT", "content": data}
        rule = parse_rule(data)
        assert list(rule.symbols()) == ["leaf"]


class TestTraversal:
    """`walk()`, `symbols()` and `field_names()`."""

    def test_walk_is_pre_order_depth_first(self) -> None:
        rule = parse_rule(seq(field("left", symbol("a")), choice(symbol("b"), symbol("c"))))
        kinds = [visited.kind for visited in rule.walk()]
        assert kinds == [
            RuleKind.SEQ,
            RuleKind.FIELD,
            RuleKind.SYMBOL,
            RuleKind.CHOICE,
            RuleKind.SYMBOL,
            RuleKind.SYMBOL,
        ]

    def test_symbols_in_visit_order_with_duplicates(self) -> None:
        """Test every symbol reference is yielded, repeated references included."""
        rule = parse_rule(
            seq(symbol("b"), {"type": "REPEAT1", "content": seq(symbol("a"), symbol("b"))})
        )
        assert list(rule.symbols()) == ["b", "a", "b"]

    def test_alias_and_token_contents_are_visited(self) -> None:
        rule = parse_rule({
            "type": "ALIAS",
            "value": "name",
            "named": True,
            "content": {"type": "IMMEDIATE_TOKEN", "content": symbol("word")},
        })
        assert list(rule.symbols()) == ["word"]

    def test_field_names_are_deduplicated_in_first_seen_order(self) -> None:
        rule = parse_rule(
            choice(
                seq(field("right", symbol("a")), field("left", symbol("b"))),
                field("right", symbol("c")),
            )
        )
        assert rule.field_names() == ("right", "left")

    def test_leaf_rules_have_no_children(self) -> None:
        assert parse_rule(string("x")).children() == ()
        assert list(parse_rule({"type": "BLANK"}).walk()) == [BlankRule()]

    def test_choice_with_blank_is_optional(self) -> None:
        rule = parse_rule(choice(symbol("a"), {"type": "BLANK"}))
        assert isinstance(rule, ChoiceRule)
        assert rule.is_optional
        assert not parse_rule(choice(symbol("a"), symbol("b"))).is_optional  # type: ignore[union-attr]


class TestTokenRules:
    """A rule is a token rule when, under precedence wrappers, it always lexes one token."""

    @pytest.mark.parametrize(
        "data",
        [
            string("if"),
            pattern("[0-9]+"),
            {"type": "TOKEN", "content": seq(string("a"), string("b"))},
            {"type": "IMMEDIATE_TOKEN", "content": string(".")},
            {"type": "PREC", "value": 1, "content": pattern("x")},
            {"type": "PREC_RIGHT", "value": 0, "content": {"type": "TOKEN", "content": pattern("x")}},
        ],
    )
    def test_token_rules(self, data: dict) -> None:
        assert parse_rule(data).is_token_rule()

    @pytest.mark.parametrize(
        "data",
        [
            symbol("a"),
            seq(string("a"), string("b")),
            {"type": "PREC", "value": 1, "content": seq(symbol("a"))},
            {"type": "REPEAT", "content": pattern("x")},
        ],
    )
    def test_structured_rules(self, data: dict) -> None:
        assert not parse_rule(data).is_token_rule()

    def test_unwrap_strips_precedence_and_reserved(self) -> None:
        rule = parse_rule({
            "type": "PREC_LEFT",
            "value": 1,
            "content": {"type": "RESERVED", "context_name": "global", "content": symbol("a")},
        })
        assert rule.unwrap() == SymbolRule(name="a")

    def test_rule_kind_classification(self) -> None:
        assert RuleKind.PREC_DYNAMIC.is_precedence
        assert not RuleKind.TOKEN.is_precedence
        assert RuleKind.PATTERN.is_lexical
        assert not RuleKind.SYMBOL.is_lexical
