# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Global pytest configuration and fixtures for tsbindgen tests."""

from __future__ import annotations

import json
import logging
import os

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from schema_builders import choice, field, grammar_data, node, pattern, seq, slot, string, symbol

from tsbindgen.grammar.document import GrammarDocument
from tsbindgen.node_types.document import NodeTypesDocument


FIXTURES_DIR = Path(__file__).parent / "fixtures"
MODULE_DIR = FIXTURES_DIR / "module"
INCONSISTENT_DIR = FIXTURES_DIR / "inconsistent"


# ===========================================================================
# *                    Environment isolation
# ===========================================================================


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test in an empty directory with no TSBINDGEN_ variables set."""
    for key in list(os.environ):
        if key.startswith("TSBINDGEN_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_tsbindgen_logger() -> Iterator[None]:
    """Undo handlers a CLI run installs on the package logger."""
    yield
    logger = logging.getLogger("tsbindgen")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


# ===========================================================================
# *                    The module grammar (the end-to-end example)
# ===========================================================================


@pytest.fixture
def module_grammar_data() -> dict[str, Any]:
    return json.loads((MODULE_DIR / "grammar.json").read_text(encoding="utf-8"))


@pytest.fixture
def module_node_types_data() -> list[dict[str, Any]]:
    return json.loads((MODULE_DIR / "node-types.json").read_text(encoding="utf-8"))


@pytest.fixture
def module_grammar(module_grammar_data: dict[str, Any]) -> GrammarDocument:
    return GrammarDocument.model_validate(module_grammar_data)


@pytest.fixture
def module_node_types(module_node_types_data: list[dict[str, Any]]) -> NodeTypesDocument:
    return NodeTypesDocument.model_validate(module_node_types_data)


@pytest.fixture
def schema_directory(tmp_path: Path) -> Path:
    """A grammar repository `src` directory holding the module grammar."""
    directory = tmp_path / "src"
    directory.mkdir()
    for name in ("grammar.json", "node-types.json"):
        _ = (directory / name).write_bytes((MODULE_DIR / name).read_bytes())
    return directory


# ===========================================================================
# *                    A grammar with super types and field unions
# ===========================================================================


@pytest.fixture
def turtle_grammar_data() -> dict[str, Any]:
    """A small RDF-like grammar: super types, optional union fields and positional children."""
    return grammar_data(
        "turtle",
        {
            "document": {"type": "REPEAT", "content": symbol("statement")},
            "statement": choice(symbol("base_decl"), symbol("triple")),
            "base_decl": seq(
                string("@base"),
                field("base", choice(symbol("iri"), symbol("blank"), {"type": "BLANK"})),
            ),
            "triple": seq(
                field("subject", choice(symbol("iri"), symbol("blank"))),
                field("object", choice(symbol("blank"), symbol("iri"))),
                {"type": "REPEAT", "content": symbol("_term")},
                string("."),
            ),
            "_term": choice(symbol("iri"), symbol("blank"), symbol("literal")),
            "iri": {"type": "TOKEN", "content": pattern("<[^>]*>")},
            "blank": pattern("_:[a-z]+"),
            "literal": {"type": "PREC", "value": 1, "content": pattern('"[^"]*"')},
        },
        extras=[pattern("\\s")],
        supertypes=["statement", "_term"],
    )


@pytest.fixture
def turtle_node_types_data() -> list[dict[str, Any]]:
    return [
        {**node("_term"), "subtypes": [node("iri"), node("blank"), node("literal")]},
        {**node("statement"), "subtypes": [node("base_decl"), node("triple")]},
        {**node("base_decl"), "fields": {"base": slot("iri", "blank", required=False)}},
        node("blank"),
        {
            **node("document"),
            "root": True,
            "fields": {},
            "children": slot("statement", multiple=True, required=False),
        },
        node("iri"),
        node("literal"),
        {
            **node("triple"),
            "fields": {"object": slot("blank", "iri"), "subject": slot("iri", "blank")},
            "children": slot("_term", multiple=True, required=False),
        },
        node("@base", named=False),
        node(".", named=False),
    ]


@pytest.fixture
def turtle_grammar(turtle_grammar_data: dict[str, Any]) -> GrammarDocument:
    return GrammarDocument.model_validate(turtle_grammar_data)


@pytest.fixture
def turtle_node_types(turtle_node_types_data: list[dict[str, Any]]) -> NodeTypesDocument:
    return NodeTypesDocument.model_validate(turtle_node_types_data)
