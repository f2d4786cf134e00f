# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Tests for the Python emission backend."""

from __future__ import annotations

import ast

from typing import Any

import pytest

from schema_builders import field, grammar_data, node, pattern, seq, slot, symbol

from tsbindgen._version import __version__
from tsbindgen.binding.request import EmissionRequest, build_request
from tsbindgen.binding.unifier import unify
from tsbindgen.emit.backend import Artifact, EmissionBackend
from tsbindgen.emit.python import PythonBackend
from tsbindgen.exceptions import RenderError
from tsbindgen.grammar.document import GrammarDocument
from tsbindgen.node_types.document import NodeTypesDocument


pytestmark = [pytest.mark.unit]


@pytest.fixture
def backend() -> PythonBackend:
    return PythonBackend()


@pytest.fixture
def module_request(
    module_grammar: GrammarDocument, module_node_types: NodeTypesDocument
) -> EmissionRequest:
    return build_request(unify(module_grammar, module_node_types))


@pytest.fixture
def turtle_request(
    turtle_grammar: GrammarDocument, turtle_node_types: NodeTypesDocument
) -> EmissionRequest:
    return build_request(unify(turtle_grammar, turtle_node_types))


@pytest.fixture
def keyword_request() -> EmissionRequest:
    """A node whose field names are keywords in both target languages."""
    grammar = GrammarDocument.model_validate(
        grammar_data(
            "keywords",
            {
                "decl": seq(field("class", symbol("name")), field("type", symbol("name"))),
                "name": pattern("[a-z]+"),
            },
        )
    )
    node_types = NodeTypesDocument.model_validate([
        {**node("decl"), "root": True, "fields": {"class": slot("name"), "type": slot("name")}},
        node("name"),
    ])
    return build_request(unify(grammar, node_types))


def _run(source: str) -> dict[str, Any]:
    namespace: dict[str, Any] = {}
    exec(compile(source, "<generated>", "exec"), namespace)
    return namespace


def test_backend_properties(backend: PythonBackend) -> None:
    assert isinstance(backend, EmissionBackend)
    assert backend.target == "python"
    assert backend.file_extension == "py"
    assert backend.artifacts() == (Artifact.CONSTANTS, Artifact.BINDINGS)
    assert backend.file_name(Artifact.CONSTANTS) == "nodes.py"
    assert backend.file_name(Artifact.BINDINGS) == "wrapper.py"


class TestConstants:
    def test_module_constants(self, backend: PythonBackend, module_request: EmissionRequest) -> None:
        content = backend.render(module_request, Artifact.CONSTANTS)
        first_line = content.splitlines()[0]
        assert first_line == (
            f"# Generated by tsbindgen {__version__} from the module grammar. Do not edit by hand."
        )
        assert "KIND_MODULE: Final[str] = 'module'" in content
        assert "FIELD_NAME: Final[str] = 'name'" in content
        assert "FIELD_BODY: Final[str] = 'body'" in content

    def test_constants_module_runs(
        self, backend: PythonBackend, turtle_request: EmissionRequest
    ) -> None:
        namespace = _run(backend.render(turtle_request, Artifact.CONSTANTS))
        assert namespace["KIND_BASE_DECL"] == "base_decl"
        assert namespace["FIELD_SUBJECT"] == "subject"
        dot = next(c for c in turtle_request.kind_constants if c.identifier == "anon_dot")
        assert namespace[dot.constant_name] == "."

    def test_sections_follow_shape_order(
        self, backend: PythonBackend, turtle_request: EmissionRequest
    ) -> None:
        content = backend.render(turtle_request, Artifact.CONSTANTS)
        positions = [
            content.index(f"# {title}\n")
            for title in ("Super types", "Nodes", "Terminals", "Fields")
        ]
        assert positions == sorted(positions)

    def test_output_is_deterministic(
        self, backend: PythonBackend, turtle_request: EmissionRequest
    ) -> None:
        assert backend.render(turtle_request, Artifact.CONSTANTS) == PythonBackend().render(
            turtle_request, Artifact.CONSTANTS
        )


class TestBindings:
    def test_module_bindings(self, backend: PythonBackend, module_request: EmissionRequest) -> None:
        content = backend.render(module_request, Artifact.BINDINGS)
        assert "class Module(_TypedNode):" in content
        assert "    KIND = 'module'" in content
        assert "    def name(self) -> Identifier:" in content
        assert "    def body(self) -> ModuleBody:" in content
        assert "self.node.child_by_field_name('name')" in content
        assert "class Identifier(_TypedNode):" in content
        assert "def root(tree: tree_sitter.Tree) -> Module:" in content

    def test_bindings_are_valid_python(
        self, backend: PythonBackend, turtle_request: EmissionRequest
    ) -> None:
        tree = ast.parse(backend.render(turtle_request, Artifact.BINDINGS))
        classes = {stmt.name for stmt in tree.body if isinstance(stmt, ast.ClassDef)}
        assert {"BaseDecl", "Document", "Triple", "Iri", "Blank", "Literal"} <= classes
        functions = {stmt.name for stmt in tree.body if isinstance(stmt, ast.FunctionDef)}
        assert {"wrap", "root"} <= functions

    def test_unions_and_cardinalities(
        self, backend: PythonBackend, turtle_request: EmissionRequest
    ) -> None:
        content = backend.render(turtle_request, Artifact.BINDINGS)
        assert 'IriOrBlank: typing.TypeAlias = typing.Union["Iri", "Blank"]' in content
        assert "    def base(self) -> IriOrBlank | None:" in content
        assert 'typing.cast("IriOrBlank", wrap(child))' in content
        assert "    def children(self) -> list[Statement]:" in content
        assert "frozenset({'base_decl', 'triple'})" in content

    def test_anonymous_leaves_are_not_named(
        self, backend: PythonBackend, turtle_request: EmissionRequest
    ) -> None:
        content = backend.render(turtle_request, Artifact.BINDINGS)
        assert "    KIND = '.'\n    NAMED = False" in content
        assert "('.', False):" in content

    def test_keywords_are_escaped(
        self, backend: PythonBackend, keyword_request: EmissionRequest
    ) -> None:
        content = backend.render(keyword_request, Artifact.BINDINGS)
        assert "    def class_(self) -> Name:" in content
        assert "    def type(self) -> Name:" in content
        ast.parse(content)


def test_escape_identifier(backend: PythonBackend) -> None:
    assert backend.escape_identifier("class") == "class_"
    assert backend.escape_identifier("node") == "node_"
    assert backend.escape_identifier("text") == "text_"
    assert backend.escape_identifier("value") == "value"


def test_string_literal(backend: PythonBackend) -> None:
    assert backend.string_literal("module") == "'module'"
    assert backend.string_literal("'") == '"\'"'
    assert backend.string_literal("\\") == "'\\\\'"


def test_unsupported_artifact_raises(
    backend: PythonBackend, module_request: EmissionRequest, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(PythonBackend, "artifacts", lambda self: (Artifact.CONSTANTS,))
    with pytest.raises(RenderError) as exc_info:
        _ = backend.render(module_request, Artifact.BINDINGS)
    assert exc_info.value.details == {"target": "python", "artifact": "bindings"}
    assert exc_info.value.suggestions == ["Choose one of: constants"]
