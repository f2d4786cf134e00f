# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Tests for the Rust emission backend."""

from __future__ import annotations

import pytest

from schema_builders import field, grammar_data, node, pattern, seq, slot, symbol

from tsbindgen._version import __version__
from tsbindgen.binding.request import EmissionRequest, build_request
from tsbindgen.binding.unifier import unify
from tsbindgen.emit.backend import Artifact, EmissionBackend
from tsbindgen.emit.rust import RustBackend
from tsbindgen.grammar.document import GrammarDocument
from tsbindgen.node_types.document import NodeTypesDocument


pytestmark = [pytest.mark.unit]


@pytest.fixture
def backend() -> RustBackend:
    return RustBackend()


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


def test_backend_properties(backend: RustBackend) -> None:
    assert isinstance(backend, EmissionBackend)
    assert backend.target == "rust"
    assert backend.file_extension == "rs"
    assert backend.file_name(Artifact.CONSTANTS) == "nodes.rs"
    assert backend.file_name(Artifact.BINDINGS) == "wrapper.rs"
    assert repr(backend) == "RustBackend(target='rust')"


class TestConstants:
    def test_module_constants(self, backend: RustBackend, module_request: EmissionRequest) -> None:
        content = backend.render(module_request, Artifact.CONSTANTS)
        assert content.startswith(
            f"// Generated by tsbindgen {__version__} from the module grammar. Do not edit by hand.\n"
        )
        assert "//! Node kind and field name constants for the module grammar." in content
        assert 'pub const KIND_MODULE: &str = "module";' in content
        assert 'pub const KIND_IDENTIFIER: &str = "identifier";' in content
        assert 'pub const FIELD_NAME: &str = "name";' in content
        assert 'pub const FIELD_BODY: &str = "body";' in content

    def test_synthesized_unions_have_no_kind_constant(
        self, backend: RustBackend, turtle_request: EmissionRequest
    ) -> None:
        content = backend.render(turtle_request, Artifact.CONSTANTS)
        assert "// Super Types\n" in content
        assert "IRI_OR_BLANK" not in content
        assert 'pub const KIND_BASE_DECL: &str = "base_decl";' in content
        assert '&str = ".";' in content

    def test_one_constant_per_kind(
        self, backend: RustBackend, turtle_request: EmissionRequest
    ) -> None:
        content = backend.render(turtle_request, Artifact.CONSTANTS)
        kind_lines = [line for line in content.splitlines() if line.startswith("pub const KIND_")]
        assert len(kind_lines) == len(turtle_request.kind_constants) == 10


class TestBindings:
    def test_module_bindings(self, backend: RustBackend, module_request: EmissionRequest) -> None:
        content = backend.render(module_request, Artifact.BINDINGS)
        assert "pub struct Module<'t, 's> {" in content
        assert "impl<'t, 's> TypedNode<'t, 's> for Module<'t, 's> {" in content
        assert "    pub const KIND: &'static str = \"module\";" in content
        assert "    pub fn name(&self) -> Identifier<'t, 's> {" in content
        assert '.child_by_field_name("name")' in content
        assert 'expect("missing required field name of Module")' in content
        assert (
            "pub fn root<'t, 's>(tree: &'t ::tree_sitter::Tree, source: &'s [u8]) -> Module<'t, 's> {"
            in content
        )

    def test_leaves_expose_text(self, backend: RustBackend, module_request: EmissionRequest) -> None:
        content = backend.render(module_request, Artifact.BINDINGS)
        assert "// Value Node :: Identifier" in content
        assert "    pub fn text(&self) -> &'s str {" in content

    def test_unions_become_enums(
        self, backend: RustBackend, turtle_request: EmissionRequest
    ) -> None:
        content = backend.render(turtle_request, Artifact.BINDINGS)
        assert "pub enum IriOrBlank<'t, 's> {" in content
        assert "    Iri(Iri<'t, 's>)," in content
        assert "    Blank(Blank<'t, 's>)," in content
        assert '"iri" => {' in content
        assert "Self::Iri(Iri::from_node(node, source))" in content
        assert 'kind => panic!("unexpected {kind:?} node for IriOrBlank")' in content

    def test_nested_unions_match_concrete_kinds(
        self, backend: RustBackend, turtle_request: EmissionRequest
    ) -> None:
        content = backend.render(turtle_request, Artifact.BINDINGS)
        assert '"base_decl" => {' in content
        assert '"triple" => {' in content

    def test_cardinalities(self, backend: RustBackend, turtle_request: EmissionRequest) -> None:
        content = backend.render(turtle_request, Artifact.BINDINGS)
        assert "pub fn base(&self) -> ::std::option::Option<IriOrBlank<'t, 's>> {" in content
        assert "pub fn children(&self) -> ::std::vec::Vec<Statement<'t, 's>> {" in content
        assert 'positional_children(self.node, &["base_decl", "triple"])' in content

    def test_keywords_are_escaped(self, backend: RustBackend) -> None:
        grammar = GrammarDocument.model_validate(
            grammar_data(
                "keywords",
                {
                    "decl": seq(field("type", symbol("name")), field("self", symbol("name"))),
                    "name": pattern("[a-z]+"),
                },
            )
        )
        node_types = NodeTypesDocument.model_validate([
            {**node("decl"), "fields": {"self": slot("name"), "type": slot("name")}},
            node("name"),
        ])
        content = backend.render(build_request(unify(grammar, node_types)), Artifact.BINDINGS)
        assert "    pub fn r#type(&self) -> Name<'t, 's> {" in content
        assert "    pub fn self_(&self) -> Name<'t, 's> {" in content


class TestEscaping:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("type", "r#type"),
            ("match", "r#match"),
            ("self", "self_"),
            ("Self", "Self_"),
            ("crate", "crate_"),
            ("node", "node_"),
            ("from_node", "from_node_"),
            ("value", "value"),
        ],
    )
    def test_escape_identifier(self, backend: RustBackend, name: str, expected: str) -> None:
        assert backend.escape_identifier(name) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("module", '"module"'),
            ('say "hi"', '"say \\"hi\\""'),
            ("a\\b", '"a\\\\b"'),
            ("\n\t", '"\\n\\t"'),
            ("\x01", '"\\u{1}"'),
            ("é", '"é"'),
        ],
    )
    def test_string_literal(self, backend: RustBackend, value: str, expected: str) -> None:
        assert backend.string_literal(value) == expected
