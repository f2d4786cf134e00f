# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Tests for whole generation runs."""

from __future__ import annotations

import shutil

from pathlib import Path

import pytest

from tsbindgen.binding.plan import ShapeKind
from tsbindgen.config.settings import TsBindgenSettings
from tsbindgen.emit.backend import Artifact
from tsbindgen.exceptions import ConfigurationError, SchemaInconsistencyError, SchemaReadError
from tsbindgen.generate import generate, load_plan


pytestmark = [pytest.mark.unit]

INCONSISTENT_DIR = Path(__file__).parent.parent / "fixtures" / "inconsistent"


def test_load_plan(schema_directory: Path) -> None:
    plan = load_plan(TsBindgenSettings(input_directory=schema_directory))
    assert plan.grammar_name == "module"
    assert plan.shape_of("module") is ShapeKind.COMPOUND


def test_generate_writes_to_default_location(schema_directory: Path) -> None:
    generated = generate(TsBindgenSettings(), Artifact.CONSTANTS)
    assert generated.path == Path("bindings/rust/nodes.rs")
    assert generated.path.read_text(encoding="utf-8") == generated.content
    assert 'pub const KIND_MODULE: &str = "module";' in generated.content


def test_generate_python_bindings(schema_directory: Path, tmp_path: Path) -> None:
    settings = TsBindgenSettings(
        input_directory=schema_directory, output_directory=tmp_path / "out", for_language="python"
    )
    generated = generate(settings, Artifact.BINDINGS)
    assert generated.artifact is Artifact.BINDINGS
    assert generated.path == tmp_path / "out" / "wrapper.py"
    assert "class Module(_TypedNode):" in generated.path.read_text(encoding="utf-8")


def test_generate_without_writing(schema_directory: Path) -> None:
    generated = generate(TsBindgenSettings(), Artifact.BINDINGS, write=False)
    assert generated.content
    assert not generated.path.exists()


def test_unknown_target_fails_before_reading(tmp_path: Path) -> None:
    """Test the target is checked even when there is nothing to read."""
    settings = TsBindgenSettings(input_directory=tmp_path / "nowhere", for_language="cobol")
    with pytest.raises(ConfigurationError):
        _ = generate(settings, Artifact.CONSTANTS)


def test_missing_inputs(tmp_path: Path) -> None:
    with pytest.raises(SchemaReadError):
        _ = generate(TsBindgenSettings(input_directory=tmp_path / "nowhere"), Artifact.CONSTANTS)


def test_inconsistent_inputs_write_nothing(tmp_path: Path) -> None:
    source = tmp_path / "broken"
    _ = shutil.copytree(INCONSISTENT_DIR, source)
    with pytest.raises(SchemaInconsistencyError) as exc_info:
        _ = generate(TsBindgenSettings(input_directory=source), Artifact.CONSTANTS)
    assert len(exc_info.value) == 3
    assert not Path("bindings").exists()
