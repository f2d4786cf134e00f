# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Run a whole generation: read, unify, build the request, render and write."""

from __future__ import annotations

import logging

from pathlib import Path
from typing import NamedTuple

from tsbindgen.binding.plan import BindingPlan
from tsbindgen.binding.request import EmissionRequest, build_request
from tsbindgen.binding.unifier import unify
from tsbindgen.config.settings import TsBindgenSettings
from tsbindgen.emit.backend import Artifact
from tsbindgen.emit.registry import get_backend
from tsbindgen.reader import SchemaInputs, read_inputs


logger = logging.getLogger(__name__)


class GeneratedFile(NamedTuple):
    artifact: Artifact
    path: Path
    content: str


def load_plan(settings: TsBindgenSettings) -> BindingPlan:
    """Read the configured inputs and unify them.

    Raises:
        SchemaReadError: if an input cannot be read.
        SchemaInconsistencyError: if the documents disagree.
    """
    inputs: SchemaInputs = read_inputs(
        settings.input_directory, parent_grammars=settings.parent_grammars
    )
    return unify(inputs.grammar, inputs.node_types, parents=inputs.parents)


def render_artifact(
    request: EmissionRequest, artifact: Artifact, settings: TsBindgenSettings
) -> GeneratedFile:
    """Render one artifact with the configured backend, without writing it.

    Raises:
        ConfigurationError: if no backend is registered for the target language.
        RenderError: if the backend fails.
    """
    backend = get_backend(settings.for_language)
    content = backend.render(request, artifact)
    path = settings.output_path(backend.target, artifact, backend.file_extension)
    return GeneratedFile(artifact=artifact, path=path, content=content)


def write_file(generated: GeneratedFile) -> Path:
    generated.path.parent.mkdir(parents=True, exist_ok=True)
    _ = generated.path.write_text(generated.content, encoding="utf-8")
    logger.info("Wrote %s", generated.path)
    return generated.path


def generate(
    settings: TsBindgenSettings, artifact: Artifact, *, write: bool = True
) -> GeneratedFile:
    """Read, unify and render one artifact, then write it unless `write` is false."""
    # Unknown targets fail before any input is read.
    _ = get_backend(settings.for_language)
    request = build_request(load_plan(settings))
    generated = render_artifact(request, artifact, settings)
    if write:
        _ = write_file(generated)
    return generated


__all__ = ("GeneratedFile", "generate", "load_plan", "render_artifact", "write_file")
