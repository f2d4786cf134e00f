# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Read `grammar.json` and `node-types.json` from disk.

`tree-sitter generate` writes both files into a grammar repository's `src` directory, so a
directory is resolved to `<directory>/grammar.json` and `<directory>/node-types.json`. A path to
a file is used as is.
"""

from __future__ import annotations

import logging

from pathlib import Path
from typing import Final, NamedTuple

from pydantic import ValidationError
from pydantic_core import from_json

from tsbindgen.exceptions import SchemaReadError
from tsbindgen.grammar.document import GrammarDocument
from tsbindgen.node_types.document import NodeTypesDocument


logger = logging.getLogger(__name__)

DEFAULT_INPUT_DIRECTORY: Final[Path] = Path("src")
GRAMMAR_FILE_NAME: Final[str] = "grammar.json"
NODE_TYPES_FILE_NAME: Final[str] = "node-types.json"


class SchemaInputs(NamedTuple):
    """Everything a generation run reads."""

    grammar: GrammarDocument
    node_types: NodeTypesDocument
    parents: tuple[GrammarDocument, ...] = ()


def _resolve(path: Path, default_name: str) -> Path:
    return path / default_name if path.is_dir() else path


def _read_json(path: Path) -> object:
    if not path.is_file():
        raise SchemaReadError(
            f"Could not find {path.name}",
            details={"file_path": str(path)},
            suggestions=[
                "Run `tree-sitter generate` in the grammar repository first.",
                "Point --input-directory at the directory containing grammar.json and node-types.json.",
            ],
        )
    logger.info("Reading %s", path)
    try:
        return from_json(path.read_bytes())
    except OSError as e:
        raise SchemaReadError(f"Could not read {path.name}: {e}", details={"file_path": str(path)}) from e
    except ValueError as e:
        raise SchemaReadError(
            f"{path.name} is not valid JSON: {e}", details={"file_path": str(path)}
        ) from e


def _validation_failure(kind: str, path: Path, error: ValidationError) -> SchemaReadError:
    problems = [
        f"{'.'.join(str(part) for part in detail['loc']) or '<root>'}: {detail['msg']}"
        for detail in error.errors(include_url=False)
    ]
    return SchemaReadError(
        f"{path.name} is not a valid {kind} document ({error.error_count()} errors)",
        details={"file_path": str(path), "errors": problems},
    )


def read_grammar(path: Path | str) -> GrammarDocument:
    """Read and validate a grammar document from a file or a directory containing one.

    Raises:
        SchemaReadError: if the file is missing, is not JSON, or is not a grammar document.
    """
    path = _resolve(Path(path), GRAMMAR_FILE_NAME)
    data = _read_json(path)
    try:
        grammar = GrammarDocument.model_validate(data)
    except ValidationError as e:
        raise _validation_failure("grammar", path, e) from e
    logger.debug("Grammar %s has %d rules", grammar.name, len(grammar.rules))
    return grammar


def read_node_types(path: Path | str) -> NodeTypesDocument:
    """Read and validate a node types document from a file or a directory containing one.

    Raises:
        SchemaReadError: if the file is missing, is not JSON, or is not a node types document.
    """
    path = _resolve(Path(path), NODE_TYPES_FILE_NAME)
    data = _read_json(path)
    try:
        document = NodeTypesDocument.model_validate(data)
    except ValidationError as e:
        raise _validation_failure("node types", path, e) from e
    logger.debug("Node types document has %d definitions", len(document))
    return document


def read_inputs(
    input_directory: Path | str = DEFAULT_INPUT_DIRECTORY,
    *,
    parent_grammars: tuple[Path, ...] | list[Path] = (),
) -> SchemaInputs:
    """Read both documents from `input_directory`, plus any parent grammars for `inherits`."""
    directory = Path(input_directory)
    return SchemaInputs(
        grammar=read_grammar(directory),
        node_types=read_node_types(directory),
        parents=tuple(read_grammar(parent) for parent in parent_grammars),
    )


__all__ = (
    "DEFAULT_INPUT_DIRECTORY",
    "GRAMMAR_FILE_NAME",
    "NODE_TYPES_FILE_NAME",
    "SchemaInputs",
    "read_grammar",
    "read_inputs",
    "read_node_types",
)
