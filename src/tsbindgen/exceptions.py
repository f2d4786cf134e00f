# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Unified exception hierarchy for tsbindgen.

All tsbindgen exceptions inherit from `TsBindgenError`, which carries a message plus optional
structured details and suggestions that the CLI prints alongside the error.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from tsbindgen.binding.inconsistencies import Inconsistency


class TsBindgenError(Exception):
    """Base exception for all tsbindgen errors.

    Provides structured error information including details and suggestions
    for resolution.
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        """Initialize a tsbindgen error.

        Args:
            message: Human-readable error message
            details: Additional context about the error
            suggestions: Actionable suggestions for resolving the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.suggestions = suggestions or []

    def __str__(self) -> str:
        """Return the message with any file path detail appended."""
        if "file_path" in self.details:
            return f"{self.message} (file: {self.details['file_path']})"
        return self.message


class ConfigurationError(TsBindgenError):
    """Configuration and settings errors.

    Raised for invalid settings, unknown target languages or unknown output artifacts.
    """


class SchemaReadError(TsBindgenError):
    """Schema file errors.

    Raised when a grammar or node types file is missing, is not valid JSON, does not match the
    expected document shape, or when a grammar inheritance chain cannot be assembled.
    """


class SchemaInconsistencyError(TsBindgenError):
    """The grammar and node types documents are structurally inconsistent.

    Carries every problem found during a single unification pass; no binding plan is produced.
    """

    def __init__(self, inconsistencies: Sequence[Inconsistency]) -> None:
        """Initialize with the ordered inconsistencies found during unification."""
        self.inconsistencies: tuple[Inconsistency, ...] = tuple(inconsistencies)
        count = len(self.inconsistencies)
        super().__init__(
            f"Found {count} structural {'inconsistency' if count == 1 else 'inconsistencies'} "
            "between the grammar and node types documents",
            details={"count": count},
            suggestions=[
                "Regenerate grammar.json and node-types.json together with `tree-sitter generate`.",
                "Pass the parent grammar with --parent when the grammar uses `inherits`.",
            ],
        )

    def __len__(self) -> int:
        """Number of individual problems."""
        return len(self.inconsistencies)

    def __str__(self) -> str:
        """Render the message followed by a numbered list of problems."""
        lines = [self.message + ":"]
        lines.extend(f"  {i}. {problem}" for i, problem in enumerate(self.inconsistencies, 1))
        return "\n".join(lines)


class RenderError(TsBindgenError):
    """An emission backend failed to render its output."""


__all__ = (
    "ConfigurationError",
    "RenderError",
    "SchemaInconsistencyError",
    "SchemaReadError",
    "TsBindgenError",
)
