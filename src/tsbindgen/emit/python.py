# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Python bindings over py-tree-sitter `Node` objects."""

from __future__ import annotations

import keyword

from typing import ClassVar, override

from tsbindgen.emit.backend import JinjaBackend, TargetLanguage


class PythonBackend(JinjaBackend):
    """Renders a constants module and a module of typed wrapper classes."""

    target: ClassVar[str] = str(TargetLanguage.PYTHON)
    file_extension: ClassVar[str] = "py"
    reserved_words: ClassVar[frozenset[str]] = frozenset(keyword.kwlist) | {"node", "text"}
    comment_prefix: ClassVar[str] = "#"

    @override
    def string_literal(self, value: str) -> str:
        return repr(value)


__all__ = ("PythonBackend",)
