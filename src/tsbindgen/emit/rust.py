# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Rust bindings over the `tree-sitter` crate."""

from __future__ import annotations

from typing import ClassVar, Final, override

from tsbindgen.emit.backend import JinjaBackend, TargetLanguage


RUST_KEYWORDS: Final[frozenset[str]] = frozenset({
    "as", "async", "await", "break", "const", "continue", "crate", "dyn", "else", "enum",
    "extern", "false", "fn", "for", "gen", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "self", "Self", "static", "struct", "super",
    "trait", "true", "type", "unsafe", "use", "where", "while", "abstract", "become", "box",
    "do", "final", "macro", "override", "priv", "try", "typeof", "unsized", "virtual", "yield",
})  # fmt: skip

# Keywords that cannot be raw identifiers, and the wrappers' own member names.
SUFFIXED_NAMES: Final[frozenset[str]] = frozenset({"crate", "self", "Self", "super", "node", "text", "from_node"})

_ESCAPES: Final[dict[str, str]] = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}


class RustBackend(JinjaBackend):
    """Renders a `nodes.rs` constants module and a `wrapper.rs` of typed wrapper structs."""

    target: ClassVar[str] = str(TargetLanguage.RUST)
    file_extension: ClassVar[str] = "rs"
    reserved_words: ClassVar[frozenset[str]] = RUST_KEYWORDS | SUFFIXED_NAMES

    @override
    def escape_identifier(self, name: str) -> str:
        if name in SUFFIXED_NAMES:
            return f"{name}_"
        return f"r#{name}" if name in RUST_KEYWORDS else name

    @override
    def string_literal(self, value: str) -> str:
        escaped = "".join(
            _ESCAPES.get(char, f"\\u{{{ord(char):x}}}" if ord(char) < 0x20 or ord(char) == 0x7F else char)
            for char in value
        )
        return f'"{escaped}"'


__all__ = ("RUST_KEYWORDS", "RustBackend")
