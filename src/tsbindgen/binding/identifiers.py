# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Identifiers used as keys for rules, node types and fields, and binding names for node types.

Node types in `node-types.json` are keyed by `(type, named)`. Named node types almost always have
identifier-shaped names, but anonymous node types are literal token text (`"("`, `"+="`,
`"else"`), so every node type is given a binding identifier before it enters a binding plan.
Punctuation is spelled out the same way tree-sitter spells it in its generated parser symbols.
"""

from __future__ import annotations

import re

from types import MappingProxyType
from typing import Annotated, Final

from pydantic import StringConstraints


IDENTIFIER_PATTERN: Final[str] = r"^[A-Za-z_]\w*$"

Identifier = Annotated[str, StringConstraints(pattern=IDENTIFIER_PATTERN)]
"""A validated name token. Equality and ordering are exact string equality and ordering."""

_IDENTIFIER_RE = re.compile(IDENTIFIER_PATTERN)

ANONYMOUS_PREFIX: Final[str] = "anon_"

PUNCTUATION_NAMES: Final[MappingProxyType[str, str]] = MappingProxyType({
    "~": "tilde",
    "`": "bquote",
    "!": "bang",
    "@": "at",
    "#": "pound",
    "$": "dollar",
    "%": "percent",
    "^": "caret",
    "&": "amp",
    "*": "star",
    "(": "lparen",
    ")": "rparen",
    "-": "dash",
    "+": "plus",
    "=": "eq",
    "{": "lbrace",
    "}": "rbrace",
    "[": "lbrack",
    "]": "rbrack",
    "\\": "bslash",
    "|": "pipe",
    ":": "colon",
    ";": "semi",
    '"': "dquote",
    "'": "squote",
    "<": "lt",
    ">": "gt",
    ",": "comma",
    ".": "dot",
    "?": "qmark",
    "/": "slash",
    "\n": "lf",
    "\r": "cr",
    "\t": "tab",
    "\0": "null",
    " ": "space",
})


def is_valid_identifier(value: str) -> bool:
    """Check whether `value` is a valid identifier."""
    return _IDENTIFIER_RE.fullmatch(value) is not None


def sanitize(text: str) -> str:
    """Spell out `text` as a snake_case identifier fragment.

    Word characters keep their case, punctuation is replaced by its name, and anything else
    becomes `u<hex code point>`. Runs are joined with single underscores: `"+="` gives
    `"plus_eq"`, `"@Media"` gives `"at_Media"`.
    """
    parts: list[str] = []
    word: list[str] = []
    for char in text:
        if char.isascii() and (char.isalnum() or char == "_"):
            word.append(char)
            continue
        if word:
            parts.append("".join(word))
            word = []
        parts.append(PUNCTUATION_NAMES.get(char, f"u{ord(char):04x}"))
    if word:
        parts.append("".join(word))
    return "_".join(parts) or "empty"


def binding_identifier(type_name: str, *, named: bool) -> str:
    """Return the binding identifier for a node type.

    Named node types with identifier-shaped names keep their name unchanged (including a leading
    underscore for hidden rules). Anonymous node types are always prefixed with `anon_`, so a
    keyword token `"if"` and a named `if` node never share an identifier. Distinct tokens can
    still share one (`"="` and `"eq"` both give `anon_eq`); the unifier numbers those apart.
    """
    if named:
        if is_valid_identifier(type_name):
            return type_name
        fragment = sanitize(type_name)
        return fragment if is_valid_identifier(fragment) else f"_{fragment}"
    return f"{ANONYMOUS_PREFIX}{sanitize(type_name)}"


__all__ = (
    "ANONYMOUS_PREFIX",
    "IDENTIFIER_PATTERN",
    "PUNCTUATION_NAMES",
    "Identifier",
    "binding_identifier",
    "is_valid_identifier",
    "sanitize",
)
