# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Models for tree-sitter `grammar.json` documents."""

from types import MappingProxyType
from typing import TYPE_CHECKING

from tsbindgen.core.lazy import create_lazy_getattr


if TYPE_CHECKING:
    from tsbindgen.grammar.document import SCHEMA_URI, GrammarDocument
    from tsbindgen.grammar.rules import Rule, RuleKind, parse_rule


_dynamic_imports: MappingProxyType[str, tuple[str, str]] = MappingProxyType({
    "SCHEMA_URI": (__spec__.parent, "document"),
    "GrammarDocument": (__spec__.parent, "document"),
    "Rule": (__spec__.parent, "rules"),
    "RuleKind": (__spec__.parent, "rules"),
    "parse_rule": (__spec__.parent, "rules"),
})


__getattr__ = create_lazy_getattr(_dynamic_imports, globals(), __name__)


__all__ = ("SCHEMA_URI", "GrammarDocument", "Rule", "RuleKind", "parse_rule")


def __dir__() -> list[str]:
    return list(__all__)
