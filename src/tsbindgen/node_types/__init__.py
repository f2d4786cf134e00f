# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Models for tree-sitter `node-types.json` documents."""

from types import MappingProxyType
from typing import TYPE_CHECKING

from tsbindgen.core.lazy import create_lazy_getattr


if TYPE_CHECKING:
    from tsbindgen.node_types.document import (
        NodeChildren,
        NodeType,
        NodeTypeDefinition,
        NodeTypesDocument,
        RegularDefinition,
        SuperTypeDefinition,
    )


_dynamic_imports: MappingProxyType[str, tuple[str, str]] = MappingProxyType({
    "NodeChildren": (__spec__.parent, "document"),
    "NodeType": (__spec__.parent, "document"),
    "NodeTypeDefinition": (__spec__.parent, "document"),
    "NodeTypesDocument": (__spec__.parent, "document"),
    "RegularDefinition": (__spec__.parent, "document"),
    "SuperTypeDefinition": (__spec__.parent, "document"),
})


__getattr__ = create_lazy_getattr(_dynamic_imports, globals(), __name__)


__all__ = (
    "NodeChildren",
    "NodeType",
    "NodeTypeDefinition",
    "NodeTypesDocument",
    "RegularDefinition",
    "SuperTypeDefinition",
)


def __dir__() -> list[str]:
    return list(__all__)
