# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Emission backends: render an emission request as source code for a target language."""

from types import MappingProxyType
from typing import TYPE_CHECKING

from tsbindgen.core.lazy import create_lazy_getattr


if TYPE_CHECKING:
    from tsbindgen.emit.backend import Artifact, EmissionBackend, JinjaBackend, TargetLanguage
    from tsbindgen.emit.python import PythonBackend
    from tsbindgen.emit.registry import available_targets, get_backend, register_backend
    from tsbindgen.emit.rust import RustBackend


_dynamic_imports: MappingProxyType[str, tuple[str, str]] = MappingProxyType({
    "Artifact": (__spec__.parent, "backend"),
    "EmissionBackend": (__spec__.parent, "backend"),
    "JinjaBackend": (__spec__.parent, "backend"),
    "PythonBackend": (__spec__.parent, "python"),
    "RustBackend": (__spec__.parent, "rust"),
    "TargetLanguage": (__spec__.parent, "backend"),
    "available_targets": (__spec__.parent, "registry"),
    "get_backend": (__spec__.parent, "registry"),
    "register_backend": (__spec__.parent, "registry"),
})


__getattr__ = create_lazy_getattr(_dynamic_imports, globals(), __name__)


__all__ = (
    "Artifact",
    "EmissionBackend",
    "JinjaBackend",
    "PythonBackend",
    "RustBackend",
    "TargetLanguage",
    "available_targets",
    "get_backend",
    "register_backend",
)


def __dir__() -> list[str]:
    return list(__all__)
