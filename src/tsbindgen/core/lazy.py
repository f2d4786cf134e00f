# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Lazy re-exports for package `__init__` modules.

The packages re-export their public names without importing their submodules up front, so
`tsbindgen.grammar` can depend on `tsbindgen.binding.identifiers` while `tsbindgen.binding`
depends on `tsbindgen.grammar` without an import cycle.
"""

from __future__ import annotations

from collections.abc import Callable
from importlib import import_module
from types import MappingProxyType


def create_lazy_getattr(
    dynamic_imports: MappingProxyType[str, tuple[str, str]],
    module_globals: dict[str, object],
    module_name: str,
) -> Callable[[str], object]:
    """Create a module `__getattr__` that imports `name` from its submodule on first access."""

    def __getattr__(name: str) -> object:  # noqa: N807
        if name in dynamic_imports:
            parent_module, submodule_name = dynamic_imports[name]
            module = import_module(f"{parent_module}.{submodule_name}")
            result = getattr(module, name)
            module_globals[name] = result  # Cache for future access
            return result
        if name in module_globals:
            return module_globals[name]
        raise AttributeError(f"module {module_name!r} has no attribute {name!r}")

    __getattr__.__module__ = module_name
    __getattr__.__doc__ = f"Dynamic __getattr__ for lazy imports in module {module_name!r}."
    return __getattr__


__all__ = ("create_lazy_getattr",)
