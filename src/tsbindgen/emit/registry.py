# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Backend registry, keyed by target selector.

The built-in backends are registered on first use. Other backends can be added with
`register_backend()`; nothing else in tsbindgen needs to know about them.
"""

from __future__ import annotations

import logging

from tsbindgen.emit.backend import EmissionBackend, TargetLanguage
from tsbindgen.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

_backends: dict[str, EmissionBackend] = {}


def _normalize(target: str | TargetLanguage) -> str:
    if isinstance(target, TargetLanguage):
        return str(target)
    try:
        return str(TargetLanguage.from_string(target))
    except ValueError:
        return target.strip().lower()


def _register_builtins() -> None:
    from tsbindgen.emit.python import PythonBackend
    from tsbindgen.emit.rust import RustBackend

    for backend in (PythonBackend(), RustBackend()):
        _backends.setdefault(backend.target, backend)


def register_backend(backend: EmissionBackend, *, replace: bool = False) -> None:
    """Register `backend` under its `target`.

    Raises:
        ConfigurationError: if the target is already taken and `replace` is false.
    """
    if not isinstance(backend, EmissionBackend):
        raise ConfigurationError(f"{backend!r} does not implement the emission backend interface")
    if not _backends:
        _register_builtins()
    target = _normalize(backend.target)
    if target in _backends and not replace:
        raise ConfigurationError(
            f"A backend for {target!r} is already registered",
            details={"target": target, "backend": repr(_backends[target])},
            suggestions=["Pass replace=True to override it."],
        )
    logger.debug("Registered %s backend %r", target, backend)
    _backends[target] = backend


def get_backend(target: str | TargetLanguage) -> EmissionBackend:
    """Return the backend for `target`.

    Raises:
        ConfigurationError: if no backend is registered for it.
    """
    if not _backends:
        _register_builtins()
    key = _normalize(target)
    if (backend := _backends.get(key)) is None:
        raise ConfigurationError(
            f"No emission backend for target language {key!r}",
            details={"target": key},
            suggestions=[f"Available targets: {', '.join(available_targets())}"],
        )
    return backend


def available_targets() -> tuple[str, ...]:
    """Registered target selectors, sorted."""
    if not _backends:
        _register_builtins()
    return tuple(sorted(_backends))


__all__ = ("available_targets", "get_backend", "register_backend")
