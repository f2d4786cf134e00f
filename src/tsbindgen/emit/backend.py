# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""The emission backend interface and the Jinja2-based implementation the built-in targets share.

A backend turns an `EmissionRequest` into source text for one target language. The rest of
tsbindgen only talks to `EmissionBackend`; nothing outside a backend knows what its output
looks like.
"""

from __future__ import annotations

import logging

from collections.abc import Callable
from typing import Any, ClassVar, Final, Protocol, runtime_checkable

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from tsbindgen._version import __version__
from tsbindgen.binding.request import EmissionRequest
from tsbindgen.core import BaseEnum
from tsbindgen.exceptions import RenderError


logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE: Final[str] = "tsbindgen"
TEMPLATE_SUFFIX: Final[str] = ".jinja"


class TargetLanguage(BaseEnum):
    """Target languages with a built-in backend."""

    PYTHON = "python"
    RUST = "rust"


class Artifact(BaseEnum):
    """The files a backend can produce from one request."""

    CONSTANTS = "constants"
    """Node kind and field name constants."""

    BINDINGS = "bindings"
    """Typed wrapper types with one accessor per field."""

    @property
    def file_stem(self) -> str:
        """Output file name without extension."""
        return {Artifact.CONSTANTS: "nodes", Artifact.BINDINGS: "wrapper"}[self]


@runtime_checkable
class EmissionBackend(Protocol):
    """Renders emission requests for one target language."""

    @property
    def target(self) -> str:
        """The target selector this backend is registered under."""
        ...

    @property
    def file_extension(self) -> str:
        """Extension of the files it writes, without the dot."""
        ...

    def artifacts(self) -> tuple[Artifact, ...]:
        """The artifacts this backend can render."""
        ...

    def render(self, request: EmissionRequest, artifact: Artifact) -> str:
        """Render one artifact.

        Raises:
            RenderError: if the artifact is not supported or rendering fails.
        """
        ...


class JinjaBackend:
    """A backend that renders one template per artifact from `tsbindgen/templates/<target>/`.

    Subclasses set `target`, `file_extension` and `reserved_words`, and may add filters. Templates
    are named `<artifact>.<extension>.jinja` and see the request as `request`.
    """

    target: ClassVar[str]
    file_extension: ClassVar[str]
    reserved_words: ClassVar[frozenset[str]] = frozenset()
    comment_prefix: ClassVar[str] = "//"

    def __init__(self) -> None:
        self.environment = Environment(
            loader=PackageLoader(TEMPLATE_PACKAGE, f"templates/{self.target}"),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.environment.filters.update(self.filters())

    def filters(self) -> dict[str, Callable[..., Any]]:
        """Filters available to this backend's templates."""
        return {"ident": self.escape_identifier, "literal": self.string_literal}

    def escape_identifier(self, name: str) -> str:
        """Make `name` usable as an identifier in the target language."""
        return f"{name}_" if name in self.reserved_words else name

    def string_literal(self, value: str) -> str:
        """Spell `value` as a string literal in the target language."""
        raise NotImplementedError

    def artifacts(self) -> tuple[Artifact, ...]:
        return tuple(Artifact)

    def template_name(self, artifact: Artifact) -> str:
        return f"{artifact}.{self.file_extension}{TEMPLATE_SUFFIX}"

    def file_name(self, artifact: Artifact) -> str:
        return f"{artifact.file_stem}.{self.file_extension}"

    def header(self, request: EmissionRequest) -> str:
        """The do-not-edit banner at the top of every generated file."""
        return (
            f"{self.comment_prefix} Generated by tsbindgen {__version__} from the "
            f"{request.grammar_name} grammar. Do not edit by hand."
        )

    def render(self, request: EmissionRequest, artifact: Artifact) -> str:
        if artifact not in self.artifacts():
            raise RenderError(
                f"The {self.target} backend cannot render {artifact}",
                details={"target": self.target, "artifact": str(artifact)},
                suggestions=[f"Choose one of: {', '.join(str(a) for a in self.artifacts())}"],
            )
        name = self.template_name(artifact)
        logger.debug("Rendering %s with %s", artifact, name)
        try:
            template = self.environment.get_template(name)
            return template.render(request=request, header=self.header(request))
        except TemplateError as e:
            raise RenderError(
                f"Failed to render {artifact} for {self.target}: {e}",
                details={"target": self.target, "artifact": str(artifact), "template": name},
            ) from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}(target={self.target!r})"


__all__ = ("Artifact", "EmissionBackend", "JinjaBackend", "TargetLanguage")
