# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Settings for tsbindgen.

Configuration precedence (highest to lowest):

1. Command line flags (passed to `TsBindgenSettings(...)` as init arguments)
2. Environment variables prefixed with `TSBINDGEN_` (e.g. `TSBINDGEN_FOR_LANGUAGE=python`)
3. `tsbindgen.toml` in the current directory
4. Defaults
"""

from __future__ import annotations

import logging

from pathlib import Path
from typing import Annotated, Final, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from tsbindgen.core.utils import generate_field_title
from tsbindgen.emit.backend import Artifact


CONFIG_FILE_NAME: Final[str] = "tsbindgen.toml"
DEFAULT_OUTPUT_ROOT: Final[Path] = Path("bindings")

type LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class TsBindgenSettings(BaseSettings):
    """Settings for a generation run."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_ignore_empty=True,
        env_prefix="TSBINDGEN_",
        extra="ignore",
        field_title_generator=generate_field_title,
        frozen=True,
        str_strip_whitespace=True,
        title="tsbindgen Settings",
        use_attribute_docstrings=True,
        validate_by_alias=True,
        validate_by_name=True,
    )

    input_directory: Path = Path("src")
    """Directory holding grammar.json and node-types.json."""

    output_directory: Path | None = None
    """Where generated files go. Defaults to `bindings/<target language>`."""

    for_language: str = "rust"
    """Target language selector for the emission backend."""

    log_level: LogLevel = "WARNING"
    """Log level for the `tsbindgen` logger."""

    rich_logging: bool = True
    """Log through rich's handler instead of plain stderr formatting."""

    parent_grammars: Annotated[tuple[Path, ...], Field(default_factory=tuple)]
    """grammar.json files of the grammars named by `inherits`, nearest ancestor first."""

    @field_validator("for_language")
    @classmethod
    def _normalize_language(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value

    @property
    def log_level_number(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]

    def output_directory_for(self, target: str) -> Path:
        """The configured output directory, or `bindings/<target>`."""
        return self.output_directory or DEFAULT_OUTPUT_ROOT / target

    def output_path(self, target: str, artifact: Artifact, file_extension: str) -> Path:
        return self.output_directory_for(target) / f"{artifact.file_stem}.{file_extension}"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Init arguments, then environment, then `tsbindgen.toml`."""
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=Path(CONFIG_FILE_NAME)),
        )


__all__ = ("CONFIG_FILE_NAME", "DEFAULT_OUTPUT_ROOT", "LogLevel", "TsBindgenSettings")
