# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Base enum class for the tsbindgen project."""

from __future__ import annotations

import contextlib

from enum import Enum, unique
from functools import cached_property
from types import MappingProxyType
from typing import Self, override

import textcase


@unique
class BaseEnum(Enum):
    """An enum class that provides common functionality for all string enums in tsbindgen.

    BaseEnum converts flexibly between strings and members (so `"PREC_LEFT"`, `"prec-left"` and
    `"PrecLeft"` all find the same member), which keeps CLI flags, settings files and schema
    tags forgiving about case and separators.
    """

    @staticmethod
    def _deconstruct_string(value: str) -> list[str]:
        """Deconstruct a string into its lowercase component parts."""
        value = value.strip().lower().replace("-", "_").replace(" ", "_")
        return [v for v in value.split("_") if v]

    @staticmethod
    def _multiply_variations(s: str) -> set[str]:
        """Generate multiple case variations of a string."""
        return {
            s,
            textcase.upper(s),
            textcase.lower(s),
            textcase.title(s),
            textcase.pascal(s),
            textcase.snake(s),
            textcase.kebab(s),
            textcase.camel(s),
            textcase.constant(s),
        }

    @cached_property
    def aka(self) -> tuple[str, ...]:
        """Return every accepted spelling of this member."""
        names = {str(self.value), self.name, self.variable}
        names |= {n for name in names.copy() for n in self._multiply_variations(name)}
        return tuple(sorted(names))

    @classmethod
    def aliases(cls) -> MappingProxyType[str, Self]:
        """Map every accepted spelling to its member."""
        alias_map: dict[str, Self] = {str(member.value): member for member in cls}
        alias_map.update({alias: member for member in cls for alias in member.aka if alias not in alias_map})
        return MappingProxyType(alias_map)

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Convert a string to the corresponding enum member.

        Raises:
            ValueError: if no member matches.
        """
        lowered = value.strip().lower()
        if literal := next(
            (member for member in cls if str(member.value).lower() == lowered or member.name.lower() == lowered),
            None,
        ):
            return literal
        if found := next(
            (member for alias, member in cls.aliases().items() if alias.lower() == lowered), None
        ):
            return found
        parts = cls._deconstruct_string(value)
        if found := next(
            (member for member in cls if cls._deconstruct_string(member.name) == parts), None
        ):
            return found
        raise ValueError(f"{value} is not a valid {cls.__qualname__} member")

    @classmethod
    @override
    def _missing_(cls, value: object) -> Self | None:
        """Handle missing values when converting from a string to an enum member."""
        if not isinstance(value, str):
            return None
        with contextlib.suppress(ValueError):
            return cls.from_string(value)
        return None

    @property
    def variable(self) -> str:
        """Return the member as a snake_case variable name."""
        return textcase.snake(str(self.value))

    @property
    def as_title(self) -> str:
        """Return the title-cased representation of the enum member."""
        return textcase.title(str(self.value))

    def __str__(self) -> str:
        """Return the member's value."""
        return str(self.value)


__all__ = ("BaseEnum",)
