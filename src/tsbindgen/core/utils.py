# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Common utilities for model titles and generated names."""

from typing import Any, cast

import textcase

from pydantic.fields import ComputedFieldInfo, FieldInfo


def generate_title(model: type[Any]) -> str:
    """Generate a title for a model."""
    model_name = model.__name__ if hasattr(model, "__name__") else str(model)
    return textcase.title(model_name.replace("Model", ""))


def generate_field_title(name: str, info: FieldInfo | ComputedFieldInfo) -> str:
    """Generate a title for a model field."""
    if hasattr(info, "title") and (titled := info.title):
        return titled
    if aliased := info.alias or (
        hasattr(info, "serialization_alias") and cast(FieldInfo, info).serialization_alias
    ):
        return textcase.sentence(aliased)
    return textcase.sentence(name)


def unique_names(candidates: list[str]) -> list[str]:
    """Make a list of generated names unique, keeping the first occurrence unchanged.

    Later duplicates get a numeric suffix (`Name2`, `Name3`, ...) that is not itself one of the
    candidates, so a name that occurs once is never changed. The result depends only on the
    order of `candidates`, so callers that pass a stable order get stable names.
    """
    reserved = set(candidates)
    seen: set[str] = set()
    result: list[str] = []
    for candidate in candidates:
        name = candidate
        counter = 2
        while name in seen or (name != candidate and name in reserved):
            name = f"{candidate}{counter}"
            counter += 1
        seen.add(name)
        result.append(name)
    return result


__all__ = ("generate_field_title", "generate_title", "unique_names")
