# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Base model implementations for tsbindgen."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from tsbindgen.core.utils import generate_field_title, generate_title


# ================================================
# *      Pydantic Base Implementations
# ================================================

BASEDMODEL_CONFIG = ConfigDict(
    arbitrary_types_allowed=True,
    field_title_generator=generate_field_title,
    model_title_generator=generate_title,
    serialize_by_alias=True,
    use_attribute_docstrings=True,
    validate_by_alias=True,
    validate_by_name=True,
    cache_strings="all",
)
FROZEN_BASEDMODEL_CONFIG = BASEDMODEL_CONFIG | ConfigDict(frozen=True)


class BasedModel(BaseModel):
    """A baser `BaseModel` for all models in tsbindgen. Models are immutable once validated."""

    model_config = FROZEN_BASEDMODEL_CONFIG


__all__ = ("BASEDMODEL_CONFIG", "FROZEN_BASEDMODEL_CONFIG", "BasedModel")
