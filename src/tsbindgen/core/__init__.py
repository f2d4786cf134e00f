# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Shared base types for tsbindgen models and enums."""

from tsbindgen.core.enum import BaseEnum
from tsbindgen.core.lazy import create_lazy_getattr
from tsbindgen.core.models import BASEDMODEL_CONFIG, FROZEN_BASEDMODEL_CONFIG, BasedModel
from tsbindgen.core.utils import unique_names


__all__ = (
    "BASEDMODEL_CONFIG",
    "FROZEN_BASEDMODEL_CONFIG",
    "BaseEnum",
    "BasedModel",
    "create_lazy_getattr",
    "unique_names",
)
