# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Cross-cutting infrastructure for tsbindgen."""

from tsbindgen.common.logging import setup_logger, verbosity_to_level


__all__ = ("setup_logger", "verbosity_to_level")
