# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Configuration for tsbindgen."""

from tsbindgen.config.settings import CONFIG_FILE_NAME, TsBindgenSettings


__all__ = ("CONFIG_FILE_NAME", "TsBindgenSettings")
