# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""tsbindgen: typed bindings generated from tree-sitter grammars."""

from tsbindgen._version import __version__
from tsbindgen.exceptions import (
    ConfigurationError,
    RenderError,
    SchemaInconsistencyError,
    SchemaReadError,
    TsBindgenError,
)


__all__ = (
    "ConfigurationError",
    "RenderError",
    "SchemaInconsistencyError",
    "SchemaReadError",
    "TsBindgenError",
    "__version__",
)
