# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Set up a logger with optional rich formatting."""

from __future__ import annotations

import logging

from typing import Any, Final

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME: Final[str] = "tsbindgen"
PLAIN_FORMAT: Final[str] = "%(levelname)s %(name)s: %(message)s"


def get_rich_handler(**kwargs: Any) -> RichHandler:
    """A rich handler writing to stderr, so generated output on stdout stays clean."""
    return RichHandler(
        console=Console(stderr=True, markup=True, soft_wrap=True, emoji=True),
        markup=True,
        **kwargs,
    )


def setup_logger(
    name: str | None = LOGGER_NAME,
    *,
    level: int = logging.WARNING,
    rich: bool = True,
    rich_options: dict[str, Any] | None = None,
) -> logging.Logger:
    """Set up a logger with optional rich formatting."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Clear existing handlers to prevent duplication
    logger.handlers.clear()
    if rich:
        logger.addHandler(get_rich_handler(**(rich_options or {})))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
        logger.addHandler(handler)
    return logger


def verbosity_to_level(verbosity: int, default: int = logging.WARNING) -> int:
    """Map repeated `-v` flags to a level: none keeps `default`, one is INFO, two or more DEBUG."""
    if verbosity <= 0:
        return default
    return logging.INFO if verbosity == 1 else logging.DEBUG


__all__ = ("LOGGER_NAME", "get_rich_handler", "setup_logger", "verbosity_to_level")
