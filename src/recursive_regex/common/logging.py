# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Set up a logger with optional rich formatting."""

from __future__ import annotations

import logging

from typing import Any

from rich.console import Console
from rich.logging import RichHandler


def get_rich_handler(**kwargs: Any) -> RichHandler:
    """Build a `RichHandler` writing to stderr."""
    return RichHandler(
        console=Console(stderr=True, markup=True, soft_wrap=True), markup=False, **kwargs
    )


def setup_logger(
    name: str | None = "recursive_regex",
    *,
    level: int = logging.WARNING,
    rich: bool = True,
    rich_options: dict[str, Any] | None = None,
) -> logging.Logger:
    """Set up a logger with optional rich formatting.

    Calling this again replaces the handler installed by the previous call. Without
    rich, records propagate to a root handler installed by `logging.basicConfig`.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Clear existing handlers to prevent duplication
    logger.handlers.clear()
    if not rich:
        logging.basicConfig(level=level)
        return logger
    logger.addHandler(get_rich_handler(**(rich_options or {})))
    return logger


__all__ = ("get_rich_handler", "setup_logger")
