# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Matcher configuration and process-wide settings."""

from __future__ import annotations

from recursive_regex.config.matcher import MatcherConfig
from recursive_regex.config.settings import (
    LoggingSettings,
    RecursiveRegexSettings,
    get_settings,
    reset_settings,
)


__all__ = (
    "LoggingSettings",
    "MatcherConfig",
    "RecursiveRegexSettings",
    "get_settings",
    "reset_settings",
)
