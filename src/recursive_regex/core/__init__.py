# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Core types shared by the matching engine, configuration and CLI."""

from __future__ import annotations

from recursive_regex.core.enum import BaseEnum
from recursive_regex.core.matches import (
    DelimiterEvent,
    DelimiterRole,
    MarkerOccurrence,
    RegexMatch,
    Span,
)
from recursive_regex.core.models import FROZEN_BASEDMODEL_CONFIG, BasedModel


__all__ = (
    "FROZEN_BASEDMODEL_CONFIG",
    "BaseEnum",
    "BasedModel",
    "DelimiterEvent",
    "DelimiterRole",
    "MarkerOccurrence",
    "RegexMatch",
    "Span",
)
