# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Exception hierarchy for recursive-regex.

All errors raised by this package inherit from `RecursiveRegexError`. Finding
nothing is never an error: matching operations return `None` instead.
"""

from __future__ import annotations

from typing import Any


class RecursiveRegexError(Exception):
    """Base exception for all recursive-regex errors.

    Provides structured error information including details and suggestions
    for resolution.
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message
            details: Additional context about the error
            suggestions: Actionable suggestions for resolving the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.suggestions = suggestions or []

    def __str__(self) -> str:
        """Return descriptive error message with context details."""
        parts = [self.message]
        if self.details:
            detail_parts = [
                f"{key.replace('_', ' ')}: {self.details[key]}"
                for key in ("field", "start", "stop", "index", "pattern")
                if key in self.details
            ]
            if detail_parts:
                parts.append(f"({', '.join(detail_parts)})")
        return " ".join(parts)


class ConfigurationError(RecursiveRegexError):
    """Invalid matcher configuration.

    Raised at construction time for missing or identical markers, a capture
    group name that is too short or not a valid identifier, or a pattern source
    that does not compile.
    """


class WindowError(ConfigurationError):
    """Invalid match window.

    Raised at call time when a start offset or index is negative, or when the
    stop index precedes the start index.
    """


__all__ = ("ConfigurationError", "RecursiveRegexError", "WindowError")
