# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Pattern primitives and the `PatternMatcher` interface.

`re` is the linear pattern engine everything else is layered on. This module
turns user-supplied markers into pattern sources, compiles them with the
configured mode flags, and defines the interface shared by plain patterns and
the delimiter engine.
"""

from __future__ import annotations

import re

from typing import Protocol, runtime_checkable

from recursive_regex.core.matches import RegexMatch
from recursive_regex.exceptions import ConfigurationError, WindowError


type MarkerPattern = str | re.Pattern[str]
"""A `str` is matched literally; a compiled pattern contributes its source."""


def pattern_source(pattern: MarkerPattern) -> str:
    """Return the regex source for a marker.

    The flags of a compiled pattern are deliberately dropped; the matcher's own
    mode flags are applied when the source is recompiled.
    """
    if isinstance(pattern, re.Pattern):
        return pattern.pattern
    return re.escape(pattern)


def compile_flags(
    *, multi_line: bool = False, case_sensitive: bool = True, unicode: bool = False, dot_all: bool = False
) -> re.RegexFlag:
    """Translate the matcher's mode switches into `re` flags."""
    flags = re.NOFLAG
    if multi_line:
        flags |= re.MULTILINE
    if not case_sensitive:
        flags |= re.IGNORECASE
    if not unicode:
        flags |= re.ASCII
    if dot_all:
        flags |= re.DOTALL
    return flags


def compile_pattern(source: str, flags: re.RegexFlag) -> re.Pattern[str]:
    """Compile `source`, reporting failures as configuration errors."""
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise ConfigurationError(
            f"Pattern does not compile: {e.msg}",
            details={"pattern": source, "position": e.pos},
            suggestions=["Pass a plain string to match a marker literally."],
        ) from e


def check_offset(start: int, *, name: str = "start") -> None:
    """Reject negative offsets and indexes."""
    if start < 0:
        raise WindowError(f"{name} must be >= 0", details={name: start})


@runtime_checkable
class PatternMatcher(Protocol):
    """The matching capabilities callers depend on.

    Implemented by `PlainPatternMatcher` for ordinary patterns and by
    `RecursiveRegex` for balanced delimiters, so either can be passed wherever a
    matcher is expected.
    """

    def first_match(self, text: str) -> RegexMatch | None:
        """Return the first match in `text`, or `None`."""
        ...

    def all_matches(self, text: str, start: int = 0) -> list[RegexMatch] | None:
        """Return every match at or after `start`, or `None`."""
        ...

    def has_match(self, text: str) -> bool:
        """Return whether `text` contains a match."""
        ...

    def match_as_prefix(self, text: str, start: int = 0) -> RegexMatch | None:
        """Match only at offset `start`."""
        ...

    def string_match(self, text: str) -> str | None:
        """Return the text of the first match, or `None`."""
        ...


class PlainPatternMatcher:
    """Adapts a single `re` pattern to the `PatternMatcher` interface."""

    __slots__ = ("regex",)

    def __init__(self, pattern: MarkerPattern, flags: re.RegexFlag = re.NOFLAG) -> None:
        """Wrap `pattern`; plain strings are matched literally."""
        if isinstance(pattern, re.Pattern) and not flags:
            self.regex = pattern
        else:
            self.regex = compile_pattern(pattern_source(pattern), flags)

    def first_match(self, text: str) -> RegexMatch | None:
        return RegexMatch.from_re(found) if (found := self.regex.search(text)) else None

    def all_matches(self, text: str, start: int = 0) -> list[RegexMatch] | None:
        check_offset(start)
        matches = [RegexMatch.from_re(found) for found in self.regex.finditer(text, start)]
        return matches or None

    def has_match(self, text: str) -> bool:
        return self.regex.search(text) is not None

    def match_as_prefix(self, text: str, start: int = 0) -> RegexMatch | None:
        check_offset(start)
        return RegexMatch.from_re(found) if (found := self.regex.match(text, start)) else None

    def string_match(self, text: str) -> str | None:
        return found.text if (found := self.first_match(text)) else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.regex.pattern!r})"


__all__ = (
    "MarkerPattern",
    "PatternMatcher",
    "PlainPatternMatcher",
    "check_offset",
    "compile_flags",
    "compile_pattern",
    "pattern_source",
)
