# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""recursive-regex: regular expressions for balanced, nested delimiters."""

from recursive_regex._version import __version__
from recursive_regex.config.matcher import MatcherConfig
from recursive_regex.core.matches import RegexMatch
from recursive_regex.engine.patterns import MarkerPattern, PatternMatcher, PlainPatternMatcher
from recursive_regex.exceptions import ConfigurationError, RecursiveRegexError, WindowError
from recursive_regex.matcher import RecursiveRegex


__all__ = (
    "ConfigurationError",
    "MarkerPattern",
    "MatcherConfig",
    "PatternMatcher",
    "PlainPatternMatcher",
    "RecursiveRegex",
    "RecursiveRegexError",
    "RegexMatch",
    "WindowError",
    "__version__",
)
