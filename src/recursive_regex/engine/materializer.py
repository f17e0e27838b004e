# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Turn paired spans into final matches.

Phase 4 of the pipeline. Each span is isolated in a probe string: the input
with everything before the span blanked out and everything after it cut off.
The combined pattern is then searched in the probe. Because the probe keeps the
input's length up to the span's end, match offsets index the original input.
"""

from __future__ import annotations

import logging
import re

from recursive_regex.core.matches import RegexMatch, Span


logger = logging.getLogger(__name__)

_NOT_NEWLINE = re.compile(r"[^\n]")

CONTENT = r"(?:.|\n)*"
"""Delimited content matching across line breaks without `re.DOTALL`."""

DOT_ALL_CONTENT = r".*"


def combined_source(
    start_marker: str,
    end_marker: str,
    *,
    prepended: str | None = None,
    appended: str | None = None,
    capture_group_name: str | None = None,
    dot_all: bool = False,
) -> str:
    """Build `prefix? start content end suffix?` from pattern sources.

    Each source is wrapped in a non-capturing group so alternations in one part
    can't swallow its neighbours.
    """
    content = DOT_ALL_CONTENT if dot_all else CONTENT
    if capture_group_name is not None:
        content = f"(?P<{capture_group_name}>{content})"
    source = f"(?:{start_marker}){content}(?:{end_marker})"
    if prepended is not None:
        source = f"(?:{prepended}){source}"
    if appended is not None:
        source = f"{source}(?:{appended})"
    return source


def build_probe(text: str, span: Span) -> str:
    """Blank every non-newline character before the span and cut after it."""
    return _NOT_NEWLINE.sub(" ", text[: span.start]) + text[span.start : span.end]


def materialize(regex: re.Pattern[str], text: str, span: Span) -> RegexMatch | None:
    """Apply the combined pattern to the probe built for `span`."""
    if found := regex.search(build_probe(text, span)):
        return RegexMatch.from_re(found)
    logger.debug("Combined pattern did not match the span at %d:%d", span.start, span.end)
    return None


__all__ = ("CONTENT", "DOT_ALL_CONTENT", "build_probe", "combined_source", "materialize")
