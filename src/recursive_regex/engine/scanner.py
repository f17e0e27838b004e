# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Marker scanning and event stream construction.

Phase 1 of the pipeline: find every start and end marker occurrence and merge
them into a single stream of delimiter events ordered by position.
"""

from __future__ import annotations

import logging
import re

from recursive_regex.core.matches import DelimiterEvent, DelimiterRole, MarkerOccurrence


logger = logging.getLogger(__name__)


def scan_markers(pattern: re.Pattern[str], text: str) -> list[MarkerOccurrence]:
    """Find every non-overlapping occurrence of `pattern` in document order.

    Zero-width matches cannot delimit anything and are skipped.
    """
    return [
        MarkerOccurrence.from_match(match)
        for match in pattern.finditer(text)
        if match.end() > match.start()
    ]


def merge_events(
    openings: list[MarkerOccurrence], closings: list[MarkerOccurrence]
) -> list[DelimiterEvent]:
    """Merge both occurrence lists into one stream ordered by start offset.

    An opening sorts before a closing that starts at the same offset.
    """
    events = [DelimiterEvent(DelimiterRole.OPENING, occurrence) for occurrence in openings]
    events.extend(DelimiterEvent(DelimiterRole.CLOSING, occurrence) for occurrence in closings)
    return sorted(events, key=lambda event: (event.start, event.role.sort_rank))


def build_event_stream(
    text: str, start_marker: re.Pattern[str], end_marker: re.Pattern[str]
) -> list[DelimiterEvent]:
    """Scan `text` for both markers and return the merged event stream.

    Returns an empty list when either marker never occurs. End markers that
    begin before the first start marker can't close anything and are dropped.
    When the counts still differ, the longer list is cut down to the length of
    the shorter one, keeping its leading occurrences.

    Args:
        text: The input to scan
        start_marker: Compiled opening marker
        end_marker: Compiled closing marker

    Returns:
        Delimiter events in document order
    """
    openings = scan_markers(start_marker, text)
    if not openings:
        return []
    first_opening = openings[0].start
    closings = [
        occurrence for occurrence in scan_markers(end_marker, text) if occurrence.start >= first_opening
    ]
    if not closings:
        return []

    if len(openings) != len(closings):
        logger.warning(
            "Unbalanced delimiters: %d opening and %d closing markers; ignoring the trailing %d",
            len(openings),
            len(closings),
            abs(len(openings) - len(closings)),
        )
        count = min(len(openings), len(closings))
        openings, closings = openings[:count], closings[:count]

    return merge_events(openings, closings)


__all__ = ("build_event_stream", "merge_events", "scan_markers")
