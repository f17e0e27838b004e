# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Balance pairing and adjacency filtering.

Phase 2 of the pipeline. Opening and closing events are paired with a stack:
each closing event closes the most recently opened region that is still open.
The adjacency filter prunes pairs whose markers are not directly preceded or
followed by a required pattern, and the complement helpers compute the text
lying outside every pair.
"""

from __future__ import annotations

import logging
import re

from collections.abc import Sequence

from recursive_regex.core.matches import DelimiterEvent, DelimiterRole, MarkerOccurrence, Span


logger = logging.getLogger(__name__)


def pair_partners(events: Sequence[DelimiterEvent]) -> dict[int, int]:
    """Map the index of every paired event to the index of its partner.

    Closing events that find nothing open, and openings that are never closed,
    have no entry.
    """
    stack: list[int] = []
    partners: dict[int, int] = {}
    for index, event in enumerate(events):
        if event.is_opening:
            stack.append(index)
        elif stack:
            opening = stack.pop()
            partners[opening] = index
            partners[index] = opening
    return partners


def drop_unpaired(events: Sequence[DelimiterEvent]) -> list[DelimiterEvent]:
    """Remove orphan closings and unterminated openings from the stream.

    What's left is balanced, so walking it forward or backward yields the same
    pairs at the same depths.
    """
    partners = pair_partners(events)
    if len(partners) != len(events):
        logger.debug("Dropping %d unpaired delimiter events", len(events) - len(partners))
    return [event for index, event in enumerate(events) if index in partners]


def pair_spans(
    events: Sequence[DelimiterEvent],
    *,
    all_depths: bool = False,
    reverse: bool = False,
    limit: int | None = None,
) -> list[Span]:
    """Pair opening and closing events into spans.

    Walking forward, openings are pushed and closings pop. Walking in reverse the
    stream is read tail-to-head and the roles swap. Every pop records a span when
    `all_depths` is set or when the popped event is the only one open.

    Args:
        events: Delimiter events in document order
        all_depths: Record spans at every depth instead of only top-level ones
        reverse: Walk the stream from its end
        limit: Stop once this many spans have been recorded

    Returns:
        Spans in the order the traversal closed them
    """
    pushed = DelimiterRole.CLOSING if reverse else DelimiterRole.OPENING
    stack: list[DelimiterEvent] = []
    spans: list[Span] = []
    for event in reversed(events) if reverse else events:
        if event.role is pushed:
            stack.append(event)
            continue
        if not stack:
            continue
        if all_depths or len(stack) == 1:
            opening, closing = (event, stack[-1]) if reverse else (stack[-1], event)
            spans.append(Span(opening=opening, closing=closing, depth=len(stack)))
            if limit is not None and len(spans) >= limit:
                break
        stack.pop()
    return spans


def _last_match_ending_at(
    pattern: re.Pattern[str], text: str, lower: int, upper: int
) -> re.Match[str] | None:
    matches = list(pattern.finditer(text, lower, upper))
    return matches[-1] if matches and matches[-1].end() == upper else None


def apply_prefix_constraint(
    text: str, events: Sequence[DelimiterEvent], pattern: re.Pattern[str]
) -> list[DelimiterEvent]:
    """Keep only pairs whose opening marker is directly preceded by the prefix.

    `pattern` is the prefix followed by the start marker. The stream is read
    start to end; an opening passes when the last occurrence of `pattern`
    between the previous event and the opening ends exactly where the opening
    ends. Passing openings are widened to include the prefix. Failing openings
    are pruned together with their closing partner; no other pairing changes.
    """
    partners = pair_partners(events)
    kept = list(events)
    dropped: set[int] = set()
    last_end = 0
    for index, event in enumerate(events):
        if event.is_opening:
            if widened := _last_match_ending_at(pattern, text, last_end, event.end):
                kept[index] = event.with_occurrence(MarkerOccurrence.from_match(widened))
            else:
                dropped.add(index)
                if index in partners:
                    dropped.add(partners[index])
        last_end = event.end
    return [event for index, event in enumerate(kept) if index not in dropped]


def apply_suffix_constraint(
    text: str, events: Sequence[DelimiterEvent], pattern: re.Pattern[str]
) -> list[DelimiterEvent]:
    """Keep only pairs whose closing marker is directly followed by the suffix.

    `pattern` is the end marker followed by the suffix. The stream is read end
    to start; a closing passes when `pattern` matches at its start offset
    without reaching past the next event. Passing closings are widened to
    include the suffix; failing ones are pruned with their opening partner.
    """
    partners = pair_partners(events)
    kept = list(events)
    dropped: set[int] = set()
    last_start = len(text)
    for index in range(len(events) - 1, -1, -1):
        event = events[index]
        if not event.is_opening:
            if widened := pattern.match(text, event.start, last_start):
                kept[index] = event.with_occurrence(MarkerOccurrence.from_match(widened))
            else:
                dropped.add(index)
                if index in partners:
                    dropped.add(partners[index])
        last_start = event.start
    return [event for index, event in enumerate(kept) if index not in dropped]


def complement_regions(spans: Sequence[Span], length: int) -> list[tuple[int, int]]:
    """Return the `(start, end)` regions of `[0, length)` not covered by any span."""
    regions: list[tuple[int, int]] = []
    cursor = 0
    for start, end in sorted((span.start, span.end) for span in spans):
        if start > cursor:
            regions.append((cursor, start))
        cursor = max(cursor, end)
    if cursor < length:
        regions.append((cursor, length))
    return regions


__all__ = (
    "apply_prefix_constraint",
    "apply_suffix_constraint",
    "complement_regions",
    "drop_unpaired",
    "pair_partners",
    "pair_spans",
)
