# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Tests for stack pairing, unpaired-event removal and adjacency filtering.

Tests cover:
- Forward and reverse traversal at top level and at every depth
- Orphan closings and unterminated openings
- Prefix and suffix constraints pruning whole pairs
- Complement regions between spans
"""

from __future__ import annotations

import re

import pytest

from recursive_regex.core.matches import DelimiterEvent, DelimiterRole, MarkerOccurrence, Span
from recursive_regex.engine.pairing import (
    apply_prefix_constraint,
    apply_suffix_constraint,
    complement_regions,
    drop_unpaired,
    pair_partners,
    pair_spans,
)
from recursive_regex.engine.scanner import build_event_stream, merge_events


pytestmark = [pytest.mark.unit]

NESTED = "<a<b<c><d>>>"


def _events(text: str) -> list[DelimiterEvent]:
    return build_event_stream(text, re.compile("<"), re.compile(">"))


def _bounds(spans: list[Span]) -> list[tuple[int, int]]:
    return [(span.start, span.end) for span in spans]


def _span(start: int, end: int) -> Span:
    return Span(
        opening=DelimiterEvent(DelimiterRole.OPENING, MarkerOccurrence(start, start + 1)),
        closing=DelimiterEvent(DelimiterRole.CLOSING, MarkerOccurrence(end - 1, end)),
        depth=1,
    )


class TestPairSpans:
    """Tests for stack-based pairing."""

    def test_top_level_only(self) -> None:
        spans = pair_spans(_events(NESTED))
        assert _bounds(spans) == [(0, 12)]
        assert spans[0].depth == 1

    def test_all_depths_in_closing_order(self) -> None:
        spans = pair_spans(_events(NESTED), all_depths=True)
        assert _bounds(spans) == [(4, 7), (7, 10), (2, 11), (0, 12)]
        assert [span.depth for span in spans] == [3, 3, 2, 1]

    def test_sibling_top_level_spans(self) -> None:
        assert _bounds(pair_spans(_events("<a> <b> <c>"))) == [(0, 3), (4, 7), (8, 11)]

    def test_reverse_top_level_starts_from_the_end(self) -> None:
        spans = pair_spans(_events("<a> <b> <c>"), reverse=True)
        assert _bounds(spans) == [(8, 11), (4, 7), (0, 3)]

    def test_reverse_finds_the_same_pairs_and_depths(self) -> None:
        """On a balanced stream both directions agree on every pair."""
        events = _events("<a<b<c><d<e>>><f>>")
        forward = {(s.start, s.end, s.depth) for s in pair_spans(events, all_depths=True)}
        backward = {
            (s.start, s.end, s.depth) for s in pair_spans(events, all_depths=True, reverse=True)
        }
        assert forward == backward
        assert len(forward) == 6

    def test_limit_stops_early(self) -> None:
        spans = pair_spans(_events(NESTED), all_depths=True, limit=2)
        assert _bounds(spans) == [(4, 7), (7, 10)]

    def test_reverse_limit_reads_only_the_tail(self) -> None:
        spans = pair_spans(_events("<a> <b> <c>"), reverse=True, limit=1)
        assert _bounds(spans) == [(8, 11)]

    def test_orphan_closing_is_skipped(self) -> None:
        events = merge_events(
            [MarkerOccurrence(0, 1)], [MarkerOccurrence(2, 3), MarkerOccurrence(3, 4)]
        )
        assert _bounds(pair_spans(events)) == [(0, 3)]


class TestUnpairedEvents:
    """Tests for `pair_partners` and `drop_unpaired`."""

    def test_partners_are_symmetric(self) -> None:
        partners = pair_partners(_events("<a<b>>"))
        assert partners == {0: 3, 3: 0, 1: 2, 2: 1}

    def test_drops_orphan_closing(self) -> None:
        events = merge_events(
            [MarkerOccurrence(0, 1)], [MarkerOccurrence(2, 3), MarkerOccurrence(4, 5)]
        )
        kept = drop_unpaired(events)
        assert [(e.role, e.start) for e in kept] == [
            (DelimiterRole.OPENING, 0),
            (DelimiterRole.CLOSING, 2),
        ]

    def test_drops_unterminated_opening(self) -> None:
        """The outermost opening never closes, so it can't delimit anything."""
        events = merge_events(
            [MarkerOccurrence(0, 1), MarkerOccurrence(1, 2), MarkerOccurrence(2, 3)],
            [MarkerOccurrence(4, 5), MarkerOccurrence(5, 6)],
        )
        kept = drop_unpaired(events)
        assert [event.start for event in kept] == [1, 2, 4, 5]

    def test_balanced_stream_is_unchanged(self) -> None:
        events = _events(NESTED)
        assert drop_unpaired(events) == events


class TestAdjacencyConstraints:
    """Tests for the prefix and suffix filters."""

    def test_prefix_prunes_pairs_without_prefix(self) -> None:
        """Openings not directly preceded by a digit are removed with their partners."""
        text = "0<a<b<1<c>2>3<d>>>"
        kept = apply_prefix_constraint(text, _events(text), re.compile(r"(?:\d)(?:<)"))

        assert [(e.role.value, e.start, e.end) for e in kept] == [
            ("opening", 0, 2),
            ("opening", 6, 8),
            ("closing", 9, 10),
            ("opening", 12, 14),
            ("closing", 15, 16),
            ("closing", 17, 18),
        ]
        assert _bounds(pair_spans(kept, all_depths=True)) == [(6, 10), (12, 16), (0, 18)]

    def test_prefix_must_touch_the_opening(self) -> None:
        """A prefix occurring earlier, but not right before the opening, doesn't count."""
        text = "1 <a>"
        assert apply_prefix_constraint(text, _events(text), re.compile(r"(?:\d)(?:<)")) == []

    def test_suffix_prunes_pairs_without_suffix(self) -> None:
        text = "<a>x<b>y<c>x"
        kept = apply_suffix_constraint(text, _events(text), re.compile(r"(?:>)(?:x)"))

        assert [(e.role.value, e.start, e.end) for e in kept] == [
            ("opening", 0, 1),
            ("closing", 2, 4),
            ("opening", 8, 9),
            ("closing", 10, 12),
        ]

    def test_suffix_keeps_unrelated_pairs(self) -> None:
        """Pruning an inner pair leaves the enclosing pair alone."""
        text = "<a<b>y>x"
        kept = apply_suffix_constraint(text, _events(text), re.compile(r"(?:>)(?:x)"))
        assert _bounds(pair_spans(kept, all_depths=True)) == [(0, 8)]


class TestComplementRegions:
    """Tests for the regions outside every span."""

    def test_gaps_between_and_around_spans(self) -> None:
        assert complement_regions([_span(1, 3), _span(5, 8)], 10) == [(0, 1), (3, 5), (8, 10)]

    def test_nested_spans_are_merged(self) -> None:
        assert complement_regions([_span(2, 4), _span(0, 10)], 12) == [(10, 12)]

    def test_no_spans_covers_everything(self) -> None:
        assert complement_regions([], 5) == [(0, 5)]

    def test_full_cover_leaves_nothing(self) -> None:
        assert complement_regions([_span(0, 5)], 5) == []
