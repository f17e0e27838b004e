# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Balanced-delimiter matching on top of `re`.

`RecursiveRegex` isolates delimited blocks of text, including nested ones, and
applies its combined pattern to each block separately. The pipeline has four
phases:

    Phase 1: Scanning - find every start and end marker and merge them into one
        ordered stream of delimiter events
    Phase 2: Pairing - optionally prune pairs failing the prefix/suffix
        constraints, then pair events with a stack into spans
    Phase 3: Windowing - pick the spans the caller asked for by index
    Phase 4: Materializing - re-run the combined pattern on each selected span

In inverse mode the prefix/suffix constraints are skipped and phases 3 and 4
are replaced: the inverse pattern is matched in the text outside every balanced
span, and the window is applied to those matches.

Example:
    >>> regex = RecursiveRegex("<", ">", global_search=True)
    >>> regex.string_matches("<a<b<c><d>>>")
    ['<c>', '<d>', '<b<c><d>>', '<a<b<c><d>>>']
"""

from __future__ import annotations

import logging
import re

from typing import Any, Self

from recursive_regex.config.matcher import MatcherConfig
from recursive_regex.core.matches import DelimiterEvent, RegexMatch, Span
from recursive_regex.engine.materializer import materialize
from recursive_regex.engine.pairing import (
    apply_prefix_constraint,
    apply_suffix_constraint,
    complement_regions,
    drop_unpaired,
    pair_spans,
)
from recursive_regex.engine.patterns import MarkerPattern, check_offset, compile_pattern
from recursive_regex.engine.scanner import build_event_stream
from recursive_regex.engine.windowing import Window


logger = logging.getLogger(__name__)


class RecursiveRegex:
    """A pattern matcher for balanced, possibly nested, delimited text.

    Instances are immutable and safe to share between threads; every call
    builds its own working state.

    Attributes:
        config: The validated configuration
        regex: The compiled combined pattern applied to each delimited block
    """

    __slots__ = ("_end", "_inverse", "_prefixed", "_start", "_suffixed", "config", "regex")

    config: MatcherConfig
    regex: re.Pattern[str]

    def __init__(
        self,
        start_marker: MarkerPattern,
        end_marker: MarkerPattern,
        *,
        prepended: MarkerPattern | None = None,
        appended: MarkerPattern | None = None,
        capture_group_name: str | None = None,
        multi_line: bool = False,
        case_sensitive: bool = True,
        unicode: bool = False,
        dot_all: bool = False,
        global_search: bool = False,
        inverse_match: MarkerPattern | None = None,
    ) -> None:
        """Build a matcher.

        Args:
            start_marker: Opening delimiter; a `str` is matched literally
            end_marker: Closing delimiter; must differ from `start_marker`
            prepended: Pattern required directly before each opening delimiter
            appended: Pattern required directly after each closing delimiter
            capture_group_name: Name of the group capturing the delimited text
            multi_line: `^` and `$` match at line breaks
            case_sensitive: Match letter case exactly
            unicode: Unicode instead of ASCII semantics for character classes
            dot_all: `.` matches line breaks
            global_search: Match nested blocks too, not only top-level ones
            inverse_match: Match this pattern only outside delimited blocks

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self._setup(
            MatcherConfig.create(
                start_marker=start_marker,
                end_marker=end_marker,
                prepended=prepended,
                appended=appended,
                capture_group_name=capture_group_name,
                multi_line=multi_line,
                case_sensitive=case_sensitive,
                unicode=unicode,
                dot_all=dot_all,
                global_search=global_search,
                inverse_match=inverse_match,
            )
        )

    @classmethod
    def from_config(cls, config: MatcherConfig) -> Self:
        """Build a matcher from an existing configuration."""
        instance = cls.__new__(cls)
        instance._setup(config)
        return instance

    def _setup(self, config: MatcherConfig) -> None:
        flags = config.flags
        self.config = config
        self.regex = compile_pattern(config.pattern, flags)
        self._start = compile_pattern(config.start_source, flags)
        self._end = compile_pattern(config.end_source, flags)
        self._prefixed = (
            None
            if config.prepended_source is None
            else compile_pattern(f"(?:{config.prepended_source})(?:{config.start_source})", flags)
        )
        self._suffixed = (
            None
            if config.appended_source is None
            else compile_pattern(f"(?:{config.end_source})(?:{config.appended_source})", flags)
        )
        self._inverse = (
            None if config.inverse_source is None else compile_pattern(config.inverse_source, flags)
        )

    @property
    def pattern(self) -> str:
        """Source of the combined pattern applied to each delimited block."""
        return self.regex.pattern

    @property
    def start_marker(self) -> MarkerPattern:
        return self.config.start_marker

    @property
    def end_marker(self) -> MarkerPattern:
        return self.config.end_marker

    @property
    def capture_group_name(self) -> str | None:
        return self.config.capture_group_name

    @property
    def global_search(self) -> bool:
        return self.config.global_search

    @property
    def inverse_match(self) -> MarkerPattern | None:
        return self.config.inverse_match

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def get_matches(
        self, text: str, *, start: int = 0, stop: int | None = None, reverse: bool = False
    ) -> list[RegexMatch] | None:
        """Return the matches whose index lies in `[start, stop]`.

        Indexes count matches in the order their delimiters close. With
        `reverse`, they count from the last match backwards, which only has to
        inspect the tail of the input for top-level searches.

        Args:
            text: Input to search
            start: Index of the first match to return
            stop: Index of the last match to return, or `None` for all remaining
            reverse: Count indexes from the last match

        Returns:
            The selected matches, or `None` if there are none

        Raises:
            WindowError: If `start` is negative or `stop` is less than `start`
        """
        window = Window.checked(start, stop, reverse=reverse)
        matches = self._find(text, window)
        logger.debug("Found %d matches for window %s", len(matches), window)
        return matches or None

    def first_match(self, text: str) -> RegexMatch | None:
        """Return the first match to close in `text`."""
        return self._single(text, Window.first())

    def last_match(self, text: str) -> RegexMatch | None:
        """Return the last match to close in `text`, scanning from the end."""
        return self._single(text, Window.last())

    def nth_match(self, index: int, text: str, *, reverse: bool = False) -> RegexMatch | None:
        """Return the match at `index`, counted from the end when `reverse` is set."""
        return self._single(text, Window.nth(index, reverse=reverse))

    def all_matches(self, text: str, start: int = 0) -> list[RegexMatch] | None:
        """Return every match in `text[start:]`.

        Offsets of the returned matches index `text`, not the slice.
        """
        check_offset(start)
        matches = self._find(text[start:], Window())
        return [match.shifted(start) for match in matches] or None

    def string_match(self, text: str) -> str | None:
        """Return the text of the first match."""
        return found.text if (found := self.first_match(text)) else None

    def string_matches(
        self, text: str, *, start: int = 0, stop: int | None = None, reverse: bool = False
    ) -> list[str] | None:
        """Like `get_matches`, but return the matched text of each match."""
        matches = self.get_matches(text, start=start, stop=stop, reverse=reverse)
        return None if matches is None else [match.text for match in matches]

    def has_match(self, text: str) -> bool:
        """Test the combined pattern against `text`.

        This skips delimiter pairing, so it is cheap but only approximate.
        """
        return self.regex.search(text) is not None

    def match_as_prefix(self, text: str, start: int = 0) -> RegexMatch | None:
        """Match the combined pattern at offset `start` only."""
        check_offset(start)
        return RegexMatch.from_re(found) if (found := self.regex.match(text, start)) else None

    def copy_with(self, *, copy_none: bool = False, **overrides: Any) -> RecursiveRegex:
        """Return a matcher with some configuration fields replaced.

        `None` overrides keep the current value. With `copy_none`, optional
        fields that aren't overridden are cleared.
        """
        return type(self).from_config(self.config.copy_with(copy_none=copy_none, **overrides))

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _single(self, text: str, window: Window) -> RegexMatch | None:
        matches = self._find(text, window)
        return matches[0] if matches else None

    def _find(self, text: str, window: Window) -> list[RegexMatch]:
        events = build_event_stream(text, self._start, self._end)
        if self._inverse is not None:
            matches = self._inverse_matches(text, drop_unpaired(events))
            return window.select(matches[::-1] if window.reverse else matches)
        if len(events) == 2:
            # One opening and one closing: the combined pattern alone is enough.
            matches = [RegexMatch.from_re(found) for found in self.regex.finditer(text)]
            return window.select(matches[::-1] if window.reverse else matches)
        if not (events := self._balanced(text, events)):
            return []
        return [
            found
            for span in self._select_spans(events, window)
            if (found := materialize(self.regex, text, span)) is not None
        ]

    def _balanced(self, text: str, events: list[DelimiterEvent]) -> list[DelimiterEvent]:
        if events and self._prefixed is not None:
            events = apply_prefix_constraint(text, events, self._prefixed)
        if events and self._suffixed is not None:
            events = apply_suffix_constraint(text, events, self._suffixed)
        return drop_unpaired(events)

    def _select_spans(self, events: list[DelimiterEvent], window: Window) -> list[Span]:
        all_depths = self.config.global_search
        if window.reverse and all_depths:
            # A backward walk closes inner spans in a different order; restore
            # the exact reverse of the forward closing order.
            spans = pair_spans(events, all_depths=True, reverse=True)
            spans.sort(key=lambda span: span.closing.start, reverse=True)
        else:
            spans = pair_spans(
                events, all_depths=all_depths, reverse=window.reverse, limit=window.limit
            )
        return window.select(spans)

    def _inverse_matches(self, text: str, events: list[DelimiterEvent]) -> list[RegexMatch]:
        assert self._inverse is not None  # noqa: S101
        spans = pair_spans(events, all_depths=True)
        return [
            RegexMatch.from_re(found)
            for lower, upper in complement_regions(spans, len(text))
            for found in self._inverse.finditer(text, lower, upper)
        ]

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RecursiveRegex) and self.config == other.config

    def __hash__(self) -> int:
        return hash(self.config)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config!r})"


__all__ = ("RecursiveRegex",)
