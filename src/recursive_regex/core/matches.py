# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Value types flowing through the delimiter pipeline.

`MarkerOccurrence`, `DelimiterEvent` and `Span` are immutable tuples created fresh
on every call. `RegexMatch` is the externally visible result.
"""

from __future__ import annotations

import re

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, NamedTuple, Self

from pydantic import Field, NonNegativeInt, model_validator

from recursive_regex.core.enum import BaseEnum
from recursive_regex.core.models import FROZEN_BASEDMODEL_CONFIG, BasedModel


_NO_CAPTURES: Mapping[str, str | None] = MappingProxyType({})


class DelimiterRole(BaseEnum):
    """Whether a delimiter event opens or closes a delimited region."""

    OPENING = "opening"
    CLOSING = "closing"

    @property
    def sort_rank(self) -> int:
        """Openings sort before closings that start at the same offset."""
        return 0 if self is DelimiterRole.OPENING else 1


class MarkerOccurrence(NamedTuple):
    """One occurrence of a marker pattern in the input.

    Offsets are half-open. `captures` holds the named groups of the marker match.
    """

    start: int
    end: int
    captures: Mapping[str, str | None] = _NO_CAPTURES

    @classmethod
    def from_match(cls, match: re.Match[str]) -> Self:
        """Build an occurrence from a `re` match."""
        groups = match.groupdict()
        return cls(
            start=match.start(),
            end=match.end(),
            captures=MappingProxyType(groups) if groups else _NO_CAPTURES,
        )


class DelimiterEvent(NamedTuple):
    """A marker occurrence tagged with its role in the event stream."""

    role: DelimiterRole
    occurrence: MarkerOccurrence

    @property
    def start(self) -> int:
        """Start offset of the underlying occurrence."""
        return self.occurrence.start

    @property
    def end(self) -> int:
        """End offset of the underlying occurrence."""
        return self.occurrence.end

    @property
    def is_opening(self) -> bool:
        """Whether this event opens a region."""
        return self.role is DelimiterRole.OPENING

    def with_occurrence(self, occurrence: MarkerOccurrence) -> DelimiterEvent:
        """Return a copy of this event carrying a different occurrence."""
        return self._replace(occurrence=occurrence)


class Span(NamedTuple):
    """A balanced pair of opening and closing events.

    `depth` is the height of the open-event stack when the pair was closed; 1 is
    top-level.
    """

    opening: DelimiterEvent
    closing: DelimiterEvent
    depth: int

    @property
    def start(self) -> int:
        """Offset where the delimited region begins."""
        return self.opening.start

    @property
    def end(self) -> int:
        """Offset where the delimited region ends (exclusive)."""
        return self.closing.end


class RegexMatch(BasedModel):
    """A match produced by a pattern matcher.

    Offsets always index the original input string, whichever probe or window the
    match was found in.
    """

    model_config = FROZEN_BASEDMODEL_CONFIG

    start: Annotated[NonNegativeInt, Field(description="""Offset of the first matched character.""")]
    end: Annotated[NonNegativeInt, Field(description="""Offset just past the last matched character.""")]
    text: Annotated[str, Field(description="""The matched text.""")]
    groups: Annotated[
        dict[str, str | None],
        Field(
            default_factory=dict,
            description="""Named capture groups of the match, including the delimited content group if one was configured.""",
        ),
    ]

    @model_validator(mode="after")
    def _check_offsets(self) -> Self:
        if self.end < self.start:
            raise ValueError(f"Match end {self.end} precedes its start {self.start}")
        if len(self.text) != self.end - self.start:
            raise ValueError("Match text length does not agree with its offsets")
        return self

    @classmethod
    def from_re(cls, match: re.Match[str]) -> Self:
        """Convert a `re` match; its offsets must already index the original input."""
        return cls(
            start=match.start(), end=match.end(), text=match.group(0), groups=match.groupdict()
        )

    def span(self) -> tuple[int, int]:
        """Return `(start, end)` like `re.Match.span`."""
        return self.start, self.end

    def group(self, name: int | str = 0) -> str | None:
        """Return the whole match for `0`, otherwise the named group."""
        if name == 0:
            return self.text
        if isinstance(name, str) and name in self.groups:
            return self.groups[name]
        raise IndexError(f"no such group: {name!r}")

    def __getitem__(self, name: int | str) -> str | None:
        """Shorthand for `group`."""
        return self.group(name)

    def shifted(self, offset: int) -> RegexMatch:
        """Return this match with both offsets moved by `offset`."""
        if not offset:
            return self
        return self.model_copy(update={"start": self.start + offset, "end": self.end + offset})


__all__ = ("DelimiterEvent", "DelimiterRole", "MarkerOccurrence", "RegexMatch", "Span")
