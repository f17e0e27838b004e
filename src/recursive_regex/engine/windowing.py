# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Index-based selection over ordered matches."""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple, Self

from recursive_regex.engine.patterns import check_offset
from recursive_regex.exceptions import WindowError


class Window(NamedTuple):
    """An inclusive `[start, stop]` range of match indexes.

    Indexes count matches in the requested order: closing order, or its exact
    reverse when `reverse` is set. `stop=None` runs to the last match.
    """

    start: int = 0
    stop: int | None = None
    reverse: bool = False

    @classmethod
    def checked(cls, start: int = 0, stop: int | None = None, *, reverse: bool = False) -> Self:
        """Build a window, rejecting negative starts and inverted ranges."""
        check_offset(start)
        if stop is not None and stop < start:
            raise WindowError("stop must be >= start", details={"start": start, "stop": stop})
        return cls(start=start, stop=stop, reverse=reverse)

    @classmethod
    def first(cls) -> Self:
        return cls(0, 0)

    @classmethod
    def last(cls) -> Self:
        return cls(0, 0, reverse=True)

    @classmethod
    def nth(cls, index: int, *, reverse: bool = False) -> Self:
        check_offset(index, name="index")
        return cls(index, index, reverse=reverse)

    @property
    def limit(self) -> int | None:
        """How many leading items the window needs, or `None` for all of them."""
        return None if self.stop is None else self.stop + 1

    def select[T](self, items: Sequence[T]) -> list[T]:
        """Return the items inside the window; `items` is already in window order."""
        return list(items[self.start : self.limit])


__all__ = ("Window",)
