# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Tests for index windows over ordered matches."""

from __future__ import annotations

import pytest

from recursive_regex.engine.windowing import Window
from recursive_regex.exceptions import ConfigurationError, WindowError


pytestmark = [pytest.mark.unit]

ITEMS = ["a", "b", "c", "d"]


class TestWindow:
    """Tests for `Window`."""

    @pytest.mark.parametrize(
        ("window", "expected"),
        [
            (Window(), ["a", "b", "c", "d"]),
            (Window(1, 2), ["b", "c"]),
            (Window(2), ["c", "d"]),
            (Window(3, 10), ["d"]),
            (Window(5), []),
            (Window.first(), ["a"]),
            (Window.nth(2), ["c"]),
        ],
    )
    def test_select(self, window: Window, expected: list[str]) -> None:
        assert window.select(ITEMS) == expected

    def test_limit(self) -> None:
        assert Window(0, 0).limit == 1
        assert Window(2, 4).limit == 5
        assert Window(2).limit is None

    def test_last_is_first_in_reverse(self) -> None:
        assert Window.last() == Window(0, 0, reverse=True)

    def test_checked_accepts_single_index_range(self) -> None:
        assert Window.checked(2, 2, reverse=True) == Window(2, 2, True)

    def test_negative_start_is_rejected(self) -> None:
        with pytest.raises(WindowError, match="start must be >= 0"):
            Window.checked(-1)

    def test_inverted_range_is_rejected(self) -> None:
        with pytest.raises(WindowError) as exc_info:
            Window.checked(3, 2)
        assert exc_info.value.details == {"start": 3, "stop": 2}

    def test_negative_index_is_rejected(self) -> None:
        with pytest.raises(WindowError, match="index"):
            Window.nth(-1)

    def test_window_errors_are_configuration_errors(self) -> None:
        with pytest.raises(ConfigurationError):
            Window.checked(-5)
