# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Tests for `MatcherConfig` validation, derived patterns and copying."""

from __future__ import annotations

import re

import pytest

from recursive_regex.config.matcher import MatcherConfig
from recursive_regex.engine.materializer import CONTENT
from recursive_regex.exceptions import ConfigurationError


pytestmark = [pytest.mark.unit]


@pytest.fixture
def config() -> MatcherConfig:
    return MatcherConfig.create(start_marker="<", end_marker=">", prepended=re.compile(r"\d"))


class TestValidation:
    """Construction-time checks."""

    @pytest.mark.parametrize(
        ("data", "fragment"),
        [
            ({"start_marker": "", "end_marker": ">"}, "must not be empty"),
            ({"start_marker": "<", "end_marker": re.compile("")}, "must not be empty"),
            ({"start_marker": "<", "end_marker": "<"}, "must differ"),
            ({"start_marker": "<", "end_marker": re.compile("<")}, "must differ"),
            ({"start_marker": "<", "end_marker": ">", "capture_group_name": "1st"}, "identifier"),
        ],
    )
    def test_invalid_configs_raise(self, data: dict[str, object], fragment: str) -> None:
        with pytest.raises(ConfigurationError, match=fragment):
            MatcherConfig.create(**data)

    def test_short_group_name_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            MatcherConfig.create(start_marker="<", end_marker=">", capture_group_name="x")
        assert exc_info.value.details["field"] == "capture_group_name"
        assert exc_info.value.suggestions

    def test_non_pattern_marker_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            MatcherConfig.create(start_marker=1, end_marker=">")

    def test_missing_marker_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            MatcherConfig.create(start_marker="<")

    def test_defaults(self) -> None:
        config = MatcherConfig.create(start_marker="<", end_marker=">")
        assert config.case_sensitive
        assert not (config.multi_line or config.unicode or config.dot_all or config.global_search)
        assert config.prepended is None
        assert not config.is_inverse


class TestDerivedPatterns:
    def test_sources(self, config: MatcherConfig) -> None:
        assert config.start_source == "<"
        assert config.end_source == ">"
        assert config.prepended_source == r"\d"
        assert config.appended_source is None
        assert config.inverse_source is None

    def test_compiled_marker_flags_are_ignored(self) -> None:
        config = MatcherConfig.create(start_marker=re.compile("a", re.IGNORECASE), end_marker="b")
        assert config.start_source == "a"
        assert not config.flags & re.IGNORECASE

    def test_flags(self) -> None:
        config = MatcherConfig.create(
            start_marker="<", end_marker=">", case_sensitive=False, multi_line=True
        )
        assert config.flags == re.IGNORECASE | re.MULTILINE | re.ASCII

    def test_pattern(self, config: MatcherConfig) -> None:
        assert config.pattern == rf"(?:\d)(?:<){CONTENT}(?:>)"

    def test_inverse_mode(self) -> None:
        config = MatcherConfig.create(start_marker="<", end_marker=">", inverse_match="x")
        assert config.is_inverse
        assert config.inverse_source == "x"


class TestIdentity:
    def test_equal_configs_hash_alike(self) -> None:
        first = MatcherConfig.create(start_marker="<", end_marker=">", global_search=True)
        second = MatcherConfig.create(start_marker="<", end_marker=">", global_search=True)
        assert first == second
        assert hash(first) == hash(second)

    def test_different_configs_are_unequal(self) -> None:
        first = MatcherConfig.create(start_marker="<", end_marker=">")
        assert first != MatcherConfig.create(start_marker="<", end_marker=">", dot_all=True)

    def test_is_frozen(self, config: MatcherConfig) -> None:
        with pytest.raises(ValueError, match="frozen"):
            config.dot_all = True  # type: ignore[misc]

    def test_repr_shows_non_defaults(self, config: MatcherConfig) -> None:
        text = repr(config)
        assert text.startswith("MatcherConfig(start_marker='<', end_marker='>'")
        assert "prepended=" in text
        assert "dot_all" not in text


class TestCopyWith:
    def test_keeps_unmentioned_fields(self, config: MatcherConfig) -> None:
        copied = config.copy_with(global_search=True)
        assert copied.global_search
        assert copied.prepended == re.compile(r"\d")
        assert config.global_search is False

    def test_none_keeps_the_current_value(self, config: MatcherConfig) -> None:
        assert config.copy_with(prepended=None).prepended == re.compile(r"\d")

    def test_copy_none_clears_optional_fields(self, config: MatcherConfig) -> None:
        copied = config.copy_with(copy_none=True)
        assert copied.prepended is None
        assert copied.start_marker == "<"

    def test_copy_none_keeps_explicit_overrides(self, config: MatcherConfig) -> None:
        copied = config.copy_with(copy_none=True, appended="!")
        assert copied.prepended is None
        assert copied.appended == "!"

    def test_copies_are_validated(self, config: MatcherConfig) -> None:
        with pytest.raises(ConfigurationError):
            config.copy_with(end_marker="<")

    def test_unknown_field_is_rejected(self, config: MatcherConfig) -> None:
        with pytest.raises(ConfigurationError, match="Unknown"):
            config.copy_with(greedy=True)
