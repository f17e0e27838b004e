# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Global pytest configuration and fixtures for recursive-regex tests."""

from __future__ import annotations

import os

from collections.abc import Iterator
from pathlib import Path

import pytest

from recursive_regex.config.settings import reset_settings
from recursive_regex.matcher import RecursiveRegex


@pytest.fixture(autouse=True)
def isolated_test_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure all tests run in an isolated environment.

    This autouse fixture keeps local configuration out of the tests by:
    - Running each test from an empty temporary directory, so no config files are found
    - Removing every RECURSIVE_REGEX_* environment variable
    - Resetting the global settings before and after the test
    """
    for name in list(os.environ):
        if name.upper().startswith("RECURSIVE_REGEX_"):
            monkeypatch.delenv(name)
    workdir = tmp_path / "work"
    workdir.mkdir(exist_ok=True)
    monkeypatch.chdir(workdir)

    reset_settings()

    yield

    reset_settings()


@pytest.fixture
def angle() -> RecursiveRegex:
    """Top-level matcher for `<` ... `>`."""
    return RecursiveRegex("<", ">")


@pytest.fixture
def angle_global() -> RecursiveRegex:
    """Matcher for `<` ... `>` at every nesting depth."""
    return RecursiveRegex("<", ">", global_search=True)
