# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Process-wide defaults for recursive-regex.

Settings only supply defaults for the command line and for logging. A
`RecursiveRegex` built in code uses exactly the arguments it is given.

Configuration precedence (highest to lowest):
1. Initialization arguments
2. Environment variables (RECURSIVE_REGEX_*)
3. `recursive_regex.local.toml`, then `recursive_regex.toml` in the current directory
4. Defaults
"""

from __future__ import annotations

import logging

from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any, Literal, cast

from pydantic import Field
from pydantic.fields import ComputedFieldInfo, FieldInfo
from pydantic_settings import (
    BaseSettings,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from recursive_regex.core.models import BasedModel


type LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CONFIG_FILES = ("recursive_regex.local.toml", "recursive_regex.toml")


class LoggingSettings(BasedModel):
    """How the command line sets up logging."""

    level: Annotated[
        LogLevel, Field(description="""Minimum level of records emitted by the `recursive_regex` logger.""")
    ] = "WARNING"

    use_rich: Annotated[
        bool, Field(description="""Render log records with rich instead of plain stderr output.""")
    ] = True

    rich_options: Annotated[
        dict[str, Any],
        Field(
            default_factory=dict,
            description="""Extra keyword arguments for `rich.logging.RichHandler`.""",
        ),
    ]

    @property
    def level_number(self) -> int:
        """The numeric logging level."""
        return cast(int, logging.getLevelName(self.level))


class RecursiveRegexSettings(BaseSettings):
    """Default matcher flags and logging options."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        field_title_generator=cast(
            Callable[[str, FieldInfo | ComputedFieldInfo], str],
            BasedModel.model_config["field_title_generator"],  # type: ignore
        ),
        env_ignore_empty=True,
        env_nested_delimiter="__",
        env_prefix="RECURSIVE_REGEX_",
        title="Recursive Regex Settings",
        use_attribute_docstrings=True,
        validate_assignment=True,
    )

    multi_line: Annotated[bool, Field(description="""Default for `multi_line`.""")] = False

    case_sensitive: Annotated[bool, Field(description="""Default for `case_sensitive`.""")] = True

    unicode: Annotated[bool, Field(description="""Default for `unicode`.""")] = False

    dot_all: Annotated[bool, Field(description="""Default for `dot_all`.""")] = False

    global_search: Annotated[bool, Field(description="""Default for `global_search`.""")] = False

    logging: Annotated[
        LoggingSettings,
        Field(
            default_factory=LoggingSettings,
            description="""Logging options. Nested environment variables use `__`, like `RECURSIVE_REGEX_LOGGING__LEVEL=DEBUG`.""",
        ),
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Read init arguments, then `RECURSIVE_REGEX_*` variables, then TOML files."""
        return (
            init_settings,
            EnvSettingsSource(
                settings_cls,
                env_prefix="RECURSIVE_REGEX_",
                case_sensitive=False,
                env_nested_delimiter="__",
                env_ignore_empty=True,
            ),
            *(TomlConfigSettingsSource(settings_cls, Path(name)) for name in CONFIG_FILES),
        )

    def matcher_defaults(self) -> dict[str, bool]:
        """Return the mode flags as keyword arguments for `RecursiveRegex`."""
        return {
            "multi_line": self.multi_line,
            "case_sensitive": self.case_sensitive,
            "unicode": self.unicode,
            "dot_all": self.dot_all,
            "global_search": self.global_search,
        }


_settings: RecursiveRegexSettings | None = None
"""The global settings instance. Use `get_settings()` to access it."""


def get_settings() -> RecursiveRegexSettings:
    """Get the global settings instance, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = RecursiveRegexSettings()
    return _settings


def reset_settings() -> None:
    """Forget the global settings so the next access reloads them."""
    global _settings
    _settings = None


__all__ = (
    "CONFIG_FILES",
    "LoggingSettings",
    "RecursiveRegexSettings",
    "get_settings",
    "reset_settings",
)
