# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Base enum class for the recursive-regex project."""

from __future__ import annotations

import contextlib

from enum import Enum, unique
from functools import cached_property
from types import MappingProxyType
from typing import Self, cast, override

import textcase


@unique
class BaseEnum(str, Enum):
    """A string enum with forgiving string conversion.

    `from_string` accepts the member's value or name in most common casings
    (`"opening"`, `"OPENING"`, `"Opening"`, ...), which keeps user input from
    the command line and environment variables easy to work with.
    """

    @staticmethod
    def _deconstruct_string(value: str) -> list[str]:
        """Deconstruct a string into its component parts."""
        value = value.strip().lower().replace("-", "_").replace(" ", "_")
        return [v for v in value.split("_") if v]

    @staticmethod
    def _multiply_variations(s: str) -> set[str]:
        """Generate multiple variations of a string."""
        return {
            s,
            textcase.upper(s),
            textcase.lower(s),
            textcase.title(s),
            textcase.pascal(s),
            textcase.snake(s),
            textcase.kebab(s),
            textcase.camel(s),
        }

    @cached_property
    def aka(self) -> tuple[str, ...]:
        """Return the aliases for the enum member."""
        return tuple(
            self._multiply_variations(self.value) | self._multiply_variations(self.name)
        )

    @classmethod
    def aliases(cls) -> MappingProxyType[str, Self]:
        """Return a mapping of aliases to enum members."""
        alias_map: dict[str, Self] = dict(cast(dict[str, Self], cls._value2member_map_))
        alias_map.update({
            alias: member for member in cls for alias in member.aka if alias not in alias_map
        })
        return MappingProxyType(alias_map)

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Convert a string to the corresponding enum member."""
        if found := cls.aliases().get(value):
            return found
        value_parts = cls._deconstruct_string(value)
        if found := next(
            (
                member
                for member in cls
                if value_parts
                in (cls._deconstruct_string(member.name), cls._deconstruct_string(member.value))
            ),
            None,
        ):
            return found
        raise ValueError(f"{value} is not a valid {cls.__qualname__} member")

    @classmethod
    @override
    def _missing_(cls, value: object) -> Self | None:
        """Handle missing values when converting from string to enum member."""
        if not isinstance(value, str):
            return None
        with contextlib.suppress(ValueError):
            return cls.from_string(value)
        return None

    @override
    def __str__(self) -> str:
        """Return the member's value."""
        return self.value


__all__ = ("BaseEnum",)
