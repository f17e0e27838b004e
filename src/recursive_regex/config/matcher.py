# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""The immutable configuration of a delimiter matcher."""

from __future__ import annotations

import re

from typing import Annotated, Any, Self

from pydantic import Field, PlainValidator, ValidationError, model_validator

from recursive_regex.core.models import FROZEN_BASEDMODEL_CONFIG, BasedModel
from recursive_regex.engine.materializer import combined_source
from recursive_regex.engine.patterns import MarkerPattern, compile_flags, pattern_source
from recursive_regex.exceptions import ConfigurationError


def _validate_marker(value: Any) -> MarkerPattern:
    if isinstance(value, str | re.Pattern):
        return value
    raise ValueError(f"Expected a string or compiled pattern, got {type(value).__name__}")


def _validate_optional_marker(value: Any) -> MarkerPattern | None:
    return None if value is None else _validate_marker(value)


Marker = Annotated[str | re.Pattern[str], PlainValidator(_validate_marker)]
OptionalMarker = Annotated[str | re.Pattern[str] | None, PlainValidator(_validate_optional_marker)]

_OPTIONAL_FIELDS = frozenset({"prepended", "appended", "capture_group_name", "inverse_match"})


class MatcherConfig(BasedModel):
    """Everything that defines a delimiter matcher.

    Markers may be plain strings, which are matched literally, or compiled
    patterns, whose source is used and whose own flags are ignored. The mode
    flags here are applied to every pattern the matcher builds.

    Two configurations are equal when all of their fields are equal, and equal
    configurations hash alike.
    """

    model_config = FROZEN_BASEDMODEL_CONFIG

    start_marker: Annotated[Marker, Field(description="""Pattern opening a delimited region.""")]

    end_marker: Annotated[
        Marker,
        Field(description="""Pattern closing a delimited region. Must differ from `start_marker`."""),
    ]

    prepended: Annotated[
        OptionalMarker,
        Field(
            description="""Pattern that must directly precede an opening marker. Regions whose opening isn't preceded by it are excluded, and the prefix becomes part of the match."""
        ),
    ] = None

    appended: Annotated[
        OptionalMarker,
        Field(
            description="""Pattern that must directly follow a closing marker. Regions whose closing isn't followed by it are excluded, and the suffix becomes part of the match."""
        ),
    ] = None

    capture_group_name: Annotated[
        str | None,
        Field(
            min_length=2,
            description="""Name of the group capturing the text between the markers.""",
        ),
    ] = None

    multi_line: Annotated[bool, Field(description="""`^` and `$` match at line breaks.""")] = False

    case_sensitive: Annotated[bool, Field(description="""Match letter case exactly.""")] = True

    unicode: Annotated[
        bool,
        Field(description="""Use Unicode semantics for `\\w`, `\\d`, `\\s` and case folding instead of ASCII."""),
    ] = False

    dot_all: Annotated[bool, Field(description="""`.` also matches line breaks.""")] = False

    global_search: Annotated[
        bool,
        Field(
            description="""Match delimited regions at every depth instead of only top-level ones. Ignored in inverse mode."""
        ),
    ] = False

    inverse_match: Annotated[
        OptionalMarker,
        Field(
            description="""Pattern matched only in the text outside every delimited region. Setting it switches the matcher into inverse mode."""
        ),
    ] = None

    @model_validator(mode="after")
    def validate_instance(self) -> Self:
        """Reject empty or identical markers and unusable group names."""
        for name in ("start_marker", "end_marker"):
            if not pattern_source(getattr(self, name)):
                raise ValueError(f"`{name}` must not be empty.")
        if self.start_source == self.end_source:
            raise ValueError("`start_marker` and `end_marker` must differ.")
        if self.capture_group_name is not None and not self.capture_group_name.isidentifier():
            raise ValueError(
                f"`capture_group_name` must be a valid identifier, got {self.capture_group_name!r}."
            )
        return self

    @classmethod
    def create(cls, **data: Any) -> Self:
        """Validate `data` into a config, raising `ConfigurationError` on failure."""
        try:
            return cls(**data)
        except ValidationError as e:
            errors = e.errors(include_url=False)
            fields = [".".join(str(part) for part in error["loc"]) for error in errors]
            raise ConfigurationError(
                f"Invalid matcher configuration: {errors[0]['msg']}",
                details={"field": ", ".join(f for f in fields if f) or "config", "errors": errors},
                suggestions=[
                    "Provide distinct, non-empty start and end markers.",
                    "Use an identifier of at least two characters for `capture_group_name`.",
                ],
            ) from e

    @property
    def flags(self) -> re.RegexFlag:
        """The `re` flags every pattern of this matcher is compiled with."""
        return compile_flags(
            multi_line=self.multi_line,
            case_sensitive=self.case_sensitive,
            unicode=self.unicode,
            dot_all=self.dot_all,
        )

    @property
    def start_source(self) -> str:
        return pattern_source(self.start_marker)

    @property
    def end_source(self) -> str:
        return pattern_source(self.end_marker)

    @property
    def prepended_source(self) -> str | None:
        return None if self.prepended is None else pattern_source(self.prepended)

    @property
    def appended_source(self) -> str | None:
        return None if self.appended is None else pattern_source(self.appended)

    @property
    def inverse_source(self) -> str | None:
        return None if self.inverse_match is None else pattern_source(self.inverse_match)

    @property
    def is_inverse(self) -> bool:
        return self.inverse_match is not None

    @property
    def pattern(self) -> str:
        """Source of the combined pattern applied to each delimited region."""
        return combined_source(
            self.start_source,
            self.end_source,
            prepended=self.prepended_source,
            appended=self.appended_source,
            capture_group_name=self.capture_group_name,
            dot_all=self.dot_all,
        )

    def copy_with(self, *, copy_none: bool = False, **overrides: Any) -> Self:
        """Return a new config with `overrides` applied.

        An override of `None` means "keep the current value". With `copy_none`,
        optional fields that aren't overridden are cleared instead of kept.
        """
        unknown = set(overrides) - set(type(self).model_fields)
        if unknown:
            raise ConfigurationError(
                "Unknown configuration fields", details={"field": ", ".join(sorted(unknown))}
            )
        data = {name: getattr(self, name) for name in type(self).model_fields}
        if copy_none:
            data |= dict.fromkeys(_OPTIONAL_FIELDS)
        data |= {key: value for key, value in overrides.items() if value is not None}
        return self.create(**data)

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={value!r}"
            for name, value in self
            if value != type(self).model_fields[name].default or name.endswith("_marker")
        )
        return f"{type(self).__name__}({fields})"


__all__ = ("MatcherConfig",)
