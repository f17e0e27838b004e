# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Base pydantic model configuration for recursive-regex."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from re import Pattern
from typing import Any, cast

import textcase

from pydantic import BaseModel, ConfigDict
from pydantic.fields import ComputedFieldInfo, FieldInfo


def generate_title(model: type[Any]) -> str:
    """Generate a title for a model."""
    model_name = model.__name__ if hasattr(model, "__name__") else str(model)
    return textcase.title(model_name.replace("Model", ""))


def generate_field_title(name: str, info: FieldInfo | ComputedFieldInfo) -> str:
    """Generate a title for a model field."""
    if hasattr(info, "title") and (titled := info.title):
        return titled
    if aliased := info.alias or (
        hasattr(info, "serialization_alias") and cast(FieldInfo, info).serialization_alias
    ):
        return textcase.sentence(aliased)
    return textcase.sentence(name)


# Whitespace is significant in pattern sources, so strings are never stripped.
BASEDMODEL_CONFIG = ConfigDict(
    arbitrary_types_allowed=True,
    field_title_generator=generate_field_title,
    model_title_generator=generate_title,
    use_attribute_docstrings=True,
    validate_by_alias=True,
    validate_by_name=True,
    cache_strings="all",
)
FROZEN_BASEDMODEL_CONFIG = BASEDMODEL_CONFIG | ConfigDict(frozen=True)


class BasedModel(BaseModel):
    """A baser `BaseModel` for all models in the recursive-regex project."""

    model_config = BASEDMODEL_CONFIG

    def serialize_for_cli(self) -> dict[str, Any]:
        """Serialize the model for CLI output.

        Compiled patterns are rendered as their source so the result is JSON-safe.
        """
        self_map: dict[str, Any] = {}
        for field in type(self).model_fields:
            attr = getattr(self, field, None)
            if isinstance(attr, Pattern):
                self_map[field] = attr.pattern
            elif attr is not None and hasattr(attr, "serialize_for_cli"):
                self_map[field] = attr.serialize_for_cli()
            elif isinstance(attr, Sequence | Iterator) and not isinstance(attr, str):
                self_map[field] = [
                    item.serialize_for_cli() if hasattr(item, "serialize_for_cli") else item
                    for item in attr
                ]
            else:
                self_map[field] = attr
        return self_map


__all__ = (
    "BASEDMODEL_CONFIG",
    "FROZEN_BASEDMODEL_CONFIG",
    "BasedModel",
    "generate_field_title",
    "generate_title",
)
