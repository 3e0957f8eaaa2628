"""Base configuration shared by response payloads."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PublicModel(BaseModel):
    """Response model serialised with camelCase keys and ``_id`` identifiers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def stringify_ids(ids: Iterable[object]) -> list[str]:
    return [str(item) for item in ids]


__all__ = ["PublicModel", "stringify_ids"]
