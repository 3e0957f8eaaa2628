"""Shared stages of the validate, identify, load, authorize and persist pipeline.

Every mutating service method runs these stages in order and stops at the
first failure, so nothing is written before authorization succeeds.
"""

from __future__ import annotations

import logging
from typing import Any

from beanie import PydanticObjectId

from ..core.validation import NamedSchema, Rejected, is_object_id, validate_payload
from ..errors import ValidationError

logger = logging.getLogger(__name__)


class PipelineService:
    """Helpers for the validation and identifier stages of a mutation."""

    def validate(self, schema: NamedSchema[Any], payload: Any) -> Any:
        """Run ``payload`` through ``schema``, turning a rejection into ``ValidationError``."""

        result = validate_payload(schema, payload)
        if isinstance(result, Rejected):
            logger.info(
                "Payload rejected by %s schema",
                schema.name,
                extra={"errors": result.errors},
            )
            raise ValidationError(result.reason)
        return result.value

    @staticmethod
    def parse_id(value: object, message: str) -> PydanticObjectId:
        if not is_object_id(value):
            raise ValidationError(message)
        return PydanticObjectId(str(value))

    @staticmethod
    def parse_ids(values: tuple[object, ...], message: str) -> tuple[PydanticObjectId, ...]:
        """Parse several ids at once, rejecting the request if any is malformed."""

        if not all(is_object_id(value) for value in values):
            raise ValidationError(message)
        return tuple(PydanticObjectId(str(value)) for value in values)


__all__ = ["PipelineService"]
