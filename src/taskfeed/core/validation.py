"""Result-returning payload validation.

Validators here never raise on bad input. They hand back either an
``Accepted`` wrapping the parsed model or a ``Rejected`` carrying the reason,
and the caller decides how to surface the rejection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from bson import ObjectId
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(slots=True, frozen=True)
class Accepted(Generic[ModelT]):
    value: ModelT

    @property
    def ok(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class Rejected:
    reason: str
    errors: list[dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return False


ValidationResult = Union[Accepted[ModelT], Rejected]


@dataclass(slots=True, frozen=True)
class NamedSchema(Generic[ModelT]):
    """A payload shape paired with the message reported when it is rejected."""

    name: str
    model: type[ModelT]
    rejection: str


def _summarise(exc: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": ".".join(str(part) for part in error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]


def validate_payload(schema: NamedSchema[ModelT], payload: Any) -> ValidationResult[ModelT]:
    """Check ``payload`` against ``schema`` and report acceptance or rejection."""

    if not isinstance(payload, dict):
        return Rejected(reason=schema.rejection)
    try:
        parsed = schema.model.model_validate(payload)
    except PydanticValidationError as exc:
        return Rejected(reason=schema.rejection, errors=_summarise(exc))
    return Accepted(value=parsed)


def is_object_id(value: object) -> bool:
    """Return ``True`` when ``value`` is a well-formed 24-hex document id."""

    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)


__all__ = [
    "Accepted",
    "NamedSchema",
    "Rejected",
    "ValidationResult",
    "is_object_id",
    "validate_payload",
]
