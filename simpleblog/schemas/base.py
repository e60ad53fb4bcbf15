"""Schema Bases — shared configuration for wire DTOs.

Invariants:
    - Wire names are camelCase; snake_case names accepted on input
    - ManipulationSchema marks every create/update payload shape
    - Required strings reject missing, null, empty and whitespace-only values
      with a resource-specific message

Design Decisions:
    - Required fields typed `str | None = None` with validate_default: a missing
      field and an explicit null fail the same rule with the same message,
      which keeps PUT and PATCH validation identical
    - PydanticCustomError so the message surfaces verbatim in the field map
"""

from typing import Any

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class ManipulationSchema(BaseModel):
    """Base for creation/update payloads accepted by the validation stage."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )


class ResponseSchema(BaseModel):
    """Base for output DTOs projected from ORM entities."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )


def required(message: str) -> AfterValidator:
    """Validator enforcing a present, non-blank value."""

    def _check(value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("required", message)
        return value

    return AfterValidator(_check)
