"""Manipulation Validation — turns raw payloads into validated DTOs or typed errors.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - None payload → ClientInputError ("<Resource> object is null")
    - Empty list payload for a collection schema → ClientInputError
    - Any pydantic failure → EntityValidationError carrying every field error
    - Same rules run for POST/PUT bodies and for patched update documents

Design Decisions:
    - Schema passed explicitly by the caller (never inferred from the payload)
    - TypeAdapter so one entry point serves both a schema and list[schema]
    - Field keys are dotted wire names ("0.title", "isPublished")
"""

from functools import lru_cache
from typing import Any, get_origin

from pydantic import TypeAdapter, ValidationError

from simpleblog.core.errors import ClientInputError, EntityValidationError


@lru_cache(maxsize=None)
def _adapter(schema: Any) -> TypeAdapter:
    return TypeAdapter(schema)


def collect_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten pydantic errors into a field → message map."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        key = ".".join(str(loc) for loc in error["loc"]) or "body"
        if key in errors:
            errors[key] = f"{errors[key]} {error['msg']}"
        else:
            errors[key] = error["msg"]
    return errors


def validate_manipulation(schema: Any, payload: Any, resource: str) -> Any:
    """Validate a create/update payload against its manipulation schema."""
    if payload is None:
        raise ClientInputError(f"{resource} object is null")
    if get_origin(schema) is list and isinstance(payload, list) and not payload:
        raise ClientInputError(f"{resource} collection is empty")
    try:
        return _adapter(schema).validate_python(payload)
    except ValidationError as e:
        raise EntityValidationError(resource, collect_errors(e)) from e
