"""Patch Application — applies a JSON Patch document to a projected update-DTO.

Invariants:
    - All functions are PURE: no IO, no async, no DB, the input DTO is never mutated
    - None document → ClientInputError ("<Resource> patch object is null")
    - Inapplicable document (malformed op, unknown path, failed test op,
      wrong value type) → PatchApplicationError
    - Applied document re-validated with the same schema used for PUT;
      failure → EntityValidationError with every field error
    - [] is a valid document and yields an equal DTO

Design Decisions:
    - RFC 6902 via jsonpatch: operations run against the DTO's wire form
      (camelCase keys), so patch paths match the JSON clients see
    - Members outside the update shape are rejected instead of silently dropped:
      a patch can never reach ids or store-managed timestamps
"""

from typing import Any, TypeVar

import jsonpatch
import jsonpointer
from pydantic import BaseModel, ValidationError

from simpleblog.core.errors import (
    ClientInputError, EntityValidationError, PatchApplicationError,
)
from simpleblog.core.validation import collect_errors

DtoT = TypeVar("DtoT", bound=BaseModel)

# pydantic error types raised when a value cannot be read as the field's type
_TYPE_MISMATCH_SUFFIXES = ("_type", "_parsing")
_TYPE_MISMATCH_ERRORS = frozenset({"int_from_float"})


def apply_patch_document(document: Any, current: DtoT, resource: str) -> DtoT:
    """Apply `document` to `current` and return the re-validated DTO."""
    if document is None:
        raise ClientInputError(f"{resource} patch object is null")
    operations = _check_operations(document)

    target = current.model_dump(by_alias=True, mode="json")
    try:
        patched = jsonpatch.JsonPatch(operations).apply(target)
    except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as e:
        raise PatchApplicationError(
            f"The patch document could not be applied to {resource}: {e}",
        ) from e

    if not isinstance(patched, dict):
        raise PatchApplicationError(
            f"The patch document replaced the whole {resource} object",
        )
    _reject_unknown_members(patched, target)

    try:
        return type(current).model_validate(patched)
    except ValidationError as e:
        _raise_for_type_mismatch(e)
        raise EntityValidationError(resource, collect_errors(e)) from e


def _check_operations(document: Any) -> list[dict]:
    """A patch document is a JSON array of operation objects."""
    if not isinstance(document, list):
        raise PatchApplicationError(
            "The patch document must be a JSON array of operations",
        )
    for index, operation in enumerate(document):
        if not isinstance(operation, dict):
            raise PatchApplicationError(
                f"Patch operation at index {index} is not an object",
            )
    return document


def _reject_unknown_members(patched: dict, target: dict) -> None:
    for key in patched:
        if key not in target:
            raise PatchApplicationError(
                f"The target location specified by path segment '{key}' was not found.",
            )


def _raise_for_type_mismatch(exc: ValidationError) -> None:
    for error in exc.errors():
        if _is_type_mismatch(error["type"]):
            location = ".".join(str(loc) for loc in error["loc"])
            raise PatchApplicationError(
                f"The value '{error.get('input')}' is invalid for target location '{location}'.",
            ) from exc


def _is_type_mismatch(error_type: str) -> bool:
    return (
        error_type in _TYPE_MISMATCH_ERRORS
        or error_type.endswith(_TYPE_MISMATCH_SUFFIXES)
    )
