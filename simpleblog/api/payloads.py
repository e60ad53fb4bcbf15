"""Validation Stage — request bodies bound to an explicit manipulation schema.

Invariants:
    - Each create/update route names its schema statically:
      Annotated[CategoryCreate, Depends(manipulation_body(CategoryCreate, ...))]
    - Null/absent body → 400, invalid body → 422 with the field map
    - Patch documents are NOT manipulation bodies; PATCH routes take PatchDocument

Design Decisions:
    - The dependency reads the raw JSON (Any) and validates it itself, so null
      vs invalid can be told apart and both produce the API's own error shape
"""

import logging
from typing import Annotated, Any, Callable, Awaitable

from fastapi import Body

from simpleblog.core.domain_types import ResourceKind
from simpleblog.core.errors import ClientInputError, EntityValidationError
from simpleblog.core.validation import validate_manipulation

logger = logging.getLogger(__name__)

PatchDocument = Annotated[
    Any,
    Body(
        media_type="application/json-patch+json",
        description="RFC 6902 JSON Patch operations",
    ),
]


def manipulation_body(
    schema: Any, resource: ResourceKind,
) -> Callable[..., Awaitable[Any]]:
    """Build the dependency that validates a body against `schema`."""
    label = resource.label

    async def _validated_body(
        payload: Annotated[Any, Body()] = None,
    ) -> Any:
        try:
            return validate_manipulation(schema, payload, label)
        except ClientInputError as e:
            logger.warning(
                f"Object sent from client is null or empty: {e.message}",
                extra={"resource": resource.value},
            )
            raise
        except EntityValidationError as e:
            logger.warning(
                f"Invalid model state for the {label} object: {e.errors}",
                extra={"resource": resource.value},
            )
            raise

    return _validated_body
