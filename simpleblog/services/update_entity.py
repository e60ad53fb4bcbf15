"""Update Pipeline — full (PUT) and partial (PATCH) updates of tracked entities.

Invariants:
    - The entity passed in is session-tracked (existence gate, TRACKED mode)
    - PATCH: entity → update DTO → JSON Patch → re-validation → write-back → commit
    - Nothing is written back unless the patched DTO validates
    - Exactly one commit per successful update

Design Decisions:
    - patch_to_dto separated from commit_update: post updates check the target
      category between the two steps without a callback hook
"""

import logging
from typing import Any, TypeVar

from simpleblog.core.errors import EntityValidationError, PatchApplicationError
from simpleblog.core.patching import apply_patch_document
from simpleblog.core.repository_protocols import EntityStore
from simpleblog.schemas.base import ManipulationSchema
from simpleblog.services.mapping import apply_update, to_update_dto

logger = logging.getLogger(__name__)

DtoT = TypeVar("DtoT", bound=ManipulationSchema)


def patch_to_dto(
    entity: Any, document: Any, schema: type[DtoT], resource: str,
) -> DtoT:
    """Run the patch document against the entity's update shape."""
    current = to_update_dto(entity, schema)
    try:
        return apply_patch_document(document, current, resource)
    except PatchApplicationError as e:
        logger.warning(
            f"{schema.__name__} patch could not be applied: {e.message}",
            extra={"resource": resource, "resource_id": getattr(entity, "id", None)},
        )
        raise
    except EntityValidationError:
        logger.warning(
            f"Invalid model state for the {schema.__name__} patch object",
            extra={"resource": resource, "resource_id": getattr(entity, "id", None)},
        )
        raise


async def commit_update(
    store: EntityStore, entity: Any, dto: ManipulationSchema,
) -> None:
    """Write the validated update DTO onto the tracked entity and commit."""
    apply_update(dto, entity)
    await store.save()
