"""Collection Fetch — all-or-nothing lookup of entities by an id list.

Invariants:
    - Missing/blank ids → ClientInputError (400)
    - Fewer entities than distinct requested ids → CollectionNotFoundError (404),
      never a partial list
    - Order is store-determined
"""

import logging
from typing import Any, Sequence

from simpleblog.core.collections import ensure_complete, parse_ids
from simpleblog.core.errors import ClientInputError, CollectionNotFoundError
from simpleblog.core.repository_protocols import EntityStore

logger = logging.getLogger(__name__)


async def fetch_collection(
    store: EntityStore, raw_ids: str | None, resource: str, *where: Any,
) -> Sequence[Any]:
    """Fetch every entity named in `raw_ids` or fail the whole request."""
    try:
        ids = parse_ids(raw_ids)
    except ClientInputError as e:
        logger.warning(e.message, extra={"resource": resource})
        raise

    entities = await store.find_by_ids(ids, *where)
    try:
        ensure_complete(resource, ids, (entity.id for entity in entities))
    except CollectionNotFoundError as e:
        logger.warning(
            f"Some ids are not valid in a collection: {e.missing_ids}",
            extra={"resource": resource},
        )
        raise
    return entities
