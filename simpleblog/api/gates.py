"""Existence Gates — load the route's entity before the handler runs, or end with 404.

Invariants:
    - PUT/PATCH receive a session-tracked entity; every other verb a detached one
    - Not found → ResourceNotFoundError (404 via the domain handler); handler never runs
    - Found → the entity is the dependency's return value (no request-scoped bag)
    - Gates and handlers share one AsyncSession (FastAPI per-request dependency cache)
    - Comment gate: parent post must exist AND comment.post_id must match the route

Design Decisions:
    - Plain FastAPI dependencies chained through Depends: the chain order is the
      parameter order of the route signature
    - Parent lookups (post of a comment, category of a post) are always detached:
      only the addressed entity is ever mutated
"""

import logging
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from simpleblog.core.domain_types import (
    CategoryId, CommentId, LoadMode, PostId, ResourceKind, load_mode_for,
)
from simpleblog.core.errors import ResourceNotFoundError
from simpleblog.infrastructure.database import get_db
from simpleblog.infrastructure.entity_store import SqlAlchemyStore
from simpleblog.models.category import Category
from simpleblog.models.comment import Comment
from simpleblog.models.post import Post

logger = logging.getLogger(__name__)

DbSession = Annotated[AsyncSession, Depends(get_db)]


async def load_or_404(
    store: SqlAlchemyStore,
    kind: ResourceKind,
    entity_id: int,
    mode: LoadMode,
    *where: Any,
) -> Any:
    """Load one entity or raise ResourceNotFoundError."""
    entity = await store.find(entity_id, *where, mode=mode)
    if entity is None:
        logger.warning(
            f"{kind.label} with id: {entity_id} doesn't exist in the database.",
            extra={"resource": kind.value, "resource_id": entity_id},
        )
        raise ResourceNotFoundError(kind.label, entity_id)
    return entity


async def existing_category(
    category_id: CategoryId, request: Request, db: DbSession,
) -> Category:
    return await load_or_404(
        SqlAlchemyStore(db, Category), ResourceKind.CATEGORY,
        category_id, load_mode_for(request.method),
    )


async def parent_category(category_id: CategoryId, db: DbSession) -> Category:
    """Category addressed as the owner of a post route, read-only."""
    return await load_or_404(
        SqlAlchemyStore(db, Category), ResourceKind.CATEGORY,
        category_id, LoadMode.DETACHED,
    )


async def existing_post(
    post_id: PostId, request: Request, db: DbSession,
) -> Post:
    return await load_or_404(
        SqlAlchemyStore(db, Post), ResourceKind.POST,
        post_id, load_mode_for(request.method),
    )


async def parent_post(post_id: PostId, db: DbSession) -> Post:
    """Post addressed as the owner of a comment route, read-only."""
    return await load_or_404(
        SqlAlchemyStore(db, Post), ResourceKind.POST, post_id, LoadMode.DETACHED,
    )


async def existing_post_in_category(
    category: Annotated[Category, Depends(parent_category)],
    post_id: PostId,
    request: Request,
    db: DbSession,
) -> Post:
    """Post that must also belong to the route's category."""
    return await load_or_404(
        SqlAlchemyStore(db, Post), ResourceKind.POST,
        post_id, load_mode_for(request.method),
        Post.category_id == category.id,
    )


async def existing_comment(
    post: Annotated[Post, Depends(parent_post)],
    comment_id: CommentId,
    request: Request,
    db: DbSession,
) -> Comment:
    """Comment that must also belong to the route's post."""
    return await load_or_404(
        SqlAlchemyStore(db, Comment), ResourceKind.COMMENT,
        comment_id, load_mode_for(request.method),
        Comment.post_id == post.id,
    )
