"""Posts — flat /posts item access plus creation/listing under a category.

Invariants:
    - Every post belongs to exactly one category; creation requires the category
    - Post outputs carry the category name, except category-scoped creation
    - PUT/PATCH answer 204; a categoryId pointing nowhere is a 404
    - DELETE cascades to the post's comments

Design Decisions:
    - One router without prefix: the routes span /posts and /categories/{id}/posts
    - lastModifiedOn is never written here; the store refreshes it on UPDATE
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

import simpleblog.api.convertors  # noqa: F401  registers "idlist"
from simpleblog.api.gates import (
    DbSession, existing_post, existing_post_in_category, load_or_404,
    parent_category,
)
from simpleblog.api.payloads import PatchDocument, manipulation_body
from simpleblog.core.domain_types import CategoryId, LoadMode, ResourceKind
from simpleblog.infrastructure.entity_store import SqlAlchemyStore
from simpleblog.models.category import Category
from simpleblog.models.post import Post
from simpleblog.schemas.post import (
    CategoryPostResponse, PostCreate, PostResponse, PostUpdate,
)
from simpleblog.services.fetch_collection import fetch_collection
from simpleblog.services.mapping import (
    post_from_create, post_to_category_response, post_to_response,
)
from simpleblog.services.update_entity import commit_update, patch_to_dto

logger = logging.getLogger(__name__)
router = APIRouter(tags=["posts"])

ExistingPost = Annotated[Post, Depends(existing_post)]
ParentCategory = Annotated[Category, Depends(parent_category)]


async def _ensure_target_category(
    db: AsyncSession, post: Post, update: PostUpdate,
) -> None:
    """A post may only move to a category that exists."""
    if update.category_id is None or update.category_id == post.category_id:
        return
    await load_or_404(
        SqlAlchemyStore(db, Category), ResourceKind.CATEGORY,
        update.category_id, LoadMode.DETACHED,
    )


# ─── Category-scoped ─────────────────────────────────────────────

@router.get(
    "/categories/{category_id}/posts", response_model=list[CategoryPostResponse],
)
async def get_posts_for_category(category: ParentCategory, db: DbSession):
    """Get the posts of one category."""
    posts = await SqlAlchemyStore(db, Post).find_all(
        Post.category_id == category.id,
    )
    return [post_to_category_response(p) for p in posts]


@router.get(
    "/categories/{category_id}/posts/{post_id}", response_model=PostResponse,
)
async def get_post_for_category(
    post: Annotated[Post, Depends(existing_post_in_category)],
):
    """Get one post, which must belong to the category."""
    return post_to_response(post)


@router.post(
    "/categories/{category_id}/posts",
    response_model=CategoryPostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    body: Annotated[
        PostCreate, Depends(manipulation_body(PostCreate, ResourceKind.POST)),
    ],
    category: ParentCategory,
    request: Request,
    response: Response,
    db: DbSession,
):
    """Create a post (and any nested comments) in the category."""
    store = SqlAlchemyStore(db, Post)
    post = post_from_create(body, category_id=CategoryId(category.id))
    store.add(post)
    await store.save()
    await store.refresh(post)

    logger.info(
        f"Post {post.id} created in category {category.id}",
        extra={"resource": ResourceKind.POST.value, "resource_id": post.id},
    )
    response.headers["Location"] = str(request.url_for("get_post", post_id=post.id))
    return post_to_category_response(post)


@router.post(
    "/categories/{category_id}/posts/collection",
    response_model=list[CategoryPostResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_post_collection(
    body: Annotated[
        list[PostCreate],
        Depends(manipulation_body(list[PostCreate], ResourceKind.POST)),
    ],
    category: ParentCategory,
    request: Request,
    response: Response,
    db: DbSession,
):
    """Create several posts in the category in one commit."""
    store = SqlAlchemyStore(db, Post)
    category_id = CategoryId(category.id)
    posts = [post_from_create(item, category_id=category_id) for item in body]
    store.add_all(posts)
    await store.save()
    for post in posts:
        await store.refresh(post)

    ids = ",".join(str(p.id) for p in posts)
    response.headers["Location"] = str(
        request.url_for("get_post_collection", ids=ids),
    )
    return [post_to_category_response(p) for p in posts]


# ─── Flat /posts ─────────────────────────────────────────────────

@router.get("/posts", response_model=list[PostResponse])
async def get_posts(db: DbSession):
    """Get every post with its category name."""
    posts = await SqlAlchemyStore(db, Post).find_all()
    return [post_to_response(p) for p in posts]


@router.get(
    "/posts/collection/({ids:idlist})", response_model=list[PostResponse],
)
async def get_post_collection(ids: str, db: DbSession):
    """Get posts by a comma-separated id list, all or nothing."""
    posts = await fetch_collection(
        SqlAlchemyStore(db, Post), ids, ResourceKind.POST.label,
    )
    return [post_to_response(p) for p in posts]


@router.get("/posts/{post_id}", response_model=PostResponse)
async def get_post(post: ExistingPost):
    """Get the post by id."""
    return post_to_response(post)


@router.put(
    "/posts/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_post(
    body: Annotated[
        PostUpdate, Depends(manipulation_body(PostUpdate, ResourceKind.POST)),
    ],
    post: ExistingPost,
    db: DbSession,
):
    """Replace the post's editable fields, optionally moving it to another category."""
    await _ensure_target_category(db, post, body)
    await commit_update(SqlAlchemyStore(db, Post), post, body)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/posts/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def partially_update_post(
    post: ExistingPost,
    db: DbSession,
    document: PatchDocument = None,
):
    """Apply a JSON Patch document to the post."""
    patched = patch_to_dto(post, document, PostUpdate, ResourceKind.POST.label)
    await _ensure_target_category(db, post, patched)
    await commit_update(SqlAlchemyStore(db, Post), post, patched)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/posts/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_post(post: ExistingPost, db: DbSession):
    """Delete the post together with its comments."""
    post_id = post.id
    store = SqlAlchemyStore(db, Post)
    await store.remove(post)
    await store.save()
    logger.info(
        f"Post {post_id} deleted",
        extra={"resource": ResourceKind.POST.value, "resource_id": post_id},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
