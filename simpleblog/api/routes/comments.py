"""Comments — every route is nested under its post.

Invariants:
    - The parent post must exist (404 otherwise) before any comment is touched
    - A comment whose postId differs from the route's post is a 404
    - Collection lookups only see comments of the route's post

Design Decisions:
    - PUT/PATCH/DELETE answer 204 with an empty body
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

import simpleblog.api.convertors  # noqa: F401  registers "idlist"
from simpleblog.api.gates import DbSession, existing_comment, parent_post
from simpleblog.api.payloads import PatchDocument, manipulation_body
from simpleblog.core.domain_types import PostId, ResourceKind
from simpleblog.infrastructure.entity_store import SqlAlchemyStore
from simpleblog.models.comment import Comment
from simpleblog.models.post import Post
from simpleblog.schemas.comment import (
    CommentCreate, CommentResponse, CommentUpdate,
)
from simpleblog.services.fetch_collection import fetch_collection
from simpleblog.services.mapping import comment_from_create, comment_to_response
from simpleblog.services.update_entity import commit_update, patch_to_dto

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/posts/{post_id}/comments", tags=["comments"])

ParentPost = Annotated[Post, Depends(parent_post)]
ExistingComment = Annotated[Comment, Depends(existing_comment)]


@router.get("", response_model=list[CommentResponse])
async def get_comments_for_post(post: ParentPost, db: DbSession):
    """Get the comments of one post."""
    comments = await SqlAlchemyStore(db, Comment).find_all(
        Comment.post_id == post.id,
    )
    return [comment_to_response(c) for c in comments]


@router.get(
    "/collection/({ids:idlist})", response_model=list[CommentResponse],
)
async def get_comment_collection(ids: str, post: ParentPost, db: DbSession):
    """Get comments of the post by a comma-separated id list, all or nothing."""
    comments = await fetch_collection(
        SqlAlchemyStore(db, Comment), ids, ResourceKind.COMMENT.label,
        Comment.post_id == post.id,
    )
    return [comment_to_response(c) for c in comments]


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment: ExistingComment):
    """Get the comment by id."""
    return comment_to_response(comment)


@router.post(
    "", response_model=CommentResponse, status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    body: Annotated[
        CommentCreate,
        Depends(manipulation_body(CommentCreate, ResourceKind.COMMENT)),
    ],
    post: ParentPost,
    request: Request,
    response: Response,
    db: DbSession,
):
    """Create a comment on the post."""
    store = SqlAlchemyStore(db, Comment)
    comment = comment_from_create(body, post_id=PostId(post.id))
    store.add(comment)
    await store.save()
    await store.refresh(comment)

    logger.info(
        f"Comment {comment.id} created on post {post.id}",
        extra={"resource": ResourceKind.COMMENT.value, "resource_id": comment.id},
    )
    response.headers["Location"] = str(
        request.url_for("get_comment", post_id=post.id, comment_id=comment.id),
    )
    return comment_to_response(comment)


@router.post(
    "/collection",
    response_model=list[CommentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_comment_collection(
    body: Annotated[
        list[CommentCreate],
        Depends(manipulation_body(list[CommentCreate], ResourceKind.COMMENT)),
    ],
    post: ParentPost,
    request: Request,
    response: Response,
    db: DbSession,
):
    """Create several comments on the post in one commit."""
    store = SqlAlchemyStore(db, Comment)
    post_id = PostId(post.id)
    comments = [comment_from_create(item, post_id=post_id) for item in body]
    store.add_all(comments)
    await store.save()
    for comment in comments:
        await store.refresh(comment)

    ids = ",".join(str(c.id) for c in comments)
    response.headers["Location"] = str(
        request.url_for("get_comment_collection", post_id=post.id, ids=ids),
    )
    return [comment_to_response(c) for c in comments]


@router.put(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_comment(
    body: Annotated[
        CommentUpdate,
        Depends(manipulation_body(CommentUpdate, ResourceKind.COMMENT)),
    ],
    comment: ExistingComment,
    db: DbSession,
):
    """Replace the comment's editable fields."""
    await commit_update(SqlAlchemyStore(db, Comment), comment, body)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def partially_update_comment(
    comment: ExistingComment,
    db: DbSession,
    document: PatchDocument = None,
):
    """Apply a JSON Patch document to the comment."""
    patched = patch_to_dto(
        comment, document, CommentUpdate, ResourceKind.COMMENT.label,
    )
    await commit_update(SqlAlchemyStore(db, Comment), comment, patched)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_comment(comment: ExistingComment, db: DbSession):
    """Delete the comment."""
    comment_id = comment.id
    store = SqlAlchemyStore(db, Comment)
    await store.remove(comment)
    await store.save()
    logger.info(
        f"Comment {comment_id} deleted",
        extra={"resource": ResourceKind.COMMENT.value, "resource_id": comment_id},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
