"""Mapping Layer — converts between ORM entities and wire DTOs.

Invariants:
    - Pure projection: no IO, no session access beyond already-loaded attributes
    - Creation DTO → new entity (nested posts/comments included)
    - Entity → update DTO uses exactly the update shape's fields
    - apply_update only touches fields of the update shape; ids and
      store-managed timestamps are never written
    - post_to_response needs Post.category loaded (joined-eager on the model)
"""

from typing import TypeVar

from simpleblog.core.domain_types import CategoryId, PostId
from simpleblog.models.category import Category
from simpleblog.models.comment import Comment
from simpleblog.models.post import Post
from simpleblog.schemas.base import ManipulationSchema
from simpleblog.schemas.category import CategoryCreate, CategoryResponse
from simpleblog.schemas.comment import CommentCreate, CommentResponse
from simpleblog.schemas.post import CategoryPostResponse, PostCreate, PostResponse

DtoT = TypeVar("DtoT", bound=ManipulationSchema)

# Update fields where None means "keep what the entity has"
_KEEP_CURRENT_WHEN_NONE = frozenset({"category_id"})


# ─── Entity → output DTO ─────────────────────────────────────────

def category_to_response(category: Category) -> CategoryResponse:
    return CategoryResponse.model_validate(category)


def post_to_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        title=post.title,
        category=post.category.name,
        slug=post.slug,
        summary=post.summary,
        content=post.content,
        is_published=post.is_published,
        created_on=post.created_on,
        last_modified_on=post.last_modified_on,
    )


def post_to_category_response(post: Post) -> CategoryPostResponse:
    return CategoryPostResponse.model_validate(post)


def comment_to_response(comment: Comment) -> CommentResponse:
    return CommentResponse.model_validate(comment)


# ─── Creation DTO → entity ───────────────────────────────────────

def comment_from_create(
    dto: CommentCreate, post_id: PostId | None = None,
) -> Comment:
    comment = Comment(
        title=dto.title, content=dto.content, posted_by=dto.posted_by,
    )
    if post_id is not None:
        comment.post_id = post_id
    return comment


def post_from_create(
    dto: PostCreate, category_id: CategoryId | None = None,
) -> Post:
    post = Post(
        title=dto.title,
        slug=dto.slug,
        summary=dto.summary,
        content=dto.content,
        is_published=dto.is_published,
        comments=[comment_from_create(c) for c in dto.comments],
    )
    if category_id is not None:
        post.category_id = category_id
    return post


def category_from_create(dto: CategoryCreate) -> Category:
    return Category(
        name=dto.name,
        description=dto.description,
        posts=[post_from_create(p) for p in dto.posts],
    )


# ─── Update DTO ⇄ tracked entity ─────────────────────────────────

def to_update_dto(entity: object, schema: type[DtoT]) -> DtoT:
    """Project an entity into its update shape (the document a PATCH edits)."""
    return schema.model_validate(entity, from_attributes=True)


def apply_update(dto: ManipulationSchema, entity: object) -> None:
    """Overwrite the entity's update-shape fields with the DTO's values."""
    for name in type(dto).model_fields:
        value = getattr(dto, name)
        if value is None and name in _KEEP_CURRENT_WHEN_NONE:
            continue
        setattr(entity, name, value)
