"""Post Schemas — creation/update payloads and the two post output shapes.

Invariants:
    - title, slug, content required; summary optional; isPublished defaults false
    - PostCreate may carry nested comments, inserted with the post
    - PostUpdate.categoryId None keeps the current category
    - PostResponse carries the category name; CategoryPostResponse omits it

Design Decisions:
    - Slug is free text: uniqueness is not enforced anywhere
"""

from datetime import datetime
from typing import Annotated

from pydantic import Field, field_validator

from simpleblog.schemas.base import ManipulationSchema, ResponseSchema, required
from simpleblog.schemas.comment import CommentCreate


class PostBase(ManipulationSchema):
    """Fields shared by post creation and update."""
    title: Annotated[str | None, required("Post title is a required field.")] = None
    slug: Annotated[str | None, required("Post slug is a required field.")] = None
    summary: str | None = None
    content: Annotated[str | None, required("Post content is a required field.")] = None
    is_published: bool = False

    @field_validator("is_published", mode="before")
    @classmethod
    def null_means_unpublished(cls, v: object) -> object:
        return False if v is None else v


class PostCreate(PostBase):
    comments: list[CommentCreate] = Field(default_factory=list)


class PostUpdate(PostBase):
    category_id: int | None = Field(None, gt=0)


class CategoryPostResponse(ResponseSchema):
    """Post as returned from category-scoped creation."""
    id: int
    title: str
    slug: str
    summary: str | None = None
    content: str
    is_published: bool
    created_on: datetime
    last_modified_on: datetime


class PostResponse(ResponseSchema):
    """Post with the name of its category."""
    id: int
    title: str
    category: str
    slug: str
    summary: str | None = None
    content: str
    is_published: bool
    created_on: datetime
    last_modified_on: datetime
