"""Category Schemas — creation/update payloads and the category output shape."""

from datetime import datetime
from typing import Annotated

from pydantic import Field

from simpleblog.schemas.base import ManipulationSchema, ResponseSchema, required
from simpleblog.schemas.post import PostCreate


class CategoryBase(ManipulationSchema):
    """Fields shared by category creation and update."""
    name: Annotated[str | None, required("Category name is a required field.")] = None
    description: str | None = None


class CategoryCreate(CategoryBase):
    """Category creation; may carry posts (and their comments) to insert with it."""
    posts: list[PostCreate] = Field(default_factory=list)


class CategoryUpdate(CategoryBase):
    pass


class CategoryResponse(ResponseSchema):
    id: int
    name: str
    description: str | None = None
    created_on: datetime
