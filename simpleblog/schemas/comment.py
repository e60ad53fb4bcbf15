"""Comment Schemas — creation/update payloads and the comment output shape."""

from datetime import datetime
from typing import Annotated

from simpleblog.schemas.base import ManipulationSchema, ResponseSchema, required


class CommentBase(ManipulationSchema):
    """Fields shared by comment creation and update."""
    title: Annotated[str | None, required("Comment title is a required field.")] = None
    content: Annotated[str | None, required("Comment content is a required field.")] = None
    posted_by: Annotated[str | None, required("Comment postedBy is a required field.")] = None


class CommentCreate(CommentBase):
    pass


class CommentUpdate(CommentBase):
    pass


class CommentResponse(ResponseSchema):
    id: int
    title: str
    content: str
    posted_by: str
    created_on: datetime
