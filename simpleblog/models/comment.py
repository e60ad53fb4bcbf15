"""Comment ORM — a reader comment on exactly one post.

Invariants:
    - Always belongs to a Post (post_id FK, ON DELETE CASCADE)
    - title, content, posted_by non-nullable
    - created_on assigned once by the store at insert
"""

from datetime import datetime

from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from simpleblog.db.base import Base


class Comment(Base):
    """Comment entity — belongs to a post."""
    __tablename__ = "comments"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    posted_by: Mapped[str] = mapped_column(String(200), nullable=False)
    created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )

    # Relationships
    post: Mapped["Post"] = relationship("Post", back_populates="comments")
