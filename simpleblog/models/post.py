"""Post ORM — a blog post inside exactly one category.

Invariants:
    - Always belongs to a Category (category_id FK, ON DELETE CASCADE)
    - title, slug, content non-nullable; slug uniqueness NOT enforced
    - created_on assigned once by the store at insert
    - last_modified_on assigned by the store at insert and on every UPDATE
      (server default + onupdate SQL expression); application code never sets it

Design Decisions:
    - category joined-eager: every post output carries the category name
    - comments cascade delete (ORM + ON DELETE CASCADE on comments.post_id)
"""

from datetime import datetime

from sqlalchemy import Boolean, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from simpleblog.db.base import Base


class Post(Base):
    """Post entity — belongs to a category, owns comments."""
    __tablename__ = "posts"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    slug: Mapped[str] = mapped_column(String(300), nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
    last_modified_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )

    # Relationships
    category: Mapped["Category"] = relationship(
        "Category", back_populates="posts", lazy="joined", innerjoin=True,
    )
    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="post", cascade="all, delete-orphan",
    )
