"""Category ORM — top-level grouping that owns posts.

Invariants:
    - id is an integer surrogate key assigned by the store
    - name is non-nullable
    - created_on assigned once by the store at insert (server default)

Design Decisions:
    - cascade delete for posts (ORM) plus ON DELETE CASCADE on posts.category_id:
      deleting a category removes its posts and their comments
    - eager_defaults: store-generated timestamps fetched right after flush
"""

from datetime import datetime

from sqlalchemy import Integer, String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from simpleblog.db.base import Base


class Category(Base):
    """Category entity — owns posts."""
    __tablename__ = "categories"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )

    # Relationships
    posts: Mapped[list["Post"]] = relationship(
        "Post", back_populates="category", cascade="all, delete-orphan",
    )
