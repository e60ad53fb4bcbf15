"""ORM Models — SQLAlchemy declarative models for all blog entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Category owns Posts; Post owns Comments

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from simpleblog.models.category import Category  # noqa: F401
from simpleblog.models.post import Post  # noqa: F401
from simpleblog.models.comment import Comment  # noqa: F401
