"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CategoryId, PostId, CommentId wrap ints — store-assigned surrogate keys
    - All resource kinds encoded as an Enum — no raw string matching
    - Only PUT and PATCH load tracked entities

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and log extras without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CategoryId = NewType("CategoryId", int)
PostId = NewType("PostId", int)
CommentId = NewType("CommentId", int)


# ─── Enums ───────────────────────────────────────────────────────

class ResourceKind(str, Enum):
    """The three blog resources. Values are used in logs and error messages."""
    CATEGORY = "category"
    POST = "post"
    COMMENT = "comment"

    @property
    def label(self) -> str:
        """Human-facing name, e.g. 'Post'."""
        return self.value.capitalize()


class LoadMode(str, Enum):
    """How the existence gate loads an entity."""
    TRACKED = "tracked"
    DETACHED = "detached"


TRACKING_METHODS = frozenset({"PUT", "PATCH"})


def load_mode_for(method: str) -> LoadMode:
    """Mutating verbs mutate the loaded entity in place; everything else reads."""
    if method.upper() in TRACKING_METHODS:
        return LoadMode.TRACKED
    return LoadMode.DETACHED
