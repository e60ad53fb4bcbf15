"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - One generic store contract for all three resources: the handlers differ only
      in which model and which predicates they pass
"""

from typing import Any, Protocol, Sequence, TypeVar

from simpleblog.core.domain_types import LoadMode

EntityT = TypeVar("EntityT")


class EntityStore(Protocol[EntityT]):
    """Contract for entity persistence — implemented by shell."""
    async def find(
        self, entity_id: int, *where: Any, mode: LoadMode = LoadMode.DETACHED,
    ) -> EntityT | None: ...
    async def find_all(self, *where: Any) -> Sequence[EntityT]: ...
    async def find_by_ids(self, ids: Sequence[int], *where: Any) -> Sequence[EntityT]: ...
    def add(self, entity: EntityT) -> None: ...
    def add_all(self, entities: Sequence[EntityT]) -> None: ...
    async def remove(self, entity: EntityT) -> None: ...
    async def save(self) -> None: ...
    async def refresh(self, entity: EntityT) -> None: ...
