"""SQLAlchemy Entity Store — the EntityStore contract over one AsyncSession.

Invariants:
    - TRACKED loads stay attached to the session: field changes plus save() persist
    - DETACHED loads are expunged before they are returned (read-only snapshot)
    - save() is the only place that commits
    - Collection queries order by id; callers must not rely on request order

Design Decisions:
    - Tracked load by primary key goes through AsyncSession.get (identity map first)
    - remove() awaits AsyncSession.delete so ORM cascades may lazy-load children
      inside the greenlet, also for entities loaded detached
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from simpleblog.core.domain_types import LoadMode

EntityT = TypeVar("EntityT")


class SqlAlchemyStore(Generic[EntityT]):
    """Repository over a single mapped model."""

    def __init__(self, db: AsyncSession, model: type[EntityT]):
        self._db = db
        self._model = model

    async def find(
        self, entity_id: int, *where: Any, mode: LoadMode = LoadMode.DETACHED,
    ) -> EntityT | None:
        if mode is LoadMode.TRACKED and not where:
            return await self._db.get(self._model, entity_id)

        query = select(self._model).where(self._model.id == entity_id, *where)
        entity = (await self._db.execute(query)).scalar_one_or_none()
        if entity is not None and mode is LoadMode.DETACHED:
            self._db.expunge(entity)
        return entity

    async def find_all(self, *where: Any) -> Sequence[EntityT]:
        query = select(self._model).order_by(self._model.id)
        if where:
            query = query.where(*where)
        return (await self._db.execute(query)).scalars().all()

    async def find_by_ids(self, ids: Sequence[int], *where: Any) -> Sequence[EntityT]:
        return await self.find_all(self._model.id.in_(list(ids)), *where)

    def add(self, entity: EntityT) -> None:
        self._db.add(entity)

    def add_all(self, entities: Sequence[EntityT]) -> None:
        self._db.add_all(entities)

    async def remove(self, entity: EntityT) -> None:
        await self._db.delete(entity)

    async def save(self) -> None:
        await self._db.commit()

    async def refresh(self, entity: EntityT) -> None:
        await self._db.refresh(entity)
