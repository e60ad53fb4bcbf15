"""Route test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session factory
    - db_manager swapped for readiness checks that bypass get_db

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features are not exercised here)
    - Seed fixtures write through their own session; assertions go through the API
"""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from simpleblog.db.base import Base
from simpleblog.infrastructure.database import get_db, DatabaseSessionManager
from simpleblog.models.category import Category
from simpleblog.models.comment import Comment
from simpleblog.models.post import Post
import simpleblog.infrastructure.database as db_module
from simpleblog.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(fake_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_category(test_db):
    """Category "Tech" with two posts; the first post has two comments."""
    category = Category(
        name="Tech",
        description="Everything technical",
        posts=[
            Post(
                title="Async Python",
                slug="async-python",
                summary="Event loops",
                content="asyncio all the way down",
                is_published=True,
                comments=[
                    Comment(title="Nice", content="Great read", posted_by="ana"),
                    Comment(title="Typo", content="Second paragraph", posted_by="bo"),
                ],
            ),
            Post(
                title="SQLAlchemy 2.0",
                slug="sqlalchemy-2",
                content="Typed mappings",
            ),
        ],
    )
    test_db.add(category)
    await test_db.commit()
    await test_db.refresh(category, ["posts"])
    return category


@pytest.fixture
async def seed_post(seed_category):
    """The published post, the one carrying comments."""
    return min(seed_category.posts, key=lambda p: p.id)


@pytest.fixture
async def seed_comment(test_db, seed_post):
    query = select(Comment).where(Comment.post_id == seed_post.id).order_by(Comment.id)
    return (await test_db.execute(query)).scalars().first()


@pytest.fixture
async def seed_other_category(test_db):
    category = Category(name="Life", description=None)
    test_db.add(category)
    await test_db.commit()
    await test_db.refresh(category)
    return category
