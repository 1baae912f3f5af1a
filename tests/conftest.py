from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from record_access.app import app
from record_access.domain.ports.repositories.product_repository import ProductRepository
from record_access.domain.ports.repositories.record_store import RecordStore
from record_access.domain.ports.repositories.user_repository import UserRepository
from record_access.infrastructure.adapters.store.sqlalchemy_record_store import SQLAlchemyRecordStore
from record_access.infrastructure.config.dependencies import get_record_store, get_settings
from record_access.infrastructure.config.settings import Settings
from record_access.infrastructure.persistence.tables import metadata

from .factories import product_factory

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def test_settings():
    return Settings(DATABASE_URL=TEST_DATABASE_URL, STORE_TIMEOUT_SECONDS=5.0, MAX_PAGE_SIZE=100)


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine with the schema created; one shared connection."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def store(engine):
    return SQLAlchemyRecordStore(engine, default_timeout=5.0)


@pytest.fixture
def store_without_returning(engine):
    return SQLAlchemyRecordStore(engine, default_timeout=5.0, use_returning=False)


@pytest_asyncio.fixture
async def seeded_products(engine):
    """Catalogue with 12 Books priced 10..50 mixed in with non-matching rows."""
    return await product_factory.seed_catalogue(engine)


@pytest.fixture
def mock_store():
    """Record store double for checks that must fail before any round trip"""
    return AsyncMock(spec=RecordStore)


@pytest.fixture
def mock_product_repository():
    """Mock product repository for use case testing"""
    return AsyncMock(spec=ProductRepository)


@pytest.fixture
def mock_user_repository():
    """Mock user repository for use case testing"""
    return AsyncMock(spec=UserRepository)


class BaseIntegrationTest:
    """Base class for API tests running against the in-memory store"""

    @pytest_asyncio.fixture
    async def client(self, store, test_settings):
        """Create test HTTP client with the record store overridden"""
        app.dependency_overrides[get_record_store] = lambda: store
        app.dependency_overrides[get_settings] = lambda: test_settings

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

        app.dependency_overrides.clear()
