"""Fixtures for integration tests."""

import pytest
import pytest_asyncio

from ptce.infrastructure.persistence.database import DatabaseConfig, DatabaseManager
from ptce.infrastructure.persistence.repositories import (
    ContenderRepositoryImpl,
    MatchResultRepositoryImpl,
)


def pytest_collection_modifyitems(items):
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest_asyncio.fixture
async def database(tmp_path):
    """Fresh sqlite database with every table created."""
    manager = DatabaseManager(
        DatabaseConfig(database_url=f"sqlite+aiosqlite:///{tmp_path / 'integration.db'}")
    )
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
def contender_repository(database):
    return ContenderRepositoryImpl(database.get_async_session_factory())


@pytest.fixture
def match_repository(database):
    return MatchResultRepositoryImpl(database.get_async_session_factory())
