import os

import pytest
import pytest_asyncio

from userdesk.config.properties import ConfigurationProperties
from userdesk.data import SQLAlchemyAdapter, metadata
from userdesk.users import UserRepository, UserService

MEMORY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def clean_userdesk_env():
    """Keep USERDESK_* environment variables from leaking between tests."""
    saved = {k: v for k, v in os.environ.items() if k.startswith("USERDESK_")}
    for key in saved:
        del os.environ[key]
    yield
    for key in [k for k in os.environ if k.startswith("USERDESK_")]:
        del os.environ[key]
    os.environ.update(saved)


@pytest.fixture
def memory_config(tmp_path):
    """Configuration pointing at an in-memory SQLite database."""
    return ConfigurationProperties(
        config_dir=tmp_path,
        overrides={"database.url": MEMORY_DATABASE_URL},
    )


@pytest_asyncio.fixture
async def database():
    """Connected adapter over in-memory SQLite with tables created."""
    adapter = SQLAlchemyAdapter(metadata)
    await adapter.connect(MEMORY_DATABASE_URL)
    await adapter.create_tables()

    yield adapter

    await adapter.disconnect()


@pytest.fixture
def user_repo(database):
    return UserRepository(database)


@pytest.fixture
def user_service(user_repo):
    return UserService(user_repo)
