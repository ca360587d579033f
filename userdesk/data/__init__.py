from typing import Optional

from sqlalchemy import MetaData

from userdesk.config.properties import ConfigurationProperties, get_config
from userdesk.data.adapter import SQLAlchemyAdapter
from userdesk.exceptions import ConfigurationException

metadata = MetaData()


async def initialize_database(
    config: Optional[ConfigurationProperties] = None,
    adapter: Optional[SQLAlchemyAdapter] = None,
) -> SQLAlchemyAdapter:
    """
    Connect the database adapter and create tables for registered models.
    Reads the database section of the configuration.
    """
    config = config or get_config()

    database_url = config.get("database.url")
    if not database_url:
        raise ConfigurationException("database.url is not configured")

    adapter_type = config.get("database.adapter", "sqlalchemy")
    if adapter_type != "sqlalchemy":
        raise ConfigurationException(f"Unknown database adapter: {adapter_type}")

    if adapter is None:
        adapter = SQLAlchemyAdapter(metadata)

    await adapter.connect(
        database_url,
        echo=config.get_bool("database.echo"),
        pool_size=config.get_int("database.pool.size", 10),
        max_overflow=config.get_int("database.pool.max_overflow", 20),
        pool_timeout=config.get_int("database.pool.timeout", 30),
        pool_recycle=config.get_int("database.pool.recycle", 3600),
        enable_pooling=config.get_bool("database.pool.enabled", True),
    )

    await adapter.create_tables()

    return adapter


__all__ = [
    "metadata",
    "SQLAlchemyAdapter",
    "initialize_database",
]
