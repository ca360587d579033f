import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import MetaData
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from userdesk.exceptions import DataAccessException

logger = logging.getLogger(__name__)


class SQLAlchemyAdapter:
    """
    Owns the async SQLAlchemy engine and its connection pool.

    Repositories borrow connections through get_connection(); each borrowed
    connection runs inside its own transaction.
    """

    def __init__(self, metadata: MetaData):
        self.metadata = metadata
        self.engine: Optional[AsyncEngine] = None

    @property
    def connected(self) -> bool:
        return self.engine is not None

    async def connect(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        enable_pooling: bool = True,
    ):
        """
        Create the engine.

        SQLite never pools: in-memory databases share one static connection
        so every borrower sees the same data, file databases open a fresh
        connection per borrow.
        """
        url = make_url(database_url)
        engine_kwargs = {"echo": echo}

        if url.get_backend_name() == "sqlite":
            if url.database in (None, "", ":memory:"):
                engine_kwargs["poolclass"] = StaticPool
                engine_kwargs["connect_args"] = {"check_same_thread": False}
            else:
                engine_kwargs["poolclass"] = NullPool
        elif enable_pooling:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
                pool_pre_ping=True,
            )
        else:
            engine_kwargs["poolclass"] = NullPool

        self.engine = create_async_engine(url, **engine_kwargs)
        logger.info(f"Connected to database: {url.render_as_string(hide_password=True)}")

    async def disconnect(self):
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            logger.info("Database connection closed")

    async def create_tables(self):
        """Create every table registered on the metadata that does not exist yet."""
        async with self.get_connection() as conn:
            await conn.run_sync(self.metadata.create_all)

    @asynccontextmanager
    async def get_connection(self) -> AsyncIterator[AsyncConnection]:
        if self.engine is None:
            raise DataAccessException("Database adapter is not connected")

        async with self.engine.begin() as conn:
            yield conn
