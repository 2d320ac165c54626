import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import MetaData, Table
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool, StaticPool

from userapi.data.entity import create_user_table

logger = logging.getLogger(__name__)


class SQLAlchemyAdapter:
    """Owns the async engine and the table metadata for stored entities."""

    def __init__(self):
        self.engine: Optional[AsyncEngine] = None
        self.metadata = MetaData()
        self.users = create_user_table(self.metadata)

    async def connect(
        self,
        url: str,
        echo: bool = False,
        pool_size: Optional[int] = None,
        max_overflow: Optional[int] = None,
        pool_timeout: Optional[int] = None,
        pool_recycle: Optional[int] = None,
        enable_pooling: bool = True,
    ):
        """
        Create the engine.

        SQLite :memory: databases get a StaticPool so every query sees the
        same connection (and therefore the same data). File-backed SQLite
        gets a NullPool. Everything else uses a queue pool unless pooling is
        disabled.
        """
        kwargs = {"echo": echo}

        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite":
            if parsed.database in (None, "", ":memory:"):
                kwargs["poolclass"] = StaticPool
                kwargs["connect_args"] = {"check_same_thread": False}
            else:
                kwargs["poolclass"] = NullPool
        elif not enable_pooling:
            kwargs["poolclass"] = NullPool
        else:
            kwargs["poolclass"] = AsyncAdaptedQueuePool
            if pool_size is not None:
                kwargs["pool_size"] = pool_size
            if max_overflow is not None:
                kwargs["max_overflow"] = max_overflow
            if pool_timeout is not None:
                kwargs["pool_timeout"] = pool_timeout
            if pool_recycle is not None:
                kwargs["pool_recycle"] = pool_recycle

        self.engine = create_async_engine(url, **kwargs)
        logger.info(f"Connected to database: {self.engine.url.render_as_string()}")

    async def disconnect(self):
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None

    async def create_table_if_not_exists(self, table: Optional[Table] = None):
        table = table if table is not None else self.users
        async with self.connection() as conn:
            await conn.run_sync(lambda sync_conn: table.create(sync_conn, checkfirst=True))

    def get_table(self) -> Table:
        return self.users

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """Connection inside a transaction, committed on clean exit."""
        if self.engine is None:
            raise RuntimeError("Database adapter is not connected")
        async with self.engine.begin() as conn:
            yield conn
