from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


# SQLAlchemy 2.0 style — replaces the deprecated declarative_base() function
class Base(DeclarativeBase):
    pass


class Database:
    """
    Storage client shared by every request handler.

    Built once in the application lifespan and kept on ``app.state.db``.
    The engine pools connections and pre-pings them on checkout, so a
    connection dropped by the server is replaced instead of failing every
    later query.
    """

    def __init__(self, url: str, pool_size: int = 5):
        engine_kwargs = {"pool_pre_ping": True}
        if not url.startswith("sqlite"):
            engine_kwargs["pool_size"] = pool_size
        self.engine = create_async_engine(url, **engine_kwargs)
        self.sessionmaker = async_sessionmaker(
            self.engine, expire_on_commit=False, autoflush=False
        )

    async def ping(self) -> None:
        async with self.engine.connect() as connection:
            await connection.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    database: Database = request.app.state.db
    async with database.sessionmaker() as session:
        yield session
