"""Async Session Factory — provides async DB sessions for direct usage outside FastAPI.

Invariants:
    - Meant for scripts and test fixtures, never for request handling

Design Decisions:
    - Separate from infrastructure/database.py: the dev-data script needs a raw
      factory without the request-scoped error mapping
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker


def create_session_factory(
    database_url: str,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )


async def dispose_session_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    """Close the engine's pooled connections before the event loop ends."""
    await session_factory.kw["bind"].dispose()
