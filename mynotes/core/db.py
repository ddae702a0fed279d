from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from mynotes.core.config import settings
from mynotes.db.base import Base


def create_engine(database_url: str = None, echo: bool = None) -> AsyncEngine:
    """Асинхронный движок для заданного URL"""
    return create_async_engine(
        database_url or settings.database_url,
        echo=settings.sql_echo if echo is None else echo,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    """Создание таблиц, если их еще нет"""
    # Регистрация моделей в metadata
    import mynotes.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
