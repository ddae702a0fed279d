from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine

from mynotes.core.config import settings
from mynotes.core.db import create_engine, create_session_factory
from mynotes.repository import NotesRepository
from mynotes.services.base import DataService
from mynotes.services.memory import InMemoryDataService
from mynotes.services.sql import SqlDataService


@lru_cache
def get_engine() -> AsyncEngine:
    return create_engine(settings.database_url)


@lru_cache
def get_data_service() -> DataService:
    """Источник данных, выбранный в настройках"""
    if settings.data_service == "memory":
        return InMemoryDataService(seed=settings.seed_notes, latency=settings.memory_latency)
    if settings.data_service == "sql":
        return SqlDataService(create_session_factory(get_engine()))
    raise ValueError(f"Unknown data service: {settings.data_service}")


@lru_cache
def get_notes_repository() -> NotesRepository:
    return NotesRepository(get_data_service(), page_size=settings.page_size)
