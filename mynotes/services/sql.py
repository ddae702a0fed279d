import logging
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from mynotes.db.repositories.note_repository import NoteRepository
from mynotes.domains.notes.entities import Note, Page
from mynotes.services.base import DataService

logger = logging.getLogger(__name__)


class SqlDataService(DataService):
    """Хранилище заметок в реляционной БД (SQLAlchemy, асинхронно)"""

    def __init__(self, session_factory: async_sessionmaker, max_page_size: Optional[int] = None):
        super().__init__(max_page_size)
        self._session_factory = session_factory

    async def seed(self, count: int) -> int:
        """Заполнение пустой таблицы демонстрационными заметками"""
        async with self._session_factory() as session:
            repository = NoteRepository(session)
            if await repository.count() > 0:
                return 0

            for i in range(count):
                await repository.create(Note(title=f"Note {i}", content=f"Content for note {i}"))

        logger.info(f"Seeded notes table with {count} notes")
        return count

    async def _load_page(self, limit: int, after: Optional[str]) -> Page:
        async with self._session_factory() as session:
            rows = await NoteRepository(session).list_after(after, limit)

        if rows is None:
            logger.debug(f"Cursor {after} not found, returning empty page")
            return Page.empty()

        items = rows[:limit]
        if not items:
            return Page.empty()

        next_token = items[-1].note_id if len(rows) > limit else None
        return Page(items=items, next_token=next_token)

    async def _get(self, note_id: str) -> Optional[Note]:
        async with self._session_factory() as session:
            return await NoteRepository(session).get_by_note_id(note_id)

    async def _create(self, title: str, content: str) -> Note:
        async with self._session_factory() as session:
            note = await NoteRepository(session).create(Note.create_note(title=title, content=content))

        logger.info(f"Created note {note.note_id}")
        return note

    async def _update(self, note: Note) -> Optional[Note]:
        async with self._session_factory() as session:
            updated = await NoteRepository(session).update(note)

        if updated is not None:
            logger.info(f"Updated note {note.note_id}")
        return updated

    async def _delete(self, note_id: str) -> bool:
        async with self._session_factory() as session:
            deleted = await NoteRepository(session).delete(note_id)

        if deleted:
            logger.info(f"Deleted note {note_id}")
        return deleted
