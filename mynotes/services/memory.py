import asyncio
import logging
from typing import Iterable, List, Optional

from mynotes.domains.notes.entities import Note, Page
from mynotes.services.base import DataService

logger = logging.getLogger(__name__)


class InMemoryDataService(DataService):
    """Эталонное хранилище заметок в памяти.

    Хранит упорядоченный список заметок и наружу отдает только копии.
    Параметр latency имитирует задержку удаленного сервиса: каждая операция
    отдает управление циклу событий перед обращением к списку.
    """

    def __init__(
        self,
        notes: Optional[Iterable[Note]] = None,
        seed: int = 0,
        latency: float = 0.0,
        max_page_size: Optional[int] = None
    ):
        super().__init__(max_page_size)
        self.latency = latency
        self._items: List[Note] = [note.copy() for note in notes or []]

        for i in range(seed):
            self._items.append(Note(title=f"Note {i}", content=f"Content for note {i}"))

        if self._items:
            logger.debug(f"In-memory store initialised with {len(self._items)} notes")

    def __len__(self) -> int:
        return len(self._items)

    async def _load_page(self, limit: int, after: Optional[str]) -> Page:
        await self._simulate_latency()

        first = 0
        if after is not None:
            idx = self._index_of(after)
            if idx < 0:
                # Позиция курсора потеряна (например, заметку удалили)
                logger.debug(f"Cursor {after} not found, returning empty page")
                return Page.empty()
            first = idx + 1

        items = self._items[first:first + limit]
        if not items:
            return Page.empty()

        last = first + len(items)
        next_token = items[-1].note_id if last < len(self._items) else None
        return Page(items=[note.copy() for note in items], next_token=next_token)

    async def _get(self, note_id: str) -> Optional[Note]:
        await self._simulate_latency()
        idx = self._index_of(note_id)
        return self._items[idx].copy() if idx >= 0 else None

    async def _create(self, title: str, content: str) -> Note:
        await self._simulate_latency()
        note = Note.create_note(title=title, content=content)
        self._items.append(note)
        logger.info(f"Created note {note.note_id}")
        return note.copy()

    async def _update(self, note: Note) -> Optional[Note]:
        await self._simulate_latency()
        idx = self._index_of(note.note_id)
        if idx < 0:
            return None

        stored = self._items[idx]
        stored.update_title(note.title)
        stored.update_content(note.content)
        logger.info(f"Updated note {note.note_id}")
        return stored.copy()

    async def _delete(self, note_id: str) -> bool:
        await self._simulate_latency()
        idx = self._index_of(note_id)
        if idx < 0:
            return False

        del self._items[idx]
        logger.info(f"Deleted note {note_id}")
        return True

    async def _simulate_latency(self) -> None:
        await asyncio.sleep(self.latency)

    def _index_of(self, note_id: str) -> int:
        for i, note in enumerate(self._items):
            if note.note_id == note_id:
                return i
        return -1
