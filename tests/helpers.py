import asyncio
from typing import Iterable, List

from mynotes.domains.notes.entities import Note
from mynotes.services.memory import InMemoryDataService


def make_notes(ids: Iterable[str]) -> List[Note]:
    return [Note(note_id=i, title=f"Title {i}", content=f"Content {i}") for i in ids]


def note_ids(notes: Iterable[Note]) -> List[str]:
    return [note.note_id for note in notes]


class GatedDataService(InMemoryDataService):
    """Хранилище, задерживающее первые hold запросов страниц до открытия gate"""

    def __init__(self, *args, hold: int = 1, **kwargs):
        super().__init__(*args, **kwargs)
        self.hold = hold
        self.gate = asyncio.Event()
        self.page_requests = 0

    async def _load_page(self, limit, after):
        self.page_requests += 1
        if self.hold > 0:
            self.hold -= 1
            await self.gate.wait()
        return await super()._load_page(limit, after)
