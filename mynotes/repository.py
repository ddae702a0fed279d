from typing import Optional

from mynotes.core.config import settings
from mynotes.domains.notes.entities import Note
from mynotes.paging.factory import SourceFactory
from mynotes.paging.paged_list import ObservablePagedList
from mynotes.paging.source import PagedSource
from mynotes.services.base import DataService


class NotesRepository:
    """Единая точка доступа к заметкам: наблюдаемый список и CRUD"""

    def __init__(self, data_service: DataService, page_size: Optional[int] = None):
        self.data_service = data_service
        self._factory = SourceFactory(data_service)
        self._page_list = ObservablePagedList(
            self._factory, settings.page_size if page_size is None else page_size
        )

    def observable_page_list(self) -> ObservablePagedList:
        """Наблюдаемый постраничный список всех заметок"""
        return self._page_list

    def current_source(self) -> Optional[PagedSource]:
        """Источник текущей эпохи (None, пока список не наблюдали)"""
        return self._factory.current_source()

    async def get(self, note_id: str) -> Optional[Note]:
        """Получение заметки; список не перезагружается"""
        source = self.current_source()
        if source is None:
            return await self.data_service.get(note_id)
        return await source.get_item(note_id)

    async def create(self, title: str, content: str = "") -> Note:
        """Сохранение новой заметки"""
        source = self.current_source()
        if source is None:
            note = await self.data_service.create(title, content)
            self._factory.invalidate_current()
            return note
        return await source.create_item(title, content)

    async def update(self, note: Note) -> Optional[Note]:
        """Обновление заметки (None - заметка не найдена)"""
        source = self.current_source()
        if source is None:
            updated = await self.data_service.update(note)
            if updated is not None:
                self._factory.invalidate_current()
            return updated
        return await source.update_item(note)

    async def delete(self, note_id: str) -> bool:
        """Удаление заметки"""
        source = self.current_source()
        if source is None:
            deleted = await self.data_service.delete(note_id)
            if deleted:
                self._factory.invalidate_current()
            return deleted
        return await source.delete_item(note_id)
