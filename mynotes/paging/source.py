"""
Источник страниц: одна эпоха постраничной загрузки.

PagedSource превращает вызовы DataService.load_page в последовательность
страниц, связанных токенами продолжения. После invalidate() источник больше
не выдает страниц, а результаты запросов, завершившихся позже, отбрасываются
и не меняют его состояние. Листание назад не поддерживается: порядок списка
мог измениться, поэтому такой запрос равносилен инвалидации.
"""
import enum
import logging
from typing import Callable, List, Optional

from mynotes.domains.notes.entities import Note, Page
from mynotes.services.base import DataService

logger = logging.getLogger(__name__)

InvalidatedCallback = Callable[["PagedSource"], None]


class SourceState(enum.Enum):
    ACTIVE = "active"
    INVALIDATED = "invalidated"


class PagedSource:
    """Курсорный сеанс чтения заметок поверх DataService"""

    def __init__(self, data_service: DataService, epoch: int = 0):
        self.epoch = epoch
        self._data_service = data_service
        self._state = SourceState.ACTIVE
        self._initial_loaded = False
        self._next_token: Optional[str] = None
        self._in_flight = False
        self._callbacks: List[InvalidatedCallback] = []
        self._late_write_callbacks: List[InvalidatedCallback] = []

    @property
    def state(self) -> SourceState:
        return self._state

    @property
    def is_invalid(self) -> bool:
        return self._state is SourceState.INVALIDATED

    @property
    def next_token(self) -> Optional[str]:
        return self._next_token

    @property
    def is_exhausted(self) -> bool:
        return self._initial_loaded and self._next_token is None

    @property
    def is_loading(self) -> bool:
        return self._in_flight

    @property
    def can_load_next(self) -> bool:
        return not self.is_invalid and self._initial_loaded and self._next_token is not None

    def add_invalidated_callback(self, callback: InvalidatedCallback) -> None:
        self._callbacks.append(callback)

    def remove_invalidated_callback(self, callback: InvalidatedCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def invalidate(self) -> None:
        """Завершение эпохи"""
        if self.is_invalid:
            return

        self._state = SourceState.INVALIDATED
        logger.debug(f"Source epoch {self.epoch} invalidated")

        for callback in list(self._callbacks):
            callback(self)

    async def load_initial(self, page_size: int) -> Optional[Page]:
        """Загрузка первой страницы"""
        if self._initial_loaded:
            raise RuntimeError("Initial page has already been loaded for this source")
        if self.is_invalid:
            return None

        logger.debug(f"load_initial({page_size}) epoch={self.epoch}")
        page = await self._request(page_size, None)
        if page is None:
            return None

        self._initial_loaded = True
        self._next_token = page.next_token
        return page

    async def load_next(self, page_size: int, token: str) -> Optional[Page]:
        """Загрузка следующей страницы после token"""
        if self.is_invalid:
            return None
        if not self._initial_loaded:
            raise RuntimeError("load_initial must complete before load_next")
        if self._next_token is None:
            # Поток исчерпан, запросов больше нет
            return None
        if token != self._next_token:
            raise ValueError(f"Continuation token {token!r} was not issued by source epoch {self.epoch}")

        logger.debug(f"load_next({page_size}, {token}) epoch={self.epoch}")
        page = await self._request(page_size, token)
        if page is None:
            return None

        self._next_token = page.next_token
        return page

    async def load_before(self, page_size: int, token: str) -> None:
        """Листание назад не поддерживается и приводит к перезагрузке"""
        logger.debug(f"load_before({page_size}, {token}) epoch={self.epoch}")
        self.invalidate()

    async def get_item(self, note_id: str) -> Optional[Note]:
        """Получение одной заметки; список не инвалидируется"""
        return await self._data_service.get(note_id)

    async def create_item(self, title: str, content: str = "") -> Note:
        note = await self._data_service.create(title, content)
        if note is not None:
            self._written()
        return note

    async def update_item(self, note: Note) -> Optional[Note]:
        updated = await self._data_service.update(note)
        if updated is not None:
            self._written()
        return updated

    async def delete_item(self, note_id: str) -> bool:
        deleted = await self._data_service.delete(note_id)
        if deleted:
            self._written()
        return deleted

    def add_late_write_callback(self, callback: InvalidatedCallback) -> None:
        """Вызывается, если запись завершилась уже после смены эпохи"""
        self._late_write_callbacks.append(callback)

    def _written(self) -> None:
        if not self.is_invalid:
            self.invalidate()
            return

        # Новая эпоха могла прочитать данные до этой записи
        logger.debug(f"Write completed after source epoch {self.epoch} was superseded")
        for callback in list(self._late_write_callbacks):
            callback(self)

    async def _request(self, page_size: int, token: Optional[str]) -> Optional[Page]:
        if self._in_flight:
            raise RuntimeError(f"A page request is already in flight for source epoch {self.epoch}")

        # Валидация аргументов происходит здесь, до установки флага
        pending = self._data_service.load_page(page_size, token)
        self._in_flight = True
        try:
            page = await pending
        finally:
            self._in_flight = False

        if self.is_invalid:
            logger.debug(f"Dropping stale page for invalidated source epoch {self.epoch}")
            return None
        return page

    def __repr__(self) -> str:
        return f"PagedSource(epoch={self.epoch}, state={self._state.value})"
