import logging
from typing import Callable, List, Optional

from mynotes.paging.source import PagedSource
from mynotes.services.base import DataService

logger = logging.getLogger(__name__)

SourceObserver = Callable[[PagedSource], None]


class SourceFactory:
    """Фабрика источников страниц.

    Хранит единственную ссылку на текущий источник. Новая ссылка появляется
    только через create(); наблюдатели получают каждый новый источник.
    """

    def __init__(self, data_service: DataService):
        self.data_service = data_service
        self._current: Optional[PagedSource] = None
        self._epoch = 0
        self._observers: List[SourceObserver] = []

    def create(self) -> PagedSource:
        """Создание и публикация нового источника"""
        self._epoch += 1
        source = PagedSource(self.data_service, epoch=self._epoch)
        source.add_late_write_callback(self._on_late_write)
        self._current = source
        logger.debug(f"Published source epoch {source.epoch}")

        for observer in list(self._observers):
            observer(source)
        return source

    def current_source(self) -> Optional[PagedSource]:
        return self._current

    def invalidate_current(self) -> None:
        """Инвалидация текущего источника, если он есть"""
        if self._current is not None:
            self._current.invalidate()

    def _on_late_write(self, source: PagedSource) -> None:
        if self._current is not source:
            self.invalidate_current()

    def observe(self, observer: SourceObserver) -> Callable[[], None]:
        """Подписка на смену текущего источника"""
        self._observers.append(observer)
        if self._current is not None:
            observer(self._current)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe
