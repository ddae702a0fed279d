"""
Наблюдаемый постраничный список заметок.

ObservablePagedList строится поверх SourceFactory: первая подписка создает
источник и планирует загрузку первой страницы, load_more() догружает
следующие страницы. Когда текущий источник инвалидирован, список сам
получает новый источник и перезагружается с начала, поэтому подписчику не
нужно переподписываться. Все изменения состояния происходят в цикле событий,
в котором была сделана подписка.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, List, Optional, Set, Tuple

from mynotes.domains.notes.entities import Note
from mynotes.paging.factory import SourceFactory
from mynotes.paging.source import PagedSource
from mynotes.services.base import validate_limit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PagedList:
    """Снимок списка, который получают подписчики"""

    items: Tuple[Note, ...]
    epoch: int
    is_complete: bool
    # replace - новый список после смены источника, append - догружена страница
    change: str

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Note]:
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]


Subscriber = Callable[[PagedList], None]


class ObservablePagedList:
    """Постраничный список с push-обновлениями"""

    def __init__(self, factory: SourceFactory, page_size: int = 20):
        validate_limit(page_size, factory.data_service.max_page_size)

        self.page_size = page_size
        self._factory = factory
        self._source: Optional[PagedSource] = None
        self._items: List[Note] = []
        self._snapshot: Optional[PagedList] = None
        self._subscribers: List[Subscriber] = []
        self._pending: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def source(self) -> Optional[PagedSource]:
        return self._source

    @property
    def snapshot(self) -> Optional[PagedList]:
        return self._snapshot

    @property
    def items(self) -> Tuple[Note, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Подписка на обновления списка.

        Должна вызываться внутри работающего цикла событий. Первая подписка
        запускает загрузку; поздний подписчик сразу получает текущий снимок.
        """
        if self._source is None or self._source.is_invalid:
            self._start_source()
        elif self._snapshot is not None:
            self._deliver(callback, self._snapshot)
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def load_more(self) -> bool:
        """Загрузка следующей страницы текущего источника.

        Возвращает True, если в список добавились заметки. Пока предыдущий
        запрос не завершен, новый не отправляется.
        """
        while self._pending is not None and not self._pending.done():
            await asyncio.wait({self._pending})

        source = self._source
        if source is None or not source.can_load_next:
            return False

        task = self._schedule(self._load_next(source))
        return await asyncio.shield(task)

    def refresh(self) -> None:
        """Перезагрузка списка с первой страницы"""
        # Только внутри работающего цикла событий
        asyncio.get_running_loop()
        if self._source is not None:
            self._source.invalidate()

    async def wait_idle(self) -> None:
        """Ожидание завершения всех запланированных запросов, включая устаревшие"""
        while self._tasks:
            await asyncio.wait(set(self._tasks))

    def _start_source(self) -> None:
        # Без цикла событий новый источник не публикуется
        asyncio.get_running_loop()
        source = self._factory.create()
        source.add_invalidated_callback(self._on_source_invalidated)
        self._source = source
        self._schedule(self._load_initial(source))

    def _on_source_invalidated(self, source: PagedSource) -> None:
        if source is not self._source:
            return
        if self._subscribers:
            logger.info(f"Source epoch {source.epoch} invalidated, reloading page list")
            self._start_source()

    async def _load_initial(self, source: PagedSource) -> bool:
        page = await source.load_initial(self.page_size)
        if page is None or source is not self._source:
            return False

        self._items = list(page.items)
        self._publish(source, "replace")
        return True

    async def _load_next(self, source: PagedSource) -> bool:
        page = await source.load_next(self.page_size, source.next_token)
        if page is None or source is not self._source:
            return False

        self._items.extend(page.items)
        self._publish(source, "append")
        return bool(page.items)

    def _schedule(self, coro: Awaitable[bool]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        task.add_done_callback(self._log_failure)
        task.add_done_callback(self._tasks.discard)
        self._tasks.add(task)
        self._pending = task
        return task

    def _publish(self, source: PagedSource, change: str) -> None:
        snapshot = PagedList(
            items=tuple(self._items),
            epoch=source.epoch,
            is_complete=source.is_exhausted,
            change=change
        )
        self._snapshot = snapshot

        for callback in list(self._subscribers):
            self._deliver(callback, snapshot)

    def _deliver(self, callback: Subscriber, snapshot: PagedList) -> None:
        try:
            callback(snapshot)
        except Exception:
            logger.exception(f"Page list subscriber {callback!r} failed")

    @staticmethod
    def _log_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Page load failed: {error!r}")
