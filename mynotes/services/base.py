"""
Контракт источника данных заметок.

Публичные методы проверяют аргументы синхронно, в момент вызова, и только
затем возвращают корутину реализации. Ошибка вызывающей стороны (пустой id,
лимит вне диапазона, пустой заголовок) поднимается до любого обращения к
хранилищу. Отсутствие записи ошибкой не считается: это None/False или
пустая страница.
"""
from abc import ABC, abstractmethod
from typing import Awaitable, Optional

from mynotes.core.config import settings
from mynotes.domains.notes.entities import Note, Page


def validate_note_id(note_id: str) -> str:
    """Проверка идентификатора заметки"""
    if not isinstance(note_id, str):
        raise TypeError(f"note_id must be a string, got {type(note_id).__name__}")
    if not note_id.strip():
        raise ValueError("note_id cannot be empty")
    return note_id


def validate_limit(limit: int, max_page_size: int) -> int:
    """Проверка размера страницы"""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise TypeError(f"limit must be an integer, got {type(limit).__name__}")
    if limit < 1 or limit > max_page_size:
        raise ValueError(f"Limit must be between 1 and {max_page_size}")
    return limit


def validate_token(after: Optional[str]) -> Optional[str]:
    """Проверка токена продолжения"""
    if after is None:
        return None
    if not isinstance(after, str):
        raise TypeError(f"continuation token must be a string, got {type(after).__name__}")
    if not after:
        raise ValueError("continuation token cannot be empty")
    return after


def validate_text(title: str, content: str) -> None:
    """Проверка заголовка и содержимого"""
    if not isinstance(title, str) or not isinstance(content, str):
        raise TypeError("title and content must be strings")
    if not title.strip():
        raise ValueError("Title cannot be empty")


class DataService(ABC):
    """Асинхронный CRUD и постраничная загрузка заметок"""

    def __init__(self, max_page_size: Optional[int] = None):
        self.max_page_size = max_page_size or settings.max_page_size

    def load_page(self, limit: int, after: Optional[str] = None) -> Awaitable[Page]:
        """Загрузка одной страницы после токена after"""
        validate_limit(limit, self.max_page_size)
        validate_token(after)
        return self._load_page(limit, after)

    def get(self, note_id: str) -> Awaitable[Optional[Note]]:
        """Получение заметки по идентификатору"""
        validate_note_id(note_id)
        return self._get(note_id)

    def create(self, title: str, content: str = "") -> Awaitable[Note]:
        """Создание заметки"""
        validate_text(title, content)
        return self._create(title, content)

    def update(self, note: Note) -> Awaitable[Optional[Note]]:
        """Обновление существующей заметки (None - такой заметки нет)"""
        if not isinstance(note, Note):
            raise TypeError(f"expected Note, got {type(note).__name__}")
        validate_note_id(note.note_id)
        validate_text(note.title, note.content)
        return self._update(note)

    def delete(self, note_id: str) -> Awaitable[bool]:
        """Удаление заметки"""
        validate_note_id(note_id)
        return self._delete(note_id)

    @abstractmethod
    async def _load_page(self, limit: int, after: Optional[str]) -> Page:
        ...

    @abstractmethod
    async def _get(self, note_id: str) -> Optional[Note]:
        ...

    @abstractmethod
    async def _create(self, title: str, content: str) -> Note:
        ...

    @abstractmethod
    async def _update(self, note: Note) -> Optional[Note]:
        ...

    @abstractmethod
    async def _delete(self, note_id: str) -> bool:
        ...
