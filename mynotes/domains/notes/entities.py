import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note:
    """Сущность заметки"""

    def __init__(
        self,
        note_id: Optional[str] = None,
        title: str = "",
        content: str = "",
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.note_id = note_id or str(uuid.uuid4())
        self.title = title
        self.content = content
        self.created_at = created_at or _utcnow()
        self.updated_at = updated_at or self.created_at

    def update_title(self, new_title: str) -> None:
        """Обновление заголовка заметки"""
        self.title = new_title
        self.updated_at = _utcnow()

    def update_content(self, new_content: str) -> None:
        """Обновление содержимого заметки"""
        self.content = new_content
        self.updated_at = _utcnow()

    def copy(self) -> "Note":
        """Независимая копия заметки"""
        return Note(
            note_id=self.note_id,
            title=self.title,
            content=self.content,
            created_at=self.created_at,
            updated_at=self.updated_at
        )

    @classmethod
    def create_note(cls, title: str, content: str = "") -> "Note":
        """Создание новой заметки со свежим идентификатором"""
        return cls(
            note_id=str(uuid.uuid4()),
            title=title,
            content=content
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Note):
            return False
        return self.note_id == other.note_id

    def __hash__(self) -> int:
        return hash(self.note_id)

    def __repr__(self) -> str:
        return f"Note(note_id={self.note_id}, title={self.title})"


@dataclass
class Page:
    """Одна страница заметок и токен продолжения (None - конец потока)"""

    items: List[Note] = field(default_factory=list)
    next_token: Optional[str] = None

    @property
    def has_more(self) -> bool:
        return self.next_token is not None

    @classmethod
    def empty(cls) -> "Page":
        return cls(items=[], next_token=None)
