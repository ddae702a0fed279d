from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func

from mynotes.db.models.note import Note as NoteModel
from mynotes.domains.notes.entities import Note


class NoteRepository:
    """Репозиторий для работы с заметками"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, note: Note) -> Note:
        """Создание новой заметки"""
        db_note = NoteModel(
            note_id=note.note_id,
            title=note.title,
            content=note.content,
            created_at=note.created_at,
            updated_at=note.updated_at
        )

        self.session.add(db_note)
        await self.session.commit()
        await self.session.refresh(db_note)
        return self._to_domain(db_note)

    async def get_by_note_id(self, note_id: str) -> Optional[Note]:
        """Получение заметки по идентификатору"""
        db_note = await self._get_model(note_id)
        return self._to_domain(db_note) if db_note else None

    async def list_after(self, after: Optional[str], limit: int) -> Optional[List[Note]]:
        """Получение заметок после курсора в порядке хранения.

        Возвращает до limit + 1 записей: лишняя запись показывает, что поток
        не исчерпан. None - курсор не найден.
        """
        query = select(NoteModel).order_by(NoteModel.id.asc())

        if after is not None:
            cursor_row = await self._get_model(after)
            if cursor_row is None:
                return None
            query = query.where(NoteModel.id > cursor_row.id)

        result = await self.session.execute(query.limit(limit + 1))
        return [self._to_domain(row) for row in result.scalars().all()]

    async def update(self, note: Note) -> Optional[Note]:
        """Обновление заметки"""
        db_note = await self._get_model(note.note_id)
        if db_note is None:
            return None

        db_note.title = note.title
        db_note.content = note.content
        await self.session.commit()
        await self.session.refresh(db_note)
        return self._to_domain(db_note)

    async def delete(self, note_id: str) -> bool:
        """Удаление заметки"""
        stmt = delete(NoteModel).where(NoteModel.note_id == note_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def count(self) -> int:
        """Подсчет количества заметок"""
        result = await self.session.execute(select(func.count(NoteModel.id)))
        return result.scalar()

    async def _get_model(self, note_id: str) -> Optional[NoteModel]:
        result = await self.session.execute(
            select(NoteModel).where(NoteModel.note_id == note_id)
        )
        return result.scalar_one_or_none()

    def _to_domain(self, db_note: NoteModel) -> Note:
        """Преобразование модели БД в доменную сущность"""
        return Note(
            note_id=db_note.note_id,
            title=db_note.title,
            content=db_note.content,
            created_at=db_note.created_at,
            updated_at=db_note.updated_at
        )
