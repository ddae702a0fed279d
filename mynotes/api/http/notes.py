from fastapi import APIRouter, Depends, HTTPException, Response, status

from mynotes.core.dependencies import get_notes_repository
from mynotes.domains.notes.entities import Note
from mynotes.domains.notes.schemas import NoteCreate, NoteUpdate, NoteResponse
from mynotes.repository import NotesRepository

router = APIRouter(prefix="/notes", tags=["notes"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Note not found"
    )


def _invalid(error: ValueError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=str(error)
    )


@router.post("/", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    note_data: NoteCreate,
    repository: NotesRepository = Depends(get_notes_repository)
):
    """Создание новой заметки"""
    try:
        note = await repository.create(note_data.title, note_data.content)
    except ValueError as e:
        raise _invalid(e)

    return NoteResponse.model_validate(note)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: str,
    repository: NotesRepository = Depends(get_notes_repository)
):
    """Получение заметки по идентификатору"""
    try:
        note = await repository.get(note_id)
    except ValueError as e:
        raise _invalid(e)

    if not note:
        raise _not_found()

    return NoteResponse.model_validate(note)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    update_data: NoteUpdate,
    repository: NotesRepository = Depends(get_notes_repository)
):
    """Обновление заметки"""
    try:
        existing = await repository.get(note_id)
        if not existing:
            raise _not_found()

        note = Note(
            note_id=existing.note_id,
            title=update_data.title if update_data.title is not None else existing.title,
            content=update_data.content if update_data.content is not None else existing.content,
            created_at=existing.created_at
        )
        updated = await repository.update(note)
    except ValueError as e:
        raise _invalid(e)

    # Заметку могли удалить между чтением и записью
    if not updated:
        raise _not_found()

    return NoteResponse.model_validate(updated)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    repository: NotesRepository = Depends(get_notes_repository)
):
    """Удаление заметки"""
    try:
        deleted = await repository.delete(note_id)
    except ValueError as e:
        raise _invalid(e)

    if not deleted:
        raise _not_found()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
