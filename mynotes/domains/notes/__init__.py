from mynotes.domains.notes.entities import Note, Page
from mynotes.domains.notes.schemas import (
    NoteBase, NoteCreate, NoteUpdate, NoteResponse,
    PagedListResponse, PagedListMessage
)

__all__ = [
    "Note", "Page",
    "NoteBase", "NoteCreate", "NoteUpdate", "NoteResponse",
    "PagedListResponse", "PagedListMessage"
]
