from mynotes.db.base import Base
from mynotes.db.models.note import Note

__all__ = [
    "Base",
    "Note"
]
