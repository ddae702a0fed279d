from sqlalchemy import Column, String, Text

from mynotes.db.base import BaseModel


class Note(BaseModel):
    __tablename__ = "notes"

    note_id = Column(String(36), unique=True, index=True, nullable=False)
    title = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False, default="")
