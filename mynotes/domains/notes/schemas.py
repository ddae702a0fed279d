from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List, Literal
from datetime import datetime


class NoteBase(BaseModel):
    """Базовая схема заметки"""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(default="", max_length=1000000)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()


class NoteCreate(NoteBase):
    """Схема для создания заметки"""
    pass


class NoteUpdate(BaseModel):
    """Схема для обновления заметки"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, max_length=1000000)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip() if v else v


class NoteResponse(BaseModel):
    """Схема для ответа с данными заметки"""
    note_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PagedListResponse(BaseModel):
    """Снимок наблюдаемого списка заметок"""
    items: List[NoteResponse]
    epoch: int
    is_complete: bool
    change: Literal["replace", "append"]

    model_config = ConfigDict(from_attributes=True)


class PagedListMessage(BaseModel):
    """Сообщение WebSocket с обновлением списка"""
    type: Literal["page_list"] = "page_list"
    data: PagedListResponse
