# schemas/annotation_schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookmarkRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    book_id: int
    chapter: int
    verse: Optional[int] = None
    title: Optional[str] = None
    created_at: datetime


class HighlightRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    book_id: int
    chapter: int
    verse: int
    color_tag: str
    created_at: datetime


class NoteBase(BaseModel):
    title: str = Field('', max_length=255)
    content: str = ''
    tags: List[str] = Field(default_factory=list)

    @field_validator('tags')
    @classmethod
    def dedupe_tags(cls, tags):
        """Drop blank and repeated tags, keeping the first occurrence."""
        seen = []
        for tag in tags:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen


class NoteCreate(NoteBase):
    book_id: Optional[int] = None
    chapter: Optional[int] = None
    verse: Optional[int] = None
    images: List[bytes] = Field(default_factory=list)
    is_freeform: bool = False


class NoteUpdate(NoteBase):
    images: Optional[List[bytes]] = None  # None keeps the stored images


class NoteRead(NoteBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    book_id: Optional[int] = None
    chapter: Optional[int] = None
    verse: Optional[int] = None
    images: List[bytes] = Field(default_factory=list)
    is_freeform: bool
    created_at: datetime
    updated_at: datetime

    @field_validator('images', mode='before')
    @classmethod
    def unwrap_images(cls, images):
        return [getattr(image, 'data', image) for image in images]

    @property
    def is_anchored(self):
        return self.book_id is not None and self.chapter is not None and self.verse is not None


class ReadingProgressRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    book_id: int
    chapter: int
    verse: int
    last_read_at: datetime
