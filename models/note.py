# models/note.py
import uuid
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, LargeBinary, JSON
from sqlalchemy.orm import relationship
from database import Base
from models.timestamps import utcnow


class Note(Base):
    __tablename__ = 'notes'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # All three set for a verse-anchored note, all None for a journal entry
    book_id = Column(Integer, nullable=True, index=True)
    chapter = Column(Integer, nullable=True)
    verse = Column(Integer, nullable=True)

    title = Column(String(255), nullable=False, default='')
    content = Column(Text, nullable=False, default='')
    tags = Column(JSON, nullable=False, default=list)
    is_freeform = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    images = relationship(
        "NoteImage",
        back_populates="note",
        order_by="NoteImage.position",
        cascade="all, delete-orphan",
    )

    def set_images(self, blobs):
        self.images = [NoteImage(position=i, data=bytes(blob)) for i, blob in enumerate(blobs)]

    def __repr__(self):
        return f'<Note {self.id} {self.book_id} {self.chapter}:{self.verse} "{self.title}">'


class NoteImage(Base):
    __tablename__ = 'note_images'

    id = Column(Integer, primary_key=True)
    note_id = Column(String(36), ForeignKey('notes.id', ondelete='CASCADE'), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    data = Column(LargeBinary, nullable=False)

    note = relationship("Note", back_populates="images")
