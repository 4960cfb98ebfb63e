# models/bookmark.py
from sqlalchemy import Column, Integer, String, DateTime
from database import Base
from models.timestamps import utcnow


class Bookmark(Base):
    __tablename__ = 'bookmarks'

    id = Column(Integer, primary_key=True, index=True)

    book_id = Column(Integer, nullable=False, index=True)  # 1..66, canonical order
    chapter = Column(Integer, nullable=False)
    verse = Column(Integer, nullable=True)  # None bookmarks the whole chapter

    title = Column(String(255), nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    # Bookmarks are never edited; delete and recreate instead

    def __repr__(self):
        return f'<Bookmark {self.id} - {self.book_id} {self.chapter}:{self.verse}>'
