# models/highlight.py
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from database import Base
from models.timestamps import utcnow


class Highlight(Base):
    __tablename__ = 'highlights'
    # At most one highlight per verse
    __table_args__ = (
        UniqueConstraint('book_id', 'chapter', 'verse', name='uq_highlight_verse'),
    )

    id = Column(Integer, primary_key=True, index=True)
    book_id = Column(Integer, nullable=False, index=True)
    chapter = Column(Integer, nullable=False, index=True)
    verse = Column(Integer, nullable=False)
    color_tag = Column(String(32), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f'<Highlight {self.book_id} {self.chapter}:{self.verse} {self.color_tag}>'
