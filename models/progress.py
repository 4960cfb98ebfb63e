# models/progress.py
from sqlalchemy import Column, Integer, DateTime
from database import Base
from models.timestamps import utcnow


class ReadingProgress(Base):
    """The device's current reading position.

    Only one row is kept. Saving a new position updates that row in place
    instead of appending history.
    """
    __tablename__ = 'reading_progress'

    id = Column(Integer, primary_key=True)
    book_id = Column(Integer, nullable=False)
    chapter = Column(Integer, nullable=False)
    verse = Column(Integer, nullable=False, default=1)
    last_read_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    def __repr__(self):
        return f'<ReadingProgress {self.book_id} {self.chapter}:{self.verse} at {self.last_read_at}>'
