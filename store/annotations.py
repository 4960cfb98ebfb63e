# store/annotations.py
import logging

from database import get_db_session
from models import Bookmark, Highlight, Note, ReadingProgress
from models.timestamps import utcnow
from schemas import (
    BookmarkRead,
    HighlightRead,
    NoteCreate,
    NoteRead,
    NoteUpdate,
    ReadingProgressRead,
)

logger = logging.getLogger(__name__)

NOTE_KINDS = ('all', 'verse', 'journal')


class AnnotationStore:
    """Bookmarks, highlights, notes and reading progress on the device.

    Every call runs in its own session and commits before returning.
    Storage failures surface as database.StorageError; lookups that find
    nothing return None, False or an empty collection.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def _session(self):
        return get_db_session(self._session_factory)

    # --- Bookmarks ---

    def add_bookmark(self, book_id, chapter, verse=None, title=None):
        with self._session() as db:
            bookmark = Bookmark(book_id=book_id, chapter=chapter, verse=verse, title=title)
            db.add(bookmark)
            db.flush()
            logger.info(f"Added bookmark {bookmark.id} at {book_id} {chapter}:{verse}")
            return BookmarkRead.model_validate(bookmark)

    def get_bookmark(self, bookmark_id):
        with self._session() as db:
            bookmark = db.query(Bookmark).filter_by(id=bookmark_id).first()
            return BookmarkRead.model_validate(bookmark) if bookmark else None

    def delete_bookmark(self, bookmark_id):
        with self._session() as db:
            bookmark = db.query(Bookmark).filter_by(id=bookmark_id).first()
            if not bookmark:
                return False
            db.delete(bookmark)
            logger.info(f"Deleted bookmark {bookmark_id}")
            return True

    def list_bookmarks(self):
        with self._session() as db:
            bookmarks = db.query(Bookmark).order_by(Bookmark.created_at.desc(), Bookmark.id.desc()).all()
            return [BookmarkRead.model_validate(b) for b in bookmarks]

    def list_bookmarks_by_book(self):
        """Bookmarks grouped by book id, books in canonical order.

        Within a book, bookmarks are sorted by chapter then verse; a
        chapter bookmark (no verse) sorts before its verses.
        """
        grouped = {}
        for bookmark in self.list_bookmarks():
            grouped.setdefault(bookmark.book_id, []).append(bookmark)
        return {
            book_id: sorted(grouped[book_id], key=lambda b: (b.chapter, b.verse or 0))
            for book_id in sorted(grouped)
        }

    # --- Highlights ---

    def set_highlight(self, book_id, chapter, verse, color_tag):
        with self._session() as db:
            existing = db.query(Highlight).filter_by(book_id=book_id, chapter=chapter, verse=verse).first()
            if existing:
                db.delete(existing)
                # Deletes flush after inserts; push this one out before the
                # replacement hits the unique constraint
                db.flush()
            highlight = Highlight(book_id=book_id, chapter=chapter, verse=verse, color_tag=color_tag)
            db.add(highlight)
            db.flush()
            return HighlightRead.model_validate(highlight)

    def clear_highlight(self, book_id, chapter, verse):
        with self._session() as db:
            existing = db.query(Highlight).filter_by(book_id=book_id, chapter=chapter, verse=verse).first()
            if not existing:
                return False
            db.delete(existing)
            return True

    def get_highlight(self, book_id, chapter, verse):
        with self._session() as db:
            highlight = db.query(Highlight).filter_by(book_id=book_id, chapter=chapter, verse=verse).first()
            return HighlightRead.model_validate(highlight) if highlight else None

    def list_highlights(self, book_id, chapter):
        """Map of verse number to color tag for one chapter."""
        with self._session() as db:
            highlights = db.query(Highlight).filter_by(book_id=book_id, chapter=chapter).all()
            return {h.verse: h.color_tag for h in highlights}

    # --- Notes ---

    def add_note(self, book_id=None, chapter=None, verse=None, title='', content='',
                 tags=(), images=(), is_freeform=False):
        data = NoteCreate(
            book_id=book_id,
            chapter=chapter,
            verse=verse,
            title=title,
            content=content,
            tags=list(tags),
            images=list(images),
            is_freeform=is_freeform,
        )
        with self._session() as db:
            now = utcnow()
            note = Note(
                book_id=data.book_id,
                chapter=data.chapter,
                verse=data.verse,
                title=data.title,
                content=data.content,
                tags=data.tags,
                is_freeform=data.is_freeform,
                created_at=now,
                updated_at=now,
            )
            note.set_images(data.images)
            db.add(note)
            db.flush()
            logger.info(f"Added note {note.id}")
            return NoteRead.model_validate(note)

    def update_note(self, note_id, title, content, tags, images=None):
        data = NoteUpdate(title=title, content=content, tags=list(tags), images=images)
        with self._session() as db:
            note = db.query(Note).filter_by(id=note_id).first()
            if not note:
                return None
            note.title = data.title
            note.content = data.content
            note.tags = data.tags
            if data.images is not None:
                note.set_images(data.images)
            note.updated_at = utcnow()
            db.flush()
            return NoteRead.model_validate(note)

    def delete_note(self, note_id):
        with self._session() as db:
            note = db.query(Note).filter_by(id=note_id).first()
            if not note:
                return False
            db.delete(note)
            logger.info(f"Deleted note {note_id}")
            return True

    def get_note(self, note_id):
        with self._session() as db:
            note = db.query(Note).filter_by(id=note_id).first()
            return NoteRead.model_validate(note) if note else None

    def list_notes(self, book_id=None, chapter=None, verse=None):
        """All notes, most recently updated first.

        With book_id, chapter and verse given, only notes anchored to exactly
        that verse are returned. Giving only some of the three raises
        ValueError.
        """
        anchor = (book_id, chapter, verse)
        if any(v is None for v in anchor) and any(v is not None for v in anchor):
            raise ValueError("book_id, chapter and verse must be given together")
        with self._session() as db:
            query = db.query(Note)
            if book_id is not None:
                query = query.filter_by(book_id=book_id, chapter=chapter, verse=verse)
            notes = query.order_by(Note.updated_at.desc(), Note.created_at.desc()).all()
            return [NoteRead.model_validate(n) for n in notes]

    def search_notes(self, query):
        """Notes whose title or content contains query, ignoring case."""
        if not query:
            return []
        # Matched in Python; SQLite's lower() only folds ASCII
        needle = query.lower()
        return [
            n for n in self.list_notes()
            if needle in n.title.lower() or needle in n.content.lower()
        ]

    def filter_notes(self, kind='all', query=None):
        """Notes list filtered by kind ('all', 'verse' or 'journal').

        A non-empty query additionally matches title, content or any tag,
        ignoring case.
        """
        if kind not in NOTE_KINDS:
            raise ValueError(f"Unknown note kind: {kind}")
        notes = self.list_notes()
        if kind == 'verse':
            notes = [n for n in notes if not n.is_freeform]
        elif kind == 'journal':
            notes = [n for n in notes if n.is_freeform]
        if query:
            needle = query.lower()
            notes = [
                n for n in notes
                if needle in n.title.lower()
                or needle in n.content.lower()
                or any(needle in tag.lower() for tag in n.tags)
            ]
        return notes

    def noted_verses(self, book_id, chapter):
        """Verse numbers in a chapter that carry at least one note."""
        with self._session() as db:
            rows = db.query(Note.verse).filter(
                Note.book_id == book_id,
                Note.chapter == chapter,
                Note.verse.isnot(None),
            ).distinct().all()
            return {row[0] for row in rows}

    # --- Reading progress ---

    def _latest_progress(self, db):
        return db.query(ReadingProgress).order_by(
            ReadingProgress.last_read_at.desc(), ReadingProgress.id.desc()
        ).first()

    def save_reading_progress(self, book_id, chapter, verse=1):
        """Record the current position, updating the single progress row."""
        with self._session() as db:
            progress = self._latest_progress(db)
            if progress:
                progress.book_id = book_id
                progress.chapter = chapter
                progress.verse = verse
                progress.last_read_at = utcnow()
            else:
                progress = ReadingProgress(book_id=book_id, chapter=chapter, verse=verse)
                db.add(progress)
            db.flush()
            return ReadingProgressRead.model_validate(progress)

    def load_last_reading_progress(self):
        with self._session() as db:
            progress = self._latest_progress(db)
            return ReadingProgressRead.model_validate(progress) if progress else None

    def count_reading_progress(self):
        with self._session() as db:
            return db.query(ReadingProgress).count()
