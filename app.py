# app.py
import logging
import sys

from config import Config
from database import init_db, StorageError
from store import AnnotationStore
from utils.books import list_books, find_book, BOOKS
from utils.corpus import BibleCorpus
from utils.preferences import PreferencesStore
from utils.references import bookmark_title, format_copy_text
from utils.search import BibleSearchEngine

logger = logging.getLogger(__name__)

FIRST_BOOK_ID = BOOKS[0].id
LAST_BOOK_ID = BOOKS[-1].id


def configure_logging(level='INFO'):
    # Configure logging to output to stdout
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


class BibleApp:
    """Process-wide coordinator handed to presentation code.

    Owns the only handle to the annotation store. Construction opens (or
    creates) the database and raises database.InitializationError when
    that is impossible; there is no recovery from that.
    """

    def __init__(self, config=None):
        self.config = config or Config()
        session_factory = init_db(self.config.DATABASE_URL)
        self.store = AnnotationStore(session_factory)
        self.books = list_books()
        self.corpus = BibleCorpus(self.config.KJV_JSON_PATH)
        self.preferences = PreferencesStore(self.config.PREFERENCES_PATH)
        self.search_engine = BibleSearchEngine(self.corpus, limit=self.config.SEARCH_LIMIT)
        self.last_reading_position = self.store.load_last_reading_progress()
        if not self.corpus.available:
            logger.warning(f"Bible text unavailable at {self.config.KJV_JSON_PATH}; chapters will be empty")

    def open_session(self):
        return ReadingSession(self)

    def close(self):
        """Stop the background search worker."""
        self.search_engine.shutdown()

    # --- Books and text ---

    def find_book(self, book_id):
        return find_book(book_id)

    def load_chapter(self, book_id, chapter):
        return self.corpus.load_chapter(book_id, chapter)

    def _remember_search(self, query):
        if not query or not query.strip():
            return
        try:
            self.preferences.add_recent_search(query)
        except StorageError as e:
            logger.warning(f"Could not record recent search '{query}': {str(e)}")

    def search(self, query):
        """Search the text and remember the query in recent searches."""
        self._remember_search(query)
        return self.search_engine.search(query)

    def search_in_background(self, query):
        self._remember_search(query)
        return self.search_engine.submit(query)

    def deliver_search(self, outcome):
        return self.search_engine.deliver(outcome)

    # --- Reading progress ---

    def save_reading_position(self, book_id, chapter, verse=1):
        progress = self.store.save_reading_progress(book_id, chapter, verse)
        # Only replaced once the write has committed
        self.last_reading_position = progress
        return progress

    def load_last_reading_position(self):
        self.last_reading_position = self.store.load_last_reading_progress()
        return self.last_reading_position

    # --- Bookmarks ---

    def add_bookmark(self, book_id, chapter, verse=None, title=None):
        return self.store.add_bookmark(book_id, chapter, verse, title)

    def delete_bookmark(self, bookmark_id):
        return self.store.delete_bookmark(bookmark_id)

    def fetch_bookmarks(self):
        return self.store.list_bookmarks()

    def fetch_bookmarks_by_book(self):
        return self.store.list_bookmarks_by_book()

    # --- Highlights ---

    def add_highlight(self, book_id, chapter, verse, color_tag):
        return self.store.set_highlight(book_id, chapter, verse, color_tag)

    def remove_highlight(self, book_id, chapter, verse):
        return self.store.clear_highlight(book_id, chapter, verse)

    def fetch_highlights(self, book_id, chapter):
        return self.store.list_highlights(book_id, chapter)

    # --- Notes ---

    def add_note(self, book_id=None, chapter=None, verse=None, title='', content='',
                 tags=(), images=(), is_freeform=False):
        return self.store.add_note(book_id, chapter, verse, title, content, tags, images, is_freeform)

    def update_note(self, note_id, title, content, tags, images=None):
        return self.store.update_note(note_id, title, content, tags, images)

    def delete_note(self, note_id):
        return self.store.delete_note(note_id)

    def get_note(self, note_id):
        return self.store.get_note(note_id)

    def fetch_notes(self, book_id=None, chapter=None, verse=None):
        return self.store.list_notes(book_id, chapter, verse)

    def search_notes(self, query):
        return self.store.search_notes(query)

    def filter_notes(self, kind='all', query=None):
        return self.store.filter_notes(kind, query)


class ReadingSession:
    """Navigation and selection state for one reader.

    Holds the current book and chapter, the selected verses and the
    highlight/note overlays for the open chapter. Persistent changes go
    through the owning BibleApp.
    """

    def __init__(self, app):
        self.app = app
        self.book_id = FIRST_BOOK_ID
        self.chapter_number = 1
        self.chapter = None
        self.selected_verses = set()
        self.highlights = {}
        self.noted_verses = set()

    @property
    def book(self):
        return find_book(self.book_id)

    def open_chapter(self, book_id, chapter):
        """Show a chapter and record it as the reading position.

        Returns the Chapter, or None when it does not exist (the session
        still moves there so the reader can show an empty state).
        A failed progress save is logged; the chapter is still returned and
        the app keeps its previous reading position.
        """
        self.clear_selection()
        self.highlights = {}
        self.noted_verses = set()
        self.book_id = book_id
        self.chapter_number = chapter
        self.chapter = self.app.load_chapter(book_id, chapter)
        if self.chapter is None:
            logger.info(f"No text for book {book_id} chapter {chapter}")
            return None

        self.refresh_overlays()
        try:
            self.app.save_reading_position(book_id, chapter)
        except StorageError as e:
            logger.error(f"Could not save reading position {book_id} {chapter}: {str(e)}")
        return self.chapter

    def refresh_overlays(self):
        self.highlights = self.app.fetch_highlights(self.book_id, self.chapter_number)
        self.noted_verses = self.app.store.noted_verses(self.book_id, self.chapter_number)

    def resume(self):
        progress = self.app.last_reading_position
        if progress is None:
            return self.open_chapter(FIRST_BOOK_ID, 1)
        return self.open_chapter(progress.book_id, progress.chapter)

    def next_chapter(self):
        book = self.book
        if book and self.chapter_number < book.chapter_count:
            return self.open_chapter(self.book_id, self.chapter_number + 1)
        if self.book_id < LAST_BOOK_ID:
            return self.open_chapter(self.book_id + 1, 1)
        return self.chapter

    def previous_chapter(self):
        if self.chapter_number > 1:
            return self.open_chapter(self.book_id, self.chapter_number - 1)
        if self.book_id > FIRST_BOOK_ID:
            previous = find_book(self.book_id - 1)
            return self.open_chapter(previous.id, previous.chapter_count)
        return self.chapter

    # --- Selection ---

    def toggle_verse(self, verse):
        if verse in self.selected_verses:
            self.selected_verses.discard(verse)
        else:
            self.selected_verses.add(verse)

    def select_verse(self, verse):
        self.selected_verses.add(verse)

    def clear_selection(self):
        self.selected_verses = set()

    def apply_highlight(self, color_tag):
        for verse in sorted(self.selected_verses):
            self.app.add_highlight(self.book_id, self.chapter_number, verse, color_tag)
            self.highlights[verse] = color_tag
        self.clear_selection()

    def remove_highlights(self):
        for verse in sorted(self.selected_verses):
            self.app.remove_highlight(self.book_id, self.chapter_number, verse)
            self.highlights.pop(verse, None)
        self.clear_selection()

    def bookmark_selection(self):
        if not self.selected_verses:
            return None
        first = min(self.selected_verses)
        bookmark = self.app.add_bookmark(
            self.book_id,
            self.chapter_number,
            first,
            bookmark_title(self.book_id, self.chapter_number, first),
        )
        self.clear_selection()
        return bookmark

    def copy_selection(self):
        if self.chapter is None or not self.selected_verses:
            return None
        text = format_copy_text(self.chapter, self.selected_verses)
        self.clear_selection()
        return text

    def note_for_selection(self):
        """The first selected verse, as the anchor for a new note."""
        if self.chapter is None or not self.selected_verses:
            return None
        return self.chapter.get_verse(min(self.selected_verses))

    def add_note_for_selection(self, content, tags=(), title=None):
        verse = self.note_for_selection()
        if verse is None:
            return None
        note = self.app.add_note(
            verse.book_id,
            verse.chapter,
            verse.verse,
            title or bookmark_title(verse.book_id, verse.chapter, verse.verse),
            content,
            tags,
        )
        self.noted_verses.add(verse.verse)
        return note


def create_app(config=None):
    config = config or Config()
    configure_logging(config.LOG_LEVEL)
    logger.info("Starting Bible reader core")
    return BibleApp(config)
