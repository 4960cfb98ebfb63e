# utils/corpus.py
import json
import logging
import threading
from typing import Dict, List

from pydantic import TypeAdapter, ValidationError

from models.bible import Chapter, Verse
from utils.books import find_book
from utils.search import search_verses

logger = logging.getLogger(__name__)

# abbreviation -> chapters -> verse texts; a verse's number is its 1-based position
CorpusData = Dict[str, List[List[str]]]
_corpus_adapter = TypeAdapter(CorpusData)

# Process-wide, keyed by file path. Only successful loads are cached.
_cache = {}
_cache_lock = threading.Lock()


def load_corpus(path):
    """Load and cache the bundled corpus file.

    Returns None when the file is missing or malformed. A failed load is
    not remembered, so the next call tries the file again.
    """
    path = str(path)
    with _cache_lock:
        cached = _cache.get(path)
        if cached is not None:
            return cached

        try:
            with open(path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            data = _corpus_adapter.validate_python(raw)
        except FileNotFoundError:
            logger.warning(f"Corpus file not found: {path}")
            return None
        except (OSError, ValueError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning(f"Corpus file {path} could not be loaded: {str(e)}")
            return None

        _cache[path] = data
        logger.info(f"Loaded corpus from {path} ({len(data)} books)")
        return data


def clear_cache():
    with _cache_lock:
        _cache.clear()


class BibleCorpus:
    """Chapter lookup and verse search over the bundled KJV text."""

    def __init__(self, path):
        self.path = path

    @property
    def data(self):
        return load_corpus(self.path)

    @property
    def available(self):
        return self.data is not None

    def _chapter_texts(self, book_id, chapter):
        book = find_book(book_id)
        if book is None or not 1 <= chapter <= book.chapter_count:
            return None
        data = self.data
        if data is None:
            return None
        book_data = data.get(book.abbreviation)
        if book_data is None or chapter > len(book_data):
            return None
        return book_data[chapter - 1]

    def load_chapter(self, book_id, chapter):
        texts = self._chapter_texts(book_id, chapter)
        if texts is None:
            return None
        verses = [
            Verse(book_id=book_id, chapter=chapter, verse=index + 1, text=text)
            for index, text in enumerate(texts)
        ]
        return Chapter(book_id=book_id, chapter=chapter, verses=verses)

    def verse_count(self, book_id, chapter):
        texts = self._chapter_texts(book_id, chapter)
        return len(texts) if texts is not None else 0

    def get_verse(self, book_id, chapter, verse):
        texts = self._chapter_texts(book_id, chapter)
        if texts is None or not 1 <= verse <= len(texts):
            return None
        return Verse(book_id=book_id, chapter=chapter, verse=verse, text=texts[verse - 1])

    def search(self, query, limit=100):
        data = self.data
        if data is None:
            return []
        return search_verses(data, query, limit=limit)
