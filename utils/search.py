# utils/search.py
import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List

from models.bible import Verse
from utils.books import BOOKS

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100


def search_verses(data, query, limit=DEFAULT_LIMIT):
    """Case-insensitive substring search over corpus data.

    Books are scanned in canonical order, then chapters, then verses.
    Scanning stops as soon as `limit` matches have been collected. A blank
    query matches nothing.
    """
    if query is None or not query.strip():
        return []

    needle = query.lower()
    results = []
    for book in BOOKS:
        book_data = data.get(book.abbreviation)
        if not book_data:
            continue
        for chapter_index, chapter in enumerate(book_data):
            for verse_index, text in enumerate(chapter):
                if needle in text.lower():
                    results.append(Verse(
                        book_id=book.id,
                        chapter=chapter_index + 1,
                        verse=verse_index + 1,
                        text=text,
                    ))
                    if len(results) >= limit:
                        return results
    return results


@dataclass
class SearchOutcome:
    generation: int
    query: str
    verses: List[Verse] = field(default_factory=list)


class BibleSearchEngine:
    """Runs corpus searches off the caller's thread.

    Every submission gets a generation number. Only the outcome of the
    latest submission is accepted by deliver(); older ones are dropped.
    """

    def __init__(self, corpus, limit=DEFAULT_LIMIT):
        self.corpus = corpus
        self.limit = limit
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='verse-search')
        self._generations = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()
        self.results = []
        self.query = None

    def search(self, query):
        return self.corpus.search(query, limit=self.limit)

    def submit(self, query):
        """Queue a search and return a Future resolving to a SearchOutcome."""
        with self._lock:
            generation = next(self._generations)
            self._latest = generation
        logger.debug(f"Queued search #{generation} for '{query}'")
        return self._executor.submit(self._run, generation, query)

    def _run(self, generation, query):
        return SearchOutcome(generation=generation, query=query, verses=self.search(query))

    def is_current(self, outcome):
        with self._lock:
            return outcome.generation == self._latest

    def deliver(self, outcome):
        """Accept a finished outcome on the consuming side.

        Returns the verses when the outcome belongs to the latest submission,
        None when a newer search has been submitted since.
        """
        if not self.is_current(outcome):
            logger.debug(f"Discarding stale search #{outcome.generation} for '{outcome.query}'")
            return None
        self.results = outcome.verses
        self.query = outcome.query
        return outcome.verses

    def shutdown(self):
        self._executor.shutdown(wait=True)
