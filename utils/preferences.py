# utils/preferences.py
import logging
import os
from typing import List, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from database import StorageError

logger = logging.getLogger(__name__)

THEMES = {
    'roseGold': 'Rose Gold',
    'lavender': 'Lavender',
    'mint': 'Mint',
}
DEFAULT_THEME = 'roseGold'

# (name, hex) pairs offered when highlighting
HIGHLIGHT_COLORS = [
    ('Blush', 'FFCDD2'),
    ('Peach', 'FFE0B2'),
    ('Lemon', 'FFF9C4'),
    ('Mint', 'C8E6C9'),
    ('Sky', 'B3E5FC'),
    ('Lilac', 'E1BEE7'),
]

SUGGESTED_TAGS = [
    'Insight', 'Prayer', 'Application', 'Question',
    'Gratitude', 'Praise', 'Confession', 'Resolution',
]

MAX_RECENT_SEARCHES = 10


class Preferences(BaseModel):
    theme: Literal['roseGold', 'lavender', 'mint'] = DEFAULT_THEME
    font_size: float = Field(18, ge=14, le=26)
    line_spacing: float = Field(8, ge=4, le=16)
    reminder_enabled: bool = False
    reminder_hour: int = Field(8, ge=0, le=23)
    reminder_minute: int = Field(0, ge=0, le=59)
    recent_searches: List[str] = Field(default_factory=list)

    @field_validator('recent_searches')
    @classmethod
    def cap_recent_searches(cls, searches):
        return searches[:MAX_RECENT_SEARCHES]

    def add_recent_search(self, query):
        """Put query at the front, dropping any case-insensitive duplicate."""
        if query is None or not query.strip():
            return self.recent_searches
        searches = [s for s in self.recent_searches if s.lower() != query.lower()]
        searches.insert(0, query)
        self.recent_searches = searches[:MAX_RECENT_SEARCHES]
        return self.recent_searches

    def clear_recent_searches(self):
        self.recent_searches = []


class PreferencesStore:
    """Key-value settings kept in a small JSON file beside the database."""

    def __init__(self, path):
        self.path = str(path)
        self._preferences = None

    def load(self):
        if self._preferences is not None:
            return self._preferences

        if not os.path.exists(self.path):
            self._preferences = Preferences()
            return self._preferences

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                self._preferences = Preferences.model_validate_json(f.read())
        except (OSError, ValueError, ValidationError) as e:
            # ValueError covers bytes that are not UTF-8
            logger.warning(f"Preferences at {self.path} unreadable, using defaults: {str(e)}")
            self._preferences = Preferences()
        return self._preferences

    def _write(self, preferences):
        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(preferences.model_dump_json(indent=2))
        except OSError as e:
            logger.error(f"Error saving preferences to {self.path}: {str(e)}", exc_info=True)
            raise StorageError(f"Cannot save preferences: {str(e)}") from e
        # Only a successful write replaces the in-memory copy
        self._preferences = preferences
        return preferences

    def save(self):
        return self._write(self.load())

    def update(self, **changes):
        """Validate and persist a set of changes.

        Raises pydantic.ValidationError for out-of-range values; nothing is
        changed in that case.
        """
        current = self.load()
        updated = Preferences.model_validate({**current.model_dump(), **changes})
        return self._write(updated)

    def add_recent_search(self, query):
        updated = self.load().model_copy(deep=True)
        updated.add_recent_search(query)
        return list(self._write(updated).recent_searches)

    def clear_recent_searches(self):
        updated = self.load().model_copy(deep=True)
        updated.clear_recent_searches()
        self._write(updated)
