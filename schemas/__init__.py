from .annotation_schemas import (
    BookmarkRead,
    HighlightRead,
    NoteCreate,
    NoteRead,
    NoteUpdate,
    ReadingProgressRead,
)

__all__ = [
    'BookmarkRead',
    'HighlightRead',
    'NoteCreate',
    'NoteRead',
    'NoteUpdate',
    'ReadingProgressRead',
]
