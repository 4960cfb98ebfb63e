# This file makes the models directory a Python package 
from .bible import Book, Chapter, Testament, Verse
from .bookmark import Bookmark
from .highlight import Highlight
from .note import Note, NoteImage
from .progress import ReadingProgress

__all__ = [
    'Book',
    'Chapter',
    'Testament',
    'Verse',
    'Bookmark',
    'Highlight',
    'Note',
    'NoteImage',
    'ReadingProgress',
]
