# models/bible.py
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Testament(str, Enum):
    OLD = "OT"
    NEW = "NT"


@dataclass(frozen=True)
class Book:
    id: int
    name: str
    abbreviation: str
    chapter_count: int
    testament: Testament


@dataclass(frozen=True)
class Verse:
    book_id: int
    chapter: int
    verse: int
    text: str


@dataclass(frozen=True)
class Chapter:
    book_id: int
    chapter: int
    verses: List[Verse] = field(default_factory=list)

    def get_verse(self, number):
        if 1 <= number <= len(self.verses):
            return self.verses[number - 1]
        return None
