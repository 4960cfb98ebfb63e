# utils/references.py
from utils.books import find_book

TRANSLATION = 'KJV'


def book_name(book_id):
    book = find_book(book_id)
    return book.name if book else ''


def format_reference(book_id, chapter, verses=None):
    """'John 3', 'John 3:16' or 'John 3:16,17' for a list of verses."""
    reference = f"{book_name(book_id)} {chapter}"
    if verses is None:
        return reference
    if isinstance(verses, int):
        verses = [verses]
    verses = sorted(verses)
    if not verses:
        return reference
    return f"{reference}:{','.join(str(v) for v in verses)}"


def bookmark_title(book_id, chapter, verse=None):
    return format_reference(book_id, chapter, verse)


def format_copy_text(chapter, verse_numbers):
    """Text placed on the clipboard for a selection of verses.

    One "N text" line per selected verse in ascending order, followed by
    a reference line such as "— Genesis 1:1,3 (KJV)". Verse numbers not
    present in the chapter are skipped.
    """
    numbers = sorted(set(verse_numbers))
    lines = []
    for number in numbers:
        verse = chapter.get_verse(number)
        if verse is not None:
            lines.append(f"{number} {verse.text}")
    reference = format_reference(chapter.book_id, chapter.chapter, numbers)
    return "\n".join(lines) + f"\n— {reference} ({TRANSLATION})"
