# utils/books.py
from models.bible import Book, Testament

# (name, abbreviation, chapters) in canonical order; ids are the 1-based position
_OLD_TESTAMENT = [
    ('Genesis', 'Gen', 50),
    ('Exodus', 'Exod', 40),
    ('Leviticus', 'Lev', 27),
    ('Numbers', 'Num', 36),
    ('Deuteronomy', 'Deut', 34),
    ('Joshua', 'Josh', 24),
    ('Judges', 'Judg', 21),
    ('Ruth', 'Ruth', 4),
    ('1 Samuel', '1Sam', 31),
    ('2 Samuel', '2Sam', 24),
    ('1 Kings', '1Kgs', 22),
    ('2 Kings', '2Kgs', 25),
    ('1 Chronicles', '1Chr', 29),
    ('2 Chronicles', '2Chr', 36),
    ('Ezra', 'Ezra', 10),
    ('Nehemiah', 'Neh', 13),
    ('Esther', 'Esth', 10),
    ('Job', 'Job', 42),
    ('Psalms', 'Ps', 150),
    ('Proverbs', 'Prov', 31),
    ('Ecclesiastes', 'Eccl', 12),
    ('Song of Solomon', 'Song', 8),
    ('Isaiah', 'Isa', 66),
    ('Jeremiah', 'Jer', 52),
    ('Lamentations', 'Lam', 5),
    ('Ezekiel', 'Ezek', 48),
    ('Daniel', 'Dan', 12),
    ('Hosea', 'Hos', 14),
    ('Joel', 'Joel', 3),
    ('Amos', 'Amos', 9),
    ('Obadiah', 'Obad', 1),
    ('Jonah', 'Jonah', 4),
    ('Micah', 'Mic', 7),
    ('Nahum', 'Nah', 3),
    ('Habakkuk', 'Hab', 3),
    ('Zephaniah', 'Zeph', 3),
    ('Haggai', 'Hag', 2),
    ('Zechariah', 'Zech', 14),
    ('Malachi', 'Mal', 4),
]

_NEW_TESTAMENT = [
    ('Matthew', 'Matt', 28),
    ('Mark', 'Mark', 16),
    ('Luke', 'Luke', 24),
    ('John', 'John', 21),
    ('Acts', 'Acts', 28),
    ('Romans', 'Rom', 16),
    ('1 Corinthians', '1Cor', 16),
    ('2 Corinthians', '2Cor', 13),
    ('Galatians', 'Gal', 6),
    ('Ephesians', 'Eph', 6),
    ('Philippians', 'Phil', 4),
    ('Colossians', 'Col', 4),
    ('1 Thessalonians', '1Thess', 5),
    ('2 Thessalonians', '2Thess', 3),
    ('1 Timothy', '1Tim', 6),
    ('2 Timothy', '2Tim', 4),
    ('Titus', 'Titus', 3),
    ('Philemon', 'Phlm', 1),
    ('Hebrews', 'Heb', 13),
    ('James', 'Jas', 5),
    ('1 Peter', '1Pet', 5),
    ('2 Peter', '2Pet', 3),
    ('1 John', '1John', 5),
    ('2 John', '2John', 1),
    ('3 John', '3John', 1),
    ('Jude', 'Jude', 1),
    ('Revelation', 'Rev', 22),
]


def _build_books():
    books = []
    for testament, entries in ((Testament.OLD, _OLD_TESTAMENT), (Testament.NEW, _NEW_TESTAMENT)):
        for name, abbrev, chapters in entries:
            books.append(Book(
                id=len(books) + 1,
                name=name,
                abbreviation=abbrev,
                chapter_count=chapters,
                testament=testament,
            ))
    return tuple(books)


BOOKS = _build_books()
_BY_ID = {book.id: book for book in BOOKS}
_BY_ABBREV = {book.abbreviation.lower(): book for book in BOOKS}
_BY_NAME = {book.name.lower(): book for book in BOOKS}


def list_books():
    """All 66 books, sorted by id."""
    return list(BOOKS)


def find_book(book_id):
    return _BY_ID.get(book_id)


def find_book_by_abbreviation(abbreviation):
    if not abbreviation:
        return None
    return _BY_ABBREV.get(abbreviation.lower())


def find_book_by_name(name):
    if not name:
        return None
    return _BY_NAME.get(name.strip().lower())


def books_in_testament(testament):
    testament = Testament(testament)
    return [book for book in BOOKS if book.testament == testament]
