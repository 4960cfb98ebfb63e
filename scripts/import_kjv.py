# scripts/import_kjv.py
"""Build the bundled corpus file from a flat KJV JSON dump.

The input maps references to text, e.g. {"Genesis 1:1": "In the beginning..."}.
The output maps book abbreviations to chapters to verse texts, which is the
layout utils/corpus.py reads.
"""
import json
import logging
import sys
from pathlib import Path

# Add the parent directory to the Python path properly
current_dir = Path(__file__).resolve().parent
project_dir = current_dir.parent
sys.path.insert(0, str(project_dir))

from app import configure_logging
from utils.books import find_book_by_name

logger = logging.getLogger(__name__)

# Names used by some KJV dumps that differ from the canonical book names
BOOK_ALIASES = {
    "Solomon's Song": 'Song of Solomon',
    'Song of Songs': 'Song of Solomon',
    'Psalm': 'Psalms',
    'Revelation of John': 'Revelation',
}


def parse_reference(ref):
    """Parse a reference like 'Genesis 1:1' into (book_name, chapter, verse)"""
    book_chapter, verse = ref.rsplit(':', 1)
    book_parts = book_chapter.rsplit(' ', 1)
    chapter = book_parts[-1]
    book_name = ' '.join(book_parts[:-1])
    return book_name, int(chapter), int(verse)


def clean_verse_text(text):
    """Clean verse text by removing any leading '#' and trimming whitespace"""
    return text.lstrip('#').strip()


def build_corpus(verses_data):
    """Group flat reference -> text entries into abbreviation -> chapters -> verses.

    Returns (corpus, skipped_refs). Chapters and verses are ordered by
    number; gaps in verse numbering are closed up, since position is the
    verse number in the output. A book with a missing chapter is left out
    entirely and its references are reported as skipped.
    """
    grouped = {}
    skipped = []

    for ref, text in verses_data.items():
        try:
            book_name, chapter, verse = parse_reference(ref)
        except ValueError:
            logger.warning(f"Unparseable reference '{ref}'")
            skipped.append(ref)
            continue

        book = find_book_by_name(BOOK_ALIASES.get(book_name, book_name))
        if book is None:
            logger.warning(f"Unknown book '{book_name}' in reference '{ref}'")
            skipped.append(ref)
            continue

        grouped.setdefault(book, {}).setdefault(chapter, {})[verse] = (ref, clean_verse_text(text))

    corpus = {}
    for book in sorted(grouped, key=lambda b: b.id):
        chapters = grouped[book]
        missing = sorted(set(range(1, max(chapters) + 1)) - set(chapters))
        if missing:
            logger.warning(f"Skipping {book.name}: chapters {missing} are missing")
            skipped.extend(ref for verses in chapters.values() for ref, _ in verses.values())
            continue
        corpus[book.abbreviation] = [
            [chapters[c][v][1] for v in sorted(chapters[c])]
            for c in sorted(chapters)
        ]
    return corpus, skipped


def import_kjv_data(json_path, output_path):
    logger.info(f"Reading JSON file from: {json_path}")
    with open(json_path, 'r', encoding='utf-8') as f:
        verses_data = json.load(f)

    corpus, skipped = build_corpus(verses_data)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(corpus, f, ensure_ascii=False)

    verse_count = sum(len(ch) for chapters in corpus.values() for ch in chapters)
    logger.info(f"Wrote {verse_count} verses in {len(corpus)} books to {output_path}")
    if skipped:
        logger.warning(f"Skipped {len(skipped)} verses with unknown books or missing chapters")
    if len(corpus) < 66:
        logger.warning(f"Expected 66 books but only found {len(corpus)}")
    return corpus


if __name__ == '__main__':
    if len(sys.argv) != 3:
        print("Usage: python import_kjv.py <path_to_flat_kjv.json> <output_kjv.json>")
        sys.exit(1)

    configure_logging()
    import_kjv_data(sys.argv[1], sys.argv[2])
