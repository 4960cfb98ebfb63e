"""Tests for the BibleApp facade and ReadingSession navigation."""

import os

import pytest

from app import BibleApp, create_app
from config import Config
from database import InitializationError, StorageError


class TestBibleApp:

    def test_startup_state(self, app):
        assert len(app.books) == 66
        assert app.last_reading_position is None
        assert app.corpus.available
        assert app.find_book(66).name == "Revelation"

    def test_unopenable_store_is_fatal(self, temp_data_dir):
        config = Config(DATABASE_URL=f"sqlite:///{temp_data_dir}/missing/dir/bible.db")
        with pytest.raises(InitializationError):
            BibleApp(config)

    def test_create_app(self, config):
        bible_app = create_app(config)
        try:
            assert bible_app.load_chapter(1, 1) is not None
        finally:
            bible_app.close()

    def test_reading_position_survives_restart(self, config):
        first = BibleApp(config)
        first.save_reading_position(65, 1, 21)
        first.close()

        second = BibleApp(config)
        try:
            position = second.last_reading_position
            assert (position.book_id, position.chapter, position.verse) == (65, 1, 21)
            assert second.load_last_reading_position() == position
        finally:
            second.close()

    def test_failed_save_keeps_last_known_position(self, app, monkeypatch):
        app.save_reading_position(1, 1)

        def fail(*args, **kwargs):
            raise StorageError("disk full")

        monkeypatch.setattr(app.store, "save_reading_progress", fail)
        with pytest.raises(StorageError):
            app.save_reading_position(19, 1)
        assert app.last_reading_position.book_id == 1

    def test_close_stops_background_search(self, config):
        bible_app = BibleApp(config)
        bible_app.close()
        with pytest.raises(RuntimeError):
            bible_app.search_in_background("light")

    def test_search_works_when_recent_searches_cannot_be_saved(self, config, temp_data_dir):
        # A directory where the preferences file should be makes every write fail
        prefs_dir = os.path.join(temp_data_dir, "prefs")
        os.makedirs(prefs_dir)
        bible_app = BibleApp(Config(
            DATABASE_URL=config.DATABASE_URL,
            KJV_JSON_PATH=config.KJV_JSON_PATH,
            PREFERENCES_PATH=prefs_dir,
        ))
        try:
            results = bible_app.search("God")
            assert results and all("god" in v.text.lower() for v in results)
            verses = bible_app.deliver_search(bible_app.search_in_background("light").result(timeout=5))
            assert verses
            assert bible_app.preferences.load().recent_searches == []
        finally:
            bible_app.close()

    def test_search_records_recent_searches(self, app):
        results = app.search("light")
        assert results
        app.search("   ")
        app.search("LIGHT")
        assert app.preferences.load().recent_searches == ["LIGHT"]

    def test_background_search(self, app):
        first = app.search_in_background("light")
        second = app.search_in_background("waters")
        assert app.deliver_search(first.result(timeout=5)) is None
        verses = app.deliver_search(second.result(timeout=5))
        assert verses and all("waters" in v.text.lower() for v in verses)
        assert app.preferences.load().recent_searches == ["waters", "light"]

    def test_pass_through_annotations(self, app):
        app.add_highlight(1, 1, 3, "FFF9C4")
        assert app.fetch_highlights(1, 1) == {3: "FFF9C4"}
        assert app.remove_highlight(1, 1, 3) is True

        bookmark = app.add_bookmark(1, 1, 1, "Genesis 1:1")
        assert app.fetch_bookmarks()[0].id == bookmark.id
        assert list(app.fetch_bookmarks_by_book()) == [1]
        assert app.delete_bookmark(bookmark.id) is True

        note = app.add_note(1, 1, 1, "t", "c", ["Praise"])
        assert app.get_note(note.id).tags == ["Praise"]
        assert app.update_note(note.id, "t2", "c2", []).title == "t2"
        assert [n.id for n in app.fetch_notes(1, 1, 1)] == [note.id]
        assert [n.id for n in app.search_notes("C2")] == [note.id]
        assert [n.id for n in app.filter_notes("verse")] == [note.id]
        assert app.delete_note(note.id) is True


class TestReadingSession:

    def test_resume_defaults_to_genesis(self, app):
        session = app.open_session()
        chapter = session.resume()
        assert (chapter.book_id, chapter.chapter) == (1, 1)
        assert app.last_reading_position.book_id == 1

    def test_resume_last_position(self, app):
        app.save_reading_position(19, 1)
        session = app.open_session()
        chapter = session.resume()
        assert (chapter.book_id, chapter.chapter) == (19, 1)

    def test_open_chapter_loads_overlays(self, app):
        app.add_highlight(65, 1, 2, "FFCDD2")
        app.add_note(65, 1, 21, "love of God", "")
        session = app.open_session()
        session.open_chapter(65, 1)
        assert session.highlights == {2: "FFCDD2"}
        assert session.noted_verses == {21}

    def test_open_missing_chapter(self, config, write_corpus):
        # Exodus is absent from this corpus
        config.KJV_JSON_PATH = write_corpus({"Gen": [["In the beginning."]]})
        bible_app = BibleApp(config)
        try:
            session = bible_app.open_session()
            assert session.open_chapter(2, 1) is None
            assert session.chapter is None
            assert (session.book_id, session.chapter_number) == (2, 1)
            assert bible_app.last_reading_position is None
        finally:
            bible_app.close()

    def test_failed_progress_save_still_opens_chapter(self, app, monkeypatch):
        app.add_highlight(1, 1, 3, "FFF9C4")
        app.add_note(1, 1, 5, "Day and Night", "")
        app.save_reading_position(19, 1)

        def fail(*args, **kwargs):
            raise StorageError("no such table: reading_progress")

        monkeypatch.setattr(app.store, "save_reading_progress", fail)
        session = app.open_session()
        chapter = session.open_chapter(1, 1)
        assert chapter is not None
        assert (chapter.book_id, chapter.chapter) == (1, 1)
        assert session.highlights == {3: "FFF9C4"}
        assert session.noted_verses == {5}
        position = app.last_reading_position
        assert (position.book_id, position.chapter) == (19, 1)

    def test_next_chapter_crosses_books(self, app):
        session = app.open_session()
        session.open_chapter(19, 150)
        session.next_chapter()
        assert (session.book_id, session.chapter_number) == (20, 1)

    def test_previous_chapter_crosses_books(self, app):
        session = app.open_session()
        session.open_chapter(2, 1)
        session.previous_chapter()
        assert (session.book_id, session.chapter_number) == (1, 50)

    def test_navigation_stops_at_the_ends(self, app):
        session = app.open_session()
        session.open_chapter(1, 1)
        session.previous_chapter()
        assert (session.book_id, session.chapter_number) == (1, 1)

        session.open_chapter(66, 22)
        session.next_chapter()
        assert (session.book_id, session.chapter_number) == (66, 22)

    def test_selection_toggle(self, app):
        session = app.open_session()
        session.open_chapter(1, 1)
        session.toggle_verse(3)
        session.toggle_verse(5)
        session.toggle_verse(3)
        assert session.selected_verses == {5}
        session.select_verse(5)
        assert session.selected_verses == {5}

    def test_apply_and_remove_highlights(self, app):
        session = app.open_session()
        session.open_chapter(1, 1)
        session.select_verse(1)
        session.select_verse(2)
        session.apply_highlight("C8E6C9")
        assert session.highlights == {1: "C8E6C9", 2: "C8E6C9"}
        assert session.selected_verses == set()
        assert app.fetch_highlights(1, 1) == {1: "C8E6C9", 2: "C8E6C9"}

        session.select_verse(2)
        session.apply_highlight("B3E5FC")
        assert app.fetch_highlights(1, 1)[2] == "B3E5FC"

        session.select_verse(1)
        session.remove_highlights()
        assert session.highlights == {2: "B3E5FC"}
        assert app.fetch_highlights(1, 1) == {2: "B3E5FC"}

    def test_bookmark_selection_uses_first_verse(self, app):
        session = app.open_session()
        session.open_chapter(1, 1)
        assert session.bookmark_selection() is None
        session.select_verse(5)
        session.select_verse(3)
        bookmark = session.bookmark_selection()
        assert bookmark.verse == 3
        assert bookmark.title == "Genesis 1:3"
        assert session.selected_verses == set()

    def test_copy_selection(self, app):
        session = app.open_session()
        session.open_chapter(1, 1)
        session.select_verse(3)
        session.select_verse(1)
        text = session.copy_selection()
        assert text == (
            "1 In the beginning God created the heaven and the earth.\n"
            "3 And God said, Let there be light: and there was light.\n"
            "— Genesis 1:1,3 (KJV)"
        )
        assert session.selected_verses == set()

    def test_note_for_selection(self, app):
        session = app.open_session()
        session.open_chapter(65, 1)
        assert session.note_for_selection() is None
        session.select_verse(21)
        verse = session.note_for_selection()
        assert verse.text.startswith("Keep yourselves in the love of God")

        note = session.add_note_for_selection("Abide", ["Application"])
        assert note.title == "Jude 1:21"
        assert session.noted_verses == {21}
        assert [n.id for n in app.fetch_notes(65, 1, 21)] == [note.id]
