"""Shared fixtures: every test gets its own database, corpus cache and preferences file."""

import json
import os
import tempfile

import pytest

from app import BibleApp
from config import BASE_DIR, Config
from database import init_db
from store import AnnotationStore
from utils import corpus as corpus_module

BUNDLED_CORPUS = os.path.join(BASE_DIR, 'data', 'kjv.json')


@pytest.fixture(autouse=True)
def clear_corpus_cache():
    corpus_module.clear_cache()
    yield
    corpus_module.clear_cache()


@pytest.fixture
def temp_data_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def write_corpus(temp_data_dir):
    """Write a corpus dict to a JSON file and return its path."""
    def _write(data, name='kjv.json'):
        path = os.path.join(temp_data_dir, name)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f)
        return path
    return _write


@pytest.fixture
def config(temp_data_dir):
    return Config(
        DATABASE_URL=f"sqlite:///{os.path.join(temp_data_dir, 'bible.db')}",
        KJV_JSON_PATH=BUNDLED_CORPUS,
        PREFERENCES_PATH=os.path.join(temp_data_dir, 'preferences.json'),
    )


@pytest.fixture
def store():
    return AnnotationStore(init_db('sqlite://'))


@pytest.fixture
def app(config):
    bible_app = BibleApp(config)
    yield bible_app
    bible_app.close()
