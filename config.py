# config.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent


class Config:
    SQLITE_DB_PATH = os.getenv('BIBLE_DB_PATH', os.path.join(BASE_DIR, 'bible.db'))
    DATABASE_URL = os.getenv('BIBLE_DATABASE_URL', f"sqlite:///{SQLITE_DB_PATH}")
    KJV_JSON_PATH = os.getenv('KJV_JSON_PATH', os.path.join(BASE_DIR, 'data', 'kjv.json'))
    PREFERENCES_PATH = os.getenv('BIBLE_PREFERENCES_PATH', os.path.join(BASE_DIR, 'preferences.json'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    SEARCH_LIMIT = 100

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if not hasattr(Config, key):
                raise AttributeError(f"Unknown config setting: {key}")
            setattr(self, key, value)
