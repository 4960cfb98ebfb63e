# models/timestamps.py
from datetime import datetime, timezone


def utcnow():
    # SQLite drops tzinfo on the way back; store naive UTC so values compare cleanly
    return datetime.now(timezone.utc).replace(tzinfo=None)
