# database.py
import logging
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

Base = declarative_base()


class StorageError(Exception):
    """A read or write against the annotation database failed."""


class InitializationError(Exception):
    """The annotation database could not be opened or created."""


def create_db_engine(database_url):
    """Build an engine for the on-device store.

    SQLite connections are shared with the background search worker's
    thread pool, so same-thread checking is disabled. In-memory databases
    use a single static connection; otherwise every session would see a
    fresh empty database.
    """
    kwargs = {}
    if database_url.startswith('sqlite'):
        kwargs['connect_args'] = {'check_same_thread': False}
        if database_url in ('sqlite://', 'sqlite:///:memory:'):
            kwargs['poolclass'] = StaticPool
    return create_engine(database_url, **kwargs)


def init_db(database_url):
    """Open the store and create any missing tables.

    Returns a session factory bound to the new engine. Raises
    InitializationError if the database cannot be opened at all.
    """
    # Register every table with Base.metadata before create_all
    import models  # noqa: F401

    try:
        engine = create_db_engine(database_url)
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"Failed to open annotation store at {database_url}: {str(e)}", exc_info=True)
        raise InitializationError(f"Cannot open annotation store: {str(e)}") from e

    logger.info(f"Annotation store ready at {database_url}")
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@contextmanager
def get_db_session(session_factory):
    """Provide a transactional scope around a series of SQLAlchemy operations."""
    db = session_factory()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"SQLAlchemy Session Error: {e}")
        raise StorageError(str(e)) from e
    except Exception as e:
        db.rollback()
        logger.error(f"General Session Error: {e}")
        raise
    finally:
        db.close()
