from dotenv import load_dotenv
import logging
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.exc import SQLAlchemyError

from config import Config

logger = logging.getLogger(__name__)

load_dotenv()

# Define Base for SQLAlchemy models before anything imports the models
Base = declarative_base()

engine = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def init_engine(database_url=None):
    """(Re)bind the session factory to a database.

    Called once by the application factory; tests call it with a
    temporary SQLite file.
    """
    global engine
    url = database_url or Config.DATABASE_URL
    connect_args = {}
    if url.startswith('sqlite'):
        # Flask serves requests from worker threads
        connect_args['check_same_thread'] = False

    if engine is not None:
        engine.dispose()
    engine = create_engine(url, connect_args=connect_args)
    SessionLocal.configure(bind=engine)
    logger.info(f"Database engine bound to {engine.url.render_as_string(hide_password=True)}")
    return engine


def init_db():
    """Create any missing tables. Alembic owns the schema in production."""
    import models  # noqa: F401  (registers the models with Base)
    if engine is None:
        init_engine()
    Base.metadata.create_all(bind=engine)


# Context manager for SQLAlchemy sessions (needed for Flask routes)
@contextmanager
def get_db_session():
    """Provide a transactional scope around a series of SQLAlchemy operations."""
    if engine is None:
        init_engine()
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"SQLAlchemy Session Error: {e}")
        raise
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
