"""SQLAlchemy engine, session factory and declarative base."""
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from campus_events.config import settings
from campus_events.errors import Conflict, StorageUnavailable

logger = logging.getLogger(__name__)


def build_engine(url: str):
    """Create an engine; SQLite gets a busy timeout and enforced foreign keys."""
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    engine = create_engine(
        url,
        connect_args={
            "check_same_thread": False,
            "timeout": settings.SQLITE_BUSY_TIMEOUT_SECONDS,
        },
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """FastAPI dependency yielding a request-scoped session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db) -> None:
    """Commit, translating storage failures into domain errors after rolling back."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Commit rejected by a constraint: %s", exc.orig)
        raise Conflict() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Commit failed: %s", exc)
        raise StorageUnavailable() from exc
