import sqlite3
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()

# SQLSTATE / driver codes reported for a unique constraint violation
_PG_UNIQUE_VIOLATION = "23505"
_MYSQL_DUP_ENTRY = 1062


class UniqueViolationError(Exception):
    """A write was rejected by a unique constraint."""

    def __init__(self, original: IntegrityError):
        super().__init__(str(original.orig))
        self.original = original


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell a unique constraint violation apart from other integrity errors."""
    orig = error.orig
    if getattr(orig, "pgcode", None) == _PG_UNIQUE_VIOLATION:
        return True
    if getattr(orig, "sqlstate", None) == _PG_UNIQUE_VIOLATION:
        return True
    args = getattr(orig, "args", ())
    if args and args[0] == _MYSQL_DUP_ENTRY:
        return True
    if isinstance(orig, sqlite3.IntegrityError):
        if getattr(orig, "sqlite_errorname", None) in (
            "SQLITE_CONSTRAINT_UNIQUE",
            "SQLITE_CONSTRAINT_PRIMARYKEY",
        ):
            return True
        return str(orig).startswith("UNIQUE constraint failed")
    return False


def commit(db: Session):
    """Commit the session, raising UniqueViolationError for unique conflicts."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            raise UniqueViolationError(exc) from exc
        raise


class Database:
    """Owns the engine and session factory for one application."""

    def __init__(self, database_url: str):
        engine_kwargs = {}
        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if database_url in ("sqlite://", "sqlite:///:memory:"):
                # Share the single in-memory database across threads
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.engine = create_engine(database_url, **engine_kwargs)
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def create_tables(self):
        """Create all database tables."""
        from . import models  # noqa: F401  registers the mappers

        Base.metadata.create_all(bind=self.engine)
        logger.info("database_tables_created", url=self.engine.url.render_as_string())

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session."""
    db = request.app.state.db.session_factory()
    try:
        yield db
    finally:
        db.close()
