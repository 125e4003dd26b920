from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .schema import Base


def get_engine(sqlite_path: str) -> Engine:
    engine = create_engine(f"sqlite:///{sqlite_path}", future=True)
    Base.metadata.create_all(engine)
    return engine


def get_session(engine: Engine) -> Session:
    """Get a SQLAlchemy session (caller must close it)."""
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)()


@contextmanager
def session_context(engine: Engine) -> Generator[Session, None, None]:
    """
    Context manager for SQLAlchemy sessions.

    Commits on a clean exit, rolls back on error, always closes.

    Usage:
        with session_context(engine) as session:
            session.add(row)
    """
    session = get_session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
