"""SQLAlchemy engine, session factory and request-scoped session dependency."""

from collections.abc import Iterator

import structlog
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from little_learners.config import get_settings

logger = structlog.get_logger()

Base = declarative_base()

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def build_engine(database_url: str) -> Engine:
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args)


def get_engine() -> Engine:
    """Return the process-wide engine, creating it from settings on first use."""
    global _engine, _session_factory
    if _engine is None:
        _engine = build_engine(get_settings().resolved_database_url)
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def get_session_factory() -> sessionmaker:
    get_engine()
    return _session_factory


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding one session per request."""
    db = get_session_factory()()
    try:
        yield db
    except SQLAlchemyError:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(engine: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    # Table classes register themselves on Base.metadata when imported
    from little_learners.storage import tables  # noqa: F401

    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("database_initialized", url=str(engine.url))
