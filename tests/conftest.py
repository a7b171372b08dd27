"""Shared fixtures: an in-memory database and an API client bound to it."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from little_learners.api import content, dashboard, progress
from little_learners.api.routes import router
from little_learners.db import get_db, init_db
from little_learners.errors import install_error_handlers


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def build_app(session_factory) -> FastAPI:
    app = FastAPI()
    app.include_router(router)
    app.include_router(progress.router)
    app.include_router(content.router)
    app.include_router(dashboard.router)
    install_error_handlers(app)

    def _get_db():
        session = session_factory()
        try:
            yield session
        except SQLAlchemyError:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    return app


@pytest.fixture
def client(session_factory):
    with TestClient(build_app(session_factory)) as c:
        yield c
