import os

# Keep the module-level engine in app.core.dependencies off the filesystem.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import create_api_key
from app.core.config import get_settings
from app.models.post import Base, Post, User

WRITER_PERMISSIONS = ["CREATE_POST", "UPDATE_POST", "DELETE_POST", "ANALYZE_POST"]


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    # Tests patch env vars; never leak a cached Settings instance across tests.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _fk_on(dbapi_connection, _record):  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def api_keys(session_factory) -> dict:
    """Raw keys by role: writer, reader (ANALYZE_POST only), admin (ALL), inactive."""
    session = session_factory()
    try:
        _, writer = create_api_key(session, name="writer", permissions=WRITER_PERMISSIONS)
        _, reader = create_api_key(session, name="reader", permissions=["ANALYZE_POST"])
        _, admin = create_api_key(session, name="admin", permissions=["ALL"])
        inactive_row, inactive = create_api_key(session, name="inactive", permissions=["ALL"])
        inactive_row.is_active = False
        session.commit()
    finally:
        session.close()
    return {"writer": writer, "reader": reader, "admin": admin, "inactive": inactive}


def make_post(session, *, title="Seed post", body="Some body text", is_local=False, user_id=1) -> Post:
    if session.get(User, user_id) is None:
        session.add(
            User(id=user_id, name=f"Seed {user_id}", username=f"seed{user_id}", email=f"seed{user_id}@example.com")
        )
        session.flush()
    post = Post(title=title, body=body, user_id=user_id, is_local=is_local)
    session.add(post)
    session.flush()
    return post


@pytest_asyncio.fixture
async def client(session_factory):
    """In-process ASGI client bound to the per-test SQLite engine."""
    from app.core.dependencies import get_db
    from app.main import app

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_db, None)
