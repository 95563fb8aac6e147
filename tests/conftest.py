"""
tests/conftest.py -- Shared test fixtures for portfolio API integration tests.

This module provides:
  - _make_test_stores(): creates isolated in-memory DBs for auth + content
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_client: TestClient plus an admin JWT for API integration tests
  - user_token: JWT for a non-admin principal in the same stores
  - content_store: bare in-memory ContentStore for unit tests

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs route handlers in a thread pool. Plain :memory: DBs
are per-connection and would present a blank schema to each worker thread.
The named URI format (file:name?mode=memory&cache=shared&uri=true) shares
one in-memory instance across all connections in the same process. Each test
module gets its own name so modules never see each other's rows.

Environment must be set before any auth/core import:
  DEBUG          -- lets get_settings() auto-generate SECRET_KEY
  ALLOWED_HOSTS  -- TestClient sends Host: testserver
  UPLOAD_DIR     -- resume uploads go to a throwaway directory
  SMTP_HOST      -- empty, so nothing ever tries to reach a mail server
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: Set environment before any auth/core import.
os.environ.setdefault("DEBUG", "true")
os.environ["ALLOWED_HOSTS"] = '["testserver", "localhost", "127.0.0.1"]'
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="portfolio-test-uploads-")
os.environ["SMTP_HOST"] = ""

import pytest
from fastapi.testclient import TestClient

from api.limiter import limiter
from api.main import app
from auth.models import Role, User
from auth.store import UserStore
from auth.tokens import create_access_token, hash_password
from content.store import ContentStore

# Rate limits are exercised by slowapi's own tests; here they would only make
# later requests in a module fail with 429.
limiter.enabled = False

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "testpass123"
USER_EMAIL = "author@example.com"


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def _make_test_stores(db_suffix: str) -> tuple[UserStore, ContentStore]:
    """Create isolated named shared-memory SQLite stores for test isolation.

    Args:
        db_suffix: Unique string appended to the DB name so test modules
                   don't share state.
    """
    auth_url = f"sqlite:///file:test_auth_{db_suffix}?mode=memory&cache=shared&uri=true"
    content_url = f"sqlite:///file:test_content_{db_suffix}?mode=memory&cache=shared&uri=true"
    return UserStore(db_url=auth_url), ContentStore(db_url=content_url)


def _patch_lifespan(user_store: UserStore, content_store: ContentStore):
    """Return an async context manager that replaces the real lifespan.

    Wires pre-created test stores into app.state so TestClient routes see
    isolated test DBs rather than the on-disk databases.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.content_store = content_store
        yield

    return test_lifespan


# ---------------------------------------------------------------------------
# Module-scoped fixtures -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_client(request) -> Generator[tuple[TestClient, str, int], None, None]:
    """Yield (client, admin_token, admin_user_id) for API integration tests.

    The TestClient uses the real FastAPI app with a patched lifespan so
    tests hit real route handlers but use isolated in-memory stores.
    The admin user (ADMIN_EMAIL / ADMIN_PASSWORD) is created before the
    client starts.
    """
    suffix = request.module.__name__.rsplit(".", 1)[-1]
    user_store, content_store = _make_test_stores(suffix)

    admin = User(
        email=ADMIN_EMAIL,
        name="Test Admin",
        hashed_password=hash_password(ADMIN_PASSWORD),
        role=Role.admin.value,
    )
    uid = user_store.create_user(admin)
    token = create_access_token(user_id=uid, role=Role.admin.value, expire_seconds=3600)

    app.router.lifespan_context = _patch_lifespan(user_store, content_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, token, uid

    content_store.close()
    user_store.close()


@pytest.fixture(scope="module")
def user_token(api_client) -> str:
    """JWT for a principal with role "user" in the api_client stores."""
    user_store: UserStore = app.state.user_store
    uid = user_store.create_user(
        User(
            email=USER_EMAIL,
            name="Guest Author",
            hashed_password=hash_password("authorpass123"),
            role=Role.user.value,
        )
    )
    return create_access_token(user_id=uid, role=Role.user.value, expire_seconds=3600)


# ---------------------------------------------------------------------------
# Unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def content_store() -> Generator[ContentStore, None, None]:
    """Fresh in-memory ContentStore per test."""
    store = ContentStore("sqlite:///:memory:")
    yield store
    store.close()


@pytest.fixture
def user_store() -> Generator[UserStore, None, None]:
    """Fresh in-memory UserStore per test."""
    store = UserStore("sqlite:///:memory:")
    yield store
    store.close()
