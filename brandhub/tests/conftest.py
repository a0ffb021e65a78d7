import os
import re
from datetime import datetime

import pytest

# must be set before brandhub.app.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.pop("REDIS_URL", None)

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from brandhub.app.db import get_db
from brandhub.app.dependencies import get_cache
from brandhub.app.main import create_app
from brandhub.app.models import Base, Page
from brandhub.app.utils.page_cache import PageCache


def _match_pattern(pattern):
    # redis MATCH: * and ? are wildcards, a backslash escapes the next char
    parts = []
    chars = iter(pattern)
    for ch in chars:
        if ch == "\\":
            parts.append(re.escape(next(chars, "\\")))
        elif ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts) + r"\Z", re.DOTALL)


class FakeRedis:
    """The handful of redis.Redis calls the page cache makes."""

    def __init__(self):
        self.store = {}
        self.ttls = {}

    def ping(self):
        return True

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if key in self.store:
                del self.store[key]
                self.ttls.pop(key, None)
                removed += 1
        return removed

    def scan_iter(self, match="*", count=None):
        regex = _match_pattern(match)
        return [k for k in list(self.store) if regex.match(k)]


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def make_page(db_session):
    def _make(slug="about-us", **overrides):
        values = {
            "slug": slug,
            "lang": None,
            "title": "About us",
            "description": "Who we are",
            "content": {"type": "html", "value": "<p>Hello</p>"},
            "status": "published",
            "updated_at": datetime(2025, 3, 5, 12, 0, 0),
        }
        values.update(overrides)
        page = Page(**values)
        db_session.add(page)
        db_session.commit()
        db_session.refresh(page)
        return page

    return _make


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def page_cache(fake_redis):
    return PageCache(fake_redis, ttl_sec=60)


@pytest.fixture
def client(db_session, page_cache):
    app = create_app()

    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_cache] = lambda: page_cache
    with TestClient(app) as test_client:
        yield test_client
