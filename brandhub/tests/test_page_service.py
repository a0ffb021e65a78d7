from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from brandhub.app.errors import StoreError
from brandhub.app.schemas.page import ContentKind
from brandhub.app.services.page_service import PageService


def test_lookup_returns_published_page(db_session, make_page):
    make_page("about-us", title="About")
    page = PageService(db_session).get_page_by_slug("about-us")
    assert page is not None
    assert page.title == "About"
    assert page.content.kind == ContentKind.HTML


def test_lookup_hides_unpublished(db_session, make_page):
    make_page("draft-page", status="draft")
    make_page("old-page", status="archived")
    service = PageService(db_session)
    assert service.get_page_by_slug("draft-page") is None
    assert service.get_page_by_slug("old-page") is None
    assert service.get_page_by_slug("missing") is None


def test_lookup_empty_slug_skips_store():
    db = MagicMock()
    assert PageService(db).get_page_by_slug("") is None
    db.execute.assert_not_called()


def test_lookup_prefers_exact_locale(db_session, make_page):
    make_page("pricing", lang=None, title="Neutral")
    make_page("pricing", lang="pl", title="Cennik")
    service = PageService(db_session)
    assert service.get_page_by_slug("pricing", "pl").title == "Cennik"
    assert service.get_page_by_slug("pricing", "ua").title == "Neutral"


def test_lookup_ignores_other_locales(db_session, make_page):
    make_page("pricing", lang="pl", title="Cennik")
    assert PageService(db_session).get_page_by_slug("pricing", "en") is None


def test_lookup_is_idempotent(db_session, make_page):
    make_page("about-us")
    service = PageService(db_session)
    assert service.get_page_by_slug("about-us", "en") == service.get_page_by_slug("about-us", "en")


def test_store_failure_is_not_a_miss():
    db = MagicMock()
    db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
    with pytest.raises(StoreError) as excinfo:
        PageService(db).get_page_by_slug("privacy-policy")
    assert excinfo.value.operation == "get_page_by_slug"


def test_lookup_populates_and_reads_cache(db_session, make_page, page_cache, fake_redis):
    make_page("about-us", title="Cached")
    service = PageService(db_session, cache=page_cache)
    first = service.get_page_by_slug("about-us", "en")
    assert "page:en:about-us" in fake_redis.store

    # a cached record is served without touching the store
    broken = MagicMock()
    broken.execute.side_effect = AssertionError("store should not be queried")
    second = PageService(broken, cache=page_cache).get_page_by_slug("about-us", "en")
    assert second == first


def test_misses_are_not_cached(db_session, page_cache, fake_redis):
    assert PageService(db_session, cache=page_cache).get_page_by_slug("nope") is None
    assert fake_redis.store == {}


def test_slug_listings(db_session, make_page):
    make_page("about-us")
    make_page("about-us", lang="pl")
    make_page("privacy-policy")
    make_page("secret", status="draft")
    service = PageService(db_session)
    assert service.get_all_published_slugs() == ["about-us", "privacy-policy"]
    assert service.get_dynamic_page_slugs() == ["about-us"]


def test_get_all_pages_filters_status(db_session, make_page):
    make_page("a")
    make_page("b", status="draft")
    service = PageService(db_session)
    assert {p.slug for p in service.get_all_pages()} == {"a", "b"}
    assert [p.slug for p in service.get_all_pages("draft")] == ["b"]


def test_get_page_by_id_any_status(db_session, make_page):
    row = make_page("b", status="draft")
    service = PageService(db_session)
    assert service.get_page_by_id(row.id).slug == "b"
    assert service.get_page_by_id(9999) is None


def test_store_rejects_unknown_status(db_session, make_page):
    with pytest.raises(IntegrityError):
        make_page("odd", status="hidden")
    db_session.rollback()


def test_media_columns_reach_the_record(db_session, make_page):
    make_page(
        "gallery",
        images=[{"url": "/a.png", "alt": "A"}, {"alt": "no url"}],
        videos="not a list",
    )
    page = PageService(db_session).get_page_by_slug("gallery")
    assert page.images == [{"url": "/a.png", "alt": "A"}]
    assert page.videos == []
