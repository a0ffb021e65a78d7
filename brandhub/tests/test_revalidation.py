import pytest

from brandhub.app.errors import InvalidRevalidationRequest
from brandhub.app.services.page_service import PageService
from brandhub.app.services.revalidation import RevalidationService


@pytest.fixture
def service(db_session, page_cache):
    return RevalidationService(PageService(db_session, cache=page_cache), page_cache)


def test_single_drops_cached_slug(service, page_cache, fake_redis):
    page_cache.set("about-us", "en", {})
    page_cache.set("pricing", "en", {})
    result = service.revalidate("single", slug="about-us")
    assert result.paths == ["/about-us"]
    assert list(fake_redis.store) == ["page:en:pricing"]
    assert result.message == "Revalidated 1 items"


def test_single_with_path(service):
    result = service.revalidate("single", slug="about-us", path="/pl/about-us")
    assert result.paths == ["/about-us", "/pl/about-us"]


def test_single_without_slug_is_invalid(service):
    with pytest.raises(InvalidRevalidationRequest):
        service.revalidate("single")


def test_legal(service, page_cache, fake_redis):
    page_cache.set("cookie-policy", "en", {})
    result = service.revalidate("legal")
    assert result.paths == ["/privacy-policy", "/terms-of-service", "/cookie-policy", "tag:legal-pages"]
    assert fake_redis.store == {}


def test_all_lists_published_and_legal_paths(service, make_page, page_cache, fake_redis):
    make_page("about-us")
    make_page("privacy-policy")
    make_page("draft", status="draft")
    page_cache.set("about-us", "en", {})
    result = service.revalidate("all")
    assert result.paths == ["/about-us", "/privacy-policy", "/terms-of-service", "/cookie-policy"]
    assert fake_redis.store == {}


def test_dynamic_excludes_legal(service, make_page):
    make_page("about-us")
    make_page("privacy-policy")
    assert service.revalidate("dynamic").paths == ["/about-us", "tag:dynamic-pages"]


@pytest.mark.parametrize("kind", [None, "", "everything"])
def test_unknown_type_is_invalid(service, kind):
    with pytest.raises(InvalidRevalidationRequest):
        service.revalidate(kind)
