import json

import redis

from brandhub.app.utils.page_cache import PageCache, escape_glob


def test_key_uses_default_locale_marker(page_cache):
    assert page_cache.key("about-us") == "page:default:about-us"
    assert page_cache.key("about-us", "pl") == "page:pl:about-us"


def test_set_and_get(page_cache, fake_redis):
    assert page_cache.set("about-us", "en", {"slug": "about-us"}) is True
    assert fake_redis.ttls["page:en:about-us"] == 60
    assert json.loads(fake_redis.store["page:en:about-us"]) == {"slug": "about-us"}
    assert page_cache.get("about-us", "en") == {"slug": "about-us"}
    assert page_cache.get("about-us", "pl") is None


def test_invalidate_slug_across_locales(page_cache, fake_redis):
    page_cache.set("about-us", "en", {"a": 1})
    page_cache.set("about-us", "pl", {"a": 2})
    page_cache.set("pricing", "en", {"a": 3})
    assert page_cache.invalidate("about-us") == 2
    assert list(fake_redis.store) == ["page:en:pricing"]


def test_invalidate_all(page_cache, fake_redis):
    page_cache.set("a", "en", {})
    page_cache.set("b", None, {})
    fake_redis.store["other:key"] = "1"
    assert page_cache.invalidate_all() == 2
    assert list(fake_redis.store) == ["other:key"]


def test_disabled_cache_misses():
    cache = PageCache(None, ttl_sec=60)
    assert cache.enabled is False
    assert cache.set("a", "en", {"x": 1}) is False
    assert cache.get("a", "en") is None
    assert cache.invalidate_all() == 0


def test_redis_errors_degrade_to_miss(fake_redis):
    def boom(*args, **kwargs):
        raise redis.ConnectionError("down")

    fake_redis.get = boom
    fake_redis.setex = boom
    cache = PageCache(fake_redis, ttl_sec=60)
    assert cache.get("a", "en") is None
    assert cache.set("a", "en", {"x": 1}) is False


def test_escape_glob():
    assert escape_glob("a*b?c[d]e\\f") == "a\\*b\\?c\\[d\\]e\\\\f"
    assert escape_glob("about-us") == "about-us"


def test_invalidate_treats_slug_literally(page_cache, fake_redis):
    page_cache.set("about-us", "en", {})
    page_cache.set("a?out-us", "en", {})
    assert page_cache.invalidate("*") == 0
    assert page_cache.invalidate("a?out-us") == 1
    assert list(fake_redis.store) == ["page:en:about-us"]
