from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

import redis

from ..config import settings
from .redis_cache import get_redis, redis_delete_by_pattern, redis_get_json, redis_set_json


logger = logging.getLogger(__name__)

DEFAULT_LOCALE_KEY = "default"
_GLOB_SPECIAL = re.compile(r"([\\*?\[\]])")


def escape_glob(value: str) -> str:
    """Escape redis MATCH metacharacters so ``value`` only matches itself."""
    return _GLOB_SPECIAL.sub(r"\\\1", value)


class PageCache:
    """Rendered-page payload cache keyed by ``{prefix}:{locale}:{slug}``.

    A cache without a client is disabled: reads miss and writes are dropped.
    """

    def __init__(self, client: Optional[redis.Redis], ttl_sec: int, prefix: str = "page") -> None:
        self.client = client
        self.ttl_sec = ttl_sec
        self.prefix = prefix

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def key(self, slug: str, locale: Optional[str] = None) -> str:
        return f"{self.prefix}:{locale or DEFAULT_LOCALE_KEY}:{slug}"

    def get(self, slug: str, locale: Optional[str] = None) -> Optional[Dict[str, Any]]:
        payload = redis_get_json(self.client, self.key(slug, locale))
        if payload is not None:
            logger.debug("page_cache_hit slug=%s locale=%s", slug, locale)
        return payload

    def set(self, slug: str, locale: Optional[str], payload: Dict[str, Any]) -> bool:
        return redis_set_json(self.client, self.key(slug, locale), payload, self.ttl_sec)

    def invalidate(self, slug: str) -> int:
        deleted = redis_delete_by_pattern(self.client, f"{escape_glob(self.prefix)}:*:{escape_glob(slug)}")
        logger.info("page_cache_invalidate slug=%s deleted=%s", slug, deleted)
        return deleted

    def invalidate_all(self) -> int:
        deleted = redis_delete_by_pattern(self.client, f"{escape_glob(self.prefix)}:*")
        logger.info("page_cache_invalidate_all deleted=%s", deleted)
        return deleted


def get_page_cache() -> PageCache:
    return PageCache(get_redis(), ttl_sec=settings.PAGE_CACHE_TTL_SEC)
