import json
import logging
import time
from typing import Any, Optional

import redis

from ..config import settings


logger = logging.getLogger(__name__)
_redis_client: Optional[redis.Redis] = None
_redis_disabled_until: float = 0.0
_redis_write_disabled_until: float = 0.0
_redis_write_disabled_reason: Optional[str] = None


def _now() -> float:
    return time.time()


def _mark_redis_disabled(reason: str, seconds: int = 60) -> None:
    global _redis_disabled_until
    _redis_disabled_until = _now() + seconds
    logger.warning("redis disabled for %ss: %s", seconds, reason)


def _mark_redis_write_disabled(reason: str, seconds: int = 300) -> None:
    global _redis_write_disabled_until, _redis_write_disabled_reason
    _redis_write_disabled_until = _now() + seconds
    _redis_write_disabled_reason = reason
    logger.warning("redis write disabled for %ss: %s", seconds, reason)


def get_redis(url: Optional[str] = None) -> Optional[redis.Redis]:
    global _redis_client, _redis_disabled_until
    if _redis_disabled_until and _redis_disabled_until > _now():
        return None
    url = url or settings.REDIS_URL
    if not url:
        return None
    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                url,
                decode_responses=True,
                socket_connect_timeout=0.2,
                socket_timeout=0.5,
                retry_on_timeout=False,
                health_check_interval=30,
            )
            _redis_client.ping()
        except redis.RedisError as exc:
            logger.warning("redis unavailable: %s", exc)
            _mark_redis_disabled(str(exc))
            _redis_client = None
            return None
    return _redis_client


def redis_get_json(client: Optional[redis.Redis], key: str) -> Optional[Any]:
    if client is None:
        return None
    try:
        raw = client.get(key)
        if not raw:
            return None
        return json.loads(raw)
    except (redis.RedisError, ValueError) as exc:
        logger.warning("redis get failed: %s", exc)
        return None


def redis_set_json(client: Optional[redis.Redis], key: str, value: Any, ttl_sec: int) -> bool:
    if _redis_write_disabled_until and _redis_write_disabled_until > _now():
        logger.warning(
            "redis write skipped (disabled): %s", _redis_write_disabled_reason or "unknown"
        )
        return False
    if client is None:
        return False
    try:
        client.setex(key, ttl_sec, json.dumps(value, ensure_ascii=False))
        return True
    except redis.RedisError as exc:
        msg = str(exc)
        if "MISCONF" in msg or "No space left on device" in msg or "ENOSPC" in msg:
            _mark_redis_write_disabled(msg, seconds=300)
        logger.warning("redis set failed: %s", exc)
        return False


def redis_delete_by_pattern(client: Optional[redis.Redis], pattern: str) -> int:
    if client is None:
        return 0
    deleted = 0
    try:
        for key in client.scan_iter(match=pattern, count=200):
            deleted += int(client.delete(key))
    except redis.RedisError as exc:
        logger.warning("redis scan/delete failed: %s", exc)
    return deleted
