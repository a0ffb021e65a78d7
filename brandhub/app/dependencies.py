from __future__ import annotations

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from .config import settings
from .db import get_db
from .services.page_service import PageService
from .services.revalidation import RevalidationService
from .utils.page_cache import PageCache, get_page_cache


def get_cache() -> PageCache:
    return get_page_cache()


def get_page_service(db: Session = Depends(get_db), cache: PageCache = Depends(get_cache)) -> PageService:
    return PageService(db, cache=cache)


def get_revalidation_service(
    pages: PageService = Depends(get_page_service),
    cache: PageCache = Depends(get_cache),
) -> RevalidationService:
    return RevalidationService(pages, cache)


def resolve_locale(locale: Optional[str]) -> Optional[str]:
    """Supported locale for a route segment, the default when absent, None when unknown."""
    if locale is None:
        return settings.DEFAULT_LOCALE
    normalized = locale.strip().lower()
    if normalized in settings.SUPPORTED_LOCALES:
        return normalized
    return None
