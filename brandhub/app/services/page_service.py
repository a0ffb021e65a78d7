from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import case, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import StoreError
from ..models import Page
from ..schemas.page import PageRecord
from ..utils.page_cache import PageCache
from .legal_fallbacks import LEGAL_SLUGS


logger = logging.getLogger(__name__)

PUBLISHED = "published"


class PageService:
    """Read access to the ``pages`` table.

    Store failures are raised as :class:`StoreError`; a missing or unpublished
    page is ``None``.
    """

    def __init__(self, db: Session, cache: Optional[PageCache] = None) -> None:
        self.db = db
        self.cache = cache

    def get_page_by_slug(self, slug: str, locale: Optional[str] = None) -> Optional[PageRecord]:
        if not slug:
            return None
        if self.cache is not None:
            cached = self.cache.get(slug, locale)
            if cached is not None:
                return PageRecord.model_validate(cached)

        query = select(Page).where(Page.slug == slug, Page.status == PUBLISHED)
        if locale:
            # exact locale first, locale-neutral rows as fallback
            query = query.where(or_(Page.lang == locale, Page.lang.is_(None))).order_by(
                case((Page.lang == locale, 0), else_=1), Page.id.asc()
            )
        else:
            query = query.order_by(Page.id.asc())
        try:
            row = self.db.execute(query.limit(1)).scalars().first()
        except SQLAlchemyError as exc:
            logger.exception("page_lookup_failed slug=%s locale=%s", slug, locale)
            raise StoreError("get_page_by_slug", exc) from exc
        if row is None:
            return None
        record = PageRecord.model_validate(row)
        if self.cache is not None:
            self.cache.set(slug, locale, record.model_dump(mode="json"))
        return record

    def get_page_by_id(self, page_id: int) -> Optional[PageRecord]:
        try:
            row = self.db.get(Page, page_id)
        except SQLAlchemyError as exc:
            logger.exception("page_lookup_failed id=%s", page_id)
            raise StoreError("get_page_by_id", exc) from exc
        return PageRecord.model_validate(row) if row is not None else None

    def get_all_pages(self, status: Optional[str] = None) -> List[PageRecord]:
        query = select(Page)
        if status:
            query = query.where(Page.status == status)
        query = query.order_by(Page.created_at.desc(), Page.id.desc())
        try:
            rows = self.db.execute(query).scalars().all()
        except SQLAlchemyError as exc:
            logger.exception("page_list_failed status=%s", status)
            raise StoreError("get_all_pages", exc) from exc
        return [PageRecord.model_validate(row) for row in rows]

    def get_all_published_slugs(self, locale: Optional[str] = None) -> List[str]:
        query = select(Page.slug).where(Page.status == PUBLISHED)
        if locale:
            query = query.where(or_(Page.lang == locale, Page.lang.is_(None)))
        try:
            slugs = self.db.execute(query.order_by(Page.slug.asc())).scalars().all()
        except SQLAlchemyError as exc:
            logger.exception("page_slugs_failed locale=%s", locale)
            raise StoreError("get_all_published_slugs", exc) from exc
        # the same slug may exist once per locale
        return list(dict.fromkeys(slugs))

    def get_dynamic_page_slugs(self, locale: Optional[str] = None) -> List[str]:
        return [s for s in self.get_all_published_slugs(locale) if s not in LEGAL_SLUGS]
