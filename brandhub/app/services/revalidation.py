from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from ..errors import InvalidRevalidationRequest
from ..utils.page_cache import PageCache
from .legal_fallbacks import LEGAL_SLUGS, legal_paths
from .page_service import PageService


logger = logging.getLogger(__name__)

REVALIDATION_TYPES = ("all", "single", "legal", "dynamic")


@dataclass
class RevalidationResult:
    paths: List[str]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def message(self) -> str:
        return f"Revalidated {len(self.paths)} items"


class RevalidationService:
    """Drops cached pages so the next request renders them from the store."""

    def __init__(self, pages: PageService, cache: PageCache) -> None:
        self.pages = pages
        self.cache = cache

    def revalidate(self, kind: Optional[str], slug: Optional[str] = None, path: Optional[str] = None) -> RevalidationResult:
        if kind == "single":
            paths = self._single(slug, path)
        elif kind == "legal":
            paths = self._legal()
        elif kind == "dynamic":
            paths = self._dynamic()
        elif kind == "all":
            paths = self._all()
        else:
            raise InvalidRevalidationRequest(f"Invalid revalidation type: {kind!r}")
        logger.info("revalidate type=%s slug=%s paths=%s", kind, slug, len(paths))
        return RevalidationResult(paths=paths)

    def _single(self, slug: Optional[str], path: Optional[str]) -> List[str]:
        if not slug and not path:
            raise InvalidRevalidationRequest("single revalidation needs a slug or path")
        paths: List[str] = []
        if slug:
            self.cache.invalidate(slug)
            paths.append(f"/{slug}")
        if path:
            path_slug = path.strip("/").split("/")[-1]
            if path_slug:
                self.cache.invalidate(path_slug)
            paths.append(path)
        return paths

    def _legal(self) -> List[str]:
        for slug in LEGAL_SLUGS:
            self.cache.invalidate(slug)
        return [*legal_paths(), "tag:legal-pages"]

    def _dynamic(self) -> List[str]:
        slugs = self.pages.get_dynamic_page_slugs()
        for slug in slugs:
            self.cache.invalidate(slug)
        return [*(f"/{s}" for s in slugs), "tag:dynamic-pages"]

    def _all(self) -> List[str]:
        slugs = self.pages.get_all_published_slugs()
        self.cache.invalidate_all()
        paths = [f"/{s}" for s in slugs]
        paths.extend(p for p in legal_paths() if p not in paths)
        return paths
