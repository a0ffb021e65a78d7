from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from markupsafe import Markup

from ..config import settings
from ..schemas.page import PageRecord
from .legal_fallbacks import LegalFallback


@dataclass
class PageMeta:
    title: str
    description: Optional[str] = None
    keywords: Optional[str] = None
    canonical: Optional[str] = None
    robots: Optional[str] = None
    open_graph: Dict[str, str] = field(default_factory=dict)
    twitter: Dict[str, str] = field(default_factory=dict)
    images: List[str] = field(default_factory=list)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _page_url(page: PageRecord, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/{page.slug}"


def _robots(page: PageRecord) -> str:
    return "index, follow" if page.is_published else "noindex, nofollow"


def generate_page_seo(page: PageRecord, base_url: str, site_name: Optional[str] = None) -> PageMeta:
    site_name = site_name or settings.SITE_NAME
    url = _page_url(page, base_url)
    title = page.og_title or page.title or ""
    description = page.meta_description or page.description
    social_description = page.og_description or description
    image = page.og_image or (page.images[0]["url"] if page.images else None)

    open_graph = {
        "type": "article",
        "title": title,
        "url": url,
        "site_name": site_name,
        "locale": page.lang or "en_US",
    }
    twitter = {"card": "summary_large_image", "title": title}
    if social_description:
        open_graph["description"] = social_description
        twitter["description"] = social_description
    if image:
        open_graph["image"] = image
        twitter["image"] = image

    return PageMeta(
        title=title,
        description=description,
        keywords=", ".join(page.keywords) if page.keywords else None,
        canonical=url,
        robots=_robots(page),
        open_graph=open_graph,
        twitter=twitter,
        images=[image] if image else [],
    )


def legal_page_seo(page: PageRecord, base_url: str, site_name: Optional[str] = None) -> PageMeta:
    """Metadata for a legal page served from the store."""
    site_name = site_name or settings.SITE_NAME
    url = _page_url(page, base_url)
    title = page.title or ""
    description = page.description or f"{title} - {site_name}"
    return PageMeta(
        title=title,
        description=description,
        canonical=url,
        robots="index, follow",
        open_graph={
            "type": "website",
            "title": title,
            "description": description,
            "url": url,
            "site_name": site_name,
        },
        twitter={"card": "summary", "title": title, "description": description},
    )


def legal_fallback_seo(fallback: LegalFallback) -> PageMeta:
    return PageMeta(title=fallback.title, description=fallback.description)


def not_found_seo() -> PageMeta:
    return PageMeta(
        title="Page Not Found",
        description="The requested page could not be found.",
        robots="noindex, nofollow",
    )


def generate_article_data(page: PageRecord, base_url: str, site_name: Optional[str] = None) -> Dict[str, Any]:
    """schema.org ``Article`` for a stored page."""
    site_name = site_name or settings.SITE_NAME
    url = _page_url(page, base_url)
    organization = {"@type": "Organization", "name": site_name, "url": base_url}
    data: Dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "Article",
        "headline": page.title,
        "description": page.description,
        "url": url,
        "datePublished": _iso(page.created_at),
        "dateModified": _iso(page.updated_at),
        "author": organization,
        "publisher": organization,
        "mainEntityOfPage": {"@type": "WebPage", "@id": url},
        "inLanguage": page.lang or "en",
    }
    if page.images:
        data["image"] = [
            {
                "@type": "ImageObject",
                "url": img["url"],
                "width": img.get("width"),
                "height": img.get("height"),
                "caption": img.get("alt") or img.get("caption"),
            }
            for img in page.images
        ]
    if page.keywords:
        data["keywords"] = ", ".join(page.keywords)
    return {k: v for k, v in data.items() if v is not None}


def generate_breadcrumb_data(page: PageRecord, base_url: str) -> Dict[str, Any]:
    return {
        "@context": "https://schema.org",
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": 1, "name": "Home", "item": base_url},
            {"@type": "ListItem", "position": 2, "name": page.title, "item": _page_url(page, base_url)},
        ],
    }


def structured_data_script(page: PageRecord, base_url: str, site_name: Optional[str] = None) -> Markup:
    """JSON-LD payload for a ``<script type="application/ld+json">`` block."""
    payload = json.dumps(
        [generate_article_data(page, base_url, site_name), generate_breadcrumb_data(page, base_url)],
        ensure_ascii=False,
    )
    # "<" would let page text close the script element
    return Markup(payload.replace("<", "\\u003c"))
