from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import FrozenSet, Optional

from markupsafe import Markup

from ..schemas.page import PageRecord
from .content_converter import render, render_style
from .legal_fallbacks import is_legal_page


class RenderMode(str, Enum):
    DYNAMIC_FIXED_CHROME = "dynamic_fixed_chrome"
    DYNAMIC_CONDITIONAL_CHROME = "dynamic_conditional_chrome"
    STATIC_FALLBACK = "static_fallback"
    NOT_FOUND = "not_found"


REGION_HEADER = "header"
REGION_FOOTER = "footer"
REGION_TITLE = "title"
REGION_DESCRIPTION = "description"
REGION_METADATA = "metadata"
REGION_BUTTON = "button"


def select_mode(record: Optional[PageRecord], slug: str) -> RenderMode:
    # a stored page always beats the bundled legal template
    legal = is_legal_page(slug)
    if record is not None and legal:
        return RenderMode.DYNAMIC_FIXED_CHROME
    if record is not None:
        return RenderMode.DYNAMIC_CONDITIONAL_CHROME
    if legal:
        return RenderMode.STATIC_FALLBACK
    return RenderMode.NOT_FOUND


@dataclass
class PageView:
    page: PageRecord
    mode: RenderMode
    regions: FrozenSet[str] = field(default_factory=frozenset)
    content_html: Markup = Markup("")
    button_html: Markup = Markup("")
    style_css: Markup = Markup("")
    last_updated: Optional[str] = None

    def shows(self, region: str) -> bool:
        return region in self.regions

    @property
    def has_page_header(self) -> bool:
        return bool(self.regions & {REGION_TITLE, REGION_DESCRIPTION, REGION_METADATA})


def visible_regions(page: PageRecord, mode: RenderMode) -> FrozenSet[str]:
    regions = set()
    if mode == RenderMode.DYNAMIC_FIXED_CHROME:
        regions.update((REGION_HEADER, REGION_FOOTER))
    else:
        if page.show_header:
            regions.add(REGION_HEADER)
        if page.show_footer:
            regions.add(REGION_FOOTER)
    if page.show_title:
        regions.add(REGION_TITLE)
    if page.show_description and page.description:
        regions.add(REGION_DESCRIPTION)
    if page.show_metadata:
        regions.add(REGION_METADATA)
    if page.show_button and page.button is not None:
        regions.add(REGION_BUTTON)
    return frozenset(regions)


def format_last_updated(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    # en-US long date, e.g. "March 5, 2025"
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def build_page_view(page: PageRecord, mode: RenderMode) -> PageView:
    if mode not in (RenderMode.DYNAMIC_FIXED_CHROME, RenderMode.DYNAMIC_CONDITIONAL_CHROME):
        raise ValueError(f"no page view for mode {mode.value}")
    regions = visible_regions(page, mode)
    button_html = render(page.button) if REGION_BUTTON in regions else ""
    return PageView(
        page=page,
        mode=mode,
        regions=regions,
        content_html=Markup(render(page.content)),
        button_html=Markup(button_html),
        style_css=Markup(render_style(page.style)),
        last_updated=format_last_updated(page.updated_at) if REGION_METADATA in regions else None,
    )
