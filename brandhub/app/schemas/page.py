from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..errors import MalformedContentError


logger = logging.getLogger(__name__)


class ContentKind(str, Enum):
    PLAIN = "plain"  # bare string from the store, trusted markup
    HTML = "html"
    TEXT = "text"
    JSON = "json"  # node tree, see content_converter
    CSS = "css"
    RAW = "raw"  # unrecognized tag, rendered verbatim


_KNOWN_KINDS = {k.value for k in ContentKind}


class ContentField(BaseModel):
    kind: ContentKind
    value: Any = ""
    source_kind: Optional[str] = None

    @property
    def is_verbatim(self) -> bool:
        return self.kind in (ContentKind.PLAIN, ContentKind.HTML, ContentKind.RAW)


def parse_content_field(raw: Any, field: str = "content") -> Optional[ContentField]:
    """Turn a stored value into a ContentField.

    Accepts the legacy ``{"type": ..., "value": ...}`` shape, the
    ``{"kind": ...}`` shape produced by model_dump, and bare strings.
    Unknown shapes are logged and kept as ``raw``.
    """
    if raw is None:
        return None
    if isinstance(raw, ContentField):
        return raw
    if isinstance(raw, str):
        return ContentField(kind=ContentKind.PLAIN, value=raw)
    if isinstance(raw, dict):
        tag = raw.get("kind") or raw.get("type")
        value = raw.get("value")
        if isinstance(tag, ContentKind):
            tag = tag.value
        if tag in _KNOWN_KINDS:
            if value is None:
                value = [] if tag == ContentKind.JSON.value else ""
            return ContentField(kind=ContentKind(tag), value=value, source_kind=raw.get("source_kind"))
        err = MalformedContentError(field, raw)
        logger.warning("content_malformed field=%s err=%s", field, err)
        return ContentField(
            kind=ContentKind.RAW,
            value=value if value is not None else "",
            source_kind=str(tag) if tag is not None else None,
        )
    err = MalformedContentError(field, raw)
    logger.warning("content_malformed field=%s err=%s", field, err)
    return ContentField(kind=ContentKind.RAW, value="")


class PageRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    lang: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[ContentField] = None
    button: Optional[ContentField] = None
    style: Optional[ContentField] = None
    keywords: Optional[List[str]] = None
    images: List[Dict[str, Any]] = []
    videos: List[Dict[str, Any]] = []
    meta_description: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    show_title: bool = True
    show_description: bool = True
    show_metadata: bool = True
    show_header: bool = True
    show_footer: bool = True
    show_button: bool = False
    status: Literal["draft", "published", "archived"] = "draft"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("content", "button", "style", mode="before")
    @classmethod
    def _parse_field(cls, v: Any, info) -> Optional[ContentField]:
        return parse_content_field(v, info.field_name)

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keywords(cls, v: Any) -> Optional[List[str]]:
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("images", "videos", mode="before")
    @classmethod
    def _media_entries(cls, v: Any) -> List[Dict[str, Any]]:
        # entries without a url cannot be rendered
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict) and item.get("url")]

    @property
    def is_published(self) -> bool:
        return self.status == "published"


class PageSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    lang: Optional[str] = None
    title: Optional[str] = None
    status: str
    updated_at: Optional[datetime] = None


class RevalidateRequest(BaseModel):
    type: Optional[str] = None
    slug: Optional[str] = None
    path: Optional[str] = None


class RevalidateResponse(BaseModel):
    revalidated: bool
    paths: List[str]
    message: str
    timestamp: datetime
