from __future__ import annotations

from datetime import datetime
from typing import Any
from sqlalchemy import JSON, Boolean, CheckConstraint, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


JSONType = JSON().with_variant(JSONB(), "postgresql")

PAGE_STATUSES = ("draft", "published", "archived")


class Page(Base):
    __tablename__ = "pages"
    __table_args__ = (
        UniqueConstraint("slug", "lang", name="uq_pages_slug_lang"),
        CheckConstraint("status IN ('draft', 'published', 'archived')", name="ck_pages_status"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    lang: Mapped[str | None] = mapped_column(String(8), nullable=True, index=True)  # None = any locale
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # str or {"type": "html"|"text"|"json", "value": ...}
    content: Mapped[Any] = mapped_column(JSONType, nullable=True)
    button: Mapped[Any] = mapped_column(JSONType, nullable=True)
    style: Mapped[Any] = mapped_column(JSONType, nullable=True)
    keywords: Mapped[list[str] | None] = mapped_column(JSONType, nullable=True)
    # [{"url", "alt", "width", "height"}], [{"url", "poster", "type"}]
    images: Mapped[list[dict] | None] = mapped_column(JSONType, nullable=True)
    videos: Mapped[list[dict] | None] = mapped_column(JSONType, nullable=True)

    meta_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    og_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    og_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    og_image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    show_title: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    show_description: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    show_metadata: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    show_header: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    show_footer: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    show_button: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Page slug={self.slug!r} lang={self.lang!r} status={self.status!r}>"
