"""page images and videos

Revision ID: 0002_page_media
Revises: 0001_pages
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "0002_page_media"
down_revision = "0001_pages"
branch_labels = None
depends_on = None


def _json() -> sa.types.TypeEngine:
    return sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.add_column("pages", sa.Column("images", _json(), nullable=True))
    op.add_column("pages", sa.Column("videos", _json(), nullable=True))


def downgrade() -> None:
    op.drop_column("pages", "videos")
    op.drop_column("pages", "images")
