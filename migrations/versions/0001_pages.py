"""pages

Revision ID: 0001_pages
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "0001_pages"
down_revision = None
branch_labels = None
depends_on = None


def _json() -> sa.types.TypeEngine:
    return sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "pages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("lang", sa.String(length=8), nullable=True),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content", _json(), nullable=True),
        sa.Column("button", _json(), nullable=True),
        sa.Column("style", _json(), nullable=True),
        sa.Column("keywords", _json(), nullable=True),
        sa.Column("meta_description", sa.String(length=500), nullable=True),
        sa.Column("og_title", sa.String(length=255), nullable=True),
        sa.Column("og_description", sa.String(length=500), nullable=True),
        sa.Column("og_image", sa.String(length=500), nullable=True),
        sa.Column("show_title", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_description", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_metadata", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_header", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_footer", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_button", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="draft"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("slug", "lang", name="uq_pages_slug_lang"),
        sa.CheckConstraint("status IN ('draft', 'published', 'archived')", name="ck_pages_status"),
    )
    op.create_index("ix_pages_id", "pages", ["id"])
    op.create_index("ix_pages_slug", "pages", ["slug"])
    op.create_index("ix_pages_lang", "pages", ["lang"])
    op.create_index("ix_pages_status", "pages", ["status"])


def downgrade() -> None:
    op.drop_index("ix_pages_status", table_name="pages")
    op.drop_index("ix_pages_lang", table_name="pages")
    op.drop_index("ix_pages_slug", table_name="pages")
    op.drop_index("ix_pages_id", table_name="pages")
    op.drop_table("pages")
