"""Create articles table

Revision ID: 001_create_articles
Revises:
Create Date: 2026-10-19

World and sport rows are owned by the refresh pipeline; other categories
are authored directly and never touched by it.
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_create_articles"
down_revision: str | None = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "articles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("content", sa.Text, nullable=False, server_default=""),
        sa.Column("title_so", sa.Text, nullable=True),
        sa.Column("content_so", sa.Text, nullable=True),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("image_url", sa.Text, nullable=True),
        sa.Column("published_at", sa.DateTime, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_articles_category", "articles", ["category"])
    op.create_index("ix_articles_category_published_at", "articles", ["category", "published_at"])


def downgrade() -> None:
    op.drop_index("ix_articles_category_published_at", table_name="articles")
    op.drop_index("ix_articles_category", table_name="articles")
    op.drop_table("articles")
