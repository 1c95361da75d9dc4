"""Add news_update_logs table and articles.refresh_run_id

Revision ID: 002_add_update_logs
Revises: 001_create_articles
Create Date: 2026-10-19

Append-only record of refresh runs, including skipped and failed ones.
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "002_add_update_logs"
down_revision: str = "001_create_articles"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "news_update_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("run_id", sa.String(36), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("inserted_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("world_fetched", sa.Integer, nullable=False, server_default="0"),
        sa.Column("sport_fetched", sa.Integer, nullable=False, server_default="0"),
        sa.Column("skip_reason", sa.String(32), nullable=True),
        sa.Column("error_message", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_news_update_logs_created_at", "news_update_logs", ["created_at"])
    op.create_index("ix_news_update_logs_status", "news_update_logs", ["status"])

    op.add_column(
        "articles",
        sa.Column("refresh_run_id", sa.String(36), nullable=True),
    )


def downgrade() -> None:
    op.drop_column("articles", "refresh_run_id")
    op.drop_index("ix_news_update_logs_status", table_name="news_update_logs")
    op.drop_index("ix_news_update_logs_created_at", table_name="news_update_logs")
    op.drop_table("news_update_logs")
