"""Add refresh_leases table

Revision ID: 003_add_refresh_leases
Revises: 002_add_update_logs
Create Date: 2026-10-19

Single-row advisory lease per job name. A run takes over a row once
expires_at has passed, so a crashed run cannot block refreshes forever.
"""

import sqlalchemy as sa
from alembic import op

revision: str = "003_add_refresh_leases"
down_revision: str = "002_add_update_logs"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "refresh_leases",
        sa.Column("name", sa.String(64), primary_key=True),
        sa.Column("holder", sa.String(36), nullable=False),
        sa.Column("acquired_at", sa.DateTime, nullable=False),
        sa.Column("expires_at", sa.DateTime, nullable=False),
    )


def downgrade() -> None:
    op.drop_table("refresh_leases")
