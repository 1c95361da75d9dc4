# wararka/services/article_store.py
"""
Persistence gateway for articles and refresh run logs.

Wraps a SQLAlchemy session so the refresh orchestrator and the read
endpoints never build queries themselves. The refresh replace runs delete
and insert inside one transaction: readers keep seeing the previous rows
until commit, and a failed insert rolls the delete back.
"""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wararka.models import (
    Article,
    ArticleCategory,
    NewsUpdateLog,
    REFRESH_CATEGORIES,
    RunStatus,
)

logger = logging.getLogger(__name__)


class ArticleStoreError(Exception):
    """A persistence step failed. `step` names which one ("read", "delete", "insert")."""

    def __init__(self, step: str, message: str):
        super().__init__(message)
        self.step = step


class ArticleStore:
    """Thin gateway over the articles and news_update_logs tables."""

    def __init__(self, db: Session):
        self.db = db

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_articles(self, category: ArticleCategory | str, limit: int = 50) -> list[Article]:
        """Newest first by published_at, then created_at."""
        category_value = category.value if isinstance(category, ArticleCategory) else category
        try:
            return (
                self.db.query(Article)
                .filter(Article.category == category_value)
                .order_by(Article.published_at.desc(), Article.created_at.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise ArticleStoreError("read", f"Failed to read {category_value} articles: {e}") from e

    def count_articles(self, categories: tuple[ArticleCategory, ...] = REFRESH_CATEGORIES) -> int:
        return (
            self.db.query(Article)
            .filter(Article.category.in_([c.value for c in categories]))
            .count()
        )

    # -------------------------------------------------------------------------
    # Refresh writes
    # -------------------------------------------------------------------------

    def delete_refresh_articles(self) -> int:
        """Delete world/sport rows in the current transaction (not committed)."""
        return (
            self.db.query(Article)
            .filter(Article.category.in_([c.value for c in REFRESH_CATEGORIES]))
            .delete(synchronize_session=False)
        )

    def insert_articles(self, rows: list[dict[str, Any]], run_id: str | None = None) -> int:
        """Add rows in the current transaction and flush them (not committed)."""
        self.db.add_all(Article(**row, refresh_run_id=run_id) for row in rows)
        self.db.flush()
        return len(rows)

    def replace_refresh_articles(self, rows: list[dict[str, Any]], run_id: str) -> int:
        """
        Replace every world/sport row with `rows` in a single transaction.

        Raises:
            ArticleStoreError: step "delete" if the delete failed (nothing was
                inserted), step "insert" if insert or commit failed (the delete
                was rolled back).
        """
        try:
            deleted = self.delete_refresh_articles()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise ArticleStoreError("delete", f"Failed to delete old articles: {e}") from e

        try:
            inserted = self.insert_articles(rows, run_id=run_id)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise ArticleStoreError("insert", f"Failed to insert articles: {e}") from e

        logger.info(
            f"Replaced {deleted} refresh articles with {inserted} new rows",
            extra={"event": "articles_replaced", "inserted": inserted, "run_id": run_id},
        )
        return inserted

    # -------------------------------------------------------------------------
    # Run log
    # -------------------------------------------------------------------------

    def record_run(
        self,
        run_id: str,
        status: RunStatus,
        inserted_count: int = 0,
        world_fetched: int = 0,
        sport_fetched: int = 0,
        skip_reason: str | None = None,
        error_message: str | None = None,
    ) -> NewsUpdateLog:
        """Append one run log row and commit it."""
        entry = NewsUpdateLog(
            run_id=run_id,
            status=status.value,
            inserted_count=inserted_count,
            world_fetched=world_fetched,
            sport_fetched=sport_fetched,
            skip_reason=skip_reason,
            error_message=error_message,
        )
        try:
            self.db.add(entry)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise ArticleStoreError("run_log", f"Failed to record run log: {e}") from e
        return entry

    def latest_runs(self, limit: int = 10) -> list[NewsUpdateLog]:
        return (
            self.db.query(NewsUpdateLog)
            .order_by(NewsUpdateLog.created_at.desc())
            .limit(limit)
            .all()
        )
