# wararka/models.py
"""
Wararka Database Models

Tables:
- Article: News articles shown on the site (local ones are authored directly,
  world/sport ones are owned by the refresh pipeline)
- NewsUpdateLog: Append-only record of each refresh run
- RefreshLease: Advisory lease so only one refresh mutates articles at a time

All timestamps are naive UTC.
"""

from datetime import UTC, datetime
from enum import Enum
import uuid

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)

from wararka.database import Base


def utcnow() -> datetime:
    """Naive UTC now, matching how every timestamp column is stored."""
    return datetime.now(UTC).replace(tzinfo=None)


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class ArticleCategory(str, Enum):
    """Article categories. Only WORLD and SPORT are written by the refresh pipeline."""
    LOCAL = "local"
    WORLD = "world"
    SPORT = "sport"
    BUSINESS = "business"
    POLITICS = "politics"


# Categories whose rows are fully replaced by every successful refresh
REFRESH_CATEGORIES = (ArticleCategory.WORLD, ArticleCategory.SPORT)


class RunStatus(str, Enum):
    """Outcome of a refresh run."""
    SUCCESS = "success"
    SKIPPED = "skipped"
    ERROR = "error"


class SkipReason(str, Enum):
    """Why a refresh run skipped the replace step."""
    NOTHING_FETCHED = "nothing_fetched"
    REFRESH_IN_PROGRESS = "refresh_in_progress"


# -----------------------------------------------------------------------------
# Article
# -----------------------------------------------------------------------------

class Article(Base):
    """A news article in the primary language plus its Somali translation."""
    __tablename__ = "articles"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False, default="")
    title_so = Column(Text, nullable=True)
    content_so = Column(Text, nullable=True)

    category = Column(String(32), nullable=False)  # ArticleCategory enum
    image_url = Column(Text, nullable=True)

    # Every row from one refresh run carries the same run timestamp
    published_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Set only on rows written by the refresh pipeline
    refresh_run_id = Column(String(36), nullable=True)

    __table_args__ = (
        Index("ix_articles_category", "category"),
        Index("ix_articles_category_published_at", "category", "published_at"),
    )


# -----------------------------------------------------------------------------
# NewsUpdateLog
# -----------------------------------------------------------------------------

class NewsUpdateLog(Base):
    """One row per refresh run. Never updated or deleted by the pipeline."""
    __tablename__ = "news_update_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    run_id = Column(String(36), nullable=False)

    status = Column(String(16), nullable=False)  # RunStatus enum
    inserted_count = Column(Integer, default=0, nullable=False)
    world_fetched = Column(Integer, default=0, nullable=False)
    sport_fetched = Column(Integer, default=0, nullable=False)
    skip_reason = Column(String(32), nullable=True)  # SkipReason enum
    error_message = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_news_update_logs_created_at", "created_at"),
        Index("ix_news_update_logs_status", "status"),
    )


# -----------------------------------------------------------------------------
# RefreshLease
# -----------------------------------------------------------------------------

class RefreshLease(Base):
    """Advisory lease row. A row whose expires_at has passed is free to take over."""
    __tablename__ = "refresh_leases"

    name = Column(String(64), primary_key=True)
    holder = Column(String(36), nullable=False)
    acquired_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False)
