# wararka/services/refresh_lease.py
"""
Advisory lease that keeps overlapping refresh runs from racing.

A lease is one row in refresh_leases keyed by name. Acquiring inserts the
row, or takes over an expired one with a conditional UPDATE, so exactly
one caller wins even when two processes try at the same time. The TTL
bounds how long a crashed holder can block later runs.
"""

import logging
import uuid
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from wararka.constants import RefreshDefaults
from wararka.models import RefreshLease, utcnow

logger = logging.getLogger(__name__)


class RefreshLeaseService:
    """Acquire/release a named lease row with a TTL."""

    def __init__(
        self,
        db: Session,
        name: str = RefreshDefaults.LEASE_NAME,
        ttl_seconds: int = RefreshDefaults.LEASE_TTL_SECONDS,
        holder: str | None = None,
    ):
        self.db = db
        self.name = name
        self.ttl_seconds = ttl_seconds
        self.holder = holder or str(uuid.uuid4())
        self._held = False

    @property
    def is_held(self) -> bool:
        return self._held

    def acquire(self, now: datetime | None = None) -> bool:
        """
        Try to take the lease.

        Returns:
            True if this holder now owns the lease, False if another live
            holder has it.
        """
        now = now or utcnow()
        expires_at = now + timedelta(seconds=self.ttl_seconds)

        try:
            # Take over an expired lease (or re-enter our own)
            taken = (
                self.db.query(RefreshLease)
                .filter(RefreshLease.name == self.name)
                .filter((RefreshLease.expires_at <= now) | (RefreshLease.holder == self.holder))
                .update(
                    {
                        RefreshLease.holder: self.holder,
                        RefreshLease.acquired_at: now,
                        RefreshLease.expires_at: expires_at,
                    },
                    synchronize_session=False,
                )
            )
            if taken:
                self.db.commit()
                self._held = True
                return True

            exists = self.db.query(RefreshLease.name).filter(RefreshLease.name == self.name).first()
            if exists:
                self.db.rollback()
                logger.info(f"Lease '{self.name}' is held by another refresh run")
                return False

            self.db.add(
                RefreshLease(
                    name=self.name,
                    holder=self.holder,
                    acquired_at=now,
                    expires_at=expires_at,
                )
            )
            self.db.commit()
        except IntegrityError:
            # Someone inserted the row between our check and insert
            self.db.rollback()
            logger.info(f"Lease '{self.name}' was taken concurrently")
            return False

        self._held = True
        return True

    def release(self) -> None:
        """Drop the lease if we hold it. Failures are logged; the TTL cleans up."""
        if not self._held:
            return
        try:
            (
                self.db.query(RefreshLease)
                .filter(RefreshLease.name == self.name, RefreshLease.holder == self.holder)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"Failed to release lease '{self.name}': {e}")
        finally:
            self._held = False
