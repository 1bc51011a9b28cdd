"""In-memory store for pending password resets."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

import structlog

from beacon.models import ResetRequest

log = structlog.get_logger()

RESET_TOKEN_TTL = timedelta(minutes=15)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResetTokenStore:
    """Expiring, single-use registry of pending resets keyed by token hash.

    All access to the underlying dict happens under one lock, so
    ``take_if_valid`` hands a given record to at most one caller even when
    several requests race on the same link. Expired records are removed
    lazily on read and opportunistically on insert.

    Args:
        ttl: Lifetime of a reset request. Defaults to 15 minutes.
        clock: Callable returning the current UTC time. Injectable for tests.
    """

    def __init__(
        self,
        ttl: timedelta = RESET_TOKEN_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.ttl = ttl
        self._clock = clock
        self._records: Dict[str, ResetRequest] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def now(self) -> datetime:
        return self._clock()

    def expiry_from(self, issued_at: datetime) -> datetime:
        return issued_at + self.ttl

    def put(self, record: ResetRequest) -> None:
        """Register a pending reset under its token hash.

        Overwriting an existing key is allowed; distinct random tokens never
        collide in practice.
        """
        now = self._clock()
        with self._lock:
            self._records[record.token_hash] = record
            swept = self._sweep_locked(now)
        if swept:
            log.debug("reset_tokens_swept", count=swept)

    def take_if_valid(
        self, token_hash: str, now: Optional[datetime] = None
    ) -> Optional[ResetRequest]:
        """Atomically remove and return a live record.

        Args:
            token_hash: Storage key computed from the presented secret
            now: Evaluation time. Defaults to the store clock.

        Returns:
            The ResetRequest if present and not expired, None otherwise.
            A present-but-expired record is removed as well.
        """
        now = now or self._clock()
        with self._lock:
            record = self._records.pop(token_hash, None)
        if record is None:
            return None
        if record.is_expired(now):
            log.info("reset_token_expired", user_id=record.user_id)
            return None
        return record

    def sweep(self, now: Optional[datetime] = None) -> int:
        """Remove every expired record.

        Returns:
            Number of records removed
        """
        now = now or self._clock()
        with self._lock:
            return self._sweep_locked(now)

    def _sweep_locked(self, now: datetime) -> int:
        expired = [key for key, rec in self._records.items() if rec.is_expired(now)]
        for key in expired:
            del self._records[key]
        return len(expired)
