"""Failed-login tracking with lockout windows and CAPTCHA thresholds."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from authguard.modules.policy import PolicySettings

from .models import AttemptRecord, AttemptStatus
from .store import AttemptStore, InMemoryAttemptStore

if TYPE_CHECKING:
    from authguard.modules.monitor import SecurityMonitor

logger = logging.getLogger(__name__)

LockCallback = Callable[[AttemptRecord], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LoginAttemptTracker:
    """Per-identity state machine: CLEAR -> WARNING -> LOCKED -> CLEAR.

    Identities are opaque, case-sensitive keys; normalize them (for example
    lower-case emails) before calling. Lock expiry is evaluated lazily when
    the identity is next queried or fails again.
    """

    def __init__(
        self,
        settings: PolicySettings,
        store: AttemptStore | None = None,
        clock: Callable[[], datetime] = _utcnow,
        on_lock: LockCallback | None = None,
        monitor: SecurityMonitor | None = None,
    ):
        settings.validate()
        self.settings = settings
        self.store: AttemptStore = store if store is not None else InMemoryAttemptStore()
        self.clock = clock
        self.on_lock = on_lock
        self.monitor = monitor

    @property
    def lockout_window(self) -> timedelta:
        return timedelta(minutes=self.settings.lockout_duration_minutes)

    def _expired(self, record: AttemptRecord, now: datetime) -> bool:
        return record.locked and now - record.last_attempt_at >= self.lockout_window

    def record_failure(self, identity: str) -> AttemptStatus:
        """Count one failed authentication for ``identity``."""
        now = self.clock()
        with self.store.guard(identity):
            record = self.store.get(identity)
            if record is None or self._expired(record, now):
                record = AttemptRecord(identity=identity, attempt_count=0, last_attempt_at=now)
            was_locked = record.locked
            record.attempt_count += 1
            record.last_attempt_at = now
            if record.attempt_count >= self.settings.max_login_attempts:
                record.locked = True
            self.store.save(record)

        if record.locked and not was_locked:
            self._signal_lock(record)
        if self.monitor is not None:
            blocked_until = record.last_attempt_at + self.lockout_window if record.locked else None
            self.monitor.failed_login(identity, record.attempt_count, blocked_until)
        return self._status(record, now)

    def _signal_lock(self, record: AttemptRecord) -> None:
        logger.warning(
            "Identity %s locked for %d minutes after %d failed attempts",
            record.identity,
            self.settings.lockout_duration_minutes,
            record.attempt_count,
        )
        if self.monitor is not None:
            self.monitor.account_locked(
                record.identity, record.attempt_count, self.settings.lockout_duration_minutes
            )
        if self.on_lock is not None:
            try:
                self.on_lock(record)
            except Exception:
                logger.warning("Lock callback failed for %s", record.identity, exc_info=True)

    def is_locked(self, identity: str) -> bool:
        """Return True while ``identity`` is inside its lockout window."""
        now = self.clock()
        with self.store.guard(identity):
            record = self.store.get(identity)
            if record is None:
                return False
            if self._expired(record, now):
                logger.info("Lockout for %s expired", identity)
                self.store.delete(identity)
                return False
            return record.locked

    def should_require_captcha(self, identity: str) -> bool:
        """True once the failure count reaches the CAPTCHA threshold."""
        return self.attempt_count(identity) >= self.settings.captcha_threshold

    def clear(self, identity: str) -> None:
        """Forget all failures for ``identity`` (successful authentication)."""
        with self.store.guard(identity):
            self.store.delete(identity)

    def attempt_count(self, identity: str) -> int:
        self.is_locked(identity)
        record = self.store.get(identity)
        return record.attempt_count if record is not None else 0

    def get_record(self, identity: str) -> AttemptRecord | None:
        return self.store.get(identity)

    def lockout_seconds_left(self, identity: str) -> int:
        if not self.is_locked(identity):
            return 0
        record = self.store.get(identity)
        if record is None:
            return 0
        return self._seconds_left(record, self.clock())

    def _seconds_left(self, record: AttemptRecord, now: datetime) -> int:
        if not record.locked:
            return 0
        remaining = (record.last_attempt_at + self.lockout_window - now).total_seconds()
        return max(0, math.ceil(remaining))

    def status(self, identity: str) -> AttemptStatus:
        """Snapshot of lock, CAPTCHA and counter state for ``identity``."""
        self.is_locked(identity)
        record = self.store.get(identity) or AttemptRecord(
            identity=identity, attempt_count=0, last_attempt_at=self.clock()
        )
        return self._status(record, self.clock())

    def _status(self, record: AttemptRecord, now: datetime) -> AttemptStatus:
        return AttemptStatus(
            identity=record.identity,
            attempt_count=record.attempt_count,
            locked=record.locked,
            captcha_required=record.attempt_count >= self.settings.captcha_threshold,
            lockout_seconds_left=self._seconds_left(record, now),
        )
