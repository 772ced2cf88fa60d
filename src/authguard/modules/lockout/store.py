"""Keyed storage for attempt records."""

import threading
from contextlib import AbstractContextManager
from dataclasses import replace
from datetime import datetime
from typing import Protocol

from .models import AttemptRecord

DEFAULT_STRIPES = 64


class AttemptStore(Protocol):
    """Storage behind LoginAttemptTracker.

    ``guard(identity)`` must serialize read-modify-write sequences for the
    same identity. A durable or shared backend implements the same methods.
    """

    def get(self, identity: str) -> AttemptRecord | None: ...

    def save(self, record: AttemptRecord) -> None: ...

    def delete(self, identity: str) -> None: ...

    def guard(self, identity: str) -> AbstractContextManager: ...


class InMemoryAttemptStore:
    """Process-local store using lock striping.

    Records for one identity always share a stripe, so their updates are
    serialized; other identities usually land on other stripes.

    Records are only removed by a successful login, lock expiry or
    :meth:`prune`. Identities that fail a few times and never return stay
    in memory until pruned.
    """

    def __init__(self, stripes: int = DEFAULT_STRIPES):
        if stripes < 1:
            raise ValueError("stripes must be >= 1")
        self._records: dict[str, AttemptRecord] = {}
        self._locks = [threading.RLock() for _ in range(stripes)]

    def guard(self, identity: str) -> AbstractContextManager:
        return self._locks[hash(identity) % len(self._locks)]

    def get(self, identity: str) -> AttemptRecord | None:
        record = self._records.get(identity)
        return replace(record) if record is not None else None

    def save(self, record: AttemptRecord) -> None:
        self._records[record.identity] = replace(record)

    def delete(self, identity: str) -> None:
        self._records.pop(identity, None)

    def __len__(self) -> int:
        return len(self._records)

    def identities(self) -> list[str]:
        return list(self._records)

    def prune(self, older_than: datetime) -> int:
        """Drop records whose last failure is before ``older_than``.

        Pass a cutoff at least one lockout window in the past so active locks
        are kept.
        """
        removed = 0
        for identity in self.identities():
            with self.guard(identity):
                record = self._records.get(identity)
                if record is None or record.last_attempt_at >= older_than:
                    continue
                del self._records[identity]
                removed += 1
        return removed
