"""AuditLogManager: persists security events to the audit database."""

import logging
import threading
from pathlib import Path

from authguard.db.audit_init import AUDIT_DB_PATH, get_audit_session, init_audit_db
from authguard.db.audit_models import AuthAuditLog
from authguard.modules.monitor import SecurityEvent

logger = logging.getLogger(__name__)


class AuditLogManager:
    """Event sink writing to ``auth_audit_logs``.

    Failures are logged and swallowed; an unavailable audit store must never
    fail a login.
    """

    def __init__(self, db_path: Path = AUDIT_DB_PATH):
        self.db_path = db_path
        self._session = None
        self._lock = threading.Lock()

    def _get_session(self):
        if self._session is None:
            try:
                init_audit_db(self.db_path)
                self._session = get_audit_session(self.db_path)
            except Exception:
                logger.warning("Failed to open audit DB", exc_info=True)
        return self._session

    def record_event(self, event: SecurityEvent) -> None:
        """Store one security event."""
        with self._lock:
            session = self._get_session()
            if session is None:
                return
            try:
                session.add(
                    AuthAuditLog(
                        created_at=event.created_at,
                        event_type=event.event_type,
                        identity=event.identity,
                        severity=event.severity.value,
                        success=event.success,
                        details=event.details,
                        event_metadata=dict(event.metadata),
                    )
                )
                session.commit()
            except Exception:
                logger.warning("Failed to record audit event", exc_info=True)
                session.rollback()

    def recent(self, limit: int = 20, event_type: str | None = None) -> list[AuthAuditLog]:
        """Return the newest events first."""
        with self._lock:
            session = self._get_session()
            if session is None:
                return []
            try:
                query = session.query(AuthAuditLog)
                if event_type:
                    query = query.filter_by(event_type=event_type)
                return (
                    query.order_by(AuthAuditLog.created_at.desc(), AuthAuditLog.id.desc())
                    .limit(limit)
                    .all()
                )
            except Exception:
                logger.warning("Failed to query audit events", exc_info=True)
                return []

    def for_identity(self, identity: str) -> list[AuthAuditLog]:
        with self._lock:
            session = self._get_session()
            if session is None:
                return []
            try:
                return (
                    session.query(AuthAuditLog)
                    .filter_by(identity=identity)
                    .order_by(AuthAuditLog.id)
                    .all()
                )
            except Exception:
                logger.warning("Failed to query audit events", exc_info=True)
                return []

    def count(self) -> int:
        with self._lock:
            session = self._get_session()
            if session is None:
                return 0
            try:
                return session.query(AuthAuditLog).count()
            except Exception:
                logger.warning("Failed to count audit events", exc_info=True)
                return 0

    def clear(self) -> None:
        """Delete every stored event."""
        with self._lock:
            session = self._get_session()
            if session is None:
                return
            try:
                session.query(AuthAuditLog).delete()
                session.commit()
            except Exception:
                logger.warning("Failed to clear audit DB", exc_info=True)
                session.rollback()

    def close(self) -> None:
        with self._lock:
            if self._session is not None:
                self._session.close()
                self._session = None
