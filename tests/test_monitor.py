"""Tests for security events and the audit log."""

import logging
from datetime import UTC, datetime

import pytest

from authguard.db.audit_init import _get_engine, get_audit_session, init_audit_db
from authguard.db.audit_models import AuthAuditLog
from authguard.modules.audit import AuditLogManager
from authguard.modules.monitor import SecurityEvent, SecurityMonitor, Severity


class _RecordingSink:
    def __init__(self):
        self.events = []

    def record_event(self, event) -> None:
        self.events.append(event)


class _BrokenSink:
    def record_event(self, event) -> None:
        raise RuntimeError("sink offline")


@pytest.fixture
def audit_db_path(tmp_path, monkeypatch):
    """Create a temporary audit database."""
    monkeypatch.delenv("AUTHGUARD_AUDIT_DB_URL", raising=False)
    db_path = tmp_path / "audit.db"
    init_audit_db(db_path)
    return db_path


@pytest.fixture
def audit_manager(audit_db_path):
    mgr = AuditLogManager(db_path=audit_db_path)
    yield mgr
    mgr.close()


class TestSecurityMonitor:
    """Tests for event grading and fan-out."""

    @pytest.mark.parametrize(
        ("attempts", "severity"),
        [(1, Severity.LOW), (4, Severity.LOW), (5, Severity.MEDIUM), (10, Severity.HIGH)],
    )
    def test_failed_login_severity(self, attempts: int, severity: Severity) -> None:
        event = SecurityMonitor().failed_login("a@x.com", attempts)
        assert event.severity is severity
        assert event.metadata["attempt_count"] == attempts

    def test_blocked_failed_login_is_high(self) -> None:
        until = datetime(2026, 1, 1, 12, 15, tzinfo=UTC)
        event = SecurityMonitor().failed_login("a@x.com", 1, blocked_until=until)
        assert event.severity is Severity.HIGH
        assert "blocked until" in event.details

    def test_password_breach_is_critical(self) -> None:
        event = SecurityMonitor().password_breach("a@x.com")
        assert event.severity is Severity.CRITICAL
        assert event.metadata["action_required"] == "immediate_password_change"

    def test_events_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="authguard")
        SecurityMonitor().account_locked("a@x.com", 3, 15)
        assert any(
            r.name == "authguard.security" and r.levelno == logging.ERROR for r in caplog.records
        )

    def test_sink_errors_are_swallowed(self) -> None:
        good = _RecordingSink()
        monitor = SecurityMonitor([_BrokenSink(), good])
        monitor.breach_lookup_failed("timeout")
        assert len(good.events) == 1


class TestAuditLogManager:
    """Tests for the SQLAlchemy audit sink."""

    def test_init_creates_db(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv("AUTHGUARD_AUDIT_DB_URL", raising=False)
        db_path = tmp_path / "fresh.db"
        init_audit_db(db_path)
        assert db_path.exists()
        session = get_audit_session(db_path)
        assert session.query(AuthAuditLog).count() == 0
        session.close()

    def test_record_and_query(self, audit_manager: AuditLogManager) -> None:
        audit_manager.record_event(
            SecurityEvent(
                event_type="account_locked",
                details="locked",
                severity=Severity.HIGH,
                identity="a@x.com",
                metadata={"attempt_count": 3},
            )
        )
        rows = audit_manager.recent()
        assert len(rows) == 1
        assert rows[0].event_type == "account_locked"
        assert rows[0].severity == "high"
        assert rows[0].event_metadata == {"attempt_count": 3}
        assert audit_manager.for_identity("a@x.com")[0].details == "locked"

    def test_recent_filters_and_limits(self, audit_manager: AuditLogManager) -> None:
        monitor = SecurityMonitor([audit_manager])
        for attempt in range(1, 4):
            monitor.failed_login("a@x.com", attempt)
        monitor.password_breach("b@x.com")
        assert audit_manager.count() == 4
        assert len(audit_manager.recent(limit=2)) == 2
        breaches = audit_manager.recent(event_type="password_breach")
        assert [r.identity for r in breaches] == ["b@x.com"]

    def test_clear(self, audit_manager: AuditLogManager) -> None:
        SecurityMonitor([audit_manager]).password_breach(None)
        audit_manager.clear()
        assert audit_manager.count() == 0

    def test_in_memory_url_keeps_events(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("AUTHGUARD_AUDIT_DB_URL", "sqlite://")
        mgr = AuditLogManager(db_path=tmp_path / "unused.db")
        mgr.clear()
        SecurityMonitor([mgr]).password_breach("a@x.com")
        assert mgr.count() == 1
        mgr.clear()
        mgr.close()

    def test_init_and_session_share_engine(self, audit_db_path) -> None:
        session = get_audit_session(audit_db_path)
        assert session.get_bind() is _get_engine(audit_db_path)
        session.close()

    def test_unwritable_db_does_not_raise(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("AUTHGUARD_AUDIT_DB_URL", "notadialect://nowhere")
        mgr = AuditLogManager(db_path=tmp_path / "unused.db")
        mgr.record_event(SecurityEvent("failed_login", "x", Severity.LOW))
        assert mgr.recent() == []
        assert mgr.count() == 0
