"""Structured security events for lockouts and breach checks."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Protocol

logger = logging.getLogger("authguard.security")


class Severity(Enum):
    """Security event severity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def log_level(self) -> int:
        return _LOG_LEVELS[self]


_LOG_LEVELS = {
    Severity.LOW: logging.INFO,
    Severity.MEDIUM: logging.WARNING,
    Severity.HIGH: logging.ERROR,
    Severity.CRITICAL: logging.CRITICAL,
}


@dataclass
class SecurityEvent:
    """A single security-relevant occurrence."""

    event_type: str
    details: str
    severity: Severity
    identity: str | None = None
    success: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class EventSink(Protocol):
    def record_event(self, event: SecurityEvent) -> None: ...


class SecurityMonitor:
    """Fan security events out to the log and any registered sinks."""

    def __init__(self, sinks: list[EventSink] | None = None):
        self.sinks: list[EventSink] = list(sinks or [])

    def add_sink(self, sink: EventSink) -> None:
        self.sinks.append(sink)

    def report(self, event: SecurityEvent) -> None:
        logger.log(
            event.severity.log_level,
            "%s: %s",
            event.event_type,
            event.details,
            extra={"security_event": event.event_type, "identity": event.identity},
        )
        for sink in self.sinks:
            try:
                sink.record_event(event)
            except Exception:
                logger.warning("Security event sink %r failed", sink, exc_info=True)

    def failed_login(
        self,
        identity: str,
        attempt_count: int,
        blocked_until: datetime | None = None,
    ) -> SecurityEvent:
        """Report a failed login, graded by how many attempts have piled up."""
        severity = Severity.LOW
        details = f"Failed login attempt for {identity}"
        if attempt_count >= 10:
            severity = Severity.HIGH
            details = f"High number of failed login attempts ({attempt_count}) for {identity}"
        elif attempt_count >= 5:
            severity = Severity.MEDIUM
            details = f"Multiple failed login attempts ({attempt_count}) for {identity}"

        if blocked_until is not None:
            severity = Severity.HIGH
            details += f". Account temporarily blocked until {blocked_until.isoformat()}"

        event = SecurityEvent(
            event_type="failed_login",
            details=details,
            severity=severity,
            identity=identity,
            metadata={
                "attempt_count": attempt_count,
                "blocked_until": blocked_until.isoformat() if blocked_until else None,
            },
        )
        self.report(event)
        return event

    def account_locked(
        self, identity: str, attempt_count: int, lockout_minutes: int
    ) -> SecurityEvent:
        event = SecurityEvent(
            event_type="account_locked",
            details=(
                f"Too many failed attempts for {identity}; "
                f"locked for {lockout_minutes} minutes"
            ),
            severity=Severity.HIGH,
            identity=identity,
            metadata={"attempt_count": attempt_count, "lockout_minutes": lockout_minutes},
        )
        self.report(event)
        return event

    def password_breach(self, identity: str | None) -> SecurityEvent:
        who = identity or "unknown user"
        event = SecurityEvent(
            event_type="password_breach",
            details=f"Password for {who} was found in known data breaches",
            severity=Severity.CRITICAL,
            identity=identity,
            metadata={"action_required": "immediate_password_change"},
        )
        self.report(event)
        return event

    def breach_lookup_failed(self, reason: str) -> SecurityEvent:
        event = SecurityEvent(
            event_type="breach_lookup_failed",
            details=f"Breach lookup unavailable, password allowed: {reason}",
            severity=Severity.LOW,
            metadata={"reason": reason},
        )
        self.report(event)
        return event
