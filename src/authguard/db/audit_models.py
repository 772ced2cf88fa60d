"""Audit log models for security events."""

from datetime import UTC, datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

AuditBase = declarative_base()


class AuthAuditLog(AuditBase):
    """One recorded security event."""

    __tablename__ = "auth_audit_logs"

    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC))

    event_type = Column(String, nullable=False, index=True)
    identity = Column(String, nullable=True, index=True)
    severity = Column(String, nullable=False)  # low, medium, high, critical
    success = Column(Boolean, default=False)
    details = Column(Text, nullable=True)
    event_metadata = Column("metadata", JSON, default=dict)
