"""Audit database initialization (~/.authguard/audit.db)."""

import os
from functools import lru_cache
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from authguard.db.audit_models import AuditBase

AUDIT_DB_PATH = Path.home() / ".authguard" / "audit.db"


@lru_cache(maxsize=None)
def _engine_for_url(url: str):
    # One engine per URL; an in-memory sqlite database lives only as long as its engine.
    return create_engine(url, echo=False)


def _get_engine(db_path: Path = AUDIT_DB_PATH):
    """Return the shared engine, preferring AUTHGUARD_AUDIT_DB_URL if set."""
    url = os.environ.get("AUTHGUARD_AUDIT_DB_URL", "")
    if not url:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        url = f"sqlite:///{db_path}"
    return _engine_for_url(url)


def init_audit_db(db_path: Path = AUDIT_DB_PATH) -> None:
    """Create the audit database and tables."""
    engine = _get_engine(db_path)
    AuditBase.metadata.create_all(engine)


def get_audit_session(db_path: Path = AUDIT_DB_PATH):
    """Return a new SQLAlchemy session for the audit database."""
    engine = _get_engine(db_path)
    Session = sessionmaker(bind=engine)
    return Session()
