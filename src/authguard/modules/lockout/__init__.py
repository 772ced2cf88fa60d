"""Login attempt tracking and lockout."""

from .models import AttemptRecord, AttemptState, AttemptStatus
from .store import AttemptStore, InMemoryAttemptStore
from .tracker import LoginAttemptTracker

__all__ = [
    "AttemptRecord",
    "AttemptState",
    "AttemptStatus",
    "AttemptStore",
    "InMemoryAttemptStore",
    "LoginAttemptTracker",
]
