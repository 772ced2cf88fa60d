"""Attempt records and derived lockout status."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AttemptState(Enum):
    """Lockout state of one identity."""

    CLEAR = "clear"
    WARNING = "warning"
    LOCKED = "locked"


@dataclass
class AttemptRecord:
    """Failed-login bookkeeping for one identity."""

    identity: str
    attempt_count: int
    last_attempt_at: datetime
    locked: bool = False

    @property
    def state(self) -> AttemptState:
        if self.locked:
            return AttemptState.LOCKED
        if self.attempt_count > 0:
            return AttemptState.WARNING
        return AttemptState.CLEAR


@dataclass(frozen=True)
class AttemptStatus:
    """Snapshot of an identity's lockout state."""

    identity: str
    attempt_count: int
    locked: bool
    captcha_required: bool
    lockout_seconds_left: int

    @property
    def state(self) -> AttemptState:
        if self.locked:
            return AttemptState.LOCKED
        if self.attempt_count > 0:
            return AttemptState.WARNING
        return AttemptState.CLEAR
