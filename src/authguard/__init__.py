"""authguard package."""

from authguard.errors import InvalidConfiguration, TransientLookupFailure
from authguard.modules.breach import BreachLookupClient
from authguard.modules.guard import PasswordGuard, PasswordVerdict
from authguard.modules.lockout import LoginAttemptTracker
from authguard.modules.policy import EvaluationResult, PolicySettings, evaluate

__all__ = [
    "BreachLookupClient",
    "EvaluationResult",
    "InvalidConfiguration",
    "LoginAttemptTracker",
    "PasswordGuard",
    "PasswordVerdict",
    "PolicySettings",
    "TransientLookupFailure",
    "evaluate",
]
