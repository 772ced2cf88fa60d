"""Combined policy and breach verdict for new passwords."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from authguard.modules.breach import BreachLookupClient
from authguard.modules.monitor import SecurityMonitor
from authguard.modules.policy import PolicySettings, StrengthLabel, evaluate

logger = logging.getLogger(__name__)

LEAKED_ISSUE = "Password found in known data breaches"


@dataclass(frozen=True)
class PasswordVerdict:
    """Whether a password may be set, and why not."""

    valid: bool
    issues: tuple[str, ...]
    score: int
    strength: StrengthLabel
    leaked: bool


class PasswordGuard:
    """Run the policy rules, then the breach lookup, on a candidate password."""

    def __init__(
        self,
        settings: PolicySettings,
        breach_client: BreachLookupClient | None = None,
        monitor: SecurityMonitor | None = None,
    ):
        self.settings = settings
        self.breach_client = breach_client or BreachLookupClient.from_settings(
            settings, monitor=monitor
        )
        self.monitor = monitor

    async def check(self, password: str, identity: str | None = None) -> PasswordVerdict:
        result = evaluate(password, self.settings)
        if not result.valid:
            # Weak passwords are rejected before anything leaves the process.
            return PasswordVerdict(
                valid=False,
                issues=result.issues,
                score=result.score,
                strength=result.strength,
                leaked=False,
            )

        leaked = await self.breach_client.is_leaked(password)
        issues = result.issues
        if leaked:
            logger.info("Rejected breached password for %s", identity or "anonymous user")
            issues = (*issues, LEAKED_ISSUE)
            if self.monitor is not None:
                self.monitor.password_breach(identity)

        return PasswordVerdict(
            valid=not issues,
            issues=issues,
            score=result.score,
            strength=result.strength,
            leaked=leaked,
        )
