"""Password strength scoring and policy rule checks."""

import string
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .settings import PolicySettings

SYMBOLS = frozenset(string.punctuation)

SIGNAL_COUNT = 6


class StrengthLabel(Enum):
    """Ordinal strength bands shown next to a password field."""

    VERY_WEAK = "very_weak"
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class StrengthBands:
    """Minimum score for each label above ``very_weak``."""

    weak: int = 40
    medium: int = 60
    strong: int = 80


DEFAULT_BANDS = StrengthBands()


@dataclass(frozen=True)
class StrengthSignals:
    """The six independent strength signals."""

    length_8: bool
    length_12: bool
    has_upper: bool
    has_lower: bool
    has_digit: bool
    has_symbol: bool

    @classmethod
    def of(cls, password: str) -> "StrengthSignals":
        return cls(
            length_8=len(password) >= 8,
            length_12=len(password) >= 12,
            has_upper=any(ch.isupper() for ch in password),
            has_lower=any(ch.islower() for ch in password),
            has_digit=any(ch.isdecimal() for ch in password),
            has_symbol=any(ch in SYMBOLS for ch in password),
        )

    @property
    def satisfied(self) -> int:
        return sum(
            (
                self.length_8,
                self.length_12,
                self.has_upper,
                self.has_lower,
                self.has_digit,
                self.has_symbol,
            )
        )

    @property
    def score(self) -> int:
        return self.satisfied * 100 // SIGNAL_COUNT


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of checking one password against a policy."""

    valid: bool
    issues: tuple[str, ...]
    score: int
    strength: StrengthLabel
    signals: StrengthSignals


def strength_label(score: int, bands: StrengthBands = DEFAULT_BANDS) -> StrengthLabel:
    """Map a 0-100 score to its display label."""
    if score >= bands.strong:
        return StrengthLabel.STRONG
    if score >= bands.medium:
        return StrengthLabel.MEDIUM
    if score >= bands.weak:
        return StrengthLabel.WEAK
    return StrengthLabel.VERY_WEAK


def evaluate(
    password: str,
    settings: PolicySettings | Mapping[str, Any],
    bands: StrengthBands = DEFAULT_BANDS,
) -> EvaluationResult:
    """Check ``password`` against every rule in ``settings``.

    All violated rules are reported, in the order length, uppercase,
    lowercase, numbers, symbols. A weak password is reported in the result;
    only malformed settings raise (InvalidConfiguration).
    """
    if not isinstance(settings, PolicySettings):
        settings = PolicySettings.from_mapping(settings)
    else:
        settings.validate()

    signals = StrengthSignals.of(password)
    issues: list[str] = []

    if len(password) < settings.min_length:
        issues.append(f"Password must be at least {settings.min_length} characters long")
    if settings.require_uppercase and not signals.has_upper:
        issues.append("Password must contain at least one uppercase letter")
    if settings.require_lowercase and not signals.has_lower:
        issues.append("Password must contain at least one lowercase letter")
    if settings.require_numbers and not signals.has_digit:
        issues.append("Password must contain at least one number")
    if settings.require_symbols and not signals.has_symbol:
        issues.append("Password must contain at least one symbol")

    score = signals.score
    return EvaluationResult(
        valid=not issues,
        issues=tuple(issues),
        score=score,
        strength=strength_label(score, bands),
        signals=signals,
    )
