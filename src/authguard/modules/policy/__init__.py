"""Password policy settings and evaluation."""

from .evaluator import (
    DEFAULT_BANDS,
    SYMBOLS,
    EvaluationResult,
    StrengthBands,
    StrengthLabel,
    StrengthSignals,
    evaluate,
    strength_label,
)
from .settings import COLUMN_ALIASES, PolicySettings

__all__ = [
    "COLUMN_ALIASES",
    "DEFAULT_BANDS",
    "EvaluationResult",
    "PolicySettings",
    "StrengthBands",
    "StrengthLabel",
    "StrengthSignals",
    "SYMBOLS",
    "evaluate",
    "strength_label",
]
