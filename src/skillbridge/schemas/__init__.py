"""Pydantic schema definitions for profiles, evaluations and configuration."""

from __future__ import annotations

from .evaluation import (
    ELIGIBILITY_VALUES,
    Eligibility,
    Evaluation,
    EvaluationDraft,
    EvaluationSource,
    ProfileStatus,
    classify_eligibility,
    clamp_score,
)
from .profile import NOT_PROVIDED, ProfileInput

__all__ = [
    "ELIGIBILITY_VALUES",
    "Eligibility",
    "Evaluation",
    "EvaluationDraft",
    "EvaluationSource",
    "NOT_PROVIDED",
    "ProfileInput",
    "ProfileStatus",
    "classify_eligibility",
    "clamp_score",
]
