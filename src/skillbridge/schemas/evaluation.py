"""Evaluation result schemas and eligibility thresholds."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Eligibility = Literal["Eligible", "Needs Improvement", "Not Ready"]
EvaluationSource = Literal["generative", "heuristic"]
ProfileStatus = Literal["draft", "submitted", "evaluated"]

ELIGIBILITY_VALUES: tuple[str, ...] = get_args(Eligibility)

ELIGIBLE_THRESHOLD = 75
NEEDS_IMPROVEMENT_THRESHOLD = 50


def classify_eligibility(score: float) -> Eligibility:
    """Map a readiness score onto the three eligibility buckets."""
    if score >= ELIGIBLE_THRESHOLD:
        return "Eligible"
    if score >= NEEDS_IMPROVEMENT_THRESHOLD:
        return "Needs Improvement"
    return "Not Ready"


def clamp_score(score: float) -> int:
    return int(round(min(100.0, max(0.0, float(score)))))


class Evaluation(BaseModel):
    """Validated evaluation handed to callers and stores."""

    strengths: list[str] = Field(min_length=1)
    weaknesses: list[str] = Field(min_length=1)
    suggestions: list[str] = Field(min_length=1)
    readiness_score: int = Field(ge=0, le=100)
    eligibility: Eligibility
    evaluated_at: datetime
    source: EvaluationSource

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys and an ISO-8601 timestamp."""
        return self.model_dump(mode="json", by_alias=True)


class EvaluationDraft(BaseModel):
    """Unnormalized evaluation produced by either the model or the rule scorer."""

    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    readiness_score: float
    eligibility: Eligibility | None = None

    def is_consistent(self) -> bool:
        """True when eligibility is absent or agrees with the clamped score."""
        if self.eligibility is None:
            return True
        return self.eligibility == classify_eligibility(clamp_score(self.readiness_score))

    def finalize(self, *, source: EvaluationSource, evaluated_at: datetime) -> Evaluation:
        score = clamp_score(self.readiness_score)
        # Present eligibility passes through even when it disagrees with the score.
        eligibility = self.eligibility or classify_eligibility(score)
        return Evaluation(
            strengths=list(self.strengths),
            weaknesses=list(self.weaknesses),
            suggestions=list(self.suggestions),
            readiness_score=score,
            eligibility=eligibility,
            evaluated_at=evaluated_at,
            source=source,
        )
