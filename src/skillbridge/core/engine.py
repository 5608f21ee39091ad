"""Evaluation orchestration across the generative and heuristic paths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, get_args

import pendulum
import structlog

from ..errors import ValidationError
from ..llm import ModelGateway
from ..schemas import Evaluation, EvaluationDraft, ProfileInput, clamp_score, classify_eligibility
from .heuristic import HeuristicScorer
from .prompt import PromptBuilder
from .validator import ResponseValidator

EvaluationMode = Literal["generative", "heuristic"]

EVALUATION_MODES: tuple[str, ...] = get_args(EvaluationMode)


@dataclass
class EngineConfig:
    """Minimum list sizes guaranteed on every returned evaluation."""

    min_strengths: int = 1
    min_weaknesses: int = 1
    min_suggestions: int = 1
    suggestion_fillers: tuple[str, ...] = (
        "Contribute to open-source projects",
        "Build more real-world projects to strengthen portfolio",
        "Practice technical interviews and system design",
    )


class EvaluationEngine:
    """Stateless entry point turning a profile into a normalized evaluation."""

    def __init__(
        self,
        *,
        gateway: ModelGateway,
        scorer: HeuristicScorer | None = None,
        prompt_builder: PromptBuilder | None = None,
        validator: ResponseValidator | None = None,
        config: EngineConfig | None = None,
        now_provider: Callable[[], Any] | None = None,
    ) -> None:
        self._gateway = gateway
        self._scorer = scorer or HeuristicScorer()
        self._prompts = prompt_builder or PromptBuilder()
        self._validator = validator or ResponseValidator()
        self._config = config or EngineConfig()
        self._now_provider = now_provider or pendulum.now
        self._logger = structlog.get_logger(__name__)

    @property
    def model_identifier(self) -> str:
        return self._gateway.model

    def evaluate(self, profile: ProfileInput, mode: EvaluationMode = "generative") -> Evaluation:
        """Evaluate ``profile`` with the explicitly chosen ``mode``.

        Raises ``ValidationError`` for incomplete profiles or unknown modes,
        ``UpstreamError`` when the backend call fails and
        ``MalformedResponseError`` when its output breaks the response
        contract. The heuristic path is never used as an implicit fallback.
        """
        if mode not in EVALUATION_MODES:
            raise ValidationError(f"Unsupported evaluation mode: {mode!r}", fields=["mode"])
        missing = profile.missing_fields()
        if missing:
            raise ValidationError(
                "Missing required fields: " + ", ".join(missing),
                fields=missing,
            )

        if mode == "generative":
            draft = self._generate(profile)
        else:
            draft = self._scorer.assess(profile)

        evaluation = self._finalize(draft, mode)
        self._logger.info(
            "engine.evaluate",
            source=evaluation.source,
            readiness_score=evaluation.readiness_score,
            eligibility=evaluation.eligibility,
        )
        return evaluation

    def _generate(self, profile: ProfileInput) -> EvaluationDraft:
        prompt = self._prompts.build(profile)
        raw_text = self._gateway.invoke(prompt)
        return self._validator.parse(raw_text)

    def _finalize(self, draft: EvaluationDraft, mode: EvaluationMode) -> Evaluation:
        if not draft.is_consistent():
            self._logger.warning(
                "engine.eligibility_mismatch",
                source=mode,
                readiness_score=draft.readiness_score,
                eligibility=draft.eligibility,
                expected=classify_eligibility(clamp_score(draft.readiness_score)),
            )
        cfg = self._config
        padded = draft.model_copy(
            update={
                "strengths": self._scorer.fill(
                    draft.strengths, self._scorer.config.strength_fillers, cfg.min_strengths
                ),
                "weaknesses": self._scorer.fill(
                    draft.weaknesses, self._scorer.config.weakness_fillers, cfg.min_weaknesses
                ),
                "suggestions": self._scorer.fill(
                    draft.suggestions, cfg.suggestion_fillers, cfg.min_suggestions
                ),
            }
        )
        return padded.finalize(source=mode, evaluated_at=self._now_provider())
