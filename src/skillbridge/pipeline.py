"""Profile submission workflow around the stateless evaluation engine."""

from __future__ import annotations

import json
from pathlib import Path

import pendulum
import structlog

from . import __version__
from .core import EvaluationEngine, EvaluationMode
from .errors import AlreadyEvaluatedError, MalformedResponseError, UpstreamError
from .schemas import Evaluation, ProfileInput
from .store import EvaluationStore


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")


class EvaluationService:
    """Submit profiles once, evaluate them and persist the result.

    The engine raises and never retries; this service owns the retry and
    fallback policy and enforces one evaluation per user through a
    compare-and-set on the profile status.
    """

    def __init__(
        self,
        *,
        engine: EvaluationEngine,
        store: EvaluationStore,
        max_retries: int = 1,
        fallback_to_heuristic: bool = False,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self._engine = engine
        self._store = store
        self._max_retries = max_retries
        self._fallback = fallback_to_heuristic
        self._audit = audit_logger
        self._logger = structlog.get_logger(__name__)

    def submit(
        self,
        user_id: str,
        profile: ProfileInput,
        mode: EvaluationMode = "generative",
    ) -> Evaluation:
        if not self._store.compare_and_set_status(user_id, "draft", "submitted"):
            status = self._store.get_profile_status(user_id)
            raise AlreadyEvaluatedError(f"Profile {user_id!r} is already {status}")

        try:
            evaluation = self._evaluate(profile, mode)
            self._store.save(user_id, evaluation)
        except Exception:
            self._store.update_profile_status(user_id, "draft")
            raise

        self._store.update_profile_status(user_id, "evaluated")
        self._logger.info(
            "service.evaluated",
            user_id=user_id,
            source=evaluation.source,
            readiness_score=evaluation.readiness_score,
            eligibility=evaluation.eligibility,
        )
        if self._audit:
            self._audit.append(
                {
                    "user_id": user_id,
                    "student_name": profile.full_name,
                    "requested_mode": mode,
                    "evaluation": evaluation.to_wire(),
                    "timestamp": pendulum.now().to_iso8601_string(),
                    "app_version": __version__,
                }
            )
        return evaluation

    def reset(self, user_id: str) -> None:
        """Discard the stored evaluation so the profile can be submitted again."""
        self._store.delete(user_id)
        self._store.update_profile_status(user_id, "draft")
        self._logger.info("service.reset", user_id=user_id)

    def get(self, user_id: str) -> Evaluation | None:
        return self._store.get(user_id)

    def list_evaluations(self) -> dict[str, Evaluation]:
        return self._store.all()

    def _evaluate(self, profile: ProfileInput, mode: EvaluationMode) -> Evaluation:
        if mode == "heuristic":
            return self._engine.evaluate(profile, "heuristic")

        attempt = 0
        while True:
            try:
                return self._engine.evaluate(profile, "generative")
            except UpstreamError as exc:
                if attempt < self._max_retries:
                    attempt += 1
                    self._logger.warning("service.retry", attempt=attempt, error=str(exc))
                    continue
                if not self._fallback:
                    raise
                self._logger.warning("service.fallback", reason="upstream", error=str(exc))
                return self._engine.evaluate(profile, "heuristic")
            except MalformedResponseError as exc:
                if not self._fallback:
                    raise
                self._logger.warning("service.fallback", reason="malformed", error=str(exc))
                return self._engine.evaluate(profile, "heuristic")
