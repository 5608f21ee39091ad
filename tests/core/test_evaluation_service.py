from __future__ import annotations

import json
import random
from pathlib import Path

import pytest

from skillbridge.core import EvaluationEngine, HeuristicScorer
from skillbridge.errors import AlreadyEvaluatedError, MalformedResponseError, UpstreamError, ValidationError
from skillbridge.pipeline import AuditLogger, EvaluationService
from skillbridge.schemas import ProfileInput
from skillbridge.store import InMemoryEvaluationStore

GOOD_RESPONSE = json.dumps(
    {
        "strengths": ["a", "b", "c"],
        "weaknesses": ["x", "y"],
        "suggestions": ["s1", "s2", "s3"],
        "readinessScore": 77,
        "eligibility": "Eligible",
    }
)

PROFILE = ProfileInput(full_name="Ann", skills="react, node.js, sql")


class ScriptedGateway:
    model = "scripted"

    def __init__(self, *outcomes):
        self._outcomes = list(outcomes)
        self.calls = 0

    def invoke(self, prompt: str) -> str:
        self.calls += 1
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def build_service(gateway, **kwargs) -> tuple[EvaluationService, InMemoryEvaluationStore]:
    store = InMemoryEvaluationStore()
    engine = EvaluationEngine(gateway=gateway, scorer=HeuristicScorer(rng=random.Random(0)))
    return EvaluationService(engine=engine, store=store, **kwargs), store


def test_submit_saves_and_marks_evaluated():
    service, store = build_service(ScriptedGateway(GOOD_RESPONSE))

    evaluation = service.submit("u1", PROFILE)

    assert evaluation.readiness_score == 77
    assert store.get("u1") == evaluation
    assert store.get_profile_status("u1") == "evaluated"


def test_second_submission_is_rejected():
    gateway = ScriptedGateway(GOOD_RESPONSE, GOOD_RESPONSE)
    service, _ = build_service(gateway)
    service.submit("u1", PROFILE)

    with pytest.raises(AlreadyEvaluatedError):
        service.submit("u1", PROFILE)
    assert gateway.calls == 1


def test_reset_allows_resubmission():
    service, store = build_service(ScriptedGateway(GOOD_RESPONSE, GOOD_RESPONSE))
    service.submit("u1", PROFILE)

    service.reset("u1")

    assert store.get("u1") is None
    assert store.get_profile_status("u1") == "draft"
    assert service.submit("u1", PROFILE).source == "generative"


def test_upstream_errors_are_retried_then_succeed():
    gateway = ScriptedGateway(UpstreamError("flaky"), GOOD_RESPONSE)
    service, _ = build_service(gateway, max_retries=1)

    evaluation = service.submit("u1", PROFILE)

    assert gateway.calls == 2
    assert evaluation.source == "generative"


def test_exhausted_retries_propagate_and_restore_draft():
    gateway = ScriptedGateway(UpstreamError("down"), UpstreamError("down"))
    service, store = build_service(gateway, max_retries=1)

    with pytest.raises(UpstreamError):
        service.submit("u1", PROFILE)
    assert store.get_profile_status("u1") == "draft"
    assert store.get("u1") is None


def test_fallback_to_heuristic_after_upstream_failure():
    gateway = ScriptedGateway(UpstreamError("down"))
    service, store = build_service(gateway, max_retries=0, fallback_to_heuristic=True)

    evaluation = service.submit("u1", PROFILE)

    assert evaluation.source == "heuristic"
    assert evaluation.readiness_score == 90
    assert store.get_profile_status("u1") == "evaluated"


def test_malformed_response_is_not_retried():
    gateway = ScriptedGateway("no json here", GOOD_RESPONSE)
    service, _ = build_service(gateway, max_retries=3)

    with pytest.raises(MalformedResponseError):
        service.submit("u1", PROFILE)
    assert gateway.calls == 1


def test_malformed_response_falls_back_when_enabled():
    service, _ = build_service(ScriptedGateway("{}"), fallback_to_heuristic=True)

    assert service.submit("u1", PROFILE).source == "heuristic"


def test_validation_error_is_not_retried():
    gateway = ScriptedGateway(GOOD_RESPONSE)
    service, store = build_service(gateway, max_retries=3, fallback_to_heuristic=True)

    with pytest.raises(ValidationError):
        service.submit("u1", ProfileInput(full_name="Bo", skills=""))
    assert gateway.calls == 0
    assert store.get_profile_status("u1") == "draft"


def test_audit_log_records_each_submission(tmp_path: Path):
    audit_path = tmp_path / "audit" / "evaluations.jsonl"
    service, _ = build_service(ScriptedGateway(GOOD_RESPONSE), audit_logger=AuditLogger(audit_path))

    service.submit("u1", PROFILE)

    lines = audit_path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["user_id"] == "u1"
    assert record["student_name"] == "Ann"
    assert record["evaluation"]["readinessScore"] == 77
    assert record["evaluation"]["source"] == "generative"


def test_list_evaluations_returns_all_users():
    service, _ = build_service(ScriptedGateway(GOOD_RESPONSE))
    service.submit("u1", PROFILE)
    service.submit("u2", PROFILE, mode="heuristic")

    assert sorted(service.list_evaluations()) == ["u1", "u2"]
    assert service.get("u2").source == "heuristic"
