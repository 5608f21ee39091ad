"""Validation of untrusted generative-model output."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from ..errors import MalformedResponseError
from ..schemas import Eligibility, EvaluationDraft


class ModelResponsePayload(BaseModel):
    """Exact response contract the model is instructed to emit."""

    strengths: list[StrictStr] = Field(min_length=1)
    weaknesses: list[StrictStr] = Field(min_length=1)
    suggestions: list[StrictStr] = Field(min_length=1)
    readiness_score: float = Field(alias="readinessScore", allow_inf_nan=False)
    eligibility: Eligibility

    model_config = ConfigDict(extra="ignore", strict=True)


class ResponseValidator:
    """Extract and validate an evaluation object from raw model text."""

    def parse(self, raw_text: str) -> EvaluationDraft:
        span = self.extract_object(raw_text)
        if span is None:
            raise MalformedResponseError("No JSON object found in model response")
        try:
            data = json.loads(span)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(f"Invalid JSON in model response: {exc}") from exc
        return self.validate(data)

    @staticmethod
    def validate(data: Any) -> EvaluationDraft:
        if not isinstance(data, dict):
            raise MalformedResponseError("Model response must be a JSON object")
        try:
            payload = ModelResponsePayload.model_validate(data)
        except PydanticValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise MalformedResponseError(f"Model response failed validation: {problems}") from exc
        return EvaluationDraft(
            strengths=list(payload.strengths),
            weaknesses=list(payload.weaknesses),
            suggestions=list(payload.suggestions),
            readiness_score=payload.readiness_score,
            eligibility=payload.eligibility,
        )

    @staticmethod
    def extract_object(text: str | None) -> str | None:
        """Return the first balanced ``{...}`` span, honouring JSON string quoting."""
        if not text:
            return None
        start = text.find("{")
        if start < 0:
            return None

        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start : index + 1]
        return None
