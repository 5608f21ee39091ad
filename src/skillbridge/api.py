"""FastAPI boundary exposing the evaluation engine over HTTP."""

from __future__ import annotations

from typing import Any, Optional

import pendulum
import structlog
from fastapi import APIRouter, Body, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .core import EvaluationEngine, EvaluationMode
from .errors import SkillBridgeError, ValidationError
from .schemas import Evaluation, ProfileInput

HEURISTIC_MODEL_LABEL = "heuristic-rules"

router = APIRouter()
logger = structlog.get_logger(__name__)


def get_engine(request: Request) -> EvaluationEngine:
    return request.app.state.engine


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "error": message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("api.invalid_request", errors=len(exc.errors()))
    return _bad_request("Invalid request: body must be a JSON object and mode one of generative, heuristic")


def serialize_evaluation(evaluation: Evaluation, model_identifier: str) -> dict[str, Any]:
    payload = evaluation.to_wire()
    payload["model"] = model_identifier if evaluation.source == "generative" else HEURISTIC_MODEL_LABEL
    return payload


@router.get("/health", tags=["Health"])
async def health() -> dict[str, str]:
    return {
        "status": "ok",
        "message": "SkillBridge evaluation backend is running",
        "timestamp": pendulum.now("UTC").to_iso8601_string(),
    }


@router.post("/api/evaluate", tags=["Evaluation"])
def evaluate(
    request: Request,
    body: Any = Body(default=None),
    mode: Optional[EvaluationMode] = Query(default=None),
) -> JSONResponse:
    """Evaluate a profile; missing fullName/skills yield 400, engine failures 500."""
    engine = get_engine(request)
    selected = mode or request.app.state.default_mode
    if body is not None and not isinstance(body, dict):
        return _bad_request("Request body must be a JSON object")
    try:
        profile = ProfileInput.from_payload(body or {})
    except ValidationError as exc:
        logger.info("api.invalid_profile", fields=exc.fields)
        return _bad_request(str(exc))

    try:
        evaluation = engine.evaluate(profile, selected)
    except SkillBridgeError as exc:
        logger.warning("api.evaluation_failed", kind=type(exc).__name__, error=str(exc))
        return JSONResponse(status_code=500, content={"success": False, "error": "Evaluation failed"})

    return JSONResponse(
        content={
            "success": True,
            "evaluation": serialize_evaluation(evaluation, request.app.state.model_identifier),
        }
    )


def create_app(
    engine: EvaluationEngine,
    *,
    model_identifier: str | None = None,
    default_mode: EvaluationMode = "generative",
) -> FastAPI:
    app = FastAPI(
        title="SkillBridge Evaluation API",
        description="Readiness scoring for student profiles.",
        version=__version__,
    )
    app.state.engine = engine
    app.state.model_identifier = model_identifier or engine.model_identifier
    app.state.default_mode = default_mode
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)
    return app
