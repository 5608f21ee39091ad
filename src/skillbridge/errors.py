"""Error taxonomy shared by the engine, gateway and store collaborators."""

from __future__ import annotations

from typing import Sequence


class SkillBridgeError(Exception):
    """Base class for all evaluation failures."""


class ValidationError(SkillBridgeError):
    """Raised when caller input is missing required fields or is malformed."""

    def __init__(self, message: str, *, fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.fields = list(fields)


class UpstreamError(SkillBridgeError):
    """Raised when the generative backend cannot be reached or returns nothing."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class MalformedResponseError(SkillBridgeError):
    """Raised when backend output fails the evaluation response contract."""


class StoreError(SkillBridgeError):
    """Raised by evaluation store collaborators."""


class AlreadyEvaluatedError(StoreError):
    """Raised when a profile already has an evaluation in progress or on record."""


__all__ = [
    "SkillBridgeError",
    "ValidationError",
    "UpstreamError",
    "MalformedResponseError",
    "StoreError",
    "AlreadyEvaluatedError",
]
