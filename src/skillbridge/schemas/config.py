"""Pydantic configuration schema for YAML input."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class GatewaySettings(BaseModel):
    endpoint: str | None = None
    model: str | None = None
    api_key: str | None = None
    timeout: float | None = Field(default=None, gt=0)
    max_tokens: int | None = Field(default=None, gt=0)

    model_config = ConfigDict(extra="forbid")


class HeuristicSettings(BaseModel):
    min_strengths: int | None = Field(default=None, ge=0)
    min_weaknesses: int | None = Field(default=None, ge=0)
    strength_fillers: list[str] | None = None
    weakness_fillers: list[str] | None = None
    seed: int | None = None

    model_config = ConfigDict(extra="forbid")


class EngineSettings(BaseModel):
    min_strengths: int | None = Field(default=None, ge=1)
    min_weaknesses: int | None = Field(default=None, ge=1)
    min_suggestions: int | None = Field(default=None, ge=1)
    default_mode: Literal["generative", "heuristic"] | None = None

    model_config = ConfigDict(extra="forbid")


class ServiceSettings(BaseModel):
    max_retries: int | None = Field(default=None, ge=0)
    fallback_to_heuristic: bool | None = None
    store_path: str | None = None
    audit_log: str | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    gateway: GatewaySettings = Field(default_factory=GatewaySettings)
    heuristic: HeuristicSettings = Field(default_factory=HeuristicSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("gateway", "heuristic", "engine", "service"):
            values = getattr(self, section).model_dump(exclude_none=True)
            if values:
                settings[section] = values
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
