"""Dependency injection container for the evaluation system."""

from __future__ import annotations

import random
from pathlib import Path

from dependency_injector import containers, providers

from .core import EngineConfig, EvaluationEngine, HeuristicConfig, HeuristicScorer, PromptBuilder, ResponseValidator
from .llm import GatewayConfig, HTTPModelGateway
from .pipeline import AuditLogger, EvaluationService
from .store import InMemoryEvaluationStore, JsonFileEvaluationStore


class EvaluationContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration(default={"default_mode": "generative"})

    gateway_config = providers.Singleton(GatewayConfig)
    gateway = providers.Singleton(HTTPModelGateway, config=gateway_config)

    rng = providers.Singleton(random.Random)
    heuristic_config = providers.Singleton(HeuristicConfig)
    scorer = providers.Singleton(HeuristicScorer, config=heuristic_config, rng=rng)

    prompt_builder = providers.Singleton(PromptBuilder)
    validator = providers.Singleton(ResponseValidator)
    engine_config = providers.Singleton(EngineConfig)

    engine = providers.Singleton(
        EvaluationEngine,
        gateway=gateway,
        scorer=scorer,
        prompt_builder=prompt_builder,
        validator=validator,
        config=engine_config,
    )

    store = providers.Singleton(InMemoryEvaluationStore)
    audit_logger = providers.Object(None)

    service = providers.Factory(
        EvaluationService,
        engine=engine,
        store=store,
        audit_logger=audit_logger,
    )


def create_container(*, settings: dict | None = None, api_key: str | None = None) -> EvaluationContainer:
    """Instantiate container with optional overrides."""

    container = EvaluationContainer()
    settings = settings if isinstance(settings, dict) else {}

    gateway_settings = dict(settings.get("gateway", {}))
    if api_key:
        gateway_settings["api_key"] = api_key
    if gateway_settings:
        container.gateway_config.override(
            providers.Singleton(GatewayConfig, **gateway_settings)
        )

    heuristic_settings = dict(settings.get("heuristic", {}))
    seed = heuristic_settings.pop("seed", None)
    if seed is not None:
        container.rng.override(providers.Singleton(random.Random, seed))
    if heuristic_settings:
        for key in ("strength_fillers", "weakness_fillers"):
            if key in heuristic_settings:
                heuristic_settings[key] = tuple(heuristic_settings[key])
        container.heuristic_config.override(
            providers.Singleton(HeuristicConfig, **heuristic_settings)
        )

    engine_settings = dict(settings.get("engine", {}))
    default_mode = engine_settings.pop("default_mode", None)
    if default_mode:
        container.config.default_mode.from_value(default_mode)
    if engine_settings:
        container.engine_config.override(
            providers.Singleton(EngineConfig, **engine_settings)
        )

    service_settings = dict(settings.get("service", {}))
    store_path = service_settings.pop("store_path", None)
    if store_path:
        container.store.override(
            providers.Singleton(JsonFileEvaluationStore, Path(store_path))
        )
    audit_log = service_settings.pop("audit_log", None)
    if audit_log:
        container.audit_logger.override(providers.Singleton(AuditLogger, Path(audit_log)))
    if service_settings:
        container.service.override(
            providers.Factory(
                EvaluationService,
                engine=container.engine,
                store=container.store,
                audit_logger=container.audit_logger,
                **service_settings,
            )
        )

    return container
