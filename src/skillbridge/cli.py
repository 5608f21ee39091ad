"""Typer CLI entrypoint for profile evaluation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError as PydanticValidationError

from .container import create_container
from .errors import SkillBridgeError
from .logging import configure_logging
from .schemas import ProfileInput
from .schemas.config import load_config

app = typer.Typer(help="Profile readiness evaluation CLI.")


def _load_settings(config: Optional[Path]) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle)
    try:
        return load_config(loaded).to_settings()
    except PydanticValidationError as exc:
        raise typer.BadParameter(f"Invalid config file: {exc}", param_name="config") from exc


@app.command()
def evaluate(
    profile: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Profile JSON path."),
    mode: Optional[str] = typer.Option(None, help="Evaluation mode: generative or heuristic."),
    output: Optional[Path] = typer.Option(None, dir_okay=False, help="Write evaluation JSON here instead of stdout."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    api_key: Optional[str] = typer.Option(None, envvar="GROQ_API_KEY", help="Model backend API key."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Evaluate a single profile document."""
    configure_logging(log_level)
    container = create_container(settings=_load_settings(config), api_key=api_key)
    engine = container.engine()
    selected = mode or container.config.default_mode()

    try:
        payload = json.loads(profile.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid profile JSON: {exc}", param_name="profile") from exc
    if not isinstance(payload, dict):
        raise typer.BadParameter("Profile must be a JSON object", param_name="profile")

    try:
        evaluation = engine.evaluate(ProfileInput.from_payload(payload), selected)
    except SkillBridgeError as exc:
        typer.echo(f"{type(exc).__name__}: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    rendered = json.dumps(evaluation.to_wire(), ensure_ascii=False, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        typer.echo(f"Evaluation saved to {output}.")
    else:
        typer.echo(rendered)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address."),
    port: int = typer.Option(3000, help="Bind port."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    api_key: Optional[str] = typer.Option(None, envvar="GROQ_API_KEY", help="Model backend API key."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Run the HTTP evaluation API."""
    import uvicorn

    from .api import create_app

    configure_logging(log_level)
    container = create_container(settings=_load_settings(config), api_key=api_key)
    engine = container.engine()
    if not api_key and not container.gateway_config().api_key:
        typer.echo("Warning: no model API key configured; generative evaluations will fail.", err=True)

    app_instance = create_app(engine, default_mode=container.config.default_mode())
    uvicorn.run(app_instance, host=host, port=port, log_level=log_level.lower())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
