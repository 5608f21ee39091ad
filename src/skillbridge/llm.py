"""Generative-text backend gateway."""

from __future__ import annotations

import http.client
import json
import socket
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable
from urllib import error, request

import structlog

from .errors import UpstreamError

DEFAULT_ENDPOINT = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_MODEL = "llama-3.3-70b-versatile"


@dataclass
class GatewayConfig:
    """Connection settings for the chat-completions backend."""

    api_key: str | None = None
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    timeout: float = 30.0
    max_tokens: int = 1024


@runtime_checkable
class ModelGateway(Protocol):
    """Single request/response exchange with a generative-text backend."""

    model: str

    def invoke(self, prompt: str) -> str:
        """Send ``prompt`` and return the raw completion text."""


class HTTPModelGateway:
    """OpenAI-compatible chat-completions client; one request per call, no retries."""

    def __init__(self, config: GatewayConfig | None = None) -> None:
        self._config = config or GatewayConfig()
        self._logger = structlog.get_logger(__name__)

    @property
    def model(self) -> str:
        return self._config.model

    def build_request(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self._config.model,
            "max_tokens": self._config.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    def invoke(self, prompt: str) -> str:
        if not self._config.api_key:
            raise UpstreamError("Model API key is not configured")

        data = json.dumps(self.build_request(prompt), ensure_ascii=False).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }
        req = request.Request(self._config.endpoint, data=data, headers=headers, method="POST")
        try:
            with request.urlopen(req, timeout=self._config.timeout) as resp:
                body = resp.read().decode("utf-8")
        except error.HTTPError as exc:
            self._logger.warning("gateway.request_failed", status=exc.code, model=self.model)
            raise UpstreamError(f"Model backend returned HTTP {exc.code}", status=exc.code) from exc
        except error.URLError as exc:
            self._logger.warning("gateway.request_failed", error=str(exc.reason), model=self.model)
            raise UpstreamError(f"Model backend unreachable: {exc.reason}") from exc
        except (socket.timeout, TimeoutError) as exc:
            self._logger.warning("gateway.timeout", timeout=self._config.timeout, model=self.model)
            raise UpstreamError(f"Model backend timed out after {self._config.timeout}s") from exc
        except (OSError, http.client.HTTPException, UnicodeDecodeError) as exc:
            self._logger.warning("gateway.request_failed", error=repr(exc), model=self.model)
            raise UpstreamError(f"Model backend connection failed: {exc!r}") from exc

        return self.extract_content(body)

    @staticmethod
    def extract_content(body: str) -> str:
        """Pull the first completion's text out of a chat-completions body."""
        try:
            payload = json.loads(body) if body else {}
        except json.JSONDecodeError as exc:
            raise UpstreamError("Model backend returned a non-JSON body") from exc

        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not isinstance(content, str) or not content.strip():
            raise UpstreamError("Model backend returned an empty completion")
        return content
