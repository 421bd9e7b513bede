"""Adapter around an OpenAI-compatible chat-completion endpoint."""

from __future__ import annotations

import json
import socket
from dataclasses import dataclass
from typing import Any, Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..errors import ConfigError, TransportError
from ..logging import get_logger


@dataclass
class CompletionRequest:
    """Represents one chat-completion call."""

    prompt: str
    system: Optional[str]
    model: str
    temperature: Optional[float]
    max_tokens: Optional[int]
    base_url: str
    api_key: str
    request_timeout: Optional[float]


class CompletionRunner:
    """Sends a single system+user prompt and returns the first choice's text."""

    DEFAULT_MODEL = "gpt-4-turbo-preview"
    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str | None = None,
        base_url: str | None = None,
        temperature: Optional[float] = 0.7,
        max_tokens: Optional[int] = 4000,
        request_timeout: Optional[float] = 120.0,
        runner: Callable[[CompletionRequest], str] | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.request_timeout = request_timeout
        self._runner = runner or self._http_runner

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def run(self, prompt: str, *, system: str | None = None) -> str:
        """Send the prompt and return the completion text verbatim."""
        if not self.api_key:
            raise ConfigError("OpenAI API key is not configured")
        request = CompletionRequest(
            prompt=prompt,
            system=system,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            base_url=self.base_url,
            api_key=self.api_key,
            request_timeout=self.request_timeout,
        )
        return self._runner(request)

    @staticmethod
    def _http_runner(request: CompletionRequest) -> str:
        endpoint = f"{request.base_url}/chat/completions"
        payload: dict[str, object] = {
            "model": request.model,
            "messages": CompletionRunner._build_messages(request.system, request.prompt),
        }
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens

        data = json.dumps(payload).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {request.api_key}",
        }
        http_request = Request(endpoint, data=data, headers=headers, method="POST")
        logger = get_logger("llm.runner")
        logger.debug("POST %s (model=%s, %d prompt chars)", endpoint, request.model, len(request.prompt))

        try:
            with urlopen(http_request, timeout=request.request_timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = detail.strip() or exc.reason
            raise TransportError(
                f"Completion request failed with status {exc.code}: {message}", status=exc.code
            ) from exc
        except URLError as exc:
            raise TransportError(f"Completion request failed: {exc.reason}") from exc
        except (socket.timeout, TimeoutError) as exc:
            raise TransportError("Completion request timed out") from exc

        try:
            response_payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise TransportError("Completion endpoint returned invalid JSON") from exc

        return CompletionRunner._extract_content(response_payload)

    @staticmethod
    def _build_messages(system: str | None, prompt: str) -> list[dict[str, str]]:
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages

    @staticmethod
    def _extract_content(payload: Any) -> str:
        if not isinstance(payload, dict):
            raise TransportError("Completion response is not a JSON object")
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            raise TransportError("Completion response contained no choices")
        first = choices[0]
        if not isinstance(first, dict):
            raise TransportError("Completion choice is malformed")
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str):
                return content
        raise TransportError("Completion choice has no message content")


__all__ = ["CompletionRequest", "CompletionRunner"]
