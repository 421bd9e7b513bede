"""Helpers for faking ``urlopen`` responses."""

from __future__ import annotations

import io
import json
from typing import Any, Dict, List
from urllib.error import HTTPError


class FakeResponse:
    def __init__(self, payload: Any) -> None:
        if isinstance(payload, bytes):
            self._raw = payload
        else:
            self._raw = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._raw

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False


def http_error(url: str, code: int, body: str = "") -> HTTPError:
    return HTTPError(url, code, "error", {}, io.BytesIO(body.encode("utf-8")))  # type: ignore[arg-type]


class RecordingOpener:
    """Callable ``urlopen`` replacement dispatching on the request URL."""

    def __init__(self, routes: Dict[str, Any]) -> None:
        self.routes = routes
        self.requests: List[Any] = []
        self.timeouts: List[Any] = []

    def __call__(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        url = request.full_url
        if url not in self.routes:
            raise http_error(url, 404)
        outcome = self.routes[url]
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return outcome(request)
        return FakeResponse(outcome)
