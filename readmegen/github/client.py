"""Authenticated read access to the GitHub REST contents API."""

from __future__ import annotations

import base64
import binascii
import json
import socket
from typing import Any, Callable, Dict, List, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from ..errors import AuthError, ConfigError, NotFoundError, TransportError
from ..logging import get_logger
from ..models import ContentEntry

DEFAULT_API_URL = "https://api.github.com"


class ContentClient:
    """Lists directories, reads files and looks up repository metadata."""

    ACCEPT = "application/vnd.github.v3+json"
    USER_AGENT = "readmegen"

    def __init__(
        self,
        token: str | None,
        *,
        api_url: str = DEFAULT_API_URL,
        request_timeout: Optional[float] = 30.0,
        opener: Callable[..., Any] | None = None,
    ) -> None:
        if not token:
            raise ConfigError("GitHub token is not configured")
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.request_timeout = request_timeout
        self._opener = opener
        self.logger = get_logger("github.client")

    def list_directory(self, owner: str, repo: str, path: str = "") -> List[ContentEntry]:
        """Return the entries of ``path``; raises when ``path`` is a file."""
        payload = self._get_json(self._contents_url(owner, repo, path))
        if not isinstance(payload, list):
            raise TransportError(f"Expected a directory listing for '{path or '/'}'")
        entries: List[ContentEntry] = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            name = item.get("name")
            item_path = item.get("path")
            item_type = item.get("type")
            if not isinstance(name, str) or not isinstance(item_path, str) or not isinstance(item_type, str):
                continue
            entries.append(ContentEntry(name=name, path=item_path, type=item_type))
        return entries

    def read_file(self, owner: str, repo: str, path: str) -> str:
        """Fetch the content envelope for ``path`` and decode its base64 body."""
        payload = self._get_json(self._contents_url(owner, repo, path))
        if not isinstance(payload, dict):
            raise TransportError(f"Expected a file envelope for '{path}'")
        content = payload.get("content")
        encoding = payload.get("encoding", "base64")
        if not isinstance(content, str):
            raise TransportError(f"GitHub returned no content for '{path}'")
        if encoding != "base64":
            raise TransportError(f"Unsupported content encoding '{encoding}' for '{path}'")
        try:
            raw = base64.b64decode(content)
        except (binascii.Error, ValueError) as exc:
            raise TransportError(f"Invalid base64 content for '{path}'") from exc
        return raw.decode("utf-8", errors="replace")

    def get_repository_metadata(self, owner: str, repo: str) -> Dict[str, Any]:
        payload = self._get_json(f"{self.api_url}/repos/{_quote(owner)}/{_quote(repo)}")
        if not isinstance(payload, dict):
            raise TransportError(f"Unexpected repository payload for {owner}/{repo}")
        payload.setdefault("description", None)
        return payload

    # ------------------------------------------------------------------
    # Internal helpers

    def _contents_url(self, owner: str, repo: str, path: str) -> str:
        return (
            f"{self.api_url}/repos/{_quote(owner)}/{_quote(repo)}"
            f"/contents/{quote(path.strip('/'), safe='/')}"
        )

    def _get_json(self, url: str) -> Any:
        request = Request(
            url,
            headers={
                "Authorization": f"Bearer {self.token}",
                "Accept": self.ACCEPT,
                "User-Agent": self.USER_AGENT,
            },
            method="GET",
        )
        opener = self._opener or urlopen
        self.logger.debug("GET %s", url)
        try:
            with opener(request, timeout=self.request_timeout) as response:
                raw = response.read()
        except HTTPError as exc:
            if exc.code == 401:
                raise AuthError("GitHub rejected the configured token") from exc
            if exc.code == 404:
                raise NotFoundError(f"GitHub resource not found: {url}") from exc
            raise TransportError(
                f"GitHub request failed with status {exc.code}: {exc.reason}", status=exc.code
            ) from exc
        except URLError as exc:
            raise TransportError(f"GitHub request failed: {exc.reason}") from exc
        except (socket.timeout, TimeoutError) as exc:
            raise TransportError(f"GitHub request timed out: {url}") from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise TransportError("GitHub returned invalid JSON") from exc


def _quote(segment: str) -> str:
    return quote(segment, safe="")


__all__ = ["ContentClient", "DEFAULT_API_URL"]
