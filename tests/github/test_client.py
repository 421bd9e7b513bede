"""Tests for the GitHub contents client."""

from __future__ import annotations

import base64
import socket
from urllib.error import URLError

import pytest

from readmegen.errors import AuthError, ConfigError, NotFoundError, TransportError
from readmegen.github.client import ContentClient
from readmegen.models import ContentEntry

from tests._fixtures.fake_http import FakeResponse, RecordingOpener, http_error

API = "https://api.github.com"


def _encode(text: str) -> str:
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    # GitHub wraps base64 bodies at 60 columns.
    return "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60)) + "\n"


def test_client_requires_token() -> None:
    with pytest.raises(ConfigError):
        ContentClient(None)
    with pytest.raises(ConfigError):
        ContentClient("")


def test_list_directory_parses_entries_and_sends_auth_headers() -> None:
    opener = RecordingOpener(
        {
            f"{API}/repos/octo/demo/contents/src": [
                {"name": "index.js", "path": "src/index.js", "type": "file"},
                {"name": "lib", "path": "src/lib", "type": "dir"},
                {"name": "broken"},
            ]
        }
    )
    client = ContentClient("gh-token", opener=opener, request_timeout=12.0)

    entries = client.list_directory("octo", "demo", "src")

    assert entries == [
        ContentEntry(name="index.js", path="src/index.js", type="file"),
        ContentEntry(name="lib", path="src/lib", type="dir"),
    ]
    request = opener.requests[0]
    headers = {key.lower(): value for key, value in request.header_items()}
    assert headers["authorization"] == "Bearer gh-token"
    assert headers["accept"] == "application/vnd.github.v3+json"
    assert request.get_method() == "GET"
    assert opener.timeouts == [12.0]


def test_list_directory_rejects_file_payload() -> None:
    opener = RecordingOpener(
        {f"{API}/repos/octo/demo/contents/src": {"type": "file", "content": ""}}
    )
    client = ContentClient("gh-token", opener=opener)

    with pytest.raises(TransportError):
        client.list_directory("octo", "demo", "src")


def test_read_file_decodes_wrapped_base64() -> None:
    body = "const answer = 42;\n" * 20 + "// ünïcode\n"
    opener = RecordingOpener(
        {
            f"{API}/repos/octo/demo/contents/src/index.js": {
                "type": "file",
                "encoding": "base64",
                "content": _encode(body),
            }
        }
    )
    client = ContentClient("gh-token", opener=opener)

    assert client.read_file("octo", "demo", "src/index.js") == body


def test_read_file_quotes_path_segments() -> None:
    url = f"{API}/repos/octo/demo/contents/src/my%20dir/a%23b.js"
    opener = RecordingOpener({url: {"encoding": "base64", "content": _encode("x")}})
    client = ContentClient("gh-token", opener=opener)

    assert client.read_file("octo", "demo", "src/my dir/a#b.js") == "x"


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "file"},
        {"type": "file", "encoding": "none", "content": ""},
        [{"name": "a"}],
    ],
)
def test_read_file_rejects_malformed_envelopes(payload: object) -> None:
    opener = RecordingOpener({f"{API}/repos/octo/demo/contents/README.md": payload})
    client = ContentClient("gh-token", opener=opener)

    with pytest.raises(TransportError):
        client.read_file("octo", "demo", "README.md")


def test_get_repository_metadata_returns_description() -> None:
    opener = RecordingOpener(
        {f"{API}/repos/octo/demo": {"full_name": "octo/demo", "description": "Demo"}}
    )
    client = ContentClient("gh-token", opener=opener)

    metadata = client.get_repository_metadata("octo", "demo")

    assert metadata["description"] == "Demo"


def test_custom_api_url_is_used() -> None:
    opener = RecordingOpener({"https://ghe.example.com/api/v3/repos/octo/demo": {}})
    client = ContentClient("t", api_url="https://ghe.example.com/api/v3/", opener=opener)

    assert client.get_repository_metadata("octo", "demo") == {"description": None}


@pytest.mark.parametrize(
    ("outcome", "expected"),
    [
        (http_error(f"{API}/repos/octo/demo", 401), AuthError),
        (http_error(f"{API}/repos/octo/demo", 404), NotFoundError),
        (http_error(f"{API}/repos/octo/demo", 500), TransportError),
        (http_error(f"{API}/repos/octo/demo", 403), TransportError),
        (URLError("connection refused"), TransportError),
        (socket.timeout("timed out"), TransportError),
    ],
)
def test_http_failures_map_to_error_taxonomy(outcome: BaseException, expected: type) -> None:
    opener = RecordingOpener({f"{API}/repos/octo/demo": outcome})
    client = ContentClient("gh-token", opener=opener)

    with pytest.raises(expected):
        client.get_repository_metadata("octo", "demo")


def test_invalid_json_is_a_transport_error() -> None:
    opener = RecordingOpener({f"{API}/repos/octo/demo": lambda request: FakeResponse(b"<html>")})
    client = ContentClient("gh-token", opener=opener)

    with pytest.raises(TransportError):
        client.get_repository_metadata("octo", "demo")


def test_module_level_urlopen_is_used_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    opener = RecordingOpener({f"{API}/repos/octo/demo": {"description": "via urlopen"}})
    monkeypatch.setattr("readmegen.github.client.urlopen", opener)
    client = ContentClient("gh-token")

    assert client.get_repository_metadata("octo", "demo")["description"] == "via urlopen"
