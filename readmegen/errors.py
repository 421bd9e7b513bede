"""Error taxonomy shared by the GitHub client, generator and orchestrator."""

from __future__ import annotations


class ReadmeGenError(RuntimeError):
    """Base class for every failure readmegen reports to callers."""


class ConfigError(ReadmeGenError):
    """A required credential or setting is missing or unreadable."""


class AuthError(ReadmeGenError):
    """A remote service rejected the configured credential (HTTP 401)."""


class NotFoundError(ReadmeGenError):
    """The requested remote resource does not exist or is not visible (HTTP 404)."""


class InputError(ReadmeGenError):
    """The caller supplied invalid or insufficient data."""


class TransportError(ReadmeGenError):
    """Any other network, protocol or malformed-response failure."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class BusyError(ReadmeGenError):
    """An action was triggered while a previous run of it is still in flight."""


__all__ = [
    "AuthError",
    "BusyError",
    "ConfigError",
    "InputError",
    "NotFoundError",
    "ReadmeGenError",
    "TransportError",
]
