"""Logging utilities for readmegen commands and the service.

Everything logs under the ``readmegen`` hierarchy. ``configure_logging`` owns
the handlers of that hierarchy; credentials registered with ``mask_secrets``
are replaced by ``***`` in every record those handlers emit, since upstream
error bodies can echo the token that was sent.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Set

_LOGGER_NAME = "readmegen"
CONSOLE_FORMAT = "[readmegen] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
REDACTED = "***"


class SecretMaskFilter(logging.Filter):
    """Rewrites a record's message with registered secret values redacted."""

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        self._secrets: Set[str] = set()
        self.register(*secrets)

    def register(self, *secrets: str | None) -> None:
        self._secrets.update(secret for secret in secrets if secret)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        masked = message
        # Longest first so a secret containing another is hidden whole.
        for secret in sorted(self._secrets, key=len, reverse=True):
            masked = masked.replace(secret, REDACTED)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


_SECRET_FILTER = SecretMaskFilter()


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the readmegen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def mask_secrets(*secrets: str | None) -> None:
    """Redact these values from everything the readmegen handlers emit. Empty values are ignored."""
    _SECRET_FILTER.register(*secrets)


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(_SECRET_FILTER)
    return handler


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console (and optional file) handlers on the readmegen logger.

    Calling it again replaces and closes the previous handlers, so a CLI run
    followed by service startup never writes each record twice.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    logger.addHandler(_handler(logging.StreamHandler(), level, CONSOLE_FORMAT))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), level, FILE_FORMAT)
        )
    return logger


__all__ = ["SecretMaskFilter", "configure_logging", "get_logger", "mask_secrets"]
