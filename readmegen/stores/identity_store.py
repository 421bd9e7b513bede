"""Storage for the currently connected repository identity."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..logging import get_logger
from ..models import RepositoryIdentity

DEFAULT_KEY = "currentRepo"


class IdentityStore(Protocol):
    """Single-slot store holding the last successfully connected repository."""

    def get(self) -> Optional[RepositoryIdentity]:
        ...

    def set(self, identity: RepositoryIdentity) -> None:
        ...


class MemoryIdentityStore:
    """Keeps the identity for the lifetime of the process only."""

    def __init__(self, identity: RepositoryIdentity | None = None) -> None:
        self._identity = identity

    def get(self) -> Optional[RepositoryIdentity]:
        return self._identity

    def set(self, identity: RepositoryIdentity) -> None:
        self._identity = identity


class JsonIdentityStore:
    """Stores the identity under one key of a JSON object file.

    Other keys already present in the file are preserved on write. A missing,
    unreadable or malformed file reads as "nothing connected yet". Writes go
    through a sibling temp file that replaces the target, so readers never see
    a partially written file.
    """

    def __init__(self, path: Path, *, key: str = DEFAULT_KEY) -> None:
        self._path = path
        self._key = key
        self._lock = threading.Lock()
        self.logger = get_logger("stores.identity")

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> Optional[RepositoryIdentity]:
        with self._lock:
            data = self._load()
        raw = data.get(self._key)
        if not isinstance(raw, dict):
            return None
        return RepositoryIdentity.from_dict(raw)

    def set(self, identity: RepositoryIdentity) -> None:
        with self._lock:
            data = self._load()
            data[self._key] = identity.to_dict()
            self._write(data)
        self.logger.debug("Cached %s in %s", identity.full_name, self._path)

    def _load(self) -> Dict[str, object]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            self.logger.warning("Ignoring unreadable state file %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def _write(self, data: Dict[str, object]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as handle:
            json.dump(data, handle, indent=2, sort_keys=True)
        try:
            os.replace(handle.name, self._path)
        except OSError:
            Path(handle.name).unlink(missing_ok=True)
            raise


__all__ = ["DEFAULT_KEY", "IdentityStore", "JsonIdentityStore", "MemoryIdentityStore"]
