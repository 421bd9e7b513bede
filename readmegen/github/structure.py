"""Repository metadata plus the optional package manifest and README."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from ..errors import NotFoundError, ReadmeGenError
from ..logging import get_logger
from ..models import RepositoryStructure
from .client import ContentClient

PACKAGE_MANIFEST = "package.json"
README_PATH = "README.md"


class StructureFetcher:
    """Gathers the repository context that accompanies the selected source files."""

    def __init__(self, client: ContentClient) -> None:
        self.client = client
        self.logger = get_logger("github.structure")

    def fetch_structure(self, owner: str, repo: str) -> RepositoryStructure:
        metadata = self.client.get_repository_metadata(owner, repo)
        description = metadata.get("description")
        return RepositoryStructure(
            description=description if isinstance(description, str) else None,
            package_json=self._fetch_package_json(owner, repo),
            readme=self._fetch_readme(owner, repo),
        )

    def _fetch_package_json(self, owner: str, repo: str) -> Optional[Dict[str, Any]]:
        text = self._read_optional(owner, repo, PACKAGE_MANIFEST)
        if text is None:
            return None
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            self.logger.info("Ignoring unparseable %s: %s", PACKAGE_MANIFEST, exc)
            return None
        if not isinstance(parsed, dict):
            self.logger.info("Ignoring %s without a top-level object", PACKAGE_MANIFEST)
            return None
        return parsed

    def _fetch_readme(self, owner: str, repo: str) -> Optional[str]:
        return self._read_optional(owner, repo, README_PATH)

    def _read_optional(self, owner: str, repo: str, path: str) -> Optional[str]:
        try:
            return self.client.read_file(owner, repo, path)
        except NotFoundError:
            self.logger.info("No %s found in %s/%s", path, owner, repo)
        except ReadmeGenError as exc:
            self.logger.warning("Skipping %s for %s/%s: %s", path, owner, repo, exc)
        return None


__all__ = ["PACKAGE_MANIFEST", "README_PATH", "StructureFetcher"]
