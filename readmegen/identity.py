"""Repository identity extraction from user-supplied URLs."""

from __future__ import annotations

import re

from .errors import InputError
from .models import RepositoryIdentity

_REPO_URL_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)")


def parse_repository_url(url: str | None) -> RepositoryIdentity:
    """Return the identity named by the first two path segments after ``github.com``.

    Trailing segments (``/tree/main/src``), query strings and fragments are
    ignored, as is a ``.git`` suffix on the repository name (clone URLs).
    """
    if url is None or not url.strip():
        raise InputError("Please enter a repository URL")

    match = _REPO_URL_PATTERN.search(url.strip())
    if not match:
        raise InputError("Invalid GitHub repository URL")

    owner = match.group(1)
    repo = re.split(r"[?#]", match.group(2), maxsplit=1)[0]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not owner or not repo:
        raise InputError("Invalid GitHub repository URL")
    return RepositoryIdentity(owner=owner, repo=repo)


__all__ = ["parse_repository_url"]
