"""Core data models shared across readmegen components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

GITHUB_WEB_URL = "https://github.com"


@dataclass(frozen=True)
class RepositoryIdentity:
    """The ``owner/repo`` pair naming a repository on GitHub."""

    owner: str
    repo: str

    def __post_init__(self) -> None:
        if not self.owner or not self.repo:
            raise ValueError("Repository identity requires a non-empty owner and repo")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def html_url(self) -> str:
        return f"{GITHUB_WEB_URL}/{self.owner}/{self.repo}"

    def to_dict(self) -> Dict[str, str]:
        return {"owner": self.owner, "repo": self.repo}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Optional["RepositoryIdentity"]:
        owner = payload.get("owner")
        repo = payload.get("repo")
        if not isinstance(owner, str) or not isinstance(repo, str):
            return None
        if not owner or not repo:
            return None
        return cls(owner=owner, repo=repo)


@dataclass
class RepositoryStructure:
    """Metadata and well-known root files gathered before generation."""

    description: Optional[str] = None
    package_json: Optional[Dict[str, Any]] = None
    readme: Optional[str] = None

    @property
    def dependencies(self) -> Optional[Dict[str, Any]]:
        if self.package_json is None:
            return None
        deps = self.package_json.get("dependencies")
        return deps if isinstance(deps, dict) else None


@dataclass(frozen=True)
class ContentEntry:
    """One row of a GitHub contents listing."""

    name: str
    path: str
    type: str

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"


@dataclass
class SourceFile:
    """A selected source file and its decoded body."""

    path: str
    content: str


@dataclass
class GeneratedDocument:
    """README markdown produced for a repository."""

    identity: RepositoryIdentity
    markdown: str
    files: List[str] = field(default_factory=list)
