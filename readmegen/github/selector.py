"""Selects a handful of representative source files from a repository subtree."""

from __future__ import annotations

from typing import List, Protocol, Sequence

from ..errors import ReadmeGenError
from ..logging import get_logger
from ..models import ContentEntry, SourceFile
from .client import ContentClient

DEFAULT_ROOT = "src"
DEFAULT_EXTENSIONS: tuple[str, ...] = (".js", ".ts", ".jsx", ".tsx")
DEFAULT_EXCLUDED_FRAGMENTS: tuple[str, ...] = (".test.", ".spec.", ".config.")
DEFAULT_PRIORITY: tuple[str, ...] = ("index", "main", "app")
DEFAULT_LIMIT = 5


def is_source_candidate(
    name: str,
    *,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    excluded_fragments: Sequence[str] = DEFAULT_EXCLUDED_FRAGMENTS,
) -> bool:
    """Return True when ``name`` has a source extension and no excluded fragment."""
    if not any(name.endswith(ext) for ext in extensions):
        return False
    return not any(fragment in name for fragment in excluded_fragments)


def priority_index(path: str, priority: Sequence[str] = DEFAULT_PRIORITY) -> int:
    """Index of the first fragment found in ``path``; ``len(priority)`` when none match."""
    lowered = path.lower()
    for index, fragment in enumerate(priority):
        if fragment.lower() in lowered:
            return index
    return len(priority)


def rank_source_files(
    files: Sequence[SourceFile], priority: Sequence[str] = DEFAULT_PRIORITY
) -> List[SourceFile]:
    # sorted() is stable, so unmatched files keep their traversal order.
    return sorted(files, key=lambda item: priority_index(item.path, priority))


class DirectoryWalker(Protocol):
    """Expands listing entries into admitted source files, in traversal order."""

    def walk(self, owner: str, repo: str, entries: Sequence[ContentEntry]) -> List[SourceFile]:
        ...


class SequentialWalker:
    """Depth-first walk issuing one listing or file request at a time."""

    def __init__(
        self,
        client: ContentClient,
        *,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        excluded_fragments: Sequence[str] = DEFAULT_EXCLUDED_FRAGMENTS,
    ) -> None:
        self.client = client
        self.extensions = tuple(extensions)
        self.excluded_fragments = tuple(excluded_fragments)
        self.logger = get_logger("github.selector")

    def walk(self, owner: str, repo: str, entries: Sequence[ContentEntry]) -> List[SourceFile]:
        files: List[SourceFile] = []
        for entry in entries:
            if entry.is_file:
                if not is_source_candidate(
                    entry.name,
                    extensions=self.extensions,
                    excluded_fragments=self.excluded_fragments,
                ):
                    continue
                try:
                    content = self.client.read_file(owner, repo, entry.path)
                except ReadmeGenError as exc:
                    self.logger.warning("Error getting content for %s: %s", entry.path, exc)
                    continue
                files.append(SourceFile(path=entry.path, content=content))
            elif entry.is_dir:
                try:
                    children = self.client.list_directory(owner, repo, entry.path)
                except ReadmeGenError as exc:
                    self.logger.warning("Error getting contents for directory %s: %s", entry.path, exc)
                    continue
                files.extend(self.walk(owner, repo, children))
            else:
                self.logger.debug("Skipping %s entry %s", entry.type, entry.path)
        return files


class SourceFileSelector:
    """Walks the source root, filters and ranks candidates, and keeps the top few."""

    def __init__(
        self,
        client: ContentClient,
        *,
        root: str = DEFAULT_ROOT,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        excluded_fragments: Sequence[str] = DEFAULT_EXCLUDED_FRAGMENTS,
        priority: Sequence[str] = DEFAULT_PRIORITY,
        limit: int = DEFAULT_LIMIT,
        walker: DirectoryWalker | None = None,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be positive")
        self.client = client
        self.root = root
        self.priority = tuple(priority)
        self.limit = limit
        self.walker = walker or SequentialWalker(
            client,
            extensions=extensions,
            excluded_fragments=excluded_fragments,
        )
        self.logger = get_logger("github.selector")

    def select_source_files(self, owner: str, repo: str) -> List[SourceFile]:
        try:
            entries = self.client.list_directory(owner, repo, self.root)
        except ReadmeGenError as exc:
            self.logger.info("Error getting %s contents for %s/%s: %s", self.root, owner, repo, exc)
            return []

        files = self.walker.walk(owner, repo, entries)
        ranked = rank_source_files(files, self.priority)
        selected = ranked[: self.limit]
        self.logger.debug(
            "Selected %d of %d candidate files: %s",
            len(selected),
            len(files),
            ", ".join(item.path for item in selected),
        )
        return selected


__all__ = [
    "DEFAULT_EXCLUDED_FRAGMENTS",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_LIMIT",
    "DEFAULT_PRIORITY",
    "DEFAULT_ROOT",
    "DirectoryWalker",
    "SequentialWalker",
    "SourceFileSelector",
    "is_source_candidate",
    "priority_index",
    "rank_source_files",
]
