"""GitHub content retrieval: API client, structure fetcher and source selector."""

from .client import ContentClient
from .selector import SequentialWalker, SourceFileSelector, is_source_candidate, rank_source_files
from .structure import StructureFetcher

__all__ = [
    "ContentClient",
    "SequentialWalker",
    "SourceFileSelector",
    "StructureFetcher",
    "is_source_candidate",
    "rank_source_files",
]
