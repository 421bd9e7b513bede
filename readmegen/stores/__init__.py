"""Persistent state for readmegen."""

from .identity_store import IdentityStore, JsonIdentityStore, MemoryIdentityStore

__all__ = ["IdentityStore", "JsonIdentityStore", "MemoryIdentityStore"]
