"""
Session state for the to-do client.

The bearer token lives in a durable key-value store under a fixed key; the
session manager is the only component that reads or writes it.
"""

from .session import SessionManager
from .store import JsonFileStore, MemoryStore

__all__ = ["SessionManager", "JsonFileStore", "MemoryStore"]
