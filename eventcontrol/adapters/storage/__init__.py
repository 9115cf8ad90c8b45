"""
Storage adapters for EventControl hexagonal architecture.

This module contains storage adapters for the configuration
document, including the JSON file store and an in-memory store.
"""

from .json_store import JsonConfigStore
from .memory_store import MemoryConfigStore

__all__ = ["JsonConfigStore", "MemoryConfigStore"]
