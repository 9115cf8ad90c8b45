"""
Adapters for EventControl hexagonal architecture.

This module contains the concrete implementations of port interfaces
that handle durable storage concerns.
"""

from .storage import JsonConfigStore, MemoryConfigStore

__all__ = ["JsonConfigStore", "MemoryConfigStore"]
