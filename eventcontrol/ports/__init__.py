"""
Port interfaces for EventControl hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the rule engine and storage adapters.
"""

from .config_store import ConfigStorePort

__all__ = ["ConfigStorePort"]
