"""
In-memory stores for EventControl.

The rule and region stores exclusively own the live configuration
state; persistence only snapshots and replaces their contents.
"""

from .regions import RegionStore
from .rules import RuleStore

__all__ = ["RegionStore", "RuleStore"]
