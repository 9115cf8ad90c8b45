"""
Core domain models and pure functions for EventControl.

This module contains the domain models and pure rule evaluation
logic that are independent of storage and host concerns.
"""

from .models import (
    CatalogEntry,
    Configuration,
    Decision,
    EventRule,
    Location,
    Point3D,
    Region,
    RuleKey,
    Scope,
    SCOPE_PRIORITY,
)
from .errors import ConfigError, ConfigLoadError, ConfigSaveError
from .policy import evaluate

__all__ = [
    "CatalogEntry", "Configuration", "Decision", "EventRule", "Location",
    "Point3D", "Region", "RuleKey", "Scope", "SCOPE_PRIORITY",
    "ConfigError", "ConfigLoadError", "ConfigSaveError", "evaluate",
]
