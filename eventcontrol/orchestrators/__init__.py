"""
Orchestrators for EventControl.

This module contains the engine that coordinates the stores
and configuration persistence.
"""

from .engine import EventControlEngine

__all__ = ["EventControlEngine"]
