"""
EventControl: scoped event cancellation rules.

Rules suppress host events globally, per world, or inside named
3-D regions. The engine lives in ``eventcontrol.orchestrators``.
"""

__version__ = "1.0.0"
