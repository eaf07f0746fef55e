"""
Business logic services for polygon weather coloring.

Services own the application state and orchestrate refresh cycles.
"""

from .state import AppState
from .scheduler import DeferredTask
from .orchestrator import RefreshOrchestrator

__all__ = [
    "AppState",
    "DeferredTask",
    "RefreshOrchestrator",
]
