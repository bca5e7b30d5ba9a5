"""Application composition."""

from .orchestrator import ApplicationOrchestrator

__all__ = [
    "ApplicationOrchestrator",
]
