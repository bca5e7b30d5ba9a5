"""Utility helpers."""

from .logger import configure_logging, get_logger
from .run_loop import RunLoop

__all__ = ["RunLoop", "configure_logging", "get_logger"]
