"""Drives the system light/dark appearance from a daily schedule."""

__version__ = "0.1.0"
