"""Periodic updater for Band oracle reader contracts."""

__version__ = "1.0.0"
