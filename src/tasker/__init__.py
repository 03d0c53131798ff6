"""Tasker: ordered task list with file-backed persistence."""

__version__ = "0.1.0"
