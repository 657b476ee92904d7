"""Typed exception hierarchy for property store errors.

This module defines the project-wide base exception and the errors raised
while reading or loading page properties. Every package in the project
derives its own errors from ZDocsError so callers can catch any
application-level failure with a single except clause.
"""

from typing import Optional


class ZDocsError(Exception):
    """Base exception for all zdocs errors.

    Use this to catch any application-level error from the library.
    """
    pass


class StoreError(ZDocsError):
    """Base exception for all property store errors."""
    pass


class SnapshotError(StoreError):
    """Raised when a property store snapshot cannot be read or is malformed."""

    def __init__(self, message: str, snapshot_path: Optional[str] = None):
        if snapshot_path:
            full_message = f"Snapshot error in {snapshot_path}: {message}"
        else:
            full_message = f"Snapshot error: {message}"
        super().__init__(full_message)
        self.snapshot_path = snapshot_path
        self.original_message = message
