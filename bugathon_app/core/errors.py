"""Exceptions raised at the I/O seams (fetch and persistence)."""

from __future__ import annotations


class FetchError(RuntimeError):
    """Network/transport failure or a non-2xx answer from the issue source."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class StorageError(RuntimeError):
    """Persistent store could not be read or written."""
