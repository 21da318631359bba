"""Exception hierarchy shared by EstateWatch components."""

from __future__ import annotations


class EstateWatchError(Exception):
    """Base class for all errors raised by EstateWatch."""


class ScrapeError(EstateWatchError):
    """Raised when the listing site cannot be fetched or parsed."""


class StorageError(EstateWatchError):
    """Raised when a snapshot cannot be read from or written to a store."""


class SnapshotFormatError(StorageError):
    """Raised when persisted snapshot content cannot be decoded."""


class DiskApiError(StorageError):
    """Raised when the remote disk API rejects or garbles a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotificationError(EstateWatchError):
    """Raised when a change notification could not be delivered."""
