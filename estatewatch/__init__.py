"""EstateWatch package initialization."""

from .diff import build_snapshot, diff_records, initial_diff
from .errors import (
    DiskApiError,
    EstateWatchError,
    NotificationError,
    ScrapeError,
    SnapshotFormatError,
    StorageError,
)
from .models import Diff, Identifiable, Listing, RunSummary, Snapshot
from .runner import EstateWatchRunner
from .scraper import scrape_listings
from .serialization import decode_snapshot, encode_snapshot
from .storage import BlobStore, FilesystemBlobStore, RemoteDiskBlobStore

__all__ = [
    "BlobStore",
    "Diff",
    "DiskApiError",
    "EstateWatchError",
    "EstateWatchRunner",
    "FilesystemBlobStore",
    "Identifiable",
    "Listing",
    "NotificationError",
    "RemoteDiskBlobStore",
    "RunSummary",
    "ScrapeError",
    "Snapshot",
    "SnapshotFormatError",
    "StorageError",
    "build_snapshot",
    "decode_snapshot",
    "diff_records",
    "encode_snapshot",
    "initial_diff",
    "scrape_listings",
]
