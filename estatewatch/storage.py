"""Append-only blob stores for carrying snapshots between runs."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol

from .disk_api import DiskClient
from .errors import StorageError
from .naming import latest_object_name, matches_prefix, next_object_name

logger = logging.getLogger(__name__)

FS_PREFIX = "estate_snapshot"
DISK_PREFIX = "hudhome_snapshot"
DISK_FOLDER = "estatebot"


class BlobStore(Protocol):
    """Persists opaque bytes as a sequence of immutable objects."""

    def save(self, data: bytes) -> str:
        """Store ``data`` as a new object and return its name."""
        ...

    def load(self) -> Optional[bytes]:
        """Return the newest object's content, or None if there is none."""
        ...


@dataclass
class FilesystemBlobStore:
    """Stores each snapshot as ``<folder>/<prefix>_<n>`` on local disk."""

    folder: Path
    prefix: str = FS_PREFIX

    def __post_init__(self) -> None:
        self.folder = Path(self.folder)

    def list_names(self) -> List[str]:
        if not self.folder.is_dir():
            return []
        return [
            path.name
            for path in self.folder.iterdir()
            if matches_prefix(path.name, self.prefix) and path.is_file()
        ]

    def load(self) -> Optional[bytes]:
        latest = latest_object_name(self.list_names(), self.prefix)
        if latest is None:
            logger.info("No %s_* snapshot found in %s", self.prefix, self.folder)
            return None
        path = self.folder / latest
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read snapshot {path}: {exc}") from exc
        logger.info("Loaded snapshot %s (%d bytes)", path, len(data))
        return data

    def save(self, data: bytes) -> str:
        try:
            self.folder.mkdir(parents=True, exist_ok=True)
            name = next_object_name(self.list_names(), self.prefix)
            path = self.folder / name
            # "x" refuses to clobber an object written by a racing writer.
            with path.open("xb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
        except OSError as exc:
            raise StorageError(
                f"Failed to write snapshot in {self.folder}: {exc}") from exc
        logger.info("Saved snapshot %s (%d bytes)", path, len(data))
        return name


@dataclass
class RemoteDiskBlobStore:
    """Stores each snapshot as ``<folder>/<prefix>_<n>`` on the remote disk."""

    client: DiskClient
    folder: str = DISK_FOLDER
    prefix: str = DISK_PREFIX

    def list_names(self) -> List[str]:
        return [
            resource.name
            for resource in self.client.list_resources(self.folder)
            if resource.is_file
        ]

    def object_path(self, name: str) -> str:
        return f"{self.folder.rstrip('/')}/{name}"

    def load(self) -> Optional[bytes]:
        latest = latest_object_name(self.list_names(), self.prefix)
        if latest is None:
            logger.info("No %s_* snapshot found under remote folder %s",
                        self.prefix, self.folder)
            return None
        path = self.object_path(latest)
        data = self.client.download(path)
        logger.info("Downloaded snapshot %s (%d bytes)", path, len(data))
        return data

    def save(self, data: bytes) -> str:
        name = next_object_name(self.list_names(), self.prefix)
        path = self.object_path(name)
        self.client.upload(path, data)
        logger.info("Uploaded snapshot %s (%d bytes)", path, len(data))
        return name


def build_store_from_env(
    backend: str | None = None,
    folder: str | None = None,
    prefix: str | None = None,
) -> BlobStore:
    """Construct the configured store; explicit arguments override env vars."""
    backend = (backend or os.getenv("STORE_BACKEND") or "fs").strip().lower()
    folder = folder or (os.getenv("SNAPSHOT_FOLDER") or "").strip() or None
    prefix = prefix or (os.getenv("SNAPSHOT_PREFIX") or "").strip() or None

    if backend == "fs":
        return FilesystemBlobStore(folder=Path(folder or "."),
                                   prefix=prefix or FS_PREFIX)
    if backend == "disk":
        token = (os.getenv("DISK_TOKEN") or "").strip()
        if not token:
            raise ValueError("DISK_TOKEN must be set for the disk backend")
        return RemoteDiskBlobStore(
            client=DiskClient(token=token),
            folder=folder or DISK_FOLDER,
            prefix=prefix or DISK_PREFIX,
        )
    raise ValueError(f"Unknown STORE_BACKEND {backend!r} (expected 'fs' or 'disk')")
