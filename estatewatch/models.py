"""Core data models for EstateWatch."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Generic, List, Mapping, Optional, Protocol, Sequence, Tuple, TypeVar

HUD_DETAILS_URL = (
    "https://www.hudhomestore.com/Listing/PropertyDetails.aspx"
    "?caseNumber={case_number}&sLanguage=ENGLISH"
)

CHECKSUM_BITS = 64
_FIELD_SEPARATOR = "\x1f"


class Identifiable(Protocol):
    """Anything the diff engine can track: a stable key plus a content hash."""

    @property
    def identity(self) -> str:
        ...

    @property
    def checksum(self) -> int:
        ...


def content_checksum(values: Sequence[str]) -> int:
    """Return a process-independent unsigned 64-bit hash of ``values``.

    Each value is length-prefixed so that ``["ab", "c"]`` and ``["a", "bc"]``
    hash differently.
    """
    digest = hashlib.blake2b(digest_size=CHECKSUM_BITS // 8)
    for value in values:
        encoded = value.encode("utf-8")
        digest.update(f"{len(encoded)}{_FIELD_SEPARATOR}".encode("ascii"))
        digest.update(encoded)
    return int.from_bytes(digest.digest(), "big")


@dataclass(frozen=True)
class Listing:
    """One row of the HUD Home Store search results."""

    columns: Tuple[str, ...]

    @property
    def case_number(self) -> str:
        return self.columns[1]

    @property
    def address(self) -> str:
        return self.columns[2]

    @property
    def details(self) -> Tuple[str, ...]:
        return self.columns[3:]

    @property
    def url(self) -> str:
        return HUD_DETAILS_URL.format(case_number=self.case_number)

    @property
    def identity(self) -> str:
        return self.case_number

    @property
    def checksum(self) -> int:
        return content_checksum(self.columns)

    def __str__(self) -> str:
        details = " | ".join(value for value in self.details if value)
        lines = [f"{self.address} (case {self.case_number})"]
        if details:
            lines.append(details)
        lines.append(self.url)
        return "\n".join(lines)


@dataclass(frozen=True)
class Snapshot:
    """The last observed state: identity -> checksum, stamped in unix seconds."""

    captured_at: int
    state: Mapping[str, int]


T = TypeVar("T")


@dataclass
class Diff(Generic[T]):
    """Records classified against a prior snapshot."""

    added: List[T]
    changed: List[T]

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.changed)


@dataclass
class RunSummary:
    """Aggregated result returned by a monitoring cycle."""

    executed_at: str
    diff: Diff
    first_run: bool
    persisted: bool
    notified: bool
    object_name: Optional[str] = None

    @property
    def added_count(self) -> int:
        return len(self.diff.added)

    @property
    def changed_count(self) -> int:
        return len(self.diff.changed)
