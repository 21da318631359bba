"""Snapshot construction and diff utilities for scraped batches."""

from __future__ import annotations

import time
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, TypeVar

from .models import Diff, Identifiable, Snapshot

TRecord = TypeVar("TRecord", bound=Identifiable)
Clock = Callable[[], float]


def build_snapshot(records: Iterable[Identifiable], clock: Clock = time.time) -> Snapshot:
    """Capture ``records`` as an identity -> checksum snapshot.

    Later records overwrite earlier ones that share an identity.
    """
    state: Dict[str, int] = {}
    for record in records:
        state[record.identity] = record.checksum
    return Snapshot(captured_at=int(clock()), state=MappingProxyType(state))


def diff_records(prior: Snapshot, batch: Iterable[TRecord]) -> Diff[TRecord]:
    """Compute added and changed records relative to ``prior``.

    Identities present in ``prior`` but missing from ``batch`` are ignored.
    """
    added: List[TRecord] = []
    changed: List[TRecord] = []
    for record in batch:
        previous = prior.state.get(record.identity)
        if previous is None:
            added.append(record)
        elif previous != record.checksum:
            changed.append(record)
    return Diff(added=added, changed=changed)


def initial_diff(batch: Iterable[TRecord]) -> Diff[TRecord]:
    """Treat every record as added, for runs without a prior snapshot."""
    return Diff(added=list(batch), changed=[])
