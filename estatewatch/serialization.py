"""Encoding of snapshots to and from the persisted JSON format."""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, Dict

from .errors import SnapshotFormatError
from .models import CHECKSUM_BITS, Snapshot

TIMESTAMP_FIELD = "update_timestamp"
STATE_FIELD = "state"
_MAX_CHECKSUM = 2**CHECKSUM_BITS - 1


def encode_snapshot(snapshot: Snapshot) -> bytes:
    payload = {
        TIMESTAMP_FIELD: snapshot.captured_at,
        STATE_FIELD: dict(snapshot.state),
    }
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def decode_snapshot(data: bytes) -> Snapshot:
    """Parse persisted bytes back into a :class:`Snapshot`.

    Raises:
        SnapshotFormatError: the content is not a well-formed snapshot.
    """
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SnapshotFormatError(f"Snapshot content is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise SnapshotFormatError(
            f"Snapshot must be a JSON object, got {type(payload).__name__}"
        )

    timestamp = payload.get(TIMESTAMP_FIELD)
    if not _is_int(timestamp) or timestamp < 0:
        raise SnapshotFormatError(f"Invalid {TIMESTAMP_FIELD!r}: {timestamp!r}")

    raw_state = payload.get(STATE_FIELD)
    if not isinstance(raw_state, dict):
        raise SnapshotFormatError(f"Invalid {STATE_FIELD!r}: expected an object")

    state: Dict[str, int] = {}
    for identity, checksum in raw_state.items():
        if not _is_int(checksum) or not 0 <= checksum <= _MAX_CHECKSUM:
            raise SnapshotFormatError(
                f"Checksum for {identity!r} is not an unsigned 64-bit integer: {checksum!r}"
            )
        state[identity] = checksum

    return Snapshot(captured_at=timestamp, state=MappingProxyType(state))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
