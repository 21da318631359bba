import json

import pytest

from estatewatch.errors import SnapshotFormatError, StorageError
from estatewatch.models import Snapshot
from estatewatch.serialization import decode_snapshot, encode_snapshot


def test_encode_snapshot_uses_persisted_field_names():
    snapshot = Snapshot(captured_at=1_700_000_000, state={"A": 1, "B": 2**64 - 1})

    payload = json.loads(encode_snapshot(snapshot))

    assert payload == {
        "update_timestamp": 1_700_000_000,
        "state": {"A": 1, "B": 18446744073709551615},
    }


def test_decode_snapshot_restores_values():
    data = b'{"update_timestamp": 42, "state": {"011-1": 7, "\xc3\xa9": 8}}'

    snapshot = decode_snapshot(data)

    assert snapshot.captured_at == 42
    assert dict(snapshot.state) == {"011-1": 7, "é": 8}


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"not json",
        b"\xff\xfe",
        b"[]",
        b'{"state": {}}',
        b'{"update_timestamp": "yesterday", "state": {}}',
        b'{"update_timestamp": true, "state": {}}',
        b'{"update_timestamp": 1, "state": []}',
        b'{"update_timestamp": 1, "state": {"A": -1}}',
        b'{"update_timestamp": 1, "state": {"A": 18446744073709551616}}',
        b'{"update_timestamp": 1, "state": {"A": "1"}}',
    ],
)
def test_decode_snapshot_rejects_malformed_content(data):
    with pytest.raises(SnapshotFormatError):
        decode_snapshot(data)


def test_snapshot_format_error_is_a_storage_error():
    with pytest.raises(StorageError):
        decode_snapshot(b"{}")
