from estatewatch.naming import (
    latest_object_name,
    matches_prefix,
    next_object_name,
    parse_sequence_number,
)


def test_parse_sequence_number_reads_trailing_integer():
    assert parse_sequence_number("estate_snapshot_12") == 12
    assert parse_sequence_number("/tmp/data/estate_snapshot_3") == 3


def test_parse_sequence_number_is_lenient():
    assert parse_sequence_number("estate_snapshot_x") == 0
    assert parse_sequence_number("estate_snapshot_") == 0
    assert parse_sequence_number("estate_snapshot_-1") == 0
    assert parse_sequence_number("nosuffix") == 0


def test_matches_prefix_requires_separator():
    assert matches_prefix("snap_1", "snap")
    assert not matches_prefix("snapshot_1", "snap")


def test_next_object_name_skips_malformed_names():
    names = ["prefix_0", "prefix_3", "prefix_x"]
    assert next_object_name(names, "prefix") == "prefix_4"


def test_next_object_name_starts_at_zero():
    assert next_object_name([], "prefix") == "prefix_0"
    assert next_object_name(["other_5"], "prefix") == "prefix_0"


def test_latest_object_name_uses_numeric_order():
    names = ["prefix_10", "prefix_9", "prefix_2", "other_99"]
    assert latest_object_name(names, "prefix") == "prefix_10"
    assert latest_object_name(["other_1"], "prefix") is None


def test_next_object_name_after_only_malformed_name():
    assert next_object_name(["prefix_x"], "prefix") == "prefix_1"
