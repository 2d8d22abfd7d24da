import pytest

from config_drift.drift_analyzer import compute_diffs
from config_drift.models import ChangeKind

SAMPLE_MAPS = [
    {},
    {"a": "1"},
    {"a": "1", "b": "2"},
    {"a": "2", "c": ""},
    {"b": "2", "c": "3", "d": "pt-x"},
]


@pytest.mark.parametrize("props", SAMPLE_MAPS)
def test_identical_maps_have_no_diffs(props):
    assert compute_diffs(props, dict(props)) == []


@pytest.mark.parametrize("left", SAMPLE_MAPS)
@pytest.mark.parametrize("right", SAMPLE_MAPS)
def test_reported_keys_are_exactly_the_disagreeing_keys(left, right):
    records = compute_diffs(left, right)
    keys = [record.key for record in records]

    expected = {k for k in set(left) | set(right) if left.get(k) != right.get(k)}
    assert set(keys) == expected
    assert len(keys) == len(set(keys))


def test_added_removed_and_changed_are_classified():
    records = compute_diffs({"a": "1", "b": "2"}, {"a": "1", "b": "3", "c": "4"})
    by_key = {record.key: record for record in records}

    assert set(by_key) == {"b", "c"}
    assert by_key["b"].kind is ChangeKind.CHANGED
    assert (by_key["b"].left, by_key["b"].right) == ("2", "3")
    assert by_key["c"].kind is ChangeKind.ADDED
    assert by_key["c"].left is None
    assert by_key["c"].right == "4"


def test_key_only_on_left_is_removed():
    records = compute_diffs({"gone": "x"}, {})
    assert len(records) == 1
    assert records[0].kind is ChangeKind.REMOVED
    assert records[0].right is None


def test_absent_maps_count_as_no_keys():
    assert compute_diffs(None, None) == []
    records = compute_diffs(None, {"x": "1"})
    assert [(r.key, r.kind) for r in records] == [("x", ChangeKind.ADDED)]


def test_empty_string_value_is_distinct_from_missing_key():
    records = compute_diffs({"k": ""}, {})
    assert len(records) == 1
    assert records[0].kind is ChangeKind.REMOVED
    assert records[0].left == ""


def test_environment_prefix_substitution_is_suppressed():
    pt = {"host": "pt-svc"}
    prod = {"host": "prod-svc"}

    assert compute_diffs(pt, prod, suppress_normalized=True) == []
    unsuppressed = compute_diffs(pt, prod)
    assert [(r.key, r.kind) for r in unsuppressed] == [("host", ChangeKind.CHANGED)]


def test_real_drift_survives_suppression():
    records = compute_diffs(
        {"host": "pt-svc", "pool": "10"},
        {"host": "prod-other", "pool": "20"},
        suppress_normalized=True,
    )
    assert {r.key for r in records} == {"host", "pool"}


def test_suppression_never_hides_one_sided_keys():
    records = compute_diffs({"only_pt": "pt-svc"}, {"only_prod": "prod-svc"}, suppress_normalized=True)
    assert {(r.key, r.kind) for r in records} == {
        ("only_pt", ChangeKind.REMOVED),
        ("only_prod", ChangeKind.ADDED),
    }


def test_values_normalizing_to_empty_are_not_suppressed():
    records = compute_diffs({"prefix": "pt-"}, {"prefix": "prod-"}, suppress_normalized=True)
    assert [r.key for r in records] == ["prefix"]


def test_empty_value_on_one_side_is_not_suppressed():
    records = compute_diffs({"k": ""}, {"k": "prod-"}, suppress_normalized=True)
    assert [r.key for r in records] == ["k"]


def test_output_order_is_stable_for_identical_inputs():
    left = {"z": "1", "a": "1", "m": "1"}
    right = {"q": "2", "a": "2", "z": "2"}
    first = compute_diffs(left, right)
    second = compute_diffs(dict(left), dict(right))
    assert first == second
    assert len(first) == 4
