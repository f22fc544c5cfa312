# test/test_store.py
import json

import pytest

from utils.store import InputSnapshot, default_snapshot, load_days_csv, load_snapshot, reset_snapshot, save_snapshot


def test_save_and_load(tmp_path):
    path = tmp_path / "state.json"
    snap = InputSnapshot(program="20", account_size=25_000, days=(120.0, -40.0, 300.0),
                         payout_goal=200.0, planned_days=12)
    save_snapshot(snap, path)
    assert load_snapshot(path) == snap
    assert load_snapshot(path).profile.valid_day_min == pytest.approx(125.0)


def test_missing_file_is_none(tmp_path):
    assert load_snapshot(tmp_path / "nope.json") is None


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json")
    assert load_snapshot(path) is None
    path.write_text("[1, 2, 3]")
    assert load_snapshot(path) is None


def test_stored_values_pass_the_input_boundary(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({
        "program": "42",
        "account_size": 7,
        "days": ["10", "junk", None] + [1] * 200,
        "payout_goal": -5,
        "planned_days": 90,
    }))
    snap = load_snapshot(path)
    assert snap.program == "15_promo"
    assert snap.account_size == 1_000
    assert len(snap.days) == 100
    assert snap.days[:3] == (10.0, 0.0, 0.0)
    assert snap.payout_goal == 0.0
    assert snap.planned_days == 30


def test_reset_writes_defaults(tmp_path):
    path = tmp_path / "out" / "state.json"
    save_snapshot(InputSnapshot(days=(1.0, 2.0)), path)
    assert reset_snapshot(path) == default_snapshot()
    assert load_snapshot(path) == default_snapshot()
    assert default_snapshot().days == (0.0,) * 5
    assert default_snapshot().payout_goal == pytest.approx(28.0)


def test_load_days_csv_orders_by_day(tmp_path):
    csv = tmp_path / "pnl.csv"
    csv.write_text("Day,PnL\n3,30\n1,10\n2,oops\n")
    assert load_days_csv(csv) == [10.0, 0.0, 30.0]


def test_load_days_csv_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_days_csv(tmp_path / "missing.csv")
    bad = tmp_path / "bad.csv"
    bad.write_text("date,volume\n2024-01-01,3\n")
    with pytest.raises(KeyError):
        load_days_csv(bad)
