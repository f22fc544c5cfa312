# test/test_metrics.py
import numpy as np
import pandas as pd

from risk import PROGRAMS
from utils.metrics import consistency_trajectory, days_frame
from utils.parsing import build_days


def test_trajectory_basic():
    s = consistency_trajectory(build_days([50, 30, 20, 10, 5]))
    assert isinstance(s, pd.Series)
    assert list(s.index) == [1, 2, 3, 4, 5]
    assert s.iloc[0] == 100.0
    assert np.isclose(s.iloc[-1], 50 / 115 * 100)
    # diluting only: the share keeps falling
    assert (s.diff().dropna() < 0).all()


def test_trajectory_nan_until_profitable():
    s = consistency_trajectory(build_days([-10, 5, 20]))
    assert np.isnan(s.iloc[0]) and np.isnan(s.iloc[1])
    assert np.isclose(s.iloc[2], 20 / 15 * 100)
    assert consistency_trajectory([]).empty


def test_days_frame_columns():
    df = days_frame(build_days([10, 30, 30, -5]), PROGRAMS["15_promo"])
    expected = {"profit", "cumulative", "share_pct", "valid", "is_high", "running_pct"}
    assert expected <= set(df.columns)
    assert list(df.index) == [1, 2, 3, 4]
    assert df["is_high"].tolist() == [False, True, False, False]
    assert df["valid"].tolist() == [True, True, True, False]
    assert df["cumulative"].iloc[-1] == 65
    assert np.isclose(df["share_pct"].sum(), 100.0)


def test_days_frame_not_profitable():
    df = days_frame(build_days([0, -1]), PROGRAMS["15_promo"])
    assert df["share_pct"].isna().all()
    assert not df["is_high"].any()
