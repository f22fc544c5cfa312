from __future__ import annotations
from typing import Sequence

import numpy as np
import pandas as pd

from risk.rules import RuleProfile
from utils.structs import DailyResult


def _profits(days: Sequence[DailyResult]) -> np.ndarray:
    return np.array([d.profit for d in days], dtype="float64")


def consistency_trajectory(days: Sequence[DailyResult]) -> pd.Series:
    """
    Running consistency % after each day: best day so far / total so far.
    NaN where the running total is not positive (rule not applicable yet).
    """
    v = _profits(days)
    idx = pd.Index([d.day for d in days], name="day")
    if v.size == 0:
        return pd.Series([], index=idx, dtype="float64", name="consistency_pct")
    run_max = np.maximum(np.maximum.accumulate(v), 0.0)
    run_total = np.cumsum(v)
    pct = np.full(v.shape, np.nan)
    ok = run_total > 0
    pct[ok] = run_max[ok] / run_total[ok] * 100.0
    return pd.Series(pct, index=idx, name="consistency_pct")


def days_frame(days: Sequence[DailyResult], profile: RuleProfile) -> pd.DataFrame:
    """Per-day table: profit, running total, share of total, valid-day flag, best-day flag."""
    v = _profits(days)
    df = pd.DataFrame({"day": [d.day for d in days], "profit": v})
    df["cumulative"] = np.cumsum(v) if v.size else []
    total = float(v.sum()) if v.size else 0.0
    df["share_pct"] = v / total * 100.0 if total > 0 else np.nan
    df["valid"] = df["profit"] >= profile.valid_day_min
    best = float(v.max()) if v.size else 0.0
    # first occurrence only, same tie rule as the evaluator
    first_best = int(np.argmax(v)) if best > 0 else -1
    df["is_high"] = [i == first_best for i in range(len(v))]
    df["running_pct"] = consistency_trajectory(days).to_numpy()
    return df.set_index("day")


__all__ = ["consistency_trajectory", "days_frame"]
