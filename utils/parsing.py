# utils/parsing.py
"""
Input boundary: everything typed by the user passes through here before it
reaches the evaluators, so those can assume clean floats and valid counts.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Sequence

from config import MAX_DAYS, MAX_PLANNED_DAYS, MIN_DAYS, MIN_PLANNED_DAYS
from utils.structs import DailyResult


def coerce_profit(raw: Any) -> float:
    """Parse a P&L entry. Empty, non-numeric, NaN and inf all become 0.0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "").lstrip("$")
        if not raw:
            return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def _parse_int(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(value) or not value.is_integer():
            return None
        return int(value)


def parse_day_count(raw: Any, current: int) -> int:
    """New day count if `raw` is an integer in [MIN_DAYS, MAX_DAYS], else `current`."""
    n = _parse_int(raw)
    if n is None or n < MIN_DAYS or n > MAX_DAYS:
        return current
    return n


def clamp_planned_days(raw: Any) -> int:
    """Planned duration clamped to [MIN_PLANNED_DAYS, MAX_PLANNED_DAYS]; garbage -> minimum."""
    n = _parse_int(raw)
    if n is None:
        return MIN_PLANNED_DAYS
    return max(MIN_PLANNED_DAYS, min(MAX_PLANNED_DAYS, n))


def build_days(values: Iterable[Any]) -> list[DailyResult]:
    """Raw P&L values -> numbered DailyResult list (day 1..n)."""
    return [DailyResult(day=i + 1, profit=coerce_profit(v)) for i, v in enumerate(values)]


def resize_days(days: Sequence[DailyResult], n: int) -> list[DailyResult]:
    """Keep profits by index, zero-fill new slots, drop extra slots."""
    if n < MIN_DAYS or n > MAX_DAYS:
        raise ValueError(f"Day count must be between {MIN_DAYS} and {MAX_DAYS}, got {n}")
    return [
        DailyResult(day=i + 1, profit=days[i].profit if i < len(days) else 0.0)
        for i in range(n)
    ]


def set_profit(days: Sequence[DailyResult], day: int, raw: Any) -> list[DailyResult]:
    """Return a copy of `days` with `day` (1-based) set to the parsed `raw`."""
    if day < 1 or day > len(days):
        raise IndexError(f"Day {day} outside 1..{len(days)}")
    out = list(days)
    out[day - 1] = DailyResult(day=day, profit=coerce_profit(raw))
    return out


__all__ = [
    "coerce_profit",
    "parse_day_count",
    "clamp_planned_days",
    "build_days",
    "resize_days",
    "set_profit",
]
