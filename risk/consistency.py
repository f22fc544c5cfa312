from __future__ import annotations

import math
from typing import Sequence

from config import logger
from risk.rules import RuleProfile
from utils.structs import ConsistencyResult, ConsistencyStatus, DailyResult


def _verdict(highest: float, total: float, profile: RuleProfile) -> tuple[float | None, ConsistencyStatus]:
    if total <= 0:
        return None, ConsistencyStatus.NOT_APPLICABLE
    pct = highest / total * 100.0
    # cross-multiplied so e.g. 15 of 100 at a 15% rule is not lost to 0.15 * 100 rounding
    if highest * 100.0 <= profile.consistency_pct * total:
        return pct, ConsistencyStatus.PASSED
    return pct, ConsistencyStatus.BREACHED


def highest_day(days: Sequence[DailyResult]) -> tuple[float, int | None]:
    """Best day profit (floored at 0) and its day number; first occurrence wins ties."""
    best, best_day = 0.0, None
    for d in days:
        if d.profit > best:
            best, best_day = d.profit, d.day
    return best, best_day


def evaluate_consistency(days: Sequence[DailyResult], profile: RuleProfile) -> ConsistencyResult:
    """
    Consistency rule: the highest day may hold at most `consistency_pct`% of the
    net total. A non-positive total is not a failure; the rule just doesn't apply.
    """
    total = math.fsum(d.profit for d in days)
    best, best_day = highest_day(days)
    pct, status = _verdict(best, total, profile)
    logger.debug(f"consistency: total={total:.2f} high={best:.2f} (day {best_day}) -> {status.value}")
    return ConsistencyResult(
        total_net_profit=total,
        highest_day_profit=best,
        highest_day=best_day,
        consistency_pct=pct,
        status=status,
        required_total_profit=best / profile.threshold,
    )


def evaluate_totals(highest_day_profit: float, total: float, profile: RuleProfile) -> ConsistencyResult:
    """Same verdict from aggregate figures, when the per-day log isn't available."""
    best = max(0.0, highest_day_profit)
    pct, status = _verdict(best, total, profile)
    return ConsistencyResult(
        total_net_profit=total,
        highest_day_profit=best,
        highest_day=None,
        consistency_pct=pct,
        status=status,
        required_total_profit=best / profile.threshold,
    )


__all__ = ["evaluate_consistency", "evaluate_totals", "highest_day"]
