from __future__ import annotations
from typing import Sequence

from config import logger
from risk.consistency import evaluate_consistency, evaluate_totals
from risk.rules import RuleProfile
from utils.structs import ConsistencyResult, DailyResult, EvaluationResult


def count_valid_days(days: Sequence[DailyResult], profile: RuleProfile) -> int:
    """Days whose profit reaches the 0.5%-of-account minimum."""
    return sum(1 for d in days if d.profit >= profile.valid_day_min)


def _eligibility(c: ConsistencyResult, valid_days: int, profile: RuleProfile) -> EvaluationResult:
    total = c.total_net_profit
    eligible = (
        c.passed
        and total >= profile.min_withdrawal_profit
        and valid_days >= profile.min_trading_days
    )
    potential = total * profile.profit_split if eligible else 0.0
    withdrawable = profile.payout_for(total) if eligible else 0.0
    return EvaluationResult(
        consistency=c,
        valid_trading_days=valid_days,
        withdrawal_eligible=eligible,
        potential_payout=potential,
        withdrawable_payout=withdrawable,
        profit_gap=max(0.0, profile.min_withdrawal_profit - total),
        day_gap=max(0, profile.min_trading_days - valid_days),
        consistency_gap=0.0 if c.passed else max(0.0, c.required_total_profit - total),
        safe_day_limit=total * profile.threshold if c.passed else 0.0,
    )


def evaluate(days: Sequence[DailyResult], profile: RuleProfile) -> EvaluationResult:
    """Full evaluation of a day log: consistency, valid days, payout."""
    c = evaluate_consistency(days, profile)
    valid = count_valid_days(days, profile)
    result = _eligibility(c, valid, profile)
    logger.debug(f"eligibility: valid_days={valid}/{profile.min_trading_days} eligible={result.withdrawal_eligible}")
    return result


def evaluate_summary(highest_day_profit: float, total: float, valid_days: int,
                     profile: RuleProfile) -> EvaluationResult:
    """Evaluation from aggregates (highest day, total, valid days already counted)."""
    c = evaluate_totals(highest_day_profit, total, profile)
    return _eligibility(c, max(0, int(valid_days)), profile)


def blockers(result: EvaluationResult, profile: RuleProfile) -> list[str]:
    """Unmet withdrawal conditions, in the order a trader should fix them."""
    out: list[str] = []
    if result.withdrawal_eligible:
        return out
    if not result.is_profitable:
        out.append("Target a positive net profit to enable the consistency check.")
    elif not result.passed:
        out.append(
            f"Fix consistency: highest day is {result.consistency.consistency_pct:.1f}% of total "
            f"(max {profile.consistency_pct:g}%), need +${result.consistency_gap:.2f} more profit."
        )
    if result.profit_gap > 0:
        out.append(f"Minimum profit of ${profile.min_withdrawal_profit:g} required (shortfall ${result.profit_gap:.2f}).")
    if result.day_gap > 0:
        out.append(
            f"Need {profile.min_trading_days}+ valid trading days of ${profile.valid_day_min:.2f}+ "
            f"({result.day_gap} more)."
        )
    return out


__all__ = ["count_valid_days", "evaluate", "evaluate_summary", "blockers"]
