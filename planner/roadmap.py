"""
Roadmap / action plan towards a withdrawal.

Works on an EvaluationResult only and never touches the day log; every number
here is a suggestion for the days still to trade.
"""
from __future__ import annotations

import math
from typing import Optional

from config import DEFAULT_PAYOUT_GOAL, DEFAULT_PLANNED_DAYS, RISKY_PCT_OF_HIGH, logger
from risk.rules import RuleProfile
from utils.parsing import clamp_planned_days
from utils.structs import DayTarget, EvaluationResult, PacingScenario, RoadmapPlan

# (name, label, share of current highest day); 'safe' uses the valid-day minimum
PACING = (
    ("fast", "Fastest Path", 0.99),
    ("balanced", "Balanced Path", 0.50),
    ("safe", "Safe Path", None),
)


def _ceil_cents(x: float) -> float:
    return math.ceil(x * 100.0) / 100.0


def target_profit(result: EvaluationResult, profile: RuleProfile, payout_goal: float) -> float:
    """Total profit that satisfies the minimum, the consistency rule and the payout goal."""
    # a passing log already satisfies the rule at its current total
    if result.passed:
        for_consistency = result.total_net_profit
    else:
        for_consistency = result.highest_day_profit / profile.threshold
    for_payout = max(0.0, payout_goal) / profile.profit_split
    return max(profile.min_withdrawal_profit, for_consistency, for_payout)


def is_risky(rate: float, highest: float) -> bool:
    """A day this big comes close to (or beats) the current high and can re-breach the rule."""
    return highest > 0 and rate > highest * RISKY_PCT_OF_HIGH


def pacing_scenarios(result: EvaluationResult, profile: RuleProfile,
                     amount_needed: float) -> list[PacingScenario]:
    if amount_needed <= 0:
        return []
    highest = result.highest_day_profit
    out = []
    for name, label, share in PACING:
        rate = profile.valid_day_min if share is None else highest * share
        if rate <= 0:
            continue
        days_needed = math.ceil(amount_needed / rate)
        gross = days_needed * rate
        out.append(PacingScenario(
            name=name,
            label=label,
            daily_rate=rate,
            days_needed=days_needed,
            projected_gross=gross,
            projected_payout=profile.payout_for(result.total_net_profit + gross),
            risky=is_risky(rate, highest),
        ))
    return out


def build_roadmap(result: EvaluationResult, profile: RuleProfile,
                  payout_goal: Optional[float] = None,
                  planned_days: Optional[int] = None) -> RoadmapPlan:
    """
    Plan the remaining trading days.

    Args:
        result: evaluation of the current day log
        profile: program rules
        payout_goal: net payout the trader wants to withdraw (after split)
        planned_days: preferred duration, clamped to 3..30

    Returns:
        RoadmapPlan; `ready=True` and no targets when already eligible.
    """
    total = result.total_net_profit
    if result.withdrawal_eligible:
        return RoadmapPlan(
            ready=True, target_profit=total, amount_needed=0.0, days_missing=0,
            horizon=0, daily_target=0.0, risky=False,
            projected_total=total, projected_payout=profile.payout_for(total),
        )

    goal = DEFAULT_PAYOUT_GOAL if payout_goal is None else payout_goal
    duration = clamp_planned_days(DEFAULT_PLANNED_DAYS if planned_days is None else planned_days)

    target = target_profit(result, profile, goal)
    amount_needed = max(0.0, target - total)
    days_missing = result.day_gap
    horizon = max(days_missing, duration)
    daily_target = amount_needed / horizon

    if amount_needed > 0:
        per_day = _ceil_cents(max(profile.valid_day_min, daily_target))
        schedule = [DayTarget(day=i + 1, target=per_day) for i in range(horizon)]
    else:
        # profit is there, only the valid-day count is missing
        per_day = _ceil_cents(profile.valid_day_min)
        schedule = [DayTarget(day=i + 1, target=per_day) for i in range(days_missing)]

    risky = amount_needed > 0 and is_risky(daily_target, result.highest_day_profit)
    projected_total = max(target, total)
    logger.debug(
        f"roadmap: target={target:.2f} needed={amount_needed:.2f} horizon={horizon} "
        f"daily={daily_target:.2f} risky={risky}"
    )
    return RoadmapPlan(
        ready=False,
        target_profit=target,
        amount_needed=amount_needed,
        days_missing=days_missing,
        horizon=horizon,
        daily_target=daily_target,
        risky=risky,
        projected_total=projected_total,
        projected_payout=profile.payout_for(projected_total),
        daily_targets=schedule,
        scenarios=pacing_scenarios(result, profile, amount_needed),
    )


__all__ = ["PACING", "build_roadmap", "pacing_scenarios", "target_profit", "is_risky"]
