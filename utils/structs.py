"""
Data structures for daily results, evaluations and roadmap plans.
"""
from __future__ import annotations
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class DailyResult:
    """One trading day of net P&L. `day` is 1-based."""
    day: int
    profit: float = 0.0

    @property
    def is_winner(self) -> bool:
        return self.profit > 0

    def to_dict(self) -> dict:
        return {'day': self.day, 'profit': self.profit}


class ConsistencyStatus(Enum):
    PASSED = 'PASSED'
    BREACHED = 'BREACHED'
    NOT_APPLICABLE = 'NOT_APPLICABLE'  # total profit <= 0


@dataclass(frozen=True)
class ConsistencyResult:
    """Output of the consistency rule check."""
    total_net_profit: float
    highest_day_profit: float
    highest_day: Optional[int]
    consistency_pct: Optional[float]
    status: ConsistencyStatus
    required_total_profit: float

    @property
    def passed(self) -> bool:
        return self.status is ConsistencyStatus.PASSED

    @property
    def is_profitable(self) -> bool:
        return self.status is not ConsistencyStatus.NOT_APPLICABLE


@dataclass(frozen=True)
class EvaluationResult:
    """Consistency verdict plus payout eligibility for one snapshot."""
    consistency: ConsistencyResult
    valid_trading_days: int
    withdrawal_eligible: bool
    potential_payout: float
    withdrawable_payout: float
    profit_gap: float
    day_gap: int
    consistency_gap: float
    safe_day_limit: float

    # shortcuts, the CLI and planner mostly read these
    @property
    def total_net_profit(self) -> float:
        return self.consistency.total_net_profit

    @property
    def highest_day_profit(self) -> float:
        return self.consistency.highest_day_profit

    @property
    def passed(self) -> bool:
        return self.consistency.passed

    @property
    def is_profitable(self) -> bool:
        return self.consistency.is_profitable

    def to_dict(self) -> dict:
        c = self.consistency
        return {
            'total_net_profit': c.total_net_profit,
            'highest_day_profit': c.highest_day_profit,
            'highest_day': c.highest_day,
            'consistency_pct': c.consistency_pct,
            'status': c.status.value,
            'passed': c.passed,
            'required_total_profit': c.required_total_profit,
            'valid_trading_days': self.valid_trading_days,
            'withdrawal_eligible': self.withdrawal_eligible,
            'potential_payout': self.potential_payout,
            'withdrawable_payout': self.withdrawable_payout,
            'profit_gap': self.profit_gap,
            'day_gap': self.day_gap,
            'consistency_gap': self.consistency_gap,
            'safe_day_limit': self.safe_day_limit,
        }


@dataclass(frozen=True)
class DayTarget:
    day: int          # offset from today, 1-based
    target: float


@dataclass(frozen=True)
class PacingScenario:
    name: str  # 'fast', 'balanced' or 'safe'
    label: str
    daily_rate: float
    days_needed: int
    projected_gross: float
    projected_payout: float
    risky: bool


@dataclass(frozen=True)
class RoadmapPlan:
    """Advisory plan towards a withdrawal. Empty when already eligible."""
    ready: bool
    target_profit: float
    amount_needed: float
    days_missing: int
    horizon: int
    daily_target: float
    risky: bool
    projected_total: float
    projected_payout: float
    daily_targets: list[DayTarget] = field(default_factory=list)
    scenarios: list[PacingScenario] = field(default_factory=list)

    @property
    def scheduled_total(self) -> float:
        return sum(t.target for t in self.daily_targets)

    def to_dict(self) -> dict:
        return asdict(self)
