from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, Optional

from config import MIN_WITHDRAWAL_PROFIT, PROFIT_SPLIT, VALID_DAY_PCT

ACCOUNT_SIZES: tuple[int, ...] = (1_000, 5_000, 10_000, 25_000, 50_000, 100_000)


@dataclass(frozen=True)
class RuleProfile:
    """Payout rules of one funding program at one account size.

    consistency_pct      : max share (in %) of total profit a single day may hold
    min_trading_days     : valid trading days needed before a withdrawal
    valid_day_pct        : day counts as valid when profit >= account_size * valid_day_pct
    max_withdrawal_profit: profit cap per payout, None = uncapped
    """
    program: str
    label: str
    consistency_pct: float = 15.0
    min_trading_days: int = 3
    account_size: int = 1_000
    min_withdrawal_profit: float = MIN_WITHDRAWAL_PROFIT
    profit_split: float = PROFIT_SPLIT
    valid_day_pct: float = VALID_DAY_PCT
    max_withdrawal_profit: Optional[float] = None

    @property
    def threshold(self) -> float:
        return self.consistency_pct / 100.0

    @property
    def valid_day_min(self) -> float:
        return self.account_size * self.valid_day_pct

    def payout_for(self, profit: float) -> float:
        """Trader's share of `profit`, honouring the payout cap."""
        if profit <= 0:
            return 0.0
        if self.max_withdrawal_profit is not None:
            profit = min(profit, self.max_withdrawal_profit)
        return profit * self.profit_split


PROGRAMS: Dict[str, RuleProfile] = {
    "15_promo": RuleProfile("15_promo", "1K $1 Instant Account (15% Rule)",
                            consistency_pct=15.0, min_trading_days=3,
                            account_size=1_000, max_withdrawal_profit=100.0),
    "15": RuleProfile("15", "Instant GOAT / Blitz (15% Rule)",
                      consistency_pct=15.0, min_trading_days=5),
    "20": RuleProfile("20", "Instant PRO (20% Rule)",
                      consistency_pct=20.0, min_trading_days=5),
}


def get_profile(program: str, account_size: Optional[int] = None) -> RuleProfile:
    """Look up a program and size it to `account_size` (program default if None)."""
    if program not in PROGRAMS:
        raise KeyError(f"Unknown program: {program!r} (choose from {sorted(PROGRAMS)})")
    profile = PROGRAMS[program]
    if account_size is None or account_size == profile.account_size:
        return profile
    if account_size not in ACCOUNT_SIZES:
        raise ValueError(f"Unsupported account size: {account_size} (choose from {ACCOUNT_SIZES})")
    if profile.max_withdrawal_profit is not None:
        raise ValueError(f"Program {program!r} is only offered at ${profile.account_size:,}")
    return replace(profile, account_size=account_size)


__all__ = ["ACCOUNT_SIZES", "PROGRAMS", "RuleProfile", "get_profile"]
