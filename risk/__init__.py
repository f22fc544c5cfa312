# risk/__init__.py
"""
Payout rule checks for funded accounts.

Exports:
- Program profiles (PROGRAMS, get_profile)
- Consistency rule evaluation
- Withdrawal eligibility
"""

from .rules import (ACCOUNT_SIZES, PROGRAMS, RuleProfile, get_profile, )
from .consistency import (evaluate_consistency, evaluate_totals, )
from .eligibility import (blockers, count_valid_days, evaluate, evaluate_summary, )

__all__ = [
    "ACCOUNT_SIZES",
    "PROGRAMS",
    "RuleProfile",
    "get_profile",
    "evaluate_consistency",
    "evaluate_totals",
    "count_valid_days",
    "evaluate",
    "evaluate_summary",
    "blockers",
]
