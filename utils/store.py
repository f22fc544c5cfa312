# utils/store.py
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

import pandas as pd

from config import (
    DEFAULT_ACCOUNT_SIZE,
    DEFAULT_NUM_DAYS,
    DEFAULT_PAYOUT_GOAL,
    DEFAULT_PLANNED_DAYS,
    DEFAULT_PROGRAM,
    MAX_DAYS,
    STATE_FILE,
    logger,
)
from risk.rules import PROGRAMS, RuleProfile, get_profile
from utils.parsing import build_days, clamp_planned_days, coerce_profit
from utils.structs import DailyResult


@dataclass(frozen=True)
class InputSnapshot:
    """Last entered working set. Evaluations are never stored, only inputs."""
    program: str = DEFAULT_PROGRAM
    account_size: int = DEFAULT_ACCOUNT_SIZE
    days: tuple[float, ...] = field(default_factory=lambda: (0.0,) * DEFAULT_NUM_DAYS)
    payout_goal: float = DEFAULT_PAYOUT_GOAL
    planned_days: int = DEFAULT_PLANNED_DAYS

    @property
    def profile(self) -> RuleProfile:
        return get_profile(self.program, self.account_size)

    @property
    def daily_results(self) -> list[DailyResult]:
        return build_days(self.days)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["days"] = list(self.days)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "InputSnapshot":
        """Run stored values back through the input boundary."""
        program = str(data.get("program", DEFAULT_PROGRAM))
        if program not in PROGRAMS:
            logger.warning(f"Unknown program {program!r} in snapshot, using {DEFAULT_PROGRAM}")
            program = DEFAULT_PROGRAM
        account_size = int(coerce_profit(data.get("account_size")))
        try:
            get_profile(program, account_size or None)
        except ValueError:
            logger.warning(f"Account size {account_size} not offered for {program!r}, using default")
            account_size = 0
        days = [coerce_profit(v) for v in list(data.get("days") or [])[:MAX_DAYS]]
        return cls(
            program=program,
            account_size=account_size or PROGRAMS[program].account_size,
            days=tuple(days) if days else (0.0,) * DEFAULT_NUM_DAYS,
            payout_goal=max(0.0, coerce_profit(data.get("payout_goal", DEFAULT_PAYOUT_GOAL))),
            planned_days=clamp_planned_days(data.get("planned_days", DEFAULT_PLANNED_DAYS)),
        )


def default_snapshot() -> InputSnapshot:
    return InputSnapshot()


def _path(path: Optional[Path | str]) -> Path:
    return Path(path) if path is not None else Path(STATE_FILE)


def load_snapshot(path: Optional[Path | str] = None) -> Optional[InputSnapshot]:
    """Stored snapshot, or None when there is none (or it can't be read)."""
    p = _path(path)
    if not p.exists():
        return None
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable snapshot {p}: {e}")
        return None
    if not isinstance(data, dict):
        logger.warning(f"Ignoring snapshot {p}: expected an object, got {type(data).__name__}")
        return None
    return InputSnapshot.from_dict(data)


def save_snapshot(snapshot: InputSnapshot, path: Optional[Path | str] = None) -> Path:
    p = _path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(snapshot.to_dict(), f, indent=2)
    logger.info(f"Saved snapshot ({len(snapshot.days)} days, program {snapshot.program}) to {p}")
    return p


def reset_snapshot(path: Optional[Path | str] = None) -> InputSnapshot:
    """Back to defaults, persisted."""
    snap = default_snapshot()
    save_snapshot(snap, path)
    return snap


def load_days_csv(csv: Path) -> list[float]:
    """Read daily P&L from CSV: a 'profit' (or 'pnl') column, optional 'day' column for ordering."""
    if not csv.exists():
        raise FileNotFoundError(csv)
    df = pd.read_csv(csv)
    df.columns = [str(c).strip().lower() for c in df.columns]
    col = next((c for c in ("profit", "pnl", "p&l", "net") if c in df.columns), None)
    if col is None:
        raise KeyError(f"CSV missing a profit column (profit/pnl): {list(df.columns)}")
    if "day" in df.columns:
        df = df.sort_values("day", kind="stable")
    values = pd.to_numeric(df[col], errors="coerce").fillna(0.0).tolist()
    if not values:
        raise ValueError(f"No rows in {csv}")
    if len(values) > MAX_DAYS:
        raise ValueError(f"{len(values)} days in {csv}, max is {MAX_DAYS}")
    return [coerce_profit(v) for v in values]


__all__ = [
    "InputSnapshot",
    "default_snapshot",
    "load_snapshot",
    "save_snapshot",
    "reset_snapshot",
    "load_days_csv",
]
