# cli/main.py
from __future__ import annotations

from pathlib import Path

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from config import MAX_DAYS, MIN_DAYS, STATE_FILE, logger
from planner.roadmap import build_roadmap
from risk import ACCOUNT_SIZES, PROGRAMS, blockers, evaluate, evaluate_summary, get_profile
from risk.rules import RuleProfile
from utils.fx import fetch_usd_rate, format_local
from utils.metrics import days_frame
from utils.parsing import clamp_planned_days, coerce_profit, resize_days, set_profit
from utils.store import InputSnapshot, default_snapshot, load_days_csv, load_snapshot, reset_snapshot, save_snapshot
from utils.structs import ConsistencyStatus, EvaluationResult, RoadmapPlan

app = typer.Typer(help="Consistency rule & payout planner", no_args_is_help=True, add_completion=False)
console = Console()


def _load(state: Path) -> InputSnapshot:
    return load_snapshot(state) or default_snapshot()


def _replace(snap: InputSnapshot, **changes) -> InputSnapshot:
    data = snap.to_dict()
    data.update(changes)
    return InputSnapshot.from_dict(data)


def _money(x: float) -> str:
    return f"-${abs(x):,.2f}" if x < 0 else f"${x:,.2f}"


def _print_status(result: EvaluationResult, profile: RuleProfile, rate: float | None) -> None:
    c = result.consistency
    console.print(f"[bold]{profile.label}[/] · ${profile.account_size:,} account")
    console.print(f"{'Total Net Profit':28}: {_money(c.total_net_profit)}")
    high_lbl = f"Highest Profit Day (Day {c.highest_day})" if c.highest_day else "Highest Profit Day"
    console.print(f"{high_lbl:28}: {_money(c.highest_day_profit)}")

    if c.status is ConsistencyStatus.NOT_APPLICABLE:
        console.print(f"{'Consistency':28}: [dim]N/A[/] - target a positive net profit")
    else:
        colour = "green" if c.passed else "red"
        console.print(
            f"{'Consistency':28}: [{colour}]{c.consistency_pct:.1f}% {c.status.value}[/] "
            f"(max {profile.consistency_pct:g}%)"
        )
        if not c.passed:
            console.print(f"{'Profit needed to dilute':28}: {_money(c.required_total_profit)} "
                          f"(+{_money(result.consistency_gap)})")
        else:
            console.print(f"{'Safe profit today':28}: up to {_money(result.safe_day_limit)}")

    console.print(f"{'Valid trading days':28}: {result.valid_trading_days}/{profile.min_trading_days} "
                  f"(>= {_money(profile.valid_day_min)})")
    ready = "[bold green]READY[/]" if result.withdrawal_eligible else "[bold red]NOT READY[/]"
    console.print(f"{'Withdrawal':28}: {ready}")
    payout = _money(result.withdrawable_payout)
    if rate is not None:
        payout += f" ≈ {format_local(result.withdrawable_payout, rate)}"
    split_lbl = f"Payout ({profile.profit_split:.0%} split)"
    console.print(f"{split_lbl:28}: {payout}")
    if (profile.max_withdrawal_profit is not None
            and result.total_net_profit > profile.max_withdrawal_profit):
        console.print(f"[yellow]* Profit exceeds {_money(profile.max_withdrawal_profit)} cap, payout is limited.[/]")
    for b in blockers(result, profile):
        console.print(f"[yellow]• {b}[/]")


def _print_days(snap: InputSnapshot, profile: RuleProfile) -> None:
    df = days_frame(snap.daily_results, profile)
    table = Table(title="Daily Result Log")
    for col in ("Day", "Profit", "Cumulative", "Share", "Running %", "Valid"):
        table.add_column(col, justify="right")
    for day, row in df.iterrows():
        style = "bold" if row["is_high"] else None
        share = "-" if pd.isna(row["share_pct"]) else f"{row['share_pct']:.1f}%"
        running = "-" if pd.isna(row["running_pct"]) else f"{row['running_pct']:.1f}%"
        table.add_row(str(day), _money(row["profit"]), _money(row["cumulative"]), share, running,
                      "✓" if row["valid"] else "", style=style)
    console.print(table)


def _print_plan(plan: RoadmapPlan, profile: RuleProfile, highest: float, rate: float | None) -> None:
    if plan.ready:
        console.print(f"[bold green]You meet all requirements.[/] Request a payout of "
                      f"{_money(plan.projected_payout)} now.")
        return
    console.print(f"[bold]Goal[/]: {_money(plan.target_profit)} total profit "
                  f"(+{_money(plan.amount_needed)} to go)")
    if plan.target_profit > profile.min_withdrawal_profit:
        console.print(f"[dim]* Goal is above {_money(profile.min_withdrawal_profit)} because of the "
                      f"consistency rule or your payout goal.[/]")
    if plan.risky:
        console.print(f"[red]⚠ {_money(plan.daily_target)}/day is close to your highest day "
                      f"({_money(highest)}). Consider a longer duration.[/]")

    table = Table(title=f"{plan.horizon} Day Strategy" if plan.amount_needed > 0 else "Days still to trade")
    table.add_column("Day", justify="right")
    table.add_column("Target", justify="right")
    for t in plan.daily_targets:
        table.add_row(f"Day {t.day}", f"+{_money(t.target)}")
    console.print(table)

    if plan.scenarios:
        st = Table(title="Action Plans")
        for col in ("Path", "Daily", "Days", "Gross", "Payout", "Risk"):
            st.add_column(col, justify="right")
        for s in plan.scenarios:
            st.add_row(s.label, f"~{_money(s.daily_rate)}", str(s.days_needed), f"+{_money(s.projected_gross)}",
                       _money(s.projected_payout), "[red]risky[/]" if s.risky else "ok")
        console.print(st)
        if highest > 0:
            console.print(f"[dim]* Trading more than {_money(highest)} in a single day widens the gap.[/]")

    payout = _money(plan.projected_payout)
    if rate is not None:
        payout += f" ≈ {format_local(plan.projected_payout, rate)}"
    console.print(f"[bold]Projected payout[/]: {payout}")


@app.command()
def programs():
    """List funding programs and their payout rules."""
    table = Table(title="Programs")
    for col in ("Key", "Program", "Rule", "Min days", "Default size", "Payout cap"):
        table.add_column(col)
    for key, p in PROGRAMS.items():
        cap = _money(p.max_withdrawal_profit) if p.max_withdrawal_profit is not None else "-"
        table.add_row(key, p.label, f"{p.consistency_pct:g}%", str(p.min_trading_days),
                      f"${p.account_size:,}", cap)
    console.print(table)
    console.print(f"Account sizes: {', '.join(f'${s:,}' for s in ACCOUNT_SIZES)}")


@app.command()
def configure(
    program: str | None = typer.Option(None, help=f"Program key ({', '.join(PROGRAMS)})"),
    account_size: int | None = typer.Option(None, help="Account size in USD"),
    goal: float | None = typer.Option(None, help="Net payout you want to withdraw"),
    duration: int | None = typer.Option(None, help="Planned trading duration (3-30 days)"),
    state: Path = typer.Option(Path(STATE_FILE), "--state", help="Snapshot file (JSON)"),
):
    """Select program / account size and planning preferences."""
    snap = _load(state)
    new_program = program or snap.program
    new_size = account_size or (snap.account_size if program is None else None)
    try:
        profile = get_profile(new_program, new_size)
    except (KeyError, ValueError) as e:
        raise typer.BadParameter(str(e.args[0]))
    snap = _replace(
        snap,
        program=new_program,
        account_size=profile.account_size,
        payout_goal=snap.payout_goal if goal is None else max(0.0, coerce_profit(goal)),
        planned_days=snap.planned_days if duration is None else clamp_planned_days(duration),
    )
    save_snapshot(snap, state)
    console.print(f"[green]Using {profile.label}, ${profile.account_size:,}[/] · "
                  f"goal {_money(snap.payout_goal)} · {snap.planned_days} days")


@app.command()
def days(
    n: int = typer.Argument(..., min=MIN_DAYS, max=MAX_DAYS, help="Number of trading days"),
    state: Path = typer.Option(Path(STATE_FILE), "--state", help="Snapshot file (JSON)"),
):
    """Resize the day log (keeps existing values, new days start at 0)."""
    snap = _load(state)
    resized = resize_days(snap.daily_results, n)
    snap = _replace(snap, days=[d.profit for d in resized])
    save_snapshot(snap, state)
    console.print(f"Day log now has {n} days.")


@app.command("set", context_settings={"ignore_unknown_options": True})
def set_day(
    day: int = typer.Argument(..., help="Day number (1-based)"),
    value: str = typer.Argument(..., help="Net P&L for that day; anything non-numeric counts as 0"),
    state: Path = typer.Option(Path(STATE_FILE), "--state", help="Snapshot file (JSON)"),
):
    """Enter the P&L of one day."""
    snap = _load(state)
    try:
        updated = set_profit(snap.daily_results, day, value)
    except IndexError as e:
        raise typer.BadParameter(str(e))
    snap = _replace(snap, days=[d.profit for d in updated])
    save_snapshot(snap, state)
    console.print(f"Day {day}: {_money(updated[day - 1].profit)}")


@app.command("import-csv")
def import_csv(
    csv: Path = typer.Argument(..., help="CSV with a profit/pnl column"),
    state: Path = typer.Option(Path(STATE_FILE), "--state", help="Snapshot file (JSON)"),
):
    """Replace the day log with values from a CSV file."""
    try:
        values = load_days_csv(csv)
    except (FileNotFoundError, KeyError, ValueError) as e:
        console.print(f"[red]Import failed:[/] {e}")
        raise typer.Exit(code=1)
    snap = _replace(_load(state), days=values)
    save_snapshot(snap, state)
    console.print(f"Imported {len(values)} days from {csv}")


@app.command()
def reset(state: Path = typer.Option(Path(STATE_FILE), "--state", help="Snapshot file (JSON)")):
    """Back to defaults."""
    reset_snapshot(state)
    console.print("Reset to defaults.")


@app.command()
def status(
    output_json: bool = typer.Option(False, "--json", help="Print evaluation as JSON"),
    fx: bool = typer.Option(False, "--fx", help="Show payout in local currency"),
    state: Path = typer.Option(Path(STATE_FILE), "--state", help="Snapshot file (JSON)"),
):
    """Check consistency and withdrawal status of the day log."""
    snap = _load(state)
    profile = snap.profile
    result = evaluate(snap.daily_results, profile)
    if output_json:
        console.print_json(data={"program": snap.program, "account_size": profile.account_size,
                                 "days": list(snap.days), "evaluation": result.to_dict()})
        return
    _print_days(snap, profile)
    _print_status(result, profile, fetch_usd_rate() if fx else None)


@app.command()
def quick(
    highest: float = typer.Option(..., help="Highest profit day (USD)"),
    total: float = typer.Option(..., help="Current total profit (USD)"),
    valid_days: int = typer.Option(0, min=0, help="Valid trading days completed"),
    program: str = typer.Option("15_promo", help="Program key"),
    goal: float | None = typer.Option(None, help="Net payout goal for a roadmap"),
    duration: int = typer.Option(5, help="Planned trading duration (3-30 days)"),
    output_json: bool = typer.Option(False, "--json", help="Print as JSON"),
):
    """Check status from totals only, without a day log."""
    try:
        profile = get_profile(program)
    except KeyError as e:
        raise typer.BadParameter(str(e.args[0]))
    result = evaluate_summary(highest, total, valid_days, profile)
    plan = build_roadmap(result, profile, payout_goal=goal, planned_days=duration)
    if output_json:
        console.print_json(data={"evaluation": result.to_dict(), "roadmap": plan.to_dict()})
        return
    _print_status(result, profile, None)
    _print_plan(plan, profile, result.highest_day_profit, None)


@app.command()
def plan(
    goal: float | None = typer.Option(None, help="Net payout you want to withdraw (default: saved goal)"),
    duration: int | None = typer.Option(None, help="Planned trading duration, 3-30 days (default: saved)"),
    output_json: bool = typer.Option(False, "--json", help="Print roadmap as JSON"),
    fx: bool = typer.Option(False, "--fx", help="Show payout in local currency"),
    state: Path = typer.Option(Path(STATE_FILE), "--state", help="Snapshot file (JSON)"),
):
    """Plan the days until a withdrawal."""
    snap = _load(state)
    profile = snap.profile
    result = evaluate(snap.daily_results, profile)
    roadmap = build_roadmap(
        result, profile,
        payout_goal=snap.payout_goal if goal is None else goal,
        planned_days=snap.planned_days if duration is None else duration,
    )
    logger.info(f"plan: ready={roadmap.ready} horizon={roadmap.horizon} needed={roadmap.amount_needed:.2f}")
    if output_json:
        console.print_json(data={"evaluation": result.to_dict(), "roadmap": roadmap.to_dict()})
        return
    _print_status(result, profile, None)
    console.print()
    _print_plan(roadmap, profile, result.highest_day_profit, fetch_usd_rate() if fx else None)


if __name__ == "__main__":
    app()
