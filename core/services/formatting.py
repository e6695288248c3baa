"""Display helpers for a planned week: day labels, day status, text and markdown summaries."""

from __future__ import annotations

from typing import Iterable, Mapping

from core.services.planning import PlanInput, PlanResult
from core.services.rules import DEFAULT_CATALOGS, RuleCatalogs
from core.services.weekdays import DAYS, LONG_RUN_DAY, QUALITY_DAYS, Weekday


def day_name(day: int) -> str:
    return DAYS[day]


def format_viable_days(days: Iterable[int]) -> str:
    names = [day_name(d) for d in days]
    return ", ".join(names) if names else "no days"


def blocked_days(viable_days: Iterable[int]) -> list[Weekday]:
    """Mon..Sat days closed to quality work (the inverse of the viable set)."""
    viable = set(viable_days)
    return [d for d in QUALITY_DAYS if d not in viable]


def day_status(day: int, schedule: Mapping[int, str], viable_days: Iterable[int]) -> str:
    if day == LONG_RUN_DAY:
        return "long"
    if schedule.get(day):
        return "quality"
    if day not in set(viable_days):
        return "blocked"
    return "easy"


def _format_distance(miles: float) -> str:
    miles = float(miles)
    text = str(int(miles)) if miles.is_integer() else repr(miles)
    return f"{text} mi"


def _week_rows(plan_input: PlanInput, result: PlanResult, catalogs: RuleCatalogs) -> list[tuple[str, str, bool]]:
    long_label = catalogs.long_rule(result.effective_long_type).label
    rows: list[tuple[str, str, bool]] = []
    for day in Weekday:
        status = day_status(day, result.schedule, result.viable_days)
        if status == "long":
            rows.append((day.label, f"{long_label} ({_format_distance(plan_input.long_distance_mi)})", True))
        elif status == "quality":
            rows.append((day.label, result.schedule[day], True))
        elif status == "blocked":
            rows.append((day.label, "Recovery (blocked)", False))
        else:
            rows.append((day.label, "Easy run", False))
    return rows


def format_week_as_text(plan_input: PlanInput, result: PlanResult, catalogs: RuleCatalogs = DEFAULT_CATALOGS) -> str:
    lines = ["WEEKLY TRAINING PLAN", "=" * 50, ""]
    for label, workout, _key_day in _week_rows(plan_input, result, catalogs):
        lines.append(f"{label}: {workout}")
    if result.warnings:
        lines.append("")
        lines.extend(f"! {w}" for w in result.warnings)
    return "\n".join(lines)


def format_week_as_markdown(plan_input: PlanInput, result: PlanResult, catalogs: RuleCatalogs = DEFAULT_CATALOGS) -> str:
    lines = ["# Weekly Training Plan", "", "| Day | Workout |", "| --- | --- |"]
    for label, workout, key_day in _week_rows(plan_input, result, catalogs):
        day_cell = f"**{label}**" if key_day else label
        lines.append(f"| {day_cell} | {workout} |")
    if result.warnings:
        lines.append("")
        lines.extend(f"> {w}" for w in result.warnings)
    return "\n".join(lines)
