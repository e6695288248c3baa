from __future__ import annotations

from dataclasses import dataclass, field
import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from core.services.rules import (
    BIG_EASY_THRESHOLD_MI,
    BIG_LONG,
    DEFAULT_CATALOGS,
    EASY_LONG,
    LongRunRule,
    QualityRule,
    RuleCatalogs,
)
from core.services.weekdays import LONG_RUN_DAY, QUALITY_DAYS, Weekday

logger = logging.getLogger(__name__)

UNPLACED_WARNING = 'Could not fit "{key}" given the spacing rules and long-run buffers.'


@dataclass(frozen=True)
class PlanInput:
    long_type: str
    long_distance_mi: float
    quality_selections: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "quality_selections", tuple(self.quality_selections))


@dataclass(frozen=True)
class QueuedSession:
    key: str
    selection_index: int
    rule: QualityRule


@dataclass(frozen=True)
class PlanResult:
    viable_days: tuple[Weekday, ...]
    schedule: Mapping[Weekday, str] = field(hash=False)   # Mon..Sat only
    warnings: tuple[str, ...]
    effective_long_type: str

    def __post_init__(self) -> None:
        ordered = {Weekday(d): self.schedule[d] for d in sorted(self.schedule)}
        object.__setattr__(self, "schedule", MappingProxyType(ordered))

    def to_dict(self) -> dict:
        return {
            "viable_days": [int(d) for d in self.viable_days],
            "schedule": {int(d): key for d, key in self.schedule.items()},
            "warnings": list(self.warnings),
            "effective_long_type": self.effective_long_type,
        }


def normalize_long_key(long_key: str, miles: float, threshold: float = BIG_EASY_THRESHOLD_MI) -> str:
    """Upgrade an easy long run to a Big Easy once the distance reaches ``threshold``."""
    if long_key == EASY_LONG and miles >= threshold:
        return BIG_LONG
    return long_key


def compute_blocked_days(long_rule: LongRunRule) -> frozenset[Weekday]:
    """Days closed to quality work by the long run's recovery and taper buffers."""
    blocked = {LONG_RUN_DAY}
    span = len(QUALITY_DAYS)
    # Recovery after the long run: Mon onwards.
    for i in range(min(long_rule.after, span)):
        blocked.add(Weekday(Weekday.MON + i))
    # Taper before the long run: Sat backwards.
    for i in range(min(long_rule.before, span)):
        blocked.add(Weekday(Weekday.SAT - i))
    return frozenset(blocked)


def candidate_days(blocked: Iterable[int]) -> tuple[Weekday, ...]:
    blocked = set(blocked)
    return tuple(d for d in QUALITY_DAYS if d not in blocked)


def order_selections(selections: Iterable[str], qualities: Mapping[str, QualityRule]) -> list[QueuedSession]:
    """Resolve requested keys into a placement queue.

    Unknown keys are dropped. The queue runs heaviest first; equal weights keep
    the caller's order, with the key itself as the last tiebreak.
    """
    queue = [
        QueuedSession(key=key, selection_index=idx, rule=qualities[key])
        for idx, key in enumerate(selections)
        if key in qualities
    ]
    queue.sort(key=lambda q: (-q.rule.weight, q.selection_index, q.key))
    return queue


def _nearest_left(day: int, schedule: Mapping[Weekday, str]) -> Optional[Weekday]:
    for idx in range(day - 1, Weekday.MON - 1, -1):
        if idx in schedule:
            return Weekday(idx)
    return None


def _nearest_right(day: int, schedule: Mapping[Weekday, str]) -> Optional[Weekday]:
    for idx in range(day + 1, Weekday.SAT + 1):
        if idx in schedule:
            return Weekday(idx)
    return None


def _lead_in_clear(day: int, before: int, schedule: Mapping[Weekday, str]) -> bool:
    for k in range(1, before + 1):
        idx = day - k
        if idx < Weekday.MON:
            # Window falls off Monday.
            return False
        if idx in schedule:
            return False
    return True


def _spacing_ok(
    day: int,
    rule: QualityRule,
    schedule: Mapping[Weekday, str],
    qualities: Mapping[str, QualityRule],
) -> bool:
    left = _nearest_left(day, schedule)
    if left is not None:
        left_rule = qualities[schedule[left]]
        if day - left - 1 < max(left_rule.after, rule.before):
            return False
    right = _nearest_right(day, schedule)
    if right is not None:
        right_rule = qualities[schedule[right]]
        if right - day - 1 < max(rule.after, right_rule.before):
            return False
    return True


def _choose_day_for_session(
    session: QueuedSession,
    viable_days: tuple[Weekday, ...],
    schedule: Mapping[Weekday, str],
    qualities: Mapping[str, QualityRule],
) -> Optional[Weekday]:
    for day in viable_days:
        if day in schedule:
            continue
        if not _lead_in_clear(day, session.rule.before, schedule):
            continue
        if not _spacing_ok(day, session.rule, schedule, qualities):
            continue
        return day
    return None


def plan_week(plan_input: PlanInput, catalogs: RuleCatalogs = DEFAULT_CATALOGS) -> PlanResult:
    """Place requested quality sessions around a Sunday long run.

    First-fit greedy: each session, in priority order, takes the earliest
    viable day that keeps every lead-in window and neighbour gap intact.
    Sessions that fit nowhere are reported in ``warnings``; placements made
    earlier in the pass are never moved.

    Raises UnknownLongRunTypeError if the (normalized) long-run key is not in
    the catalog.
    """
    effective = normalize_long_key(plan_input.long_type, plan_input.long_distance_mi)
    if effective != plan_input.long_type:
        logger.debug(
            "long_run_upgraded",
            extra={"ctx_requested": plan_input.long_type, "ctx_effective": effective, "ctx_miles": plan_input.long_distance_mi},
        )
    long_rule = catalogs.long_rule(effective)

    viable = candidate_days(compute_blocked_days(long_rule))
    queue = order_selections(plan_input.quality_selections, catalogs.qualities)

    schedule: dict[Weekday, str] = {}
    warnings: list[str] = []
    for session in queue:
        day = _choose_day_for_session(session, viable, schedule, catalogs.qualities)
        if day is None:
            logger.debug("quality_unplaced", extra={"ctx_session": session.key, "ctx_long_type": effective})
            warnings.append(UNPLACED_WARNING.format(key=session.key))
            continue
        schedule[day] = session.key

    logger.debug(
        "week_planned",
        extra={"ctx_long_type": effective, "ctx_placed": len(schedule), "ctx_unplaced": len(warnings)},
    )
    return PlanResult(
        viable_days=viable,
        schedule=schedule,
        warnings=tuple(warnings),
        effective_long_type=effective,
    )
