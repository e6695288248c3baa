"""Weekly load score for a planned week.

A coarse heuristic: each placed quality session contributes ten points per
unit of scheduling weight, and the Sunday long run adds a fixed amount by its
effective type. The score maps onto four bands used when summarising a week.
"""

from __future__ import annotations

from typing import Mapping

from core.services.planning import PlanResult
from core.services.rules import DEFAULT_CATALOGS, QualityRule, RuleCatalogs

QUALITY_LOAD_PER_WEIGHT = 10

LONG_RUN_LOAD: dict[str, int] = {
    "easy": 15,
    "progressive": 25,
    "hilly": 25,
    "big": 30,
    "mp": 35,
}


def effort_level(quality_key: str, qualities: Mapping[str, QualityRule] = DEFAULT_CATALOGS.qualities) -> str:
    """Classify a quality session by weight: 'hard', 'moderate-hard', 'moderate' or 'steady'."""
    rule = qualities.get(quality_key)
    if rule is None:
        return "steady"
    if rule.weight >= 4:
        return "hard"
    if rule.weight >= 3:
        return "moderate-hard"
    if rule.weight >= 2:
        return "moderate"
    return "steady"


def calculate_weekly_load(result: PlanResult, catalogs: RuleCatalogs = DEFAULT_CATALOGS) -> int:
    load = 0
    for key in result.schedule.values():
        rule = catalogs.quality_rule(key)
        if rule is not None:
            load += rule.weight * QUALITY_LOAD_PER_WEIGHT
    # Effective type, so an auto-upgraded Big Easy scores as one.
    load += LONG_RUN_LOAD.get(result.effective_long_type, 0)
    return load


def load_band(load: float) -> str:
    """Returns: 'High', 'Moderate', 'Base', or 'Recovery'."""
    if load >= 80:
        return "High"
    if load >= 60:
        return "Moderate"
    if load >= 40:
        return "Base"
    return "Recovery"
