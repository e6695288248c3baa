"""Long-run and quality-session rule catalogs.

Every quality session and long-run type carries a recovery buffer:

- ``before``: easy-only days required immediately ahead of the session
  (for a long run, the days before Sunday kept free of quality work)
- ``after``: easy-only days required after the session
  (for a long run, the days from Monday kept free of quality work)

Quality sessions also carry a ``weight``. Higher weights claim their slot
first when a week is planned.

The built-in tables are the default configuration. Deployments can swap in
their own tables from a JSON file via :func:`load_catalogs`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from pydantic import ValidationError

from core.validators import RuleCatalogInput


class UnknownLongRunTypeError(ValueError):
    """Raised when a long-run key has no entry in the catalog."""


class CatalogError(ValueError):
    """Raised when a rule catalog payload fails validation."""


@dataclass(frozen=True)
class LongRunRule:
    key: str
    label: str
    before: int
    after: int


@dataclass(frozen=True)
class QualityRule:
    key: str
    before: int
    after: int
    weight: int
    desc: str = ""


@dataclass(frozen=True)
class RuleCatalogs:
    """Read-only pair of lookup tables consumed by the planner."""
    long_runs: Mapping[str, LongRunRule]
    qualities: Mapping[str, QualityRule]

    def __post_init__(self) -> None:
        object.__setattr__(self, "long_runs", MappingProxyType(dict(self.long_runs)))
        object.__setattr__(self, "qualities", MappingProxyType(dict(self.qualities)))

    def long_rule(self, key: str) -> LongRunRule:
        rule = self.long_runs.get(key)
        if rule is None:
            raise UnknownLongRunTypeError(f"Unknown long run type: {key!r}")
        return rule

    def quality_rule(self, key: str) -> Optional[QualityRule]:
        return self.qualities.get(key)


# Miles at which an easy long run is treated as a Big Easy.
BIG_EASY_THRESHOLD_MI = 21

EASY_LONG = "easy"
BIG_LONG = "big"


def _table(rules: Iterable) -> Mapping:
    return MappingProxyType({r.key: r for r in rules})


LONG_RULES: Mapping[str, LongRunRule] = _table([
    LongRunRule("easy", "Long Easy (90–110′)", before=1, after=1),
    LongRunRule("progressive", "Progressive Long (MP-lite)", before=2, after=2),
    LongRunRule("hilly", "Hilly Long (with descents)", before=2, after=2),
    LongRunRule("big", "Big Easy (≥2h45 / ~22 mi)", before=2, after=2),
    LongRunRule("mp", "MP Long Block (≥45–60′ MP total)", before=2, after=3),
])

QUALITY_CATALOG: Mapping[str, QualityRule] = _table([
    QualityRule(
        "Medium-long easy (90–105′)",
        before=0, after=1, weight=1,
        desc="Extended aerobic run with next-day easy buffer",
    ),
    QualityRule(
        "Threshold (split or 25–40′ continuous)",
        before=1, after=1, weight=2,
        desc="Steady state effort via cruise reps or continuous block",
    ),
    QualityRule(
        "Fartlek / medium hills (e.g., 1′/1′ × 30–40′)",
        before=1, after=1, weight=2,
        desc="Rolling fartlek or moderate hills stimulus",
    ),
    QualityRule(
        "VO₂ micro (30/30s, 12–18′ on-time)",
        before=1, after=1, weight=2,
        desc="Short VO₂ alternations capped at ~18′ on-time",
    ),
    QualityRule(
        "MP (alternations, ~30–45′ MP total)",
        before=2, after=2, weight=4,
        desc="Marathon pace alternations totalling 30–45 minutes",
    ),
    QualityRule(
        "VO₂ big (e.g., 5×1k or 6×800 @ ~5k)",
        before=2, after=2, weight=4,
        desc="Classic VO₂ workouts with full 5k-level reps",
    ),
    QualityRule(
        "MP big (continuous ≥45′ at MP)",
        before=2, after=3, weight=5,
        desc="Extended marathon pace continuous effort",
    ),
    QualityRule(
        "Long progression / MP-lite finish (last 15–25′ steady/MP-lite)",
        before=2, after=2, weight=4,
        desc="Long run finishing steady or MP-lite for 15–25 minutes",
    ),
])

DEFAULT_CATALOGS = RuleCatalogs(long_runs=LONG_RULES, qualities=QUALITY_CATALOG)


def catalogs_from_payload(payload: dict) -> RuleCatalogs:
    """Validate a ``{"long_runs": {...}, "qualities": {...}}`` payload and build catalogs."""
    try:
        parsed = RuleCatalogInput.model_validate(payload)
    except ValidationError as exc:
        raise CatalogError(f"Invalid rule catalog: {exc}") from exc
    long_runs = [
        LongRunRule(key, entry.label or key, before=entry.before, after=entry.after)
        for key, entry in parsed.long_runs.items()
    ]
    qualities = [
        QualityRule(key, before=entry.before, after=entry.after, weight=entry.weight, desc=entry.desc)
        for key, entry in parsed.qualities.items()
    ]
    return RuleCatalogs(long_runs=_table(long_runs), qualities=_table(qualities))


def load_catalogs(path: str | Path) -> RuleCatalogs:
    """Load rule catalogs from a JSON file."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(f"Rule catalog {path} could not be read: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CatalogError(f"Rule catalog {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise CatalogError(f"Rule catalog {path} must be a JSON object")
    return catalogs_from_payload(payload)
