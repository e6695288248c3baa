from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from core.services.planning import PlanInput


class SimpleStatusResponse(BaseModel):
    status: str


class LongRunRuleOut(BaseModel):
    key: str
    label: str
    before: int
    after: int


class QualityRuleOut(BaseModel):
    key: str
    before: int
    after: int
    weight: int
    desc: str = ""
    effort: str


class PlanWeekRequest(BaseModel):
    long_type: str = Field(min_length=1)
    long_distance_mi: float = Field(ge=0)
    quality_selections: list[str] = Field(default_factory=list)

    def to_plan_input(self) -> PlanInput:
        return PlanInput(
            long_type=self.long_type,
            long_distance_mi=self.long_distance_mi,
            quality_selections=tuple(self.quality_selections),
        )


class PlanWeekResponse(BaseModel):
    viable_days: list[int]
    viable_days_label: str
    schedule: dict[int, str]
    warnings: list[str]
    effective_long_type: str
    weekly_load: int
    load_band: str


class PlanSummaryResponse(BaseModel):
    format: Literal["text", "markdown"]
    content: str
