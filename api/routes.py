from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_catalogs
from api.schemas import (
    LongRunRuleOut,
    PlanSummaryResponse,
    PlanWeekRequest,
    PlanWeekResponse,
    QualityRuleOut,
    SimpleStatusResponse,
)
from core.logging_config import get_logger
from core.services.formatting import format_viable_days, format_week_as_markdown, format_week_as_text
from core.services.planning import PlanInput, PlanResult, plan_week
from core.services.rules import RuleCatalogs, UnknownLongRunTypeError
from core.services.training_load import calculate_weekly_load, effort_level, load_band

logger = get_logger(__name__)
router = APIRouter(prefix="/api/v1")

Catalogs = Annotated[RuleCatalogs, Depends(get_catalogs)]


def _run_plan(plan_input: PlanInput, catalogs: RuleCatalogs) -> PlanResult:
    try:
        return plan_week(plan_input, catalogs)
    except UnknownLongRunTypeError as exc:
        logger.warning("plan_rejected", extra={"ctx_long_type": plan_input.long_type})
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/health", response_model=SimpleStatusResponse, tags=["system"])
def health():
    return SimpleStatusResponse(status="ok")


@router.get("/catalog/long-runs", response_model=list[LongRunRuleOut], tags=["catalog"])
def list_long_runs(catalogs: Catalogs):
    return [
        LongRunRuleOut(key=r.key, label=r.label, before=r.before, after=r.after)
        for r in catalogs.long_runs.values()
    ]


@router.get("/catalog/qualities", response_model=list[QualityRuleOut], tags=["catalog"])
def list_qualities(catalogs: Catalogs):
    return [
        QualityRuleOut(
            key=q.key,
            before=q.before,
            after=q.after,
            weight=q.weight,
            desc=q.desc,
            effort=effort_level(q.key, catalogs.qualities),
        )
        for q in catalogs.qualities.values()
    ]


@router.post("/plans/week", response_model=PlanWeekResponse, tags=["plans"])
def create_week_plan(body: PlanWeekRequest, catalogs: Catalogs):
    result = _run_plan(body.to_plan_input(), catalogs)
    load = calculate_weekly_load(result, catalogs)
    payload = result.to_dict()
    logger.info(
        "week_plan_created",
        extra={
            "ctx_long_type": result.effective_long_type,
            "ctx_placed": len(result.schedule),
            "ctx_warnings": len(result.warnings),
        },
    )
    return PlanWeekResponse(
        **payload,
        viable_days_label=format_viable_days(result.viable_days),
        weekly_load=load,
        load_band=load_band(load),
    )


@router.post("/plans/week/summary", response_model=PlanSummaryResponse, tags=["plans"])
def week_plan_summary(
    body: PlanWeekRequest,
    catalogs: Catalogs,
    fmt: Literal["text", "markdown"] = Query("text"),
):
    plan_input = body.to_plan_input()
    result = _run_plan(plan_input, catalogs)
    if fmt == "markdown":
        content = format_week_as_markdown(plan_input, result, catalogs)
    else:
        content = format_week_as_text(plan_input, result, catalogs)
    return PlanSummaryResponse(format=fmt, content=content)
