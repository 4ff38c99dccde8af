"""Risk and roster API routes. Results are recomputed from stored data on every call."""
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from qaplan.database import get_db
from qaplan.schemas.risk import RiskReport, WeekInfo
from qaplan.schemas.roster import RosterResponse
from qaplan.services import roster_service
from qaplan.services.planning_service import get_scenario

router = APIRouter(prefix="/scenarios", tags=["risks"])


@router.get("/{scenario_id}/planning-weeks", response_model=list[WeekInfo])
async def get_planning_weeks(
    scenario_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    today: date | None = Query(None, description="Override the current date"),
):
    await get_scenario(db, scenario_id)
    return roster_service.planning_weeks(today)


@router.get("/{scenario_id}/risks", response_model=RiskReport)
async def get_risks(
    scenario_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    today: date | None = Query(None, description="Override the current date"),
):
    return await roster_service.risk_report(db, scenario_id, today)


@router.get("/{scenario_id}/roster", response_model=RosterResponse)
async def get_roster(
    scenario_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    week_index: int = Query(0, ge=0, alias="weekIndex"),
    include_archived: bool = Query(False, alias="includeArchived"),
    today: date | None = Query(None, description="Override the current date"),
):
    return await roster_service.roster(
        db,
        scenario_id,
        week_index=week_index,
        today=today,
        include_archived=include_archived,
    )
