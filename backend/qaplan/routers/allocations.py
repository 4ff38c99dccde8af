"""Allocation and time-off API routes."""
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from qaplan.database import get_db
from qaplan.schemas.allocation import (
    Allocation,
    AllocationBulkCreate,
    ClearAllocationsRequest,
    ClearAllocationsResponse,
    TimeOff,
    TimeOffCreate,
)
from qaplan.services import planning_service

router = APIRouter(prefix="/scenarios", tags=["allocations"])


@router.get("/{scenario_id}/allocations", response_model=list[Allocation])
async def list_allocations(
    scenario_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    person_id: str | None = Query(None, alias="personId"),
    start: date | None = Query(None),
    end: date | None = Query(None),
):
    await planning_service.get_scenario(db, scenario_id)
    return await planning_service.list_allocations(db, scenario_id, person_id=person_id, start=start, end=end)


@router.post("/{scenario_id}/allocations", response_model=list[Allocation])
async def add_allocations(
    scenario_id: str,
    data: AllocationBulkCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await planning_service.add_allocations(db, scenario_id, data.allocations)


@router.post("/{scenario_id}/allocations/clear", response_model=ClearAllocationsResponse)
async def clear_allocations(
    scenario_id: str,
    data: ClearAllocationsRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    removed = await planning_service.clear_allocations(db, scenario_id, data.person_id, data.start_date, data.end_date)
    return ClearAllocationsResponse(removed=removed)


@router.get("/{scenario_id}/time-off", response_model=list[TimeOff])
async def list_time_off(scenario_id: str, db: Annotated[AsyncSession, Depends(get_db)]):
    await planning_service.get_scenario(db, scenario_id)
    return await planning_service.list_time_offs(db, scenario_id)


@router.post("/{scenario_id}/time-off", response_model=TimeOff)
async def add_time_off(
    scenario_id: str,
    data: TimeOffCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record time off; the person's allocations on that date are removed."""
    return await planning_service.add_time_off(db, scenario_id, data)


@router.delete("/{scenario_id}/time-off/{time_off_id}")
async def remove_time_off(
    scenario_id: str,
    time_off_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await planning_service.remove_time_off(db, scenario_id, time_off_id)
    return {"ok": True}
