"""Scenario API routes: list, duplicate, export and import."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qaplan.database import get_db
from qaplan.schemas.scenario import AppData, ImportResult, Scenario, ScenarioDuplicate
from qaplan.services import scenario_service

router = APIRouter(prefix="/scenarios", tags=["scenarios"])


@router.get("", response_model=list[Scenario])
async def list_scenarios(db: Annotated[AsyncSession, Depends(get_db)]):
    return await scenario_service.list_scenarios(db)


@router.post("/{scenario_id}/duplicate", response_model=Scenario)
async def duplicate_scenario(
    scenario_id: str,
    data: ScenarioDuplicate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Copy work items, allocations and time off into a new what-if scenario."""
    return await scenario_service.duplicate_scenario(db, scenario_id, data.name)


@router.get("/export", response_model=AppData)
async def export_data(db: Annotated[AsyncSession, Depends(get_db)]):
    return await scenario_service.export_data(db)


@router.post("/import", response_model=ImportResult)
async def import_data(data: AppData, db: Annotated[AsyncSession, Depends(get_db)]):
    """Replace every pod, person and scenario with the uploaded document."""
    scenario_id = await scenario_service.import_data(db, data)
    return ImportResult(
        scenario_id=scenario_id,
        pods=len(data.pods),
        people=len(data.people),
        scenarios=len(data.scenarios),
    )
