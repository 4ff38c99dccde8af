"""Work item API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qaplan.database import get_db
from qaplan.schemas.work_item import WorkItem, WorkItemCreate, WorkItemUpdate
from qaplan.services import planning_service

router = APIRouter(prefix="/scenarios", tags=["work-items"])


@router.get("/{scenario_id}/work-items", response_model=list[WorkItem])
async def list_work_items(scenario_id: str, db: Annotated[AsyncSession, Depends(get_db)]):
    await planning_service.get_scenario(db, scenario_id)
    return await planning_service.list_work_items(db, scenario_id)


@router.post("/{scenario_id}/work-items", response_model=WorkItem)
async def create_work_item(
    scenario_id: str,
    data: WorkItemCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await planning_service.create_work_item(db, scenario_id, data)


@router.patch("/{scenario_id}/work-items/{work_item_id}", response_model=WorkItem)
async def update_work_item(
    scenario_id: str,
    work_item_id: str,
    data: WorkItemUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await planning_service.update_work_item(db, scenario_id, work_item_id, data)


@router.delete("/{scenario_id}/work-items/{work_item_id}")
async def delete_work_item(
    scenario_id: str,
    work_item_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    removed = await planning_service.delete_work_item(db, scenario_id, work_item_id)
    return {"ok": True, "allocationsRemoved": removed}
