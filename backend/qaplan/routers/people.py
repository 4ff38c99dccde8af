"""Pod and people API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from qaplan.database import get_db
from qaplan.schemas.person import Person, PersonCreate, PersonUpdate
from qaplan.schemas.pod import Pod, PodCreate
from qaplan.services import planning_service

router = APIRouter(tags=["people"])


@router.get("/pods", response_model=list[Pod])
async def list_pods(db: Annotated[AsyncSession, Depends(get_db)]):
    return await planning_service.list_pods(db)


@router.post("/pods", response_model=Pod)
async def create_pod(data: PodCreate, db: Annotated[AsyncSession, Depends(get_db)]):
    return await planning_service.create_pod(db, data)


@router.get("/people", response_model=list[Person])
async def list_people(
    db: Annotated[AsyncSession, Depends(get_db)],
    include_archived: bool = Query(True, alias="includeArchived"),
):
    return await planning_service.list_people(db, include_archived=include_archived)


@router.post("/people", response_model=Person)
async def create_person(data: PersonCreate, db: Annotated[AsyncSession, Depends(get_db)]):
    return await planning_service.create_person(db, data)


@router.patch("/people/{person_id}", response_model=Person)
async def update_person(person_id: str, data: PersonUpdate, db: Annotated[AsyncSession, Depends(get_db)]):
    return await planning_service.update_person(db, person_id, data)


@router.post("/people/{person_id}/archive", response_model=Person)
async def archive_person(person_id: str, db: Annotated[AsyncSession, Depends(get_db)]):
    return await planning_service.archive_person(db, person_id)
