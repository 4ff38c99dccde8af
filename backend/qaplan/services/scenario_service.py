"""Scenario management: listing, duplication, whole-plan export and import."""
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from qaplan import models
from qaplan.schemas.scenario import AppData, Scenario, ScenarioData
from qaplan.services.planning_service import (
    get_scenario,
    list_allocations,
    list_people,
    list_pods,
    list_time_offs,
    list_work_items,
    new_id,
)

logger = logging.getLogger(__name__)

BASE_SCENARIO_ID = "scenario-base"


async def list_scenarios(db: AsyncSession) -> list[Scenario]:
    result = await db.execute(select(models.Scenario).order_by(models.Scenario.is_base.desc(), models.Scenario.name))
    return [Scenario.model_validate(s) for s in result.scalars().all()]


async def create_scenario(db: AsyncSession, name: str, is_base: bool = False, scenario_id: str | None = None) -> Scenario:
    scenario = models.Scenario(id=scenario_id or new_id(), name=name, is_base=is_base)
    db.add(scenario)
    await db.flush()
    return Scenario.model_validate(scenario)


async def duplicate_scenario(db: AsyncSession, source_id: str, new_name: str) -> Scenario:
    """
    Copy a scenario's work items, allocations and time off under new ids.

    Allocations are re-pointed at the copied work items; allocations whose work
    item does not exist in the source keep their original reference.
    """
    await get_scenario(db, source_id)
    target = models.Scenario(id=new_id(), name=new_name, is_base=False)
    db.add(target)

    work_items = await list_work_items(db, source_id)
    id_map: dict[str, str] = {}
    for wi in work_items:
        id_map[wi.id] = new_id()
        db.add(models.WorkItem(
            **wi.model_dump(exclude={"id"}),
            id=id_map[wi.id],
            scenario_id=target.id,
        ))

    allocations = await list_allocations(db, source_id)
    for a in allocations:
        db.add(models.Allocation(
            **a.model_dump(exclude={"id", "work_item_id"}),
            id=new_id(),
            scenario_id=target.id,
            work_item_id=id_map.get(a.work_item_id, a.work_item_id),
        ))

    time_offs = await list_time_offs(db, source_id)
    for t in time_offs:
        db.add(models.TimeOff(**t.model_dump(exclude={"id"}), id=new_id(), scenario_id=target.id))

    await db.flush()
    logger.info(
        "Duplicated scenario %s -> %s (%d work items, %d allocations, %d time off)",
        source_id,
        target.id,
        len(work_items),
        len(allocations),
        len(time_offs),
    )
    return Scenario.model_validate(target)


async def export_data(db: AsyncSession) -> AppData:
    scenarios = []
    for scenario in await list_scenarios(db):
        scenarios.append(ScenarioData(
            scenario=scenario,
            allocations=await list_allocations(db, scenario.id),
            work_items=await list_work_items(db, scenario.id),
            time_offs=await list_time_offs(db, scenario.id),
        ))
    return AppData(pods=await list_pods(db), people=await list_people(db), scenarios=scenarios)


async def import_data(db: AsyncSession, data: AppData) -> str | None:
    """
    Replace all stored data with ``data``.

    Returns the scenario to open next: the base scenario, else the first one,
    else None for a document without scenarios.
    """
    for table in (models.Allocation, models.TimeOff, models.WorkItem, models.Scenario, models.Person, models.Pod):
        await db.execute(delete(table))
    # Bulk deletes bypass the identity map; drop stale instances before re-adding ids
    db.expunge_all()

    for pod in data.pods:
        db.add(models.Pod(**pod.model_dump()))
    for person in data.people:
        db.add(models.Person(**person.model_dump()))
    for sd in data.scenarios:
        sid = sd.scenario.id
        db.add(models.Scenario(**sd.scenario.model_dump()))
        for wi in sd.work_items:
            db.add(models.WorkItem(**wi.model_dump(), scenario_id=sid))
        for a in sd.allocations:
            db.add(models.Allocation(**a.model_dump(), scenario_id=sid))
        for t in sd.time_offs:
            db.add(models.TimeOff(**t.model_dump(), scenario_id=sid))
    await db.flush()

    base = next((sd.scenario for sd in data.scenarios if sd.scenario.is_base), None)
    if base is None and data.scenarios:
        base = data.scenarios[0].scenario
    logger.info("Imported %d pods, %d people, %d scenarios", len(data.pods), len(data.people), len(data.scenarios))
    return base.id if base else None
