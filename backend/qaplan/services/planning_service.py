"""Plan data access: people, pods, work items, allocations and time off for a scenario."""
import logging
import uuid
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from qaplan import models
from qaplan.exceptions import NotFoundError, PlanValidationError
from qaplan.schemas.allocation import Allocation, AllocationCreate, TimeOff, TimeOffCreate
from qaplan.schemas.person import Person, PersonCreate, PersonStatus, PersonUpdate
from qaplan.schemas.pod import Pod, PodCreate
from qaplan.schemas.scenario import PlanSnapshot
from qaplan.schemas.work_item import WorkItem, WorkItemCreate, WorkItemUpdate

logger = logging.getLogger(__name__)

# Columns a PATCH may not set to null
PERSON_REQUIRED_FIELDS = ("name", "role", "type", "weekly_capacity_days")
WORK_ITEM_REQUIRED_FIELDS = ("type", "name", "pod_id", "start_date", "end_date", "required_min_days_per_week")


def new_id() -> str:
    return uuid.uuid4().hex


async def get_scenario(db: AsyncSession, scenario_id: str) -> models.Scenario:
    scenario = await db.get(models.Scenario, scenario_id)
    if not scenario:
        raise NotFoundError("scenario", scenario_id)
    return scenario


async def list_pods(db: AsyncSession) -> list[Pod]:
    result = await db.execute(select(models.Pod).order_by(models.Pod.id))
    return [Pod.model_validate(p) for p in result.scalars().all()]


async def list_people(db: AsyncSession, include_archived: bool = True) -> list[Person]:
    q = select(models.Person).order_by(models.Person.id)
    if not include_archived:
        q = q.where(models.Person.status == PersonStatus.ACTIVE)
    result = await db.execute(q)
    return [Person.model_validate(p) for p in result.scalars().all()]


async def list_work_items(db: AsyncSession, scenario_id: str) -> list[WorkItem]:
    result = await db.execute(
        select(models.WorkItem).where(models.WorkItem.scenario_id == scenario_id).order_by(models.WorkItem.id)
    )
    return [WorkItem.model_validate(w) for w in result.scalars().all()]


async def list_allocations(
    db: AsyncSession,
    scenario_id: str,
    person_id: str | None = None,
    start: date | None = None,
    end: date | None = None,
) -> list[Allocation]:
    q = select(models.Allocation).where(models.Allocation.scenario_id == scenario_id)
    if person_id:
        q = q.where(models.Allocation.person_id == person_id)
    if start:
        q = q.where(models.Allocation.date >= start)
    if end:
        q = q.where(models.Allocation.date <= end)
    result = await db.execute(q.order_by(models.Allocation.id))
    return [Allocation.model_validate(a) for a in result.scalars().all()]


async def list_time_offs(db: AsyncSession, scenario_id: str) -> list[TimeOff]:
    result = await db.execute(
        select(models.TimeOff).where(models.TimeOff.scenario_id == scenario_id).order_by(models.TimeOff.id)
    )
    return [TimeOff.model_validate(t) for t in result.scalars().all()]


async def load_snapshot(db: AsyncSession, scenario_id: str) -> PlanSnapshot:
    """Read everything the engine needs for one scenario."""
    await get_scenario(db, scenario_id)
    return PlanSnapshot(
        scenario_id=scenario_id,
        pods=await list_pods(db),
        people=await list_people(db),
        work_items=await list_work_items(db, scenario_id),
        allocations=await list_allocations(db, scenario_id),
        time_offs=await list_time_offs(db, scenario_id),
    )


# --- Pods and people (shared across scenarios) ---


async def create_pod(db: AsyncSession, data: PodCreate) -> Pod:
    pod = models.Pod(id=data.id or new_id(), name=data.name)
    db.add(pod)
    await db.flush()
    return Pod.model_validate(pod)


async def create_person(db: AsyncSession, data: PersonCreate) -> Person:
    person = models.Person(
        id=data.id or new_id(),
        name=data.name,
        role=data.role,
        type=data.type,
        home_pod_id=data.home_pod_id,
        lead_id=data.lead_id,
        weekly_capacity_days=data.weekly_capacity_days,
        status=PersonStatus.ACTIVE,
        default_pod_filter_ids=data.default_pod_filter_ids,
    )
    db.add(person)
    await db.flush()
    return Person.model_validate(person)


def _reject_nulls(updates: dict, required: tuple[str, ...]) -> None:
    cleared = [k for k in required if k in updates and updates[k] is None]
    if cleared:
        raise PlanValidationError(f"cannot clear required fields: {', '.join(cleared)}")


async def _get_person(db: AsyncSession, person_id: str) -> models.Person:
    person = await db.get(models.Person, person_id)
    if not person:
        raise NotFoundError("person", person_id)
    return person


async def update_person(db: AsyncSession, person_id: str, data: PersonUpdate) -> Person:
    person = await _get_person(db, person_id)
    updates = data.model_dump(exclude_unset=True)
    _reject_nulls(updates, PERSON_REQUIRED_FIELDS)
    for k, v in updates.items():
        setattr(person, k, v)
    await db.flush()
    return Person.model_validate(person)


async def archive_person(db: AsyncSession, person_id: str, today: date | None = None) -> Person:
    """Mark a person archived. Their allocations are kept for history."""
    person = await _get_person(db, person_id)
    person.status = PersonStatus.ARCHIVED
    person.archived_at = today or date.today()
    await db.flush()
    logger.info("Archived person %s", person_id)
    return Person.model_validate(person)


# --- Work items ---


async def _get_work_item(db: AsyncSession, scenario_id: str, work_item_id: str) -> models.WorkItem:
    wi = await db.get(models.WorkItem, work_item_id)
    if not wi or wi.scenario_id != scenario_id:
        raise NotFoundError("work item", work_item_id)
    return wi


async def create_work_item(db: AsyncSession, scenario_id: str, data: WorkItemCreate) -> WorkItem:
    await get_scenario(db, scenario_id)
    wi = models.WorkItem(
        id=data.id or new_id(),
        scenario_id=scenario_id,
        type=data.type,
        name=data.name,
        pod_id=data.pod_id,
        start_date=data.start_date,
        end_date=data.end_date,
        required_min_days_per_week=data.required_min_days_per_week,
        release_date=data.release_date,
        notes=data.notes,
    )
    db.add(wi)
    await db.flush()
    return WorkItem.model_validate(wi)


async def update_work_item(
    db: AsyncSession,
    scenario_id: str,
    work_item_id: str,
    data: WorkItemUpdate,
) -> WorkItem:
    wi = await _get_work_item(db, scenario_id, work_item_id)
    updates = data.model_dump(exclude_unset=True)
    _reject_nulls(updates, WORK_ITEM_REQUIRED_FIELDS)
    start = updates.get("start_date", wi.start_date)
    end = updates.get("end_date", wi.end_date)
    if end < start:
        raise PlanValidationError("end_date must not be before start_date")
    for k, v in updates.items():
        setattr(wi, k, v)
    await db.flush()
    return WorkItem.model_validate(wi)


async def delete_work_item(db: AsyncSession, scenario_id: str, work_item_id: str) -> int:
    """Delete a work item and its allocations in the scenario. Returns allocations removed."""
    wi = await _get_work_item(db, scenario_id, work_item_id)
    result = await db.execute(
        delete(models.Allocation).where(
            models.Allocation.scenario_id == scenario_id,
            models.Allocation.work_item_id == work_item_id,
        )
    )
    await db.delete(wi)
    await db.flush()
    logger.info("Deleted work item %s (%d allocations)", work_item_id, result.rowcount)
    return result.rowcount


# --- Allocations ---


async def add_allocations(db: AsyncSession, scenario_id: str, allocations: list[AllocationCreate]) -> list[Allocation]:
    await get_scenario(db, scenario_id)
    rows = [
        models.Allocation(
            id=a.id or new_id(),
            scenario_id=scenario_id,
            person_id=a.person_id,
            work_item_id=a.work_item_id,
            date=a.date,
            days=a.days,
        )
        for a in allocations
    ]
    for row in rows:
        if row.days <= 0:
            raise PlanValidationError(f"allocation days must be positive: {row.days}")
        db.add(row)
    await db.flush()
    return [Allocation.model_validate(r) for r in rows]


async def clear_allocations(
    db: AsyncSession,
    scenario_id: str,
    person_id: str,
    start: date,
    end: date,
) -> int:
    """Remove a person's allocations in [start, end]. Returns the number removed."""
    await get_scenario(db, scenario_id)
    result = await db.execute(
        delete(models.Allocation).where(
            models.Allocation.scenario_id == scenario_id,
            models.Allocation.person_id == person_id,
            models.Allocation.date >= start,
            models.Allocation.date <= end,
        )
    )
    await db.flush()
    return result.rowcount


# --- Time off ---


async def add_time_off(db: AsyncSession, scenario_id: str, data: TimeOffCreate) -> TimeOff:
    """Record time off and drop the person's allocations on that date."""
    await get_scenario(db, scenario_id)
    removed = await clear_allocations(db, scenario_id, data.person_id, data.date, data.date)
    row = models.TimeOff(
        id=data.id or new_id(),
        scenario_id=scenario_id,
        person_id=data.person_id,
        date=data.date,
        reason=data.reason,
    )
    db.add(row)
    await db.flush()
    if removed:
        logger.info("Time off for %s on %s removed %d allocations", data.person_id, data.date, removed)
    return TimeOff.model_validate(row)


async def remove_time_off(db: AsyncSession, scenario_id: str, time_off_id: str) -> None:
    row = await db.get(models.TimeOff, time_off_id)
    if not row or row.scenario_id != scenario_id:
        raise NotFoundError("time off", time_off_id)
    await db.delete(row)
    await db.flush()
